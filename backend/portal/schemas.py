# portal/schemas.py
from datetime import datetime
from decimal import Decimal
from typing import Optional, Literal

from pydantic import BaseModel, EmailStr, Field

from .plans import MembershipPlan, PaymentMethod

PriceCategory = Literal["free", "bdt_150", "bdt_250", "bdt_500", "usd_2", "usd_3", "usd_5"]
Role = Literal["member", "administrator"]
Decision = Literal["approved", "rejected"]


# -----------------------------
# ACCOUNTS / AUTH
# -----------------------------
class RegisterIn(BaseModel):
    username: str = Field(min_length=1, max_length=80)
    email: EmailStr
    password: str = Field(min_length=6)
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    date_of_birth: str = Field(min_length=1)
    contact_number: str = Field(min_length=1)


class LoginIn(BaseModel):
    identifier: str = Field(min_length=1)  # username or email
    secret: str = Field(min_length=1)


class AccountOut(BaseModel):
    id: int
    username: str
    email: str
    first_name: str
    last_name: str
    role: str

    class Config:
        from_attributes = True


class AccountSummary(BaseModel):
    id: int
    username: str
    first_name: str
    last_name: str
    email: str
    contact_number: str

    class Config:
        from_attributes = True


class RegisterOut(BaseModel):
    account: AccountOut


class LoginOut(BaseModel):
    account: AccountOut
    has_valid_membership: bool
    access_token: str
    token_type: str = "bearer"


class MeOut(BaseModel):
    account: AccountOut
    has_valid_membership: bool


class RoleIn(BaseModel):
    role: Role


# -----------------------------
# MEMBERSHIP
# -----------------------------
class PlanOut(BaseModel):
    plan: MembershipPlan
    name: str
    days: int
    price_usd: Decimal
    price_bdt: Decimal


class MembershipRequestIn(BaseModel):
    # Extra fields (e.g. a client "price") are ignored; price is computed server-side.
    account_id: Optional[int] = None
    plan: str
    payment_method: str


class MembershipRequestOut(BaseModel):
    id: int
    account_id: int
    plan: str
    price: Decimal
    payment_method: str
    status: str
    created_at: datetime
    approved_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class MembershipRequestWithAccountOut(MembershipRequestOut):
    account: Optional[AccountSummary] = None


class DecisionIn(BaseModel):
    status: Decision


class ActiveMembershipOut(BaseModel):
    id: int
    account_id: int
    plan: str
    expires_at: datetime
    created_at: datetime

    class Config:
        from_attributes = True


class DecisionOut(BaseModel):
    request: MembershipRequestOut
    membership: Optional[ActiveMembershipOut] = None


class MembershipCheckOut(BaseModel):
    has_valid_membership: bool
    membership: Optional[ActiveMembershipOut] = None


# -----------------------------
# CATALOG: PROFILES
# -----------------------------
class ProfileIn(BaseModel):
    name: str = Field(min_length=1)
    profession: str = Field(min_length=1)
    image_url: str = Field(min_length=1)
    description: Optional[str] = None
    date_of_birth: Optional[str] = None
    gender: Optional[str] = None
    nationality: Optional[str] = None
    is_free: bool = False
    price: Optional[Decimal] = Field(default=None, ge=0, decimal_places=2)


class ProfileUpdateIn(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    profession: Optional[str] = Field(default=None, min_length=1)
    image_url: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    date_of_birth: Optional[str] = None
    gender: Optional[str] = None
    nationality: Optional[str] = None
    is_free: Optional[bool] = None
    price: Optional[Decimal] = Field(default=None, ge=0, decimal_places=2)


class ProfileOut(BaseModel):
    id: int
    name: str
    profession: str
    image_url: str
    description: Optional[str] = None
    date_of_birth: Optional[str] = None
    gender: Optional[str] = None
    nationality: Optional[str] = None
    is_free: bool
    price: Optional[Decimal] = None
    created_at: datetime

    class Config:
        from_attributes = True


# -----------------------------
# CATALOG: ALBUMS
# -----------------------------
class AlbumIn(BaseModel):
    title: str = Field(min_length=1)
    description: str
    thumbnail_url: str = Field(min_length=1)
    price: Decimal = Field(ge=0, decimal_places=2)
    price_category: PriceCategory
    is_featured: bool = False
    profile_id: Optional[int] = None


class AlbumUpdateIn(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    thumbnail_url: Optional[str] = Field(default=None, min_length=1)
    price: Optional[Decimal] = Field(default=None, ge=0, decimal_places=2)
    price_category: Optional[PriceCategory] = None
    is_featured: Optional[bool] = None
    profile_id: Optional[int] = None


class AlbumOut(BaseModel):
    id: int
    title: str
    description: str
    thumbnail_url: str
    price: Decimal
    price_category: str
    image_count: int
    is_featured: bool
    profile_id: Optional[int] = None
    created_at: datetime

    class Config:
        from_attributes = True


class AlbumImageIn(BaseModel):
    image_url: str = Field(min_length=1)
    description: Optional[str] = None
    order: int


class AlbumImageUpdateIn(BaseModel):
    image_url: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    order: Optional[int] = None


class AlbumImageOut(BaseModel):
    id: int
    album_id: int
    image_url: str
    description: Optional[str] = None
    order: int
    created_at: datetime

    class Config:
        from_attributes = True


# -----------------------------
# CATALOG: VIDEOS
# -----------------------------
class VideoIn(BaseModel):
    title: str = Field(min_length=1)
    description: str
    thumbnail_url: str = Field(min_length=1)
    video_url: str = Field(min_length=1)
    price: Decimal = Field(ge=0, decimal_places=2)
    price_category: PriceCategory
    duration: Optional[str] = None
    is_featured: bool = False
    profile_id: Optional[int] = None


class VideoUpdateIn(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    thumbnail_url: Optional[str] = Field(default=None, min_length=1)
    video_url: Optional[str] = Field(default=None, min_length=1)
    price: Optional[Decimal] = Field(default=None, ge=0, decimal_places=2)
    price_category: Optional[PriceCategory] = None
    duration: Optional[str] = None
    is_featured: Optional[bool] = None
    profile_id: Optional[int] = None


class VideoOut(BaseModel):
    id: int
    title: str
    description: str
    thumbnail_url: str
    video_url: str
    price: Decimal
    price_category: str
    duration: Optional[str] = None
    is_featured: bool
    profile_id: Optional[int] = None
    created_at: datetime

    class Config:
        from_attributes = True


# -----------------------------
# CATALOG: SLIDESHOW
# -----------------------------
class SlideshowImageIn(BaseModel):
    image_url: str = Field(min_length=1)
    title: Optional[str] = None
    subtitle: Optional[str] = None
    order: int
    is_active: bool = True


class SlideshowImageUpdateIn(BaseModel):
    image_url: Optional[str] = Field(default=None, min_length=1)
    title: Optional[str] = None
    subtitle: Optional[str] = None
    order: Optional[int] = None
    is_active: Optional[bool] = None


class SlideshowImageOut(BaseModel):
    id: int
    image_url: str
    title: Optional[str] = None
    subtitle: Optional[str] = None
    order: int
    is_active: bool
    created_at: datetime

    class Config:
        from_attributes = True
