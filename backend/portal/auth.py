# portal/auth.py
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from .config import ACCESS_TOKEN_EXPIRE_MINUTES, ALGORITHM, BCRYPT_ROUNDS, SECRET_KEY
from .database import get_db
from .errors import AuthenticationError, ForbiddenError
from .models import Account

logger = logging.getLogger(__name__)

# -------------------------------------------------------------------
# Password hashing
# -------------------------------------------------------------------
pwd_context = CryptContext(
    schemes=["bcrypt_sha256", "bcrypt"],
    deprecated="auto",
    bcrypt_sha256__rounds=BCRYPT_ROUNDS,
    bcrypt__rounds=BCRYPT_ROUNDS,
)

# Swagger will use this to send: Authorization: Bearer <token>
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login")
oauth2_scheme_optional = OAuth2PasswordBearer(tokenUrl="/auth/login", auto_error=False)

# -------------------------------------------------------------------
# Roles
# -------------------------------------------------------------------
ROLE_ADMIN = "administrator"
ROLE_MEMBER = "member"
VALID_ROLES = {ROLE_ADMIN, ROLE_MEMBER}


def normalize_role(value: Optional[str]) -> str:
    r = (value or "").strip().lower()
    return r if r in VALID_ROLES else ROLE_MEMBER


def is_admin(account: Account) -> bool:
    return normalize_role(getattr(account, "role", None)) == ROLE_ADMIN


# -------------------------------------------------------------------
# Password helpers
# -------------------------------------------------------------------
def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Constant-time check; unknown or malformed hashes count as a mismatch."""
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        return False


# -------------------------------------------------------------------
# JWT create/verify
# -------------------------------------------------------------------
def create_access_token(
    *,
    account_id: int,
    subject: str,
    role: Optional[str] = None,
    expires_minutes: Optional[int] = None,
) -> str:
    """
    Token claims:
      sub: username (debug/compat)
      aid: account id
      rol: role (administrator/member)
      exp: expiry datetime
    """
    expire = datetime.now(timezone.utc) + timedelta(minutes=expires_minutes or ACCESS_TOKEN_EXPIRE_MINUTES)
    payload = {
        "sub": subject,
        "aid": int(account_id),
        "rol": normalize_role(role),
        "exp": expire,
    }
    return jwt.encode(payload, SECRET_KEY, algorithm=ALGORITHM)


def decode_token(token: str) -> dict:
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
        if not payload.get("aid"):
            raise ValueError("Token missing required claims")
        return payload
    except (JWTError, ValueError) as e:
        raise ValueError("Invalid token") from e


def load_account_from_token(db: Session, token: str) -> Account:
    try:
        account_id = int(decode_token(token)["aid"])
    except (ValueError, KeyError, TypeError):
        raise AuthenticationError("Not authenticated") from None

    account = db.get(Account, account_id)
    if not account:
        raise AuthenticationError("Not authenticated")
    return account


# -------------------------------------------------------------------
# Dependencies
# -------------------------------------------------------------------
def get_current_account(
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> Account:
    """
    Validates Bearer token and loads the Account by id.
    Role is always read from the database, not from the token.
    """
    return load_account_from_token(db, token)


def require_admin(account: Account = Depends(get_current_account)) -> Account:
    if not is_admin(account):
        raise ForbiddenError("Admin privileges required")
    return account
