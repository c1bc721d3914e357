# portal/plans.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from enum import Enum

from .errors import ValidationError


class MembershipPlan(str, Enum):
    THREE_DAYS = "3-days"
    FIFTEEN_DAYS = "15-days"
    THIRTY_DAYS = "30-days"


class PaymentMethod(str, Enum):
    VISA = "visa"
    MASTERCARD = "mastercard"
    PAYPAL = "paypal"
    BKASH = "bkash"
    NAGAD = "nagad"


@dataclass(frozen=True)
class PlanInfo:
    plan: MembershipPlan
    name: str
    days: int
    price_usd: Decimal
    price_bdt: Decimal


# Server-side price table. Requests store the USD price; BDT is shown to visitors.
PLANS: dict[MembershipPlan, PlanInfo] = {
    MembershipPlan.THREE_DAYS: PlanInfo(MembershipPlan.THREE_DAYS, "3 Days", 3, Decimal("2.00"), Decimal("150.00")),
    MembershipPlan.FIFTEEN_DAYS: PlanInfo(MembershipPlan.FIFTEEN_DAYS, "15 Days", 15, Decimal("3.00"), Decimal("250.00")),
    MembershipPlan.THIRTY_DAYS: PlanInfo(MembershipPlan.THIRTY_DAYS, "30 Days", 30, Decimal("5.00"), Decimal("500.00")),
}


def parse_plan(value) -> MembershipPlan:
    if isinstance(value, MembershipPlan):
        return value
    try:
        return MembershipPlan(str(value or "").strip())
    except ValueError:
        raise ValidationError("Unknown membership plan") from None


def parse_payment_method(value) -> PaymentMethod:
    if isinstance(value, PaymentMethod):
        return value
    try:
        return PaymentMethod(str(value or "").strip().lower())
    except ValueError:
        raise ValidationError("Unknown payment method") from None


def duration_of(plan) -> timedelta:
    """
    Exact N*24h. Timestamps are naive UTC, so there is no DST drift.
    """
    return timedelta(days=PLANS[parse_plan(plan)].days)


def price_for(plan) -> Decimal:
    return PLANS[parse_plan(plan)].price_usd


def expiry_for(plan, approved_at: datetime) -> datetime:
    return approved_at + duration_of(plan)


def utcnow() -> datetime:
    """Naive UTC, matching how timestamps are stored."""
    return datetime.now(timezone.utc).replace(tzinfo=None, microsecond=0)
