# -*- coding: utf-8 -*-
"""Plan table, price lookup and duration arithmetic."""

from datetime import datetime, timedelta
from decimal import Decimal

import pytest

from portal.errors import ValidationError
from portal.plans import (
    MembershipPlan,
    PaymentMethod,
    duration_of,
    expiry_for,
    parse_payment_method,
    parse_plan,
    price_for,
)


@pytest.mark.parametrize(
    "plan, days, price",
    [
        ("3-days", 3, Decimal("2.00")),
        ("15-days", 15, Decimal("3.00")),
        ("30-days", 30, Decimal("5.00")),
    ],
)
def test_plan_duration_and_price(plan, days, price):
    assert duration_of(plan) == timedelta(days=days)
    assert price_for(plan) == price


def test_expiry_is_exact_days_across_month_end():
    approved = datetime(2026, 1, 31, 23, 30, 15)
    assert expiry_for("30-days", approved) == datetime(2026, 3, 2, 23, 30, 15)


def test_expiry_ignores_dst_changes():
    # US DST starts 2026-03-08; naive UTC arithmetic keeps the same wall time
    approved = datetime(2026, 3, 6, 12, 0, 0)
    assert expiry_for("3-days", approved) - approved == timedelta(hours=72)


@pytest.mark.parametrize("bad", ["", None, "7-days", "3 days", "30-DAYS"])
def test_unknown_plan_rejected(bad):
    with pytest.raises(ValidationError):
        parse_plan(bad)


def test_plan_enum_accepts_members():
    assert parse_plan(MembershipPlan.FIFTEEN_DAYS) is MembershipPlan.FIFTEEN_DAYS
    assert price_for(MembershipPlan.FIFTEEN_DAYS) == Decimal("3.00")
    assert duration_of(MembershipPlan.THIRTY_DAYS) == timedelta(days=30)
    assert parse_payment_method(PaymentMethod.VISA) is PaymentMethod.VISA


def test_payment_method_is_case_insensitive():
    assert parse_payment_method("Bkash") is PaymentMethod.BKASH


def test_unknown_payment_method_rejected():
    with pytest.raises(ValidationError):
        parse_payment_method("cash-in-envelope")
