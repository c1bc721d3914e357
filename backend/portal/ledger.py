# portal/ledger.py
"""
Membership request ledger.

A request is created ``pending`` and moves exactly once to ``approved`` or
``rejected``. Both are terminal. Approval also writes the matching grant in the
same transaction, so a committed ``approved`` row always has its grant.
"""
from __future__ import annotations

import logging
from datetime import datetime
from enum import Enum
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session, joinedload

from . import registry
from .accounts import get_account_or_404
from .errors import InvalidStateError, NotFoundError, ValidationError
from .models import ActiveMembership, MembershipRequest
from .plans import expiry_for, parse_payment_method, parse_plan, price_for, utcnow

logger = logging.getLogger(__name__)


class RequestStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


# Allowed forward moves. Terminal states have none.
TRANSITIONS: dict[RequestStatus, frozenset[RequestStatus]] = {
    RequestStatus.PENDING: frozenset({RequestStatus.APPROVED, RequestStatus.REJECTED}),
    RequestStatus.APPROVED: frozenset(),
    RequestStatus.REJECTED: frozenset(),
}


def parse_status(value) -> RequestStatus:
    if isinstance(value, RequestStatus):
        return value
    try:
        return RequestStatus(str(value or "").strip().lower())
    except ValueError:
        raise ValidationError("Unknown request status") from None


def parse_decision(value) -> RequestStatus:
    status = parse_status(value)
    if status == RequestStatus.PENDING:
        raise ValidationError("Decision must be approved or rejected")
    return status


def transition(current, target) -> RequestStatus:
    """
    Returns the new status or raises InvalidStateError.
    """
    cur = parse_status(current)
    nxt = parse_status(target)
    if nxt not in TRANSITIONS[cur]:
        raise InvalidStateError(f"Cannot change a {cur.value} request to {nxt.value}")
    return nxt


# -------------------------------------------------
# Operations
# -------------------------------------------------
def submit_request(
    db: Session,
    account_id: int,
    plan,
    payment_method,
    *,
    now: Optional[datetime] = None,
) -> MembershipRequest:
    """
    Price is looked up from the plan table. Client-supplied prices never reach here.
    """
    plan_ = parse_plan(plan)
    method = parse_payment_method(payment_method)
    get_account_or_404(db, account_id)

    req = MembershipRequest(
        account_id=account_id,
        plan=plan_.value,
        price=price_for(plan_),
        payment_method=method.value,
        status=RequestStatus.PENDING.value,
        created_at=now or utcnow(),
        approved_at=None,
    )
    db.add(req)
    db.commit()
    db.refresh(req)

    logger.info(
        "Membership request id=%s submitted: account_id=%s plan=%s method=%s",
        req.id, account_id, req.plan, req.payment_method,
    )
    return req


def list_requests(
    db: Session,
    *,
    status: Optional[str] = None,
    account_id: Optional[int] = None,
) -> list[MembershipRequest]:
    stmt = select(MembershipRequest).options(joinedload(MembershipRequest.account))

    if status:
        stmt = stmt.where(MembershipRequest.status == parse_status(status).value)
    if account_id is not None:
        stmt = stmt.where(MembershipRequest.account_id == account_id)

    stmt = stmt.order_by(MembershipRequest.created_at.desc(), MembershipRequest.id.desc())
    return list(db.scalars(stmt).all())


def decide(
    db: Session,
    request_id: int,
    decision,
    *,
    now: Optional[datetime] = None,
) -> tuple[MembershipRequest, Optional[ActiveMembership]]:
    """
    Settle a pending request.

    Repeating the decision a request already carries is a no-op (no second
    grant, approved_at untouched). Any other change to a settled request raises
    InvalidStateError. Returns the request and the grant created by this call,
    if any.
    """
    target = parse_decision(decision)
    req = db.scalar(
        select(MembershipRequest).where(MembershipRequest.id == request_id).with_for_update()
    )
    if not req:
        raise NotFoundError("Membership request not found")

    if req.status == target.value:
        return req, None

    try:
        req.status = transition(req.status, target).value
    except InvalidStateError:
        logger.warning(
            "Rejected transition for request id=%s: %s -> %s", req.id, req.status, target.value
        )
        raise

    membership = None
    try:
        if target == RequestStatus.APPROVED:
            approved_at = now or utcnow()
            req.approved_at = approved_at
            membership = registry.grant(db, req.account_id, req.plan, expiry_for(req.plan, approved_at))
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(req)
    logger.info("Membership request id=%s %s", req.id, req.status)
    return req, membership
