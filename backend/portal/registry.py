# portal/registry.py
"""
Active membership registry.

Grants are insert-only: nothing here updates or deletes a row. Expiry is a fixed
instant chosen at approval time and checked lazily against the clock on read.
"""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from .models import ActiveMembership
from .plans import parse_plan, utcnow

logger = logging.getLogger(__name__)


def grant(db: Session, account_id: int, plan, expires_at: datetime) -> ActiveMembership:
    """
    Adds the grant to the session without committing.
    The approval transition owns the transaction.
    """
    membership = ActiveMembership(
        account_id=account_id,
        plan=parse_plan(plan).value,
        expires_at=expires_at,
    )
    db.add(membership)
    db.flush()
    logger.info(
        "Granted membership id=%s account_id=%s plan=%s expires_at=%s",
        membership.id, account_id, membership.plan, expires_at.isoformat(),
    )
    return membership


def find_valid_for(db: Session, account_id: int, as_of: Optional[datetime] = None) -> Optional[ActiveMembership]:
    """
    The grant with the latest expiry strictly after ``as_of``.
    The expiry instant itself counts as expired.
    """
    as_of = as_of or utcnow()
    stmt = (
        select(ActiveMembership)
        .where(ActiveMembership.account_id == account_id)
        .where(ActiveMembership.expires_at > as_of)
        .order_by(ActiveMembership.expires_at.desc(), ActiveMembership.id.desc())
        .limit(1)
    )
    return db.scalar(stmt)


def list_for(db: Session, account_id: int) -> list[ActiveMembership]:
    stmt = (
        select(ActiveMembership)
        .where(ActiveMembership.account_id == account_id)
        .order_by(ActiveMembership.expires_at.desc())
    )
    return list(db.scalars(stmt).all())
