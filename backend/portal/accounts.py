# portal/accounts.py
from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .auth import ROLE_ADMIN, ROLE_MEMBER, VALID_ROLES, hash_password, verify_password
from .errors import ConflictError, InvalidStateError, NotFoundError, ValidationError
from .models import Account

logger = logging.getLogger(__name__)

# Verified against when the identifier matches nothing, so a miss costs the same as a wrong password.
_DUMMY_HASH = hash_password("not-a-real-password")


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


def get_account_or_404(db: Session, account_id: int) -> Account:
    account = db.get(Account, account_id)
    if not account:
        raise NotFoundError("Account not found")
    return account


def find_by_identifier(db: Session, identifier: str) -> Optional[Account]:
    """Username or email, both case-insensitive."""
    ident = (identifier or "").strip().lower()
    if not ident:
        return None
    return db.scalar(
        select(Account).where(
            or_(func.lower(Account.username) == ident, Account.email == ident)
        )
    )


def register(
    db: Session,
    *,
    username: str,
    email: str,
    password: str,
    first_name: str,
    last_name: str,
    date_of_birth: str,
    contact_number: str,
) -> Account:
    """
    New accounts are always members; role is never taken from input.
    """
    username = (username or "").strip()
    email_n = normalize_email(email)
    if not username or not email_n or not password:
        raise ValidationError("Username, email and password are required")

    if db.scalar(select(Account.id).where(func.lower(Account.username) == username.lower())):
        raise ConflictError("Username already exists")
    if db.scalar(select(Account.id).where(Account.email == email_n)):
        raise ConflictError("Email already exists")

    account = Account(
        username=username,
        email=email_n,
        hashed_password=hash_password(password),
        first_name=first_name.strip(),
        last_name=last_name.strip(),
        date_of_birth=date_of_birth.strip(),
        contact_number=contact_number.strip(),
        role=ROLE_MEMBER,
    )
    db.add(account)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race against a concurrent registration with the same handle/email
        db.rollback()
        raise ConflictError("Username or email already exists") from None
    db.refresh(account)

    logger.info("Registered account id=%s", account.id)
    return account


def authenticate(db: Session, identifier: str, secret: str) -> Optional[Account]:
    account = find_by_identifier(db, identifier)
    if account is None:
        verify_password(secret or "", _DUMMY_HASH)
        logger.warning("Login failed: unknown identifier")
        return None

    if not verify_password(secret or "", account.hashed_password):
        logger.warning("Login failed for account id=%s", account.id)
        return None
    return account


def set_role(db: Session, account_id: int, role: str, *, acting: Account) -> Account:
    r = (role or "").strip().lower()
    if r not in VALID_ROLES:
        raise ValidationError("Unknown role")

    account = get_account_or_404(db, account_id)
    if account.id == acting.id and r != ROLE_ADMIN:
        raise InvalidStateError("You cannot remove your own admin role")

    account.role = r
    db.commit()
    db.refresh(account)
    logger.info("Account id=%s role set to %s by id=%s", account.id, r, acting.id)
    return account


def list_accounts(db: Session) -> list[Account]:
    stmt = select(Account).order_by(Account.last_name, Account.first_name, Account.id)
    return list(db.scalars(stmt).all())
