# portal/access.py
from __future__ import annotations

from datetime import datetime
from typing import Optional

from fastapi import Depends
from sqlalchemy.orm import Session

from . import registry
from .auth import is_admin, load_account_from_token, oauth2_scheme_optional
from .database import get_db
from .errors import AuthenticationError, ForbiddenError
from .feature_flags import membership_enforced
from .models import Account


def has_access(
    db: Session,
    account: Account,
    *,
    enforced: Optional[bool] = None,
    as_of: Optional[datetime] = None,
) -> bool:
    """
    Central decision:
      - administrators always pass
      - free-access mode passes everyone
      - otherwise an unexpired grant is required
    ``enforced=None`` means "read the MEMBERSHIP_ENFORCED flag".
    """
    if is_admin(account):
        return True

    if enforced is None:
        enforced = membership_enforced()
    if not enforced:
        return True

    return registry.find_valid_for(db, account.id, as_of=as_of) is not None


# -------------------------------------------------
# Guard
# -------------------------------------------------
def require_content_access(
    db: Session = Depends(get_db),
    token: Optional[str] = Depends(oauth2_scheme_optional),
) -> Optional[Account]:
    """
    Premium content gate. Anonymous visitors pass only in free-access mode.
    The token is only checked when membership is enforced, so a stale token
    never locks a visitor out of free content.
    """
    if not membership_enforced():
        return None

    if not token:
        raise AuthenticationError("Not authenticated")

    account = load_account_from_token(db, token)

    if not has_access(db, account, enforced=True):
        raise ForbiddenError("An active membership is required", code="MEMBERSHIP_REQUIRED")
    return account
