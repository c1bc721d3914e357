# portal/feature_flags.py
from __future__ import annotations

"""
Central place to define access rules.

Two modes:
- Free access (default): every account may reach premium content.
- Membership enforced (MEMBERSHIP_ENFORCED=1): administrators always pass,
  everyone else needs an unexpired grant.

The flag is read on every call so it can be flipped without a restart of the
ledger or registry code.
"""

from .config import env_flag

MEMBERSHIP_ENFORCED_ENV = "MEMBERSHIP_ENFORCED"


def membership_enforced() -> bool:
    return env_flag(MEMBERSHIP_ENFORCED_ENV, default=False)
