# portal/config.py
from __future__ import annotations

import os
from typing import Optional

from dotenv import find_dotenv, load_dotenv

# -------------------------------------------------
# LOAD .env ONCE (before any getenv use)
# Real environment variables win over the file.
# -------------------------------------------------
load_dotenv(find_dotenv(usecwd=True), override=False)

_TRUTHY = ("1", "true", "yes", "on")


def env(name: str, default: Optional[str] = None) -> Optional[str]:
    v = os.getenv(name)
    v = v.strip() if v else ""
    return v or default


def env_flag(name: str, default: bool = False) -> bool:
    v = env(name)
    if v is None:
        return default
    return v.lower() in _TRUTHY


def env_int(name: str, default: int) -> int:
    try:
        return int(env(name, str(default)))
    except (TypeError, ValueError):
        return default


DATABASE_URL = env("DATABASE_URL", "sqlite:///./portal.db")

SECRET_KEY = env("SECRET_KEY", "CHANGE_ME_TO_SOMETHING_RANDOM_AND_LONG")
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = env_int("ACCESS_TOKEN_EXPIRE_MINUTES", 1440)

# bcrypt cost; tests drop this to the minimum (4)
BCRYPT_ROUNDS = env_int("BCRYPT_ROUNDS", 12)

LOG_LEVEL = (env("LOG_LEVEL", "INFO") or "INFO").upper()
