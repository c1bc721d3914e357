# portal/main.py
from __future__ import annotations

import logging
import sys

from fastapi import FastAPI
from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from portal import auth, models
from portal.config import LOG_LEVEL, env, env_flag
from portal.database import SessionLocal, init_db
from portal.error_handlers import register_error_handlers
from portal.feature_flags import membership_enforced
from portal.routers import admin_accounts, admin_catalog, auth as auth_router, catalog, membership

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
logging.getLogger("passlib").setLevel(logging.ERROR)

logger = logging.getLogger(__name__)


# -------------------------------------------------
# APP SETUP
# -------------------------------------------------
app = FastAPI(title="Premium Content Portal", version="1.0.0")

register_error_handlers(app)

app.include_router(auth_router.router)
app.include_router(membership.router)
app.include_router(catalog.router)
app.include_router(admin_catalog.router)
app.include_router(admin_accounts.router)


@app.get("/health")
def health():
    return {"status": "ok"}


# -------------------------------------------------
# STARTUP: SCHEMA + OPTIONAL DEFAULT ADMIN SEED
# -------------------------------------------------
def seed_admin_if_enabled(db: Session) -> models.Account | None:
    """
    Creates one administrator when SEED_ADMIN is on and none exists yet.
    """
    if not env_flag("SEED_ADMIN"):
        return None

    existing = db.scalar(select(models.Account).where(models.Account.role == auth.ROLE_ADMIN))
    if existing:
        return None

    password = env("SEED_ADMIN_PASSWORD")
    if not password:
        logger.warning("SEED_ADMIN is on but SEED_ADMIN_PASSWORD is empty; skipping admin seed")
        return None

    email = (env("SEED_ADMIN_EMAIL") or "admin@example.com").lower()
    username = env("SEED_ADMIN_USERNAME") or email
    taken = db.scalar(
        select(models.Account.id).where(
            or_(func.lower(models.Account.username) == username.lower(), models.Account.email == email)
        )
    )
    if taken:
        logger.warning("Admin seed skipped: username or email already belongs to account id=%s", taken)
        return None

    admin = models.Account(
        username=username,
        email=email,
        hashed_password=auth.hash_password(password),
        first_name="Admin",
        last_name="User",
        date_of_birth="1990-01-01",
        contact_number="",
        role=auth.ROLE_ADMIN,
    )
    db.add(admin)
    db.commit()
    db.refresh(admin)
    logger.info("Seeded administrator account id=%s", admin.id)
    return admin


@app.on_event("startup")
def bootstrap_startup():
    init_db()
    db = SessionLocal()
    try:
        seed_admin_if_enabled(db)
    finally:
        db.close()

    mode = "enforced" if membership_enforced() else "free access"
    logger.info("Membership mode: %s", mode)
