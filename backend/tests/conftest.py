# -*- coding: utf-8 -*-
"""
Pytest configuration for backend tests.

The environment is set before any ``portal`` import so the engine binds to an
in-memory database and password hashing stays fast.
"""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["SECRET_KEY"] = "test-secret-" + "x" * 48
os.environ.pop("MEMBERSHIP_ENFORCED", None)
os.environ.pop("SEED_ADMIN", None)

import pytest
from fastapi.testclient import TestClient

from portal import accounts, auth
from portal.database import Base, SessionLocal, engine
from portal.main import app


@pytest.fixture(autouse=True)
def _schema(monkeypatch):
    monkeypatch.delenv("MEMBERSHIP_ENFORCED", raising=False)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def enforced(monkeypatch):
    """Switch the access policy to membership-enforced mode."""
    monkeypatch.setenv("MEMBERSHIP_ENFORCED", "1")


@pytest.fixture
def make_account(db):
    counter = {"n": 0}

    def _make(role=auth.ROLE_MEMBER, password="secret-pass", **overrides):
        counter["n"] += 1
        n = counter["n"]
        data = {
            "username": f"user{n}",
            "email": f"user{n}@example.com",
            "password": password,
            "first_name": "Test",
            "last_name": f"User{n}",
            "date_of_birth": "1995-05-05",
            "contact_number": "+8801700000000",
        }
        data.update(overrides)
        account = accounts.register(db, **data)
        if role != auth.ROLE_MEMBER:
            account.role = role
            db.commit()
            db.refresh(account)
        return account

    return _make


@pytest.fixture
def member(make_account):
    return make_account()


@pytest.fixture
def admin(make_account):
    return make_account(role=auth.ROLE_ADMIN, username="boss", email="boss@example.com")


@pytest.fixture
def bearer():
    """Authorization header for an account."""

    def _headers(account) -> dict:
        token = auth.create_access_token(account_id=account.id, subject=account.username, role=account.role)
        return {"Authorization": f"Bearer {token}"}

    return _headers
