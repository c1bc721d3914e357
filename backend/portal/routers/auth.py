# portal/routers/auth.py
from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from portal import accounts, auth, models, schemas
from portal.access import has_access
from portal.database import get_db
from portal.errors import AuthenticationError

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=schemas.RegisterOut, status_code=201)
def register(payload: schemas.RegisterIn, db: Session = Depends(get_db)):
    account = accounts.register(
        db,
        username=payload.username,
        email=str(payload.email),
        password=payload.password,
        first_name=payload.first_name,
        last_name=payload.last_name,
        date_of_birth=payload.date_of_birth,
        contact_number=payload.contact_number,
    )
    return {"account": account}


@router.post("/login", response_model=schemas.LoginOut)
def login(payload: schemas.LoginIn, db: Session = Depends(get_db)):
    account = accounts.authenticate(db, payload.identifier, payload.secret)
    if not account:
        raise AuthenticationError("Invalid credentials")

    token = auth.create_access_token(
        account_id=account.id,
        subject=account.username,
        role=account.role,
    )
    return {
        "account": account,
        "has_valid_membership": has_access(db, account),
        "access_token": token,
    }


@router.get("/me", response_model=schemas.MeOut)
def me(
    db: Session = Depends(get_db),
    account: models.Account = Depends(auth.get_current_account),
):
    return {"account": account, "has_valid_membership": has_access(db, account)}
