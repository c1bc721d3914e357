# portal/routers/admin_accounts.py
from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from portal import accounts, auth, models, schemas
from portal.database import get_db

router = APIRouter(
    prefix="/admin/accounts",
    tags=["admin"],
    dependencies=[Depends(auth.require_admin)],
)


@router.get("", response_model=list[schemas.AccountOut])
def admin_list_accounts(db: Session = Depends(get_db)):
    return accounts.list_accounts(db)


@router.patch("/{account_id}/role", response_model=schemas.AccountOut)
def admin_set_role(
    account_id: int,
    payload: schemas.RoleIn,
    db: Session = Depends(get_db),
    admin: models.Account = Depends(auth.require_admin),
):
    return accounts.set_role(db, account_id, payload.role, acting=admin)
