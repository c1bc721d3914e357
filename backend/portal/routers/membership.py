# portal/routers/membership.py
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from portal import accounts, auth, ledger, models, registry, schemas
from portal.access import has_access
from portal.database import get_db
from portal.errors import ForbiddenError
from portal.plans import PLANS

router = APIRouter(prefix="/membership", tags=["membership"])


@router.get("/plans", response_model=list[schemas.PlanOut])
def list_plans():
    return [
        schemas.PlanOut(
            plan=p.plan,
            name=p.name,
            days=p.days,
            price_usd=p.price_usd,
            price_bdt=p.price_bdt,
        )
        for p in PLANS.values()
    ]


@router.post("/request", response_model=schemas.MembershipRequestOut, status_code=201)
def submit_request(
    payload: schemas.MembershipRequestIn,
    db: Session = Depends(get_db),
    me: models.Account = Depends(auth.get_current_account),
):
    account_id = payload.account_id if payload.account_id is not None else me.id
    if account_id != me.id and not auth.is_admin(me):
        raise ForbiddenError("Cannot request a membership for another account")

    return ledger.submit_request(db, account_id, payload.plan, payload.payment_method)


@router.get("/requests", response_model=list[schemas.MembershipRequestWithAccountOut])
def list_requests(
    status: Optional[str] = Query(None),
    account_id: Optional[int] = Query(None),
    db: Session = Depends(get_db),
    admin: models.Account = Depends(auth.require_admin),
):
    return ledger.list_requests(db, status=status, account_id=account_id)


@router.get("/requests/me", response_model=list[schemas.MembershipRequestOut])
def list_my_requests(
    db: Session = Depends(get_db),
    me: models.Account = Depends(auth.get_current_account),
):
    return ledger.list_requests(db, account_id=me.id)


@router.patch("/requests/{request_id}/status", response_model=schemas.DecisionOut)
def decide_request(
    request_id: int,
    body: schemas.DecisionIn,
    db: Session = Depends(get_db),
    admin: models.Account = Depends(auth.require_admin),
):
    req, membership = ledger.decide(db, request_id, body.status)
    return {"request": req, "membership": membership}


@router.get("/check/{account_id}", response_model=schemas.MembershipCheckOut)
def check_membership(account_id: int, db: Session = Depends(get_db)):
    account = accounts.get_account_or_404(db, account_id)
    return {
        "has_valid_membership": has_access(db, account),
        "membership": registry.find_valid_for(db, account.id),
    }
