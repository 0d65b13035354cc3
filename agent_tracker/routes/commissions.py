from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from pydantic import BaseModel

from agent_tracker.audit import mark_audit_record
from agent_tracker.auth.utils import get_current_caller
from agent_tracker.repositories import Repositories, get_repositories
from agent_tracker.services.access import Caller, resolve_subject
from agent_tracker.services.validators import validate_commission_transaction, validate_period

router = APIRouter(prefix="/commissions", tags=["commissions"])


class CommissionTransactionRequest(BaseModel):
    amount: Decimal
    transaction_type: str
    transaction_month: int
    transaction_year: int
    transaction_reference: Optional[str] = None
    property_address: Optional[str] = None
    notes: Optional[str] = None
    user_id: Optional[int] = None


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return value.strip() or None


def _list_transactions(repos: Repositories, caller: Caller, user_id: Optional[int], year: int, month: Optional[int]):
    validate_period(year, month).raise_if_invalid()
    subject_id = resolve_subject(caller, user_id)
    transactions = repos.commissions.list_for_user(subject_id, year, month)
    return [t.to_dict() for t in transactions]


# ---------------------------------------------------------------------------
# List views
# ---------------------------------------------------------------------------
@router.get("/{year}")
def list_year(
    year: int,
    user_id: Optional[int] = Query(None, alias="userId"),
    caller: Caller = Depends(get_current_caller),
    repos: Repositories = Depends(get_repositories),
):
    return _list_transactions(repos, caller, user_id, year, None)


@router.get("/{year}/{month}")
def list_month(
    year: int,
    month: int,
    user_id: Optional[int] = Query(None, alias="userId"),
    caller: Caller = Depends(get_current_caller),
    repos: Repositories = Depends(get_repositories),
):
    return _list_transactions(repos, caller, user_id, year, month)


# ---------------------------------------------------------------------------
# Add transaction
# ---------------------------------------------------------------------------
@router.post("")
def add_commission(
    data: CommissionTransactionRequest,
    request: Request,
    caller: Caller = Depends(get_current_caller),
    repos: Repositories = Depends(get_repositories),
):
    subject_id = resolve_subject(caller, data.user_id)
    transaction_type = data.transaction_type.strip().lower()
    validate_commission_transaction(
        data.amount, transaction_type, data.transaction_month, data.transaction_year
    ).raise_if_invalid()

    transaction = repos.commissions.add(
        user_id=subject_id,
        amount=data.amount.quantize(Decimal("0.01")),
        transaction_type=transaction_type,
        transaction_month=data.transaction_month,
        transaction_year=data.transaction_year,
        transaction_reference=_clean(data.transaction_reference),
        property_address=_clean(data.property_address),
        notes=_clean(data.notes),
    )
    mark_audit_record(request, transaction.id)
    return {"id": transaction.id, "message": "Commission added"}
