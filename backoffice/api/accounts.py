from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query

from backoffice.api.deps import get_account_manager
from backoffice.core.account_manager import AccountManager
from backoffice.core.config import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from backoffice.models.enums import AccountStatus, AccountType, ServiceErrorCode
from backoffice.schemas.account import AccountAmount, AccountRead, CurrentAccountCreate, SavingsAccountCreate
from backoffice.schemas.common import Page

router = APIRouter(prefix="/accounts", tags=["accounts"])


@router.post("/current", response_model=ServiceErrorCode)
def create_current_account(
    account_data: CurrentAccountCreate,
    manager: AccountManager = Depends(get_account_manager),
):
    return manager.create_current_account(
        account_data.account_id,
        account_data.customer_id,
        account_data.currency,
        account_data.initial_balance,
        account_data.overdraft_limit,
    )


@router.post("/savings", response_model=ServiceErrorCode)
def create_savings_account(
    account_data: SavingsAccountCreate,
    manager: AccountManager = Depends(get_account_manager),
):
    return manager.create_savings_account(
        account_data.account_id,
        account_data.customer_id,
        account_data.currency,
        account_data.initial_balance,
        account_data.interest_rate,
    )


# Antes de /{account_id}: "search" no es un UUID y la ruta daría 422
@router.get("/search", response_model=Page[AccountRead])
def search_accounts(
    page: int = Query(1, ge=1),
    page_size: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE, alias="pageSize"),
    customer_id: Optional[UUID] = Query(None, alias="customerId"),
    account_type: Optional[AccountType] = Query(None, alias="accountType"),
    currency: Optional[str] = Query(None, min_length=3, max_length=3),
    status: Optional[AccountStatus] = Query(None),
    min_balance: Optional[Decimal] = Query(None, alias="minBalance"),
    max_balance: Optional[Decimal] = Query(None, alias="maxBalance"),
    created_after: Optional[datetime] = Query(None, alias="createdAfter"),
    created_before: Optional[datetime] = Query(None, alias="createdBefore"),
    is_frozen: Optional[bool] = Query(None, alias="isFrozen"),
    manager: AccountManager = Depends(get_account_manager),
):
    """
    Búsqueda paginada de cuentas. Todos los filtros son opcionales y se
    combinan con AND; las más recientes primero.
    """
    return manager.search_accounts(
        page,
        page_size,
        customer_id=customer_id,
        account_type=account_type,
        currency=currency,
        status=status,
        min_balance=min_balance,
        max_balance=max_balance,
        created_after=created_after,
        created_before=created_before,
        is_frozen=is_frozen,
    )


@router.get("/{account_id}", response_model=AccountRead)
def get_account(
    account_id: UUID,
    manager: AccountManager = Depends(get_account_manager),
):
    account = manager.get_account(account_id)
    if not account:
        raise HTTPException(status_code=404, detail="Cuenta no encontrada")
    return account


@router.post("/{account_id}/freeze", response_model=ServiceErrorCode)
def freeze_account(
    account_id: UUID,
    manager: AccountManager = Depends(get_account_manager),
):
    return manager.freeze_account(account_id)


@router.post("/{account_id}/unfreeze", response_model=ServiceErrorCode)
def unfreeze_account(
    account_id: UUID,
    manager: AccountManager = Depends(get_account_manager),
):
    return manager.unfreeze_account(account_id)


@router.post("/{account_id}/deposit", response_model=ServiceErrorCode)
def deposit_to_account(
    account_id: UUID,
    data: AccountAmount,
    manager: AccountManager = Depends(get_account_manager),
):
    return manager.deposit(account_id, data.amount)


@router.post("/{account_id}/withdraw", response_model=ServiceErrorCode)
def withdraw_from_account(
    account_id: UUID,
    data: AccountAmount,
    manager: AccountManager = Depends(get_account_manager),
):
    return manager.withdraw(account_id, data.amount)
