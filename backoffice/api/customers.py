from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query

from backoffice.api.deps import get_account_manager
from backoffice.core.account_manager import AccountManager
from backoffice.core.config import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from backoffice.models.enums import ServiceErrorCode
from backoffice.schemas.account import AccountRead
from backoffice.schemas.common import Page
from backoffice.schemas.customer import CustomerCreate, CustomerRead

router = APIRouter(prefix="/customers", tags=["customers"])


@router.post("", response_model=ServiceErrorCode)
@router.post("/", response_model=ServiceErrorCode, include_in_schema=False)
def create_customer(
    customer_data: CustomerCreate,
    manager: AccountManager = Depends(get_account_manager),
):
    """
    Crea un cliente. El id lo manda el cliente (idempotencia):
    repetirlo devuelve CustomerAlreadyExists.
    """
    return manager.create_customer(
        customer_data.customer_id,
        customer_data.first_name,
        customer_data.last_name,
    )


@router.get("", response_model=Page[CustomerRead])
@router.get("/", response_model=Page[CustomerRead], include_in_schema=False)
def list_customers(
    first_name_filter: Optional[str] = Query(None, alias="firstNameFilter"),
    last_name_filter: Optional[str] = Query(None, alias="lastNameFilter"),
    page: int = Query(1, ge=1),
    page_size: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE, alias="pageSize"),
    manager: AccountManager = Depends(get_account_manager),
):
    """
    Lista clientes ordenados por apellido y nombre.
    Los filtros buscan por subcadena sin distinguir mayúsculas.
    """
    return manager.search_customers(first_name_filter, last_name_filter, page, page_size)


@router.get("/{customer_id}", response_model=CustomerRead)
def get_customer(
    customer_id: UUID,
    manager: AccountManager = Depends(get_account_manager),
):
    customer = manager.get_customer(customer_id)
    if not customer:
        raise HTTPException(status_code=404, detail="Cliente no encontrado")
    return customer


@router.get("/{customer_id}/accounts", response_model=List[AccountRead])
def get_customer_accounts(
    customer_id: UUID,
    manager: AccountManager = Depends(get_account_manager),
):
    return manager.get_accounts_by_customer(customer_id)
