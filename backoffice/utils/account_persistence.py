"""
Acceso a datos de clientes y cuentas.

Todas las funciones reciben la sesión abierta por quien las llama (una por
request) y devuelven modelos de lectura, nunca filas de la tabla.
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from sqlalchemy import func
from sqlmodel import Session, col, select

from backoffice.core.config import MIN_SEARCH_TERM_LENGTH
from backoffice.core.exceptions import AccountVanishedError
from backoffice.models.account import Account
from backoffice.models.customer import Customer
from backoffice.models.enums import AccountStatus, AccountType
from backoffice.schemas.account import AccountRead
from backoffice.schemas.common import Page
from backoffice.schemas.customer import CustomerRead
from backoffice.utils.account_mapping import to_account_read, to_account_reads, to_customer_read
from backoffice.utils.pagination import paginate, total_pages
from backoffice.utils.time_helpers import to_naive_utc, utc_now


# ---------------------------------------------------------------------------
# Clientes
# ---------------------------------------------------------------------------

def create_customer(session: Session, customer_id: UUID, first_name: str, last_name: str) -> CustomerRead:
    customer = Customer(
        customer_id=customer_id,
        first_name=first_name,
        last_name=last_name,
        created_at=utc_now(),
    )
    session.add(customer)
    session.commit()
    session.refresh(customer)
    return to_customer_read(customer)


def get_customer(session: Session, customer_id: UUID) -> Optional[CustomerRead]:
    customer = session.get(Customer, customer_id)
    return to_customer_read(customer) if customer else None


def _is_usable_term(term: Optional[str]) -> bool:
    return bool(term and term.strip()) and len(term) > MIN_SEARCH_TERM_LENGTH


def search_customers(
    session: Session,
    first_name_filter: Optional[str],
    last_name_filter: Optional[str],
    page: int,
    page_size: int,
) -> Page[CustomerRead]:
    """
    Busca clientes por subcadena (sin distinguir mayúsculas) en nombre y apellido.
    Un filtro corto se ignora en lugar de forzar un recorrido completo.
    """
    query = select(Customer)

    # TODO: pasar a índice full-text cuando la tabla deje de caber en un LIKE
    if _is_usable_term(first_name_filter):
        query = query.where(func.lower(Customer.first_name).contains(first_name_filter.lower(), autoescape=True))
    if _is_usable_term(last_name_filter):
        query = query.where(func.lower(Customer.last_name).contains(last_name_filter.lower(), autoescape=True))

    query = query.order_by(
        col(Customer.last_name).asc(),
        col(Customer.first_name).asc(),
        col(Customer.customer_id).asc(),
    )

    total, customers = paginate(session, query, page, page_size)

    return Page[CustomerRead](
        page=page,
        page_size=page_size,
        total_count=total,
        total_pages=total_pages(total, page_size),
        items=[to_customer_read(c) for c in customers],
    )


# ---------------------------------------------------------------------------
# Cuentas
# ---------------------------------------------------------------------------

def _new_account(
    account_id: UUID,
    customer_id: UUID,
    account_type: AccountType,
    currency: str,
    initial_balance: Decimal,
    **variant_fields,
) -> Account:
    return Account(
        account_id=account_id,
        customer_id=customer_id,
        account_type=account_type.stored,
        currency=currency.upper(),
        balance=initial_balance,
        status=AccountStatus.active.stored,
        created_at=utc_now(),
        **variant_fields,
    )


def create_current_account(
    session: Session,
    account_id: UUID,
    customer_id: UUID,
    currency: str,
    initial_balance: Decimal,
    overdraft_limit: Decimal,
) -> AccountRead:
    account = _new_account(
        account_id, customer_id, AccountType.current, currency, initial_balance,
        overdraft_limit=overdraft_limit,
    )
    session.add(account)
    session.commit()
    session.refresh(account)
    return to_account_read(account)


def create_savings_account(
    session: Session,
    account_id: UUID,
    customer_id: UUID,
    currency: str,
    initial_balance: Decimal,
    interest_rate: Decimal,
) -> AccountRead:
    account = _new_account(
        account_id, customer_id, AccountType.savings, currency, initial_balance,
        interest_rate=interest_rate,
    )
    session.add(account)
    session.commit()
    session.refresh(account)
    return to_account_read(account)


def get_account(session: Session, account_id: UUID) -> Optional[AccountRead]:
    account = session.get(Account, account_id)
    return to_account_read(account) if account else None


def get_accounts_by_customer(session: Session, customer_id: UUID) -> List[AccountRead]:
    accounts = session.exec(
        select(Account)
        .where(Account.customer_id == customer_id)
        .order_by(col(Account.created_at).desc(), col(Account.account_id).asc())
    ).all()
    return to_account_reads(accounts)


def search_accounts(
    session: Session,
    page: int,
    page_size: int,
    customer_id: Optional[UUID] = None,
    account_type: Optional[AccountType] = None,
    currency: Optional[str] = None,
    status: Optional[AccountStatus] = None,
    min_balance: Optional[Decimal] = None,
    max_balance: Optional[Decimal] = None,
    created_after: Optional[datetime] = None,
    created_before: Optional[datetime] = None,
    is_frozen: Optional[bool] = None,
) -> Page[AccountRead]:
    """
    Filtros combinados con AND; un filtro en None no restringe nada.
    Rangos de saldo y fecha inclusivos. Orden: más recientes primero.
    """
    query = select(Account)

    if customer_id is not None:
        query = query.where(Account.customer_id == customer_id)
    if account_type is not None:
        query = query.where(Account.account_type == account_type.stored)
    if currency and currency.strip():
        query = query.where(Account.currency == currency.upper())
    if status is not None:
        query = query.where(Account.status == status.stored)
    if min_balance is not None:
        query = query.where(Account.balance >= min_balance)
    if max_balance is not None:
        query = query.where(Account.balance <= max_balance)
    if created_after is not None:
        query = query.where(Account.created_at >= to_naive_utc(created_after))
    if created_before is not None:
        query = query.where(Account.created_at <= to_naive_utc(created_before))
    if is_frozen is True:
        query = query.where(col(Account.frozen_at).is_not(None))
    elif is_frozen is False:
        query = query.where(col(Account.frozen_at).is_(None))

    # Sin filtro por tipo, estado o moneda esto recorre la tabla entera
    query = query.order_by(col(Account.created_at).desc(), col(Account.account_id).asc())

    total, accounts = paginate(session, query, page, page_size)

    return Page[AccountRead](
        page=page,
        page_size=page_size,
        total_count=total,
        total_pages=total_pages(total, page_size),
        items=to_account_reads(accounts),
    )


def _get_account_for_update(session: Session, account_id: UUID, action: str) -> Account:
    # populate_existing: se relee la fila aunque la sesión ya la tenga cargada
    account = session.get(Account, account_id, populate_existing=True)
    if not account:
        # Pasó la validación de existencia y desapareció antes de escribir
        raise AccountVanishedError(account_id, action)
    return account


def freeze_account(session: Session, account_id: UUID) -> AccountRead:
    account = _get_account_for_update(session, account_id, "congelar")

    account.status = AccountStatus.frozen.stored
    account.frozen_at = utc_now()
    session.add(account)
    session.commit()
    session.refresh(account)
    return to_account_read(account)


def unfreeze_account(session: Session, account_id: UUID) -> AccountRead:
    account = _get_account_for_update(session, account_id, "descongelar")

    account.status = AccountStatus.active.stored
    account.frozen_at = None
    session.add(account)
    session.commit()
    session.refresh(account)
    return to_account_read(account)


def update_account_balance(session: Session, account_id: UUID, amount_delta: Decimal) -> AccountRead:
    account = _get_account_for_update(session, account_id, "actualizar el saldo de")

    account.balance += amount_delta
    session.add(account)  # Se requiere para que SQLModel registre el cambio
    session.commit()
    session.refresh(account)
    return to_account_read(account)
