from decimal import Decimal
from typing import Iterable, List

from backoffice.core.exceptions import PersistenceInvariantError, UnknownAccountTypeError
from backoffice.models.account import Account
from backoffice.models.customer import Customer
from backoffice.models.enums import AccountStatus, AccountType
from backoffice.schemas.account import AccountRead, CurrentAccountRead, SavingsAccountRead
from backoffice.schemas.customer import CustomerRead


def parse_account_type(raw: str) -> AccountType:
    # En la tabla va "CURRENT"/"SAVINGS"; se compara sin importar mayúsculas
    for account_type in AccountType:
        if account_type.value.lower() == (raw or "").lower():
            return account_type
    raise UnknownAccountTypeError(raw)


def parse_account_status(raw: str) -> AccountStatus:
    for status in AccountStatus:
        if status.value.lower() == (raw or "").lower():
            return status
    raise PersistenceInvariantError(f"Estado de cuenta desconocido: {raw}")


def to_account_read(account: Account) -> AccountRead:
    """
    Resuelve la variante (corriente / ahorro) según el discriminador guardado.
    El campo de la variante que falte se completa con cero.
    """
    account_type = parse_account_type(account.account_type)
    common = dict(
        account_id=account.account_id,
        customer_id=account.customer_id,
        currency=account.currency,
        balance=account.balance,
        status=parse_account_status(account.status),
        created_at=account.created_at,
        frozen_at=account.frozen_at,
    )

    if account_type == AccountType.current:
        return CurrentAccountRead(
            **common,
            overdraft_limit=account.overdraft_limit if account.overdraft_limit is not None else Decimal("0"),
        )
    return SavingsAccountRead(
        **common,
        interest_rate=account.interest_rate if account.interest_rate is not None else Decimal("0"),
    )


def to_account_reads(accounts: Iterable[Account]) -> List[AccountRead]:
    return [to_account_read(a) for a in accounts]


def to_customer_read(customer: Customer) -> CustomerRead:
    return CustomerRead.model_validate(customer, from_attributes=True)
