from datetime import datetime
from typing import Annotated, Literal, Optional, Union
from uuid import UUID

from pydantic import Field

from backoffice.models.enums import AccountStatus, AccountType
from backoffice.schemas.common import (
    MONEY_DECIMAL_PLACES,
    MONEY_MAX_DIGITS,
    RATE_DECIMAL_PLACES,
    RATE_MAX_DIGITS,
    CamelModel,
    Money,
)


class AccountCreate(CamelModel):
    account_id: UUID
    customer_id: UUID
    currency: str = Field(..., min_length=3, max_length=3, description="Código ISO 4217 (USD, EUR...)")
    initial_balance: Money = Field(..., ge=0, max_digits=MONEY_MAX_DIGITS, decimal_places=MONEY_DECIMAL_PLACES)


class CurrentAccountCreate(AccountCreate):
    overdraft_limit: Money = Field(..., ge=0, max_digits=MONEY_MAX_DIGITS, decimal_places=MONEY_DECIMAL_PLACES)


class SavingsAccountCreate(AccountCreate):
    interest_rate: Money = Field(..., gt=0, max_digits=RATE_MAX_DIGITS, decimal_places=RATE_DECIMAL_PLACES)


class AccountAmount(CamelModel):
    amount: Money = Field(
        ...,
        gt=0,
        max_digits=MONEY_MAX_DIGITS,
        decimal_places=MONEY_DECIMAL_PLACES,
        description="Monto a depositar o retirar",
    )


class AccountReadBase(CamelModel):
    account_id: UUID
    customer_id: UUID
    currency: str
    balance: Money
    status: AccountStatus
    created_at: datetime
    frozen_at: Optional[datetime] = None


class CurrentAccountRead(AccountReadBase):
    account_type: Literal[AccountType.current] = AccountType.current
    overdraft_limit: Money


class SavingsAccountRead(AccountReadBase):
    account_type: Literal[AccountType.savings] = AccountType.savings
    interest_rate: Money


AccountRead = Annotated[
    Union[CurrentAccountRead, SavingsAccountRead],
    Field(discriminator="account_type"),
]
