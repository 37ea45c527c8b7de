from decimal import Decimal
from sqlalchemy import UniqueConstraint
from sqlmodel import SQLModel, Field
from uuid import UUID
from typing import Optional
from datetime import datetime

from backoffice.utils.time_helpers import utc_now


class Account(SQLModel, table=True):
    """
    Cuentas corrientes y de ahorro en una sola tabla.
    `account_type` es el discriminador; solo se llena la columna propia de la
    variante (overdraft_limit para CURRENT, interest_rate para SAVINGS).
    """
    __tablename__ = "accounts"
    __table_args__ = (
        UniqueConstraint("customer_id", "account_id", name="uq_accounts_customer_account"),
    )

    account_id: UUID = Field(primary_key=True)
    customer_id: UUID = Field(foreign_key="customers.customer_id", index=True, ondelete="RESTRICT")
    account_type: str = Field(max_length=50)  # CURRENT, SAVINGS
    currency: str = Field(max_length=3)
    balance: Decimal = Field(default=Decimal("0"), max_digits=18, decimal_places=2)
    status: str = Field(max_length=20)  # ACTIVE, FROZEN, CLOSED
    created_at: datetime = Field(default_factory=utc_now)
    frozen_at: Optional[datetime] = None

    overdraft_limit: Optional[Decimal] = Field(default=None, max_digits=18, decimal_places=2)
    interest_rate: Optional[Decimal] = Field(default=None, max_digits=9, decimal_places=4)
