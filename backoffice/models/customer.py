from sqlmodel import SQLModel, Field
from uuid import UUID
from datetime import datetime

from backoffice.utils.time_helpers import utc_now


class Customer(SQLModel, table=True):
    __tablename__ = "customers"

    # Lo entrega el cliente (clave de idempotencia), no la base de datos
    customer_id: UUID = Field(primary_key=True)
    first_name: str = Field(max_length=200)
    last_name: str = Field(max_length=200)
    created_at: datetime = Field(default_factory=utc_now)
