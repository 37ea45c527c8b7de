from datetime import datetime
from uuid import UUID

from pydantic import Field

from backoffice.schemas.common import CamelModel


class CustomerCreate(CamelModel):
    customer_id: UUID
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)


class CustomerRead(CamelModel):
    customer_id: UUID
    first_name: str
    last_name: str
    created_at: datetime
