from decimal import Decimal
from typing import Annotated, Generic, List, TypeVar

from pydantic import BaseModel, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel

T = TypeVar("T")

# Montos: hasta 13 enteros y 2 decimales (15 dígitos), lo que un float de JSON
# devuelve sin perder centavos. Tasas: Numeric(9, 4) tal cual la columna.
MONEY_MAX_DIGITS = 15
MONEY_DECIMAL_PLACES = 2
RATE_MAX_DIGITS = 9
RATE_DECIMAL_PLACES = 4

# Montos y tasas viajan como número en el JSON (Decimal por dentro)
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


def fits_digits(value: Decimal, max_digits: int, decimal_places: int) -> bool:
    """True si el valor entra en max_digits dígitos con a lo sumo decimal_places decimales."""
    if abs(value) >= Decimal(10) ** (max_digits - decimal_places):
        return False
    return value == round(value, decimal_places)


class CamelModel(BaseModel):
    """JSON en camelCase (customerId, firstName...), atributos en snake_case."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class Page(CamelModel, Generic[T]):
    page: int
    page_size: int
    total_count: int
    total_pages: int
    items: List[T]
