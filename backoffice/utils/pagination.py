from typing import List, Tuple, TypeVar

from sqlalchemy import func
from sqlmodel import Session, select
from sqlmodel.sql.expression import SelectOfScalar

T = TypeVar("T")


def total_pages(total_count: int, page_size: int) -> int:
    return (total_count + page_size - 1) // page_size


def paginate(session: Session, query: SelectOfScalar[T], page: int, page_size: int) -> Tuple[int, List[T]]:
    """
    Cuenta el total (después de filtros, antes de paginar) y trae una página.
    `page` empieza en 1; el rango se valida en la ruta, aquí no.
    """
    total = session.exec(select(func.count()).select_from(query.order_by(None).subquery())).one()

    items = session.exec(
        query.offset((page - 1) * page_size).limit(page_size)
    ).all()

    return total, list(items)
