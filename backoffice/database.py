from typing import Optional
from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlmodel import SQLModel, Session, create_engine

from backoffice.core.config import DATABASE_URL, SQL_ECHO


def _unicode_lower(value):
    return value.lower() if value is not None else None


def configure_sqlite(engine: Engine) -> None:
    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        # SQLite no valida las FK (ON DELETE RESTRICT) si no se activa por conexión
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()
        # El lower() nativo solo pasa a minúsculas ASCII: "NÚÑEZ" quedaría "nÚÑez"
        dbapi_connection.create_function("lower", 1, _unicode_lower, deterministic=True)


def build_engine(url: str = DATABASE_URL, echo: bool = SQL_ECHO, **kwargs) -> Engine:
    if url.startswith("sqlite"):
        # FastAPI atiende las rutas sync en un threadpool
        kwargs.setdefault("connect_args", {"check_same_thread": False})
        new_engine = create_engine(url, echo=echo, **kwargs)
        configure_sqlite(new_engine)
        return new_engine
    return create_engine(url, echo=echo, **kwargs)


engine = build_engine()


def create_db_and_tables(target: Optional[Engine] = None):
    from backoffice import models  # noqa: F401  (registra las tablas en el metadata)
    SQLModel.metadata.create_all(target or engine)


def get_session():
    with Session(engine) as session:
        yield session
