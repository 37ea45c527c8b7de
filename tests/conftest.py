"""
Fixtures compartidos: SQLite en memoria por test, sesión, manager y TestClient.
"""

from decimal import Decimal
from uuid import UUID, uuid4

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel

from backoffice.core.account_manager import AccountManager
from backoffice.database import build_engine, create_db_and_tables, get_session
from backoffice.main import app


@pytest.fixture
def engine():
    """Base en memoria; StaticPool para que todas las sesiones vean la misma conexión"""
    engine = build_engine("sqlite://", echo=False, poolclass=StaticPool)
    create_db_and_tables(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def manager(session):
    return AccountManager(session)


@pytest.fixture
def client(engine):
    """TestClient con get_session apuntando a la base del test"""
    def override_get_session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


@pytest.fixture
def customer_id(manager) -> UUID:
    customer_id = uuid4()
    manager.create_customer(customer_id, "Alice", "Smith")
    return customer_id


@pytest.fixture
def current_account_id(manager, customer_id) -> UUID:
    account_id = uuid4()
    manager.create_current_account(account_id, customer_id, "USD", Decimal("100"), Decimal("50"))
    return account_id
