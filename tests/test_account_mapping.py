"""
Resolución de la variante de cuenta a partir del discriminador guardado.
"""

from datetime import datetime
from decimal import Decimal
from uuid import uuid4

import pytest
from sqlalchemy import delete

from backoffice.core.exceptions import AccountVanishedError, PersistenceInvariantError, UnknownAccountTypeError
from backoffice.models.account import Account
from backoffice.models.enums import AccountStatus, AccountType
from backoffice.schemas.account import CurrentAccountRead, SavingsAccountRead
from backoffice.utils import account_persistence
from backoffice.utils.account_mapping import parse_account_type, to_account_read


def make_account(**overrides) -> Account:
    fields = dict(
        account_id=uuid4(),
        customer_id=uuid4(),
        account_type="CURRENT",
        currency="USD",
        balance=Decimal("10"),
        status="ACTIVE",
        created_at=datetime(2024, 5, 1, 8, 30),
    )
    fields.update(overrides)
    return Account(**fields)


class TestToAccountRead:

    def test_current_account(self):
        view = to_account_read(make_account(overdraft_limit=Decimal("50")))

        assert isinstance(view, CurrentAccountRead)
        assert view.account_type == AccountType.current
        assert view.status == AccountStatus.active
        assert view.overdraft_limit == Decimal("50")

    def test_savings_account(self):
        view = to_account_read(make_account(account_type="SAVINGS", interest_rate=Decimal("2.25")))

        assert isinstance(view, SavingsAccountRead)
        assert view.interest_rate == Decimal("2.25")
        assert not hasattr(view, "overdraft_limit")

    def test_missing_variant_field_defaults_to_zero(self):
        assert to_account_read(make_account()).overdraft_limit == Decimal("0")
        assert to_account_read(make_account(account_type="SAVINGS")).interest_rate == Decimal("0")

    def test_discriminator_is_case_insensitive(self):
        assert isinstance(to_account_read(make_account(account_type="savings")), SavingsAccountRead)
        assert to_account_read(make_account(status="frozen")).status == AccountStatus.frozen

    def test_unknown_account_type_is_unrecoverable(self):
        with pytest.raises(UnknownAccountTypeError):
            to_account_read(make_account(account_type="CHECKING"))

    def test_unknown_status_is_unrecoverable(self):
        with pytest.raises(PersistenceInvariantError):
            to_account_read(make_account(status="DORMANT"))

    def test_parse_account_type(self):
        assert parse_account_type("CURRENT") == AccountType.current
        assert parse_account_type("Savings") == AccountType.savings


class TestStoredLayout:

    def test_discriminator_and_status_are_stored_upper_cased(self, manager, session, customer_id, current_account_id):
        row = session.get(Account, current_account_id)

        assert row.account_type == "CURRENT"
        assert row.status == "ACTIVE"
        assert row.overdraft_limit == Decimal("50")
        assert row.interest_rate is None

    def test_savings_row_only_has_interest_rate(self, manager, session, customer_id):
        account_id = uuid4()
        manager.create_savings_account(account_id, customer_id, "USD", Decimal("1"), Decimal("3"))

        row = session.get(Account, account_id)
        assert row.account_type == "SAVINGS"
        assert row.overdraft_limit is None
        assert row.interest_rate == Decimal("3")

    def test_write_on_missing_account_raises(self, session):
        with pytest.raises(AccountVanishedError):
            account_persistence.freeze_account(session, uuid4())
        with pytest.raises(AccountVanishedError):
            account_persistence.unfreeze_account(session, uuid4())
        with pytest.raises(AccountVanishedError):
            account_persistence.update_account_balance(session, uuid4(), Decimal("1"))

    def test_row_deleted_behind_a_loaded_session_raises(self, manager, session, current_account_id):
        loaded = session.get(Account, current_account_id)
        session.exec(
            delete(Account)
            .where(Account.account_id == current_account_id)
            .execution_options(synchronize_session=False)
        )

        # La validación todavía ve la fila en memoria; la escritura no
        with pytest.raises(AccountVanishedError):
            manager.freeze_account(current_account_id)
        assert loaded is not None

    def test_customer_with_accounts_cannot_be_deleted(self, session, customer_id, current_account_id):
        from sqlalchemy.exc import IntegrityError
        from backoffice.models.customer import Customer

        session.delete(session.get(Customer, customer_id))
        with pytest.raises(IntegrityError):
            session.commit()
        session.rollback()
