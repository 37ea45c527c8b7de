import logging
from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from backoffice.models.enums import AccountStatus, AccountType, ServiceErrorCode
from backoffice.schemas.account import AccountRead
from backoffice.schemas.common import (
    MONEY_DECIMAL_PLACES,
    MONEY_MAX_DIGITS,
    RATE_DECIMAL_PLACES,
    RATE_MAX_DIGITS,
    Page,
    fits_digits,
)
from backoffice.schemas.customer import CustomerRead
from backoffice.utils import account_persistence as persistence

logger = logging.getLogger(__name__)


def _fits_money(value: Decimal) -> bool:
    return fits_digits(value, MONEY_MAX_DIGITS, MONEY_DECIMAL_PLACES)


class AccountManager:
    """
    Reglas de negocio de clientes y cuentas.

    Cada operación valida sus precondiciones contra el estado actual y solo
    entonces escribe. Los rechazos se devuelven como ServiceErrorCode; lo único
    que se propaga como excepción son fallos de persistencia
    (PersistenceInvariantError).

    Entre la validación y la escritura no hay bloqueo: dos requests
    concurrentes pueden pasar ambas la misma validación.
    """

    def __init__(self, session: Session):
        self.session = session

    def _reject(self, code: ServiceErrorCode, operation: str, **ids) -> ServiceErrorCode:
        logger.warning(
            "%s rejected: %s", operation, code.value,
            extra={"operation": operation, "result": code.value, **{k: str(v) for k, v in ids.items()}},
        )
        return code

    def _accept(self, operation: str, **ids) -> ServiceErrorCode:
        logger.info(
            "%s ok", operation,
            extra={"operation": operation, "result": ServiceErrorCode.ok.value, **{k: str(v) for k, v in ids.items()}},
        )
        return ServiceErrorCode.ok

    # -- Clientes ----------------------------------------------------------

    def create_customer(self, customer_id: UUID, first_name: str, last_name: str) -> ServiceErrorCode:
        if persistence.get_customer(self.session, customer_id):
            return self._reject(ServiceErrorCode.customer_already_exists, "create_customer", customer_id=customer_id)

        try:
            persistence.create_customer(self.session, customer_id, first_name, last_name)
        except IntegrityError:
            # Otra request insertó el mismo id entre la validación y el commit
            self.session.rollback()
            return self._reject(ServiceErrorCode.customer_already_exists, "create_customer", customer_id=customer_id)

        return self._accept("create_customer", customer_id=customer_id)

    def get_customer(self, customer_id: UUID) -> Optional[CustomerRead]:
        return persistence.get_customer(self.session, customer_id)

    def search_customers(
        self,
        first_name_filter: Optional[str],
        last_name_filter: Optional[str],
        page: int,
        page_size: int,
    ) -> Page[CustomerRead]:
        return persistence.search_customers(self.session, first_name_filter, last_name_filter, page, page_size)

    # -- Alta de cuentas -----------------------------------------------------

    def _check_new_account(self, operation: str, account_id: UUID, customer_id: UUID) -> Optional[ServiceErrorCode]:
        if not persistence.get_customer(self.session, customer_id):
            return self._reject(ServiceErrorCode.customer_not_found, operation,
                                account_id=account_id, customer_id=customer_id)
        if persistence.get_account(self.session, account_id):
            return self._reject(ServiceErrorCode.account_already_exists, operation,
                                account_id=account_id, customer_id=customer_id)
        return None

    def create_current_account(
        self,
        account_id: UUID,
        customer_id: UUID,
        currency: str,
        initial_balance: Decimal,
        overdraft_limit: Decimal,
    ) -> ServiceErrorCode:
        operation = "create_current_account"
        failure = self._check_new_account(operation, account_id, customer_id)
        if failure:
            return failure

        if overdraft_limit < 0 or not _fits_money(overdraft_limit) or not _fits_money(initial_balance):
            return self._reject(ServiceErrorCode.validation_failed, operation, account_id=account_id)

        try:
            persistence.create_current_account(
                self.session, account_id, customer_id, currency, initial_balance, overdraft_limit
            )
        except IntegrityError:
            self.session.rollback()
            return self._reject(ServiceErrorCode.account_already_exists, operation, account_id=account_id)

        return self._accept(operation, account_id=account_id, customer_id=customer_id)

    def create_savings_account(
        self,
        account_id: UUID,
        customer_id: UUID,
        currency: str,
        initial_balance: Decimal,
        interest_rate: Decimal,
    ) -> ServiceErrorCode:
        operation = "create_savings_account"
        failure = self._check_new_account(operation, account_id, customer_id)
        if failure:
            return failure

        if (
            interest_rate <= 0
            or not fits_digits(interest_rate, RATE_MAX_DIGITS, RATE_DECIMAL_PLACES)
            or not _fits_money(initial_balance)
        ):
            return self._reject(ServiceErrorCode.validation_failed, operation, account_id=account_id)

        try:
            persistence.create_savings_account(
                self.session, account_id, customer_id, currency, initial_balance, interest_rate
            )
        except IntegrityError:
            self.session.rollback()
            return self._reject(ServiceErrorCode.account_already_exists, operation, account_id=account_id)

        return self._accept(operation, account_id=account_id, customer_id=customer_id)

    # -- Estado de la cuenta ---------------------------------------------------

    def freeze_account(self, account_id: UUID) -> ServiceErrorCode:
        account = persistence.get_account(self.session, account_id)
        if not account:
            return self._reject(ServiceErrorCode.account_not_found, "freeze_account", account_id=account_id)
        if account.status == AccountStatus.frozen:
            return self._reject(ServiceErrorCode.account_already_frozen, "freeze_account", account_id=account_id)

        persistence.freeze_account(self.session, account_id)
        return self._accept("freeze_account", account_id=account_id)

    def unfreeze_account(self, account_id: UUID) -> ServiceErrorCode:
        account = persistence.get_account(self.session, account_id)
        if not account:
            return self._reject(ServiceErrorCode.account_not_found, "unfreeze_account", account_id=account_id)
        # Solo se rechaza ACTIVE: una cuenta CLOSED también se "descongela"
        if account.status == AccountStatus.active:
            return self._reject(ServiceErrorCode.account_not_frozen, "unfreeze_account", account_id=account_id)

        persistence.unfreeze_account(self.session, account_id)
        return self._accept("unfreeze_account", account_id=account_id)

    # -- Movimientos ---------------------------------------------------------

    def deposit(self, account_id: UUID, amount: Decimal) -> ServiceErrorCode:
        account = persistence.get_account(self.session, account_id)
        if not account:
            return self._reject(ServiceErrorCode.account_not_found, "deposit", account_id=account_id)
        if account.status != AccountStatus.active:
            return self._reject(ServiceErrorCode.account_closed, "deposit", account_id=account_id)
        # A lo sumo 2 decimales y 13 enteros, también en el saldo resultante
        if amount <= 0 or not _fits_money(amount) or not _fits_money(account.balance + amount):
            return self._reject(ServiceErrorCode.validation_failed, "deposit", account_id=account_id)

        persistence.update_account_balance(self.session, account_id, amount)
        return self._accept("deposit", account_id=account_id)

    def withdraw(self, account_id: UUID, amount: Decimal) -> ServiceErrorCode:
        account = persistence.get_account(self.session, account_id)
        if not account:
            return self._reject(ServiceErrorCode.account_not_found, "withdraw", account_id=account_id)
        if account.status != AccountStatus.active:
            return self._reject(ServiceErrorCode.account_closed, "withdraw", account_id=account_id)
        if amount <= 0 or not _fits_money(amount):
            return self._reject(ServiceErrorCode.validation_failed, "withdraw", account_id=account_id)
        # El límite de sobregiro no se consulta: solo el saldo
        if account.balance < amount:
            return self._reject(ServiceErrorCode.insufficient_funds, "withdraw", account_id=account_id)

        persistence.update_account_balance(self.session, account_id, -amount)
        return self._accept("withdraw", account_id=account_id)

    # -- Consultas -----------------------------------------------------------

    def get_account(self, account_id: UUID) -> Optional[AccountRead]:
        return persistence.get_account(self.session, account_id)

    def get_accounts_by_customer(self, customer_id: UUID) -> List[AccountRead]:
        return persistence.get_accounts_by_customer(self.session, customer_id)

    def search_accounts(
        self,
        page: int,
        page_size: int,
        customer_id: Optional[UUID] = None,
        account_type: Optional[AccountType] = None,
        currency: Optional[str] = None,
        status: Optional[AccountStatus] = None,
        min_balance: Optional[Decimal] = None,
        max_balance: Optional[Decimal] = None,
        created_after: Optional[datetime] = None,
        created_before: Optional[datetime] = None,
        is_frozen: Optional[bool] = None,
    ) -> Page[AccountRead]:
        return persistence.search_accounts(
            self.session,
            page,
            page_size,
            customer_id=customer_id,
            account_type=account_type,
            currency=currency,
            status=status,
            min_balance=min_balance,
            max_balance=max_balance,
            created_after=created_after,
            created_before=created_before,
            is_frozen=is_frozen,
        )
