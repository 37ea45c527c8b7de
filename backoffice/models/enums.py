from enum import Enum


class AccountType(str, Enum):
    current = "Current"
    savings = "Savings"

    @property
    def stored(self) -> str:
        # En la tabla el discriminador va en mayúsculas: CURRENT / SAVINGS
        return self.value.upper()


class AccountStatus(str, Enum):
    active = "Active"
    frozen = "Frozen"
    closed = "Closed"  # reservado: ninguna operación lleva una cuenta a este estado

    @property
    def stored(self) -> str:
        return self.value.upper()


_ERROR_NUMBERS = {
    "Ok": 0,
    # Genéricos
    "UnknownError": 1,
    "ValidationFailed": 2,
    # Clientes
    "CustomerNotFound": 10,
    "CustomerAlreadyExists": 11,
    # Cuentas
    "AccountNotFound": 20,
    "AccountAlreadyExists": 21,
    "AccountTypeNotAllowed": 22,
    "AccountAlreadyFrozen": 23,
    "AccountNotFrozen": 24,
    "AccountClosed": 25,
    # Reglas de negocio
    "InsufficientFunds": 30,
    "OverdraftNotAllowed": 31,
    "CurrencyMismatch": 32,
}


class ServiceErrorCode(str, Enum):
    """Resultado de una operación de negocio. Se devuelve como dato, nunca se lanza."""

    ok = "Ok"
    unknown_error = "UnknownError"
    validation_failed = "ValidationFailed"
    customer_not_found = "CustomerNotFound"
    customer_already_exists = "CustomerAlreadyExists"
    account_not_found = "AccountNotFound"
    account_already_exists = "AccountAlreadyExists"
    account_type_not_allowed = "AccountTypeNotAllowed"
    account_already_frozen = "AccountAlreadyFrozen"
    account_not_frozen = "AccountNotFrozen"
    account_closed = "AccountClosed"
    insufficient_funds = "InsufficientFunds"
    overdraft_not_allowed = "OverdraftNotAllowed"
    currency_mismatch = "CurrencyMismatch"

    @property
    def number(self) -> int:
        return _ERROR_NUMBERS[self.value]
