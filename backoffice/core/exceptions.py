from uuid import UUID


class PersistenceInvariantError(RuntimeError):
    """
    Fallo que la capa de negocio no puede resolver (no es un ServiceErrorCode).
    Se responde como 500 desde el exception handler de la app.
    """


class AccountVanishedError(PersistenceInvariantError):
    def __init__(self, account_id: UUID, action: str):
        self.account_id = account_id
        self.action = action
        super().__init__(f"No se encontró la cuenta {account_id}. No se puede {action} la cuenta.")


class UnknownAccountTypeError(PersistenceInvariantError):
    def __init__(self, account_type: str):
        self.account_type = account_type
        super().__init__(f"Tipo de cuenta desconocido: {account_type}")
