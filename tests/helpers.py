from uuid import UUID

from sqlmodel import Session

from backoffice.models.account import Account


def set_account_fields(session: Session, account_id: UUID, **fields) -> None:
    """Modifica la fila directamente (fechas, estados reservados...)"""
    account = session.get(Account, account_id)
    for key, value in fields.items():
        setattr(account, key, value)
    session.add(account)
    session.commit()
