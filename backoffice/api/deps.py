from fastapi import Depends
from sqlmodel import Session

from backoffice.core.account_manager import AccountManager
from backoffice.database import get_session


def get_account_manager(session: Session = Depends(get_session)) -> AccountManager:
    # Un manager por request, atado a la sesión de esa request
    return AccountManager(session)
