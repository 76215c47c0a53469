from typing import Optional

from fastapi import Depends, Header
from sqlmodel import Session

from ..services import AccountService, AuthService, BankRepository, LedgerService, NotificationService
from .db import get_session
from .errors import InvalidTokenError
from .security import decode_access_token

def get_current_user_id(
    authorization: Optional[str] = Header(default=None, alias="Authorization"),
) -> int:
    if not authorization or not authorization.lower().startswith("bearer "):
        raise InvalidTokenError("No token provided")
    return decode_access_token(authorization.split(" ", 1)[1])

def get_ledger_service(session: Session = Depends(get_session)) -> LedgerService:
    repository = BankRepository(session)
    return LedgerService(session, repository, NotificationService(session, repository))

def get_account_service(session: Session = Depends(get_session)) -> AccountService:
    return AccountService(session)

def get_notification_service(session: Session = Depends(get_session)) -> NotificationService:
    return NotificationService(session)

def get_auth_service(session: Session = Depends(get_session)) -> AuthService:
    return AuthService(session)
