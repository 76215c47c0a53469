from .accounts import AccountService
from .auth import AuthService
from .ledger import LedgerService
from .notifications import NotificationService, NotificationSink
from .repository import BankRepository

__all__ = [
    "AccountService",
    "AuthService",
    "BankRepository",
    "LedgerService",
    "NotificationService",
    "NotificationSink",
]
