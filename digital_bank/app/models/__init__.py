from .db import Account as AccountModel
from .db import Notification as NotificationModel
from .db import Transaction as TransactionModel
from .db import User as UserModel
from .schemas import (
    AccountCreate,
    AccountEnvelope,
    AccountListResponse,
    AccountResponse,
    LoginRequest,
    LoginResponse,
    MoneyMovementRequest,
    NotificationEnvelope,
    NotificationListResponse,
    NotificationResponse,
    RegisterRequest,
    TransactionEnvelope,
    TransactionListResponse,
    TransactionResponse,
    TransferRequest,
    UserResponse,
)

__all__ = [
    "AccountCreate",
    "AccountEnvelope",
    "AccountListResponse",
    "AccountResponse",
    "LoginRequest",
    "LoginResponse",
    "MoneyMovementRequest",
    "NotificationEnvelope",
    "NotificationListResponse",
    "NotificationResponse",
    "RegisterRequest",
    "TransactionEnvelope",
    "TransactionListResponse",
    "TransactionResponse",
    "TransferRequest",
    "UserResponse",
    "AccountModel",
    "NotificationModel",
    "TransactionModel",
    "UserModel",
]
