from datetime import datetime
from decimal import Decimal
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

AccountType = Literal["checking", "savings"]
TransactionType = Literal["deposit", "withdrawal", "transfer"]
NotificationType = Literal["alert", "transaction"]


class RequestModel(BaseModel):
    """Request bodies accept camelCase keys as well as snake_case."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

# Identity ---------------------------------------------------------------
class RegisterRequest(RequestModel):
    email: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=6)

class LoginRequest(RequestModel):
    email: str
    password: str

class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str

class LoginResponse(BaseModel):
    token: str
    user: UserResponse

# Accounts ---------------------------------------------------------------
class AccountCreate(RequestModel):
    account_type: str = Field(default="checking", description="checking or savings")

class AccountResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    account_type: AccountType
    balance: Decimal = Field(..., ge=0)
    created_at: datetime

class AccountEnvelope(BaseModel):
    account: AccountResponse

class AccountListResponse(BaseModel):
    accounts: list[AccountResponse]

# Transactions -----------------------------------------------------------
class MoneyMovementRequest(RequestModel):
    account_id: int
    amount: Decimal = Field(..., max_digits=15, decimal_places=2)
    description: Optional[str] = Field(default=None, max_length=500)

class TransferRequest(RequestModel):
    from_account_id: int
    to_account_id: int
    amount: Decimal = Field(..., max_digits=15, decimal_places=2)
    description: Optional[str] = Field(default=None, max_length=500)

class TransactionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    account_id: int
    type: TransactionType
    amount: Decimal
    to_account_id: Optional[int] = None
    timestamp: datetime
    description: Optional[str] = None

class TransactionEnvelope(BaseModel):
    transaction: TransactionResponse

class TransactionListResponse(BaseModel):
    transactions: list[TransactionResponse]

# Notifications ----------------------------------------------------------
class NotificationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    message: str
    type: NotificationType
    read: bool
    created_at: datetime

class NotificationEnvelope(BaseModel):
    notification: NotificationResponse

class NotificationListResponse(BaseModel):
    notifications: list[NotificationResponse]
