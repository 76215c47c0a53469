from __future__ import annotations
from datetime import datetime, UTC
from decimal import Decimal
from typing import Optional
from sqlmodel import Field, SQLModel

from .types import Cents


def _utcnow() -> datetime:
    return datetime.now(UTC)


class User(SQLModel, table=True):
    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)
    email: str = Field(index=True, unique=True, max_length=255)
    password_hash: str = Field(max_length=255)
    created_at: datetime = Field(default_factory=_utcnow)

class Account(SQLModel, table=True):
    __tablename__ = "accounts"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True)
    account_type: str = Field(default="checking", max_length=50)
    balance: Decimal = Field(default=Decimal("0.00"), sa_type=Cents)
    created_at: datetime = Field(default_factory=_utcnow)

class Transaction(SQLModel, table=True):
    __tablename__ = "transactions"

    id: Optional[int] = Field(default=None, primary_key=True)
    account_id: int = Field(foreign_key="accounts.id", index=True)
    type: str = Field(max_length=50)
    amount: Decimal = Field(sa_type=Cents)
    to_account_id: Optional[int] = Field(default=None, foreign_key="accounts.id")
    timestamp: datetime = Field(default_factory=_utcnow, index=True)
    description: Optional[str] = None

class Notification(SQLModel, table=True):
    __tablename__ = "notifications"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True)
    message: str
    type: str = Field(max_length=50)
    read: bool = False
    created_at: datetime = Field(default_factory=_utcnow, index=True)
