from __future__ import annotations

from collections.abc import Iterator
from decimal import Decimal
from typing import Optional

from sqlalchemy import literal, update
from sqlmodel import Session, col, select

from ..models import AccountModel, NotificationModel, TransactionModel, UserModel
from ..models.types import Cents


class BankRepository:
    """Thin data access layer around the SQLModel session.

    Nothing here commits; the calling service owns the unit of work.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    # Users --------------------------------------------------------------
    def add_user(self, email: str, password_hash: str) -> UserModel:
        user = UserModel(email=email, password_hash=password_hash)
        self.session.add(user)
        self.session.flush()
        self.session.refresh(user)
        return user

    def get_user_by_email(self, email: str) -> Optional[UserModel]:
        stmt = select(UserModel).where(UserModel.email == email)
        return self.session.exec(stmt).first()

    # Accounts -----------------------------------------------------------
    def add_account(self, user_id: int, account_type: str) -> AccountModel:
        account = AccountModel(user_id=user_id, account_type=account_type)
        self.session.add(account)
        self.session.flush()
        self.session.refresh(account)
        return account

    def get_account(self, account_id: int) -> Optional[AccountModel]:
        return self.session.get(AccountModel, account_id)

    def list_accounts(self, user_id: int) -> list[AccountModel]:
        stmt = (
            select(AccountModel)
            .where(AccountModel.user_id == user_id)
            .order_by(col(AccountModel.id))
        )
        return list(self.session.exec(stmt))

    def lock_accounts(self, *account_ids: int) -> dict[int, AccountModel]:
        """Row-lock the given accounts, always in ascending id order.

        Missing ids are simply absent from the result.
        """
        stmt = (
            select(AccountModel)
            .where(col(AccountModel.id).in_(sorted(set(account_ids))))
            .order_by(col(AccountModel.id))
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        return {account.id: account for account in self.session.exec(stmt)}

    def credit(self, account_id: int, amount: Decimal) -> None:
        stmt = (
            update(AccountModel)
            .where(col(AccountModel.id) == account_id)
            .values(balance=col(AccountModel.balance) + literal(amount, Cents))
        )
        self.session.exec(stmt)

    def debit(self, account_id: int, amount: Decimal) -> bool:
        """Decrement the balance only if it covers ``amount``.

        Returns False when no row was updated, i.e. the balance seen by the
        database at write time was too low.
        """
        stmt = (
            update(AccountModel)
            .where(col(AccountModel.id) == account_id)
            .where(col(AccountModel.balance) >= literal(amount, Cents))
            .values(balance=col(AccountModel.balance) - literal(amount, Cents))
        )
        result = self.session.exec(stmt)
        return result.rowcount == 1

    # Transactions -------------------------------------------------------
    def add_transaction(
        self,
        *,
        account_id: int,
        entry_type: str,
        amount: Decimal,
        description: Optional[str],
        to_account_id: Optional[int] = None,
    ) -> TransactionModel:
        transaction = TransactionModel(
            account_id=account_id,
            type=entry_type,
            amount=amount,
            to_account_id=to_account_id,
            description=description,
        )
        self.session.add(transaction)
        self.session.flush()
        self.session.refresh(transaction)
        return transaction

    def iter_transactions(self, account_id: int, limit: int) -> Iterator[TransactionModel]:
        # Newest first; rows sharing a timestamp fall back to insertion order.
        stmt = (
            select(TransactionModel)
            .where(TransactionModel.account_id == account_id)
            .order_by(col(TransactionModel.timestamp).desc(), col(TransactionModel.id).desc())
            .limit(limit)
        )
        yield from self.session.exec(stmt)

    # Notifications ------------------------------------------------------
    def add_notification(self, user_id: int, message: str, kind: str) -> NotificationModel:
        notification = NotificationModel(user_id=user_id, message=message, type=kind)
        self.session.add(notification)
        self.session.flush()
        self.session.refresh(notification)
        return notification

    def get_notification(self, notification_id: int) -> Optional[NotificationModel]:
        return self.session.get(NotificationModel, notification_id)

    def list_notifications(self, user_id: int, limit: int) -> list[NotificationModel]:
        stmt = (
            select(NotificationModel)
            .where(NotificationModel.user_id == user_id)
            .order_by(col(NotificationModel.created_at).desc(), col(NotificationModel.id).desc())
            .limit(limit)
        )
        return list(self.session.exec(stmt))
