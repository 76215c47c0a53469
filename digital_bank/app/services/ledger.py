from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from decimal import Decimal, InvalidOperation
from typing import Optional, Union

from sqlmodel import Session

from ..core.errors import (
    BankError,
    DestinationAccountNotFoundError,
    InsufficientFundsError,
    InvalidAmountError,
    SameAccountTransferError,
    SourceAccountNotFoundError,
    ValidationError,
)
from ..models import AccountModel, TransactionModel
from ..models.types import CENT, MAX_AMOUNT
from .accounts import require_owned_account
from .notifications import NotificationService, NotificationSink
from .repository import BankRepository


logger = logging.getLogger(__name__)

Amount = Union[Decimal, int, str]


class LedgerService:
    """Balance-changing operations and the transaction audit trail.

    Each mutation runs as one unit of work on ``session``: accounts are row
    locked, balances adjusted, and a transaction row inserted, then committed
    together or rolled back together. The owner is notified only after commit.
    """

    def __init__(
        self,
        session: Session,
        repository: Optional[BankRepository] = None,
        notifier: Optional[NotificationSink] = None,
    ) -> None:
        self.session = session
        self.repository = repository or BankRepository(session)
        self.notifier = notifier or NotificationService(session, self.repository)

    # ------------------------------------------------------------------
    # Helper utilities
    # ------------------------------------------------------------------
    @staticmethod
    def _validate_amount(amount: Amount) -> Decimal:
        try:
            value = amount if isinstance(amount, Decimal) else Decimal(str(amount))
        except InvalidOperation as exc:
            raise InvalidAmountError("Amount must be a number") from exc
        if not value.is_finite() or value <= 0:
            raise InvalidAmountError("Amount must be greater than 0")
        if value >= MAX_AMOUNT:
            raise InvalidAmountError("Amount is too large")
        if value != value.quantize(CENT):
            raise InvalidAmountError("Amount must have at most 2 decimal places")
        return value.quantize(CENT)

    @contextmanager
    def _unit_of_work(self, operation: str) -> Iterator[None]:
        try:
            yield
            self.session.commit()
        except BankError as exc:
            self.session.rollback()
            logger.info(
                "ledger.rejected",
                extra={"operation": operation, "reason": type(exc).__name__},
            )
            raise
        except Exception:
            self.session.rollback()
            logger.exception("ledger.failed", extra={"operation": operation})
            raise

    def _lock_owned(self, account_id: int, user_id: int) -> AccountModel:
        locked = self.repository.lock_accounts(account_id)
        return require_owned_account(locked.get(account_id), account_id, user_id)

    def _debit(self, account: AccountModel, amount: Decimal, message: str) -> None:
        if account.balance < amount:
            raise InsufficientFundsError(message)
        # A concurrent writer may have moved the balance since it was read.
        if not self.repository.debit(account.id, amount):
            raise InsufficientFundsError(message)

    def _notify(self, user_id: int, message: str) -> None:
        try:
            self.notifier.notify(user_id, message, "transaction")
        except Exception:
            logger.exception("ledger.notification_failed", extra={"user_id": user_id})

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def deposit(
        self,
        account_id: int,
        user_id: int,
        amount: Amount,
        description: Optional[str] = None,
    ) -> TransactionModel:
        value = self._validate_amount(amount)

        with self._unit_of_work("deposit"):
            self._lock_owned(account_id, user_id)
            self.repository.credit(account_id, value)
            transaction = self.repository.add_transaction(
                account_id=account_id,
                entry_type="deposit",
                amount=value,
                description=description or "Deposit",
            )

        self.session.refresh(transaction)
        logger.info(
            "ledger.deposit",
            extra={"account_id": account_id, "amount": str(value), "transaction_id": transaction.id},
        )
        self._notify(user_id, f"Deposit of ${value:.2f} completed successfully")
        return transaction

    def withdraw(
        self,
        account_id: int,
        user_id: int,
        amount: Amount,
        description: Optional[str] = None,
    ) -> TransactionModel:
        value = self._validate_amount(amount)

        with self._unit_of_work("withdraw"):
            account = self._lock_owned(account_id, user_id)
            self._debit(account, value, "Insufficient funds")
            transaction = self.repository.add_transaction(
                account_id=account_id,
                entry_type="withdrawal",
                amount=value,
                description=description or "Withdrawal",
            )

        self.session.refresh(transaction)
        logger.info(
            "ledger.withdraw",
            extra={"account_id": account_id, "amount": str(value), "transaction_id": transaction.id},
        )
        self._notify(user_id, f"Withdrawal of ${value:.2f} completed successfully")
        return transaction

    def transfer(
        self,
        from_account_id: int,
        to_account_id: int,
        user_id: int,
        amount: Amount,
        description: Optional[str] = None,
    ) -> TransactionModel:
        value = self._validate_amount(amount)
        if from_account_id == to_account_id:
            raise SameAccountTransferError("Cannot transfer to the same account")

        with self._unit_of_work("transfer"):
            locked = self.repository.lock_accounts(from_account_id, to_account_id)
            source = locked.get(from_account_id)
            if source is None:
                raise SourceAccountNotFoundError("Source account not found")
            require_owned_account(source, from_account_id, user_id)
            if to_account_id not in locked:
                raise DestinationAccountNotFoundError("Destination account not found")

            self._debit(source, value, "Insufficient funds")
            self.repository.credit(to_account_id, value)
            # Single row against the source; the destination only sees a balance change.
            transaction = self.repository.add_transaction(
                account_id=from_account_id,
                entry_type="transfer",
                amount=value,
                to_account_id=to_account_id,
                description=description or "Transfer",
            )

        self.session.refresh(transaction)
        logger.info(
            "ledger.transfer",
            extra={
                "from_account_id": from_account_id,
                "to_account_id": to_account_id,
                "amount": str(value),
                "transaction_id": transaction.id,
            },
        )
        self._notify(
            user_id,
            f"Transfer of ${value:.2f} to account {to_account_id} completed successfully",
        )
        return transaction

    def get_history(
        self,
        account_id: int,
        user_id: int,
        limit: int = 50,
    ) -> Iterator[TransactionModel]:
        """Return a single-pass iterator over the newest ``limit`` transactions.

        Ownership is checked before this returns, not on first iteration.
        """
        if limit < 1:
            raise ValidationError("Limit must be at least 1")
        require_owned_account(self.repository.get_account(account_id), account_id, user_id)
        return self.repository.iter_transactions(account_id, limit)
