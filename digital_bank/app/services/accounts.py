from __future__ import annotations

import logging
from typing import Optional

from sqlmodel import Session

from ..core.errors import AccountNotFoundError, InvalidAccountTypeError, UnauthorizedError
from ..models import AccountModel
from .repository import BankRepository


logger = logging.getLogger(__name__)

ACCOUNT_TYPES = ("checking", "savings")


def require_owned_account(
    account: Optional[AccountModel],
    account_id: int,
    user_id: int,
) -> AccountModel:
    """Tell "does not exist" apart from "belongs to someone else"."""
    if account is None:
        raise AccountNotFoundError(f"Account {account_id} not found")
    if account.user_id != user_id:
        raise UnauthorizedError("Unauthorized")
    return account


class AccountService:
    def __init__(
        self,
        session: Session,
        repository: Optional[BankRepository] = None,
    ) -> None:
        self.session = session
        self.repository = repository or BankRepository(session)

    def create_account(self, user_id: int, account_type: str = "checking") -> AccountModel:
        if account_type not in ACCOUNT_TYPES:
            raise InvalidAccountTypeError("Invalid account type")

        account = self.repository.add_account(user_id, account_type)
        self.session.commit()
        self.session.refresh(account)
        logger.info(
            "account.created",
            extra={"account_id": account.id, "user_id": user_id, "account_type": account_type},
        )
        return account

    def list_accounts(self, user_id: int) -> list[AccountModel]:
        return self.repository.list_accounts(user_id)

    def get_account(self, account_id: int, user_id: int) -> AccountModel:
        return require_owned_account(self.repository.get_account(account_id), account_id, user_id)
