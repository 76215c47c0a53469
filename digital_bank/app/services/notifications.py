from __future__ import annotations

import logging
from typing import Optional, Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from ..core.errors import NotificationNotFoundError
from ..models import NotificationModel
from .repository import BankRepository


logger = logging.getLogger(__name__)


class NotificationSink(Protocol):
    def notify(self, user_id: int, message: str, kind: str = "transaction") -> None: ...


class NotificationService:
    """Stores user-facing messages.

    ``notify`` is fire-and-forget: a storage failure is logged and rolled
    back, never raised to the caller.
    """

    def __init__(
        self,
        session: Session,
        repository: Optional[BankRepository] = None,
    ) -> None:
        self.session = session
        self.repository = repository or BankRepository(session)

    def notify(self, user_id: int, message: str, kind: str = "transaction") -> None:
        try:
            notification = self.repository.add_notification(user_id, message, kind)
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            logger.exception("notification.failed", extra={"user_id": user_id, "kind": kind})
            return
        logger.info(
            "notification.created",
            extra={"notification_id": notification.id, "user_id": user_id, "kind": kind},
        )

    def list_notifications(self, user_id: int, limit: int = 50) -> list[NotificationModel]:
        return self.repository.list_notifications(user_id, limit)

    def mark_as_read(self, notification_id: int, user_id: int) -> NotificationModel:
        notification = self.repository.get_notification(notification_id)
        # Someone else's notification is reported as missing.
        if notification is None or notification.user_id != user_id:
            raise NotificationNotFoundError("Notification not found")

        notification.read = True
        self.session.add(notification)
        self.session.commit()
        self.session.refresh(notification)
        return notification
