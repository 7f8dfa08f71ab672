from __future__ import annotations

import logging
from dataclasses import replace
from typing import Sequence

from ..common.datetime_utils import now_millis
from ..common.ids import generate_id
from ..core.enums import NotificationType
from .model import Notification
from .repository import NotificationRepository

logger = logging.getLogger(__name__)


class NotificationService:
    """Append-only local event feed, newest first."""

    def __init__(self, notifications: NotificationRepository):
        self._notifications = notifications

    def list_all(self) -> Sequence[Notification]:
        return self._notifications.list_all()

    def unread_count(self) -> int:
        return sum(1 for n in self._notifications.list_all() if not n.is_read)

    def add(self, title: str, message: str, type: NotificationType = NotificationType.INFO) -> Notification:
        notification = Notification(
            id=generate_id(),
            title=title,
            message=message,
            type=NotificationType(type),
            is_read=False,
            timestamp=now_millis(),
        )
        self._notifications.save_all([notification, *self._notifications.list_all()])
        logger.debug("Notification added: %s", title)
        return notification

    def mark_as_read(self, notification_id: str) -> bool:
        found = False
        out: list[Notification] = []
        for n in self._notifications.list_all():
            if n.id == notification_id:
                found = True
                n = replace(n, is_read=True)
            out.append(n)
        if found:
            self._notifications.save_all(out)
        return found

    def mark_all_as_read(self) -> None:
        self._notifications.save_all([replace(n, is_read=True) for n in self._notifications.list_all()])

    def clear(self) -> None:
        self._notifications.save_all([])
