from __future__ import annotations

import logging
from typing import Sequence

from ..core.constants import KEY_NOTIFICATIONS
from ..storage.collection import JsonCollection
from ..storage.store import KeyValueStore
from .model import Notification
from .repository import NotificationRepository

logger = logging.getLogger(__name__)


class StoreNotificationRepository(NotificationRepository):
    def __init__(self, store: KeyValueStore):
        self._notifications = JsonCollection(store, KEY_NOTIFICATIONS)

    def list_all(self) -> Sequence[Notification]:
        out: list[Notification] = []
        for row in self._notifications.load():
            if not row.get("id"):
                continue
            try:
                out.append(Notification.from_dict(row))
            except (KeyError, ValueError, TypeError):
                logger.warning("Skipping malformed notification row: %r", row)
        return out

    def save_all(self, notifications: Sequence[Notification]) -> None:
        self._notifications.save([n.to_dict() for n in notifications])
