from __future__ import annotations

from typing import Protocol, Sequence

from .model import Notification


class NotificationRepository(Protocol):
    def list_all(self) -> Sequence[Notification]:
        """Newest first."""

        raise NotImplementedError

    def save_all(self, notifications: Sequence[Notification]) -> None:
        raise NotImplementedError
