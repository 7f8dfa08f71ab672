from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..core.enums import NotificationType


@dataclass(frozen=True)
class Notification:
    """Feed entry. Only `is_read` ever changes after creation."""

    id: str
    title: str
    message: str
    type: NotificationType
    is_read: bool
    timestamp: int  # epoch milliseconds

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Notification":
        try:
            ntype = NotificationType(data.get("type") or NotificationType.INFO.value)
        except (ValueError, TypeError):
            ntype = NotificationType.INFO
        return cls(
            id=str(data["id"]),
            title=str(data.get("title", "")),
            message=str(data.get("message", "")),
            type=ntype,
            is_read=bool(data.get("isRead", False)),
            timestamp=int(data.get("timestamp") or 0),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "message": self.message,
            "type": self.type.value,
            "isRead": self.is_read,
            "timestamp": self.timestamp,
        }
