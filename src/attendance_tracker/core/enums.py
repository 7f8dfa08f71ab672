from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for authorization."""

    ADMIN = "admin"
    USER = "user"


class AttendanceStatus(str, Enum):
    """Stored attendance status. "Unset" is the absence of a record."""

    PRESENT = "present"
    ABSENT = "absent"


class EmployeeStatus(str, Enum):
    ACTIVE = "active"
    RESIGNED = "resigned"


class NotificationType(str, Enum):
    INFO = "info"
    WARNING = "warning"
    ALERT = "alert"
