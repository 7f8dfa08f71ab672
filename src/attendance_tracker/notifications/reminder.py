from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..attendance.repository import AttendanceRepository
from ..auth.permissions import AccessPolicy
from ..common.datetime_utils import format_iso_date, today_local
from ..core.constants import DEFAULT_REMINDER_THRESHOLD, REMINDER_MARKER_PREFIX
from ..core.enums import NotificationType
from ..employees.repository import EmployeeRepository
from ..storage.store import KeyValueStore
from .model import Notification
from .service import NotificationService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReminderPolicy:
    enabled: bool = True
    # Remind while fewer than this fraction of visible employees are recorded today.
    threshold: float = DEFAULT_REMINDER_THRESHOLD


def marker_key(day: date) -> str:
    return f"{REMINDER_MARKER_PREFIX}{format_iso_date(day)}"


class DailyReminder:
    """Once-per-day "please record today's attendance" reminder."""

    def __init__(
        self,
        store: KeyValueStore,
        employees: EmployeeRepository,
        attendance: AttendanceRepository,
        notifications: NotificationService,
        policy: AccessPolicy,
        *,
        reminder_policy: Optional[ReminderPolicy] = None,
    ):
        self._store = store
        self._employees = employees
        self._attendance = attendance
        self._notifications = notifications
        self._policy = policy
        self._reminder_policy = reminder_policy or ReminderPolicy()

    def run(self, today: Optional[date] = None) -> Optional[Notification]:
        if not self._reminder_policy.enabled or not self._policy.is_authenticated:
            return None

        today = today or today_local()
        key = marker_key(today)
        if self._store.get(key):
            return None

        all_employees = self._employees.list_all()
        if not all_employees:
            return None

        visible = self._policy.visible(all_employees)
        visible_ids = {e.id for e in visible}
        recorded = {r.employee_id for r in self._attendance.list_for_date(today) if r.employee_id in visible_ids}
        if len(recorded) >= len(visible) * self._reminder_policy.threshold:
            return None

        day = format_iso_date(today)
        notification = self._notifications.add(
            "Attendance reminder",
            f"Attendance for today ({day}) has not been recorded for most employees. Please update the records.",
            NotificationType.INFO,
        )
        self._store.set(key, "true")
        logger.info("Daily reminder emitted for %s (%d/%d recorded)", day, len(recorded), len(visible))
        return notification
