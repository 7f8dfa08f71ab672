from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def list_all(self) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_for_employee(self, employee_id: str) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_for_date(self, day: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def get(self, employee_id: str, day: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def save(self, employee_id: str, day: date, status: Optional[AttendanceStatus]) -> Optional[AttendanceRecord]:
        """Replace-on-write. `status=None` unsets the day."""

        raise NotImplementedError

    def delete_for_employee(self, employee_id: str) -> int:
        raise NotImplementedError
