from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any

from ..common.datetime_utils import format_iso_date, parse_iso_date
from ..core.enums import AttendanceStatus


def record_id(employee_id: str, day: date) -> str:
    return f"{employee_id}_{format_iso_date(day)}"


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: attendance for one employee on one calendar day.

    At most one record exists per (employee_id, date); no record means unset.
    """

    employee_id: str
    date: date
    status: AttendanceStatus

    @property
    def id(self) -> str:
        return record_id(self.employee_id, self.date)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AttendanceRecord":
        return cls(
            employee_id=str(data["employeeId"]),
            date=parse_iso_date(str(data["date"])[:10]),
            status=AttendanceStatus(data["status"]),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "employeeId": self.employee_id,
            "date": format_iso_date(self.date),
            "status": self.status.value,
        }
