from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..auth.permissions import AccessPolicy
from ..common.datetime_utils import days_in_month, format_iso_date
from ..core.enums import AttendanceStatus, NotificationType
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..notifications.service import NotificationService
from .repository import AttendanceRepository
from .transitions import Transition, resolve_transition

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SheetRow:
    employee: Employee
    editable: bool
    statuses: dict[str, Optional[str]]


@dataclass(frozen=True)
class MonthSheet:
    year: int
    month: int
    days: list[str]
    rows: list[SheetRow]
    companies: list[str]
    read_only: bool


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        policy: AccessPolicy,
        notifications: NotificationService,
    ):
        self._attendance = attendance
        self._employees = employees
        self._policy = policy
        self._notifications = notifications

    def status_for(self, employee_id: str, day: date) -> Optional[AttendanceStatus]:
        record = self._attendance.get(employee_id, day)
        return record.status if record else None

    def toggle_status(self, employee_id: str, day: date, requested: AttendanceStatus) -> Optional[Transition]:
        """Apply a present/absent click. Returns None when the write is refused."""

        if not self._policy.can_edit:
            logger.info("Refused attendance write for %s: no edit permission", employee_id)
            return None

        employee = self._employees.get_by_id(employee_id)
        if employee is None or not self._policy.can_view_company(employee.company):
            logger.info("Refused attendance write for unknown or hidden employee %s", employee_id)
            return None
        if employee.is_resigned:
            logger.info("Refused attendance write for resigned employee %s", employee_id)
            return None

        transition = resolve_transition(self.status_for(employee_id, day), requested)
        self._attendance.save(employee_id, day, transition.new)

        if transition.raises_absence:
            self._notifications.add(
                "Absence alert",
                f"Employee {employee.name} was marked absent on {format_iso_date(day)}.",
                NotificationType.ALERT,
            )
        return transition

    def month_sheet(self, year: int, month: int, *, search: str = "", company: str = "") -> MonthSheet:
        days = days_in_month(year, month)
        employees = self._policy.visible(self._employees.list_all())
        companies = sorted({e.company for e in employees})
        can_edit = self._policy.can_edit

        term = (search or "").strip()
        if term:
            employees = [e for e in employees if term in e.name or term in e.ref_id]
        if company:
            employees = [e for e in employees if e.company == company]

        wanted = {e.id for e in employees}
        by_key: dict[tuple[str, date], AttendanceStatus] = {}
        for r in self._attendance.list_all():
            if r.employee_id in wanted and days[0] <= r.date <= days[-1]:
                by_key[(r.employee_id, r.date)] = r.status

        rows = []
        for e in employees:
            statuses = {}
            for d in days:
                status = by_key.get((e.id, d))
                statuses[format_iso_date(d)] = status.value if status else None
            rows.append(SheetRow(employee=e, editable=can_edit and not e.is_resigned, statuses=statuses))

        return MonthSheet(
            year=year,
            month=month,
            days=[format_iso_date(d) for d in days],
            rows=rows,
            companies=companies,
            read_only=not can_edit,
        )
