from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from ..attendance.repository import AttendanceRepository
from ..auth.permissions import AccessPolicy
from ..common.datetime_utils import format_iso_date
from ..core.enums import AttendanceStatus
from ..employees.repository import EmployeeRepository


@dataclass(frozen=True)
class ReportData:
    title: str
    individual: bool
    start: Optional[str]
    end: Optional[str]
    entries: list[dict] = field(default_factory=list)
    totals: dict = field(default_factory=dict)


class AttendanceReportService:
    """Builds the printable per-employee attendance report."""

    def __init__(self, attendance: AttendanceRepository, employees: EmployeeRepository, policy: AccessPolicy):
        self._attendance = attendance
        self._employees = employees
        self._policy = policy

    def companies(self) -> list[str]:
        return sorted({e.company for e in self._policy.visible(self._employees.list_all())})

    def build(
        self,
        *,
        company: str = "",
        employee_id: str = "",
        name_search: str = "",
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> ReportData:
        employees = self._policy.visible(self._employees.list_all())
        if company:
            employees = [e for e in employees if e.company == company]
        if employee_id:
            employees = [e for e in employees if e.id == employee_id]
        if name_search:
            employees = [e for e in employees if name_search in e.name]

        wanted = {e.id for e in employees}
        records_by_employee: dict[str, list] = {e.id: [] for e in employees}
        for r in self._attendance.list_all():
            if r.employee_id not in wanted:
                continue
            if start and r.date < start:
                continue
            if end and r.date > end:
                continue
            records_by_employee[r.employee_id].append(r)

        entries: list[dict] = []
        total_present = 0
        total_absent = 0
        for e in employees:
            records = sorted(records_by_employee[e.id], key=lambda r: r.date)
            present = sum(1 for r in records if r.status == AttendanceStatus.PRESENT)
            absent = len(records) - present
            total_present += present
            total_absent += absent
            entries.append(
                {
                    "employee_id": e.id,
                    "name": e.name,
                    "ref_id": e.ref_id,
                    "company": e.company,
                    "resigned": e.is_resigned,
                    "present": present,
                    "absent": absent,
                    "records": [
                        {
                            "date": format_iso_date(r.date),
                            "label": r.date.strftime("%d/%m"),
                            "status": r.status.value,
                        }
                        for r in records
                    ],
                }
            )

        title = f"Company: {company}" if company else "All companies"
        return ReportData(
            title=title,
            individual=bool(employee_id),
            start=format_iso_date(start) if start else None,
            end=format_iso_date(end) if end else None,
            entries=entries,
            totals={"employees": len(entries), "present": total_present, "absent": total_absent},
        )
