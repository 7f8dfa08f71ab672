from __future__ import annotations

from typing import Optional, Sequence

from ..attendance.repository import AttendanceRepository
from ..core.constants import KEY_EMPLOYEES
from ..storage.collection import JsonCollection
from ..storage.store import KeyValueStore
from .model import Employee
from .repository import EmployeeRepository


class StoreEmployeeRepository(EmployeeRepository):
    def __init__(self, store: KeyValueStore, attendance: AttendanceRepository):
        self._employees = JsonCollection(store, KEY_EMPLOYEES)
        self._attendance = attendance

    def list_all(self) -> Sequence[Employee]:
        return [Employee.from_dict(r) for r in self._employees.load() if r.get("id")]

    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        for employee in self.list_all():
            if employee.id == employee_id:
                return employee
        return None

    def save(self, employee: Employee) -> Employee:
        rows = [e.to_dict() for e in self.list_all()]
        for i, row in enumerate(rows):
            if row["id"] == employee.id:
                rows[i] = employee.to_dict()
                break
        else:
            rows.append(employee.to_dict())
        self._employees.save(rows)
        return employee

    def delete(self, employee_id: str) -> bool:
        employees = self.list_all()
        kept = [e.to_dict() for e in employees if e.id != employee_id]
        removed = len(kept) != len(employees)
        if removed:
            self._employees.save(kept)
        # No orphans: always clean up attendance, even for an already-missing employee.
        self._attendance.delete_for_employee(employee_id)
        return removed
