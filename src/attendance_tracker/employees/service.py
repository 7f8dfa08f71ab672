from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional, Sequence

from ..auth.permissions import AccessPolicy
from ..common.ids import generate_id
from ..common.validators import require_non_empty
from ..core.enums import EmployeeStatus
from ..core.exceptions import ValidationError
from .model import Employee
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)


class EmployeeService:
    """Use case: maintain the employee list within the actor's companies.

    Mutations without edit capability are refused silently (return None/False);
    the UI is expected to have disabled them already.
    """

    def __init__(self, employees: EmployeeRepository, policy: AccessPolicy):
        self._employees = employees
        self._policy = policy

    def list_visible(self, search: str = "") -> Sequence[Employee]:
        employees = self._policy.visible(self._employees.list_all())
        term = (search or "").strip()
        if not term:
            return employees
        return [
            e
            for e in employees
            if term in e.name or term in e.ref_id or term in e.company or term in e.phone
        ]

    def get_visible(self, employee_id: str) -> Optional[Employee]:
        employee = self._employees.get_by_id(employee_id)
        if employee is None or not self._policy.can_view_company(employee.company):
            return None
        return employee

    def save_employee(
        self,
        *,
        name: str,
        ref_id: str,
        company: str,
        phone: str = "",
        employee_id: Optional[str] = None,
    ) -> Optional[Employee]:
        if not self._policy.can_edit:
            logger.info("Refused employee save: no edit permission")
            return None

        name = require_non_empty(name, "Name")
        ref_id = require_non_empty(ref_id, "Reference ID")
        company = require_non_empty(company, "Company")
        phone = (phone or "").strip()

        if not self._policy.can_view_company(company):
            raise ValidationError(f'You are not allowed to manage employees of company "{company}"')

        if employee_id:
            existing = self.get_visible(employee_id)
            if existing is None:
                raise ValidationError("Employee does not exist")
            employee = replace(existing, name=name, ref_id=ref_id, phone=phone, company=company)
        else:
            employee = Employee(
                id=generate_id(),
                name=name,
                ref_id=ref_id,
                phone=phone,
                company=company,
                status=EmployeeStatus.ACTIVE,
            )
        return self._employees.save(employee)

    def set_status(self, employee_id: str, status: EmployeeStatus) -> Optional[Employee]:
        """Resign or re-activate. Resigned employees accept no new attendance."""

        if not self._policy.can_edit:
            logger.info("Refused status change for %s: no edit permission", employee_id)
            return None
        employee = self.get_visible(employee_id)
        if employee is None:
            raise ValidationError("Employee does not exist")
        return self._employees.save(replace(employee, status=EmployeeStatus(status)))

    def delete_employee(self, employee_id: str) -> bool:
        if not self._policy.can_edit:
            logger.info("Refused delete of %s: no edit permission", employee_id)
            return False
        if self.get_visible(employee_id) is None:
            return False
        return self._employees.delete(employee_id)
