from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..core.enums import EmployeeStatus


@dataclass(frozen=True)
class Employee:
    """Domain entity: tracked employee."""

    id: str
    name: str
    ref_id: str
    phone: str
    company: str
    status: EmployeeStatus = EmployeeStatus.ACTIVE

    @property
    def is_resigned(self) -> bool:
        return self.status == EmployeeStatus.RESIGNED

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Employee":
        # Legacy records were saved before `status` existed.
        try:
            status = EmployeeStatus(data.get("status") or EmployeeStatus.ACTIVE.value)
        except (ValueError, TypeError):
            status = EmployeeStatus.ACTIVE
        return cls(
            id=str(data["id"]),
            name=str(data.get("name", "")),
            ref_id=str(data.get("refId", "")),
            phone=str(data.get("phone", "")),
            company=str(data.get("company", "")),
            status=status,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "refId": self.ref_id,
            "phone": self.phone,
            "company": self.company,
            "status": self.status.value,
        }
