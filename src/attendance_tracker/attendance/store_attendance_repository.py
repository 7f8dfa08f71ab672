from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from ..core.constants import KEY_ATTENDANCE
from ..core.enums import AttendanceStatus
from ..storage.collection import JsonCollection
from ..storage.store import KeyValueStore
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class StoreAttendanceRepository(AttendanceRepository):
    def __init__(self, store: KeyValueStore):
        self._attendance = JsonCollection(store, KEY_ATTENDANCE)

    def list_all(self) -> Sequence[AttendanceRecord]:
        out: list[AttendanceRecord] = []
        for row in self._attendance.load():
            try:
                out.append(AttendanceRecord.from_dict(row))
            except (KeyError, ValueError, TypeError):
                logger.warning("Skipping malformed attendance row: %r", row)
        return out

    def list_for_employee(self, employee_id: str) -> Sequence[AttendanceRecord]:
        return [r for r in self.list_all() if r.employee_id == employee_id]

    def list_for_date(self, day: date) -> Sequence[AttendanceRecord]:
        return [r for r in self.list_all() if r.date == day]

    def get(self, employee_id: str, day: date) -> Optional[AttendanceRecord]:
        for r in self.list_all():
            if r.employee_id == employee_id and r.date == day:
                return r
        return None

    def save(self, employee_id: str, day: date, status: Optional[AttendanceStatus]) -> Optional[AttendanceRecord]:
        records = [r for r in self.list_all() if not (r.employee_id == employee_id and r.date == day)]
        record = None
        if status is not None:
            record = AttendanceRecord(employee_id=employee_id, date=day, status=AttendanceStatus(status))
            records.append(record)
        self._attendance.save([r.to_dict() for r in records])
        return record

    def delete_for_employee(self, employee_id: str) -> int:
        records = self.list_all()
        kept = [r for r in records if r.employee_id != employee_id]
        removed = len(records) - len(kept)
        if removed:
            self._attendance.save([r.to_dict() for r in kept])
        return removed
