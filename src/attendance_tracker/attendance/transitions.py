from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class Transition:
    """Per-day state change; `None` stands for unset."""

    previous: Optional[AttendanceStatus]
    new: Optional[AttendanceStatus]

    @property
    def raises_absence(self) -> bool:
        return self.new == AttendanceStatus.ABSENT and self.previous != AttendanceStatus.ABSENT


def resolve_transition(current: Optional[AttendanceStatus], requested: AttendanceStatus) -> Transition:
    """Requesting the held status toggles it off; anything else overwrites."""

    requested = AttendanceStatus(requested)
    if current == requested:
        return Transition(previous=current, new=None)
    return Transition(previous=current, new=requested)
