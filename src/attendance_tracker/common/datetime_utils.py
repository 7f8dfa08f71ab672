from __future__ import annotations

import calendar
import time
from datetime import date, datetime


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def format_iso_date(value: date) -> str:
    return value.strftime("%Y-%m-%d")


def today_local() -> date:
    """Current local calendar day.

    Note: Wrapped so tests can patch/mock easier.
    """
    return date.today()


def now_millis() -> int:
    return int(time.time() * 1000)


def days_in_month(year: int, month: int) -> list[date]:
    _, last = calendar.monthrange(year, month)
    return [date(year, month, d) for d in range(1, last + 1)]
