from __future__ import annotations

import calendar
from datetime import date, datetime
from typing import Optional

from ..core.enums import LeaveStatus


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def count_calendar_days(start: date, end: date) -> int:
    """Calendar days between start and end, both endpoints included."""
    return (end - start).days + 1


def add_months(value: date, months: int) -> date:
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def get_leave_status(start: date, end: date, *, today: Optional[date] = None) -> LeaveStatus:
    today = today or now_local().date()
    if start > today:
        return LeaveStatus.PLANNED
    if end < today:
        return LeaveStatus.ENDED
    return LeaveStatus.ACTIVE
