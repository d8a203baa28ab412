from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..common.datetime_utils import get_leave_status
from ..core.enums import LeaveStatus, LeaveType
from .model import Leave


@dataclass(frozen=True)
class LeaveFilter:
    """Listing filters: name search, type, calendar status and date range.

    `None` means "all". The date range matches any leave overlapping
    [date_from, date_to]; a missing `date_to` collapses it to one day.
    """

    search: Optional[str] = None
    type: Optional[LeaveType] = None
    status: Optional[LeaveStatus] = None
    date_from: Optional[date] = None
    date_to: Optional[date] = None

    def matches(self, leave: Leave, *, today: Optional[date] = None) -> bool:
        if self.search and self.search.strip().lower() not in leave.employee_name.lower():
            return False
        if self.type is not None and leave.type != self.type:
            return False
        if self.status is not None and get_leave_status(leave.start_date, leave.end_date, today=today) != self.status:
            return False
        if self.date_from is not None:
            range_end = self.date_to or self.date_from
            if leave.start_date > range_end or leave.end_date < self.date_from:
                return False
        return True
