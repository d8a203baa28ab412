from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import ApprovalStatus, LeaveType


@dataclass(frozen=True)
class LeaveRecord:
    """The part of a leave the vacation rules look at."""

    employee_id: str
    type: LeaveType
    acquisitive_period_start: Optional[str]
    days_off: int


@dataclass(frozen=True)
class Leave:
    """Entidade de domínio: afastamento de um colaborador."""

    leave_id: int
    employee_id: str
    employee_name: str
    type: LeaveType
    start_date: date
    end_date: date
    days_off: int
    approval_status: ApprovalStatus
    created_at: datetime
    acquisitive_period_start: Optional[str] = None
    acquisitive_period_end: Optional[str] = None
    notes: Optional[str] = None
    created_by: Optional[str] = None
    decided_by: Optional[str] = None
    decided_at: Optional[datetime] = None
    decision_note: Optional[str] = None

    def as_record(self) -> LeaveRecord:
        return LeaveRecord(
            employee_id=self.employee_id,
            type=self.type,
            acquisitive_period_start=self.acquisitive_period_start,
            days_off=self.days_off,
        )
