from __future__ import annotations

from datetime import date
from typing import ContextManager, Optional, Protocol, Sequence

from ..core.enums import ApprovalStatus, LeaveType
from .model import Leave


class LeaveRepository(Protocol):
    """Storage interface for leaves.

    The service depends on this interface, never on a concrete database.
    """

    def list_for_employee(self, employee_id: str) -> Sequence[Leave]:
        raise NotImplementedError

    def get(self, *, leave_id: int) -> Optional[Leave]:
        raise NotImplementedError

    def create(
        self,
        *,
        employee_id: str,
        employee_name: str,
        type: LeaveType,
        start_date: date,
        end_date: date,
        days_off: int,
        acquisitive_period_start: Optional[str],
        acquisitive_period_end: Optional[str],
        notes: Optional[str],
        created_by: Optional[str],
    ) -> int:
        """Insert a PENDING leave and return its id."""

        raise NotImplementedError

    def employee_lock(self, employee_id: str) -> ContextManager[None]:
        """Serialize check-then-insert sequences for one employee.

        Held across `list_for_employee` and `create`, so a concurrent request
        for the same employee sees the history including this insert.
        """

        raise NotImplementedError

    def list_by_status(self, *, status: ApprovalStatus, limit: int = 200) -> Sequence[Leave]:
        raise NotImplementedError

    def decide(
        self,
        *,
        leave_id: int,
        status: ApprovalStatus,
        decided_by: str,
        decision_note: Optional[str] = None,
        expected: Sequence[ApprovalStatus] = (ApprovalStatus.PENDING,),
    ) -> bool:
        """Move a leave to `status` if it is currently in one of `expected`."""

        raise NotImplementedError
