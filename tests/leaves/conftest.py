from __future__ import annotations

import threading
from collections import defaultdict
from contextlib import contextmanager
from datetime import date, datetime

import pytest

from src.leave_calendar.leave_calendar.core.enums import ApprovalStatus, LeaveType
from src.leave_calendar.leave_calendar.leaves.model import Leave


class FakeLeavesRepo:
    def __init__(self):
        self._next_id = 1
        self._leaves: dict[int, Leave] = {}
        self._guard = threading.Lock()
        self._employee_locks: defaultdict[str, threading.Lock] = defaultdict(threading.Lock)

    def add(self, **kwargs) -> int:
        leave_id = self._next_id
        self._next_id += 1
        defaults = {
            "leave_id": leave_id,
            "employee_id": "emp1",
            "employee_name": "Ana",
            "type": LeaveType.VACATION,
            "start_date": date(2024, 5, 1),
            "end_date": date(2024, 5, 10),
            "days_off": 10,
            "approval_status": ApprovalStatus.APPROVED,
            "created_at": datetime(2024, 4, 1, 9, 0),
            "acquisitive_period_start": "2024-01-01",
            "acquisitive_period_end": "2024-12-31",
        }
        defaults.update(kwargs)
        self._leaves[leave_id] = Leave(**defaults)
        return leave_id

    def list_for_employee(self, employee_id):
        return [leave for leave in self._leaves.values() if leave.employee_id == employee_id]

    def get(self, *, leave_id):
        return self._leaves.get(int(leave_id))

    def create(self, **kwargs):
        return self.add(approval_status=ApprovalStatus.PENDING, **kwargs)

    @contextmanager
    def employee_lock(self, employee_id):
        with self._guard:
            lock = self._employee_locks[employee_id]
        with lock:
            yield

    def list_by_status(self, *, status, limit=200):
        return [leave for leave in self._leaves.values() if leave.approval_status == status][:limit]

    def decide(self, *, leave_id, status, decided_by, decision_note=None, expected=(ApprovalStatus.PENDING,)):
        leave = self._leaves.get(int(leave_id))
        if not leave or leave.approval_status not in expected:
            return False
        self._leaves[int(leave_id)] = Leave(
            **{
                **leave.__dict__,
                "approval_status": status,
                "decided_by": decided_by,
                "decided_at": datetime(2024, 4, 2, 9, 0),
                "decision_note": decision_note,
            }
        )
        return True


@pytest.fixture
def repo() -> FakeLeavesRepo:
    return FakeLeavesRepo()
