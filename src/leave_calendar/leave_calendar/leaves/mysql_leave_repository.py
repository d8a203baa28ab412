from __future__ import annotations

from contextlib import contextmanager
from datetime import date
from typing import Any, Dict, Iterator, Optional, Sequence

from ..core.constants import DEFAULT_LIST_LIMIT, EMPLOYEE_LOCK_TIMEOUT_SECONDS
from ..core.enums import ApprovalStatus, LeaveType
from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Leave
from .repository import LeaveRepository

LEAVES_SCHEMA = """
CREATE TABLE IF NOT EXISTS leaves (
    leave_id INT AUTO_INCREMENT PRIMARY KEY,
    employee_id VARCHAR(64) NOT NULL,
    employee_name VARCHAR(255) NOT NULL,
    type VARCHAR(32) NOT NULL,
    start_date DATE NOT NULL,
    end_date DATE NOT NULL,
    days_off INT NOT NULL,
    acquisitive_period_start DATE NULL,
    acquisitive_period_end DATE NULL,
    notes TEXT NULL,
    approval_status VARCHAR(16) NOT NULL,
    created_by VARCHAR(64) NULL,
    created_at DATETIME NOT NULL DEFAULT CURRENT_TIMESTAMP,
    decided_by VARCHAR(64) NULL,
    decided_at DATETIME NULL,
    decision_note TEXT NULL,
    INDEX idx_leaves_employee (employee_id),
    INDEX idx_leaves_status (approval_status)
) CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci
"""

_COLUMNS = """
    leave_id, employee_id, employee_name, type, start_date, end_date, days_off,
    acquisitive_period_start, acquisitive_period_end, notes, approval_status,
    created_by, created_at, decided_by, decided_at, decision_note
"""


def _iso(value: Any) -> Optional[str]:
    # DATE columns come back as datetime.date
    if value is None:
        return None
    if isinstance(value, date):
        return value.strftime("%Y-%m-%d")
    return str(value)


def _row_to_leave(r: Dict[str, Any]) -> Leave:
    return Leave(
        leave_id=int(r["leave_id"]),
        employee_id=str(r["employee_id"]),
        employee_name=r["employee_name"],
        type=LeaveType(r["type"]),
        start_date=r["start_date"],
        end_date=r["end_date"],
        days_off=int(r["days_off"]),
        approval_status=ApprovalStatus(r["approval_status"]),
        created_at=r["created_at"],
        acquisitive_period_start=_iso(r.get("acquisitive_period_start")),
        acquisitive_period_end=_iso(r.get("acquisitive_period_end")),
        notes=r.get("notes"),
        created_by=r.get("created_by"),
        decided_by=r.get("decided_by"),
        decided_at=r.get("decided_at"),
        decision_note=r.get("decision_note"),
    )


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def ensure_schema(self) -> None:
        with db_cursor(self._conn_factory, dictionary=False) as (_, cur):
            cur.execute(LEAVES_SCHEMA)

    def list_for_employee(self, employee_id: str) -> Sequence[Leave]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM leaves WHERE employee_id=%s ORDER BY start_date DESC",
                (str(employee_id),),
            )
            return [_row_to_leave(r) for r in fetchall(cur)]

    def get(self, *, leave_id: int) -> Optional[Leave]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM leaves WHERE leave_id=%s", (int(leave_id),))
            r = fetchone(cur)
            return _row_to_leave(r) if r else None

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leaves(
                    employee_id, employee_name, type, start_date, end_date, days_off,
                    acquisitive_period_start, acquisitive_period_end, notes,
                    approval_status, created_by
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    str(employee_id),
                    employee_name,
                    type.value,
                    start_date,
                    end_date,
                    int(days_off),
                    acquisitive_period_start,
                    acquisitive_period_end,
                    notes,
                    ApprovalStatus.PENDING.value,
                    created_by,
                ),
            )
            return int(cur.lastrowid)

    @contextmanager
    def employee_lock(self, employee_id: str) -> Iterator[None]:
        # named lock on its own connection; reads and inserts commit independently while it is held
        name = f"leaves:{employee_id}"[:64]
        conn = self._conn_factory.connect()
        try:
            cur = conn.cursor()
            try:
                cur.execute("SELECT GET_LOCK(%s, %s)", (name, EMPLOYEE_LOCK_TIMEOUT_SECONDS))
                (acquired,) = cur.fetchone()
                if acquired != 1:
                    raise ConflictError("Outra solicitação deste colaborador está em processamento. Tente novamente.")
                try:
                    yield
                finally:
                    cur.execute("SELECT RELEASE_LOCK(%s)", (name,))
                    cur.fetchone()
            finally:
                cur.close()
        finally:
            conn.close()

    def list_by_status(self, *, status: ApprovalStatus, limit: int = DEFAULT_LIST_LIMIT) -> Sequence[Leave]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM leaves
                WHERE approval_status=%s
                ORDER BY created_at ASC
                LIMIT %s
                """,
                (status.value, int(limit)),
            )
            return [_row_to_leave(r) for r in fetchall(cur)]

    def decide(
        self,
        *,
        leave_id: int,
        status: ApprovalStatus,
        decided_by: str,
        decision_note: Optional[str] = None,
        expected: Sequence[ApprovalStatus] = (ApprovalStatus.PENDING,),
    ) -> bool:
        placeholders = ",".join(["%s"] * len(expected))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                UPDATE leaves
                SET approval_status=%s, decided_by=%s, decided_at=NOW(), decision_note=%s
                WHERE leave_id=%s AND approval_status IN ({placeholders})
                """,
                (status.value, decided_by, decision_note, int(leave_id), *[s.value for s in expected]),
            )
            return cur.rowcount > 0
