from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from .database.connection import DBConfig, DatabaseConnection
from .leaves.mysql_leave_repository import MySQLLeaveRepository
from .leaves.service import LeaveService
from .vacation.engine import VacationRuleEngine
from .vacation.policy import VacationPolicy


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    leaves_repo: MySQLLeaveRepository

    vacation_engine: VacationRuleEngine
    leave_service: LeaveService


def build_container(*, db_config: dict, vacation_policy: Optional[Mapping[str, Any]] = None) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))

    leaves_repo = MySQLLeaveRepository(conn)
    vacation_engine = VacationRuleEngine(VacationPolicy.from_mapping(vacation_policy))
    leave_service = LeaveService(leaves_repo, engine=vacation_engine)

    return Container(
        conn=conn,
        leaves_repo=leaves_repo,
        vacation_engine=vacation_engine,
        leave_service=leave_service,
    )
