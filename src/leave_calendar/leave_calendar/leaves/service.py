from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from ..common.datetime_utils import add_months, count_calendar_days, get_leave_status
from ..common.validators import optional_text, require_non_empty
from ..core.constants import CONCESSIVE_PERIOD_MONTHS, DEFAULT_PENDING_LIMIT
from ..core.enums import ApprovalStatus, LeaveType, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..vacation.engine import VacationRuleEngine
from ..vacation.result import ValidationResult
from .filters import LeaveFilter
from .model import Leave, LeaveRecord
from .repository import LeaveRepository

logger = logging.getLogger(__name__)

# Leaves in these states no longer consume vacation days.
_RELEASED_STATUSES = frozenset({ApprovalStatus.REJECTED, ApprovalStatus.CANCELLED})


def _check_dates(start_date: date, end_date: date) -> None:
    if end_date < start_date:
        raise ValidationError("Data de fim deve ser igual ou posterior à data de início")


def _check_acquisitive_period(
    start_date: date,
    acquisitive_period_start: Optional[date],
    acquisitive_period_end: Optional[date],
) -> None:
    if not acquisitive_period_start or not acquisitive_period_end:
        raise ValidationError("Período Aquisitivo é obrigatório para Férias")
    if acquisitive_period_end < acquisitive_period_start:
        raise ValidationError("Fim do período aquisitivo deve ser posterior ao início")
    if start_date > add_months(acquisitive_period_end, CONCESSIVE_PERIOD_MONTHS):
        raise ValidationError(
            "Início das férias excede o limite do período concessivo "
            f"(Fim Aquisitivo + {CONCESSIVE_PERIOD_MONTHS} meses)."
        )


class LeaveService:
    """Use cases around leaves: registration, approval queue, balances."""

    def __init__(self, leaves: LeaveRepository, *, engine: Optional[VacationRuleEngine] = None):
        self._leaves = leaves
        self._engine = engine or VacationRuleEngine()

    def _counted_history(self, employee_id: str) -> list[LeaveRecord]:
        return [
            leave.as_record()
            for leave in self._leaves.list_for_employee(employee_id)
            if leave.approval_status not in _RELEASED_STATUSES
        ]

    def _get_or_raise(self, leave_id: int) -> Leave:
        leave = self._leaves.get(leave_id=int(leave_id))
        if not leave:
            raise NotFoundError("Afastamento não encontrado")
        return leave

    def validate_vacation(
        self,
        *,
        employee_id: str,
        start_date: date,
        end_date: date,
        acquisitive_period_start: Optional[date],
        acquisitive_period_end: Optional[date],
    ) -> ValidationResult:
        """Dry run of the vacation rules against the stored history.

        Input checks are the same ones `create_leave` applies, so a valid
        answer here means the request would be accepted right now.
        """

        employee_id = require_non_empty(employee_id, "Colaborador")
        _check_dates(start_date, end_date)
        _check_acquisitive_period(start_date, acquisitive_period_start, acquisitive_period_end)

        return self._engine.validate(
            self._counted_history(employee_id),
            employee_id,
            count_calendar_days(start_date, end_date),
            acquisitive_period_start.isoformat(),
        )

    def create_leave(
        self,
        *,
        current_role: Role,
        created_by: str,
        employee_id: str,
        employee_name: str,
        leave_type: LeaveType,
        start_date: date,
        end_date: date,
        acquisitive_period_start: Optional[date] = None,
        acquisitive_period_end: Optional[date] = None,
        notes: str = "",
    ) -> int:
        if current_role not in {Role.ADMIN, Role.USER}:
            raise AuthorizationError("Você não tem permissão para registrar afastamentos")

        employee_id = require_non_empty(employee_id, "Colaborador")
        employee_name = require_non_empty(employee_name, "Nome do colaborador")
        _check_dates(start_date, end_date)

        days_off = count_calendar_days(start_date, end_date)
        fields = dict(
            employee_id=employee_id,
            employee_name=employee_name,
            type=leave_type,
            start_date=start_date,
            end_date=end_date,
            days_off=days_off,
            acquisitive_period_start=None,
            acquisitive_period_end=None,
            notes=optional_text(notes),
            created_by=created_by,
        )

        if leave_type != LeaveType.VACATION:
            leave_id = self._leaves.create(**fields)
        else:
            _check_acquisitive_period(start_date, acquisitive_period_start, acquisitive_period_end)
            period_start = acquisitive_period_start.isoformat()
            fields.update(
                acquisitive_period_start=period_start,
                acquisitive_period_end=acquisitive_period_end.isoformat(),
            )
            # history read and insert must not interleave with another request for the same employee
            with self._leaves.employee_lock(employee_id):
                result = self._engine.validate(self._counted_history(employee_id), employee_id, days_off, period_start)
                if not result.valid:
                    logger.info(
                        "vacation request refused employee=%s period=%s days=%s violation=%s",
                        employee_id,
                        period_start,
                        days_off,
                        result.violation.value if result.violation else None,
                    )
                    raise ValidationError(result.message or "Férias inválidas")
                leave_id = self._leaves.create(**fields)

        logger.info("leave %s registered employee=%s type=%s days=%s", leave_id, employee_id, leave_type.value, days_off)
        return leave_id

    def approve_leave(self, *, current_role: Role, admin_username: str, leave_id: int, note: str = "") -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Você não tem permissão")

        self._get_or_raise(leave_id)
        ok = self._leaves.decide(
            leave_id=int(leave_id),
            status=ApprovalStatus.APPROVED,
            decided_by=admin_username,
            decision_note=optional_text(note),
        )
        if not ok:
            raise ValidationError("Solicitação já foi processada")
        logger.info("leave %s approved by %s", leave_id, admin_username)

    def reject_leave(self, *, current_role: Role, admin_username: str, leave_id: int, note: str = "") -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Você não tem permissão")

        self._get_or_raise(leave_id)
        ok = self._leaves.decide(
            leave_id=int(leave_id),
            status=ApprovalStatus.REJECTED,
            decided_by=admin_username,
            decision_note=optional_text(note),
        )
        if not ok:
            raise ValidationError("Solicitação já foi processada")
        logger.info("leave %s rejected by %s", leave_id, admin_username)

    def cancel_leave(self, *, current_role: Role, username: str, leave_id: int, note: str = "") -> None:
        leave = self._get_or_raise(leave_id)
        if current_role != Role.ADMIN and not (current_role == Role.USER and leave.created_by == username):
            raise AuthorizationError("Você não tem permissão")

        ok = self._leaves.decide(
            leave_id=int(leave_id),
            status=ApprovalStatus.CANCELLED,
            decided_by=username,
            decision_note=optional_text(note),
            expected=(ApprovalStatus.PENDING, ApprovalStatus.APPROVED),
        )
        if not ok:
            raise ValidationError("Afastamento não pode mais ser cancelado")
        logger.info("leave %s cancelled by %s", leave_id, username)

    def vacation_balance(self, *, employee_id: str, acquisitive_period_start: date) -> int:
        return self._engine.remaining_days(
            self._counted_history(employee_id),
            employee_id,
            acquisitive_period_start.isoformat(),
        )

    def list_for_employee(
        self,
        *,
        employee_id: str,
        filters: Optional[LeaveFilter] = None,
        today: Optional[date] = None,
    ) -> list[dict]:
        return self._filtered_ui(self._leaves.list_for_employee(employee_id), filters, today)

    def list_pending(self, *, filters: Optional[LeaveFilter] = None, today: Optional[date] = None) -> list[dict]:
        pending = self._leaves.list_by_status(status=ApprovalStatus.PENDING, limit=DEFAULT_PENDING_LIMIT)
        return self._filtered_ui(pending, filters, today)

    def _filtered_ui(self, leaves, filters: Optional[LeaveFilter], today: Optional[date]) -> list[dict]:
        filters = filters or LeaveFilter()
        return [self._to_ui(leave, today=today) for leave in leaves if filters.matches(leave, today=today)]

    @staticmethod
    def _to_ui(leave: Leave, *, today: Optional[date] = None) -> dict:
        return {
            "leave_id": leave.leave_id,
            "employee_id": leave.employee_id,
            "employee_name": leave.employee_name,
            "type": leave.type.value,
            "type_label": leave.type.label,
            "start_date": leave.start_date.strftime("%Y-%m-%d"),
            "end_date": leave.end_date.strftime("%Y-%m-%d"),
            "days_off": leave.days_off,
            "acquisitive_period_start": leave.acquisitive_period_start,
            "acquisitive_period_end": leave.acquisitive_period_end,
            "status": get_leave_status(leave.start_date, leave.end_date, today=today).value,
            "approval_status": leave.approval_status.value,
            "notes": leave.notes or "",
            "decision_note": leave.decision_note or "",
        }
