from __future__ import annotations

import logging
from datetime import date
from functools import wraps
from typing import Optional

from flask import Flask, jsonify, request, session

from ..common.datetime_utils import parse_iso_date
from ..core.enums import LeaveStatus, LeaveType, Role
from ..core.exceptions import AuthorizationError, ConflictError, NotFoundError, ValidationError
from ..container import Container
from .filters import LeaveFilter

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def login_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "username" not in session:
                return jsonify({"error": "Faça login para continuar"}), 401
            return view(*args, **kwargs)

        return wrapper

    def admin_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "username" not in session:
                return jsonify({"error": "Faça login para continuar"}), 401
            if session.get("role") != Role.ADMIN.value:
                return jsonify({"error": "Você não tem permissão"}), 403
            return view(*args, **kwargs)

        return wrapper

    def _current_role() -> Role:
        try:
            return Role(session.get("role"))
        except ValueError:
            raise AuthorizationError("Papel de usuário inválido")

    def _parse_date(value: Optional[str], field_name: str) -> date:
        if not isinstance(value, str):
            raise ValidationError(f"{field_name} inválida (AAAA-MM-DD)")
        try:
            return parse_iso_date(value)
        except ValueError:
            raise ValidationError(f"{field_name} inválida (AAAA-MM-DD)")

    def _parse_optional_date(value: Optional[str], field_name: str) -> Optional[date]:
        return _parse_date(value, field_name) if value else None

    def _parse_leave_type(value: Optional[str]) -> LeaveType:
        try:
            return LeaveType(value)
        except (TypeError, ValueError):
            raise ValidationError("Tipo de afastamento inválido")

    def _parse_filters() -> LeaveFilter:
        args = request.args
        try:
            leave_type = LeaveType(args["type"]) if args.get("type") else None
            status = LeaveStatus(args["status"]) if args.get("status") else None
        except ValueError:
            raise ValidationError("Filtro inválido")
        return LeaveFilter(
            search=args.get("search") or None,
            type=leave_type,
            status=status,
            date_from=_parse_optional_date(args.get("from"), "Data inicial do filtro"),
            date_to=_parse_optional_date(args.get("to"), "Data final do filtro"),
        )

    def _payload() -> dict:
        data = request.get_json(silent=True)
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ValidationError("Corpo da requisição deve ser um objeto JSON")
        return data

    def _error_response(e: Exception):
        if isinstance(e, ValidationError):
            return jsonify({"error": str(e)}), 400
        if isinstance(e, AuthorizationError):
            return jsonify({"error": str(e)}), 403
        if isinstance(e, NotFoundError):
            return jsonify({"error": str(e)}), 404
        if isinstance(e, ConflictError):
            return jsonify({"error": str(e)}), 409
        logger.exception("unexpected error on %s %s", request.method, request.path)
        return jsonify({"error": "Erro interno ao processar a solicitação"}), 500

    @app.route("/api/employees/<employee_id>/leaves", methods=["GET"], endpoint="employee_leaves")
    @login_required
    def employee_leaves(employee_id: str):
        try:
            leaves = container.leave_service.list_for_employee(employee_id=employee_id, filters=_parse_filters())
            return jsonify({"leaves": leaves})
        except Exception as e:
            return _error_response(e)

    @app.route("/api/employees/<employee_id>/vacation-balance", methods=["GET"], endpoint="vacation_balance")
    @login_required
    def vacation_balance(employee_id: str):
        try:
            period = _parse_date(request.args.get("acquisitive_period_start"), "Início do período aquisitivo")
            balance = container.leave_service.vacation_balance(employee_id=employee_id, acquisitive_period_start=period)
            return jsonify({"employee_id": employee_id, "acquisitive_period_start": period.isoformat(), "balance": balance})
        except Exception as e:
            return _error_response(e)

    @app.route("/api/leaves/validate", methods=["POST"], endpoint="validate_vacation")
    @login_required
    def validate_vacation():
        try:
            data = _payload()
            result = container.leave_service.validate_vacation(
                employee_id=str(data.get("employee_id") or ""),
                start_date=_parse_date(data.get("start_date"), "Data de início"),
                end_date=_parse_date(data.get("end_date"), "Data de fim"),
                acquisitive_period_start=_parse_optional_date(
                    data.get("acquisitive_period_start"), "Início do período aquisitivo"
                ),
                acquisitive_period_end=_parse_optional_date(
                    data.get("acquisitive_period_end"), "Fim do período aquisitivo"
                ),
            )
            return jsonify(
                {
                    "valid": result.valid,
                    "message": result.message,
                    "violation": result.violation.value if result.violation else None,
                }
            )
        except Exception as e:
            return _error_response(e)

    @app.route("/api/leaves", methods=["POST"], endpoint="create_leave")
    @login_required
    def create_leave():
        try:
            data = _payload()
            leave_id = container.leave_service.create_leave(
                current_role=_current_role(),
                created_by=str(session["username"]),
                employee_id=str(data.get("employee_id") or ""),
                employee_name=str(data.get("employee_name") or ""),
                leave_type=_parse_leave_type(data.get("type")),
                start_date=_parse_date(data.get("start_date"), "Data de início"),
                end_date=_parse_date(data.get("end_date"), "Data de fim"),
                acquisitive_period_start=_parse_optional_date(
                    data.get("acquisitive_period_start"), "Início do período aquisitivo"
                ),
                acquisitive_period_end=_parse_optional_date(
                    data.get("acquisitive_period_end"), "Fim do período aquisitivo"
                ),
                notes=str(data.get("notes") or ""),
            )
            return jsonify({"leave_id": leave_id, "message": "Afastamento registrado!"}), 201
        except Exception as e:
            return _error_response(e)

    @app.route("/api/leaves/<int:leave_id>/cancel", methods=["POST"], endpoint="cancel_leave")
    @login_required
    def cancel_leave(leave_id: int):
        try:
            container.leave_service.cancel_leave(
                current_role=_current_role(),
                username=str(session["username"]),
                leave_id=leave_id,
                note=str(_payload().get("note") or ""),
            )
            return jsonify({"message": "Afastamento cancelado"})
        except Exception as e:
            return _error_response(e)

    @app.route("/api/admin/leaves/pending", methods=["GET"], endpoint="pending_leaves")
    @admin_required
    def pending_leaves():
        try:
            return jsonify({"leaves": container.leave_service.list_pending(filters=_parse_filters())})
        except Exception as e:
            return _error_response(e)

    @app.route("/api/admin/leaves/<int:leave_id>/approve", methods=["POST"], endpoint="approve_leave")
    @admin_required
    def approve_leave(leave_id: int):
        try:
            container.leave_service.approve_leave(
                current_role=_current_role(),
                admin_username=str(session["username"]),
                leave_id=leave_id,
                note=str(_payload().get("note") or ""),
            )
            return jsonify({"message": "Solicitação aprovada"})
        except Exception as e:
            return _error_response(e)

    @app.route("/api/admin/leaves/<int:leave_id>/reject", methods=["POST"], endpoint="reject_leave")
    @admin_required
    def reject_leave(leave_id: int):
        try:
            container.leave_service.reject_leave(
                current_role=_current_role(),
                admin_username=str(session["username"]),
                leave_id=leave_id,
                note=str(_payload().get("note") or ""),
            )
            return jsonify({"message": "Solicitação rejeitada"})
        except Exception as e:
            return _error_response(e)
