from __future__ import annotations

from datetime import date
from types import SimpleNamespace

import pytest
from flask import Flask

from src.leave_calendar.leave_calendar.core.enums import ApprovalStatus, LeaveType
from src.leave_calendar.leave_calendar.core.exceptions import ConflictError
from src.leave_calendar.leave_calendar.leaves.controller import register
from src.leave_calendar.leave_calendar.leaves.service import LeaveService


@pytest.fixture
def client(repo):
    app = Flask(__name__)
    app.secret_key = "test-secret"
    register(app, SimpleNamespace(leave_service=LeaveService(repo)))
    return app.test_client()


def login(client, *, username="ana", role="user"):
    with client.session_transaction() as sess:
        sess["username"] = username
        sess["role"] = role


def vacation_payload(**overrides):
    payload = {
        "employee_id": "emp1",
        "employee_name": "Ana",
        "type": "VACATION",
        "start_date": "2025-01-06",
        "end_date": "2025-01-20",
        "acquisitive_period_start": "2024-01-01",
        "acquisitive_period_end": "2024-12-31",
    }
    payload.update(overrides)
    return payload


def test_anonymous_requests_are_refused(client):
    resp = client.post("/api/leaves", json=vacation_payload())

    assert resp.status_code == 401


def test_create_vacation_returns_id(client, repo):
    login(client)

    resp = client.post("/api/leaves", json=vacation_payload())

    assert resp.status_code == 201
    leave_id = resp.get_json()["leave_id"]
    assert repo.get(leave_id=leave_id).approval_status == ApprovalStatus.PENDING


def test_rule_violation_is_returned_as_400_with_message(client, repo):
    repo.add(days_off=20)
    login(client)

    resp = client.post("/api/leaves", json=vacation_payload(start_date="2025-02-01", end_date="2025-02-11"))

    assert resp.status_code == 400
    assert resp.get_json()["error"] == "Limite de 30 dias excedido. Saldo atual: 10 dias."


def test_bad_date_and_type_are_400(client):
    login(client)

    assert client.post("/api/leaves", json=vacation_payload(start_date="06/01/2025")).status_code == 400
    assert client.post("/api/leaves", json=vacation_payload(type="HOLIDAY")).status_code == 400


def test_viewer_gets_403(client):
    login(client, role="viewer")

    assert client.post("/api/leaves", json=vacation_payload()).status_code == 403


def test_validate_endpoint_reports_violation(client, repo):
    repo.add(days_off=10)
    repo.add(days_off=10, start_date=date(2024, 8, 1), end_date=date(2024, 8, 10))
    login(client)

    resp = client.post(
        "/api/leaves/validate",
        json={
            "employee_id": "emp1",
            "start_date": "2025-02-01",
            "end_date": "2025-02-10",
            "acquisitive_period_start": "2024-01-01",
            "acquisitive_period_end": "2024-12-31",
        },
    )

    body = resp.get_json()
    assert resp.status_code == 200
    assert body["valid"] is False
    assert body["violation"] == "MISSING_LONG_SPLIT"


def test_vacation_balance_endpoint(client, repo):
    repo.add(days_off=12)
    login(client)

    resp = client.get("/api/employees/emp1/vacation-balance?acquisitive_period_start=2024-01-01")

    assert resp.get_json()["balance"] == 18


def test_employee_leaves_listing(client, repo):
    repo.add()
    login(client, role="viewer")

    resp = client.get("/api/employees/emp1/leaves")

    assert resp.status_code == 200
    assert len(resp.get_json()["leaves"]) == 1


def test_admin_queue_requires_admin(client):
    login(client)

    assert client.get("/api/admin/leaves/pending").status_code == 403


def test_admin_approves_from_queue(client, repo):
    leave_id = repo.add(approval_status=ApprovalStatus.PENDING)
    login(client, username="admin", role="admin")

    pending = client.get("/api/admin/leaves/pending").get_json()["leaves"]
    resp = client.post(f"/api/admin/leaves/{leave_id}/approve", json={"note": "ok"})

    assert [p["leave_id"] for p in pending] == [leave_id]
    assert resp.status_code == 200
    assert repo.get(leave_id=leave_id).approval_status == ApprovalStatus.APPROVED


def test_reject_unknown_leave_is_404(client):
    login(client, username="admin", role="admin")

    assert client.post("/api/admin/leaves/42/reject").status_code == 404


def test_creator_cancels_own_leave(client, repo):
    leave_id = repo.add(created_by="ana")
    login(client)

    resp = client.post(f"/api/leaves/{leave_id}/cancel")

    assert resp.status_code == 200
    assert repo.get(leave_id=leave_id).approval_status == ApprovalStatus.CANCELLED


def test_non_object_json_body_is_400(client):
    login(client)

    assert client.post("/api/leaves", json=["x"]).status_code == 400
    assert client.post("/api/leaves/validate", json="2025-01-06").status_code == 400


def test_non_string_date_is_400(client):
    login(client)

    resp = client.post("/api/leaves", json=vacation_payload(start_date=20250106))

    assert resp.status_code == 400
    assert "Data de início" in resp.get_json()["error"]


def test_validate_endpoint_requires_acquisitive_period_end(client):
    login(client)
    payload = vacation_payload()
    del payload["acquisitive_period_end"]

    resp = client.post("/api/leaves/validate", json=payload)

    assert resp.status_code == 400


def test_busy_employee_lock_is_409(client, repo, monkeypatch):
    def busy(employee_id):
        raise ConflictError("ocupado")

    monkeypatch.setattr(repo, "employee_lock", busy)
    login(client)

    assert client.post("/api/leaves", json=vacation_payload()).status_code == 409


def test_employee_leaves_filters_from_query_string(client, repo):
    repo.add()
    sick_id = repo.add(type=LeaveType.MEDICAL_LEAVE)
    login(client)

    resp = client.get("/api/employees/emp1/leaves?type=MEDICAL_LEAVE&from=2024-05-01&to=2024-05-31")

    assert [row["leave_id"] for row in resp.get_json()["leaves"]] == [sick_id]
    assert client.get("/api/employees/emp1/leaves?status=FERIAS").status_code == 400
