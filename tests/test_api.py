from __future__ import annotations

import pytest

from src.employee_management.employee_management.main import create_app


@pytest.fixture
def app(container, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    app = create_app(container)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


def _login(client, identifier, password):
    return client.post("/api/login", json={"login_id": identifier, "password": password})


def _hire(client, email="john@example.com", first="John", last="Doe"):
    return client.post(
        "/api/employees",
        json={"email": email, "password": "secret1", "first_name": first, "last_name": last, "company_name": "Odoo"},
    )


def test_login_requires_both_fields(client):
    res = client.post("/api/login", json={"login_id": "ADMIN001"})

    assert res.status_code == 400
    assert res.get_json()["success"] is False


def test_login_with_wrong_password_is_401(client):
    assert _login(client, "ADMIN001", "wrong-password").status_code == 401


def test_me_requires_login(client):
    assert client.get("/api/me").status_code == 401


def test_admin_login_and_profile(client):
    res = _login(client, "admin@company.com", "admin123")

    body = res.get_json()
    assert res.status_code == 200
    assert body["account"]["login_id"] == "ADMIN001"
    assert "password_hash" not in body["account"]
    assert client.get("/api/me").get_json()["account"]["role"] == "admin"


def test_admin_creates_employee_and_duplicate_email_conflicts(client):
    _login(client, "ADMIN001", "admin123")

    res = _hire(client)
    assert res.status_code == 201
    assert res.get_json()["employee"]["login_id"] == "ODOOXJODO20250001"

    assert _hire(client, email="JOHN@example.com", first="Johnny").status_code == 409


def test_employee_cannot_create_accounts(client):
    _login(client, "ADMIN001", "admin123")
    login_id = _hire(client).get_json()["employee"]["login_id"]

    _login(client, login_id, "secret1")

    assert _hire(client, email="jane@example.com", first="Jane").status_code == 403


def test_attendance_flow(client):
    _login(client, "ADMIN001", "admin123")
    login_id = _hire(client).get_json()["employee"]["login_id"]
    _login(client, login_id, "secret1")

    res = client.post("/api/attendance/checkin")
    assert res.status_code == 200
    assert res.get_json()["checked_in"] is True
    assert client.get("/api/me").get_json()["account"]["attendance_status"] == "present"

    res = client.post("/api/attendance/checkout")
    assert res.get_json()["checked_in"] is False
    assert res.get_json()["state"] == "checked_out"

    records = client.get("/api/attendance/today").get_json()["records"]
    assert len(records) == 1
    assert records[0]["status"] == "Checked Out"


def test_timeoff_submit_and_admin_approve(client):
    _login(client, "ADMIN001", "admin123")
    login_id = _hire(client).get_json()["employee"]["login_id"]
    _login(client, login_id, "secret1")

    res = client.post(
        "/api/timeoff",
        json={"start_date": "2025-11-01", "end_date": "2025-11-03", "type": "Sick Leave", "reason": "flu"},
    )
    assert res.status_code == 201
    request_id = res.get_json()["request"]["id"]
    assert res.get_json()["request"]["days"] == 3

    assert client.post(f"/api/timeoff/{request_id}/approve").status_code == 403

    _login(client, "ADMIN001", "admin123")
    res = client.post(f"/api/timeoff/{request_id}/approve")
    assert res.status_code == 200
    assert res.get_json()["request"]["status"] == "approved"

    assert client.post(f"/api/timeoff/{request_id}/reject").status_code == 400
    assert client.post("/api/timeoff/999/approve").status_code == 404


def test_allocation_preview(client):
    _login(client, "ADMIN001", "admin123")

    res = client.get("/api/timeoff/allocation?start=2025-11-01&end=2025-11-03")
    assert res.get_json()["label"] == "3.00 Days"

    res = client.get("/api/timeoff/allocation?start=2025-11-03&end=2025-11-01")
    assert res.get_json()["days"] is None

    assert client.get("/api/timeoff/allocation?start=bad").status_code == 400


def test_other_client_without_cookie_is_not_logged_in(app):
    admin_client = app.test_client()
    stranger = app.test_client()
    assert _login(admin_client, "ADMIN001", "admin123").status_code == 200

    assert _hire(stranger).status_code == 401
    assert stranger.get("/api/me").status_code == 401
    assert stranger.post("/api/timeoff/1/approve").status_code == 401

    assert admin_client.get("/api/me").status_code == 200


def test_stranger_logout_does_not_end_admin_session(app):
    admin_client = app.test_client()
    stranger = app.test_client()
    _login(admin_client, "ADMIN001", "admin123")

    assert stranger.post("/api/logout").status_code == 200

    assert admin_client.get("/api/me").status_code == 200


def test_newer_login_supersedes_older_cookie(app):
    admin_client = app.test_client()
    employee_client = app.test_client()
    _login(admin_client, "ADMIN001", "admin123")
    login_id = _hire(admin_client).get_json()["employee"]["login_id"]

    _login(employee_client, login_id, "secret1")

    assert _hire(admin_client, email="jane@example.com", first="Jane").status_code == 401
    assert employee_client.get("/api/me").get_json()["account"]["login_id"] == login_id


def test_logout_ends_session(client):
    _login(client, "ADMIN001", "admin123")

    client.post("/api/logout")

    assert client.get("/api/me").status_code == 401
