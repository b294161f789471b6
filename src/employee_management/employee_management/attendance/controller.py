from __future__ import annotations

from dataclasses import asdict

from flask import Flask, g

from ..common.http import auth_decorators, error_response, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    login_required, _ = auth_decorators(container)

    def _status_json(account_id: str) -> dict:
        svc = container.attendance_service
        check_in_time = svc.check_in_time(account_id)
        elapsed = svc.elapsed(account_id)
        return {
            "state": svc.state(account_id).value,
            "checked_in": svc.is_checked_in(account_id),
            "check_in_time": check_in_time.isoformat() if check_in_time else None,
            "elapsed_seconds": int(elapsed.total_seconds()) if elapsed is not None else None,
        }

    @app.route("/api/attendance/checkin", methods=["POST"], endpoint="checkin")
    @login_required
    def checkin():
        try:
            container.attendance_service.check_in(g.current_account.id)
            return ok({"message": "Successfully checked in!", **_status_json(g.current_account.id)})
        except Exception as e:
            return error_response(e)

    @app.route("/api/attendance/checkout", methods=["POST"], endpoint="checkout")
    @login_required
    def checkout():
        try:
            container.attendance_service.check_out(g.current_account.id)
            return ok({"message": "Successfully checked out!", **_status_json(g.current_account.id)})
        except Exception as e:
            return error_response(e)

    @app.route("/api/attendance/status", methods=["GET"], endpoint="attendance_status")
    @login_required
    def attendance_status():
        return ok(_status_json(g.current_account.id))

    @app.route("/api/attendance/today", methods=["GET"], endpoint="attendance_today")
    @login_required
    def attendance_today():
        rows = container.attendance_service.today_overview(g.current_account)
        return ok({"records": [asdict(r) for r in rows]})
