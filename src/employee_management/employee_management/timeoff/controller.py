from __future__ import annotations

from typing import Optional

from flask import Flask, g, request

from ..common.datetime_utils import parse_iso_date
from ..common.http import auth_decorators, error_response, fail, json_body, ok
from ..container import Container
from ..core.exceptions import ValidationError
from .model import TYPE_LABELS, TimeOffRequest, parse_time_off_type, preview_allocation
from .service import NewTimeOffRequest


def _parse_date(value: Optional[str], field_name: str):
    try:
        return parse_iso_date(str(value or ""))
    except ValueError:
        raise ValidationError(f"{field_name} must be YYYY-MM-DD")


def _request_json(r: TimeOffRequest) -> dict:
    data = r.to_dict()
    data["type_label"] = TYPE_LABELS[r.type]
    return data


def register(app: Flask, container: Container) -> None:
    login_required, admin_required = auth_decorators(container)

    @app.route("/api/timeoff", methods=["GET"], endpoint="list_timeoff")
    @login_required
    def list_timeoff():
        viewer = g.current_account
        for_account = None if viewer.is_admin else viewer.id
        requests = container.timeoff_service.search(request.args.get("q", ""), for_account)
        return ok({"requests": [_request_json(r) for r in requests]})

    @app.route("/api/timeoff", methods=["POST"], endpoint="submit_timeoff")
    @login_required
    def submit_timeoff():
        data = json_body()
        viewer = g.current_account
        try:
            req = container.timeoff_service.submit(
                NewTimeOffRequest(
                    employee_id=viewer.id,
                    employee_name=viewer.name,
                    start_date=_parse_date(data.get("start_date"), "Start date"),
                    end_date=_parse_date(data.get("end_date"), "End date"),
                    type=parse_time_off_type(str(data.get("type") or "paid_time_off")),
                    reason=str(data.get("reason") or ""),
                )
            )
            return ok({"request": _request_json(req)}, 201)
        except Exception as e:
            return error_response(e)

    @app.route("/api/timeoff/allocation", methods=["GET"], endpoint="timeoff_allocation")
    @login_required
    def timeoff_allocation():
        try:
            start = _parse_date(request.args.get("start"), "Start date")
            end = _parse_date(request.args.get("end"), "End date")
        except ValidationError as e:
            return fail(str(e), 400)

        days = preview_allocation(start, end)
        return ok({"days": days, "label": f"{days:.2f} Days" if days is not None else ""})

    @app.route("/api/timeoff/<int:request_id>/approve", methods=["POST"], endpoint="approve_timeoff")
    @admin_required
    def approve_timeoff(request_id: int):
        try:
            req = container.timeoff_service.approve(request_id, decided_by=g.current_account.id)
            return ok({"request": _request_json(req)})
        except Exception as e:
            return error_response(e)

    @app.route("/api/timeoff/<int:request_id>/reject", methods=["POST"], endpoint="reject_timeoff")
    @admin_required
    def reject_timeoff(request_id: int):
        try:
            req = container.timeoff_service.reject(request_id, decided_by=g.current_account.id)
            return ok({"request": _request_json(req)})
        except Exception as e:
            return error_response(e)
