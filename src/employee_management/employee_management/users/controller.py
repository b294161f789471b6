from __future__ import annotations

from flask import Flask, g, request, session

from ..common.http import auth_decorators, error_response, fail, json_body, ok
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ValidationError
from ..container import Container
from .model import PROFILE_FIELDS
from .service import NewAccount


def register(app: Flask, container: Container) -> None:
    login_required, admin_required = auth_decorators(container)

    def _account_json(account):
        data = account.to_public_dict()
        data["attendance_status"] = container.attendance_service.effective_status(account).value
        return data

    @app.route("/api/login", methods=["POST"], endpoint="login")
    def login():
        data = json_body()
        identifier = str(data.get("login_id") or data.get("email") or data.get("identifier") or "")
        password = str(data.get("password") or "")
        if not identifier.strip() or not password:
            return fail("Please fill in all fields", 400)

        try:
            account = container.auth_service.authenticate(identifier, password)
            session.clear()
            session["account_id"] = account.id
            return ok({"account": _account_json(account)})
        except Exception as e:
            return error_response(e)

    @app.route("/api/logout", methods=["POST"], endpoint="logout")
    def logout():
        try:
            # Only the client holding the stored session may end it.
            current = container.auth_service.current_account()
            if current and current.id == session.get("account_id"):
                container.auth_service.logout()
            session.clear()
            return ok()
        except Exception as e:
            return error_response(e)

    @app.route("/api/me", methods=["GET"], endpoint="me")
    @login_required
    def me():
        return ok({"account": _account_json(g.current_account)})

    @app.route("/api/me/password", methods=["POST"], endpoint="change_password")
    @login_required
    def change_password():
        data = json_body()
        try:
            container.auth_service.change_password(
                str(data.get("current_password") or ""),
                str(data.get("new_password") or ""),
            )
            return ok()
        except Exception as e:
            return error_response(e)

    @app.route("/api/employees", methods=["GET"], endpoint="list_employees")
    @login_required
    def list_employees():
        accounts = container.account_service.search(request.args.get("q", ""))
        return ok({"employees": [_account_json(a) for a in accounts]})

    @app.route("/api/employees/<account_id>", methods=["GET"], endpoint="get_employee")
    @login_required
    def get_employee(account_id: str):
        try:
            return ok({"employee": _account_json(container.account_service.get_account(account_id))})
        except Exception as e:
            return error_response(e)

    @app.route("/api/employees", methods=["POST"], endpoint="create_employee")
    @admin_required
    def create_employee():
        data = json_body()
        try:
            try:
                role = Role(data.get("role") or Role.EMPLOYEE.value)
            except ValueError:
                raise ValidationError("Invalid account role")

            account = container.account_service.create_account(
                NewAccount(
                    email=str(data.get("email") or ""),
                    password=str(data.get("password") or ""),
                    first_name=str(data.get("first_name") or ""),
                    last_name=str(data.get("last_name") or ""),
                    company_name=str(data.get("company_name") or ""),
                    role=role,
                    profile={k: str(data[k]) for k in PROFILE_FIELDS if data.get(k) not in (None, "")},
                )
            )
            return ok({"employee": _account_json(account)}, 201)
        except Exception as e:
            return error_response(e)

    @app.route("/api/employees/<account_id>", methods=["PUT"], endpoint="update_employee")
    @login_required
    def update_employee(account_id: str):
        try:
            viewer = g.current_account
            if not viewer.is_admin and viewer.id != account_id:
                raise AuthorizationError("You can only edit your own profile")

            account = container.account_service.update_profile(account_id, json_body())
            return ok({"employee": _account_json(account)})
        except Exception as e:
            return error_response(e)
