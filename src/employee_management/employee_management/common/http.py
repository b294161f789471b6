"""Helpers shared by the JSON controllers."""

from __future__ import annotations

import logging
from functools import wraps
from typing import Any, Dict, Tuple

from flask import g, jsonify, request, session

from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    DuplicateEmailError,
    NotFoundError,
    PersistenceError,
)

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (DuplicateEmailError, 409),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
    (PersistenceError, 500),
)


def ok(payload: Dict[str, Any] | None = None, status: int = 200):
    body = {"success": True}
    body.update(payload or {})
    return jsonify(body), status


def fail(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def error_response(e: Exception):
    if isinstance(e, DomainError):
        for exc_type, status in _STATUS_BY_ERROR:
            if isinstance(e, exc_type):
                return fail(str(e), status)
        return fail(str(e), 400)

    logger.exception("Unhandled error on %s %s", request.method, request.path)
    return fail("Internal error", 500)


def json_body() -> Dict[str, Any]:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def auth_decorators(container) -> Tuple[Any, Any]:
    """Build ``login_required``/``admin_required`` bound to the stored session.

    A request is authenticated only when its signed session cookie names the
    account held in the stored session. Logging in elsewhere supersedes it.
    """

    def _session_account():
        account_id = session.get("account_id")
        if not account_id:
            return None
        account = container.auth_service.current_account()
        if not account or account.id != account_id:
            session.pop("account_id", None)
            return None
        return account

    def login_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            account = _session_account()
            if not account:
                return fail("Please log in to continue", 401)
            g.current_account = account
            return view(*args, **kwargs)

        return wrapper

    def admin_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            account = _session_account()
            if not account:
                return fail("Please log in to continue", 401)
            if not account.is_admin:
                return fail("Admin access required", 403)
            g.current_account = account
            return view(*args, **kwargs)

        return wrapper

    return login_required, admin_required
