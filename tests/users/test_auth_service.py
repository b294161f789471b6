from __future__ import annotations

import json

import pytest

from src.employee_management.employee_management.core.exceptions import AuthenticationError
from src.employee_management.employee_management.users.service import NewAccount


@pytest.fixture
def john(container):
    return container.account_service.create_account(
        NewAccount(email="john@example.com", password="Secret1", first_name="John", last_name="Doe")
    )


def test_login_with_login_id_any_case(container, john):
    account = container.auth_service.authenticate(john.login_id.lower(), "Secret1")

    assert account.id == john.id
    assert container.auth_service.current_account().id == john.id
    assert container.auth_service.is_logged_in()


def test_login_with_email_any_case(container, john):
    account = container.auth_service.authenticate("JOHN@EXAMPLE.COM", "Secret1")

    assert account.id == john.id


def test_password_is_case_sensitive(container, john):
    with pytest.raises(AuthenticationError):
        container.auth_service.authenticate(john.login_id, "secret1")

    assert container.auth_service.current_account() is None


def test_unknown_identifier_fails(container, john):
    with pytest.raises(AuthenticationError):
        container.auth_service.authenticate("nobody@example.com", "Secret1")


def test_session_snapshot_has_no_password_hash(container, store, john):
    container.auth_service.authenticate(john.email, "Secret1")

    snapshot = json.loads(store.get("ems_current_user"))
    assert snapshot["id"] == john.id
    assert "password_hash" not in snapshot


def test_logout_clears_session(container, john):
    container.auth_service.authenticate(john.email, "Secret1")
    container.auth_service.logout()

    assert container.auth_service.current_account() is None


def test_default_admin_can_log_in(container):
    container.account_service.ensure_default_admin()

    admin = container.auth_service.authenticate("admin001", "admin123")
    assert admin.is_admin


def test_change_password_requires_session(container, john):
    with pytest.raises(AuthenticationError):
        container.auth_service.change_password("Secret1", "NewSecret1")


def test_change_password_rejects_wrong_current_password(container, john):
    container.auth_service.authenticate(john.email, "Secret1")

    with pytest.raises(AuthenticationError):
        container.auth_service.change_password("wrong", "NewSecret1")

    container.auth_service.authenticate(john.email, "Secret1")


def test_change_password_updates_store_and_session(container, john):
    container.auth_service.authenticate(john.email, "Secret1")

    container.auth_service.change_password("Secret1", "NewSecret1")

    assert container.auth_service.current_account().id == john.id
    container.auth_service.logout()
    with pytest.raises(AuthenticationError):
        container.auth_service.authenticate(john.email, "Secret1")
    assert container.auth_service.authenticate(john.email, "NewSecret1").id == john.id
