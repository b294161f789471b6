from __future__ import annotations

import json

import pytest

from src.employee_management.employee_management.container import build_container
from src.employee_management.employee_management.core.enums import AttendanceStatus, Role
from src.employee_management.employee_management.core.exceptions import (
    DuplicateEmailError,
    NotFoundError,
    ValidationError,
)
from src.employee_management.employee_management.users.service import NewAccount


def _new(email="john@example.com", first="John", last="Doe", **kwargs) -> NewAccount:
    kwargs.setdefault("company_name", "Odoo")
    return NewAccount(email=email, password="secret1", first_name=first, last_name=last, **kwargs)


def test_create_account_generates_ids_and_defaults(container):
    account = container.account_service.create_account(_new())

    assert account.login_id == "ODOOXJODO20250001"
    assert account.id.startswith("EMP")
    assert account.name == "John Doe"
    assert account.role == Role.EMPLOYEE
    assert account.attendance_status == AttendanceStatus.ABSENT
    assert account.company_name == "Odoo"
    assert account.date_of_joining == "2025-11-03"
    assert account.year_of_joining == 2025
    assert account.department == ""


def test_second_hire_same_year_gets_next_serial(container):
    first = container.account_service.create_account(_new())
    second = container.account_service.create_account(_new(email="jane@example.com", first="Jane", last="Dow"))

    assert first.login_id.endswith("0001")
    assert second.login_id == "ODOOXJADO20250002"
    assert first.id != second.id


def test_duplicate_email_any_case_is_rejected(container):
    container.account_service.create_account(_new())

    with pytest.raises(DuplicateEmailError):
        container.account_service.create_account(_new(email="JOHN@Example.COM", first="Johnny"))

    assert len(container.account_service.list_accounts()) == 1


def test_password_is_not_stored_in_plaintext(container, store):
    container.account_service.create_account(_new())

    raw = store.get("ems_users")
    assert "secret1" not in raw
    assert json.loads(raw)[0]["password_hash"]


def test_invalid_email_and_short_password_are_rejected(container):
    with pytest.raises(ValidationError):
        container.account_service.create_account(_new(email="not-an-email"))

    with pytest.raises(ValidationError):
        container.account_service.create_account(
            NewAccount(email="a@b.co", password="123", first_name="A", last_name="B")
        )


def test_unknown_profile_field_is_rejected(container):
    with pytest.raises(ValidationError):
        container.account_service.create_account(_new(profile={"salary": "1000"}))


def test_profile_fields_are_kept(container):
    account = container.account_service.create_account(
        _new(profile={"department": "R&D", "job_position": "Engineer", "date_of_joining": "2024-02-01"})
    )

    assert account.department == "R&D"
    assert account.job_position == "Engineer"
    assert account.login_id == "ODOOXJODO20240001"


def test_upsert_replaces_by_login_id_and_appends_unknown(container):
    account = container.account_service.create_account(_new())

    container.account_service.upsert_account(account.with_changes(job_position="Lead"))
    accounts = container.account_service.list_accounts()
    assert len(accounts) == 1
    assert accounts[0].job_position == "Lead"

    other = account.with_changes(id="EMP1", login_id="ODOOXOTHE20250009", email="other@example.com")
    container.account_service.upsert_account(other)
    assert {a.id for a in container.account_service.list_accounts()} == {account.id, "EMP1"}


def test_upsert_rejects_email_of_another_account(container):
    john = container.account_service.create_account(_new())
    jane = container.account_service.create_account(_new(email="jane@example.com", first="Jane"))

    with pytest.raises(DuplicateEmailError):
        container.account_service.upsert_account(jane.with_changes(email=john.email.upper()))


def test_update_profile_only_touches_editable_fields(container):
    account = container.account_service.create_account(_new())

    updated = container.account_service.update_profile(account.id, {"last_name": "Smith", "location": "Pune"})
    assert updated.name == "John Smith"
    assert updated.location == "Pune"
    assert updated.login_id == account.login_id

    with pytest.raises(ValidationError):
        container.account_service.update_profile(account.id, {"role": "admin"})

    with pytest.raises(NotFoundError):
        container.account_service.update_profile("missing", {"location": "x"})


def test_search_matches_name_department_and_login_id(container):
    container.account_service.create_account(_new(profile={"department": "Sales"}))
    container.account_service.create_account(_new(email="jane@example.com", first="Jane", last="Roe"))

    assert [a.first_name for a in container.account_service.search("sales")] == ["John"]
    assert [a.first_name for a in container.account_service.search("ROE")] == ["Jane"]
    assert len(container.account_service.search("odoox")) == 2
    assert len(container.account_service.search("")) == 2


def test_ensure_default_admin_only_seeds_empty_store(container):
    admin = container.account_service.ensure_default_admin()

    assert admin is not None
    assert admin.login_id == "ADMIN001"
    assert admin.role == Role.ADMIN
    assert container.account_service.ensure_default_admin() is None
    assert len(container.account_service.list_accounts()) == 1


def test_accounts_round_trip_through_storage(container, store, clock):
    container.account_service.ensure_default_admin()
    container.account_service.create_account(_new())
    container.account_service.create_account(_new(email="jane@example.com", first="Jane"))
    before = {a.id: a for a in container.account_service.list_accounts()}

    reloaded = build_container(store=store, clock=clock)
    after = {a.id: a for a in reloaded.account_service.list_accounts()}

    assert after == before


def test_login_id_uses_placeholder_when_no_company_given(store, clock):
    container = build_container(store=store, clock=clock)

    account = container.account_service.create_account(
        NewAccount(email="john@example.com", password="secret1", first_name="John", last_name="Doe")
    )

    assert account.login_id == "COMPXJODO20250001"
    assert account.company_name == "Company"


def test_configured_company_is_stored_but_not_used_for_login_id(container):
    account = container.account_service.create_account(_new(company_name=""))

    assert account.login_id == "COMPXJODO20250001"
    assert account.company_name == "Odoo"


def test_company_from_profile_is_used_for_login_id(container):
    account = container.account_service.create_account(_new(company_name="", profile={"company_name": "Globex"}))

    assert account.login_id == "GLOBEJODO20250001"


def test_update_date_of_joining_moves_year_of_joining(container):
    account = container.account_service.create_account(_new())

    updated = container.account_service.update_profile(account.id, {"date_of_joining": "2023-06-01"})

    assert updated.year_of_joining == 2023
    assert container.account_service.get_account(account.id).year_of_joining == 2023
    hire = container.account_service.create_account(_new(email="jane@example.com", first="Jane"))
    assert hire.login_id.endswith("20250001")


def test_update_rejects_malformed_date_of_joining(container):
    account = container.account_service.create_account(_new())

    with pytest.raises(ValidationError):
        container.account_service.update_profile(account.id, {"date_of_joining": "03/11/2025"})

    assert container.account_service.get_account(account.id).date_of_joining == "2025-11-03"


def test_unreadable_account_survives_unrelated_write(container, store):
    good = container.account_service.create_account(_new())
    raw = json.loads(store.get("ems_users"))
    raw.append({"id": "B1", "login_id": "ODOOXBBBB20250002", "role": "manager"})
    store.set("ems_users", json.dumps(raw))

    assert [a.id for a in container.account_service.list_accounts()] == [good.id]

    container.account_service.create_account(_new(email="jane@example.com", first="Jane"))
    container.account_service.update_profile(good.id, {"location": "Pune"})

    ids = [entry["id"] for entry in json.loads(store.get("ems_users"))]
    assert "B1" in ids
    assert len(ids) == 3
    assert next(e for e in json.loads(store.get("ems_users")) if e["id"] == "B1")["role"] == "manager"
