"""Example: drive the service layer directly (no Flask).

Controllers are a thin layer; the business rules live in the services.
"""

from datetime import date

from src.employee_management.employee_management.container import build_container
from src.employee_management.employee_management.core.enums import TimeOffType
from src.employee_management.employee_management.storage.base import InMemoryStore
from src.employee_management.employee_management.timeoff.service import NewTimeOffRequest
from src.employee_management.employee_management.users.service import NewAccount


def main():
    container = build_container(store=InMemoryStore(), company_name="Odoo")
    container.account_service.ensure_default_admin()

    hire = container.account_service.create_account(
        NewAccount(email="john@example.com", password="secret1", first_name="John", last_name="Doe")
    )
    print("login id:", hire.login_id)

    container.auth_service.authenticate(hire.login_id, "secret1")
    container.attendance_service.check_in(hire.id)
    print("checked in:", container.attendance_service.is_checked_in(hire.id))

    req = container.timeoff_service.submit(
        NewTimeOffRequest(
            employee_id=hire.id,
            employee_name=hire.name,
            start_date=date(2025, 11, 1),
            end_date=date(2025, 11, 3),
            type=TimeOffType.SICK_LEAVE,
        )
    )
    print("time off days:", req.days)


if __name__ == "__main__":
    main()
