from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Account role used for authorization."""

    EMPLOYEE = "employee"
    ADMIN = "admin"


class AttendanceStatus(str, Enum):
    """Denormalized attendance status cached on the account."""

    PRESENT = "present"
    ON_LEAVE = "on-leave"
    ABSENT = "absent"


class AttendanceState(str, Enum):
    """Per-day check-in state computed from the ledger."""

    NOT_CHECKED_IN = "not_checked_in"
    CHECKED_IN = "checked_in"
    CHECKED_OUT = "checked_out"


class RequestStatus(str, Enum):
    """Time-off approval lifecycle."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class TimeOffType(str, Enum):
    PAID_TIME_OFF = "paid_time_off"
    SICK_LEAVE = "sick_leave"
    UNPAID_LEAVE = "unpaid_leave"
