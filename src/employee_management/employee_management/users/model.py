from __future__ import annotations

from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Dict, Optional

from ..core.enums import AttendanceStatus, Role
from ..core.exceptions import ValidationError

# Free-form profile fields; empty string when unknown.
PROFILE_FIELDS = (
    "phone",
    "company_name",
    "job_position",
    "department",
    "manager",
    "location",
    "date_of_birth",
    "address",
    "nationality",
    "personal_email",
    "gender",
    "marital_status",
    "date_of_joining",
)


@dataclass(frozen=True)
class Account:
    """Domain entity: an employee or admin identity with profile data.

    Note: plain data object, no storage access. ``password_hash`` is a
    werkzeug hash; plaintext passwords are never stored.
    """

    id: str
    login_id: str
    email: str
    password_hash: str
    role: Role
    first_name: str = ""
    last_name: str = ""
    name: str = ""
    attendance_status: AttendanceStatus = AttendanceStatus.ABSENT
    year_of_joining: Optional[int] = None

    phone: str = ""
    company_name: str = ""
    job_position: str = ""
    department: str = ""
    manager: str = ""
    location: str = ""
    date_of_birth: str = ""
    address: str = ""
    nationality: str = ""
    personal_email: str = ""
    gender: str = ""
    marital_status: str = ""
    date_of_joining: str = ""

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    def with_changes(self, **changes: Any) -> "Account":
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["role"] = self.role.value
        data["attendance_status"] = self.attendance_status.value
        return data

    def to_public_dict(self) -> Dict[str, Any]:
        data = self.to_dict()
        data.pop("password_hash", None)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Account":
        """Build an account from a stored/decoded mapping, validating enums.

        Unknown keys are ignored, missing profile fields default to "".
        """

        if not isinstance(data, dict):
            raise ValidationError("Account record must be an object")

        account_id = str(data.get("id") or "").strip()
        login_id = str(data.get("login_id") or "").strip()
        if not account_id or not login_id:
            raise ValidationError("Account record requires id and login_id")

        try:
            role = Role(data.get("role") or Role.EMPLOYEE.value)
        except ValueError:
            raise ValidationError(f"Unknown role: {data.get('role')!r}")

        try:
            status = AttendanceStatus(data.get("attendance_status") or AttendanceStatus.ABSENT.value)
        except ValueError:
            raise ValidationError(f"Unknown attendance status: {data.get('attendance_status')!r}")

        year = data.get("year_of_joining")
        try:
            year = int(year) if year not in (None, "") else None
        except (TypeError, ValueError):
            raise ValidationError(f"Invalid year_of_joining: {year!r}")

        known = {f.name for f in fields(cls)}
        text_fields = {
            k: ("" if data.get(k) is None else str(data.get(k)))
            for k in known
            if k in PROFILE_FIELDS or k in {"first_name", "last_name", "name"}
        }

        return cls(
            id=account_id,
            login_id=login_id,
            email=str(data.get("email") or ""),
            password_hash=str(data.get("password_hash") or ""),
            role=role,
            attendance_status=status,
            year_of_joining=year,
            **text_fields,
        )
