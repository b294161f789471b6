from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, Optional

from ..common.datetime_utils import parse_iso_date, parse_iso_datetime
from ..core.enums import RequestStatus, TimeOffType
from ..core.exceptions import ValidationError

TYPE_LABELS = {
    TimeOffType.PAID_TIME_OFF: "Paid Time Off",
    TimeOffType.SICK_LEAVE: "Sick Leave",
    TimeOffType.UNPAID_LEAVE: "Unpaid Leave",
}


def parse_time_off_type(value: str) -> TimeOffType:
    """Accept either the stored value ("sick_leave") or its label ("Sick Leave")."""

    v = (value or "").strip().lower()
    for t, label in TYPE_LABELS.items():
        if v in (t.value, label.lower()):
            return t
    raise ValidationError(f"Unknown time-off type: {value!r}")


def allocation_days(start_date: date, end_date: date) -> int:
    """Inclusive number of days covered by a request."""

    if end_date < start_date:
        raise ValidationError("End date must be on or after start date")
    return (end_date - start_date).days + 1


def preview_allocation(start_date: Optional[date], end_date: Optional[date]) -> Optional[int]:
    """Lenient variant for form previews: blank (None) instead of an error."""

    if not start_date or not end_date or end_date < start_date:
        return None
    return allocation_days(start_date, end_date)


@dataclass(frozen=True)
class TimeOffRequest:
    id: int
    employee_id: str
    employee_name: str
    start_date: date
    end_date: date
    type: TimeOffType
    reason: str
    status: RequestStatus
    days: int
    created_at: datetime
    decided_by: Optional[str] = None
    decided_at: Optional[datetime] = None

    @property
    def type_label(self) -> str:
        return TYPE_LABELS[self.type]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "employee_id": self.employee_id,
            "employee_name": self.employee_name,
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "type": self.type.value,
            "reason": self.reason,
            "status": self.status.value,
            "days": self.days,
            "created_at": self.created_at.isoformat(),
            "decided_by": self.decided_by,
            "decided_at": self.decided_at.isoformat() if self.decided_at else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TimeOffRequest":
        if not isinstance(data, dict):
            raise ValidationError("Time-off request must be an object")
        try:
            start = parse_iso_date(str(data["start_date"]))
            end = parse_iso_date(str(data["end_date"]))
            return cls(
                id=int(data["id"]),
                employee_id=str(data["employee_id"]),
                employee_name=str(data.get("employee_name") or ""),
                start_date=start,
                end_date=end,
                type=parse_time_off_type(str(data.get("type") or "")),
                reason=str(data.get("reason") or ""),
                status=RequestStatus(data.get("status") or RequestStatus.PENDING.value),
                days=int(data.get("days") or allocation_days(start, end)),
                created_at=parse_iso_datetime(data.get("created_at")) or datetime.combine(start, datetime.min.time()),
                decided_by=data.get("decided_by"),
                decided_at=parse_iso_datetime(data.get("decided_at")),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ValidationError(f"Invalid time-off request: {e}")
