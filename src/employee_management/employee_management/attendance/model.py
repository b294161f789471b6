from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, Optional

from ..common.datetime_utils import parse_iso_date, parse_iso_datetime
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: the latest check-in/out record of one account.

    A record whose ``date`` is not today is stale.
    """

    account_id: str
    date: date
    checked_in: bool
    check_in_time: Optional[datetime]
    checked_out: bool = False
    check_out_time: Optional[datetime] = None

    def is_for(self, day: date) -> bool:
        return self.date == day

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "checked_in": self.checked_in,
            "check_in_time": self.check_in_time.isoformat() if self.check_in_time else None,
            "checked_out": self.checked_out,
            "check_out_time": self.check_out_time.isoformat() if self.check_out_time else None,
        }

    @classmethod
    def from_dict(cls, account_id: str, data: Dict[str, Any]) -> "AttendanceRecord":
        if not isinstance(data, dict):
            raise ValidationError("Attendance record must be an object")
        try:
            return cls(
                account_id=str(account_id),
                date=parse_iso_date(str(data["date"])),
                checked_in=bool(data.get("checked_in")),
                check_in_time=parse_iso_datetime(data.get("check_in_time")),
                checked_out=bool(data.get("checked_out")),
                check_out_time=parse_iso_datetime(data.get("check_out_time")),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ValidationError(f"Invalid attendance record for {account_id}: {e}")
