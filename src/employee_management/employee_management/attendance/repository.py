from __future__ import annotations

from typing import Mapping, Optional, Protocol

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get(self, account_id: str) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def save(self, record: AttendanceRecord) -> None:
        """Replace the record of ``record.account_id``."""

        raise NotImplementedError

    def list_all(self) -> Mapping[str, AttendanceRecord]:
        raise NotImplementedError
