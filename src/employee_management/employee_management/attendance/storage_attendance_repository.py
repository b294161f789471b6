from __future__ import annotations

import logging
from typing import Dict, Optional

from ..core.constants import STORAGE_KEY_ATTENDANCE
from ..core.exceptions import ValidationError
from ..storage.partitions import PartitionStore
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class StorageAttendanceRepository(AttendanceRepository):
    def __init__(self, partitions: PartitionStore):
        self._partitions = partitions

    def _read_raw(self) -> dict:
        return self._partitions.read(STORAGE_KEY_ATTENDANCE, dict)

    def get(self, account_id: str) -> Optional[AttendanceRecord]:
        raw = self._read_raw().get(account_id)
        if raw is None:
            return None
        try:
            return AttendanceRecord.from_dict(account_id, raw)
        except ValidationError as e:
            logger.warning("Ignoring attendance record: %s", e)
            return None

    def save(self, record: AttendanceRecord) -> None:
        raw = self._read_raw()
        raw[record.account_id] = record.to_dict()
        self._partitions.write(STORAGE_KEY_ATTENDANCE, raw)

    def list_all(self) -> Dict[str, AttendanceRecord]:
        out: Dict[str, AttendanceRecord] = {}
        for account_id, raw in self._read_raw().items():
            try:
                out[account_id] = AttendanceRecord.from_dict(account_id, raw)
            except ValidationError as e:
                logger.warning("Ignoring attendance record: %s", e)
        return out
