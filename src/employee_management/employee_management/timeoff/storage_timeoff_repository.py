from __future__ import annotations

import logging
from typing import Any, List, Optional, Sequence, Tuple

from ..core.constants import STORAGE_KEY_TIMEOFF
from ..core.exceptions import ValidationError
from ..storage.partitions import PartitionStore
from .model import TimeOffRequest
from .repository import TimeOffRepository

logger = logging.getLogger(__name__)


class StorageTimeOffRepository(TimeOffRepository):
    def __init__(self, partitions: PartitionStore):
        self._partitions = partitions

    def _read(self) -> Tuple[List[TimeOffRequest], List[Any]]:
        requests: List[TimeOffRequest] = []
        unreadable: List[Any] = []
        for raw in self._partitions.read(STORAGE_KEY_TIMEOFF, list):
            try:
                requests.append(TimeOffRequest.from_dict(raw))
            except ValidationError as e:
                logger.warning("Skipping time-off request: %s", e)
                unreadable.append(raw)
        return requests, unreadable

    def list_all(self) -> List[TimeOffRequest]:
        return self._read()[0]

    def save_all(self, requests: Sequence[TimeOffRequest]) -> None:
        # Entries that fail to parse are kept as they are, after the readable ones.
        _, unreadable = self._read()
        self._partitions.write(STORAGE_KEY_TIMEOFF, [r.to_dict() for r in requests] + unreadable)

    def get(self, request_id: int) -> Optional[TimeOffRequest]:
        return next((r for r in self.list_all() if r.id == int(request_id)), None)
