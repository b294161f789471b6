from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import TimeOffRequest


class TimeOffRepository(Protocol):
    def list_all(self) -> Sequence[TimeOffRequest]:
        """All requests, newest first."""

        raise NotImplementedError

    def save_all(self, requests: Sequence[TimeOffRequest]) -> None:
        raise NotImplementedError

    def get(self, request_id: int) -> Optional[TimeOffRequest]:
        raise NotImplementedError
