from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Callable, List, Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.validators import require_non_empty
from ..core.enums import RequestStatus, TimeOffType
from ..core.exceptions import NotFoundError, ValidationError
from .model import TimeOffRequest, allocation_days
from .repository import TimeOffRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NewTimeOffRequest:
    employee_id: str
    employee_name: str
    start_date: date
    end_date: date
    type: TimeOffType
    reason: str = ""


class TimeOffService:
    def __init__(self, requests: TimeOffRepository, *, clock: Callable[[], datetime] = now_local):
        self._requests = requests
        self._clock = clock

    def list_requests(self, for_account: Optional[str] = None) -> Sequence[TimeOffRequest]:
        requests = self._requests.list_all()
        if for_account is None:
            return requests
        return [r for r in requests if r.employee_id == for_account]

    def get(self, request_id: int) -> TimeOffRequest:
        req = self._requests.get(int(request_id))
        if not req:
            raise NotFoundError("Time-off request not found")
        return req

    def search(self, term: str, for_account: Optional[str] = None) -> Sequence[TimeOffRequest]:
        needle = (term or "").strip().lower()
        requests = self.list_requests(for_account)
        if not needle:
            return requests
        return [
            r
            for r in requests
            if needle in r.employee_name.lower()
            or needle in r.type_label.lower()
            or needle in r.status.value
        ]

    def submit(self, data: NewTimeOffRequest) -> TimeOffRequest:
        require_non_empty(data.employee_id, "Employee")
        days = allocation_days(data.start_date, data.end_date)

        existing = list(self._requests.list_all())
        request = TimeOffRequest(
            id=max((r.id for r in existing), default=0) + 1,
            employee_id=data.employee_id,
            employee_name=data.employee_name or data.employee_id,
            start_date=data.start_date,
            end_date=data.end_date,
            type=data.type,
            reason=(data.reason or "").strip(),
            status=RequestStatus.PENDING,
            days=days,
            created_at=self._clock(),
        )
        self._requests.save_all([request, *existing])
        logger.info("Time-off request %s submitted by %s (%s days)", request.id, request.employee_id, days)
        return request

    def decide(
        self,
        request_id: int,
        outcome: RequestStatus,
        *,
        decided_by: Optional[str] = None,
    ) -> TimeOffRequest:
        if outcome not in (RequestStatus.APPROVED, RequestStatus.REJECTED):
            raise ValidationError("Outcome must be approved or rejected")

        requests: List[TimeOffRequest] = list(self._requests.list_all())
        for i, req in enumerate(requests):
            if req.id != int(request_id):
                continue
            if req.status != RequestStatus.PENDING:
                raise ValidationError("Request has already been decided")

            decided = replace(req, status=outcome, decided_by=decided_by, decided_at=self._clock())
            requests[i] = decided
            self._requests.save_all(requests)
            logger.info("Time-off request %s %s by %s", req.id, outcome.value, decided_by or "-")
            return decided

        raise NotFoundError("Time-off request not found")

    def approve(self, request_id: int, *, decided_by: Optional[str] = None) -> TimeOffRequest:
        return self.decide(request_id, RequestStatus.APPROVED, decided_by=decided_by)

    def reject(self, request_id: int, *, decided_by: Optional[str] = None) -> TimeOffRequest:
        return self.decide(request_id, RequestStatus.REJECTED, decided_by=decided_by)
