from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Callable, List, Optional

from ..common.datetime_utils import format_duration, now_local
from ..core.enums import AttendanceState, AttendanceStatus, RequestStatus
from ..core.exceptions import NotFoundError
from ..timeoff.repository import TimeOffRepository
from ..users.model import Account
from ..users.repository import AccountRepository, SessionRepository
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AttendanceRowUI:
    account_id: str
    employee_name: str
    check_in: str
    check_out: str
    status: str
    duration: str


class AttendanceService:
    """Check-in/out state machine over the attendance ledger.

    Day rollover is lazy: a record whose date is not today counts as
    "not checked in", no scheduled reset job exists.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        accounts: AccountRepository,
        session: SessionRepository,
        *,
        time_off: Optional[TimeOffRepository] = None,
        clock: Callable[[], datetime] = now_local,
    ):
        self._attendance = attendance
        self._accounts = accounts
        self._session = session
        self._time_off = time_off
        self._clock = clock

    def _today(self, today: Optional[date]) -> date:
        return today or self._clock().date()

    def check_in(self, account_id: str, *, now: Optional[datetime] = None) -> AttendanceRecord:
        now = now or self._clock()

        account = self._accounts.get_by_id(account_id)
        if not account:
            raise NotFoundError("Employee not found")

        record = AttendanceRecord(
            account_id=account_id,
            date=now.date(),
            checked_in=True,
            check_in_time=now,
        )
        self._attendance.save(record)

        updated = account.with_changes(attendance_status=AttendanceStatus.PRESENT)
        self._accounts.upsert(updated)
        current = self._session.get()
        if current and current.id == account_id:
            self._session.set(current.with_changes(attendance_status=AttendanceStatus.PRESENT))

        logger.info("%s checked in at %s", account.login_id, now.isoformat(timespec="seconds"))
        return record

    def check_out(self, account_id: str, *, now: Optional[datetime] = None) -> Optional[AttendanceRecord]:
        """Close the current record; no-op when the account never checked in.

        The account stays ``present`` for the rest of the day.
        """

        now = now or self._clock()
        record = self._attendance.get(account_id)
        if not record:
            return None

        closed = AttendanceRecord(
            account_id=record.account_id,
            date=record.date,
            checked_in=record.checked_in,
            check_in_time=record.check_in_time,
            checked_out=True,
            check_out_time=now,
        )
        self._attendance.save(closed)
        logger.info("%s checked out at %s", account_id, now.isoformat(timespec="seconds"))
        return closed

    def get_record(self, account_id: str) -> Optional[AttendanceRecord]:
        return self._attendance.get(account_id)

    def state(self, account_id: str, *, today: Optional[date] = None) -> AttendanceState:
        record = self._attendance.get(account_id)
        if not record or not record.is_for(self._today(today)) or not record.checked_in:
            return AttendanceState.NOT_CHECKED_IN
        if record.checked_out:
            return AttendanceState.CHECKED_OUT
        return AttendanceState.CHECKED_IN

    def is_checked_in(self, account_id: str, *, today: Optional[date] = None) -> bool:
        return self.state(account_id, today=today) == AttendanceState.CHECKED_IN

    def check_in_time(self, account_id: str) -> Optional[datetime]:
        record = self._attendance.get(account_id)
        return record.check_in_time if record else None

    def elapsed(self, account_id: str, *, now: Optional[datetime] = None) -> Optional[timedelta]:
        """Time since today's check-in, frozen at check-out."""

        now = now or self._clock()
        record = self._attendance.get(account_id)
        if not record or not record.check_in_time or not record.is_for(now.date()):
            return None
        end = record.check_out_time if record.checked_out and record.check_out_time else now
        return end - record.check_in_time

    def is_on_leave(self, account_id: str, *, today: Optional[date] = None) -> bool:
        """An approved time-off request covers ``today``."""

        if self._time_off is None:
            return False
        day = self._today(today)
        return any(
            r.employee_id == account_id and r.status == RequestStatus.APPROVED and r.start_date <= day <= r.end_date
            for r in self._time_off.list_all()
        )

    def effective_status(self, account: Account, *, today: Optional[date] = None) -> AttendanceStatus:
        day = self._today(today)
        record = self._attendance.get(account.id)
        if record and record.checked_in and record.is_for(day):
            return AttendanceStatus.PRESENT
        if account.attendance_status == AttendanceStatus.ON_LEAVE or self.is_on_leave(account.id, today=day):
            return AttendanceStatus.ON_LEAVE
        return AttendanceStatus.ABSENT

    def today_overview(self, viewer: Account, *, now: Optional[datetime] = None) -> List[AttendanceRowUI]:
        """Today's records: every account for admins, only the viewer otherwise."""

        now = now or self._clock()
        accounts = self._accounts.list_all() if viewer.is_admin else [viewer]
        records = self._attendance.list_all()

        rows: List[AttendanceRowUI] = []
        for account in accounts:
            record = records.get(account.id)
            if not record or not record.is_for(now.date()):
                continue
            rows.append(self._to_ui(account, record, now))
        return rows

    def _to_ui(self, account: Account, r: AttendanceRecord, now: datetime) -> AttendanceRowUI:
        duration = "-"
        if r.check_in_time:
            end = r.check_out_time if r.checked_out and r.check_out_time else now
            duration = format_duration(end - r.check_in_time)

        return AttendanceRowUI(
            account_id=account.id,
            employee_name=account.name or account.login_id,
            check_in=r.check_in_time.strftime("%H:%M:%S") if r.check_in_time else "-",
            check_out=r.check_out_time.strftime("%H:%M:%S") if r.check_out_time else "-",
            status="Checked Out" if r.checked_out else "Present",
            duration=duration,
        )
