from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional

from .attendance.service import AttendanceService
from .attendance.storage_attendance_repository import StorageAttendanceRepository
from .common.datetime_utils import now_local
from .core.constants import DEFAULT_COMPANY_NAME
from .storage.base import InMemoryStore, KeyValueStore
from .storage.partitions import PartitionStore
from .timeoff.service import TimeOffService
from .timeoff.storage_timeoff_repository import StorageTimeOffRepository
from .users.service import AccountService, AuthService
from .users.storage_account_repository import StorageAccountRepository, StorageSessionRepository


@dataclass(frozen=True)
class Container:
    """Explicit application context: one storage adapter, its repositories and services."""

    partitions: PartitionStore

    accounts_repo: StorageAccountRepository
    session_repo: StorageSessionRepository
    attendance_repo: StorageAttendanceRepository
    timeoff_repo: StorageTimeOffRepository

    auth_service: AuthService
    account_service: AccountService
    attendance_service: AttendanceService
    timeoff_service: TimeOffService


def build_store(*, backend: str, storage_dir: Optional[str] = None, db_config: Optional[dict] = None) -> KeyValueStore:
    backend = (backend or "json").lower()
    if backend == "memory":
        return InMemoryStore()
    if backend == "json":
        from .storage.json_file_store import JsonFileStore

        return JsonFileStore(Path(storage_dir or "instance/data"))
    if backend == "mysql":
        from .database.connection import DBConfig, DatabaseConnection
        from .storage.mysql_store import MySQLKeyValueStore

        if not db_config:
            raise ValueError("DB_CONFIG is required for the mysql storage backend")
        return MySQLKeyValueStore(DatabaseConnection.get_instance(DBConfig.from_dict(db_config)))
    raise ValueError(f"Unknown storage backend: {backend!r}")


def build_container(
    *,
    store: KeyValueStore,
    company_name: str = DEFAULT_COMPANY_NAME,
    clock: Callable[[], datetime] = now_local,
) -> Container:
    partitions = PartitionStore(store)

    accounts_repo = StorageAccountRepository(partitions)
    session_repo = StorageSessionRepository(partitions)
    attendance_repo = StorageAttendanceRepository(partitions)
    timeoff_repo = StorageTimeOffRepository(partitions)

    auth_service = AuthService(accounts_repo, session_repo)
    account_service = AccountService(accounts_repo, session_repo, clock=clock, default_company_name=company_name)
    attendance_service = AttendanceService(
        attendance_repo, accounts_repo, session_repo, time_off=timeoff_repo, clock=clock
    )
    timeoff_service = TimeOffService(timeoff_repo, clock=clock)

    return Container(
        partitions=partitions,
        accounts_repo=accounts_repo,
        session_repo=session_repo,
        attendance_repo=attendance_repo,
        timeoff_repo=timeoff_repo,
        auth_service=auth_service,
        account_service=account_service,
        attendance_service=attendance_service,
        timeoff_service=timeoff_service,
    )
