from __future__ import annotations

import logging
from typing import Any, List, Optional, Sequence, Tuple

from ..core.constants import STORAGE_KEY_CURRENT_USER, STORAGE_KEY_USERS
from ..core.enums import Role
from ..core.exceptions import ValidationError
from ..storage.partitions import PartitionStore
from .model import Account
from .repository import AccountRepository, SessionRepository

logger = logging.getLogger(__name__)


class StorageAccountRepository(AccountRepository):
    def __init__(self, partitions: PartitionStore):
        self._partitions = partitions

    def _read(self) -> Tuple[List[Account], List[Any]]:
        """Parsed accounts, plus the raw entries that could not be parsed."""

        accounts: List[Account] = []
        unreadable: List[Any] = []
        for raw in self._partitions.read(STORAGE_KEY_USERS, list):
            try:
                accounts.append(Account.from_dict(raw))
            except ValidationError as e:
                logger.warning("Skipping unreadable account record: %s", e)
                unreadable.append(raw)
        return accounts, unreadable

    def _load(self) -> List[Account]:
        return self._read()[0]

    def list_all(self) -> Sequence[Account]:
        return [a for a in self._load() if a.role in (Role.EMPLOYEE, Role.ADMIN)]

    def save_all(self, accounts: Sequence[Account]) -> None:
        # Unreadable entries are written back untouched.
        _, unreadable = self._read()
        self._partitions.write(STORAGE_KEY_USERS, [a.to_dict() for a in accounts] + unreadable)

    def get_by_id(self, account_id: str) -> Optional[Account]:
        return next((a for a in self._load() if a.id == account_id), None)

    def get_by_identifier(self, identifier: str) -> Optional[Account]:
        needle = (identifier or "").strip().lower()
        if not needle:
            return None
        for a in self._load():
            if a.login_id.lower() == needle or (a.email and a.email.lower() == needle):
                return a
        return None

    def upsert(self, account: Account) -> None:
        accounts = self._load()
        for i, existing in enumerate(accounts):
            if existing.id == account.id or existing.login_id == account.login_id:
                accounts[i] = account
                break
        else:
            accounts.append(account)
        self.save_all(accounts)


class StorageSessionRepository(SessionRepository):
    def __init__(self, partitions: PartitionStore):
        self._partitions = partitions

    def get(self) -> Optional[Account]:
        raw = self._partitions.read(STORAGE_KEY_CURRENT_USER, dict)
        if not raw:
            return None
        try:
            return Account.from_dict(raw)
        except ValidationError as e:
            logger.warning("Discarding unreadable session: %s", e)
            return None

    def set(self, account: Account) -> None:
        # The session snapshot never carries the password hash.
        self._partitions.write(STORAGE_KEY_CURRENT_USER, account.to_public_dict())

    def clear(self) -> None:
        self._partitions.clear(STORAGE_KEY_CURRENT_USER)
