from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Account


class AccountRepository(Protocol):
    """Repository interface for accounts (the Identity Store).

    Note (DIP): the service layer depends on this interface, not on a
    concrete storage backend.
    """

    def list_all(self) -> Sequence[Account]:
        raise NotImplementedError

    def save_all(self, accounts: Sequence[Account]) -> None:
        raise NotImplementedError

    def get_by_id(self, account_id: str) -> Optional[Account]:
        raise NotImplementedError

    def get_by_identifier(self, identifier: str) -> Optional[Account]:
        """Case-insensitive lookup by login-ID or email."""

        raise NotImplementedError

    def upsert(self, account: Account) -> None:
        raise NotImplementedError


class SessionRepository(Protocol):
    """The single currently authenticated account, stored apart from accounts."""

    def get(self) -> Optional[Account]:
        raise NotImplementedError

    def set(self, account: Account) -> None:
        raise NotImplementedError

    def clear(self) -> None:
        raise NotImplementedError
