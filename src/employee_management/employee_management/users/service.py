from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Dict, Iterable, Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.datetime_utils import now_local, parse_iso_date
from ..common.validators import require_email, require_min_length
from ..core.constants import (
    DEFAULT_ADMIN_EMAIL,
    DEFAULT_ADMIN_ID,
    DEFAULT_ADMIN_LOGIN_ID,
    DEFAULT_ADMIN_PASSWORD,
    DEFAULT_COMPANY_NAME,
    MIN_PASSWORD_LENGTH,
)
from ..core.enums import AttendanceStatus, Role
from ..core.exceptions import (
    AuthenticationError,
    DuplicateEmailError,
    NotFoundError,
    ValidationError,
)
from .login_id import generate_login_id
from .model import PROFILE_FIELDS, Account
from .repository import AccountRepository, SessionRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NewAccount:
    """Input for account creation (admin "new employee" form)."""

    email: str
    password: str
    first_name: str = ""
    last_name: str = ""
    company_name: str = ""
    role: Role = Role.EMPLOYEE
    profile: Dict[str, str] = field(default_factory=dict)


def _verify_password(account: Account, password: str) -> bool:
    try:
        return check_password_hash(account.password_hash, password or "")
    except Exception:
        # e.g. empty or corrupted hash values
        return False


class AuthService:
    """Use case: login, logout, password change (the Session)."""

    def __init__(self, accounts: AccountRepository, session: SessionRepository):
        self._accounts = accounts
        self._session = session

    def authenticate(self, identifier: str, password: str) -> Account:
        account = self._accounts.get_by_identifier(identifier)
        if not account or not _verify_password(account, password):
            raise AuthenticationError("Invalid login ID/email or password")

        self._session.set(account)
        logger.info("Account %s logged in", account.login_id)
        return account

    def logout(self) -> None:
        self._session.clear()

    def current_account(self) -> Optional[Account]:
        return self._session.get()

    def is_logged_in(self) -> bool:
        return self.current_account() is not None

    def change_password(self, current_password: str, new_password: str) -> None:
        current = self._session.get()
        if not current:
            raise AuthenticationError("Not logged in")

        account = self._accounts.get_by_id(current.id)
        if not account or not _verify_password(account, current_password):
            raise AuthenticationError("Current password is incorrect")

        require_min_length(new_password, "New password", MIN_PASSWORD_LENGTH)

        updated = account.with_changes(password_hash=generate_password_hash(new_password))
        self._accounts.upsert(updated)
        self._session.set(updated)
        logger.info("Password changed for %s", account.login_id)


class AccountService:
    """Use case: employee directory and account management."""

    def __init__(
        self,
        accounts: AccountRepository,
        session: SessionRepository,
        *,
        clock: Callable[[], datetime] = now_local,
        default_company_name: str = DEFAULT_COMPANY_NAME,
    ):
        self._accounts = accounts
        self._session = session
        self._clock = clock
        self._default_company_name = default_company_name

    def list_accounts(self) -> Sequence[Account]:
        return self._accounts.list_all()

    def get_account(self, account_id: str) -> Account:
        account = self._accounts.get_by_id(account_id)
        if not account:
            raise NotFoundError("Employee not found")
        return account

    def search(self, term: str) -> Sequence[Account]:
        needle = (term or "").strip().lower()
        accounts = self.list_accounts()
        if not needle:
            return accounts
        return [
            a
            for a in accounts
            if any(
                needle in (value or "").lower()
                for value in (a.name, a.id, a.login_id, a.job_position, a.department)
            )
        ]

    def _new_account_id(self, now: datetime, existing: Iterable[Account]) -> str:
        taken = {a.id for a in existing}
        stamp = int(now.timestamp() * 1000)
        while f"EMP{stamp}" in taken:
            stamp += 1
        return f"EMP{stamp}"

    @staticmethod
    def _ensure_email_free(email: str, accounts: Iterable[Account], *, ignore_id: Optional[str] = None) -> None:
        needle = email.strip().lower()
        for a in accounts:
            if a.id != ignore_id and a.email and a.email.lower() == needle:
                raise DuplicateEmailError("Email already exists")

    def create_account(self, data: NewAccount) -> Account:
        email = require_email(data.email)
        require_min_length(data.password, "Password", MIN_PASSWORD_LENGTH)

        existing = self._accounts.list_all()
        self._ensure_email_free(email, existing)

        unknown = set(data.profile) - set(PROFILE_FIELDS)
        if unknown:
            raise ValidationError(f"Unknown profile fields: {', '.join(sorted(unknown))}")

        now = self._clock()
        profile = {name: str(data.profile.get(name) or "") for name in PROFILE_FIELDS}
        # The login-ID uses the name as given; the configured default is only stored.
        company_name = (data.company_name or profile["company_name"]).strip()
        profile["company_name"] = company_name or self._default_company_name
        profile["date_of_joining"] = profile["date_of_joining"] or now.date().isoformat()

        try:
            year_of_joining = parse_iso_date(profile["date_of_joining"]).year
        except ValueError:
            raise ValidationError("Date of joining must be YYYY-MM-DD")

        first_name = (data.first_name or "").strip()
        last_name = (data.last_name or "").strip()
        account = Account(
            id=self._new_account_id(now, existing),
            login_id=generate_login_id(first_name, last_name, company_name, year_of_joining, existing),
            email=email,
            password_hash=generate_password_hash(data.password),
            role=data.role,
            first_name=first_name,
            last_name=last_name,
            name=f"{first_name} {last_name}".strip(),
            attendance_status=AttendanceStatus.ABSENT,
            year_of_joining=year_of_joining,
            **profile,
        )

        self._accounts.save_all([*existing, account])
        logger.info("Created %s account %s", account.role.value, account.login_id)
        return account

    def upsert_account(self, account: Account) -> None:
        if account.email:
            self._ensure_email_free(account.email, self._accounts.list_all(), ignore_id=account.id)
        self._accounts.upsert(account)

        current = self._session.get()
        if current and current.id == account.id:
            self._session.set(account)

    def update_profile(self, account_id: str, changes: Dict[str, str]) -> Account:
        editable = set(PROFILE_FIELDS) | {"first_name", "last_name"}
        rejected = set(changes) - editable
        if rejected:
            raise ValidationError(f"Fields cannot be edited: {', '.join(sorted(rejected))}")

        account = self.get_account(account_id)
        cleaned = {k: "" if v is None else str(v).strip() for k, v in changes.items()}
        updated = account.with_changes(**cleaned)
        if "first_name" in cleaned or "last_name" in cleaned:
            updated = updated.with_changes(name=f"{updated.first_name} {updated.last_name}".strip())
        if "date_of_joining" in cleaned:
            try:
                joined = parse_iso_date(cleaned["date_of_joining"])
            except ValueError:
                raise ValidationError("Date of joining must be YYYY-MM-DD")
            updated = updated.with_changes(year_of_joining=joined.year)

        self.upsert_account(updated)
        return updated

    def ensure_default_admin(self) -> Optional[Account]:
        """Seed the default administrator when the store holds no accounts."""

        if self._accounts.list_all():
            return None

        admin = Account(
            id=DEFAULT_ADMIN_ID,
            login_id=DEFAULT_ADMIN_LOGIN_ID,
            email=DEFAULT_ADMIN_EMAIL,
            password_hash=generate_password_hash(DEFAULT_ADMIN_PASSWORD),
            role=Role.ADMIN,
            first_name="Admin",
            last_name="User",
            name="Admin User",
            attendance_status=AttendanceStatus.PRESENT,
            phone="1234567890",
            company_name="Company Name",
            job_position="Administrator",
            department="Administration",
            location="Head Office",
        )
        self._accounts.save_all([admin])
        logger.info("Seeded default admin account %s", admin.login_id)
        return admin
