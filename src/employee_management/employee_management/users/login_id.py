"""Login-ID generation.

Format: [CompanyCode(5)][FirstName(2)][LastName(2)][YearOfJoining(4)][Serial(4)]

Example: ``ODOOXJODO20220001`` for company "Odoo", John Doe, joined 2022,
first hire of that year. Missing parts are padded with "X", so the result is
always exactly 17 characters.
"""

from __future__ import annotations

from datetime import date
from typing import Iterable, Optional

from ..core.constants import (
    COMPANY_CODE_WIDTH,
    DEFAULT_COMPANY_CODE,
    DEFAULT_NAME_CODE,
    LOGIN_ID_PAD_CHAR,
    NAME_CODE_WIDTH,
    SERIAL_WIDTH,
)
from ..core.exceptions import ValidationError
from .model import Account

MAX_SERIAL = 10**SERIAL_WIDTH - 1


def _code(value: Optional[str], default: str, width: int) -> str:
    # Upper-case before truncating: some characters expand when upper-cased.
    return (value or default).upper()[:width].ljust(width, LOGIN_ID_PAD_CHAR)


def next_serial(year: int, existing_accounts: Iterable[Account]) -> int:
    """1 + number of accounts that joined in ``year``."""
    return 1 + sum(1 for a in existing_accounts if a.year_of_joining == year)


def generate_login_id(
    first_name: Optional[str],
    last_name: Optional[str],
    company_name: Optional[str],
    year_of_joining: Optional[int],
    existing_accounts: Iterable[Account],
) -> str:
    existing_accounts = list(existing_accounts)
    year = int(year_of_joining or date.today().year)
    if not 1 <= year <= 9999:
        raise ValidationError(f"Year of joining out of range: {year}")

    prefix = (
        _code(company_name, DEFAULT_COMPANY_CODE, COMPANY_CODE_WIDTH)
        + _code(first_name, DEFAULT_NAME_CODE, NAME_CODE_WIDTH)
        + _code(last_name, DEFAULT_NAME_CODE, NAME_CODE_WIDTH)
        + f"{year:04d}"
    )

    taken = {a.login_id.upper() for a in existing_accounts}
    serial = next_serial(year, existing_accounts)
    while True:
        if serial > MAX_SERIAL:
            raise ValidationError(f"No login-ID serial left for year {year}")
        candidate = f"{prefix}{serial:0{SERIAL_WIDTH}d}"
        if candidate.upper() not in taken:
            return candidate
        serial += 1
