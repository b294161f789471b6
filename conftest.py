from __future__ import annotations

from datetime import datetime

import pytest

from src.employee_management.employee_management.container import build_container
from src.employee_management.employee_management.storage.base import InMemoryStore


class FakeClock:
    """Settable clock so tests can move to 'tomorrow'."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2025, 11, 3, 9, 15, 0)


@pytest.fixture
def clock(fixed_now) -> FakeClock:
    return FakeClock(fixed_now)


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def container(store, clock):
    return build_container(store=store, company_name="Odoo", clock=clock)
