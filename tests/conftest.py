"""Pytest configuration and shared fixtures."""

import pytest
from datetime import datetime

from calendardate import calendardate
from calendardate.utils.time import FixedClock


@pytest.fixture
def fixed_now() -> datetime:
    """Moment every clock-dependent test runs at."""
    return datetime(2021, 6, 28, 10, 30, 0)


@pytest.fixture
def fixed_clock(fixed_now: datetime) -> FixedClock:
    """Clock pinned to 2021-06-28 10:30 local time."""
    return FixedClock(fixed_now)


@pytest.fixture
def schema():
    """Fresh schema with the default YYYY-MM-DD format."""
    return calendardate()


@pytest.fixture
def schemas_yaml() -> str:
    """Sample schemas.yaml document."""
    return """
schemas:
  birthday:
    format: DD/MM/YYYY
    trim: true
    rules:
      - lt: today
      - gt: "1900-01-01"
  contract_end:
    rules:
      - gt: {ref: contract.start}
        min: "1 year"
    cast: number
  broken:
    format: YY MM MM
    rules:
      - gt: 1624924800000
"""
