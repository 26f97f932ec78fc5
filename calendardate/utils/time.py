"""
Clock and calendar-day utilities.

This module centralizes every read of the wall clock so that validation stays
deterministic under test. All dates handled by the package are whole calendar
days; "now" is only ever used to derive today's date.
"""

from datetime import date, datetime, timedelta
from typing import Optional, Protocol


class Clock(Protocol):
    """Source of the current local time."""

    def now(self) -> datetime:
        ...


class SystemClock:
    """Clock backed by the local wall clock."""

    def now(self) -> datetime:
        return datetime.now()


class FixedClock:
    """Clock pinned to a single moment, for tests and reproducible runs."""

    def __init__(self, moment: datetime):
        self.moment = moment

    def now(self) -> datetime:
        return self.moment

    def __repr__(self) -> str:
        return f"FixedClock({self.moment.isoformat()})"


SYSTEM_CLOCK = SystemClock()


def resolve_clock(clock: Optional[Clock] = None) -> Clock:
    """
    Return the clock to use for one call.

    Args:
        clock: Optional injected clock

    Returns:
        The injected clock, or the shared system clock when None
    """
    if clock is not None:
        return clock
    return SYSTEM_CLOCK


def today(clock: Optional[Clock] = None) -> date:
    """
    Get today's local calendar date.

    Args:
        clock: Optional clock, defaults to the system clock

    Returns:
        Today's date according to the clock
    """
    return resolve_clock(clock).now().date()


def shift_days(day: date, days: int) -> date:
    """Return the calendar day ``days`` away from ``day``."""
    return day + timedelta(days=days)


def local_midnight(day: date) -> datetime:
    """
    Get the timezone-aware local midnight that starts a calendar day.

    Args:
        day: Calendar day

    Returns:
        Aware datetime at 00:00 local time, with the local UTC offset in effect that day
    """
    return datetime(day.year, day.month, day.day).astimezone()


def epoch_millis(day: date) -> int:
    """
    Get the epoch-millisecond timestamp of a day's local midnight.

    Args:
        day: Calendar day

    Returns:
        Milliseconds since the Unix epoch
    """
    return int(local_midnight(day).timestamp()) * 1000


def from_epoch_millis(millis: float) -> date:
    """
    Convert an epoch-millisecond timestamp to its local calendar date.

    Args:
        millis: Milliseconds since the Unix epoch

    Returns:
        Local calendar date containing that instant
    """
    return datetime.fromtimestamp(millis / 1000).date()
