"""
Time-of-day utilities for session slicing and pacing.

All arithmetic is done in minutes since midnight (floats, so seconds carry
through). Sessions never wrap past midnight; a window whose end precedes its
start is treated as empty by the callers.
"""

from datetime import datetime, time
from typing import Callable, Optional, Union

TimeLike = Union[time, str]

MINUTES_PER_DAY = 24 * 60


def as_time_of_day(value: TimeLike) -> time:
    """
    Coerce a time-of-day value into a datetime.time.

    Args:
        value: datetime.time or "HH:MM" / "HH:MM:SS" string

    Returns:
        Equivalent datetime.time

    Raises:
        ValueError: If a string cannot be parsed
    """
    if isinstance(value, time):
        return value

    parts = str(value).strip().split(":")
    if len(parts) not in (2, 3):
        raise ValueError(f"Invalid time of day: {value!r}")

    hour, minute = int(parts[0]), int(parts[1])
    second = int(parts[2]) if len(parts) == 3 else 0
    return time(hour, minute, second)


def to_minutes(value: TimeLike) -> float:
    """Minutes since midnight, including fractional seconds."""
    t = as_time_of_day(value)
    return t.hour * 60 + t.minute + t.second / 60.0


def from_minutes(minutes: float) -> time:
    """
    Convert minutes since midnight back to a time of day.

    Values outside a single day wrap around, matching clock arithmetic.
    """
    total_seconds = int(round(minutes * 60)) % (MINUTES_PER_DAY * 60)
    hour, rest = divmod(total_seconds, 3600)
    minute, second = divmod(rest, 60)
    return time(hour, minute, second)


def minutes_between(start: TimeLike, end: TimeLike) -> float:
    """Signed minutes from start to end (negative if end is earlier)."""
    return to_minutes(end) - to_minutes(start)


def add_minutes(value: TimeLike, minutes: float) -> time:
    """Shift a time of day by a number of minutes."""
    return from_minutes(to_minutes(value) + minutes)


def format_hhmm(value: TimeLike) -> str:
    """Format as HH:MM, appending :SS only when seconds are present."""
    t = as_time_of_day(value)
    if t.second:
        return t.strftime("%H:%M:%S")
    return t.strftime("%H:%M")


def current_time_of_day(clock: Optional[Callable[[], datetime]] = None) -> time:
    """
    Sample the wall clock as a time of day.

    This is the only wall-clock access in the package and is meant for outer
    adapters that re-invoke the pure pipeline on a cadence.

    Args:
        clock: Optional callable returning a datetime, defaults to datetime.now

    Returns:
        Current local time of day truncated to whole seconds
    """
    now = clock() if clock is not None else datetime.now()
    return now.time().replace(microsecond=0)
