from __future__ import annotations

from datetime import datetime, time

import pytz


def now_local(tz_name: str) -> datetime:
    """Current wall-clock time in ``tz_name`` as a naive datetime.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(pytz.timezone(tz_name)).replace(tzinfo=None)


def parse_clock(value: str | time) -> time:
    """Parse HH:MM (or HH:MM:SS) into a time."""
    if isinstance(value, time):
        return value
    parts = value.strip().split(":")
    if len(parts) not in (2, 3):
        raise ValueError(f"Invalid clock time: {value!r}")
    seconds = int(parts[2]) if len(parts) == 3 else 0
    return time(hour=int(parts[0]), minute=int(parts[1]), second=seconds)


def format_date(value: datetime) -> str:
    return value.strftime("%Y-%m-%d")


def format_clock_12h(value: datetime | time) -> str:
    """9:05:07 AM style, without the leading zero on the hour."""
    return value.strftime("%I:%M:%S %p").lstrip("0")


def format_long_timestamp(value: datetime) -> str:
    """Monday, March 3, 2025 at 09:15:00 AM style used in report emails."""
    return f"{value:%A}, {value:%B} {value.day}, {value:%Y} at {value:%I:%M:%S %p}"
