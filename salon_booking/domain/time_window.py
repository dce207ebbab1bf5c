from __future__ import annotations

import re
from datetime import date, datetime, time, tzinfo
from typing import TypeVar

from salon_booking.domain.exceptions import FormatError

TIME_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})$")

MINUTES_PER_DAY = 24 * 60

T = TypeVar("T", int, datetime)


def parse_time(value: str) -> tuple[int, int]:
    """Parse an HH:MM string. Returns (hour, minute) or raises FormatError."""
    if not isinstance(value, str):
        raise FormatError(f"Time must be a string in HH:MM format, got {value!r}")

    match = TIME_PATTERN.match(value.strip())
    if not match:
        raise FormatError(f"Time must be in HH:MM format, got {value!r}")

    hour = int(match.group(1))
    minute = int(match.group(2))
    if not (0 <= hour <= 23 and 0 <= minute <= 59):
        raise FormatError(f"Time out of range, got {value!r}")

    return (hour, minute)


def time_to_minutes(value: str) -> int:
    hour, minute = parse_time(value)
    return hour * 60 + minute


def format_minutes(minutes: int) -> str:
    """Format minutes since midnight as HH:MM."""
    if not 0 <= minutes < MINUTES_PER_DAY:
        raise FormatError(f"Minutes out of range for a single day: {minutes}")
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def format_time(moment: datetime | time) -> str:
    return f"{moment.hour:02d}:{moment.minute:02d}"


def minutes_between(start: str, end: str) -> int:
    """
    Minutes from start to end on the same nominal day.
    Ordering is not enforced here; a negative result means end precedes start.
    """
    return time_to_minutes(end) - time_to_minutes(start)


def overlaps(start_a: T, end_a: T, start_b: T, end_b: T) -> bool:
    """Half-open interval test: touching at a boundary is not an overlap."""
    return start_a < end_b and start_b < end_a


def combine(day: date, hhmm: str, tz: tzinfo | None = None) -> datetime:
    hour, minute = parse_time(hhmm)
    return datetime.combine(day, time(hour=hour, minute=minute), tzinfo=tz)
