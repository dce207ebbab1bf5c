from __future__ import annotations

from datetime import datetime, timedelta, tzinfo
from typing import Callable

Clock = Callable[[], datetime]


def system_clock(timezone: tzinfo) -> Clock:
    def now() -> datetime:
        return datetime.now(timezone)

    return now


def localize(moment: datetime, timezone: tzinfo) -> datetime:
    """Naive datetimes are read as business-local time; aware ones are converted."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone)
    return moment.astimezone(timezone)


def describe_lead(lead: timedelta) -> str:
    minutes = int(lead.total_seconds() // 60)
    if minutes % 60 == 0:
        hours = minutes // 60
        return "1 hour" if hours == 1 else f"{hours} hours"
    return f"{minutes} minutes"
