from __future__ import annotations

from datetime import date, datetime, timedelta, tzinfo
from typing import Iterable

from salon_booking.domain.entities.appointment import Appointment, shares_resource
from salon_booking.domain.exceptions import ConflictError
from salon_booking.domain.time_window import format_time, overlaps


def find_overlapping(
    appointments: Iterable[Appointment],
    start_time: datetime,
    duration: int,
    stylist_id: str | None = None,
    exclude_id: str | None = None,
) -> list[Appointment]:
    """
    Time-blocking bookings overlapping [start_time, start_time + duration).
    Two bookings share a resource when either has no stylist or both name the same one.
    """
    end_time = start_time + timedelta(minutes=duration)
    return [
        existing
        for existing in appointments
        if existing.id != exclude_id
        and existing.blocks_time()
        and shares_resource(stylist_id, existing.stylist_id)
        and overlaps(start_time, end_time, existing.start_time, existing.get_end_time())
    ]


def ensure_no_conflict(appointments: Iterable[Appointment], candidate: Appointment) -> None:
    if not candidate.blocks_time():
        return
    clashes = find_overlapping(
        appointments,
        candidate.start_time,
        candidate.duration,
        stylist_id=candidate.stylist_id,
        exclude_id=candidate.id,
    )
    if clashes:
        first = min(clashes, key=lambda a: a.start_time)
        start = first.start_time
        if candidate.start_time.tzinfo is not None and start.tzinfo is not None:
            start = start.astimezone(candidate.start_time.tzinfo)
        raise ConflictError(
            f"Time slot conflicts with an existing appointment at {format_time(start)}"
        )


def local_date(moment: datetime, timezone: tzinfo | None) -> date:
    if timezone is not None and moment.tzinfo is not None:
        return moment.astimezone(timezone).date()
    return moment.date()
