from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, tzinfo
from typing import Iterable

from salon_booking.domain.entities.appointment import Appointment, shares_resource
from salon_booking.domain.entities.schedule import DayOfWeek, Schedule
from salon_booking.domain.exceptions import ValidationError
from salon_booking.domain.time_window import combine, format_time, overlaps


@dataclass(frozen=True)
class SlotAvailability:
    time: str
    available: bool
    duration: int
    conflict_reason: str | None = None
    stylist_id: str | None = None


@dataclass(frozen=True)
class DayAvailability:
    date: date
    day_of_week: DayOfWeek
    is_working_day: bool
    total_slots: int = 0
    available_slots: int = 0
    slots: tuple[SlotAvailability, ...] = field(default_factory=tuple)
    working_hours: tuple[str, str] | None = None


class AvailabilityCalculator:
    """Marks each candidate slot of a Schedule as free or taken. O(slots x bookings)."""

    def __init__(self, timezone: tzinfo | None = None) -> None:
        self._timezone = timezone

    def calculate(
        self,
        target_date: date,
        schedule: Schedule | None,
        booked: Iterable[Appointment],
        duration: int = 30,
        stylist_id: str | None = None,
        now: datetime | None = None,
    ) -> DayAvailability:
        day_of_week = DayOfWeek.from_date(target_date)

        if schedule is None:
            return DayAvailability(date=target_date, day_of_week=day_of_week, is_working_day=False)

        if duration <= 0:
            raise ValidationError("Duration must be greater than 0")

        blocking = [
            appt
            for appt in booked
            if appt.blocks_time() and shares_resource(stylist_id, appt.stylist_id)
        ]

        slots: list[SlotAvailability] = []
        for slot_time in schedule.get_available_slots(duration):
            slot_start = combine(target_date, slot_time, self._timezone)
            slot_end = slot_start + timedelta(minutes=duration)
            reason = self._conflict_reason(slot_start, slot_end, blocking, now)
            slots.append(
                SlotAvailability(
                    time=slot_time,
                    available=reason is None,
                    duration=duration,
                    conflict_reason=reason,
                    stylist_id=stylist_id,
                )
            )

        return DayAvailability(
            date=target_date,
            day_of_week=day_of_week,
            is_working_day=True,
            total_slots=len(slots),
            available_slots=sum(1 for s in slots if s.available),
            slots=tuple(slots),
            working_hours=(schedule.start_time, schedule.end_time),
        )

    def _conflict_reason(
        self,
        slot_start: datetime,
        slot_end: datetime,
        blocking: list[Appointment],
        now: datetime | None,
    ) -> str | None:
        if now is not None and slot_start < now:
            return "Slot start has passed"

        for appt in blocking:
            if overlaps(slot_start, slot_end, appt.start_time, appt.get_end_time()):
                local_start = appt.start_time
                if self._timezone is not None and local_start.tzinfo is not None:
                    local_start = local_start.astimezone(self._timezone)
                return f"Conflicts with existing appointment at {format_time(local_start)}"

        return None
