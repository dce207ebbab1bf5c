from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum

from salon_booking.domain.exceptions import FormatError, ValidationError
from salon_booking.domain.time_window import format_minutes, time_to_minutes

MIN_SCHEDULE_MINUTES = 30


class DayOfWeek(str, Enum):
    MONDAY = "MONDAY"
    TUESDAY = "TUESDAY"
    WEDNESDAY = "WEDNESDAY"
    THURSDAY = "THURSDAY"
    FRIDAY = "FRIDAY"
    SATURDAY = "SATURDAY"
    SUNDAY = "SUNDAY"

    @staticmethod
    def from_date(day: date) -> "DayOfWeek":
        # date.weekday(): Monday == 0
        return list(DayOfWeek)[day.weekday()]

    @staticmethod
    def parse(value: "DayOfWeek | str") -> "DayOfWeek":
        if isinstance(value, DayOfWeek):
            return value
        try:
            return DayOfWeek(str(value).strip().upper())
        except ValueError:
            raise ValidationError(f"Invalid day of week: {value!r}") from None


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Schedule:
    """
    Working-hours window for one day of the week.

    When holiday_id is set the window applies to that holiday's date instead of
    the regular weekly schedule. Windows crossing midnight are rejected.
    """

    id: str
    day_of_week: DayOfWeek
    start_time: str
    end_time: str
    holiday_id: str | None = None
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    def __post_init__(self) -> None:
        self.day_of_week = DayOfWeek.parse(self.day_of_week)
        self.start_time, self.end_time = self._validated_window(self.start_time, self.end_time)

    @staticmethod
    def create(
        day_of_week: DayOfWeek | str,
        start_time: str,
        end_time: str,
        holiday_id: str | None = None,
        now: datetime | None = None,
    ) -> "Schedule":
        created = now or _utcnow()
        return Schedule(
            id=str(uuid.uuid4()),
            day_of_week=DayOfWeek.parse(day_of_week),
            start_time=start_time,
            end_time=end_time,
            holiday_id=holiday_id or None,
            created_at=created,
            updated_at=created,
        )

    @staticmethod
    def _validated_window(start_time: str, end_time: str) -> tuple[str, str]:
        try:
            start = time_to_minutes(start_time)
        except FormatError as e:
            raise ValidationError(f"Start time must be in HH:MM format: {e}") from e
        try:
            end = time_to_minutes(end_time)
        except FormatError as e:
            raise ValidationError(f"End time must be in HH:MM format: {e}") from e

        if start >= end:
            raise ValidationError("Start time must be before end time")
        if end - start < MIN_SCHEDULE_MINUTES:
            raise ValidationError(f"Schedule must be at least {MIN_SCHEDULE_MINUTES} minutes long")

        return format_minutes(start), format_minutes(end)

    @property
    def is_holiday_override(self) -> bool:
        return self.holiday_id is not None

    def update_schedule(self, start_time: str, end_time: str, now: datetime | None = None) -> None:
        self.start_time, self.end_time = self._validated_window(start_time, end_time)
        self.updated_at = now or _utcnow()

    def get_duration_in_minutes(self) -> int:
        return time_to_minutes(self.end_time) - time_to_minutes(self.start_time)

    def is_within_working_hours(self, hhmm: str) -> bool:
        """Inclusive on both ends of the window."""
        minutes = time_to_minutes(hhmm)
        return time_to_minutes(self.start_time) <= minutes <= time_to_minutes(self.end_time)

    def contains_interval(self, start_hhmm: str, duration_minutes: int) -> bool:
        start = time_to_minutes(start_hhmm)
        return (
            time_to_minutes(self.start_time) <= start
            and start + duration_minutes <= time_to_minutes(self.end_time)
        )

    def get_available_slots(self, slot_duration: int = 30) -> list[str]:
        """Slot start times (HH:MM) that fit entirely inside the window."""
        if slot_duration <= 0:
            raise ValidationError("Slot duration must be greater than 0")

        slots: list[str] = []
        current = time_to_minutes(self.start_time)
        end = time_to_minutes(self.end_time)

        while current + slot_duration <= end:
            slots.append(format_minutes(current))
            current += slot_duration

        return slots
