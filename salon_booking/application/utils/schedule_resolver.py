from __future__ import annotations

from datetime import date

from salon_booking.application.ports.schedule_repository import HolidayRepositoryPort, ScheduleRepositoryPort
from salon_booking.domain.entities.schedule import DayOfWeek, Schedule


class ScheduleResolver:
    """
    Picks the working-hours window that applies to a calendar date.

    A holiday date uses the schedule bound to that holiday, or is closed when
    none exists. Any other date uses the regular weekly schedule for its weekday.
    """

    def __init__(self, schedules: ScheduleRepositoryPort, holidays: HolidayRepositoryPort) -> None:
        self._schedules = schedules
        self._holidays = holidays

    def resolve(self, day: date) -> Schedule | None:
        holiday = self._holidays.find_by_date(day)
        if holiday is not None:
            return self._schedules.find_by_holiday_id(holiday.id)

        for schedule in self._schedules.find_by_day_of_week(DayOfWeek.from_date(day)):
            if not schedule.is_holiday_override:
                return schedule
        return None
