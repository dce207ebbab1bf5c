from __future__ import annotations

import logging
import uuid
from datetime import date

from salon_booking.application.dto.responses import HolidayDTO, ScheduleDTO
from salon_booking.application.ports.schedule_repository import HolidayRepositoryPort, ScheduleRepositoryPort
from salon_booking.domain.entities.holiday import Holiday
from salon_booking.domain.entities.schedule import DayOfWeek, Schedule
from salon_booking.domain.exceptions import ConflictError, NotFoundError

DEFAULT_WEEKLY_HOURS: dict[DayOfWeek, tuple[str, str]] = {
    DayOfWeek.MONDAY: ("09:00", "18:00"),
    DayOfWeek.TUESDAY: ("09:00", "18:00"),
    DayOfWeek.WEDNESDAY: ("09:00", "18:00"),
    DayOfWeek.THURSDAY: ("09:00", "18:00"),
    DayOfWeek.FRIDAY: ("09:00", "18:00"),
    DayOfWeek.SATURDAY: ("10:00", "14:00"),
}


class ManageSchedulesUseCase:
    """Working-hours administration: weekly schedules, holidays and holiday overrides."""

    def __init__(self, schedules: ScheduleRepositoryPort, holidays: HolidayRepositoryPort) -> None:
        self._schedules = schedules
        self._holidays = holidays
        self._logger = logging.getLogger(__name__)

    def seed_default_schedules(self) -> list[ScheduleDTO]:
        """Mon-Fri 09:00-18:00 and Sat 10:00-14:00, only for days that have no regular schedule yet."""
        for day, (start, end) in DEFAULT_WEEKLY_HOURS.items():
            if self._regular_schedule(day) is not None:
                continue
            self._schedules.save(
                Schedule(
                    id=str(uuid.uuid5(uuid.NAMESPACE_URL, f"salon-booking/schedule/{day.value}")),
                    day_of_week=day,
                    start_time=start,
                    end_time=end,
                )
            )
        return self.list_schedules()

    def create_schedule(
        self,
        day_of_week: DayOfWeek | str,
        start_time: str,
        end_time: str,
        holiday_id: str | None = None,
    ) -> ScheduleDTO:
        day = DayOfWeek.parse(day_of_week)

        if holiday_id:
            holiday = self._holidays.find_by_id(holiday_id)
            if holiday is None:
                raise NotFoundError("Holiday", holiday_id)
            if self._schedules.find_by_holiday_id(holiday_id) is not None:
                raise ConflictError(f"Holiday {holiday.name} already has a schedule")
        elif self._regular_schedule(day) is not None:
            raise ConflictError(f"A regular schedule for {day.value} already exists")

        schedule = self._schedules.save(Schedule.create(day, start_time, end_time, holiday_id=holiday_id))
        self._logger.info(
            "Schedule created",
            extra={"schedule_id": schedule.id, "day_of_week": schedule.day_of_week.value},
        )
        return ScheduleDTO.from_entity(schedule)

    def update_schedule(self, schedule_id: str, start_time: str, end_time: str) -> ScheduleDTO:
        schedule = self._schedules.find_by_id(schedule_id)
        if schedule is None:
            raise NotFoundError("Schedule", schedule_id)
        schedule.update_schedule(start_time, end_time)
        return ScheduleDTO.from_entity(self._schedules.update(schedule))

    def list_schedules(self) -> list[ScheduleDTO]:
        order = list(DayOfWeek)
        ordered = sorted(
            self._schedules.find_all(),
            key=lambda s: (order.index(s.day_of_week), s.holiday_id is not None, s.start_time),
        )
        return [ScheduleDTO.from_entity(s) for s in ordered]

    def create_holiday(self, name: str, on: date, description: str | None = None) -> HolidayDTO:
        if self._holidays.find_by_date(on) is not None:
            raise ConflictError(f"A holiday on {on.isoformat()} already exists")
        holiday = self._holidays.save(Holiday.create(name, on, description))
        self._logger.info("Holiday created", extra={"holiday_id": holiday.id})
        return HolidayDTO.from_entity(holiday)

    def list_holidays(self) -> list[HolidayDTO]:
        return [HolidayDTO.from_entity(h) for h in sorted(self._holidays.find_all(), key=lambda h: h.date)]

    def _regular_schedule(self, day: DayOfWeek) -> Schedule | None:
        for schedule in self._schedules.find_by_day_of_week(day):
            if not schedule.is_holiday_override:
                return schedule
        return None
