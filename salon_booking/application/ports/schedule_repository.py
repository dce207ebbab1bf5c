from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date

from salon_booking.domain.entities.holiday import Holiday
from salon_booking.domain.entities.schedule import DayOfWeek, Schedule


class ScheduleRepositoryPort(ABC):
    @abstractmethod
    def find_by_id(self, schedule_id: str) -> Schedule | None:
        raise NotImplementedError

    @abstractmethod
    def find_by_day_of_week(self, day_of_week: DayOfWeek) -> list[Schedule]:
        """Every schedule for that day, holiday-bound ones included."""
        raise NotImplementedError

    @abstractmethod
    def find_by_holiday_id(self, holiday_id: str) -> Schedule | None:
        raise NotImplementedError

    @abstractmethod
    def find_all(self) -> list[Schedule]:
        raise NotImplementedError

    @abstractmethod
    def save(self, schedule: Schedule) -> Schedule:
        raise NotImplementedError

    @abstractmethod
    def update(self, schedule: Schedule) -> Schedule:
        raise NotImplementedError


class HolidayRepositoryPort(ABC):
    @abstractmethod
    def find_by_id(self, holiday_id: str) -> Holiday | None:
        raise NotImplementedError

    @abstractmethod
    def find_by_date(self, day: date) -> Holiday | None:
        raise NotImplementedError

    @abstractmethod
    def save(self, holiday: Holiday) -> Holiday:
        raise NotImplementedError

    @abstractmethod
    def find_all(self) -> list[Holiday]:
        raise NotImplementedError
