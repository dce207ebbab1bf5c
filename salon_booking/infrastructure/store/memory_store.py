from __future__ import annotations

import copy
import threading
from datetime import date, datetime, tzinfo

from salon_booking.application.ports.appointment_repository import AppointmentRepositoryPort
from salon_booking.application.ports.appointment_status_repository import AppointmentStatusRepositoryPort
from salon_booking.application.ports.schedule_repository import HolidayRepositoryPort, ScheduleRepositoryPort
from salon_booking.domain.entities.appointment import Appointment
from salon_booking.domain.entities.appointment_status import AppointmentStatus, AppointmentStatusName
from salon_booking.domain.entities.holiday import Holiday
from salon_booking.domain.entities.schedule import DayOfWeek, Schedule
from salon_booking.domain.exceptions import ConflictError, NotFoundError
from salon_booking.infrastructure.store.conflicts import ensure_no_conflict, find_overlapping, local_date


def _by_start(appointments: list[Appointment]) -> list[Appointment]:
    return sorted(appointments, key=lambda a: a.start_time)


class MemoryAppointmentRepository(AppointmentRepositoryPort):
    """
    Dict-backed appointments. Callers always get copies, so a mutation that
    fails half-way never leaks into the store.
    """

    def __init__(self, timezone: tzinfo | None = None) -> None:
        self._appointments: dict[str, Appointment] = {}
        self._timezone = timezone
        self._lock = threading.Lock()

    def _snapshot(self) -> list[Appointment]:
        with self._lock:
            return [copy.deepcopy(a) for a in self._appointments.values()]

    def find_by_id(self, appointment_id: str) -> Appointment | None:
        with self._lock:
            found = self._appointments.get(appointment_id)
            return copy.deepcopy(found) if found else None

    def find_all(self) -> list[Appointment]:
        return _by_start(self._snapshot())

    def find_by_date(self, day: date) -> list[Appointment]:
        return _by_start([a for a in self._snapshot() if local_date(a.start_time, self._timezone) == day])

    def find_by_date_range(self, start: datetime, end: datetime) -> list[Appointment]:
        return _by_start([a for a in self._snapshot() if start <= a.start_time < end])

    def find_by_client_id(self, client_id: str) -> list[Appointment]:
        return _by_start([a for a in self._snapshot() if a.client_id == client_id])

    def find_by_stylist_id(self, stylist_id: str) -> list[Appointment]:
        return _by_start([a for a in self._snapshot() if a.stylist_id == stylist_id])

    def find_conflicting(
        self,
        start_time: datetime,
        duration: int,
        stylist_id: str | None = None,
        exclude_id: str | None = None,
    ) -> list[Appointment]:
        return _by_start(find_overlapping(self._snapshot(), start_time, duration, stylist_id, exclude_id))

    def save(self, appointment: Appointment) -> Appointment:
        with self._lock:
            if appointment.id in self._appointments:
                raise ConflictError(f"Appointment already exists: {appointment.id}")
            ensure_no_conflict(self._appointments.values(), appointment)
            self._appointments[appointment.id] = copy.deepcopy(appointment)
        return appointment

    def update(self, appointment: Appointment) -> Appointment:
        with self._lock:
            if appointment.id not in self._appointments:
                raise NotFoundError("Appointment", appointment.id)
            ensure_no_conflict(self._appointments.values(), appointment)
            self._appointments[appointment.id] = copy.deepcopy(appointment)
        return appointment

    def delete(self, appointment_id: str) -> bool:
        with self._lock:
            return self._appointments.pop(appointment_id, None) is not None


class MemoryScheduleRepository(ScheduleRepositoryPort):
    def __init__(self) -> None:
        self._schedules: dict[str, Schedule] = {}

    def find_by_id(self, schedule_id: str) -> Schedule | None:
        found = self._schedules.get(schedule_id)
        return copy.deepcopy(found) if found else None

    def find_by_day_of_week(self, day_of_week: DayOfWeek) -> list[Schedule]:
        return [copy.deepcopy(s) for s in self._schedules.values() if s.day_of_week == day_of_week]

    def find_by_holiday_id(self, holiday_id: str) -> Schedule | None:
        for schedule in self._schedules.values():
            if schedule.holiday_id == holiday_id:
                return copy.deepcopy(schedule)
        return None

    def find_all(self) -> list[Schedule]:
        return [copy.deepcopy(s) for s in self._schedules.values()]

    def save(self, schedule: Schedule) -> Schedule:
        self._schedules[schedule.id] = copy.deepcopy(schedule)
        return schedule

    def update(self, schedule: Schedule) -> Schedule:
        if schedule.id not in self._schedules:
            raise NotFoundError("Schedule", schedule.id)
        self._schedules[schedule.id] = copy.deepcopy(schedule)
        return schedule


class MemoryHolidayRepository(HolidayRepositoryPort):
    def __init__(self) -> None:
        self._holidays: dict[str, Holiday] = {}

    def find_by_id(self, holiday_id: str) -> Holiday | None:
        return self._holidays.get(holiday_id)

    def find_by_date(self, day: date) -> Holiday | None:
        for holiday in self._holidays.values():
            if holiday.date == day:
                return holiday
        return None

    def save(self, holiday: Holiday) -> Holiday:
        self._holidays[holiday.id] = holiday
        return holiday

    def find_all(self) -> list[Holiday]:
        return list(self._holidays.values())


class MemoryAppointmentStatusRepository(AppointmentStatusRepositoryPort):
    def __init__(self) -> None:
        self._statuses: dict[str, AppointmentStatus] = {}

    def find_by_name(self, name: AppointmentStatusName | str) -> AppointmentStatus | None:
        resolved = AppointmentStatusName.lookup(name)
        if resolved is None:
            return None
        for status in self._statuses.values():
            if status.name == resolved:
                return copy.deepcopy(status)
        return None

    def find_by_id(self, status_id: str) -> AppointmentStatus | None:
        found = self._statuses.get(status_id)
        return copy.deepcopy(found) if found else None

    def find_all(self) -> list[AppointmentStatus]:
        order = list(AppointmentStatusName)
        return [copy.deepcopy(s) for s in sorted(self._statuses.values(), key=lambda s: order.index(s.name))]

    def save(self, status: AppointmentStatus) -> AppointmentStatus:
        if self.find_by_name(status.name) is not None:
            raise ConflictError(f"Appointment status already exists: {status.name.value}")
        self._statuses[status.id] = copy.deepcopy(status)
        return status

    def update(self, status: AppointmentStatus) -> AppointmentStatus:
        if status.id not in self._statuses:
            raise NotFoundError("AppointmentStatus", status.id)
        self._statuses[status.id] = copy.deepcopy(status)
        return status
