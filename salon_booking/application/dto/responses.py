from __future__ import annotations

import datetime as dt
from datetime import datetime

from pydantic import BaseModel, Field

from salon_booking.domain.availability import DayAvailability
from salon_booking.domain.entities.appointment import Appointment
from salon_booking.domain.entities.appointment_status import AppointmentStatus
from salon_booking.domain.entities.holiday import Holiday
from salon_booking.domain.entities.schedule import Schedule


class AppointmentDTO(BaseModel):
    id: str
    start_time: datetime
    end_time: datetime
    duration: int
    status: str
    status_id: str
    organizer_id: str
    client_id: str
    stylist_id: str | None = None
    schedule_id: str
    service_ids: list[str] = Field(default_factory=list)
    confirmed_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_entity(cls, appointment: Appointment) -> "AppointmentDTO":
        return cls(
            id=appointment.id,
            start_time=appointment.start_time,
            end_time=appointment.get_end_time(),
            duration=appointment.duration,
            status=appointment.status.value,
            status_id=appointment.status_id,
            organizer_id=appointment.organizer_id,
            client_id=appointment.client_id,
            stylist_id=appointment.stylist_id,
            schedule_id=appointment.schedule_id,
            service_ids=list(appointment.service_ids),
            confirmed_at=appointment.confirmed_at,
            created_at=appointment.created_at,
            updated_at=appointment.updated_at,
        )


class AvailableSlotDTO(BaseModel):
    time: str
    available: bool
    duration: int
    conflict_reason: str | None = None
    stylist_id: str | None = None


class WorkingHoursDTO(BaseModel):
    start: str
    end: str


class DayAvailabilityDTO(BaseModel):
    date: dt.date
    day_of_week: str
    is_working_day: bool
    total_slots: int
    available_slots: int
    slots: list[AvailableSlotDTO] = Field(default_factory=list)
    working_hours: WorkingHoursDTO | None = None

    @classmethod
    def from_report(cls, report: DayAvailability) -> "DayAvailabilityDTO":
        return cls(
            date=report.date,
            day_of_week=report.day_of_week.value,
            is_working_day=report.is_working_day,
            total_slots=report.total_slots,
            available_slots=report.available_slots,
            slots=[
                AvailableSlotDTO(
                    time=s.time,
                    available=s.available,
                    duration=s.duration,
                    conflict_reason=s.conflict_reason,
                    stylist_id=s.stylist_id,
                )
                for s in report.slots
            ],
            working_hours=(
                WorkingHoursDTO(start=report.working_hours[0], end=report.working_hours[1])
                if report.working_hours else None
            ),
        )


class StatisticsDTO(BaseModel):
    total: int = 0
    pending: int = 0
    confirmed: int = 0
    in_progress: int = 0
    completed: int = 0
    cancelled: int = 0
    no_show: int = 0
    completion_rate: float = 0.0
    show_rate: float = 0.0


class AppointmentStatusDTO(BaseModel):
    id: str
    name: str
    description: str | None = None
    is_terminal: bool
    valid_transitions: list[str] = Field(default_factory=list)

    @classmethod
    def from_entity(cls, status: AppointmentStatus) -> "AppointmentStatusDTO":
        return cls(
            id=status.id,
            name=status.name.value,
            description=status.description,
            is_terminal=status.is_terminal_status(),
            valid_transitions=sorted(s.value for s in status.name.allowed_transitions()),
        )


class ScheduleDTO(BaseModel):
    id: str
    day_of_week: str
    start_time: str
    end_time: str
    holiday_id: str | None = None
    duration_minutes: int

    @classmethod
    def from_entity(cls, schedule: Schedule) -> "ScheduleDTO":
        return cls(
            id=schedule.id,
            day_of_week=schedule.day_of_week.value,
            start_time=schedule.start_time,
            end_time=schedule.end_time,
            holiday_id=schedule.holiday_id,
            duration_minutes=schedule.get_duration_in_minutes(),
        )


class HolidayDTO(BaseModel):
    id: str
    name: str
    date: dt.date
    description: str | None = None

    @classmethod
    def from_entity(cls, holiday: Holiday) -> "HolidayDTO":
        return cls(id=holiday.id, name=holiday.name, date=holiday.date, description=holiday.description)
