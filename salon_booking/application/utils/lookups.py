from __future__ import annotations

from datetime import date, timedelta
from typing import Iterable

from salon_booking.application.ports.appointment_repository import AppointmentRepositoryPort
from salon_booking.application.ports.appointment_status_repository import AppointmentStatusRepositoryPort
from salon_booking.application.ports.directory import DirectoryPort
from salon_booking.domain.entities.appointment import MIN_DURATION_MINUTES, Appointment
from salon_booking.domain.entities.appointment_status import AppointmentStatus, AppointmentStatusName
from salon_booking.domain.exceptions import BusinessRuleError, NotFoundError


def load_appointment(appointments: AppointmentRepositoryPort, appointment_id: str) -> Appointment:
    appointment = appointments.find_by_id(appointment_id)
    if appointment is None:
        raise NotFoundError("Appointment", appointment_id)
    return appointment


def require_status(statuses: AppointmentStatusRepositoryPort, name: AppointmentStatusName) -> AppointmentStatus:
    status = statuses.find_by_name(name)
    if status is None:
        raise NotFoundError("AppointmentStatus", name.value)
    return status


def ensure_users_exist(directory: DirectoryPort, user_ids: Iterable[str | None]) -> None:
    for user_id in user_ids:
        if user_id and not directory.user_exists(user_id):
            raise NotFoundError("User", user_id)


def ensure_services_exist(directory: DirectoryPort, service_ids: Iterable[str]) -> None:
    for service_id in service_ids:
        if not directory.service_exists(service_id):
            raise NotFoundError("Service", service_id)


def total_service_duration(directory: DirectoryPort, service_ids: Iterable[str]) -> int:
    """Sum of the services' durations, never below the minimum bookable duration."""
    total = 0
    for service_id in service_ids:
        duration = directory.get_service_duration(service_id)
        if duration is None:
            raise NotFoundError("Service", service_id)
        total += duration
    return max(total, MIN_DURATION_MINUTES)


def ensure_within_booking_horizon(day: date, today: date, max_advance_days: int) -> None:
    if day > today + timedelta(days=max_advance_days):
        raise BusinessRuleError(f"Cannot book more than {max_advance_days} days in advance")
