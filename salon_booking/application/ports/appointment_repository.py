from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date, datetime

from salon_booking.domain.entities.appointment import Appointment


class AppointmentRepositoryPort(ABC):
    @abstractmethod
    def find_by_id(self, appointment_id: str) -> Appointment | None:
        raise NotImplementedError

    @abstractmethod
    def find_all(self) -> list[Appointment]:
        raise NotImplementedError

    @abstractmethod
    def find_by_date(self, day: date) -> list[Appointment]:
        """Appointments starting on the given calendar day, sorted by start."""
        raise NotImplementedError

    @abstractmethod
    def find_by_date_range(self, start: datetime, end: datetime) -> list[Appointment]:
        """Appointments with start_time in [start, end), sorted by start."""
        raise NotImplementedError

    @abstractmethod
    def find_by_client_id(self, client_id: str) -> list[Appointment]:
        raise NotImplementedError

    @abstractmethod
    def find_by_stylist_id(self, stylist_id: str) -> list[Appointment]:
        raise NotImplementedError

    @abstractmethod
    def find_conflicting(
        self,
        start_time: datetime,
        duration: int,
        stylist_id: str | None = None,
        exclude_id: str | None = None,
    ) -> list[Appointment]:
        """
        Time-blocking appointments overlapping [start_time, start_time + duration).
        A stylist_id counts that stylist's bookings plus unassigned ones; without one every booking counts.
        """
        raise NotImplementedError

    @abstractmethod
    def save(self, appointment: Appointment) -> Appointment:
        """
        Insert a new appointment.
        Reserve-or-fail: raises ConflictError if the interval clashes, atomically with the write.
        """
        raise NotImplementedError

    @abstractmethod
    def update(self, appointment: Appointment) -> Appointment:
        """
        Replace a stored appointment. Conflicts are re-checked excluding the appointment itself.
        Raises NotFoundError if the id is unknown.
        """
        raise NotImplementedError

    @abstractmethod
    def delete(self, appointment_id: str) -> bool:
        raise NotImplementedError
