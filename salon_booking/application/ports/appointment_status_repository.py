from __future__ import annotations

from abc import ABC, abstractmethod

from salon_booking.domain.entities.appointment_status import AppointmentStatus, AppointmentStatusName


class AppointmentStatusRepositoryPort(ABC):
    @abstractmethod
    def find_by_name(self, name: AppointmentStatusName | str) -> AppointmentStatus | None:
        raise NotImplementedError

    @abstractmethod
    def find_by_id(self, status_id: str) -> AppointmentStatus | None:
        raise NotImplementedError

    @abstractmethod
    def find_all(self) -> list[AppointmentStatus]:
        raise NotImplementedError

    @abstractmethod
    def save(self, status: AppointmentStatus) -> AppointmentStatus:
        raise NotImplementedError

    @abstractmethod
    def update(self, status: AppointmentStatus) -> AppointmentStatus:
        raise NotImplementedError
