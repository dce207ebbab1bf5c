from __future__ import annotations

import logging

from salon_booking.application.dto.responses import AppointmentStatusDTO
from salon_booking.application.ports.appointment_status_repository import AppointmentStatusRepositoryPort
from salon_booking.domain.entities.appointment_status import AppointmentStatus, AppointmentStatusName
from salon_booking.domain.exceptions import NotFoundError


class ManageAppointmentStatusesUseCase:
    def __init__(self, statuses: AppointmentStatusRepositoryPort) -> None:
        self._statuses = statuses
        self._logger = logging.getLogger(__name__)

    def seed_system_statuses(self) -> list[AppointmentStatusDTO]:
        """Create any missing status rows. Safe to run on every start."""
        created = 0
        for name in AppointmentStatusName:
            if self._statuses.find_by_name(name) is None:
                self._statuses.save(AppointmentStatus.system(name))
                created += 1
        if created:
            self._logger.info("Seeded appointment statuses", extra={"seeded": created})
        return self.list_statuses()

    def list_statuses(self) -> list[AppointmentStatusDTO]:
        return [AppointmentStatusDTO.from_entity(s) for s in self._statuses.find_all()]

    def update_description(self, status_id: str, description: str | None) -> AppointmentStatusDTO:
        status = self._load(status_id)
        status.update_description(description)
        return AppointmentStatusDTO.from_entity(self._statuses.update(status))

    def valid_transitions(self, status_id: str) -> list[str]:
        status = self._load(status_id)
        return sorted(s.value for s in status.name.allowed_transitions())

    def _load(self, status_id: str) -> AppointmentStatus:
        status = self._statuses.find_by_id(status_id)
        if status is None:
            raise NotFoundError("AppointmentStatus", status_id)
        return status
