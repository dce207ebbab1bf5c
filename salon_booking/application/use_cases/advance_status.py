from __future__ import annotations

import logging
from datetime import tzinfo

from salon_booking.application.dto.responses import AppointmentDTO
from salon_booking.application.ports.appointment_repository import AppointmentRepositoryPort
from salon_booking.application.ports.appointment_status_repository import AppointmentStatusRepositoryPort
from salon_booking.application.utils.access import ensure_party
from salon_booking.application.utils.clock import Clock, system_clock
from salon_booking.application.utils.lookups import load_appointment, require_status
from salon_booking.domain.entities.appointment import Appointment
from salon_booking.domain.entities.appointment_status import AppointmentStatusName
from salon_booking.domain.exceptions import ValidationError

_ACTIONS = {
    AppointmentStatusName.IN_PROGRESS: ("start", Appointment.mark_as_in_progress),
    AppointmentStatusName.COMPLETED: ("complete", Appointment.mark_as_completed),
    AppointmentStatusName.NO_SHOW: ("mark as no-show", Appointment.mark_as_no_show),
}


class AdvanceAppointmentStatusUseCase:
    """Moves an appointment through the in-salon part of its lifecycle: start, complete, no-show."""

    def __init__(
        self,
        appointments: AppointmentRepositoryPort,
        statuses: AppointmentStatusRepositoryPort,
        timezone: tzinfo,
        clock: Clock | None = None,
    ) -> None:
        self._appointments = appointments
        self._statuses = statuses
        self._clock = clock or system_clock(timezone)
        self._logger = logging.getLogger(__name__)

    def execute(
        self,
        appointment_id: str,
        target: AppointmentStatusName | str,
        requester_id: str,
    ) -> AppointmentDTO:
        resolved = AppointmentStatusName.lookup(target)
        if resolved not in _ACTIONS:
            raise ValidationError(f"Unsupported status change: {target}")
        action, mark = _ACTIONS[resolved]

        appointment = load_appointment(self._appointments, appointment_id)
        ensure_party(appointment, requester_id, action)

        previous = appointment.status
        status = require_status(self._statuses, resolved)
        mark(appointment, status, now=self._clock())
        saved = self._appointments.update(appointment)

        self._logger.info(
            "Appointment status changed",
            extra={
                "appointment_id": saved.id,
                "stylist_id": saved.stylist_id,
                "status": saved.status.value,
                "requester_id": requester_id,
                "changes": f"status: {previous.value} -> {saved.status.value}",
            },
        )
        return AppointmentDTO.from_entity(saved)
