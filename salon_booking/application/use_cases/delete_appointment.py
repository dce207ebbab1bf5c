from __future__ import annotations

import logging

from salon_booking.application.ports.appointment_repository import AppointmentRepositoryPort
from salon_booking.application.utils.access import ensure_party
from salon_booking.application.utils.lookups import load_appointment


class DeleteAppointmentUseCase:
    def __init__(self, appointments: AppointmentRepositoryPort) -> None:
        self._appointments = appointments
        self._logger = logging.getLogger(__name__)

    def execute(self, appointment_id: str, requester_id: str) -> None:
        appointment = load_appointment(self._appointments, appointment_id)
        ensure_party(appointment, requester_id, "delete")
        self._appointments.delete(appointment.id)
        self._logger.info(
            "Appointment deleted",
            extra={"appointment_id": appointment.id, "requester_id": requester_id},
        )
