from __future__ import annotations

from salon_booking.application.dto.responses import AppointmentDTO
from salon_booking.application.ports.appointment_repository import AppointmentRepositoryPort
from salon_booking.application.utils.lookups import load_appointment


class GetAppointmentsUseCase:
    def __init__(self, appointments: AppointmentRepositoryPort) -> None:
        self._appointments = appointments

    def get_by_id(self, appointment_id: str) -> AppointmentDTO:
        return AppointmentDTO.from_entity(load_appointment(self._appointments, appointment_id))

    def list_by_client(self, client_id: str) -> list[AppointmentDTO]:
        found = sorted(self._appointments.find_by_client_id(client_id), key=lambda a: a.start_time)
        return [AppointmentDTO.from_entity(a) for a in found]

    def list_by_stylist(self, stylist_id: str) -> list[AppointmentDTO]:
        found = sorted(self._appointments.find_by_stylist_id(stylist_id), key=lambda a: a.start_time)
        return [AppointmentDTO.from_entity(a) for a in found]
