from __future__ import annotations

import logging
from datetime import timedelta, tzinfo

from salon_booking.application.dto.requests import ConfirmAppointmentRequest
from salon_booking.application.dto.responses import AppointmentDTO
from salon_booking.application.ports.appointment_repository import AppointmentRepositoryPort
from salon_booking.application.ports.appointment_status_repository import AppointmentStatusRepositoryPort
from salon_booking.application.utils.access import ensure_party
from salon_booking.application.utils.clock import Clock, describe_lead, system_clock
from salon_booking.application.utils.lookups import load_appointment, require_status
from salon_booking.domain.entities.appointment_status import AppointmentStatusName
from salon_booking.domain.exceptions import BusinessRuleError


class ConfirmAppointmentUseCase:
    def __init__(
        self,
        appointments: AppointmentRepositoryPort,
        statuses: AppointmentStatusRepositoryPort,
        timezone: tzinfo,
        clock: Clock | None = None,
        min_lead_minutes: int = 60,
    ) -> None:
        self._appointments = appointments
        self._statuses = statuses
        self._clock = clock or system_clock(timezone)
        self._min_lead = timedelta(minutes=min_lead_minutes)
        self._logger = logging.getLogger(__name__)

    def execute(
        self,
        appointment_id: str,
        request: ConfirmAppointmentRequest,
        requester_id: str,
    ) -> AppointmentDTO:
        now = self._clock()
        appointment = load_appointment(self._appointments, appointment_id)

        if appointment.is_confirmed() or appointment.status == AppointmentStatusName.CONFIRMED:
            raise BusinessRuleError("Appointment is already confirmed")
        if appointment.status == AppointmentStatusName.CANCELLED:
            raise BusinessRuleError("Cannot confirm a cancelled appointment")
        if appointment.status == AppointmentStatusName.COMPLETED:
            raise BusinessRuleError("Cannot confirm a completed appointment")
        if appointment.is_in_past(now):
            raise BusinessRuleError("Cannot confirm past appointments")

        ensure_party(appointment, requester_id, "confirm")

        if appointment.minutes_until_start(now) <= self._min_lead.total_seconds() / 60:
            raise BusinessRuleError(
                f"Cannot confirm appointments less than {describe_lead(self._min_lead)} before start time"
            )

        confirmed = require_status(self._statuses, AppointmentStatusName.CONFIRMED)
        appointment.mark_as_confirmed(confirmed, now=now)
        saved = self._appointments.update(appointment)

        self._logger.info(
            "Appointment confirmed",
            extra={
                "appointment_id": saved.id,
                "stylist_id": saved.stylist_id,
                "status": saved.status.value,
                "requester_id": request.confirmed_by or requester_id,
                "reason": request.notes,
                "notify_client": request.notify_client,
            },
        )
        return AppointmentDTO.from_entity(saved)

