from __future__ import annotations

import logging
from datetime import timedelta, tzinfo

from salon_booking.application.dto.requests import CancelAppointmentRequest, CancelledBy
from salon_booking.application.dto.responses import AppointmentDTO
from salon_booking.application.ports.appointment_repository import AppointmentRepositoryPort
from salon_booking.application.ports.appointment_status_repository import AppointmentStatusRepositoryPort
from salon_booking.application.utils.access import ensure_party
from salon_booking.application.utils.clock import Clock, describe_lead, system_clock
from salon_booking.application.utils.lookups import load_appointment, require_status
from salon_booking.domain.entities.appointment import Appointment
from salon_booking.domain.entities.appointment_status import AppointmentStatusName
from salon_booking.domain.exceptions import BusinessRuleError, ValidationError

MAX_REASON_LENGTH = 300


class CancelAppointmentUseCase:
    def __init__(
        self,
        appointments: AppointmentRepositoryPort,
        statuses: AppointmentStatusRepositoryPort,
        timezone: tzinfo,
        clock: Clock | None = None,
        min_lead_minutes: int = 120,
    ) -> None:
        self._appointments = appointments
        self._statuses = statuses
        self._clock = clock or system_clock(timezone)
        self._min_lead = timedelta(minutes=min_lead_minutes)
        self._logger = logging.getLogger(__name__)

    def execute(
        self,
        appointment_id: str,
        request: CancelAppointmentRequest,
        requester_id: str,
    ) -> AppointmentDTO:
        if request.reason is not None and len(request.reason) > MAX_REASON_LENGTH:
            raise ValidationError(f"Reason cannot exceed {MAX_REASON_LENGTH} characters")

        now = self._clock()
        appointment = load_appointment(self._appointments, appointment_id)

        if appointment.status == AppointmentStatusName.CANCELLED:
            raise BusinessRuleError("Appointment is already cancelled")
        if appointment.status == AppointmentStatusName.COMPLETED:
            raise BusinessRuleError("Cannot cancel a completed appointment")
        if appointment.is_in_past(now):
            raise BusinessRuleError("Cannot cancel past appointments")

        ensure_party(appointment, requester_id, "cancel", allow_client=True)

        if appointment.minutes_until_start(now) <= self._min_lead.total_seconds() / 60:
            raise BusinessRuleError(
                f"Cannot cancel appointments less than {describe_lead(self._min_lead)} before start time"
            )

        cancelled = require_status(self._statuses, AppointmentStatusName.CANCELLED)
        appointment.mark_as_cancelled(cancelled, now=now)
        saved = self._appointments.update(appointment)

        cancelled_by = request.cancelled_by or _infer_role(appointment, requester_id)
        self._logger.info(
            "Appointment cancelled",
            extra={
                "appointment_id": saved.id,
                "stylist_id": saved.stylist_id,
                "status": saved.status.value,
                "requester_id": requester_id,
                "cancelled_by": cancelled_by.value,
                "reason": request.reason,
                "notify_client": request.notify_client,
            },
        )
        return AppointmentDTO.from_entity(saved)


def _infer_role(appointment: Appointment, requester_id: str) -> CancelledBy:
    if requester_id == appointment.client_id:
        return CancelledBy.client
    if requester_id == appointment.stylist_id:
        return CancelledBy.stylist
    return CancelledBy.admin
