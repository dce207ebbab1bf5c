from __future__ import annotations

import logging
from datetime import datetime, timedelta, tzinfo
from typing import Any

from salon_booking.application.dto.requests import UpdateAppointmentRequest
from salon_booking.application.dto.responses import AppointmentDTO
from salon_booking.application.ports.appointment_repository import AppointmentRepositoryPort
from salon_booking.application.ports.directory import DirectoryPort
from salon_booking.application.utils.access import ensure_party
from salon_booking.application.utils.clock import Clock, describe_lead, localize, system_clock
from salon_booking.application.utils.lookups import (
    ensure_services_exist,
    ensure_users_exist,
    ensure_within_booking_horizon,
    load_appointment,
)
from salon_booking.application.utils.schedule_resolver import ScheduleResolver
from salon_booking.domain.entities.appointment import Appointment, validate_duration
from salon_booking.domain.entities.appointment_status import AppointmentStatusName
from salon_booking.domain.exceptions import BusinessRuleError, ValidationError
from salon_booking.domain.time_window import format_time

MAX_NOTES_LENGTH = 500
MAX_REASON_LENGTH = 300


class UpdateAppointmentUseCase:
    """
    Reschedules, reassigns or re-scopes an appointment.

    The new time is validated against the working hours of its own date and
    conflicts are re-checked by the repository when the change is written.
    """

    def __init__(
        self,
        appointments: AppointmentRepositoryPort,
        schedules: ScheduleResolver,
        directory: DirectoryPort,
        timezone: tzinfo,
        clock: Clock | None = None,
        min_lead_hours: int = 24,
        max_advance_days: int = 183,
    ) -> None:
        self._appointments = appointments
        self._schedules = schedules
        self._directory = directory
        self._timezone = timezone
        self._clock = clock or system_clock(timezone)
        self._min_lead = timedelta(hours=min_lead_hours)
        self._max_advance_days = max_advance_days
        self._logger = logging.getLogger(__name__)

    def execute(
        self,
        appointment_id: str,
        request: UpdateAppointmentRequest,
        requester_id: str,
    ) -> AppointmentDTO:
        fields = self._validate(request)

        now = self._clock()
        appointment = load_appointment(self._appointments, appointment_id)

        ensure_party(appointment, requester_id, "modify")

        if appointment.is_terminal():
            raise BusinessRuleError(f"Cannot modify a {appointment.status.value} appointment")
        if appointment.is_in_past(now):
            raise BusinessRuleError("Cannot modify past appointments")
        if not appointment.can_be_modified(now, lead=self._min_lead):
            raise BusinessRuleError(
                f"Appointments can only be modified at least {describe_lead(self._min_lead)} in advance"
            )

        new_start = (
            localize(request.date_time, self._timezone)
            if "date_time" in fields and request.date_time is not None
            else appointment.start_time
        )
        new_duration = (
            request.duration if "duration" in fields and request.duration is not None else appointment.duration
        )
        time_changed = new_start != appointment.start_time or new_duration != appointment.duration

        if (
            time_changed
            and appointment.status == AppointmentStatusName.CONFIRMED
            and not (request.notes or request.reason)
        ):
            raise BusinessRuleError("Changing the time of a confirmed appointment requires notes or a reason")

        changes: dict[str, Any] = {}

        if time_changed:
            changes.update(self._reschedule(appointment, new_start, new_duration, now))

        if "stylist_id" in fields and request.stylist_id != appointment.stylist_id:
            ensure_users_exist(self._directory, [request.stylist_id])
            changes["stylist_id"] = (appointment.stylist_id, request.stylist_id)
            appointment.assign_stylist(request.stylist_id, now=now)

        if "service_ids" in fields and request.service_ids is not None:
            ensure_services_exist(self._directory, request.service_ids)
            if list(request.service_ids) != appointment.service_ids:
                changes["service_ids"] = (list(appointment.service_ids), list(request.service_ids))
                appointment.replace_services(request.service_ids, now=now)

        if not changes:
            return AppointmentDTO.from_entity(appointment)

        saved = self._appointments.update(appointment)

        self._logger.info(
            "Appointment updated",
            extra={
                "appointment_id": saved.id,
                "stylist_id": saved.stylist_id,
                "status": saved.status.value,
                "requester_id": requester_id,
                "reason": request.reason or request.notes,
                "changes": _format_changes(changes),
            },
        )
        return AppointmentDTO.from_entity(saved)

    def _validate(self, request: UpdateAppointmentRequest) -> set[str]:
        fields = request.changed_fields()
        if not fields:
            raise ValidationError("At least one field must be provided for update")
        if "duration" in fields and request.duration is not None:
            validate_duration(request.duration)
        if "service_ids" in fields and request.service_ids is not None and not request.service_ids:
            raise ValidationError("At least one service is required")
        if request.notes is not None and len(request.notes) > MAX_NOTES_LENGTH:
            raise ValidationError(f"Notes cannot exceed {MAX_NOTES_LENGTH} characters")
        if request.reason is not None and len(request.reason) > MAX_REASON_LENGTH:
            raise ValidationError(f"Reason cannot exceed {MAX_REASON_LENGTH} characters")
        return fields

    def _reschedule(
        self,
        appointment: Appointment,
        new_start: datetime,
        new_duration: int,
        now: datetime,
    ) -> dict[str, Any]:
        if new_start <= now:
            raise ValidationError("Cannot reschedule to a past date")
        ensure_within_booking_horizon(new_start.date(), localize(now, self._timezone).date(), self._max_advance_days)

        local_start = localize(new_start, self._timezone)
        schedule = self._schedules.resolve(local_start.date())
        if schedule is None:
            raise BusinessRuleError(f"The salon is closed on {local_start.date().isoformat()}")
        if not schedule.contains_interval(format_time(local_start), new_duration):
            raise BusinessRuleError(
                f"Appointment must be within working hours ({schedule.start_time} - {schedule.end_time})"
            )

        changes: dict[str, Any] = {}
        if new_start != appointment.start_time:
            changes["start_time"] = (appointment.start_time.isoformat(), new_start.isoformat())
        if new_duration != appointment.duration:
            changes["duration"] = (appointment.duration, new_duration)

        appointment.reschedule(new_start, new_duration, now=now)
        appointment.schedule_id = schedule.id
        return changes


def _format_changes(changes: dict[str, Any]) -> str:
    return ", ".join(f"{key}: {old} -> {new}" for key, (old, new) in changes.items())
