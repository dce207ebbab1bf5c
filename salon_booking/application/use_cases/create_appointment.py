from __future__ import annotations

import logging
from datetime import datetime, tzinfo

from salon_booking.application.dto.requests import CreateAppointmentRequest
from salon_booking.application.dto.responses import AppointmentDTO
from salon_booking.application.ports.appointment_repository import AppointmentRepositoryPort
from salon_booking.application.ports.appointment_status_repository import AppointmentStatusRepositoryPort
from salon_booking.application.ports.directory import DirectoryPort
from salon_booking.application.utils.clock import Clock, localize, system_clock
from salon_booking.application.utils.lookups import (
    ensure_services_exist,
    ensure_users_exist,
    ensure_within_booking_horizon,
    require_status,
    total_service_duration,
)
from salon_booking.application.utils.schedule_resolver import ScheduleResolver
from salon_booking.domain.entities.appointment import Appointment, validate_duration
from salon_booking.domain.entities.appointment_status import INITIAL_STATUS
from salon_booking.domain.exceptions import BusinessRuleError, ValidationError
from salon_booking.domain.time_window import format_time

MAX_NOTES_LENGTH = 500


class CreateAppointmentUseCase:
    def __init__(
        self,
        appointments: AppointmentRepositoryPort,
        statuses: AppointmentStatusRepositoryPort,
        schedules: ScheduleResolver,
        directory: DirectoryPort,
        timezone: tzinfo,
        clock: Clock | None = None,
        max_advance_days: int = 183,
    ) -> None:
        self._appointments = appointments
        self._statuses = statuses
        self._schedules = schedules
        self._directory = directory
        self._timezone = timezone
        self._clock = clock or system_clock(timezone)
        self._max_advance_days = max_advance_days
        self._logger = logging.getLogger(__name__)

    def execute(self, request: CreateAppointmentRequest, organizer_id: str) -> AppointmentDTO:
        now = self._clock()
        start = self._validate(request, now)

        ensure_users_exist(self._directory, [organizer_id, request.client_id, request.stylist_id])
        ensure_services_exist(self._directory, request.service_ids)

        if request.duration is not None:
            duration = request.duration
        else:
            duration = total_service_duration(self._directory, request.service_ids)

        local_day = start.date()
        schedule = self._schedules.resolve(local_day)
        if schedule is None:
            raise BusinessRuleError(f"The salon is closed on {local_day.isoformat()}")
        if not schedule.contains_interval(format_time(start), duration):
            raise BusinessRuleError(
                f"Appointment must be within working hours ({schedule.start_time} - {schedule.end_time})"
            )

        pending = require_status(self._statuses, INITIAL_STATUS)

        appointment = Appointment.create(
            start_time=start,
            duration=duration,
            organizer_id=organizer_id,
            client_id=request.client_id,
            schedule_id=schedule.id,
            status_id=pending.id,
            status=pending.name,
            stylist_id=request.stylist_id,
            service_ids=request.service_ids,
            now=now,
        )
        saved = self._appointments.save(appointment)

        self._logger.info(
            "Appointment created",
            extra={
                "appointment_id": saved.id,
                "stylist_id": saved.stylist_id,
                "status": saved.status.value,
                "requester_id": organizer_id,
            },
        )
        return AppointmentDTO.from_entity(saved)

    def _validate(self, request: CreateAppointmentRequest, now: datetime) -> datetime:
        if not request.client_id or not request.client_id.strip():
            raise ValidationError("Client ID is required")
        if not request.service_ids:
            raise ValidationError("At least one service is required")
        if request.duration is not None:
            validate_duration(request.duration)
        if request.notes is not None and len(request.notes) > MAX_NOTES_LENGTH:
            raise ValidationError(f"Notes cannot exceed {MAX_NOTES_LENGTH} characters")

        start = localize(request.date_time, self._timezone)
        if start <= now:
            raise ValidationError("Appointment cannot be scheduled in the past")
        ensure_within_booking_horizon(start.date(), localize(now, self._timezone).date(), self._max_advance_days)
        return start
