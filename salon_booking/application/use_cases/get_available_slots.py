from __future__ import annotations

import logging
import re
from datetime import date, tzinfo

from salon_booking.application.dto.requests import AvailableSlotsRequest
from salon_booking.application.dto.responses import DayAvailabilityDTO
from salon_booking.application.ports.appointment_repository import AppointmentRepositoryPort
from salon_booking.application.ports.directory import DirectoryPort
from salon_booking.application.utils.clock import Clock, localize, system_clock
from salon_booking.application.utils.lookups import (
    ensure_services_exist,
    ensure_users_exist,
    total_service_duration,
)
from salon_booking.application.utils.schedule_resolver import ScheduleResolver
from salon_booking.domain.availability import AvailabilityCalculator
from salon_booking.domain.entities.appointment import validate_duration
from salon_booking.domain.exceptions import BusinessRuleError, ValidationError

DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_date(value: str) -> date:
    if not isinstance(value, str) or not DATE_PATTERN.match(value.strip()):
        raise ValidationError(f"Date must be in YYYY-MM-DD format, got {value!r}")
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        raise ValidationError(f"Invalid date: {value!r}") from None


class GetAvailableSlotsUseCase:
    def __init__(
        self,
        appointments: AppointmentRepositoryPort,
        schedules: ScheduleResolver,
        directory: DirectoryPort,
        calculator: AvailabilityCalculator,
        timezone: tzinfo,
        clock: Clock | None = None,
        default_slot_minutes: int = 30,
        max_advance_days: int = 183,
    ) -> None:
        self._appointments = appointments
        self._schedules = schedules
        self._directory = directory
        self._calculator = calculator
        self._timezone = timezone
        self._clock = clock or system_clock(timezone)
        self._default_slot_minutes = default_slot_minutes
        self._max_advance_days = max_advance_days
        self._logger = logging.getLogger(__name__)

    def execute(self, request: AvailableSlotsRequest) -> DayAvailabilityDTO:
        target = parse_date(request.date)
        if request.duration is not None:
            validate_duration(request.duration)

        now = localize(self._clock(), self._timezone)
        today = now.date()
        if target < today:
            raise BusinessRuleError("Cannot check availability for past dates")
        if (target - today).days > self._max_advance_days:
            raise BusinessRuleError(f"Cannot check availability more than {self._max_advance_days} days in advance")

        if request.service_ids:
            ensure_services_exist(self._directory, request.service_ids)
        if request.stylist_id:
            ensure_users_exist(self._directory, [request.stylist_id])

        if request.duration is not None:
            duration = request.duration
        elif request.service_ids:
            duration = total_service_duration(self._directory, request.service_ids)
        else:
            duration = self._default_slot_minutes

        report = self._calculator.calculate(
            target_date=target,
            schedule=self._schedules.resolve(target),
            booked=self._appointments.find_by_date(target),
            duration=duration,
            stylist_id=request.stylist_id or None,
            now=now,
        )

        self._logger.debug(
            "Availability computed",
            extra={"stylist_id": request.stylist_id, "available_slots": report.available_slots},
        )
        return DayAvailabilityDTO.from_report(report)
