from __future__ import annotations

from collections import Counter
from datetime import date, timedelta, tzinfo

from salon_booking.application.dto.requests import StatisticsRequest
from salon_booking.application.dto.responses import StatisticsDTO
from salon_booking.application.ports.appointment_repository import AppointmentRepositoryPort
from salon_booking.application.utils.clock import localize
from salon_booking.domain.entities.appointment import Appointment
from salon_booking.domain.entities.appointment_status import AppointmentStatusName
from salon_booking.domain.exceptions import ValidationError
from salon_booking.domain.time_window import combine


def _rate(numerator: int, denominator: int) -> float:
    if denominator == 0:
        return 0.0
    return round(numerator / denominator * 100, 2)


class AppointmentStatisticsUseCase:
    def __init__(self, appointments: AppointmentRepositoryPort, timezone: tzinfo) -> None:
        self._appointments = appointments
        self._timezone = timezone

    def execute(self, request: StatisticsRequest | None = None) -> StatisticsDTO:
        request = request or StatisticsRequest()
        appointments = self._select(request.start_date, request.end_date)

        counts = Counter(a.status for a in appointments)
        pending = counts[AppointmentStatusName.PENDING]
        confirmed = counts[AppointmentStatusName.CONFIRMED]
        in_progress = counts[AppointmentStatusName.IN_PROGRESS]
        completed = counts[AppointmentStatusName.COMPLETED]
        cancelled = counts[AppointmentStatusName.CANCELLED]
        no_show = counts[AppointmentStatusName.NO_SHOW]

        return StatisticsDTO(
            total=len(appointments),
            pending=pending,
            confirmed=confirmed,
            in_progress=in_progress,
            completed=completed,
            cancelled=cancelled,
            no_show=no_show,
            completion_rate=_rate(completed, completed + cancelled + no_show),
            show_rate=_rate(completed + in_progress, confirmed + completed + in_progress + no_show),
        )

    def _select(self, start_date: date | None, end_date: date | None) -> list[Appointment]:
        if start_date is not None and end_date is not None:
            if start_date > end_date:
                raise ValidationError("start_date must not be after end_date")
            start = combine(start_date, "00:00", self._timezone)
            end = combine(end_date + timedelta(days=1), "00:00", self._timezone)
            return self._appointments.find_by_date_range(start, end)

        found = self._appointments.find_all()
        if start_date is not None:
            found = [a for a in found if localize(a.start_time, self._timezone).date() >= start_date]
        if end_date is not None:
            found = [a for a in found if localize(a.start_time, self._timezone).date() <= end_date]
        return found
