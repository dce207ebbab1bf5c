from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Iterable

from salon_booking.domain.entities.appointment_status import (
    INITIAL_STATUS,
    AppointmentStatus,
    AppointmentStatusName,
    ensure_transition,
)
from salon_booking.domain.exceptions import BusinessRuleError, ValidationError
from salon_booking.domain.time_window import overlaps

MIN_DURATION_MINUTES = 15
MAX_DURATION_MINUTES = 480
DURATION_STEP_MINUTES = 15
DEFAULT_MODIFY_LEAD = timedelta(hours=24)

# Statuses whose interval no longer occupies the stylist.
NON_BLOCKING_STATUSES = frozenset({AppointmentStatusName.CANCELLED, AppointmentStatusName.NO_SHOW})


def _now_like(reference: datetime) -> datetime:
    """Current time with the same awareness as reference, so comparisons never mix naive and aware."""
    if reference.tzinfo is None:
        return datetime.now()
    return datetime.now(timezone.utc)


def validate_duration(duration: int) -> int:
    if isinstance(duration, bool) or not isinstance(duration, int):
        raise ValidationError("Duration must be an integer number of minutes")
    if duration <= 0:
        raise ValidationError("Duration must be greater than 0")
    if duration < MIN_DURATION_MINUTES:
        raise ValidationError(f"Minimum appointment duration is {MIN_DURATION_MINUTES} minutes")
    if duration > MAX_DURATION_MINUTES:
        raise ValidationError("Maximum appointment duration is 8 hours")
    if duration % DURATION_STEP_MINUTES != 0:
        raise ValidationError(f"Duration must be in {DURATION_STEP_MINUTES}-minute increments")
    return duration


def shares_resource(stylist_a: str | None, stylist_b: str | None) -> bool:
    """An unassigned booking holds the whole salon, so it overlaps every stylist."""
    return stylist_a is None or stylist_b is None or stylist_a == stylist_b


def _require(value: str | None, name: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{name} is required")
    return str(value).strip()


@dataclass
class Appointment:
    """
    A booked interval [start_time, start_time + duration) for one client.

    The status is held both as the status row id and as its canonical name.
    Status changes only go through the mark_as_* methods, each of which runs the
    transition table check in appointment_status.ensure_transition.
    """

    id: str
    start_time: datetime
    duration: int
    organizer_id: str
    client_id: str
    schedule_id: str
    status_id: str
    status: AppointmentStatusName = INITIAL_STATUS
    stylist_id: str | None = None
    service_ids: list[str] = field(default_factory=list)
    confirmed_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        self.duration = validate_duration(self.duration)
        self.organizer_id = _require(self.organizer_id, "organizer_id")
        self.client_id = _require(self.client_id, "client_id")
        self.schedule_id = _require(self.schedule_id, "schedule_id")
        self.status_id = _require(self.status_id, "status_id")
        self.status = AppointmentStatusName(self.status)
        self.stylist_id = (self.stylist_id or "").strip() or None
        self.service_ids = _unique_service_ids(self.service_ids)
        if self.created_at is None:
            self.created_at = _now_like(self.start_time)
        if self.updated_at is None:
            self.updated_at = self.created_at

    @staticmethod
    def create(
        start_time: datetime,
        duration: int,
        organizer_id: str,
        client_id: str,
        schedule_id: str,
        status_id: str,
        stylist_id: str | None = None,
        service_ids: Iterable[str] = (),
        status: AppointmentStatusName = INITIAL_STATUS,
        now: datetime | None = None,
    ) -> "Appointment":
        if start_time is None:
            raise ValidationError("Appointment date and time is required")
        current = now or _now_like(start_time)
        if start_time <= current:
            raise ValidationError("Appointment cannot be scheduled in the past")

        return Appointment(
            id=str(uuid.uuid4()),
            start_time=start_time,
            duration=duration,
            organizer_id=organizer_id,
            client_id=client_id,
            schedule_id=schedule_id,
            status_id=status_id,
            status=status,
            stylist_id=stylist_id,
            service_ids=list(service_ids),
            confirmed_at=None,
            created_at=current,
            updated_at=current,
        )

    @staticmethod
    def from_persistence(
        id: str,
        start_time: datetime,
        duration: int,
        organizer_id: str,
        client_id: str,
        schedule_id: str,
        status_id: str,
        status: AppointmentStatusName | str,
        stylist_id: str | None = None,
        service_ids: Iterable[str] = (),
        confirmed_at: datetime | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ) -> "Appointment":
        return Appointment(
            id=id,
            start_time=start_time,
            duration=duration,
            organizer_id=organizer_id,
            client_id=client_id,
            schedule_id=schedule_id,
            status_id=status_id,
            status=AppointmentStatusName(status),
            stylist_id=stylist_id,
            service_ids=list(service_ids),
            confirmed_at=confirmed_at,
            created_at=created_at,
            updated_at=updated_at,
        )

    # Queries

    def get_end_time(self) -> datetime:
        return self.start_time + timedelta(minutes=self.duration)

    @property
    def end_time(self) -> datetime:
        return self.get_end_time()

    def has_conflict_with(self, other: "Appointment") -> bool:
        return overlaps(self.start_time, self.get_end_time(), other.start_time, other.get_end_time())

    def is_in_past(self, now: datetime | None = None) -> bool:
        return self.start_time < (now or _now_like(self.start_time))

    def minutes_until_start(self, now: datetime | None = None) -> float:
        delta = self.start_time - (now or _now_like(self.start_time))
        return delta.total_seconds() / 60

    def can_be_modified(self, now: datetime | None = None, lead: timedelta = DEFAULT_MODIFY_LEAD) -> bool:
        return self.start_time - (now or _now_like(self.start_time)) >= lead

    def is_confirmed(self) -> bool:
        return self.confirmed_at is not None

    def is_terminal(self) -> bool:
        return self.status.is_terminal()

    def blocks_time(self) -> bool:
        return self.status not in NON_BLOCKING_STATUSES

    # Mutations

    def _touch(self, now: datetime | None) -> None:
        self.updated_at = now or _now_like(self.start_time)

    def reschedule(
        self,
        new_start_time: datetime,
        new_duration: int | None = None,
        now: datetime | None = None,
    ) -> None:
        """Move the appointment. Conflicts and working hours are checked by the caller."""
        current = now or _now_like(new_start_time)
        if new_start_time < current:
            raise ValidationError("Cannot reschedule to a past date")
        duration = validate_duration(new_duration) if new_duration is not None else self.duration

        self.start_time = new_start_time
        self.duration = duration
        self._touch(current)

    def assign_stylist(self, stylist_id: str | None, now: datetime | None = None) -> None:
        self.stylist_id = (stylist_id or "").strip() or None
        self._touch(now)

    def add_service(self, service_id: str, now: datetime | None = None) -> None:
        if not service_id or not service_id.strip():
            raise ValidationError("Service ID is required")
        if service_id in self.service_ids:
            raise ValidationError("Service is already added to this appointment")
        self.service_ids.append(service_id)
        self._touch(now)

    def remove_service(self, service_id: str, now: datetime | None = None) -> None:
        if not service_id or not service_id.strip():
            raise ValidationError("Service ID is required")
        if service_id not in self.service_ids:
            raise ValidationError("Service not found in this appointment")
        self.service_ids.remove(service_id)
        self._touch(now)

    def replace_services(self, service_ids: Iterable[str], now: datetime | None = None) -> None:
        replacement = list(service_ids)
        if not replacement:
            raise ValidationError("At least one service is required")
        previous = self.service_ids
        self.service_ids = []
        try:
            for service_id in replacement:
                self.add_service(service_id, now=now)
        except ValidationError:
            self.service_ids = previous
            raise

    def _change_status(self, status: AppointmentStatus, now: datetime | None) -> None:
        self.status_id = status.id
        self.status = status.name
        self._touch(now)

    def _transition(self, status: AppointmentStatus, expected: AppointmentStatusName, now: datetime | None) -> None:
        if status.name != expected:
            raise ValidationError(f"Expected the {expected.value} status row, got {status.name.value}")
        ensure_transition(self.status, status.name)
        self._change_status(status, now)

    def mark_as_confirmed(self, status: AppointmentStatus, now: datetime | None = None) -> None:
        if self.confirmed_at is not None:
            raise BusinessRuleError("Appointment is already confirmed")
        self._transition(status, AppointmentStatusName.CONFIRMED, now)
        self.confirmed_at = self.updated_at

    def mark_as_in_progress(self, status: AppointmentStatus, now: datetime | None = None) -> None:
        self._transition(status, AppointmentStatusName.IN_PROGRESS, now)

    def mark_as_completed(self, status: AppointmentStatus, now: datetime | None = None) -> None:
        self._transition(status, AppointmentStatusName.COMPLETED, now)

    def mark_as_cancelled(self, status: AppointmentStatus, now: datetime | None = None) -> None:
        self._transition(status, AppointmentStatusName.CANCELLED, now)

    def mark_as_no_show(self, status: AppointmentStatus, now: datetime | None = None) -> None:
        self._transition(status, AppointmentStatusName.NO_SHOW, now)


def _unique_service_ids(service_ids: Iterable[str] | None) -> list[str]:
    unique: list[str] = []
    for service_id in service_ids or ():
        normalized = (service_id or "").strip()
        if not normalized:
            raise ValidationError("Service ID is required")
        if normalized not in unique:
            unique.append(normalized)
    return unique
