"""
Tests for the day-level availability report.
"""

from __future__ import annotations

from datetime import date, datetime, timezone

from salon_booking.domain.availability import AvailabilityCalculator
from salon_booking.domain.entities.appointment import Appointment
from salon_booking.domain.entities.appointment_status import AppointmentStatus, AppointmentStatusName
from salon_booking.domain.entities.schedule import DayOfWeek, Schedule

DAY = date(2024, 6, 10)
NOW = datetime(2024, 6, 3, 9, 0, tzinfo=timezone.utc)


def booking(hour: int, minute: int = 0, duration: int = 60, stylist_id: str | None = "stylist-1") -> Appointment:
    return Appointment.create(
        start_time=datetime(2024, 6, 10, hour, minute, tzinfo=timezone.utc),
        duration=duration,
        organizer_id="organizer-1",
        client_id="client-1",
        schedule_id="schedule-1",
        status_id="status-pending",
        stylist_id=stylist_id,
        service_ids=["haircut"],
        now=NOW,
    )


def test_non_working_day_report():
    """No schedule for the date gives an empty, closed report."""
    report = AvailabilityCalculator(timezone.utc).calculate(DAY, None, [], duration=30)
    assert report.is_working_day is False
    assert report.total_slots == 0
    assert report.available_slots == 0
    assert report.slots == ()
    assert report.working_hours is None
    assert report.day_of_week is DayOfWeek.MONDAY


def test_open_day_without_bookings():
    schedule = Schedule.create(DayOfWeek.MONDAY, "09:00", "17:00")
    report = AvailabilityCalculator(timezone.utc).calculate(DAY, schedule, [], duration=30)
    assert report.is_working_day
    assert report.total_slots == 16
    assert report.available_slots == 16
    assert report.working_hours == ("09:00", "17:00")


def test_booked_interval_blocks_overlapping_slots():
    """A 10:00-11:00 booking takes the 10:00 and 10:30 half-hour slots only."""
    schedule = Schedule.create(DayOfWeek.MONDAY, "09:00", "17:00")
    report = AvailabilityCalculator(timezone.utc).calculate(DAY, schedule, [booking(10)], duration=30)

    taken = [s.time for s in report.slots if not s.available]
    assert taken == ["10:00", "10:30"]
    assert report.available_slots == 14
    assert report.slots[2].conflict_reason == "Conflicts with existing appointment at 10:00"


def test_stylist_filter_ignores_other_stylists():
    schedule = Schedule.create(DayOfWeek.MONDAY, "09:00", "17:00")
    booked = [booking(10, stylist_id="stylist-2")]
    calculator = AvailabilityCalculator(timezone.utc)

    assert calculator.calculate(DAY, schedule, booked, duration=30, stylist_id="stylist-1").available_slots == 16
    assert calculator.calculate(DAY, schedule, booked, duration=30).available_slots == 14


def test_unassigned_booking_blocks_every_stylist():
    schedule = Schedule.create(DayOfWeek.MONDAY, "09:00", "17:00")
    report = AvailabilityCalculator(timezone.utc).calculate(
        DAY, schedule, [booking(10, stylist_id=None)], duration=30, stylist_id="stylist-1"
    )

    assert [s.time for s in report.slots if not s.available] == ["10:00", "10:30"]


def test_cancelled_bookings_free_their_time():
    schedule = Schedule.create(DayOfWeek.MONDAY, "09:00", "17:00")
    cancelled = booking(10)
    cancelled.mark_as_cancelled(AppointmentStatus.system(AppointmentStatusName.CANCELLED), now=NOW)

    report = AvailabilityCalculator(timezone.utc).calculate(DAY, schedule, [cancelled], duration=30)
    assert report.available_slots == 16


def test_slots_already_started_are_unavailable():
    schedule = Schedule.create(DayOfWeek.MONDAY, "09:00", "17:00")
    now = datetime(2024, 6, 10, 12, 15, tzinfo=timezone.utc)
    report = AvailabilityCalculator(timezone.utc).calculate(DAY, schedule, [], duration=60, now=now)

    assert report.total_slots == 8
    assert [s.time for s in report.slots if s.available] == ["13:00", "14:00", "15:00", "16:00"]
    assert report.slots[0].conflict_reason == "Slot start has passed"
