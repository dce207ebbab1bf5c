"""
Tests for working-hours schedules and slot enumeration.
"""

from __future__ import annotations

from datetime import date

import pytest

from salon_booking.domain.entities.schedule import DayOfWeek, Schedule
from salon_booking.domain.exceptions import ValidationError


def test_half_hour_slots_for_a_full_day():
    """09:00-17:00 yields 16 half-hour slots, first 09:00 and last 16:30."""
    schedule = Schedule.create(DayOfWeek.MONDAY, "09:00", "17:00")
    slots = schedule.get_available_slots(30)
    assert len(slots) == 16
    assert slots[0] == "09:00"
    assert slots[-1] == "16:30"


def test_hourly_slots_for_a_full_day():
    """09:00-17:00 yields 8 hourly slots, last 16:00."""
    schedule = Schedule.create(DayOfWeek.MONDAY, "09:00", "17:00")
    slots = schedule.get_available_slots(60)
    assert len(slots) == 8
    assert slots[-1] == "16:00"


def test_slots_never_run_past_closing():
    """A slot longer than the remaining time is not offered."""
    schedule = Schedule.create(DayOfWeek.SATURDAY, "10:00", "11:30")
    assert schedule.get_available_slots(45) == ["10:00", "10:45"]
    assert schedule.get_available_slots(120) == []


def test_slot_enumeration_is_restartable():
    """Calling twice gives the same answer."""
    schedule = Schedule.create("tuesday", "09:00", "12:00")
    assert schedule.get_available_slots() == schedule.get_available_slots()


def test_non_positive_slot_duration_rejected():
    schedule = Schedule.create(DayOfWeek.MONDAY, "09:00", "17:00")
    with pytest.raises(ValidationError):
        schedule.get_available_slots(0)


@pytest.mark.parametrize(
    "start,end",
    [("17:00", "09:00"), ("09:00", "09:00"), ("09:00", "09:15"), ("9am", "17:00"), ("22:00", "02:00")],
)
def test_invalid_windows_rejected(start, end):
    """Reversed, too short, malformed and overnight windows are all invalid."""
    with pytest.raises(ValidationError):
        Schedule.create(DayOfWeek.MONDAY, start, end)


def test_times_are_normalized_to_two_digit_hours():
    schedule = Schedule.create(DayOfWeek.MONDAY, "9:00", "17:00")
    assert schedule.start_time == "09:00"
    assert schedule.get_duration_in_minutes() == 480


def test_working_hours_check_is_inclusive():
    schedule = Schedule.create(DayOfWeek.MONDAY, "09:00", "17:00")
    assert schedule.is_within_working_hours("09:00")
    assert schedule.is_within_working_hours("17:00")
    assert not schedule.is_within_working_hours("08:59")
    assert not schedule.is_within_working_hours("17:01")


def test_contains_interval_requires_the_whole_booking_to_fit():
    schedule = Schedule.create(DayOfWeek.MONDAY, "09:00", "17:00")
    assert schedule.contains_interval("16:00", 60)
    assert not schedule.contains_interval("16:30", 60)
    assert not schedule.contains_interval("08:45", 30)


def test_failed_update_leaves_schedule_unchanged():
    """update_schedule validates before touching the window."""
    schedule = Schedule.create(DayOfWeek.MONDAY, "09:00", "17:00")
    before = schedule.updated_at
    with pytest.raises(ValidationError):
        schedule.update_schedule("18:00", "10:00")
    assert (schedule.start_time, schedule.end_time) == ("09:00", "17:00")
    assert schedule.updated_at == before

    schedule.update_schedule("10:00", "16:00")
    assert (schedule.start_time, schedule.end_time) == ("10:00", "16:00")


def test_day_of_week_from_date():
    """2024-06-10 is a Monday, 2024-06-16 a Sunday."""
    assert DayOfWeek.from_date(date(2024, 6, 10)) is DayOfWeek.MONDAY
    assert DayOfWeek.from_date(date(2024, 6, 16)) is DayOfWeek.SUNDAY


def test_unknown_day_of_week_rejected():
    with pytest.raises(ValidationError):
        DayOfWeek.parse("FUNDAY")
