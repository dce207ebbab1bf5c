"""
Tests for HH:MM parsing and interval overlap.
"""

from __future__ import annotations

from datetime import date, datetime, timezone

import pytest

from salon_booking.domain.exceptions import FormatError, ValidationError
from salon_booking.domain.time_window import (
    combine,
    format_minutes,
    minutes_between,
    overlaps,
    parse_time,
    time_to_minutes,
)


def test_parse_time_accepts_one_or_two_digit_hours():
    """Both '9:00' and '09:00' parse to the same value."""
    assert parse_time("9:00") == (9, 0)
    assert parse_time("09:00") == (9, 0)
    assert parse_time("23:59") == (23, 59)


@pytest.mark.parametrize("value", ["24:00", "12:60", "9", "09:5", "ab:cd", "", "09:00:00"])
def test_parse_time_rejects_malformed_values(value):
    """Out-of-range and malformed strings raise FormatError."""
    with pytest.raises(FormatError):
        parse_time(value)


def test_format_error_is_a_validation_error():
    """Callers catching ValidationError also see format problems."""
    with pytest.raises(ValidationError):
        parse_time("25:00")


def test_minutes_between_allows_negative_result():
    """Ordering is left to the caller."""
    assert minutes_between("09:00", "17:00") == 480
    assert minutes_between("17:00", "09:00") == -480


def test_format_minutes_pads_and_bounds():
    """Minutes since midnight format as zero-padded HH:MM within one day."""
    assert format_minutes(0) == "00:00"
    assert format_minutes(9 * 60 + 5) == "09:05"
    with pytest.raises(FormatError):
        format_minutes(24 * 60)


def test_overlap_is_symmetric():
    """overlaps(A, B) == overlaps(B, A) for overlapping and disjoint pairs."""
    pairs = [
        ((540, 600), (570, 630)),
        ((540, 600), (600, 660)),
        ((540, 720), (600, 630)),
        ((540, 560), (700, 720)),
    ]
    for (a_start, a_end), (b_start, b_end) in pairs:
        assert overlaps(a_start, a_end, b_start, b_end) == overlaps(b_start, b_end, a_start, a_end)


def test_touching_intervals_do_not_overlap():
    """09:00-10:00 and 10:00-11:00 share only a boundary."""
    nine = time_to_minutes("09:00")
    ten = time_to_minutes("10:00")
    eleven = time_to_minutes("11:00")
    assert overlaps(nine, ten, ten, eleven) is False
    assert overlaps(nine, ten + 1, ten, eleven) is True


def test_overlap_works_with_datetimes():
    """The same half-open rule applies to datetimes."""
    day = date(2024, 6, 10)
    a_start = combine(day, "09:00", timezone.utc)
    a_end = combine(day, "10:00", timezone.utc)
    b_start = combine(day, "09:30", timezone.utc)
    b_end = combine(day, "10:30", timezone.utc)
    assert overlaps(a_start, a_end, b_start, b_end)
    assert not overlaps(a_start, a_end, a_end, b_end)
    assert a_start == datetime(2024, 6, 10, 9, 0, tzinfo=timezone.utc)
