"""Unit tests for appointment interval and calendar day helpers."""

import pytest
from datetime import date, datetime, time

from src.chair_booking.domain.value_objects.calendar_day import (
    day_label,
    is_same_day,
    normalize_to_day,
    tomorrow_of
)
from src.chair_booking.domain.value_objects.interval import AppointmentInterval
from src.chair_booking.domain.value_objects.time_slot import TimeSlot


class TestAppointmentInterval:
    """Test cases for AppointmentInterval."""

    def test_from_slot(self):
        interval = AppointmentInterval.from_slot(TimeSlot(9, 0), 60)

        assert interval.start_minute == 540
        assert interval.end_minute == 600
        assert interval.duration_minutes == 60

    def test_empty_interval_rejected(self):
        with pytest.raises(ValueError, match="end must be after its start"):
            AppointmentInterval(600, 600)

    def test_strict_overlap(self):
        nine_to_ten = AppointmentInterval.from_slot(TimeSlot(9, 0), 60)
        half_nine_to_half_ten = AppointmentInterval.from_slot(TimeSlot(9, 30), 60)

        assert nine_to_ten.overlaps(half_nine_to_half_ten)
        assert half_nine_to_half_ten.overlaps(nine_to_ten)

    def test_touching_intervals_do_not_overlap(self):
        nine_to_ten = AppointmentInterval.from_slot(TimeSlot(9, 0), 60)
        ten_to_half_ten = AppointmentInterval.from_slot(TimeSlot(10, 0), 30)

        assert not nine_to_ten.overlaps(ten_to_half_ten)
        assert not ten_to_half_ten.overlaps(nine_to_ten)

    def test_containment_overlaps(self):
        long_visit = AppointmentInterval.from_slot(TimeSlot(9, 0), 120)
        short_visit = AppointmentInterval.from_slot(TimeSlot(9, 30), 30)

        assert long_visit.overlaps(short_visit)
        assert short_visit.overlaps(long_visit)

    def test_crosses_midnight(self):
        assert AppointmentInterval.from_slot(TimeSlot(23, 30), 60).crosses_midnight
        assert not AppointmentInterval.from_slot(TimeSlot(23, 30), 30).crosses_midnight

    def test_display_end_wraps_at_midnight(self):
        assert AppointmentInterval.from_slot(TimeSlot(9, 0), 60).display_end() == time(10, 0)
        assert AppointmentInterval.from_slot(TimeSlot(23, 30), 30).display_end() == time(0, 0)
        assert AppointmentInterval.from_slot(TimeSlot(23, 0), 90).display_end() == time(0, 30)


class TestCalendarDay:
    """Test cases for calendar day helpers."""

    def test_normalize_datetime_drops_time(self):
        assert normalize_to_day(datetime(2024, 5, 1, 16, 45)) == date(2024, 5, 1)

    def test_normalize_date_unchanged(self):
        assert normalize_to_day(date(2024, 5, 1)) == date(2024, 5, 1)

    def test_normalize_rejects_other_types(self):
        with pytest.raises(TypeError):
            normalize_to_day("2024-05-01")

    def test_same_day(self):
        assert is_same_day(datetime(2024, 5, 1, 0, 0), datetime(2024, 5, 1, 23, 59))
        assert not is_same_day(date(2024, 5, 1), date(2024, 5, 2))

    def test_tomorrow_crosses_month(self):
        assert tomorrow_of(date(2024, 4, 30)) == date(2024, 5, 1)

    def test_day_label(self):
        today = datetime(2024, 5, 1, 10, 0)

        assert day_label(date(2024, 5, 1), today) == "Today"
        assert day_label(date(2024, 5, 2), today) == "Tomorrow"
        assert day_label(date(2024, 5, 9), today) == "2024-05-09"
