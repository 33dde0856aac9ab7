"""Unit tests for stylist and appointment entities."""

import pytest
from datetime import date, datetime, time
from uuid import uuid4

from src.chair_booking.domain.entities.appointment import Appointment
from src.chair_booking.domain.entities.stylist import Stylist
from src.chair_booking.domain.value_objects.time_slot import TimeSlot


class TestStylist:
    """Test cases for Stylist entity."""

    def test_stylist_creation(self):
        stylist = Stylist("  Ayla ")

        assert stylist.name == "Ayla"
        assert stylist.id is not None
        assert isinstance(stylist.created_at, datetime)

    def test_blank_name_rejected(self):
        with pytest.raises(ValueError, match="Stylist name cannot be empty"):
            Stylist("   ")

    def test_equality_by_id(self):
        stylist_id = uuid4()

        assert Stylist("Ayla", stylist_id) == Stylist("Renamed", stylist_id)
        assert Stylist("Ayla") != Stylist("Ayla")


class TestAppointment:
    """Test cases for Appointment entity."""

    def make_appointment(self, **overrides):
        values = dict(
            stylist_id=uuid4(),
            customer_name="Mert",
            customer_phone="555-0001",
            date=date(2024, 5, 1),
            start_slot=TimeSlot(9, 0),
            duration_minutes=60
        )
        values.update(overrides)
        return Appointment(**values)

    def test_appointment_creation(self):
        appointment = self.make_appointment()

        assert appointment.customer_name == "Mert"
        assert appointment.start_slot == TimeSlot(9, 0)
        assert appointment.duration_minutes == 60
        assert appointment.created_at == appointment.updated_at

    def test_date_normalized_to_day(self):
        appointment = self.make_appointment(date=datetime(2024, 5, 1, 17, 42))

        assert appointment.date == date(2024, 5, 1)
        assert not isinstance(appointment.date, datetime)

    def test_default_duration(self):
        appointment = Appointment(uuid4(), "Mert", "555-0001", date(2024, 5, 1), TimeSlot(9, 0))

        assert appointment.duration_minutes == 60

    @pytest.mark.parametrize("duration", [0, -30])
    def test_non_positive_duration_rejected(self, duration):
        with pytest.raises(ValueError, match="Duration must be a positive"):
            self.make_appointment(duration_minutes=duration)

    def test_interval_and_end_time(self):
        appointment = self.make_appointment(start_slot=TimeSlot(9, 30), duration_minutes=90)

        assert appointment.interval.start_minute == 570
        assert appointment.interval.end_minute == 660
        assert appointment.end_time == time(11, 0)
        assert appointment.time_range() == "09:30 - 11:00"

    def test_starts_at(self):
        appointment = self.make_appointment(start_slot=TimeSlot(14, 30))

        assert appointment.starts_at == datetime(2024, 5, 1, 14, 30)

    def test_rescheduled_keeps_identity(self):
        """Test rescheduling returns a new copy and leaves the original untouched."""
        original = self.make_appointment()

        moved = original.rescheduled(
            date=date(2024, 5, 2),
            start_slot=TimeSlot(11, 0),
            duration_minutes=30,
            customer_name="Deniz",
            customer_phone="555-0002"
        )

        assert moved.id == original.id
        assert moved == original
        assert moved.stylist_id == original.stylist_id
        assert moved.created_at == original.created_at
        assert moved.date == date(2024, 5, 2)
        assert moved.start_slot == TimeSlot(11, 0)
        assert moved.customer_name == "Deniz"
        assert original.start_slot == TimeSlot(9, 0)
        assert original.customer_name == "Mert"

    def test_hash_based_on_id(self):
        appointment = self.make_appointment()

        assert len({appointment, appointment.rescheduled(date(2024, 5, 3), TimeSlot(8, 0), 30, "A", "B")}) == 1
