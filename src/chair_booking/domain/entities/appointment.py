"""Appointment entity for a stylist's chair."""

from datetime import date, datetime, time
from typing import Optional
from uuid import UUID, uuid4

from ..value_objects.calendar_day import DayLike, normalize_to_day
from ..value_objects.interval import AppointmentInterval
from ..value_objects.time_slot import TimeSlot

DEFAULT_DURATION_MINUTES = 60


class Appointment:
    """Appointment entity representing one booked customer visit.

    Instances are not mutated in place; ``rescheduled`` returns a copy with
    the same identity so a failed update never leaves a half-edited record.
    """

    def __init__(
        self,
        stylist_id: UUID,
        customer_name: str,
        customer_phone: str,
        date: DayLike,
        start_slot: TimeSlot,
        duration_minutes: int = DEFAULT_DURATION_MINUTES,
        appointment_id: Optional[UUID] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None
    ):
        if duration_minutes <= 0:
            raise ValueError("Duration must be a positive number of minutes")

        self._id = appointment_id or uuid4()
        self._stylist_id = stylist_id
        self._customer_name = customer_name
        self._customer_phone = customer_phone
        self._date = normalize_to_day(date)
        self._start_slot = start_slot
        self._duration_minutes = duration_minutes
        self._created_at = created_at or datetime.now()
        self._updated_at = updated_at or self._created_at

    @property
    def id(self) -> UUID:
        """Get appointment ID."""
        return self._id

    @property
    def stylist_id(self) -> UUID:
        """Get owning stylist ID."""
        return self._stylist_id

    @property
    def customer_name(self) -> str:
        return self._customer_name

    @property
    def customer_phone(self) -> str:
        return self._customer_phone

    @property
    def date(self) -> date:
        """Get the calendar day of the appointment."""
        return self._date

    @property
    def start_slot(self) -> TimeSlot:
        return self._start_slot

    @property
    def duration_minutes(self) -> int:
        return self._duration_minutes

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    @property
    def interval(self) -> AppointmentInterval:
        """Get the unwrapped minute-of-day interval used for conflict checks."""
        return AppointmentInterval.from_slot(self._start_slot, self._duration_minutes)

    @property
    def end_time(self) -> time:
        """Get the display end time, wrapped at midnight."""
        return self.interval.display_end()

    @property
    def starts_at(self) -> datetime:
        """Get the start as a full datetime."""
        return datetime.combine(self._date, self._start_slot.to_time())

    def time_range(self) -> str:
        """Get formatted time range string."""
        return f"{self._start_slot} - {self.end_time.strftime('%H:%M')}"

    def rescheduled(
        self,
        date: DayLike,
        start_slot: TimeSlot,
        duration_minutes: int,
        customer_name: str,
        customer_phone: str
    ) -> "Appointment":
        """Return a copy with every editable field replaced."""
        return Appointment(
            stylist_id=self._stylist_id,
            customer_name=customer_name,
            customer_phone=customer_phone,
            date=date,
            start_slot=start_slot,
            duration_minutes=duration_minutes,
            appointment_id=self._id,
            created_at=self._created_at,
            updated_at=datetime.now()
        )

    def __eq__(self, other: object) -> bool:
        """Check equality based on appointment ID."""
        if not isinstance(other, Appointment):
            return False
        return self._id == other._id

    def __hash__(self) -> int:
        """Hash based on appointment ID."""
        return hash(self._id)

    def __str__(self) -> str:
        """String representation."""
        return f"Appointment({self._id}, {self._date.isoformat()} {self.time_range()}, {self._customer_name})"
