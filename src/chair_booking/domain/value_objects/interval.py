"""Minute-of-day interval occupied by an appointment."""

from dataclasses import dataclass
from datetime import time

from .time_slot import MINUTES_PER_DAY, TimeSlot


@dataclass(frozen=True)
class AppointmentInterval:
    """Half-open ``[start_minute, end_minute)`` range within one day.

    The range is never wrapped at midnight; ``end_minute`` may exceed 1440
    for inputs that would cross into the next day, which callers reject.
    """

    start_minute: int
    end_minute: int

    def __post_init__(self) -> None:
        """Validate interval bounds."""
        if self.start_minute < 0:
            raise ValueError("Interval cannot start before midnight")
        if self.end_minute <= self.start_minute:
            raise ValueError("Interval end must be after its start")

    @classmethod
    def from_slot(cls, start_slot: TimeSlot, duration_minutes: int) -> "AppointmentInterval":
        """Derive the interval for an appointment starting at ``start_slot``."""
        start = start_slot.to_minutes_of_day()
        return cls(start, start + duration_minutes)

    @property
    def duration_minutes(self) -> int:
        return self.end_minute - self.start_minute

    @property
    def crosses_midnight(self) -> bool:
        """Check if the interval runs past the end of the day."""
        return self.end_minute > MINUTES_PER_DAY

    def overlaps(self, other: "AppointmentInterval") -> bool:
        """Half-open intersection test; touching endpoints do not overlap."""
        return self.start_minute < other.end_minute and other.start_minute < self.end_minute

    def display_end(self) -> time:
        """End time of day for display, wrapped modulo 24h."""
        hour, minute = divmod(self.end_minute % MINUTES_PER_DAY, 60)
        return time(hour, minute)
