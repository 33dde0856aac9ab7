"""Time slot value object for the half-hour booking grid."""

from dataclasses import dataclass
from datetime import datetime, time
from typing import Iterator

MINUTES_PER_DAY = 24 * 60
SLOT_MINUTES = 30


@dataclass(frozen=True, order=True)
class TimeSlot:
    """Immutable half-hour aligned point in a day (HH:00 or HH:30)."""

    hour: int
    minute: int = 0

    def __post_init__(self) -> None:
        """Validate time slot data."""
        if not 0 <= self.hour <= 23:
            raise ValueError("Hour must be between 0 and 23")
        if self.minute not in (0, 30):
            raise ValueError("Minute must be 0 or 30")

    @classmethod
    def from_clock_time(cls, hour: int, minute: int) -> "TimeSlot":
        """Snap a wall-clock reading down onto the grid."""
        return cls(hour, 0 if minute < 30 else 30)

    @classmethod
    def from_datetime(cls, moment: datetime) -> "TimeSlot":
        """Snap the time-of-day of a datetime down onto the grid."""
        return cls.from_clock_time(moment.hour, moment.minute)

    @classmethod
    def from_minutes_of_day(cls, minutes: int) -> "TimeSlot":
        """Build a slot from minutes since midnight."""
        hour, minute = divmod(minutes, 60)
        return cls(hour, minute)

    @classmethod
    def all_slots(cls) -> Iterator["TimeSlot"]:
        """Yield the 48 slots of a day, 00:00 through 23:30."""
        for hour in range(24):
            yield cls(hour, 0)
            yield cls(hour, 30)

    def to_minutes_of_day(self) -> int:
        """Minutes since midnight."""
        return self.hour * 60 + self.minute

    def to_time(self) -> time:
        return time(self.hour, self.minute)

    def __str__(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"
