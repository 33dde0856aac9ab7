"""Interval-intersection check for a stylist's day."""

from typing import Iterable, List, Optional
from uuid import UUID

from ...domain.entities.appointment import Appointment
from ...domain.value_objects.interval import AppointmentInterval
from ...domain.value_objects.time_slot import TimeSlot


class ConflictDetector:
    """Decides whether a candidate interval clashes with a day's appointments.

    ``existing`` is expected to hold a single stylist's appointments for a
    single day. Ordering does not matter to ``has_conflict``, which is a
    single linear pass with no side effects.
    """

    def find_conflicts(
        self,
        existing: Iterable[Appointment],
        candidate_start: TimeSlot,
        candidate_duration: int,
        exclude_id: Optional[UUID] = None
    ) -> List[Appointment]:
        """Return every appointment overlapping the candidate interval, by start."""
        candidate = AppointmentInterval.from_slot(candidate_start, candidate_duration)
        conflicts = []

        for appointment in sorted(existing, key=lambda item: item.start_slot):
            interval = appointment.interval
            if interval.start_minute >= candidate.end_minute:
                break
            if appointment.id != exclude_id and candidate.overlaps(interval):
                conflicts.append(appointment)

        return conflicts

    def has_conflict(
        self,
        existing: Iterable[Appointment],
        candidate_start: TimeSlot,
        candidate_duration: int,
        exclude_id: Optional[UUID] = None
    ) -> bool:
        """Check if the candidate interval overlaps any non-excluded appointment."""
        candidate = AppointmentInterval.from_slot(candidate_start, candidate_duration)

        for appointment in existing:
            if appointment.id == exclude_id:
                continue
            if candidate.overlaps(appointment.interval):
                return True

        return False
