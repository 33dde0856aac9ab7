"""In-memory repository implementations for testing and development."""

from datetime import date
from typing import Dict, List, Optional
from uuid import UUID

from src.chair_booking.application.ports.repositories import AppointmentRepository, StylistRepository
from src.chair_booking.domain.entities.appointment import Appointment
from src.chair_booking.domain.entities.stylist import Stylist
from src.chair_booking.domain.exceptions import PersistenceError
from src.chair_booking.domain.value_objects.calendar_day import normalize_to_day


class InMemoryStylistRepository(StylistRepository):
    """In-memory implementation of stylist repository.

    Pass the appointment repository that holds this store's appointments so
    ``delete_with_appointments`` can remove them together with the stylist.
    """

    def __init__(self, appointment_repository: Optional["InMemoryAppointmentRepository"] = None):
        self._stylists: Dict[UUID, Stylist] = {}
        self._appointment_repository = appointment_repository

    async def insert(self, stylist: Stylist) -> Stylist:
        """Insert a new stylist."""
        if stylist.id in self._stylists:
            raise PersistenceError(f"Stylist already exists: {stylist.id}")
        self._stylists[stylist.id] = stylist
        return stylist

    async def find_by_id(self, stylist_id: UUID) -> Optional[Stylist]:
        """Find stylist by ID."""
        return self._stylists.get(stylist_id)

    async def list_all(self) -> List[Stylist]:
        """List all stylists ordered by name."""
        return sorted(self._stylists.values(), key=lambda stylist: stylist.name)

    async def exists(self, stylist_id: UUID) -> bool:
        """Check if stylist exists."""
        return stylist_id in self._stylists

    async def delete(self, stylist_id: UUID) -> bool:
        """Delete a stylist."""
        if stylist_id in self._stylists:
            del self._stylists[stylist_id]
            return True
        return False

    async def delete_with_appointments(self, stylist_id: UUID) -> Optional[List[UUID]]:
        """Delete a stylist and its appointments without yielding in between."""
        if stylist_id not in self._stylists:
            return None

        removed = []
        if self._appointment_repository is not None:
            removed = self._appointment_repository.remove_for_stylist(stylist_id)
        del self._stylists[stylist_id]
        return removed


class InMemoryAppointmentRepository(AppointmentRepository):
    """In-memory implementation of appointment repository."""

    def __init__(self):
        self._appointments: Dict[UUID, Appointment] = {}

    async def insert(self, appointment: Appointment) -> Appointment:
        """Insert a new appointment."""
        if appointment.id in self._appointments:
            raise PersistenceError(f"Appointment already exists: {appointment.id}")
        self._appointments[appointment.id] = appointment
        return appointment

    async def update(self, appointment: Appointment) -> bool:
        """Replace an existing appointment."""
        if appointment.id not in self._appointments:
            return False
        self._appointments[appointment.id] = appointment
        return True

    async def delete(self, appointment_id: UUID) -> bool:
        """Delete an appointment."""
        if appointment_id in self._appointments:
            del self._appointments[appointment_id]
            return True
        return False

    async def find_by_id(self, appointment_id: UUID) -> Optional[Appointment]:
        """Find appointment by ID."""
        return self._appointments.get(appointment_id)

    async def list_for_day(self, stylist_id: UUID, day: date) -> List[Appointment]:
        """List a stylist's appointments on one day, ordered by start slot."""
        target_day = normalize_to_day(day)
        return sorted(
            (appointment for appointment in self._appointments.values()
             if appointment.stylist_id == stylist_id and appointment.date == target_day),
            key=lambda appointment: appointment.start_slot
        )

    async def list_for_stylist(self, stylist_id: UUID) -> List[Appointment]:
        """List every appointment owned by a stylist, by day then start."""
        return sorted(
            (appointment for appointment in self._appointments.values()
             if appointment.stylist_id == stylist_id),
            key=lambda appointment: (appointment.date, appointment.start_slot)
        )

    def remove_for_stylist(self, stylist_id: UUID) -> List[UUID]:
        """Drop every appointment of a stylist and return their IDs, by day then start."""
        owned = sorted(
            (appointment for appointment in self._appointments.values()
             if appointment.stylist_id == stylist_id),
            key=lambda appointment: (appointment.date, appointment.start_slot)
        )
        for appointment in owned:
            del self._appointments[appointment.id]
        return [appointment.id for appointment in owned]
