"""Port interfaces for repositories (Dependency Inversion Principle)."""

from abc import ABC, abstractmethod
from datetime import date
from typing import List, Optional, TYPE_CHECKING
from uuid import UUID

if TYPE_CHECKING:
    from src.chair_booking.domain.entities.appointment import Appointment
    from src.chair_booking.domain.entities.stylist import Stylist


class StylistRepository(ABC):
    """Port interface for stylist repository."""

    @abstractmethod
    async def insert(self, stylist: "Stylist") -> "Stylist":
        """Insert a new stylist."""
        raise NotImplementedError

    @abstractmethod
    async def find_by_id(self, stylist_id: UUID) -> Optional["Stylist"]:
        """Find stylist by ID."""
        raise NotImplementedError

    @abstractmethod
    async def list_all(self) -> List["Stylist"]:
        """List all stylists ordered by name."""
        raise NotImplementedError

    @abstractmethod
    async def exists(self, stylist_id: UUID) -> bool:
        """Check if stylist exists."""
        raise NotImplementedError

    @abstractmethod
    async def delete(self, stylist_id: UUID) -> bool:
        """Delete a stylist record that owns no appointments."""
        raise NotImplementedError

    @abstractmethod
    async def delete_with_appointments(self, stylist_id: UUID) -> Optional[List[UUID]]:
        """Delete a stylist and every appointment it owns in one transaction.

        Returns the removed appointment IDs, or None when the stylist does not
        exist. On failure nothing is removed.
        """
        raise NotImplementedError


class AppointmentRepository(ABC):
    """Port interface for the per-stylist, per-day schedule."""

    @abstractmethod
    async def insert(self, appointment: "Appointment") -> "Appointment":
        """Insert a new appointment."""
        raise NotImplementedError

    @abstractmethod
    async def update(self, appointment: "Appointment") -> bool:
        """Replace every field of an existing appointment."""
        raise NotImplementedError

    @abstractmethod
    async def delete(self, appointment_id: UUID) -> bool:
        """Delete an appointment."""
        raise NotImplementedError

    @abstractmethod
    async def find_by_id(self, appointment_id: UUID) -> Optional["Appointment"]:
        """Find appointment by ID."""
        raise NotImplementedError

    @abstractmethod
    async def list_for_day(self, stylist_id: UUID, day: date) -> List["Appointment"]:
        """List a stylist's appointments on one day, ordered by start slot."""
        raise NotImplementedError

    @abstractmethod
    async def list_for_stylist(self, stylist_id: UUID) -> List["Appointment"]:
        """List every appointment owned by a stylist."""
        raise NotImplementedError
