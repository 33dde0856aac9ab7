"""Port interfaces for the reminder and contact-import collaborators."""

from abc import ABC, abstractmethod
from typing import Optional, TYPE_CHECKING
from uuid import UUID

from pydantic import BaseModel, field_validator

if TYPE_CHECKING:
    from src.chair_booking.domain.entities.appointment import Appointment


class ReminderScheduler(ABC):
    """Port interface for appointment reminder notifications."""

    @abstractmethod
    async def schedule_reminders(self, appointment: "Appointment") -> None:
        """Schedule the reminders for an appointment; past fire times are skipped."""
        raise NotImplementedError

    @abstractmethod
    async def cancel_reminders(self, appointment_id: UUID) -> None:
        """Remove any pending reminders for an appointment."""
        raise NotImplementedError


class ContactCard(BaseModel):
    """Customer details supplied by the contact picker."""
    name: str
    phone: str

    @field_validator("name", "phone")
    @classmethod
    def strip_whitespace(cls, value: str) -> str:
        return value.strip()


class ContactProvider(ABC):
    """Port interface for importing customer details from an address book."""

    @abstractmethod
    async def pick_contact(self) -> Optional[ContactCard]:
        """Return the chosen contact, or None when the picker was dismissed."""
        raise NotImplementedError
