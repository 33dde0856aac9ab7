"""Booking form policy layered above the booking service.

Business hours and past-time filtering live here and only here; the
conflict engine has no notion of "now".
"""

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Callable, List, Optional, TYPE_CHECKING
from uuid import UUID

from src.chair_booking.application.ports.collaborators import ContactCard, ContactProvider
from src.chair_booking.application.services.booking_service import CustomerDetailsValidator
from src.chair_booking.domain.entities.appointment import Appointment, DEFAULT_DURATION_MINUTES
from src.chair_booking.domain.exceptions import PastTimeError
from src.chair_booking.domain.value_objects.calendar_day import DayLike, normalize_to_day
from src.chair_booking.domain.value_objects.time_slot import TimeSlot
from src.chair_booking.infrastructure.logging import (
    clear_correlation_id,
    generate_correlation_id,
    get_logger,
    log_business_rule_violation,
    set_correlation_id
)

if TYPE_CHECKING:
    from src.chair_booking.application.services.booking_service import BookingService

DURATION_CHOICES = (30, 60, 90, 120)
FALLBACK_SLOT = TimeSlot(9, 0)


@dataclass(frozen=True)
class BusinessHours:
    """Window of start hours offered by the booking form (both ends inclusive)."""

    start_hour: int = 8
    end_hour: int = 21

    def __post_init__(self) -> None:
        if not 0 <= self.start_hour <= self.end_hour <= 23:
            raise ValueError("Business hours must satisfy 0 <= start_hour <= end_hour <= 23")

    def slots(self) -> List[TimeSlot]:
        return [
            slot for slot in TimeSlot.all_slots()
            if self.start_hour <= slot.hour <= self.end_hour
        ]


@dataclass(frozen=True)
class AppointmentDraft:
    """Values currently shown in the booking form."""

    day: DayLike
    start_slot: TimeSlot
    duration_minutes: int = DEFAULT_DURATION_MINUTES
    customer_name: str = ""
    customer_phone: str = ""
    appointment_id: Optional[UUID] = None

    @property
    def is_editing(self) -> bool:
        return self.appointment_id is not None


class ReservationEditor:
    """Create/edit form logic for one stylist's appointments."""

    def __init__(
        self,
        booking_service: "BookingService",
        business_hours: Optional[BusinessHours] = None,
        contact_provider: Optional[ContactProvider] = None,
        clock: Callable[[], datetime] = datetime.now,
        default_duration_minutes: int = DEFAULT_DURATION_MINUTES
    ):
        self._booking_service = booking_service
        self._business_hours = business_hours or BusinessHours()
        self._contact_provider = contact_provider
        self._clock = clock
        self._default_duration_minutes = default_duration_minutes
        self._logger = get_logger(__name__)

    def available_slots(self, day: DayLike) -> List[TimeSlot]:
        """Slots the form offers for a day, dropping elapsed ones."""
        target_day = normalize_to_day(day)
        now = self._clock()
        return [
            slot for slot in self._business_hours.slots()
            if not self._has_started(target_day, slot, now)
        ]

    def available_hours(self, day: DayLike) -> List[int]:
        hours = []
        for slot in self.available_slots(day):
            if slot.hour not in hours:
                hours.append(slot.hour)
        return hours

    def available_minutes(self, day: DayLike, hour: int) -> List[int]:
        return [slot.minute for slot in self.available_slots(day) if slot.hour == hour]

    def new_draft(self, day: DayLike) -> AppointmentDraft:
        """Empty form for a new appointment on ``day``."""
        offered = self.available_slots(day)
        return AppointmentDraft(
            day=normalize_to_day(day),
            start_slot=offered[0] if offered else FALLBACK_SLOT,
            duration_minutes=self._default_duration_minutes
        )

    def draft_for(self, appointment: Appointment) -> AppointmentDraft:
        """Form pre-populated from an existing appointment."""
        return AppointmentDraft(
            day=appointment.date,
            start_slot=appointment.start_slot,
            duration_minutes=appointment.duration_minutes,
            customer_name=appointment.customer_name,
            customer_phone=appointment.customer_phone,
            appointment_id=appointment.id
        )

    def apply_contact(self, draft: AppointmentDraft, contact: ContactCard) -> AppointmentDraft:
        return replace(draft, customer_name=contact.name, customer_phone=contact.phone)

    async def import_contact(self, draft: AppointmentDraft) -> AppointmentDraft:
        """Fill customer fields from the contact picker; unchanged if dismissed."""
        if self._contact_provider is None:
            return draft
        contact = await self._contact_provider.pick_contact()
        if contact is None:
            return draft
        return self.apply_contact(draft, contact)

    def ensure_not_past(self, day: DayLike, start_slot: TimeSlot) -> None:
        """Reject a start at or before the current time."""
        target_day = normalize_to_day(day)
        now = self._clock()
        if self._has_started(target_day, start_slot, now):
            log_business_rule_violation(
                self._logger,
                "future_start",
                f"{target_day.isoformat()} {start_slot} is not after {now.isoformat(timespec='minutes')}"
            )
            raise PastTimeError(f"{target_day.isoformat()} {start_slot} has already passed")

    async def save(self, stylist_id: UUID, draft: AppointmentDraft) -> Appointment:
        """Validate the form and create or update the appointment it describes."""
        set_correlation_id(generate_correlation_id())
        try:
            CustomerDetailsValidator.validate(draft.customer_name, draft.customer_phone)
            self.ensure_not_past(draft.day, draft.start_slot)

            if draft.is_editing:
                return await self._booking_service.update_appointment(
                    draft.appointment_id,
                    draft.day,
                    draft.start_slot,
                    draft.duration_minutes,
                    draft.customer_name,
                    draft.customer_phone
                )

            return await self._booking_service.create_appointment(
                stylist_id,
                draft.day,
                draft.start_slot,
                draft.duration_minutes,
                draft.customer_name,
                draft.customer_phone
            )
        finally:
            clear_correlation_id()

    async def delete(self, appointment_id: UUID) -> None:
        set_correlation_id(generate_correlation_id())
        try:
            await self._booking_service.delete_appointment(appointment_id)
        finally:
            clear_correlation_id()

    @staticmethod
    def _has_started(day, slot: TimeSlot, now: datetime) -> bool:
        return datetime.combine(day, slot.to_time()) <= now
