"""Booking service implementing use cases for a stylist's schedule."""

import asyncio
from datetime import date as Date
from typing import List, Optional, Tuple
from uuid import UUID

from ..ports.collaborators import ReminderScheduler
from ..ports.repositories import AppointmentRepository, StylistRepository
from .conflict_detector import ConflictDetector
from .reminder_dispatcher import ReminderDispatcher
from ...domain.entities.appointment import Appointment
from ...domain.entities.stylist import Stylist
from ...domain.exceptions import NotFoundError, TimeConflictError, ValidationError
from ...domain.value_objects.calendar_day import DayLike, normalize_to_day
from ...domain.value_objects.interval import AppointmentInterval
from ...domain.value_objects.time_slot import TimeSlot
from src.chair_booking.infrastructure.logging import (
    get_logger,
    log_booking_event,
    log_business_rule_violation
)


class CustomerDetailsValidator:
    """Service for validating free-text booking fields."""

    @staticmethod
    def validate(customer_name: str, customer_phone: str) -> Tuple[str, str]:
        """Return the trimmed name and phone, or raise ValidationError."""
        name = (customer_name or "").strip()
        phone = (customer_phone or "").strip()

        missing = []
        if not name:
            missing.append("customer name")
        if not phone:
            missing.append("customer phone")
        if missing:
            raise ValidationError(f"Required field is empty: {', '.join(missing)}")

        return name, phone

    @staticmethod
    def validate_stylist_name(name: str) -> str:
        trimmed = (name or "").strip()
        if not trimmed:
            raise ValidationError("Required field is empty: stylist name")
        return trimmed

    @staticmethod
    def validate_duration(start_slot: TimeSlot, duration_minutes: int) -> None:
        """Durations must be positive and end by midnight."""
        if duration_minutes <= 0:
            raise ValidationError(f"Duration must be positive, got {duration_minutes}")
        if AppointmentInterval.from_slot(start_slot, duration_minutes).crosses_midnight:
            raise ValidationError(
                f"Appointment at {start_slot} for {duration_minutes} minutes would run past midnight"
            )


class BookingService:
    """Application service for stylists and their appointments.

    Every write runs "read existing, check, write" under one lock, so no
    other write can slip between the conflict check and the commit.
    """

    def __init__(
        self,
        stylist_repository: StylistRepository,
        appointment_repository: AppointmentRepository,
        reminder_scheduler: ReminderScheduler,
        conflict_detector: Optional[ConflictDetector] = None
    ):
        self._stylist_repository = stylist_repository
        self._appointment_repository = appointment_repository
        self._conflict_detector = conflict_detector or ConflictDetector()
        self._reminders = ReminderDispatcher(reminder_scheduler)
        self._validator = CustomerDetailsValidator()
        self._write_lock = asyncio.Lock()
        self._logger = get_logger(__name__)

    # Stylists

    async def create_stylist(self, name: str) -> Stylist:
        """Register a new stylist."""
        stylist = Stylist(self._validator.validate_stylist_name(name))

        async with self._write_lock:
            saved = await self._stylist_repository.insert(stylist)

        self._logger.info("Stylist created", extra={"stylist_id": str(saved.id)})
        return saved

    async def list_stylists(self) -> List[Stylist]:
        """Get all stylists ordered by name."""
        return await self._stylist_repository.list_all()

    async def get_stylist(self, stylist_id: UUID) -> Stylist:
        stylist = await self._stylist_repository.find_by_id(stylist_id)
        if not stylist:
            raise NotFoundError(f"Stylist not found: {stylist_id}")
        return stylist

    async def delete_stylist(self, stylist_id: UUID) -> None:
        """Delete a stylist together with every appointment and reminder it owns."""
        async with self._write_lock:
            removed_ids = await self._stylist_repository.delete_with_appointments(stylist_id)
            if removed_ids is None:
                raise NotFoundError(f"Stylist not found: {stylist_id}")

        # Reminders only go once the rows are gone
        for appointment_id in removed_ids:
            self._reminders.cancel(appointment_id)

        self._logger.info(
            "Stylist deleted",
            extra={"stylist_id": str(stylist_id), "appointments_removed": len(removed_ids)}
        )

    # Appointments

    async def list_appointments(self, stylist_id: UUID, day: DayLike) -> List[Appointment]:
        """Get a stylist's appointments for one day, ordered by start."""
        return await self._appointment_repository.list_for_day(stylist_id, normalize_to_day(day))

    async def get_appointment(self, appointment_id: UUID) -> Appointment:
        appointment = await self._appointment_repository.find_by_id(appointment_id)
        if not appointment:
            raise NotFoundError(f"Appointment not found: {appointment_id}")
        return appointment

    async def create_appointment(
        self,
        stylist_id: UUID,
        date: DayLike,
        start_slot: TimeSlot,
        duration_minutes: int,
        customer_name: str,
        customer_phone: str
    ) -> Appointment:
        """Book a new appointment if the stylist is free for the whole interval."""
        name, phone = self._validator.validate(customer_name, customer_phone)
        self._validator.validate_duration(start_slot, duration_minutes)
        day = normalize_to_day(date)

        async with self._write_lock:
            if not await self._stylist_repository.exists(stylist_id):
                raise NotFoundError(f"Stylist not found: {stylist_id}")

            existing = await self._appointment_repository.list_for_day(stylist_id, day)
            self._ensure_free(existing, stylist_id, day, start_slot, duration_minutes)

            appointment = Appointment(
                stylist_id=stylist_id,
                customer_name=name,
                customer_phone=phone,
                date=day,
                start_slot=start_slot,
                duration_minutes=duration_minutes
            )
            await self._appointment_repository.insert(appointment)

        log_booking_event(
            self._logger, "created", str(appointment.id),
            stylist_id=str(stylist_id), day=day.isoformat(), time_range=appointment.time_range()
        )
        self._reminders.reschedule(appointment)
        return appointment

    async def update_appointment(
        self,
        appointment_id: UUID,
        date: DayLike,
        start_slot: TimeSlot,
        duration_minutes: int,
        customer_name: str,
        customer_phone: str
    ) -> Appointment:
        """Replace every editable field of an appointment, or change nothing."""
        name, phone = self._validator.validate(customer_name, customer_phone)
        self._validator.validate_duration(start_slot, duration_minutes)
        day = normalize_to_day(date)

        async with self._write_lock:
            current = await self._appointment_repository.find_by_id(appointment_id)
            if not current:
                raise NotFoundError(f"Appointment not found: {appointment_id}")

            existing = await self._appointment_repository.list_for_day(current.stylist_id, day)
            self._ensure_free(
                existing, current.stylist_id, day, start_slot, duration_minutes,
                exclude_id=appointment_id
            )

            updated = current.rescheduled(
                date=day,
                start_slot=start_slot,
                duration_minutes=duration_minutes,
                customer_name=name,
                customer_phone=phone
            )
            if not await self._appointment_repository.update(updated):
                raise NotFoundError(f"Appointment not found: {appointment_id}")

        log_booking_event(
            self._logger, "updated", str(appointment_id),
            stylist_id=str(updated.stylist_id), day=day.isoformat(), time_range=updated.time_range()
        )
        self._reminders.reschedule(updated)
        return updated

    async def delete_appointment(self, appointment_id: UUID) -> None:
        """Cancel an appointment and its pending reminders."""
        async with self._write_lock:
            if not await self._appointment_repository.delete(appointment_id):
                raise NotFoundError(f"Appointment not found: {appointment_id}")

        log_booking_event(self._logger, "deleted", str(appointment_id))
        self._reminders.cancel(appointment_id)

    async def flush_reminders(self) -> None:
        """Wait for outstanding reminder requests to finish."""
        await self._reminders.drain()

    def _ensure_free(
        self,
        existing: List[Appointment],
        stylist_id: UUID,
        day: Date,
        start_slot: TimeSlot,
        duration_minutes: int,
        exclude_id: Optional[UUID] = None
    ) -> None:
        if not self._conflict_detector.has_conflict(existing, start_slot, duration_minutes, exclude_id):
            return

        clashes = self._conflict_detector.find_conflicts(existing, start_slot, duration_minutes, exclude_id)
        log_business_rule_violation(
            self._logger,
            "no_overlap",
            f"{start_slot} for {duration_minutes} minutes overlaps {len(clashes)} appointment(s)",
            stylist_id=str(stylist_id),
            day=day.isoformat(),
            conflicting_ids=[str(clash.id) for clash in clashes]
        )
        raise TimeConflictError(
            f"{day.isoformat()} {start_slot} for {duration_minutes} minutes overlaps "
            + ", ".join(clash.time_range() for clash in clashes)
        )
