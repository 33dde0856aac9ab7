"""In-process reminder scheduler."""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Dict, List, Optional, Sequence
from uuid import UUID

from src.chair_booking.application.ports.collaborators import ReminderScheduler
from src.chair_booking.domain.entities.appointment import Appointment
from src.chair_booking.infrastructure.logging import get_logger

DEFAULT_OFFSETS_MINUTES = (15, 5)


def reminder_identifier(appointment_id: UUID, minutes_before: int) -> str:
    """Deterministic reminder key, so cancelling needs no stored handles."""
    return f"{appointment_id}-{minutes_before}min"


@dataclass(frozen=True)
class Reminder:
    """A pending notification for an upcoming appointment."""

    identifier: str
    appointment_id: UUID
    fire_at: datetime
    minutes_before: int
    title: str
    body: str


class InMemoryReminderScheduler(ReminderScheduler):
    """Keeps pending reminders in a dict and logs every change.

    Delivery is left to whoever polls ``due``; this class only tracks what
    should fire and when.
    """

    def __init__(
        self,
        offsets_minutes: Sequence[int] = DEFAULT_OFFSETS_MINUTES,
        clock: Callable[[], datetime] = datetime.now
    ):
        self._offsets = tuple(offsets_minutes)
        self._clock = clock
        self._reminders: Dict[str, Reminder] = {}
        self._logger = get_logger(__name__)

    async def schedule_reminders(self, appointment: Appointment) -> None:
        """Schedule one reminder per offset; past fire times are skipped."""
        now = self._clock()
        for minutes_before in self._offsets:
            fire_at = appointment.starts_at - timedelta(minutes=minutes_before)
            if fire_at <= now:
                continue

            reminder = Reminder(
                identifier=reminder_identifier(appointment.id, minutes_before),
                appointment_id=appointment.id,
                fire_at=fire_at,
                minutes_before=minutes_before,
                title=f"Appointment in {minutes_before} minutes",
                body=f"{appointment.customer_name} at {appointment.start_slot}"
            )
            self._reminders[reminder.identifier] = reminder
            self._logger.debug(
                "Reminder scheduled",
                extra={"reminder_id": reminder.identifier, "fire_at": fire_at.isoformat()}
            )

    async def cancel_reminders(self, appointment_id: UUID) -> None:
        """Drop every reminder derived from the appointment ID."""
        for minutes_before in self._offsets:
            removed = self._reminders.pop(reminder_identifier(appointment_id, minutes_before), None)
            if removed:
                self._logger.debug("Reminder cancelled", extra={"reminder_id": removed.identifier})

    def pending(self, appointment_id: Optional[UUID] = None) -> List[Reminder]:
        """Pending reminders ordered by fire time, optionally for one appointment."""
        reminders = [
            reminder for reminder in self._reminders.values()
            if appointment_id is None or reminder.appointment_id == appointment_id
        ]
        return sorted(reminders, key=lambda reminder: reminder.fire_at)

    def due(self) -> List[Reminder]:
        """Pop and return reminders whose fire time has arrived."""
        now = self._clock()
        fired = [reminder for reminder in self.pending() if reminder.fire_at <= now]
        for reminder in fired:
            del self._reminders[reminder.identifier]
            self._logger.info(
                reminder.title,
                extra={"reminder_id": reminder.identifier, "reminder_body": reminder.body}
            )
        return fired
