"""Fire-and-forget dispatch of reminder requests."""

import asyncio
from functools import partial
from typing import Awaitable, Callable, Dict, Optional, Set, TYPE_CHECKING
from uuid import UUID

from src.chair_booking.infrastructure.logging import get_logger

if TYPE_CHECKING:
    from src.chair_booking.application.ports.collaborators import ReminderScheduler
    from src.chair_booking.domain.entities.appointment import Appointment


class ReminderDispatcher:
    """Runs reminder schedule/cancel requests as background tasks.

    Requests for the same appointment run strictly in submission order, so a
    cancel issued before a reschedule always lands first. Requests for
    different appointments are unordered. Failures are logged and dropped.
    """

    def __init__(self, scheduler: "ReminderScheduler"):
        self._scheduler = scheduler
        self._pending: Set[asyncio.Task] = set()
        self._latest: Dict[UUID, asyncio.Task] = {}
        self._logger = get_logger(__name__)

    def reschedule(self, appointment: "Appointment") -> None:
        """Replace any pending reminders of an appointment with fresh ones."""
        async def action() -> None:
            await self._scheduler.cancel_reminders(appointment.id)
            await self._scheduler.schedule_reminders(appointment)

        self._submit(appointment.id, "reschedule", action)

    def cancel(self, appointment_id: UUID) -> None:
        """Remove any pending reminders of an appointment."""
        self._submit(
            appointment_id,
            "cancel",
            partial(self._scheduler.cancel_reminders, appointment_id)
        )

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    async def drain(self) -> None:
        """Wait until every submitted request has finished."""
        while self._pending:
            await asyncio.gather(*list(self._pending))

    def _submit(
        self,
        appointment_id: UUID,
        operation: str,
        action: Callable[[], Awaitable[None]]
    ) -> None:
        previous = self._latest.get(appointment_id)
        task = asyncio.create_task(self._run(appointment_id, operation, action, previous))
        self._latest[appointment_id] = task
        self._pending.add(task)
        task.add_done_callback(partial(self._forget, appointment_id))

    async def _run(
        self,
        appointment_id: UUID,
        operation: str,
        action: Callable[[], Awaitable[None]],
        previous: Optional[asyncio.Task]
    ) -> None:
        if previous is not None:
            await asyncio.wait({previous})

        try:
            await action()
        except Exception:
            self._logger.exception(
                "Reminder request failed",
                extra={"appointment_id": str(appointment_id), "reminder_operation": operation}
            )

    def _forget(self, appointment_id: UUID, task: asyncio.Task) -> None:
        self._pending.discard(task)
        if self._latest.get(appointment_id) is task:
            del self._latest[appointment_id]
