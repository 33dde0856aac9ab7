"""SQLAlchemy repository implementations."""

from contextlib import asynccontextmanager
from datetime import date
from typing import AsyncGenerator, List, Optional
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.chair_booking.application.ports.repositories import AppointmentRepository, StylistRepository
from src.chair_booking.domain.entities.appointment import Appointment
from src.chair_booking.domain.entities.stylist import Stylist
from src.chair_booking.domain.exceptions import PersistenceError
from src.chair_booking.domain.value_objects.calendar_day import normalize_to_day
from src.chair_booking.domain.value_objects.time_slot import TimeSlot
from src.chair_booking.infrastructure.database.connection import DatabaseManager
from src.chair_booking.infrastructure.database.models import AppointmentModel, StylistModel
from src.chair_booking.infrastructure.logging import get_logger, log_database_operation


class _SQLAlchemyRepository:
    """Shared session handling: one transaction per call, storage errors wrapped."""

    def __init__(self, database: DatabaseManager):
        self._database = database
        self._logger = get_logger(__name__)

    @asynccontextmanager
    async def _session(self, operation: str, table: str, **extra) -> AsyncGenerator[AsyncSession, None]:
        log_database_operation(self._logger, operation, table, **extra)
        try:
            async with self._database.get_session() as session:
                yield session
        except SQLAlchemyError as exc:
            self._logger.error(
                "Database operation failed",
                extra={"db_operation": operation, "db_table": table, "error": str(exc)}
            )
            raise PersistenceError(f"Database {operation} on {table} failed") from exc


class SQLAlchemyStylistRepository(_SQLAlchemyRepository, StylistRepository):
    """SQLAlchemy implementation of stylist repository."""

    async def insert(self, stylist: Stylist) -> Stylist:
        """Insert a stylist row."""
        async with self._session("INSERT", "StylistModel", stylist_id=str(stylist.id)) as session:
            session.add(StylistModel(
                id=stylist.id,
                name=stylist.name,
                created_at=stylist.created_at
            ))
        return stylist

    async def find_by_id(self, stylist_id: UUID) -> Optional[Stylist]:
        """Find stylist by ID."""
        async with self._session("SELECT", "StylistModel", stylist_id=str(stylist_id)) as session:
            model = await session.get(StylistModel, stylist_id)
            return self._model_to_entity(model) if model else None

    async def list_all(self) -> List[Stylist]:
        """List all stylists ordered by name."""
        async with self._session("SELECT", "StylistModel") as session:
            result = await session.execute(select(StylistModel).order_by(StylistModel.name))
            return [self._model_to_entity(model) for model in result.scalars().all()]

    async def exists(self, stylist_id: UUID) -> bool:
        """Check if stylist exists."""
        async with self._session("SELECT", "StylistModel", stylist_id=str(stylist_id)) as session:
            result = await session.execute(select(StylistModel.id).where(StylistModel.id == stylist_id))
            return result.scalar_one_or_none() is not None

    async def delete(self, stylist_id: UUID) -> bool:
        """Delete a stylist row."""
        async with self._session("DELETE", "StylistModel", stylist_id=str(stylist_id)) as session:
            result = await session.execute(delete(StylistModel).where(StylistModel.id == stylist_id))
            return result.rowcount > 0

    async def delete_with_appointments(self, stylist_id: UUID) -> Optional[List[UUID]]:
        """Delete a stylist and its appointments in a single transaction."""
        async with self._session(
            "DELETE", "StylistModel", stylist_id=str(stylist_id), cascade="appointments"
        ) as session:
            if await session.get(StylistModel, stylist_id) is None:
                return None

            result = await session.execute(
                select(AppointmentModel.id).where(
                    AppointmentModel.stylist_id == stylist_id
                ).order_by(
                    AppointmentModel.date,
                    AppointmentModel.time_slot_hour,
                    AppointmentModel.time_slot_minute
                )
            )
            appointment_ids = list(result.scalars().all())

            await session.execute(delete(AppointmentModel).where(AppointmentModel.stylist_id == stylist_id))
            await session.execute(delete(StylistModel).where(StylistModel.id == stylist_id))
            return appointment_ids

    def _model_to_entity(self, model: StylistModel) -> Stylist:
        """Convert database model to domain entity."""
        return Stylist(
            stylist_id=model.id,
            name=model.name,
            created_at=model.created_at
        )


class SQLAlchemyAppointmentRepository(_SQLAlchemyRepository, AppointmentRepository):
    """SQLAlchemy implementation of appointment repository."""

    async def insert(self, appointment: Appointment) -> Appointment:
        """Insert an appointment row."""
        async with self._session("INSERT", "AppointmentModel", appointment_id=str(appointment.id)) as session:
            session.add(AppointmentModel(
                id=appointment.id,
                stylist_id=appointment.stylist_id,
                customer_name=appointment.customer_name,
                customer_phone=appointment.customer_phone,
                date=appointment.date,
                time_slot_hour=appointment.start_slot.hour,
                time_slot_minute=appointment.start_slot.minute,
                duration_minutes=appointment.duration_minutes,
                created_at=appointment.created_at,
                updated_at=appointment.updated_at
            ))
        return appointment

    async def update(self, appointment: Appointment) -> bool:
        """Replace every editable column of an appointment row."""
        async with self._session("UPDATE", "AppointmentModel", appointment_id=str(appointment.id)) as session:
            model = await session.get(AppointmentModel, appointment.id)
            if not model:
                return False

            model.customer_name = appointment.customer_name
            model.customer_phone = appointment.customer_phone
            model.date = appointment.date
            model.time_slot_hour = appointment.start_slot.hour
            model.time_slot_minute = appointment.start_slot.minute
            model.duration_minutes = appointment.duration_minutes
            model.updated_at = appointment.updated_at
            return True

    async def delete(self, appointment_id: UUID) -> bool:
        """Delete an appointment row."""
        async with self._session("DELETE", "AppointmentModel", appointment_id=str(appointment_id)) as session:
            result = await session.execute(
                delete(AppointmentModel).where(AppointmentModel.id == appointment_id)
            )
            return result.rowcount > 0

    async def find_by_id(self, appointment_id: UUID) -> Optional[Appointment]:
        """Find appointment by ID."""
        async with self._session("SELECT", "AppointmentModel", appointment_id=str(appointment_id)) as session:
            model = await session.get(AppointmentModel, appointment_id)
            return self._model_to_entity(model) if model else None

    async def list_for_day(self, stylist_id: UUID, day: date) -> List[Appointment]:
        """List a stylist's appointments on one day, ordered by start slot."""
        target_day = normalize_to_day(day)
        async with self._session(
            "SELECT", "AppointmentModel", stylist_id=str(stylist_id), day=target_day.isoformat()
        ) as session:
            stmt = select(AppointmentModel).where(
                AppointmentModel.stylist_id == stylist_id,
                AppointmentModel.date == target_day
            ).order_by(AppointmentModel.time_slot_hour, AppointmentModel.time_slot_minute)

            result = await session.execute(stmt)
            return [self._model_to_entity(model) for model in result.scalars().all()]

    async def list_for_stylist(self, stylist_id: UUID) -> List[Appointment]:
        """List every appointment owned by a stylist, by day then start."""
        async with self._session("SELECT", "AppointmentModel", stylist_id=str(stylist_id)) as session:
            stmt = select(AppointmentModel).where(
                AppointmentModel.stylist_id == stylist_id
            ).order_by(
                AppointmentModel.date,
                AppointmentModel.time_slot_hour,
                AppointmentModel.time_slot_minute
            )

            result = await session.execute(stmt)
            return [self._model_to_entity(model) for model in result.scalars().all()]

    def _model_to_entity(self, model: AppointmentModel) -> Appointment:
        """Convert database model to domain entity."""
        return Appointment(
            appointment_id=model.id,
            stylist_id=model.stylist_id,
            customer_name=model.customer_name,
            customer_phone=model.customer_phone,
            date=model.date,
            start_slot=TimeSlot(model.time_slot_hour, model.time_slot_minute),
            duration_minutes=model.duration_minutes,
            created_at=model.created_at,
            updated_at=model.updated_at
        )
