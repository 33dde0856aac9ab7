"""Integration tests for the SQLAlchemy repositories against a SQLite file."""

import pytest
import pytest_asyncio
from datetime import date
from uuid import uuid4

from sqlalchemy import text

from src.chair_booking.domain.entities.appointment import Appointment
from src.chair_booking.domain.entities.stylist import Stylist
from src.chair_booking.domain.exceptions import PersistenceError
from src.chair_booking.domain.value_objects.time_slot import TimeSlot
from src.chair_booking.infrastructure.database.connection import DatabaseManager
from src.chair_booking.infrastructure.repositories.sql_repositories import (
    SQLAlchemyAppointmentRepository,
    SQLAlchemyStylistRepository
)


DAY = date(2030, 5, 1)


@pytest_asyncio.fixture
async def database(tmp_path):
    """Connected database with fresh tables."""
    manager = DatabaseManager(f"sqlite:///{tmp_path / 'chair_booking.db'}")
    await manager.connect()
    await manager.create_tables()
    yield manager
    await manager.disconnect()


@pytest_asyncio.fixture
async def stylist(database):
    stylist = Stylist("Ayla")
    await SQLAlchemyStylistRepository(database).insert(stylist)
    return stylist


class TestSQLAlchemyStylistRepository:
    """Test cases for SQLAlchemyStylistRepository."""

    @pytest.mark.asyncio
    async def test_insert_and_find(self, database):
        repository = SQLAlchemyStylistRepository(database)
        stylist = Stylist("  Ayla ")

        await repository.insert(stylist)
        stored = await repository.find_by_id(stylist.id)

        assert stored == stylist
        assert stored.name == "Ayla"
        assert await repository.exists(stylist.id)

    @pytest.mark.asyncio
    async def test_find_missing(self, database):
        repository = SQLAlchemyStylistRepository(database)

        assert await repository.find_by_id(uuid4()) is None
        assert not await repository.exists(uuid4())

    @pytest.mark.asyncio
    async def test_list_all_by_name(self, database):
        repository = SQLAlchemyStylistRepository(database)
        for name in ["Selin", "Ayla", "Kerem"]:
            await repository.insert(Stylist(name))

        assert [stylist.name for stylist in await repository.list_all()] == ["Ayla", "Kerem", "Selin"]

    @pytest.mark.asyncio
    async def test_duplicate_insert_wrapped(self, database, stylist):
        repository = SQLAlchemyStylistRepository(database)

        with pytest.raises(PersistenceError):
            await repository.insert(stylist)

    @pytest.mark.asyncio
    async def test_delete(self, database, stylist):
        repository = SQLAlchemyStylistRepository(database)

        assert await repository.delete(stylist.id) is True
        assert await repository.delete(stylist.id) is False

    @pytest.mark.asyncio
    async def test_delete_with_appointments(self, database, stylist):
        repository = SQLAlchemyStylistRepository(database)
        appointments = SQLAlchemyAppointmentRepository(database)
        later = Appointment(stylist.id, "Mert", "555-0001", date(2030, 5, 2), TimeSlot(9, 0), 60)
        earlier = Appointment(stylist.id, "Deniz", "555-0002", DAY, TimeSlot(15, 0), 60)
        await appointments.insert(later)
        await appointments.insert(earlier)

        removed = await repository.delete_with_appointments(stylist.id)

        assert removed == [earlier.id, later.id]
        assert not await repository.exists(stylist.id)
        assert await appointments.list_for_stylist(stylist.id) == []

    @pytest.mark.asyncio
    async def test_delete_with_appointments_unknown_stylist(self, database):
        repository = SQLAlchemyStylistRepository(database)

        assert await repository.delete_with_appointments(uuid4()) is None

    @pytest.mark.asyncio
    async def test_delete_with_appointments_rolls_back_on_failure(self, database, stylist):
        """Test the appointment rows come back when the stylist row cannot be removed."""
        repository = SQLAlchemyStylistRepository(database)
        appointments = SQLAlchemyAppointmentRepository(database)
        first = Appointment(stylist.id, "Mert", "555-0001", DAY, TimeSlot(9, 0), 60)
        second = Appointment(stylist.id, "Deniz", "555-0002", DAY, TimeSlot(10, 0), 60)
        await appointments.insert(first)
        await appointments.insert(second)
        async with database.engine.begin() as conn:
            await conn.execute(text(
                "CREATE TRIGGER keep_stylists BEFORE DELETE ON stylists "
                "BEGIN SELECT RAISE(ABORT, 'stylist rows are locked'); END"
            ))

        with pytest.raises(PersistenceError):
            await repository.delete_with_appointments(stylist.id)

        assert await repository.exists(stylist.id)
        assert [appointment.id for appointment in await appointments.list_for_day(stylist.id, DAY)] == [
            first.id, second.id
        ]


class TestSQLAlchemyAppointmentRepository:
    """Test cases for SQLAlchemyAppointmentRepository."""

    def make_appointment(self, stylist_id, hour, minute=0, day=DAY, duration=60):
        return Appointment(stylist_id, "Mert", "555-0001", day, TimeSlot(hour, minute), duration)

    @pytest.mark.asyncio
    async def test_round_trip_keeps_every_field(self, database, stylist):
        repository = SQLAlchemyAppointmentRepository(database)
        appointment = self.make_appointment(stylist.id, 9, 30, duration=90)

        await repository.insert(appointment)
        stored = await repository.find_by_id(appointment.id)

        assert stored.id == appointment.id
        assert stored.stylist_id == stylist.id
        assert stored.date == DAY
        assert stored.start_slot == TimeSlot(9, 30)
        assert stored.duration_minutes == 90
        assert stored.customer_phone == "555-0001"

    @pytest.mark.asyncio
    async def test_list_for_day_sorted_and_filtered(self, database, stylist):
        repository = SQLAlchemyAppointmentRepository(database)
        other = Stylist("Selin")
        await SQLAlchemyStylistRepository(database).insert(other)
        for hour, minute in [(15, 0), (9, 30), (9, 0)]:
            await repository.insert(self.make_appointment(stylist.id, hour, minute))
        await repository.insert(self.make_appointment(other.id, 11))
        await repository.insert(self.make_appointment(stylist.id, 11, day=date(2030, 5, 2)))

        schedule = await repository.list_for_day(stylist.id, DAY)

        assert [str(appointment.start_slot) for appointment in schedule] == ["09:00", "09:30", "15:00"]

    @pytest.mark.asyncio
    async def test_update(self, database, stylist):
        repository = SQLAlchemyAppointmentRepository(database)
        appointment = self.make_appointment(stylist.id, 9)
        await repository.insert(appointment)

        moved = appointment.rescheduled(date(2030, 5, 2), TimeSlot(13, 0), 30, "Mert Kaya", "555-0009")
        assert await repository.update(moved) is True

        stored = await repository.find_by_id(appointment.id)
        assert stored.date == date(2030, 5, 2)
        assert stored.start_slot == TimeSlot(13, 0)
        assert stored.duration_minutes == 30
        assert stored.customer_name == "Mert Kaya"
        assert stored.updated_at == moved.updated_at
        assert stored.created_at == appointment.created_at

    @pytest.mark.asyncio
    async def test_update_missing(self, database, stylist):
        repository = SQLAlchemyAppointmentRepository(database)

        assert await repository.update(self.make_appointment(stylist.id, 9)) is False

    @pytest.mark.asyncio
    async def test_unknown_stylist_rejected_by_foreign_key(self, database):
        repository = SQLAlchemyAppointmentRepository(database)

        with pytest.raises(PersistenceError):
            await repository.insert(self.make_appointment(uuid4(), 9))

    @pytest.mark.asyncio
    async def test_list_for_stylist_and_delete(self, database, stylist):
        repository = SQLAlchemyAppointmentRepository(database)
        later = self.make_appointment(stylist.id, 8, day=date(2030, 5, 3))
        earlier = self.make_appointment(stylist.id, 17)
        await repository.insert(later)
        await repository.insert(earlier)

        assert [appointment.id for appointment in await repository.list_for_stylist(stylist.id)] == [
            earlier.id, later.id
        ]
        assert await repository.delete(earlier.id) is True
        assert await repository.delete(earlier.id) is False
        assert await repository.list_for_stylist(stylist.id) == [later]
