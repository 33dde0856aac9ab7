"""Dependency injection and service factory."""

from typing import Optional

from src.chair_booking.application.ports.collaborators import ContactProvider
from src.chair_booking.application.services.booking_service import BookingService
from src.chair_booking.application.services.reservation_editor import BusinessHours, ReservationEditor
from src.chair_booking.infrastructure.config import Settings, get_settings
from src.chair_booking.infrastructure.database.connection import DatabaseManager
from src.chair_booking.infrastructure.logging import LoggingConfig, get_logger
from src.chair_booking.infrastructure.notifications.reminders import InMemoryReminderScheduler
from src.chair_booking.infrastructure.repositories.sql_repositories import (
    SQLAlchemyAppointmentRepository,
    SQLAlchemyStylistRepository
)


class ServiceFactory:
    """Factory for creating application services with proper dependencies."""

    def __init__(self, settings: Settings):
        self._settings = settings
        self.database_manager = DatabaseManager(settings.database_url, echo=settings.database_echo)
        self.reminder_scheduler = InMemoryReminderScheduler(settings.reminder_offsets_minutes)
        self._booking_service: Optional[BookingService] = None
        self._connected = False
        self._logger = get_logger(__name__)

    def setup_logging(self) -> LoggingConfig:
        """Configure root logging from the log settings."""
        config = LoggingConfig(
            log_level=self._settings.log_level,
            log_dir=self._settings.log_dir,
            enable_console=self._settings.log_to_console,
            enable_file=self._settings.log_to_file
        )
        config.setup_logging()
        return config

    async def initialize(self) -> None:
        """Connect to the database and create missing tables."""
        if not self._connected:
            await self.database_manager.connect()
            await self.database_manager.create_tables()
            self._connected = True
            self._logger.info("Service factory initialized")

    async def shutdown(self) -> None:
        """Finish pending reminder work and close the database."""
        if self._booking_service is not None:
            await self._booking_service.flush_reminders()
        if self._connected:
            await self.database_manager.disconnect()
            self._connected = False

    def get_booking_service(self) -> BookingService:
        """Get the booking service; one instance so every write shares its lock."""
        if self._booking_service is None:
            self._booking_service = BookingService(
                stylist_repository=SQLAlchemyStylistRepository(self.database_manager),
                appointment_repository=SQLAlchemyAppointmentRepository(self.database_manager),
                reminder_scheduler=self.reminder_scheduler
            )
        return self._booking_service

    def get_reservation_editor(self, contact_provider: Optional[ContactProvider] = None) -> ReservationEditor:
        """Get a booking form bound to the shared booking service."""
        return ReservationEditor(
            booking_service=self.get_booking_service(),
            business_hours=BusinessHours(
                self._settings.business_start_hour,
                self._settings.business_end_hour
            ),
            contact_provider=contact_provider,
            default_duration_minutes=self._settings.default_duration_minutes
        )


# Global service factory instance
_service_factory: ServiceFactory | None = None


def get_service_factory() -> ServiceFactory:
    """Get the global service factory instance."""
    global _service_factory

    if _service_factory is None:
        _service_factory = ServiceFactory(get_settings())

    return _service_factory


async def initialize_services() -> ServiceFactory:
    """Initialize application services."""
    factory = get_service_factory()
    factory.setup_logging()
    await factory.initialize()
    return factory


async def shutdown_services() -> None:
    """Shutdown application services."""
    factory = get_service_factory()
    await factory.shutdown()
