"""Script to initialize the local booking database."""

import asyncio

from src.chair_booking.infrastructure.config import get_settings
from src.chair_booking.infrastructure.logging import get_logger
from src.chair_booking.infrastructure.services import ServiceFactory


async def create_tables():
    """Create all database tables."""
    settings = get_settings()
    factory = ServiceFactory(settings)
    factory.setup_logging()
    logger = get_logger(__name__)

    try:
        await factory.initialize()
        logger.info("Database tables created", extra={"database_url": settings.database_url})
    except Exception:
        logger.exception("Error creating tables")
        raise
    finally:
        await factory.shutdown()


if __name__ == "__main__":
    asyncio.run(create_tables())
