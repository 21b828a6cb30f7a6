"""
Database initialization and bootstrapping.
Creates tables on demand and seeds the system default calendar.
"""

from app.db.base import Base
from app.db import session as db_session
from app.core.logging import get_logger

logger = get_logger(__name__)


async def create_tables() -> None:
    """
    Create all database tables.
    Production deployments manage the schema with migrations; this is for
    local runs and tests.
    """
    import app.models  # noqa: F401  registers every model with Base

    async with db_session.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    logger.info("Database tables initialized")


async def seed_initial_data() -> None:
    """
    Seed initial data: the system default calendar.
    Safe to run repeatedly.
    """
    from app.services.calendar_service import CalendarService

    async with db_session.async_session_maker() as session:
        default = await CalendarService(session).initialize_default()

    logger.info("Initial data seeded", extra={"default_calendar_uid": default.uid})
