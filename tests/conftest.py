"""
Pytest configuration and fixtures.
Provides an in-memory SQLite database, sessions bound to it, and a test
HTTP client wired to the same database.
"""

import os

# Must be set before the application settings are imported
os.environ.setdefault("RATE_LIMIT_ENABLED", "False")

import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from app.main import app
from app.db.base import Base
from app.db import session as db_session
from app.models import CalendarDefinition  # noqa: F401  registers models with Base
from app.schemas.calendar import BusinessHoursCreate, CalendarInformationCreate, HolidayCreate


# Test database URL (in-memory SQLite for testing)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture(scope="function")
async def test_engine():
    """Create an in-memory database with all tables."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture(scope="function")
def test_session_maker(test_engine):
    return async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest.fixture(scope="function")
async def test_db_session(test_session_maker):
    """
    Create a test database session.
    Uses in-memory SQLite for fast tests.
    """
    async with test_session_maker() as session:
        yield session


@pytest.fixture(scope="function")
async def test_client(test_engine, test_session_maker):
    """
    Create a test HTTP client whose requests use the test database.
    """
    previous = (db_session.engine, db_session.async_session_maker)
    db_session.engine = test_engine
    db_session.async_session_maker = test_session_maker

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    db_session.engine, db_session.async_session_maker = previous


@pytest.fixture
def make_calendar():
    """Factory for calendar write payloads."""

    def _make(
        work_days=(1, 2, 3, 4, 5),
        rule_days=(7,),
        holidays=(),
        **overrides,
    ) -> CalendarInformationCreate:
        data = {
            "name": "Operations",
            "description": "Operations team calendar",
            "work_days": list(work_days),
            "business_hours": [
                BusinessHoursCreate(day=day, start_time="09:00", end_time="17:00")
                for day in rule_days
            ],
            "holidays": [
                HolidayCreate(name=name, start_date=start)
                for name, start in holidays
            ],
        }
        data.update(overrides)
        return CalendarInformationCreate(**data)

    return _make
