"""
Health service.
Provides health check functionality.
"""

import time
from app.core.config import settings
from app.db import session as db_session
from app.db.repositories.calendar_definition_repository import CalendarDefinitionRepository
from app.db.repositories.health_repository import HealthRepository
from app.services.base_service import BaseService
from app.schemas.health import HealthResponse


class HealthService(BaseService):
    """Service for health check operations."""

    def __init__(self):
        self.start_time = time.time()

    async def get_health(self) -> HealthResponse:
        """
        Get system health status.

        Returns:
            HealthResponse with status, uptime, and checks
        """
        uptime_seconds = int(time.time() - self.start_time)
        uptime_str = f"PT{uptime_seconds}S"  # ISO 8601 duration

        checks = {}

        if db_session.async_session_maker is None:
            checks["database"] = "error: not initialized"
        else:
            async with db_session.async_session_maker() as session:
                repo = HealthRepository(session=session)
                checks["database"] = "ok" if await repo.check_database() else "error"
                if checks["database"] == "ok":
                    has_default = await CalendarDefinitionRepository(session).exists(
                        settings.DEFAULT_CALENDAR_UID
                    )
                    checks["default_calendar"] = "ok" if has_default else "missing"

        # A missing default is created on first use, so it does not degrade status
        status = "ok" if checks.get("database") == "ok" else "degraded"

        return HealthResponse(
            status=status,
            uptime=uptime_str,
            checks=checks,
        )
