"""
Calendar definition repository for database operations.
"""

from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from app.db.repositories.base_repository import BaseRepository
from app.models.calendar import CalendarDefinition


class CalendarDefinitionRepository(BaseRepository[CalendarDefinition]):
    """Repository for calendar definition operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(CalendarDefinition, session)

    async def find(self, uid: str) -> Optional[CalendarDefinition]:
        """Get a definition by UID without its child rows."""
        result = await self.session.execute(
            select(CalendarDefinition).where(CalendarDefinition.uid == uid)
        )
        return result.scalar_one_or_none()

    async def exists(self, uid: str) -> bool:
        """Check whether a definition with this UID is stored."""
        result = await self.session.execute(
            select(CalendarDefinition.id).where(CalendarDefinition.uid == uid)
        )
        return result.first() is not None
