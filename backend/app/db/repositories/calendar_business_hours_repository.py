"""
Calendar business hours repository for database operations.
"""

from typing import List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from app.db.repositories.base_repository import BaseRepository
from app.models.calendar import CalendarBusinessHours


class CalendarBusinessHoursRepository(BaseRepository[CalendarBusinessHours]):
    """Repository for business-hour rule operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(CalendarBusinessHours, session)

    async def list_by_calendar(self, calendar_uid: str) -> List[CalendarBusinessHours]:
        """List the business-hour rules of a calendar in insertion order."""
        query = (
            select(CalendarBusinessHours)
            .where(CalendarBusinessHours.calendar_uid == calendar_uid)
            .order_by(CalendarBusinessHours.id)
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())
