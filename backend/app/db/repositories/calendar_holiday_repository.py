"""
Calendar holiday repository for database operations.
"""

from typing import List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from app.db.repositories.base_repository import BaseRepository
from app.models.calendar import CalendarHoliday


class CalendarHolidayRepository(BaseRepository[CalendarHoliday]):
    """Repository for holiday operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(CalendarHoliday, session)

    async def list_by_calendar(self, calendar_uid: str) -> List[CalendarHoliday]:
        """List the holidays of a calendar in insertion order."""
        query = (
            select(CalendarHoliday)
            .where(CalendarHoliday.calendar_uid == calendar_uid)
            .order_by(CalendarHoliday.id)
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())
