"""
Calendar assignment repository for database operations.
"""

from typing import Iterable, List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from app.db.repositories.base_repository import BaseRepository
from app.models.calendar import CalendarAssignment


class CalendarAssignmentRepository(BaseRepository[CalendarAssignment]):
    """Repository for calendar assignment operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(CalendarAssignment, session)

    async def find_all(self, owner_uids: Iterable[Optional[str]]) -> List[CalendarAssignment]:
        """
        List assignments for any of the given owner UIDs.

        Rows come back in insertion order, oldest first. Empty or None UIDs
        are ignored.
        """
        uids = list({uid for uid in owner_uids if uid})
        if not uids:
            return []
        query = (
            select(CalendarAssignment)
            .where(CalendarAssignment.owner_uid.in_(uids))
            .order_by(CalendarAssignment.id)
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def list_by_owner(self, owner_uid: str) -> List[CalendarAssignment]:
        """List assignments recorded for one owner, oldest first."""
        return await self.find_all([owner_uid])
