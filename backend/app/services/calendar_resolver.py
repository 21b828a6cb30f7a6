"""
Calendar resolver.
Determines which calendar governs a user/process/task owner chain.
"""

import logging
from typing import List, Optional, Sequence, Tuple
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.db.repositories.calendar_assignment_repository import CalendarAssignmentRepository
from app.models.calendar import CalendarAssignment, OwnerKind
from app.schemas.calendar import CalendarInformation
from app.services.base_service import BaseService

logger = logging.getLogger(__name__)

RANKED = "ranked"
LAST_MATCH = "last_match"


class CalendarResolver(BaseService):
    """
    Resolves the calendar for an owner chain.

    Two selection strategies are supported:

    - ``last_match`` (default): the last assignment returned by the lookup
      wins, whichever owner it belongs to. This depends on storage order.
    - ``ranked``: owner kinds are consulted in a fixed precedence order and the
      most recent assignment of the first kind that has one wins.
    """

    def __init__(
        self,
        session: AsyncSession,
        calendar_service,
        strategy: str = None,
        precedence: Sequence[str] = None,
    ):
        self.session = session
        self.calendar_service = calendar_service
        self.assignment_repo = CalendarAssignmentRepository(session)
        self.strategy = (strategy or settings.CALENDAR_RESOLUTION_STRATEGY).lower()
        if self.strategy not in (RANKED, LAST_MATCH):
            raise ValueError(f"Unknown calendar resolution strategy: {self.strategy}")
        self.precedence = [
            OwnerKind(kind.upper())
            for kind in (precedence or settings.CALENDAR_OWNER_PRECEDENCE)
        ]

    async def resolve(
        self,
        user_uid: Optional[str],
        process_uid: Optional[str],
        task_uid: Optional[str],
        validate: bool = True,
    ) -> CalendarInformation:
        """
        Resolve the governing calendar and tag it with the owner kind that won.

        Falls back to the default calendar when nothing is assigned, when the
        assigned calendar does not exist, or (with ``validate``) when it is
        invalid.
        """
        assignments = await self.assignment_repo.find_all([user_uid, process_uid, task_uid])
        selected = self.select_assignment(assignments, user_uid, process_uid, task_uid)

        if selected is None:
            calendar_uid = settings.DEFAULT_CALENDAR_UID
            owner = OwnerKind.DEFAULT
        else:
            assignment, owner = selected
            calendar_uid = assignment.calendar_uid

        information = await self.calendar_service.get_full_information(calendar_uid, validate=validate)
        information.owner = owner

        logger.debug(
            "Calendar resolved",
            extra={
                "user_uid": user_uid,
                "process_uid": process_uid,
                "task_uid": task_uid,
                "owner": owner.value,
                "calendar_uid": information.uid,
                "strategy": self.strategy,
            },
        )
        return information

    def select_assignment(
        self,
        assignments: List[CalendarAssignment],
        user_uid: Optional[str],
        process_uid: Optional[str],
        task_uid: Optional[str],
    ) -> Optional[Tuple[CalendarAssignment, OwnerKind]]:
        """Pick the governing assignment from rows in insertion order."""
        if not assignments:
            return None

        if self.strategy == LAST_MATCH:
            last = assignments[-1]
            return last, self._owner_of(last, user_uid, process_uid, task_uid)

        candidates = {
            OwnerKind.USER: user_uid,
            OwnerKind.PROCESS: process_uid,
            OwnerKind.TASK: task_uid,
        }
        for kind in self.precedence:
            owner_uid = candidates.get(kind)
            if not owner_uid:
                continue
            matches = [a for a in assignments if a.owner_uid == owner_uid]
            if matches:
                return matches[-1], kind
        return None

    @staticmethod
    def _owner_of(
        assignment: CalendarAssignment,
        user_uid: Optional[str],
        process_uid: Optional[str],
        task_uid: Optional[str],
    ) -> OwnerKind:
        # Checked in this order so a UID shared by several owners reports the first
        if assignment.owner_uid == user_uid:
            return OwnerKind.USER
        if assignment.owner_uid == process_uid:
            return OwnerKind.PROCESS
        if assignment.owner_uid == task_uid:
            return OwnerKind.TASK
        return OwnerKind.DEFAULT
