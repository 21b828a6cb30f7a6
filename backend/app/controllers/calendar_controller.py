"""
Calendar controller.
"""

from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession

from app.controllers.base_controller import BaseController
from app.core.exceptions import CalendarNotFoundError
from app.deps.di_container import get_container
from app.services.calendar_service import CalendarService
from app.schemas.calendar import (
    CalendarAssignmentCreate,
    CalendarAssignmentListResponse,
    CalendarAssignmentResponse,
    CalendarDefinitionResponse,
    CalendarInformation,
    CalendarInformationCreate,
    CalendarValidationResult,
)


class CalendarController(BaseController):
    """Controller for calendar operations."""

    def __init__(self, session: AsyncSession):
        self.calendar_service = CalendarService(
            session,
            validator=get_container().calendar_validator(),
        )

    async def save_calendar(self, calendar_data: CalendarInformationCreate) -> CalendarInformation:
        """Save a calendar with its business hours and holidays."""
        return await self.calendar_service.save_information(calendar_data)

    async def get_default_calendar(self) -> CalendarDefinitionResponse:
        """Get the system default calendar."""
        return await self.calendar_service.get_default()

    async def get_calendar(self, uid: str, validate: bool = False, strict: bool = False) -> CalendarInformation:
        """
        Get a calendar's full information.
        With ``strict`` a missing UID is an error instead of falling back to the default.
        """
        if strict and await self.calendar_service.get_definition(uid) is None:
            raise CalendarNotFoundError(uid)
        return await self.calendar_service.get_full_information(uid, validate=validate)

    async def validate_calendar(self, calendar_data: CalendarInformationCreate) -> CalendarValidationResult:
        """Validate a calendar payload without saving it."""
        result = self.calendar_service.check_information(calendar_data)
        # Echoing the payload back adds nothing for the caller
        return result.model_copy(update={"definition": None})

    async def resolve_calendar(
        self,
        user_uid: Optional[str],
        process_uid: Optional[str],
        task_uid: Optional[str],
        validate: bool = True,
    ) -> CalendarInformation:
        """Resolve the calendar governing an owner chain."""
        return await self.calendar_service.resolve_calendar(user_uid, process_uid, task_uid, validate=validate)

    async def save_assignment(self, assignment_data: CalendarAssignmentCreate) -> CalendarAssignmentResponse:
        """Assign a calendar to an owner."""
        return await self.calendar_service.save_assignment(assignment_data)

    async def list_assignments(self, owner_uid: str) -> CalendarAssignmentListResponse:
        """List the assignments recorded for an owner."""
        items, total = await self.calendar_service.list_assignments(owner_uid)
        return CalendarAssignmentListResponse(items=items, total=total)
