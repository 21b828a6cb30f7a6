"""
Calendar API endpoints.
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional

from app.db.session import get_db
from app.controllers.calendar_controller import CalendarController
from app.schemas.calendar import (
    CalendarAssignmentCreate,
    CalendarAssignmentListResponse,
    CalendarAssignmentResponse,
    CalendarDefinitionResponse,
    CalendarInformation,
    CalendarInformationCreate,
    CalendarValidationResult,
)

router = APIRouter()


@router.post("", response_model=CalendarInformation, status_code=status.HTTP_201_CREATED)
async def save_calendar(
    calendar_data: CalendarInformationCreate,
    db: AsyncSession = Depends(get_db),
) -> CalendarInformation:
    """Save a calendar definition with its business hours and holidays."""
    controller = CalendarController(db)
    return await controller.save_calendar(calendar_data)


@router.get("/default", response_model=CalendarDefinitionResponse)
async def get_default_calendar(
    db: AsyncSession = Depends(get_db),
) -> CalendarDefinitionResponse:
    """Get the system default calendar."""
    controller = CalendarController(db)
    return await controller.get_default_calendar()


@router.get("/resolve", response_model=CalendarInformation)
async def resolve_calendar(
    user_uid: Optional[str] = Query(None, max_length=32),
    process_uid: Optional[str] = Query(None, max_length=32),
    task_uid: Optional[str] = Query(None, max_length=32),
    validate: bool = Query(True),
    db: AsyncSession = Depends(get_db),
) -> CalendarInformation:
    """Resolve the calendar that governs a user, process and task."""
    controller = CalendarController(db)
    return await controller.resolve_calendar(user_uid, process_uid, task_uid, validate=validate)


@router.post("/validate", response_model=CalendarValidationResult)
async def validate_calendar(
    calendar_data: CalendarInformationCreate,
    db: AsyncSession = Depends(get_db),
) -> CalendarValidationResult:
    """Check a calendar payload for consistency without saving it."""
    controller = CalendarController(db)
    return await controller.validate_calendar(calendar_data)


@router.post("/assignments", response_model=CalendarAssignmentResponse, status_code=status.HTTP_201_CREATED)
async def save_assignment(
    assignment_data: CalendarAssignmentCreate,
    db: AsyncSession = Depends(get_db),
) -> CalendarAssignmentResponse:
    """Assign a calendar to a user, process or task."""
    controller = CalendarController(db)
    return await controller.save_assignment(assignment_data)


@router.get("/assignments/{owner_uid}", response_model=CalendarAssignmentListResponse)
async def list_assignments(
    owner_uid: str,
    db: AsyncSession = Depends(get_db),
) -> CalendarAssignmentListResponse:
    """List the calendar assignments recorded for an owner."""
    controller = CalendarController(db)
    return await controller.list_assignments(owner_uid)


@router.get("/{uid}", response_model=CalendarInformation)
async def get_calendar(
    uid: str,
    validate: bool = Query(False),
    strict: bool = Query(False, description="Return 404 instead of the default calendar"),
    db: AsyncSession = Depends(get_db),
) -> CalendarInformation:
    """Get a calendar with its business hours and holidays."""
    controller = CalendarController(db)
    return await controller.get_calendar(uid, validate=validate, strict=strict)
