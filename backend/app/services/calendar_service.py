"""
Calendar service with business logic.
Owns the default-calendar bootstrap, assembly of a definition with its
business hours and holidays, and the save workflow.
"""

import asyncio
import logging
import uuid
import weakref
from datetime import date
from typing import List, Optional, Tuple, Union
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.exceptions import CalendarAlreadyExistsError
from app.core.i18n import translate
from app.db.repositories.calendar_assignment_repository import CalendarAssignmentRepository
from app.db.repositories.calendar_business_hours_repository import CalendarBusinessHoursRepository
from app.db.repositories.calendar_definition_repository import CalendarDefinitionRepository
from app.db.repositories.calendar_holiday_repository import CalendarHolidayRepository
from app.models.calendar import ALL_DAYS, CalendarDefinition, CalendarStatus
from app.schemas.calendar import (
    BusinessHoursCreate,
    CalendarAssignmentCreate,
    CalendarAssignmentResponse,
    CalendarDefinitionResponse,
    CalendarInformation,
    CalendarInformationCreate,
    CalendarValidationResult,
)
from app.services.base_service import BaseService
from app.services.calendar_resolver import CalendarResolver
from app.services.calendar_validator import CalendarValidator

logger = logging.getLogger(__name__)

# One bootstrap lock per event loop
_default_locks: "weakref.WeakKeyDictionary[asyncio.AbstractEventLoop, asyncio.Lock]" = weakref.WeakKeyDictionary()


def _default_lock() -> asyncio.Lock:
    loop = asyncio.get_running_loop()
    lock = _default_locks.get(loop)
    if lock is None:
        lock = _default_locks[loop] = asyncio.Lock()
    return lock


def generate_calendar_uid() -> str:
    """Generate a 32-character hyphen-free calendar identifier."""
    return uuid.uuid4().hex


class CalendarService(BaseService):
    """Service for calendar operations."""

    def __init__(self, session: AsyncSession, validator: CalendarValidator = None, resolver_strategy: str = None):
        self.session = session
        self.definition_repo = CalendarDefinitionRepository(session)
        self.business_hours_repo = CalendarBusinessHoursRepository(session)
        self.holiday_repo = CalendarHolidayRepository(session)
        self.assignment_repo = CalendarAssignmentRepository(session)
        self.validator = validator or CalendarValidator()
        self.resolver = CalendarResolver(session, self, strategy=resolver_strategy)

    # Default calendar

    def default_payload(self) -> CalendarInformationCreate:
        """The canonical definition of the system default calendar."""
        name = translate("ID_DEFAULT_CALENDAR")
        return CalendarInformationCreate(
            uid=settings.DEFAULT_CALENDAR_UID,
            name=name,
            description=name,
            status=CalendarStatus.ACTIVE,
            work_days=settings.DEFAULT_CALENDAR_WORK_DAYS,
            business_hours=[
                BusinessHoursCreate(
                    day=ALL_DAYS,
                    start_time=settings.DEFAULT_BUSINESS_START,
                    end_time=settings.DEFAULT_BUSINESS_END,
                )
            ],
            holidays=[],
        )

    async def initialize_default(self) -> CalendarDefinitionResponse:
        """
        Create the system default calendar if it is not stored yet.

        Concurrent callers in this process are serialized by a lock; a caller in
        another process that loses the insert race re-reads the winner's row.
        """
        return CalendarDefinitionResponse.model_validate(await self._get_default_record())

    async def get_default(self) -> CalendarDefinitionResponse:
        """Get the system default calendar, creating it on first use."""
        return await self.initialize_default()

    async def _get_default_record(self) -> CalendarDefinition:
        uid = settings.DEFAULT_CALENDAR_UID
        definition = await self.definition_repo.find(uid)
        if definition is not None:
            return definition

        async with _default_lock():
            definition = await self.definition_repo.find(uid)
            if definition is not None:
                return definition
            try:
                await self.save_information(self.default_payload())
                logger.info("Default calendar created", extra={"calendar_uid": uid})
            except (IntegrityError, CalendarAlreadyExistsError):
                logger.info("Default calendar created concurrently", extra={"calendar_uid": uid})
            return await self.definition_repo.find(uid)

    # Reads

    async def get_definition(
        self,
        uid: str,
        fallback_to_default: bool = False,
    ) -> Optional[CalendarDefinitionResponse]:
        """Get a calendar definition by UID, optionally substituting the default when absent."""
        definition = await self.definition_repo.find(uid)
        if definition is None:
            if not fallback_to_default:
                return None
            definition = await self._get_default_record()
        return CalendarDefinitionResponse.model_validate(definition)

    async def get_full_information(self, uid: str, validate: bool = False) -> CalendarInformation:
        """
        Get a definition with its business hours and holidays attached.

        A missing definition is replaced by the default. With ``validate`` an
        invalid definition is replaced by the default as well.
        """
        definition = await self.definition_repo.find(uid)
        if definition is None:
            if uid != settings.DEFAULT_CALENDAR_UID:
                logger.warning("Calendar not found, using default", extra={"calendar_uid": uid})
            definition = await self._get_default_record()

        business_hours = await self.business_hours_repo.list_by_calendar(definition.uid)
        holidays = await self.holiday_repo.list_by_calendar(definition.uid)
        information = CalendarInformation.from_records(definition, business_hours, holidays)

        if validate:
            information = await self.validate_information(information)
        return information

    def check_information(
        self,
        candidate: Union[CalendarInformation, CalendarInformationCreate],
    ) -> CalendarValidationResult:
        """Validate a candidate without substituting anything."""
        return self.validator.validate(candidate)

    async def validate_information(
        self,
        candidate: Union[CalendarInformation, CalendarInformationCreate],
    ) -> Union[CalendarInformation, CalendarInformationCreate]:
        """Return the candidate if it is valid, otherwise the default calendar's full information."""
        result = self.validator.validate(candidate)
        if result.valid:
            return result.definition

        logger.warning(
            "Calendar failed validation, using default",
            extra={
                "calendar_uid": getattr(candidate, "uid", None),
                "reason": result.reason.value,
            },
        )
        # Not re-validated: a broken default must not recurse
        return await self.get_full_information(settings.DEFAULT_CALENDAR_UID)

    async def resolve_calendar(
        self,
        user_uid: Optional[str],
        process_uid: Optional[str],
        task_uid: Optional[str],
        validate: bool = True,
    ) -> CalendarInformation:
        """Resolve the calendar governing a user/process/task owner chain."""
        return await self.resolver.resolve(user_uid, process_uid, task_uid, validate=validate)

    async def list_assignments(self, owner_uid: str) -> Tuple[List[CalendarAssignmentResponse], int]:
        """List the assignments recorded for an owner."""
        assignments = await self.assignment_repo.list_by_owner(owner_uid)
        items = [CalendarAssignmentResponse.model_validate(a) for a in assignments]
        return items, len(items)

    # Writes

    async def save_information(self, payload: CalendarInformationCreate) -> CalendarInformation:
        """
        Save a definition together with its business hours and holidays.

        A UID is generated when the payload has none. All rows are written in
        one transaction; on failure nothing is committed and the error is
        re-raised.
        """
        uid = payload.uid or generate_calendar_uid()
        if await self.definition_repo.exists(uid):
            raise CalendarAlreadyExistsError(uid)

        today = date.today()
        try:
            definition = await self.definition_repo.create(
                uid=uid,
                name=payload.name,
                description=payload.description,
                status=payload.status,
                work_days=list(payload.work_days),
                created_at=today,
                updated_at=today,
            )
            for rule in payload.business_hours:
                await self.business_hours_repo.create(
                    calendar_id=definition.id,
                    calendar_uid=uid,
                    day=rule.day,
                    start_time=rule.start_time,
                    end_time=rule.end_time,
                )
            for holiday in payload.holidays:
                await self.holiday_repo.create(
                    calendar_id=definition.id,
                    calendar_uid=uid,
                    name=holiday.name,
                    start_date=holiday.start_date,
                    end_date=holiday.end_date or holiday.start_date,
                    recurring=holiday.recurring,
                )
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.info(
            "Calendar saved",
            extra={
                "calendar_uid": uid,
                "business_hours": len(payload.business_hours),
                "holidays": len(payload.holidays),
            },
        )
        return await self.get_full_information(uid)

    async def save_assignment(self, payload: CalendarAssignmentCreate) -> CalendarAssignmentResponse:
        """Record an owner-to-calendar assignment. No dedup; precedence is applied when resolving."""
        assignment = await self.assignment_repo.create(**payload.model_dump())
        await self.session.commit()

        logger.info(
            "Calendar assignment saved",
            extra={
                "owner_uid": assignment.owner_uid,
                "owner_type": assignment.owner_type.value if assignment.owner_type else None,
                "calendar_uid": assignment.calendar_uid,
            },
        )
        return CalendarAssignmentResponse.model_validate(assignment)
