"""
Calendar validator.
Checks a calendar definition for internal consistency before it is trusted
for scheduling. Pure: no database access.
"""

from typing import Optional, Union

from app.core.config import settings
from app.core.exceptions import CalendarValidationError
from app.core.i18n import translate
from app.models.calendar import ALL_DAYS
from app.schemas.calendar import (
    CalendarInformation,
    CalendarInformationCreate,
    CalendarValidationReason,
    CalendarValidationResult,
)

CalendarCandidate = Union[CalendarInformation, CalendarInformationCreate]


class CalendarValidator:
    """Validates work days against business-hour rules."""

    def __init__(self, min_work_days: Optional[int] = None):
        self.min_work_days = min_work_days if min_work_days is not None else settings.CALENDAR_MIN_WORK_DAYS

    def validate(self, candidate: CalendarCandidate) -> CalendarValidationResult:
        """
        Validate a fully assembled calendar.

        A calendar is accepted when it has enough distinct work days, at least
        one business-hour rule, and either an all-days rule or a rule for every
        work day. The candidate is returned unchanged on success.
        """
        work_days = set(candidate.work_days)
        if len(work_days) < self.min_work_days:
            return self._reject(
                CalendarValidationReason.TOO_FEW_WORK_DAYS,
                translate("ID_CALENDAR_TOO_FEW_WORK_DAYS", min_days=self.min_work_days),
            )

        if not candidate.business_hours:
            return self._reject(
                CalendarValidationReason.NO_BUSINESS_HOURS,
                translate("ID_CALENDAR_NO_BUSINESS_HOURS"),
            )

        rule_days = {rule.day for rule in candidate.business_hours}
        if ALL_DAYS not in rule_days and not work_days <= rule_days:
            return self._reject(
                CalendarValidationReason.INCOMPLETE_WORK_DAY_COVERAGE,
                translate("ID_CALENDAR_INCOMPLETE_COVERAGE"),
                uncovered=sorted(work_days - rule_days),
            )

        return CalendarValidationResult(valid=True, definition=candidate)

    def validate_or_raise(self, candidate: CalendarCandidate) -> CalendarCandidate:
        """Validate and return the candidate, raising CalendarValidationError on rejection."""
        result = self.validate(candidate)
        if not result.valid:
            raise CalendarValidationError(result.reason.value, result.message)
        return candidate

    @staticmethod
    def _reject(reason: CalendarValidationReason, message: str, uncovered=None) -> CalendarValidationResult:
        if uncovered:
            message = f"{message}: {', '.join(str(day) for day in uncovered)}"
        return CalendarValidationResult(valid=False, reason=reason, message=message)
