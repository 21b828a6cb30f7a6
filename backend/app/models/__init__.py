"""
Database models.
Import all models here to ensure they're registered with Base.
"""

from app.models.calendar import (
    CalendarDefinition,
    CalendarBusinessHours,
    CalendarHoliday,
    CalendarAssignment,
    CalendarStatus,
    OwnerKind,
)

__all__ = [
    "CalendarDefinition",
    "CalendarBusinessHours",
    "CalendarHoliday",
    "CalendarAssignment",
    "CalendarStatus",
    "OwnerKind",
]
