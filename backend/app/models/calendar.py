"""
Business calendar models: definitions, business hours, holidays and owner assignments.
"""

from sqlalchemy import (
    Column,
    Integer,
    String,
    Boolean,
    Date,
    DateTime,
    Time,
    JSON,
    ForeignKey,
    Enum as SQLEnum,
)
from sqlalchemy.orm import relationship
from datetime import date, datetime, timezone
import enum

from app.db.base import Base


ALL_DAYS = 7  # business-hour day code that applies to every weekday


class CalendarStatus(str, enum.Enum):
    """Calendar definition status."""
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


class OwnerKind(str, enum.Enum):
    """Which owner a calendar assignment or resolution pertains to."""
    USER = "USER"
    PROCESS = "PROCESS"
    TASK = "TASK"
    DEFAULT = "DEFAULT"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CalendarDefinition(Base):
    """Named weekly work-time template."""

    __tablename__ = "calendar_definitions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    uid = Column(String(32), nullable=False, unique=True, index=True)
    name = Column(String(100), nullable=False)
    description = Column(String(1000), nullable=True)
    status = Column(
        SQLEnum(CalendarStatus, values_callable=lambda x: [e.value for e in CalendarStatus]),
        nullable=False,
        default=CalendarStatus.ACTIVE,
    )
    work_days = Column(JSON, nullable=False, default=list)  # day codes, 0 = Sunday
    created_at = Column(Date, nullable=False, default=date.today)
    updated_at = Column(Date, nullable=False, default=date.today)

    # Relationships
    business_hours = relationship(
        "CalendarBusinessHours",
        back_populates="calendar",
        cascade="all, delete-orphan",
        order_by="CalendarBusinessHours.id",
    )
    holidays = relationship(
        "CalendarHoliday",
        back_populates="calendar",
        cascade="all, delete-orphan",
        order_by="CalendarHoliday.id",
    )


class CalendarBusinessHours(Base):
    """Time window applicable to one weekday, or to all days when day is 7."""

    __tablename__ = "calendar_business_hours"

    id = Column(Integer, primary_key=True, autoincrement=True)
    calendar_id = Column(Integer, ForeignKey("calendar_definitions.id", ondelete="CASCADE"), nullable=False, index=True)
    calendar_uid = Column(String(32), nullable=False, index=True)
    day = Column(Integer, nullable=False)
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)

    calendar = relationship("CalendarDefinition", back_populates="business_hours")


class CalendarHoliday(Base):
    """Date range during which no work time accrues."""

    __tablename__ = "calendar_holidays"

    id = Column(Integer, primary_key=True, autoincrement=True)
    calendar_id = Column(Integer, ForeignKey("calendar_definitions.id", ondelete="CASCADE"), nullable=False, index=True)
    calendar_uid = Column(String(32), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    recurring = Column(Boolean, nullable=False, default=False)  # month/day repeats every year

    calendar = relationship("CalendarDefinition", back_populates="holidays")


class CalendarAssignment(Base):
    """Binds a user, process or task UID to the calendar that governs it."""

    __tablename__ = "calendar_assignments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    owner_uid = Column(String(32), nullable=False, index=True)
    owner_type = Column(
        SQLEnum(OwnerKind, values_callable=lambda x: [e.value for e in OwnerKind]),
        nullable=True,
    )
    calendar_uid = Column(String(32), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
