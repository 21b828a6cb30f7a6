"""
Calendar Pydantic schemas for request/response validation.
Write payloads carry only desired attributes; response shapes carry
storage identifiers and timestamps.
"""

from pydantic import BaseModel, Field, field_validator, model_validator
from typing import Optional, List, Union
from datetime import date, datetime, time
import enum

from app.models.calendar import CalendarStatus, OwnerKind


class CalendarValidationReason(str, enum.Enum):
    """Why a calendar definition was rejected."""
    TOO_FEW_WORK_DAYS = "TOO_FEW_WORK_DAYS"
    NO_BUSINESS_HOURS = "NO_BUSINESS_HOURS"
    INCOMPLETE_WORK_DAY_COVERAGE = "INCOMPLETE_WORK_DAY_COVERAGE"


class BusinessHoursBase(BaseModel):
    """Base schema for a business-hour rule."""
    day: int = Field(..., ge=0, le=7, description="0 = Sunday ... 6 = Saturday, 7 = all days")
    start_time: time
    end_time: time


class BusinessHoursCreate(BusinessHoursBase):
    """Create schema for a business-hour rule."""

    @model_validator(mode="after")
    def check_window(self) -> "BusinessHoursCreate":
        if self.end_time <= self.start_time:
            raise ValueError("end_time must be after start_time")
        return self


class BusinessHoursResponse(BusinessHoursBase):
    """Response schema for a business-hour rule."""
    id: int
    calendar_uid: str

    class Config:
        from_attributes = True


class HolidayBase(BaseModel):
    """Base schema for a holiday."""
    name: str = Field(..., min_length=1, max_length=100)
    start_date: date
    end_date: Optional[date] = None
    recurring: bool = False


class HolidayCreate(HolidayBase):
    """Create schema for a holiday. A single day when end_date is omitted."""

    @model_validator(mode="after")
    def check_range(self) -> "HolidayCreate":
        if self.end_date is None:
            self.end_date = self.start_date
        elif self.end_date < self.start_date:
            raise ValueError("end_date must not precede start_date")
        return self


class HolidayResponse(HolidayBase):
    """Response schema for a holiday."""
    id: int
    calendar_uid: str
    end_date: date

    class Config:
        from_attributes = True


class CalendarDefinitionBase(BaseModel):
    """Base calendar definition schema with common fields."""
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=1000)
    status: CalendarStatus = CalendarStatus.ACTIVE
    work_days: List[int] = Field(..., min_length=1, max_length=7, description="Day codes, 0 = Sunday")

    @field_validator("work_days")
    @classmethod
    def normalize_work_days(cls, value: List[int]) -> List[int]:
        normalized = []
        for day in value:
            if day < 0 or day > 6:
                raise ValueError(f"invalid work day {day}, expected 0-6")
            if day not in normalized:
                normalized.append(day)
        return normalized


class CalendarInformationCreate(CalendarDefinitionBase):
    """Write payload: a definition with its business hours and holidays."""
    uid: Optional[str] = Field(None, min_length=1, max_length=32)
    business_hours: List[BusinessHoursCreate] = Field(default_factory=list)
    holidays: List[HolidayCreate] = Field(default_factory=list)


class CalendarDefinitionResponse(CalendarDefinitionBase):
    """Response schema for a bare calendar definition."""
    id: int
    uid: str
    created_at: date
    updated_at: date

    class Config:
        from_attributes = True


class CalendarInformation(CalendarDefinitionResponse):
    """A definition with its business hours and holidays attached."""
    business_hours: List[BusinessHoursResponse] = Field(default_factory=list)
    holidays: List[HolidayResponse] = Field(default_factory=list)
    owner: Optional[OwnerKind] = None

    @classmethod
    def from_records(cls, definition, business_hours, holidays) -> "CalendarInformation":
        """Assemble from ORM rows without touching lazy relationships."""
        base = CalendarDefinitionResponse.model_validate(definition)
        return cls(
            **base.model_dump(),
            business_hours=[BusinessHoursResponse.model_validate(h) for h in business_hours],
            holidays=[HolidayResponse.model_validate(h) for h in holidays],
        )


class CalendarValidationResult(BaseModel):
    """Outcome of validating a calendar: the definition, or the reason it was rejected."""
    valid: bool
    reason: Optional[CalendarValidationReason] = None
    message: Optional[str] = None
    definition: Optional[Union[CalendarInformation, CalendarInformationCreate]] = None


class CalendarAssignmentCreate(BaseModel):
    """Create schema for a calendar assignment."""
    owner_uid: str = Field(..., min_length=1, max_length=32)
    owner_type: Optional[OwnerKind] = None
    calendar_uid: str = Field(..., min_length=1, max_length=32)

    @field_validator("owner_type")
    @classmethod
    def reject_default_owner(cls, value: Optional[OwnerKind]) -> Optional[OwnerKind]:
        if value == OwnerKind.DEFAULT:
            raise ValueError("DEFAULT is not an assignable owner type")
        return value


class CalendarAssignmentResponse(BaseModel):
    """Response schema for a calendar assignment."""
    id: int
    owner_uid: str
    owner_type: Optional[OwnerKind] = None
    calendar_uid: str
    created_at: datetime

    class Config:
        from_attributes = True


class CalendarAssignmentListResponse(BaseModel):
    """Schema for assignment list response."""
    items: List[CalendarAssignmentResponse]
    total: int
