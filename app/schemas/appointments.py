"""Appointment schemas for request/response validation."""

from datetime import date, datetime
from enum import Enum
from typing import ClassVar

from pydantic import Field, field_validator

from app.schemas.base import CamelModel, PartialUpdate, blank_to_none

DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"
TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


class AppointmentStatus(str, Enum):
    """Appointment status enumeration."""

    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


def _check_calendar_date(v: str | None) -> str | None:
    if v is not None:
        try:
            date.fromisoformat(v)
        except ValueError:
            raise ValueError("Date must be a valid calendar date (YYYY-MM-DD)") from None
    return v


class AppointmentBase(CamelModel):
    """Base appointment schema with common fields."""

    physician_id: str = Field(..., min_length=1)
    date: str = Field(..., pattern=DATE_PATTERN, description="YYYY-MM-DD")
    time: str = Field(..., pattern=TIME_PATTERN, description="HH:MM, 24-hour")
    type: str = Field(..., min_length=1, max_length=100)
    notes: str | None = Field(None, max_length=1000)
    status: AppointmentStatus = AppointmentStatus.SCHEDULED

    @field_validator("date")
    @classmethod
    def validate_date(cls, v: str) -> str:
        """Reject well-formed strings that are not real dates, such as 2024-02-30."""
        return _check_calendar_date(v)

    @field_validator("notes", mode="before")
    @classmethod
    def empty_notes_as_none(cls, v: object) -> object:
        """Treat blank notes as absent."""
        return blank_to_none(v)


class AppointmentCreate(AppointmentBase):
    """Schema for creating a new appointment."""


class AppointmentUpdate(PartialUpdate):
    """Mutable appointment fields."""

    non_nullable: ClassVar[frozenset[str]] = frozenset(
        {"physician_id", "date", "time", "type", "status"}
    )

    physician_id: str | None = Field(None, min_length=1)
    date: str | None = Field(None, pattern=DATE_PATTERN)
    time: str | None = Field(None, pattern=TIME_PATTERN)
    type: str | None = Field(None, min_length=1, max_length=100)
    notes: str | None = Field(None, max_length=1000)
    status: AppointmentStatus | None = None

    @field_validator("date")
    @classmethod
    def validate_date(cls, v: str | None) -> str | None:
        """Reject well-formed strings that are not real dates."""
        return _check_calendar_date(v)


class AppointmentResponse(AppointmentBase):
    """Schema for appointment response."""

    id: str
    user_id: str
    created_at: datetime

    model_config = {"from_attributes": True}
