"""Reminder schemas for request/response validation."""

from datetime import UTC, datetime
from typing import ClassVar

from pydantic import Field, field_validator

from app.schemas.base import CamelModel, PartialUpdate


def _as_utc(v: datetime | None) -> datetime | None:
    """Normalize to UTC; timestamps without an offset are read as UTC."""
    if v is None:
        return None
    if v.tzinfo is None:
        return v.replace(tzinfo=UTC)
    return v.astimezone(UTC)


class ReminderBase(CamelModel):
    """Base reminder schema with common fields."""

    appointment_id: str = Field(..., min_length=1)
    reminder_date: datetime
    message: str | None = Field(None, max_length=1000)
    sent: bool = False

    @field_validator("reminder_date")
    @classmethod
    def reminder_date_utc(cls, v: datetime) -> datetime:
        """Store reminder times as UTC."""
        return _as_utc(v)


class ReminderCreate(ReminderBase):
    """Schema for creating a reminder."""


class ReminderUpdate(PartialUpdate):
    """Mutable reminder fields."""

    non_nullable: ClassVar[frozenset[str]] = frozenset({"appointment_id", "reminder_date", "sent"})

    appointment_id: str | None = Field(None, min_length=1)
    reminder_date: datetime | None = None
    message: str | None = Field(None, max_length=1000)
    sent: bool | None = None

    @field_validator("reminder_date")
    @classmethod
    def reminder_date_utc(cls, v: datetime | None) -> datetime | None:
        return _as_utc(v)


class ReminderResponse(ReminderBase):
    """Schema for reminder response."""

    id: str
    user_id: str
    created_at: datetime

    model_config = {"from_attributes": True}
