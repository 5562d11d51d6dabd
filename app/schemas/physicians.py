"""Physician schemas for request/response validation."""

from datetime import datetime
from typing import ClassVar

from pydantic import EmailStr, Field, field_validator

from app.schemas.base import CamelModel, PartialUpdate, blank_to_none


class PhysicianBase(CamelModel):
    """Base physician schema with common fields."""

    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    specialty: str = Field(..., min_length=1, max_length=200)
    phone: str = Field(..., min_length=1, max_length=40)
    email: EmailStr | None = None
    address: str | None = Field(None, max_length=500)
    office_hours: str | None = Field(None, max_length=500)

    @field_validator("email", "address", "office_hours", mode="before")
    @classmethod
    def empty_as_none(cls, v: object) -> object:
        """Accept blank optional fields from forms."""
        return blank_to_none(v)


class PhysicianCreate(PhysicianBase):
    """Schema for creating a physician. The owner comes from the session."""


class PhysicianUpdate(PartialUpdate):
    """Mutable physician fields."""

    non_nullable: ClassVar[frozenset[str]] = frozenset(
        {"first_name", "last_name", "specialty", "phone"}
    )

    first_name: str | None = Field(None, min_length=1, max_length=100)
    last_name: str | None = Field(None, min_length=1, max_length=100)
    specialty: str | None = Field(None, min_length=1, max_length=200)
    phone: str | None = Field(None, min_length=1, max_length=40)
    email: EmailStr | None = None
    address: str | None = Field(None, max_length=500)
    office_hours: str | None = Field(None, max_length=500)

    @field_validator("email", "address", "office_hours", mode="before")
    @classmethod
    def empty_as_none(cls, v: object) -> object:
        """Accept blank optional fields from forms."""
        return blank_to_none(v)


class PhysicianResponse(PhysicianBase):
    """Schema for physician response."""

    id: str
    user_id: str
    created_at: datetime

    model_config = {"from_attributes": True}
