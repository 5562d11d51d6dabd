"""User schemas for request/response validation."""

from datetime import datetime

from pydantic import Field

from app.schemas.base import CamelModel


class UserCreate(CamelModel):
    """Schema for provisioning a new user."""

    username: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=1)
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None


class UserResponse(CamelModel):
    """User as returned by the API; the password hash is never included."""

    id: str
    username: str
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    created_at: datetime | None = None

    model_config = {"from_attributes": True}
