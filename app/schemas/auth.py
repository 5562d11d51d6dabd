"""Authentication schemas."""

from pydantic import Field

from app.schemas.base import CamelModel


class LoginRequest(CamelModel):
    """Username/password login request."""

    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)
