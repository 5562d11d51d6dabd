"""Custom application exceptions."""

from typing import Any


class AppException(Exception):
    """Base application exception."""

    def __init__(self, message: str, status_code: int = 500):
        """Initialize exception with message and status code."""
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class NotFoundException(AppException):
    """Resource not found exception."""

    def __init__(self, message: str = "Resource not found"):
        """Initialize with 404 status code."""
        super().__init__(message, status_code=404)


class UnauthorizedException(AppException):
    """Missing, invalid or expired session, or rejected credentials."""

    def __init__(self, message: str = "Not authenticated"):
        """Initialize with 401 status code."""
        super().__init__(message, status_code=401)


class ForbiddenException(AppException):
    """Authenticated caller does not own the requested record."""

    def __init__(self, message: str = "Forbidden"):
        """Initialize with 403 status code."""
        super().__init__(message, status_code=403)


class ValidationException(AppException):
    """Request body failed validation."""

    def __init__(
        self,
        message: str = "Invalid data",
        errors: list[dict[str, Any]] | None = None,
    ):
        """Initialize with 400 status code and per-field error details."""
        super().__init__(message, status_code=400)
        self.errors = errors or []

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationException":
        """Build an exception reporting a single offending field."""
        return cls(errors=[{"field": field, "message": message}])
