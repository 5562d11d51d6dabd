"""User service for business logic."""

import structlog

from app.core.exceptions import ValidationException
from app.core.security import get_password_hash
from app.schemas.users import UserCreate, UserResponse
from app.storage.base import DuplicateUsernameError, Storage

logger = structlog.get_logger()


class UserService:
    """Service for user operations."""

    def __init__(self, storage: Storage):
        """Initialize service with storage."""
        self.storage = storage

    async def create_user(self, data: UserCreate) -> UserResponse:
        """
        Provision a new user with a hashed password.

        Args:
            data: User creation data

        Returns:
            Created user without the password

        Raises:
            ValidationException: If the username is already taken
        """
        if await self.storage.get_user_by_username(data.username):
            raise ValidationException.for_field("username", "Username already taken")

        values = data.model_dump()
        values["password"] = get_password_hash(data.password)

        try:
            user = await self.storage.create_user(values)
        except DuplicateUsernameError:
            # Taken between the lookup and the insert
            raise ValidationException.for_field("username", "Username already taken") from None

        logger.info("user_created", user_id=user["id"], username=user["username"])
        return UserResponse.model_validate(user)

    async def get_user(self, user_id: str) -> UserResponse | None:
        """Get a user by id, or None."""
        user = await self.storage.get_user(user_id)
        return UserResponse.model_validate(user) if user else None
