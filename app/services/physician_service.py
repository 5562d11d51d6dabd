"""Physician service for business logic."""

import structlog

from app.core.exceptions import ForbiddenException, NotFoundException
from app.schemas.physicians import PhysicianCreate, PhysicianResponse, PhysicianUpdate
from app.storage.base import Record, Storage

logger = structlog.get_logger()


class PhysicianService:
    """Service for managing a user's physicians."""

    def __init__(self, storage: Storage):
        """Initialize service with storage."""
        self.storage = storage

    async def _get_owned(self, physician_id: str, user_id: str) -> Record:
        """
        Load a physician the user may modify.

        Raises:
            NotFoundException: If physician not found
            ForbiddenException: If another user owns it
        """
        physician = await self.storage.get_physician(physician_id)

        if not physician:
            raise NotFoundException("Physician not found")

        if physician["user_id"] != user_id:
            raise ForbiddenException("Access denied to this physician")

        return physician

    async def list_physicians(self, user_id: str) -> list[PhysicianResponse]:
        """List the physicians owned by the user."""
        rows = await self.storage.list_physicians(user_id)
        return [PhysicianResponse.model_validate(row) for row in rows]

    async def create_physician(self, user_id: str, data: PhysicianCreate) -> PhysicianResponse:
        """
        Create a physician owned by the user.

        Args:
            user_id: Session user; always the owner regardless of the request body
            data: Physician creation data

        Returns:
            Created physician
        """
        physician = await self.storage.create_physician({**data.model_dump(), "user_id": user_id})
        logger.info("physician_created", physician_id=physician["id"], user_id=user_id)
        return PhysicianResponse.model_validate(physician)

    async def update_physician(
        self,
        physician_id: str,
        user_id: str,
        data: PhysicianUpdate,
    ) -> PhysicianResponse:
        """
        Update an existing physician.

        Args:
            physician_id: Physician ID
            user_id: ID of requesting user
            data: Fields to change

        Returns:
            Updated physician

        Raises:
            NotFoundException: If physician not found
            ForbiddenException: If user doesn't own it
        """
        await self._get_owned(physician_id, user_id)

        physician = await self.storage.update_physician(physician_id, data.to_patch())
        if physician is None:
            # Deleted between the ownership check and the write
            raise NotFoundException("Physician not found")

        logger.info("physician_updated", physician_id=physician_id, user_id=user_id)
        return PhysicianResponse.model_validate(physician)

    async def delete_physician(self, physician_id: str, user_id: str) -> None:
        """
        Delete a physician.

        Raises:
            NotFoundException: If physician not found
            ForbiddenException: If user doesn't own it
        """
        await self._get_owned(physician_id, user_id)

        if not await self.storage.delete_physician(physician_id):
            raise NotFoundException("Physician not found")

        logger.info("physician_deleted", physician_id=physician_id, user_id=user_id)
