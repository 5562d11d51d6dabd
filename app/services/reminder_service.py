"""Reminder service for business logic."""

import structlog

from app.core.exceptions import ForbiddenException, NotFoundException, ValidationException
from app.schemas.reminders import ReminderCreate, ReminderResponse, ReminderUpdate
from app.storage.base import Record, Storage

logger = structlog.get_logger()


class ReminderService:
    """Service for managing appointment reminders."""

    def __init__(self, storage: Storage):
        """Initialize service with storage."""
        self.storage = storage

    async def _get_owned(self, reminder_id: str, user_id: str) -> Record:
        """
        Load a reminder the user may modify.

        Raises:
            NotFoundException: If reminder not found
            ForbiddenException: If another user owns it
        """
        reminder = await self.storage.get_reminder(reminder_id)

        if not reminder:
            raise NotFoundException("Reminder not found")

        if reminder["user_id"] != user_id:
            raise ForbiddenException("Access denied to this reminder")

        return reminder

    async def _check_appointment(self, appointment_id: str, user_id: str) -> None:
        """Reject references to appointments that are missing or owned by someone else."""
        appointment = await self.storage.get_appointment(appointment_id)
        if not appointment or appointment["user_id"] != user_id:
            raise ValidationException.for_field("appointmentId", "Appointment not found")

    async def list_reminders(self, user_id: str) -> list[ReminderResponse]:
        """List the user's reminders."""
        rows = await self.storage.list_reminders(user_id)
        return [ReminderResponse.model_validate(row) for row in rows]

    async def create_reminder(self, user_id: str, data: ReminderCreate) -> ReminderResponse:
        """
        Create a reminder for one of the user's appointments.

        Raises:
            ValidationException: If the appointment does not exist for this user
        """
        await self._check_appointment(data.appointment_id, user_id)

        reminder = await self.storage.create_reminder({**data.model_dump(), "user_id": user_id})
        logger.info(
            "reminder_created",
            reminder_id=reminder["id"],
            appointment_id=reminder["appointment_id"],
            user_id=user_id,
        )
        return ReminderResponse.model_validate(reminder)

    async def update_reminder(
        self,
        reminder_id: str,
        user_id: str,
        data: ReminderUpdate,
    ) -> ReminderResponse:
        """Update a reminder the user owns."""
        current = await self._get_owned(reminder_id, user_id)

        patch = data.to_patch()
        if "appointment_id" in patch and patch["appointment_id"] != current["appointment_id"]:
            await self._check_appointment(patch["appointment_id"], user_id)

        reminder = await self.storage.update_reminder(reminder_id, patch)
        if reminder is None:
            raise NotFoundException("Reminder not found")

        return ReminderResponse.model_validate(reminder)

    async def delete_reminder(self, reminder_id: str, user_id: str) -> None:
        """Delete a reminder the user owns."""
        await self._get_owned(reminder_id, user_id)

        if not await self.storage.delete_reminder(reminder_id):
            raise NotFoundException("Reminder not found")

        logger.info("reminder_deleted", reminder_id=reminder_id, user_id=user_id)
