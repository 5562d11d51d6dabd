"""Reminder endpoints."""

from fastapi import APIRouter, status

from app.dependencies import CurrentUserId, StorageDep
from app.schemas.reminders import ReminderCreate, ReminderResponse, ReminderUpdate
from app.services.reminder_service import ReminderService

router = APIRouter()


@router.get(
    "",
    response_model=list[ReminderResponse],
    status_code=status.HTTP_200_OK,
    summary="List my reminders",
)
async def list_reminders(user_id: CurrentUserId, storage: StorageDep) -> list[ReminderResponse]:
    """List the reminders of the authenticated user."""
    return await ReminderService(storage).list_reminders(user_id)


@router.post(
    "",
    response_model=ReminderResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a reminder",
)
async def create_reminder(
    data: ReminderCreate,
    user_id: CurrentUserId,
    storage: StorageDep,
) -> ReminderResponse:
    """
    Create a reminder for one of the user's appointments.

    Args:
        data: Reminder creation data; ``reminderDate`` is stored in UTC
        user_id: Authenticated user
        storage: Storage backend

    Returns:
        Created reminder, unsent unless the body says otherwise
    """
    return await ReminderService(storage).create_reminder(user_id, data)


@router.put(
    "/{reminder_id}",
    response_model=ReminderResponse,
    status_code=status.HTTP_200_OK,
    summary="Update a reminder",
)
async def update_reminder(
    reminder_id: str,
    data: ReminderUpdate,
    user_id: CurrentUserId,
    storage: StorageDep,
) -> ReminderResponse:
    """Update a reminder, for example to mark it sent."""
    return await ReminderService(storage).update_reminder(reminder_id, user_id, data)


@router.delete(
    "/{reminder_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a reminder",
)
async def delete_reminder(reminder_id: str, user_id: CurrentUserId, storage: StorageDep) -> None:
    """Delete a reminder."""
    await ReminderService(storage).delete_reminder(reminder_id, user_id)
