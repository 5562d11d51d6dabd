"""Physician endpoints."""

from fastapi import APIRouter, status

from app.dependencies import CurrentUserId, StorageDep
from app.schemas.physicians import PhysicianCreate, PhysicianResponse, PhysicianUpdate
from app.services.physician_service import PhysicianService

router = APIRouter()


@router.get(
    "",
    response_model=list[PhysicianResponse],
    status_code=status.HTTP_200_OK,
    summary="List my physicians",
)
async def list_physicians(
    user_id: CurrentUserId,
    storage: StorageDep,
) -> list[PhysicianResponse]:
    """List the physicians owned by the authenticated user."""
    return await PhysicianService(storage).list_physicians(user_id)


@router.post(
    "",
    response_model=PhysicianResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a physician",
)
async def create_physician(
    data: PhysicianCreate,
    user_id: CurrentUserId,
    storage: StorageDep,
) -> PhysicianResponse:
    """
    Add a physician to the authenticated user's roster.

    Any ``userId`` in the body is ignored; the owner is the session user.
    """
    return await PhysicianService(storage).create_physician(user_id, data)


@router.put(
    "/{physician_id}",
    response_model=PhysicianResponse,
    status_code=status.HTTP_200_OK,
    summary="Update a physician",
)
async def update_physician(
    physician_id: str,
    data: PhysicianUpdate,
    user_id: CurrentUserId,
    storage: StorageDep,
) -> PhysicianResponse:
    """
    Update a physician.

    Args:
        physician_id: Physician ID
        data: Fields to change
        user_id: Authenticated user
        storage: Storage backend

    Returns:
        Updated physician
    """
    return await PhysicianService(storage).update_physician(physician_id, user_id, data)


@router.delete(
    "/{physician_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a physician",
)
async def delete_physician(
    physician_id: str,
    user_id: CurrentUserId,
    storage: StorageDep,
) -> None:
    """Delete a physician. Appointments referencing it are left in place."""
    await PhysicianService(storage).delete_physician(physician_id, user_id)
