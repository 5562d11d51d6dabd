"""Appointment endpoints."""

from fastapi import APIRouter, status

from app.dependencies import CurrentUserId, StorageDep
from app.schemas.appointments import AppointmentCreate, AppointmentResponse, AppointmentUpdate
from app.services.appointment_service import AppointmentService

router = APIRouter()


@router.get(
    "",
    response_model=list[AppointmentResponse],
    status_code=status.HTTP_200_OK,
    summary="List my appointments",
)
async def list_appointments(
    user_id: CurrentUserId,
    storage: StorageDep,
) -> list[AppointmentResponse]:
    """List all appointments of the authenticated user."""
    service = AppointmentService(storage)
    return await service.list_appointments(user_id)


# Declared before "/{appointment_id}" routes so "upcoming" is not read as an id
@router.get(
    "/upcoming",
    response_model=list[AppointmentResponse],
    status_code=status.HTTP_200_OK,
    summary="List upcoming appointments",
)
async def list_upcoming_appointments(
    user_id: CurrentUserId,
    storage: StorageDep,
) -> list[AppointmentResponse]:
    """
    List scheduled appointments dated today or later.

    Returns:
        Appointments sorted by date, then time
    """
    service = AppointmentService(storage)
    return await service.list_upcoming(user_id)


@router.post(
    "",
    response_model=AppointmentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create new appointment",
)
async def create_appointment(
    data: AppointmentCreate,
    user_id: CurrentUserId,
    storage: StorageDep,
) -> AppointmentResponse:
    """
    Create a new appointment for the authenticated user.

    Args:
        data: Appointment creation data
        user_id: Authenticated user
        storage: Storage backend

    Returns:
        Created appointment
    """
    service = AppointmentService(storage)
    return await service.create_appointment(user_id, data)


@router.put(
    "/{appointment_id}",
    response_model=AppointmentResponse,
    status_code=status.HTTP_200_OK,
    summary="Update appointment",
)
async def update_appointment(
    appointment_id: str,
    data: AppointmentUpdate,
    user_id: CurrentUserId,
    storage: StorageDep,
) -> AppointmentResponse:
    """
    Update an existing appointment.

    Args:
        appointment_id: Appointment ID
        data: Update data
        user_id: Authenticated user
        storage: Storage backend

    Returns:
        Updated appointment
    """
    service = AppointmentService(storage)
    return await service.update_appointment(appointment_id, user_id, data)


@router.delete(
    "/{appointment_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete appointment",
)
async def delete_appointment(
    appointment_id: str,
    user_id: CurrentUserId,
    storage: StorageDep,
) -> None:
    """Permanently delete an appointment."""
    service = AppointmentService(storage)
    await service.delete_appointment(appointment_id, user_id)
