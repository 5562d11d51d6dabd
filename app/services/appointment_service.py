"""Appointment service for business logic."""

from typing import Any

import structlog

from app.core.exceptions import ForbiddenException, NotFoundException, ValidationException
from app.schemas.appointments import (
    AppointmentCreate,
    AppointmentResponse,
    AppointmentStatus,
    AppointmentUpdate,
)
from app.storage.base import Record, Storage

logger = structlog.get_logger()


def _to_values(fields: dict[str, Any]) -> dict[str, Any]:
    """Store enum members by their value."""
    return {
        key: value.value if isinstance(value, AppointmentStatus) else value
        for key, value in fields.items()
    }


class AppointmentService:
    """Service for managing appointments."""

    def __init__(self, storage: Storage):
        """Initialize service with storage."""
        self.storage = storage

    async def _get_owned(self, appointment_id: str, user_id: str) -> Record:
        """
        Load an appointment the user may modify.

        Raises:
            NotFoundException: If appointment not found
            ForbiddenException: If user doesn't have access
        """
        appointment = await self.storage.get_appointment(appointment_id)

        if not appointment:
            raise NotFoundException("Appointment not found")

        if appointment["user_id"] != user_id:
            raise ForbiddenException("Access denied to this appointment")

        return appointment

    async def _check_physician(self, physician_id: str, user_id: str) -> None:
        """
        Ensure the referenced physician exists and belongs to the user.

        Raises:
            ValidationException: If it does not; other users' physicians are reported as missing
        """
        physician = await self.storage.get_physician(physician_id)
        if not physician or physician["user_id"] != user_id:
            raise ValidationException.for_field("physicianId", "Physician not found")

    async def list_appointments(self, user_id: str) -> list[AppointmentResponse]:
        """List all appointments owned by the user."""
        rows = await self.storage.list_appointments(user_id)
        return [AppointmentResponse.model_validate(row) for row in rows]

    async def list_upcoming(self, user_id: str) -> list[AppointmentResponse]:
        """List scheduled appointments from today on, earliest first."""
        rows = await self.storage.list_upcoming_appointments(user_id)
        return [AppointmentResponse.model_validate(row) for row in rows]

    async def create_appointment(
        self,
        user_id: str,
        data: AppointmentCreate,
    ) -> AppointmentResponse:
        """
        Create a new appointment.

        Args:
            user_id: ID of the session user, stamped as owner
            data: Appointment creation data

        Returns:
            Created appointment

        Raises:
            ValidationException: If the physician does not exist for this user
        """
        await self._check_physician(data.physician_id, user_id)

        values = _to_values(data.model_dump())
        values["user_id"] = user_id

        appointment = await self.storage.create_appointment(values)
        logger.info(
            "appointment_created",
            appointment_id=appointment["id"],
            user_id=user_id,
            date=appointment["date"],
        )
        return AppointmentResponse.model_validate(appointment)

    async def update_appointment(
        self,
        appointment_id: str,
        user_id: str,
        data: AppointmentUpdate,
    ) -> AppointmentResponse:
        """
        Update an existing appointment.

        Args:
            appointment_id: Appointment ID
            user_id: ID of requesting user
            data: Update data

        Returns:
            Updated appointment

        Raises:
            NotFoundException: If appointment not found
            ForbiddenException: If user doesn't have access
            ValidationException: If a new physician reference is invalid
        """
        current = await self._get_owned(appointment_id, user_id)

        patch = _to_values(data.to_patch())
        if "physician_id" in patch and patch["physician_id"] != current["physician_id"]:
            await self._check_physician(patch["physician_id"], user_id)

        appointment = await self.storage.update_appointment(appointment_id, patch)
        if appointment is None:
            raise NotFoundException("Appointment not found")

        if current["status"] != appointment["status"]:
            logger.info(
                "appointment_status_changed",
                appointment_id=appointment_id,
                old_status=current["status"],
                new_status=appointment["status"],
            )

        return AppointmentResponse.model_validate(appointment)

    async def delete_appointment(self, appointment_id: str, user_id: str) -> None:
        """
        Delete an appointment.

        Raises:
            NotFoundException: If appointment not found
            ForbiddenException: If user doesn't have access
        """
        await self._get_owned(appointment_id, user_id)

        if not await self.storage.delete_appointment(appointment_id):
            raise NotFoundException("Appointment not found")

        logger.info("appointment_deleted", appointment_id=appointment_id, user_id=user_id)
