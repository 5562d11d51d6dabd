"""Storage interface shared by the in-memory and database backends.

Records are plain dicts keyed by column name. ``get_*`` and ``update_*``
return ``None`` for unknown ids and ``delete_*`` returns ``False``; none of
them raise for a missing record.
"""

from abc import ABC, abstractmethod
from datetime import UTC, datetime
from typing import Any

Record = dict[str, Any]

# Fields a partial update may touch; id, user_id and created_at never change
PHYSICIAN_FIELDS = (
    "first_name",
    "last_name",
    "specialty",
    "phone",
    "email",
    "address",
    "office_hours",
)
APPOINTMENT_FIELDS = ("physician_id", "date", "time", "type", "notes", "status")
REMINDER_FIELDS = ("appointment_id", "reminder_date", "message", "sent")

SCHEDULED = "scheduled"


class DuplicateUsernameError(Exception):
    """Raised by ``create_user`` when the username is already taken."""


def utcnow() -> datetime:
    """Timezone-aware current time used for creation stamps."""
    return datetime.now(UTC)


def today_iso() -> str:
    """Today's date as YYYY-MM-DD, the form appointment dates are stored in."""
    return utcnow().date().isoformat()


def pick(fields: dict[str, Any], allowed: tuple[str, ...]) -> dict[str, Any]:
    """Keep only whitelisted keys of a patch."""
    return {key: value for key, value in fields.items() if key in allowed}


class Storage(ABC):
    """Persistence for users, physicians, appointments and reminders."""

    async def initialize(self) -> None:
        """Prepare the backend (create tables, open pools)."""

    async def close(self) -> None:
        """Release backend resources."""

    async def ping(self) -> bool:
        """Check that the backend is reachable."""
        return True

    # Users

    @abstractmethod
    async def get_user(self, user_id: str) -> Record | None: ...

    @abstractmethod
    async def get_user_by_username(self, username: str) -> Record | None: ...

    @abstractmethod
    async def create_user(self, values: Record, user_id: str | None = None) -> Record:
        """
        Store a user; ``user_id`` pins the identifier (demo seed only).

        Raises:
            DuplicateUsernameError: If the username is already taken
        """

    # Physicians

    @abstractmethod
    async def get_physician(self, physician_id: str) -> Record | None: ...

    @abstractmethod
    async def list_physicians(self, user_id: str) -> list[Record]: ...

    @abstractmethod
    async def create_physician(self, values: Record) -> Record: ...

    @abstractmethod
    async def update_physician(self, physician_id: str, fields: Record) -> Record | None: ...

    @abstractmethod
    async def delete_physician(self, physician_id: str) -> bool: ...

    # Appointments

    @abstractmethod
    async def get_appointment(self, appointment_id: str) -> Record | None: ...

    @abstractmethod
    async def list_appointments(self, user_id: str) -> list[Record]: ...

    @abstractmethod
    async def list_upcoming_appointments(
        self, user_id: str, today: str | None = None
    ) -> list[Record]:
        """
        Scheduled appointments dated today or later, earliest first.

        Args:
            user_id: Owner
            today: YYYY-MM-DD cutoff; defaults to the current UTC date

        Returns:
            Appointments sorted by (date, time)
        """

    @abstractmethod
    async def create_appointment(self, values: Record) -> Record: ...

    @abstractmethod
    async def update_appointment(self, appointment_id: str, fields: Record) -> Record | None: ...

    @abstractmethod
    async def delete_appointment(self, appointment_id: str) -> bool: ...

    # Reminders

    @abstractmethod
    async def get_reminder(self, reminder_id: str) -> Record | None: ...

    @abstractmethod
    async def list_reminders(self, user_id: str) -> list[Record]: ...

    @abstractmethod
    async def create_reminder(self, values: Record) -> Record: ...

    @abstractmethod
    async def update_reminder(self, reminder_id: str, fields: Record) -> Record | None: ...

    @abstractmethod
    async def delete_reminder(self, reminder_id: str) -> bool: ...
