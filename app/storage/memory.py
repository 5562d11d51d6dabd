"""In-memory storage backend for development and tests."""

import threading
from uuid import uuid4

from app.storage.base import (
    APPOINTMENT_FIELDS,
    DuplicateUsernameError,
    PHYSICIAN_FIELDS,
    REMINDER_FIELDS,
    SCHEDULED,
    Record,
    Storage,
    pick,
    today_iso,
    utcnow,
)


class _Collection:
    """One entity collection. Callers must hold the owning storage's lock."""

    def __init__(self, mutable_fields: tuple[str, ...]):
        self.mutable_fields = mutable_fields
        self.rows: dict[str, Record] = {}

    def get(self, record_id: str) -> Record | None:
        row = self.rows.get(record_id)
        return dict(row) if row is not None else None

    def by_user(self, user_id: str) -> list[Record]:
        return [dict(row) for row in self.rows.values() if row["user_id"] == user_id]

    def insert(self, values: Record, record_id: str | None = None) -> Record:
        row = {**values, "id": record_id or str(uuid4()), "created_at": utcnow()}
        self.rows[row["id"]] = row
        return dict(row)

    def update(self, record_id: str, fields: Record) -> Record | None:
        row = self.rows.get(record_id)
        if row is None:
            return None
        row.update(pick(fields, self.mutable_fields))
        return dict(row)

    def delete(self, record_id: str) -> bool:
        return self.rows.pop(record_id, None) is not None


class MemoryStorage(Storage):
    """Dict-backed storage guarded by a single lock."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._users = _Collection(())
        self._physicians = _Collection(PHYSICIAN_FIELDS)
        self._appointments = _Collection(APPOINTMENT_FIELDS)
        self._reminders = _Collection(REMINDER_FIELDS)

    async def close(self) -> None:
        with self._lock:
            for collection in (self._users, self._physicians, self._appointments, self._reminders):
                collection.rows.clear()

    # Users

    async def get_user(self, user_id: str) -> Record | None:
        with self._lock:
            return self._users.get(user_id)

    async def get_user_by_username(self, username: str) -> Record | None:
        with self._lock:
            for row in self._users.rows.values():
                if row["username"] == username:
                    return dict(row)
        return None

    async def create_user(self, values: Record, user_id: str | None = None) -> Record:
        with self._lock:
            if any(row["username"] == values["username"] for row in self._users.rows.values()):
                raise DuplicateUsernameError(values["username"])
            return self._users.insert(values, record_id=user_id)

    # Physicians

    async def get_physician(self, physician_id: str) -> Record | None:
        with self._lock:
            return self._physicians.get(physician_id)

    async def list_physicians(self, user_id: str) -> list[Record]:
        with self._lock:
            return self._physicians.by_user(user_id)

    async def create_physician(self, values: Record) -> Record:
        with self._lock:
            return self._physicians.insert(values)

    async def update_physician(self, physician_id: str, fields: Record) -> Record | None:
        with self._lock:
            return self._physicians.update(physician_id, fields)

    async def delete_physician(self, physician_id: str) -> bool:
        with self._lock:
            return self._physicians.delete(physician_id)

    # Appointments

    async def get_appointment(self, appointment_id: str) -> Record | None:
        with self._lock:
            return self._appointments.get(appointment_id)

    async def list_appointments(self, user_id: str) -> list[Record]:
        with self._lock:
            return self._appointments.by_user(user_id)

    async def list_upcoming_appointments(
        self, user_id: str, today: str | None = None
    ) -> list[Record]:
        cutoff = today or today_iso()
        with self._lock:
            upcoming = [
                row
                for row in self._appointments.by_user(user_id)
                if row["status"] == SCHEDULED and row["date"] >= cutoff
            ]
        return sorted(upcoming, key=lambda row: (row["date"], row["time"]))

    async def create_appointment(self, values: Record) -> Record:
        with self._lock:
            return self._appointments.insert({"status": SCHEDULED, **values})

    async def update_appointment(self, appointment_id: str, fields: Record) -> Record | None:
        with self._lock:
            return self._appointments.update(appointment_id, fields)

    async def delete_appointment(self, appointment_id: str) -> bool:
        with self._lock:
            return self._appointments.delete(appointment_id)

    # Reminders

    async def get_reminder(self, reminder_id: str) -> Record | None:
        with self._lock:
            return self._reminders.get(reminder_id)

    async def list_reminders(self, user_id: str) -> list[Record]:
        with self._lock:
            return self._reminders.by_user(user_id)

    async def create_reminder(self, values: Record) -> Record:
        with self._lock:
            return self._reminders.insert({"sent": False, **values})

    async def update_reminder(self, reminder_id: str, fields: Record) -> Record | None:
        with self._lock:
            return self._reminders.update(reminder_id, fields)

    async def delete_reminder(self, reminder_id: str) -> bool:
        with self._lock:
            return self._reminders.delete(reminder_id)
