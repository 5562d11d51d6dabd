"""Relational storage backend built on SQLAlchemy Core."""

from uuid import uuid4

import structlog
from sqlalchemy import Table, and_, delete, insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncEngine

from app.database import check_database_connection, create_session_factory, metadata
from app.models.appointments import appointments
from app.models.physicians import physicians
from app.models.reminders import reminders
from app.models.users import users
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

logger = structlog.get_logger()


class DatabaseStorage(Storage):
    """Storage backed by an async SQLAlchemy engine; one transaction per call."""

    def __init__(self, engine: AsyncEngine):
        """Initialize storage with an async engine."""
        self.engine = engine
        self.session_factory = create_session_factory(engine)

    async def initialize(self) -> None:
        """Create tables that do not exist yet."""
        async with self.engine.begin() as conn:
            await conn.run_sync(metadata.create_all)
        logger.info("database_schema_ready")

    async def close(self) -> None:
        await self.engine.dispose()

    async def ping(self) -> bool:
        return await check_database_connection(self.engine)

    # Generic table helpers

    async def _get(self, table: Table, record_id: str) -> Record | None:
        async with self.session_factory() as session:
            result = await session.execute(select(table).where(table.c.id == record_id))
            row = result.mappings().first()
        return dict(row) if row else None

    async def _list_by_user(self, table: Table, user_id: str) -> list[Record]:
        stmt = select(table).where(table.c.user_id == user_id).order_by(table.c.created_at)
        async with self.session_factory() as session:
            result = await session.execute(stmt)
            return [dict(row) for row in result.mappings().all()]

    async def _insert(self, table: Table, values: Record, record_id: str | None = None) -> Record:
        record = {**values, "id": record_id or str(uuid4()), "created_at": utcnow()}
        async with self.session_factory() as session:
            await session.execute(insert(table).values(**record))
            await session.commit()
        return record

    async def _update(
        self,
        table: Table,
        record_id: str,
        fields: Record,
        allowed: tuple[str, ...],
    ) -> Record | None:
        values = pick(fields, allowed)
        if not values:
            # No changes, return current state
            return await self._get(table, record_id)

        stmt = update(table).where(table.c.id == record_id).values(**values).returning(table)
        async with self.session_factory() as session:
            result = await session.execute(stmt)
            row = result.mappings().first()
            await session.commit()
        return dict(row) if row else None

    async def _delete(self, table: Table, record_id: str) -> bool:
        async with self.session_factory() as session:
            result = await session.execute(delete(table).where(table.c.id == record_id))
            await session.commit()
        return result.rowcount > 0  # type: ignore[attr-defined]

    # Users

    async def get_user(self, user_id: str) -> Record | None:
        return await self._get(users, user_id)

    async def get_user_by_username(self, username: str) -> Record | None:
        async with self.session_factory() as session:
            result = await session.execute(select(users).where(users.c.username == username))
            row = result.mappings().first()
        return dict(row) if row else None

    async def create_user(self, values: Record, user_id: str | None = None) -> Record:
        try:
            return await self._insert(users, values, record_id=user_id)
        except IntegrityError as e:
            raise DuplicateUsernameError(values["username"]) from e

    # Physicians

    async def get_physician(self, physician_id: str) -> Record | None:
        return await self._get(physicians, physician_id)

    async def list_physicians(self, user_id: str) -> list[Record]:
        return await self._list_by_user(physicians, user_id)

    async def create_physician(self, values: Record) -> Record:
        return await self._insert(physicians, values)

    async def update_physician(self, physician_id: str, fields: Record) -> Record | None:
        return await self._update(physicians, physician_id, fields, PHYSICIAN_FIELDS)

    async def delete_physician(self, physician_id: str) -> bool:
        return await self._delete(physicians, physician_id)

    # Appointments

    async def get_appointment(self, appointment_id: str) -> Record | None:
        return await self._get(appointments, appointment_id)

    async def list_appointments(self, user_id: str) -> list[Record]:
        return await self._list_by_user(appointments, user_id)

    async def list_upcoming_appointments(
        self, user_id: str, today: str | None = None
    ) -> list[Record]:
        stmt = (
            select(appointments)
            .where(
                and_(
                    appointments.c.user_id == user_id,
                    appointments.c.status == SCHEDULED,
                    appointments.c.date >= (today or today_iso()),
                )
            )
            .order_by(appointments.c.date, appointments.c.time)
        )
        async with self.session_factory() as session:
            result = await session.execute(stmt)
            return [dict(row) for row in result.mappings().all()]

    async def create_appointment(self, values: Record) -> Record:
        return await self._insert(appointments, {"status": SCHEDULED, **values})

    async def update_appointment(self, appointment_id: str, fields: Record) -> Record | None:
        return await self._update(appointments, appointment_id, fields, APPOINTMENT_FIELDS)

    async def delete_appointment(self, appointment_id: str) -> bool:
        return await self._delete(appointments, appointment_id)

    # Reminders

    async def get_reminder(self, reminder_id: str) -> Record | None:
        return await self._get(reminders, reminder_id)

    async def list_reminders(self, user_id: str) -> list[Record]:
        return await self._list_by_user(reminders, user_id)

    async def create_reminder(self, values: Record) -> Record:
        return await self._insert(reminders, {"sent": False, **values})

    async def update_reminder(self, reminder_id: str, fields: Record) -> Record | None:
        return await self._update(reminders, reminder_id, fields, REMINDER_FIELDS)

    async def delete_reminder(self, reminder_id: str) -> bool:
        return await self._delete(reminders, reminder_id)
