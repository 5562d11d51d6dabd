"""Storage contract tests run against both backends."""

from collections.abc import AsyncGenerator
from datetime import UTC, datetime, timedelta, timezone

import pytest

from app.core.exceptions import ValidationException
from app.core.security import verify_password
from app.database import create_engine_for
from app.schemas.users import UserCreate
from app.services.user_service import UserService
from app.storage.base import DuplicateUsernameError, Storage
from app.storage.database import DatabaseStorage
from app.storage.memory import MemoryStorage
from app.storage.seed import DEMO_PASSWORD, DEMO_USER_ID, DEMO_USERNAME, seed_demo_data


@pytest.fixture(params=["memory", "database"])
async def store(request: pytest.FixtureRequest) -> AsyncGenerator[Storage, None]:
    """Each backend, initialized and closed around the test."""
    if request.param == "memory":
        backend: Storage = MemoryStorage()
    else:
        backend = DatabaseStorage(create_engine_for("sqlite+aiosqlite:///:memory:"))

    await backend.initialize()
    yield backend
    await backend.close()


def _physician(user_id: str, last_name: str = "Johnson") -> dict:
    return {
        "user_id": user_id,
        "first_name": "Sarah",
        "last_name": last_name,
        "specialty": "Cardiology",
        "phone": "555",
        "email": None,
        "address": None,
        "office_hours": None,
    }


def _appointment(user_id: str, physician_id: str, day: str, **extra) -> dict:
    return {
        "user_id": user_id,
        "physician_id": physician_id,
        "date": day,
        "time": "10:00",
        "type": "checkup",
        "notes": None,
        **extra,
    }


@pytest.mark.asyncio
async def test_create_assigns_id_and_timestamp(store: Storage) -> None:
    created = await store.create_physician(_physician("u1"))

    assert created["id"]
    assert isinstance(created["created_at"], datetime)
    assert created["user_id"] == "u1"

    fetched = await store.get_physician(created["id"])
    assert fetched is not None
    assert fetched["id"] == created["id"]
    assert fetched["last_name"] == "Johnson"


@pytest.mark.asyncio
async def test_unknown_ids_do_not_raise(store: Storage) -> None:
    assert await store.get_user("nope") is None
    assert await store.get_physician("nope") is None
    assert await store.update_appointment("nope", {"notes": "x"}) is None
    assert await store.delete_reminder("nope") is False


@pytest.mark.asyncio
async def test_list_filters_by_owner_in_creation_order(store: Storage) -> None:
    first = await store.create_physician(_physician("u1", "First"))
    await store.create_physician(_physician("u2", "Foreign"))
    second = await store.create_physician(_physician("u1", "Second"))

    rows = await store.list_physicians("u1")
    assert [row["id"] for row in rows] == [first["id"], second["id"]]
    assert await store.list_physicians("u3") == []


@pytest.mark.asyncio
async def test_update_only_touches_mutable_fields(store: Storage) -> None:
    created = await store.create_physician(_physician("u1"))

    updated = await store.update_physician(
        created["id"],
        {"specialty": "Neurology", "user_id": "thief", "id": "other", "created_at": None},
    )
    assert updated is not None
    assert updated["specialty"] == "Neurology"
    assert updated["user_id"] == "u1"
    assert updated["id"] == created["id"]

    unchanged = await store.update_physician(created["id"], {})
    assert unchanged is not None
    assert unchanged["specialty"] == "Neurology"


@pytest.mark.asyncio
async def test_delete_reports_existence(store: Storage) -> None:
    created = await store.create_physician(_physician("u1"))

    assert await store.delete_physician(created["id"]) is True
    assert await store.delete_physician(created["id"]) is False
    assert await store.get_physician(created["id"]) is None


@pytest.mark.asyncio
async def test_upcoming_appointments(store: Storage) -> None:
    today = "2030-05-15"
    physician = await store.create_physician(_physician("u1"))
    pid = physician["id"]

    await store.create_appointment(_appointment("u1", pid, "2030-05-14", status="scheduled"))
    late = await store.create_appointment(
        _appointment("u1", pid, today, time="15:00", status="scheduled")
    )
    early = await store.create_appointment(
        _appointment("u1", pid, today, time="09:00", status="scheduled")
    )
    await store.create_appointment(_appointment("u1", pid, "2030-05-16", status="cancelled"))
    week = await store.create_appointment(_appointment("u1", pid, "2030-05-22"))
    await store.create_appointment(_appointment("u2", pid, "2030-05-20", status="scheduled"))

    upcoming = await store.list_upcoming_appointments("u1", today=today)
    assert [row["id"] for row in upcoming] == [early["id"], late["id"], week["id"]]


@pytest.mark.asyncio
async def test_appointment_and_reminder_defaults(store: Storage) -> None:
    physician = await store.create_physician(_physician("u1"))
    appointment = await store.create_appointment(_appointment("u1", physician["id"], "2030-01-01"))
    assert appointment["status"] == "scheduled"

    reminder = await store.create_reminder(
        {
            "user_id": "u1",
            "appointment_id": appointment["id"],
            "reminder_date": datetime(2029, 12, 31, 9, 0, tzinfo=UTC),
            "message": None,
        }
    )
    assert reminder["sent"] is False

    updated = await store.update_reminder(reminder["id"], {"sent": True})
    assert updated is not None
    assert updated["sent"] is True
    assert (await store.list_reminders("u1"))[0]["sent"] is True


@pytest.mark.asyncio
async def test_memory_storage_returns_copies() -> None:
    """Mutating a returned record does not change stored state."""
    store = MemoryStorage()
    created = await store.create_physician(_physician("u1"))
    created["last_name"] = "Changed"

    fetched = await store.get_physician(created["id"])
    assert fetched is not None
    assert fetched["last_name"] == "Johnson"


@pytest.mark.asyncio
async def test_seed_is_idempotent(store: Storage) -> None:
    assert await seed_demo_data(store, today="2030-05-15") is True
    assert await seed_demo_data(store, today="2030-05-15") is False

    user = await store.get_user_by_username(DEMO_USERNAME)
    assert user is not None
    assert user["id"] == DEMO_USER_ID
    assert verify_password(DEMO_PASSWORD, user["password"])

    physicians = await store.list_physicians(DEMO_USER_ID)
    assert [p["last_name"] for p in physicians] == ["Johnson", "Chen", "Rodriguez"]

    upcoming = await store.list_upcoming_appointments(DEMO_USER_ID, today="2030-05-15")
    assert [(a["date"], a["time"]) for a in upcoming] == [
        ("2030-05-16", "10:00"),
        ("2030-05-22", "14:30"),
    ]
    assert upcoming[0]["physician_id"] == physicians[0]["id"]


@pytest.mark.asyncio
async def test_timestamps_keep_their_instant(store: Storage) -> None:
    """Offset-bearing timestamps come back aware and pointing at the same moment."""
    due = datetime(2030, 5, 16, 9, 0, tzinfo=timezone(timedelta(hours=5)))
    created = await store.create_reminder(
        {"user_id": "u1", "appointment_id": "a1", "reminder_date": due, "message": None}
    )

    fetched = await store.get_reminder(created["id"])
    assert fetched is not None
    assert fetched["reminder_date"].tzinfo is not None
    assert fetched["reminder_date"] == due
    assert fetched["reminder_date"] == datetime(2030, 5, 16, 4, 0, tzinfo=UTC)
    assert fetched["created_at"].tzinfo is not None
    assert fetched["created_at"] == created["created_at"]


@pytest.mark.asyncio
async def test_usernames_are_unique(store: Storage) -> None:
    values = {"username": "alice", "password": "x", "email": None}
    await store.create_user(values)

    with pytest.raises(DuplicateUsernameError):
        await store.create_user({**values, "email": "other@example.com"})

    user = await store.get_user_by_username("alice")
    assert user is not None
    assert user["email"] is None


@pytest.mark.asyncio
async def test_seed_skipped_when_demo_username_taken(store: Storage) -> None:
    await store.create_user({"username": DEMO_USERNAME, "password": "x"})

    assert await seed_demo_data(store) is False
    assert await store.get_user(DEMO_USER_ID) is None
    assert await store.list_physicians(DEMO_USER_ID) == []


@pytest.mark.asyncio
async def test_user_service_reports_taken_username(store: Storage) -> None:
    service = UserService(store)
    await service.create_user(UserCreate(username="alice", password="pw"))

    with pytest.raises(ValidationException) as exc_info:
        await service.create_user(UserCreate(username="alice", password="pw2"))
    assert exc_info.value.errors == [{"field": "username", "message": "Username already taken"}]
