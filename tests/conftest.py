from collections.abc import AsyncGenerator, Callable
from contextlib import asynccontextmanager
from datetime import date, timedelta

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from app.config import Settings
from app.core.security import get_password_hash
from app.core.sessions import MemorySessionStore
from app.main import create_app
from app.storage.base import today_iso
from app.storage.memory import MemoryStorage

TEST_SECRET = "test-session-secret"  # pragma: allowlist secret
PASSWORD = "s3cret-pass"  # pragma: allowlist secret


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_settings(**overrides) -> Settings:
    """Explicit settings so tests never read the process environment."""
    values = {
        "environment": "test",
        "storage_backend": "memory",
        "session_backend": "memory",
        "auto_demo_login": False,
        "seed_demo_data": False,
        "session_secret": TEST_SECRET,
        "log_format": "console",
        "log_level": "WARNING",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)  # type: ignore[call-arg]


@pytest.fixture
def clock() -> FakeClock:
    """Clock driving session expiry."""
    return FakeClock()


@pytest.fixture
def settings() -> Settings:
    """Test settings."""
    return make_settings()


@pytest.fixture
def storage() -> MemoryStorage:
    """Fresh in-memory store."""
    return MemoryStorage()


@pytest.fixture
def session_store(settings: Settings, clock: FakeClock) -> MemorySessionStore:
    """Session store on the fake clock."""
    return MemorySessionStore(settings.session_ttl_seconds, clock=clock)


@pytest.fixture
def app(settings: Settings, storage: MemoryStorage, session_store: MemorySessionStore) -> FastAPI:
    """Fresh application per test."""
    return create_app(settings=settings, storage=storage, session_store=session_store)


@pytest.fixture
def make_client(app: FastAPI) -> Callable:
    """Open an independent client (own cookie jar) against the test app."""

    @asynccontextmanager
    async def _make() -> AsyncGenerator[AsyncClient, None]:
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
            yield c

    return _make


@pytest_asyncio.fixture
async def client(make_client: Callable) -> AsyncGenerator[AsyncClient, None]:
    """Anonymous HTTP client."""
    async with make_client() as c:
        yield c


async def _create_user(storage: MemoryStorage, username: str, first_name: str) -> dict:
    return await storage.create_user(
        {
            "username": username,
            "password": get_password_hash(PASSWORD),
            "email": f"{username}@example.com",
            "first_name": first_name,
            "last_name": "Tester",
        }
    )


@pytest_asyncio.fixture
async def user_a(storage: MemoryStorage) -> dict:
    """First test user."""
    return await _create_user(storage, "alice", "Alice")


@pytest_asyncio.fixture
async def user_b(storage: MemoryStorage) -> dict:
    """Second test user."""
    return await _create_user(storage, "bob", "Bob")


async def login(client: AsyncClient, username: str, password: str = PASSWORD) -> None:
    """Log the client in, storing the session cookie in its jar."""
    response = await client.post("/api/login", json={"username": username, "password": password})
    assert response.status_code == 200, response.text


@pytest_asyncio.fixture
async def client_a(make_client: Callable, user_a: dict) -> AsyncGenerator[AsyncClient, None]:
    """Client logged in as user A."""
    async with make_client() as c:
        await login(c, user_a["username"])
        yield c


@pytest_asyncio.fixture
async def client_b(make_client: Callable, user_b: dict) -> AsyncGenerator[AsyncClient, None]:
    """Client logged in as user B."""
    async with make_client() as c:
        await login(c, user_b["username"])
        yield c


def days_from_today(days: int) -> str:
    """UTC date offset as YYYY-MM-DD."""
    return (date.fromisoformat(today_iso()) + timedelta(days=days)).isoformat()


@pytest.fixture
def physician_data() -> dict:
    """Sample physician payload."""
    return {
        "firstName": "Sarah",
        "lastName": "Johnson",
        "specialty": "Cardiology",
        "phone": "(555) 123-4567",
        "email": "dr.johnson@healthcare.com",
        "officeHours": "Mon-Fri 9-5",
    }


async def create_physician(client: AsyncClient, data: dict) -> dict:
    """Create a physician through the API."""
    response = await client.post("/api/physicians", json=data)
    assert response.status_code == 201, response.text
    return response.json()


async def create_appointment(client: AsyncClient, physician_id: str, **overrides) -> dict:
    """Create an appointment through the API."""
    payload = {
        "physicianId": physician_id,
        "date": days_from_today(1),
        "time": "10:00",
        "type": "checkup",
    }
    payload.update(overrides)
    response = await client.post("/api/appointments", json=payload)
    assert response.status_code == 201, response.text
    return response.json()
