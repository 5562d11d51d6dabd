"""Server-side session stores.

A session binds an opaque token to a user id until a fixed expiry. Expiry is
set once at creation and is not extended by later requests.
"""

import threading
import time
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from typing import cast

import redis
import structlog

from app.config import Settings
from app.core.redis_client import check_redis_connection, create_redis_client
from app.core.security import generate_session_token

logger = structlog.get_logger()


class SessionStore(ABC):
    """Maps session tokens to user ids."""

    def __init__(self, ttl_seconds: int):
        """Initialize store with the session lifetime in seconds."""
        self.ttl_seconds = ttl_seconds

    @abstractmethod
    def create(self, user_id: str) -> str:
        """Open a session for the user and return its token."""

    @abstractmethod
    def get_user_id(self, token: str) -> str | None:
        """Return the user id bound to a live session, or None."""

    @abstractmethod
    def delete(self, token: str) -> None:
        """Invalidate a session. Unknown tokens are ignored."""

    def ping(self) -> bool:
        """Check that the backing store is reachable."""
        return True

    def close(self) -> None:
        """Release resources held by the store."""


@dataclass
class _SessionEntry:
    user_id: str
    expires_at: float


class MemorySessionStore(SessionStore):
    """In-process session store for development and tests."""

    def __init__(self, ttl_seconds: int, clock: Callable[[], float] = time.monotonic):
        """
        Initialize the store.

        Args:
            ttl_seconds: Session lifetime
            clock: Monotonic time source, injectable for tests
        """
        super().__init__(ttl_seconds)
        self._clock = clock
        self._sessions: dict[str, _SessionEntry] = {}
        self._lock = threading.Lock()

    def create(self, user_id: str) -> str:
        token = generate_session_token()
        with self._lock:
            self._purge_expired()
            self._sessions[token] = _SessionEntry(
                user_id=user_id,
                expires_at=self._clock() + self.ttl_seconds,
            )
        return token

    def get_user_id(self, token: str) -> str | None:
        with self._lock:
            entry = self._sessions.get(token)
            if entry is None:
                return None
            if entry.expires_at <= self._clock():
                del self._sessions[token]
                return None
            return entry.user_id

    def delete(self, token: str) -> None:
        with self._lock:
            self._sessions.pop(token, None)

    def close(self) -> None:
        with self._lock:
            self._sessions.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def _purge_expired(self) -> None:
        # Caller holds the lock
        now = self._clock()
        expired = [token for token, entry in self._sessions.items() if entry.expires_at <= now]
        for token in expired:
            del self._sessions[token]


class RedisSessionStore(SessionStore):
    """Redis-backed session store; expiry is delegated to key TTLs."""

    KEY_PREFIX = "session:"

    def __init__(self, redis_client: redis.Redis, ttl_seconds: int):
        """Initialize store with a Redis client."""
        super().__init__(ttl_seconds)
        self.redis = redis_client

    def _key(self, token: str) -> str:
        return f"{self.KEY_PREFIX}{token}"

    def create(self, user_id: str) -> str:
        token = generate_session_token()
        self.redis.setex(self._key(token), self.ttl_seconds, user_id)
        return token

    def get_user_id(self, token: str) -> str | None:
        value = cast(str | bytes | None, self.redis.get(self._key(token)))
        if value is None:
            return None
        if isinstance(value, bytes):
            return value.decode()
        return value

    def delete(self, token: str) -> None:
        self.redis.delete(self._key(token))

    def ping(self) -> bool:
        return check_redis_connection(self.redis)

    def close(self) -> None:
        self.redis.close()


def build_session_store(settings: Settings) -> SessionStore:
    """Create the session store selected by SESSION_BACKEND."""
    if settings.session_backend == "redis":
        logger.info("session_store_selected", backend="redis", host=settings.redis_host)
        return RedisSessionStore(create_redis_client(settings), settings.session_ttl_seconds)

    logger.info("session_store_selected", backend="memory")
    return MemorySessionStore(settings.session_ttl_seconds)
