"""Authentication service for password login and server-side sessions."""

from dataclasses import dataclass

import structlog

from app.core.exceptions import UnauthorizedException
from app.core.security import pwd_context, verify_password
from app.core.sessions import SessionStore
from app.schemas.users import UserResponse
from app.storage.base import Storage
from app.storage.seed import DEMO_USER_ID

logger = structlog.get_logger()

INVALID_CREDENTIALS = "Invalid credentials"
NOT_AUTHENTICATED = "Not authenticated"


@dataclass
class SessionResolution:
    """Outcome of resolving a request's session."""

    user_id: str
    # Set when a new session was opened and its cookie must be sent back
    issued_token: str | None = None


class AuthService:
    """Login, logout and session resolution."""

    def __init__(
        self,
        storage: Storage,
        sessions: SessionStore,
        auto_demo_login: bool = False,
        demo_user_id: str = DEMO_USER_ID,
    ):
        """
        Initialize auth service.

        Args:
            storage: User lookup
            sessions: Session store
            auto_demo_login: Bind the demo user to requests without a session
            demo_user_id: Identity used by auto_demo_login
        """
        self.storage = storage
        self.sessions = sessions
        self.auto_demo_login = auto_demo_login
        self.demo_user_id = demo_user_id

    async def authenticate(self, username: str, password: str) -> dict:
        """
        Verify credentials.

        Unknown usernames and wrong passwords fail identically.

        Args:
            username: Login name
            password: Plain password

        Returns:
            User record

        Raises:
            UnauthorizedException: If the credentials do not match a user
        """
        user = await self.storage.get_user_by_username(username)

        if user is None:
            # Spend the same time as a real verification
            pwd_context.dummy_verify()
            logger.info("login_failed", reason="unknown_user")
            raise UnauthorizedException(INVALID_CREDENTIALS)

        if not verify_password(password, user["password"]):
            logger.info("login_failed", reason="bad_password", user_id=user["id"])
            raise UnauthorizedException(INVALID_CREDENTIALS)

        return user

    async def login(self, username: str, password: str) -> tuple[UserResponse, str]:
        """
        Authenticate and open a session.

        Returns:
            Tuple of (user without password, session token)
        """
        user = await self.authenticate(username, password)
        token = self.sessions.create(user["id"])
        logger.info("login_succeeded", user_id=user["id"])
        return UserResponse.model_validate(user), token

    def logout(self, token: str | None) -> None:
        """Invalidate the session if there is one."""
        if token:
            self.sessions.delete(token)
            logger.info("logout")

    def resolve_session(self, token: str | None) -> SessionResolution:
        """
        Resolve a session token to a user id.

        Args:
            token: Session token from the cookie, if any

        Returns:
            The bound user id, plus a fresh token when demo auto-login opened one

        Raises:
            UnauthorizedException: If there is no live session
        """
        if token:
            user_id = self.sessions.get_user_id(token)
            if user_id:
                return SessionResolution(user_id=user_id)

        if self.auto_demo_login:
            issued = self.sessions.create(self.demo_user_id)
            logger.info("demo_session_bound", user_id=self.demo_user_id)
            return SessionResolution(user_id=self.demo_user_id, issued_token=issued)

        raise UnauthorizedException(NOT_AUTHENTICATED)

    async def get_user(self, user_id: str) -> UserResponse:
        """
        Load the user behind a session.

        Raises:
            UnauthorizedException: If the user no longer exists
        """
        user = await self.storage.get_user(user_id)
        if user is None:
            raise UnauthorizedException(NOT_AUTHENTICATED)
        return UserResponse.model_validate(user)
