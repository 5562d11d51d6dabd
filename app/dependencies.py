"""FastAPI dependencies."""

from typing import Annotated

from fastapi import Depends, Request, Response

from app.config import Settings
from app.core.security import sign_session_token, unsign_session_token
from app.core.sessions import SessionStore
from app.schemas.users import UserResponse
from app.services.auth_service import AuthService
from app.storage.base import Storage


def get_app_settings(request: Request) -> Settings:
    """Settings the running application was built with."""
    return request.app.state.settings


def get_storage(request: Request) -> Storage:
    """Storage backend owned by the application."""
    return request.app.state.storage


def get_session_store(request: Request) -> SessionStore:
    """Session store owned by the application."""
    return request.app.state.session_store


AppSettings = Annotated[Settings, Depends(get_app_settings)]
StorageDep = Annotated[Storage, Depends(get_storage)]
SessionStoreDep = Annotated[SessionStore, Depends(get_session_store)]


def get_auth_service(
    settings: AppSettings,
    storage: StorageDep,
    sessions: SessionStoreDep,
) -> AuthService:
    """Build the auth service for a request."""
    return AuthService(storage, sessions, auto_demo_login=settings.auto_demo_login)


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]


def get_session_token(request: Request, settings: AppSettings) -> str | None:
    """
    Read the session token from the signed cookie.

    Returns:
        Session token, or None if the cookie is missing or fails verification
    """
    cookie = request.cookies.get(settings.session_cookie_name)
    if not cookie:
        return None
    return unsign_session_token(cookie, settings.signing_secret, settings.session_algorithm)


SessionToken = Annotated[str | None, Depends(get_session_token)]


def set_session_cookie(response: Response, settings: Settings, token: str) -> None:
    """Attach the signed session cookie to a response."""
    response.set_cookie(
        key=settings.session_cookie_name,
        value=sign_session_token(token, settings.signing_secret, settings.session_algorithm),
        max_age=settings.session_ttl_seconds,
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
    )


def clear_session_cookie(response: Response, settings: Settings) -> None:
    """Remove the session cookie from the client."""
    response.delete_cookie(
        key=settings.session_cookie_name,
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
    )


async def get_current_user(
    response: Response,
    settings: AppSettings,
    auth: AuthServiceDep,
    token: SessionToken,
) -> UserResponse:
    """
    Resolve the authenticated user for the request.

    Args:
        response: Outgoing response, receives a cookie if a demo session was opened
        settings: Application settings
        auth: Auth service
        token: Verified session token from the cookie

    Returns:
        User bound to the session

    Raises:
        UnauthorizedException: If there is no live session or its user is gone
    """
    resolution = auth.resolve_session(token)
    if resolution.issued_token:
        set_session_cookie(response, settings, resolution.issued_token)
    return await auth.get_user(resolution.user_id)


async def get_current_user_id(
    user: Annotated[UserResponse, Depends(get_current_user)],
) -> str:
    """Extract the user ID of the authenticated user."""
    return user.id


# Type aliases for dependency injection
CurrentUser = Annotated[UserResponse, Depends(get_current_user)]
CurrentUserId = Annotated[str, Depends(get_current_user_id)]
