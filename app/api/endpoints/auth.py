"""Authentication endpoints."""

from fastapi import APIRouter, Response, status

from app.dependencies import (
    AppSettings,
    AuthServiceDep,
    CurrentUser,
    SessionToken,
    clear_session_cookie,
    set_session_cookie,
)
from app.schemas.auth import LoginRequest
from app.schemas.users import UserResponse

router = APIRouter()


@router.post(
    "/login",
    response_model=UserResponse,
    status_code=status.HTTP_200_OK,
    summary="Log in with username and password",
)
async def login(
    data: LoginRequest,
    response: Response,
    settings: AppSettings,
    auth: AuthServiceDep,
) -> UserResponse:
    """
    Authenticate and open a session.

    Unknown usernames and wrong passwords both yield 401 "Invalid credentials".

    Args:
        data: Username and password
        response: Outgoing response, receives the session cookie
        settings: Application settings
        auth: Auth service

    Returns:
        The logged-in user without the password
    """
    user, token = await auth.login(data.username, data.password)
    set_session_cookie(response, settings, token)
    return user


@router.post(
    "/logout",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="End the current session",
)
async def logout(
    settings: AppSettings,
    auth: AuthServiceDep,
    token: SessionToken,
) -> Response:
    """Destroy the session, if any, and clear the cookie."""
    auth.logout(token)
    response = Response(status_code=status.HTTP_204_NO_CONTENT)
    clear_session_cookie(response, settings)
    return response


@router.get(
    "/me",
    response_model=UserResponse,
    status_code=status.HTTP_200_OK,
    summary="Get the authenticated user",
)
async def me(current_user: CurrentUser) -> UserResponse:
    """Return the user bound to the session."""
    return current_user
