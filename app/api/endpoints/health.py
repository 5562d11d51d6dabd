"""Health check endpoints."""

from fastapi import APIRouter, status
from pydantic import BaseModel

from app.dependencies import AppSettings, SessionStoreDep, StorageDep

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str
    environment: str


class DetailedHealthResponse(BaseModel):
    """Detailed health check response model."""

    status: str
    version: str
    environment: str
    storage: str
    sessions: str


@router.get(
    "/health",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    tags=["Health"],
    summary="Basic health check",
)
async def health_check(settings: AppSettings) -> HealthResponse:
    """
    Basic health check endpoint.

    Returns:
        Basic health status
    """
    return HealthResponse(
        status="healthy",
        version=settings.app_version,
        environment=settings.environment,
    )


@router.get(
    "/health/detailed",
    response_model=DetailedHealthResponse,
    status_code=status.HTTP_200_OK,
    tags=["Health"],
    summary="Detailed health check",
)
async def detailed_health_check(
    settings: AppSettings,
    storage: StorageDep,
    sessions: SessionStoreDep,
) -> DetailedHealthResponse:
    """
    Detailed health check with storage and session store status.

    Returns:
        Detailed health status including dependencies
    """
    storage_healthy = await storage.ping()
    sessions_healthy = sessions.ping()

    return DetailedHealthResponse(
        status="healthy" if storage_healthy and sessions_healthy else "degraded",
        version=settings.app_version,
        environment=settings.environment,
        storage="healthy" if storage_healthy else "unhealthy",
        sessions="healthy" if sessions_healthy else "unhealthy",
    )


@router.get(
    "/ping",
    status_code=status.HTTP_200_OK,
    tags=["Health"],
    summary="Simple ping",
)
async def ping() -> dict[str, str]:
    """
    Simple ping endpoint.

    Returns:
        Pong response
    """
    return {"message": "pong"}
