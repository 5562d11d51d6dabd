"""FastAPI application entry point."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import CollectorRegistry
from prometheus_fastapi_instrumentator import Instrumentator
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.router import api_router
from app.config import Settings, get_settings
from app.core.exceptions import AppException
from app.core.sessions import SessionStore, build_session_store
from app.middleware.error_handler import (
    app_exception_handler,
    general_exception_handler,
    http_exception_handler,
    validation_exception_handler,
)
from app.middleware.logging import LoggingMiddleware, configure_logging
from app.storage import Storage, build_storage
from app.storage.seed import seed_demo_data

logger = structlog.get_logger()


def create_app(
    settings: Settings | None = None,
    storage: Storage | None = None,
    session_store: SessionStore | None = None,
) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Configuration; read from the environment when omitted
        storage: Storage backend; selected by STORAGE_BACKEND when omitted
        session_store: Session store; selected by SESSION_BACKEND when omitted

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()
    configure_logging(settings)

    storage = storage or build_storage(settings)
    session_store = session_store or build_session_store(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """
        Application lifespan manager.

        Handles startup and shutdown events.
        """
        # Startup
        logger.info(
            "application_startup",
            environment=settings.environment,
            storage_backend=settings.storage_backend,
            session_backend=settings.session_backend,
        )

        await storage.initialize()
        if settings.should_seed_demo_data:
            await seed_demo_data(storage)
        if settings.auto_demo_login:
            logger.warning("auto_demo_login_enabled")

        yield

        # Shutdown
        logger.info("application_shutdown")
        await storage.close()
        session_store.close()
        logger.info("resources_released")

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Physician roster, appointment and reminder management",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.storage = storage
    app.state.session_store = session_store

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add logging middleware
    app.add_middleware(LoggingMiddleware)

    # Add exception handlers
    app.add_exception_handler(AppException, app_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, general_exception_handler)  # type: ignore[arg-type]

    # Include API router
    app.include_router(api_router, prefix=settings.api_prefix)

    # Setup Prometheus instrumentation. The in-progress gauge always registers
    # globally, so it stays off to allow several apps per process
    Instrumentator(
        should_group_status_codes=True,
        should_ignore_untemplated=False,
        should_instrument_requests_inprogress=False,
        excluded_handlers=["/docs", "/redoc", "/openapi.json", "/metrics"],
        registry=CollectorRegistry(),
    ).instrument(app).expose(app, endpoint="/metrics", include_in_schema=False)

    @app.get("/", tags=["Root"])
    async def root() -> dict[str, str]:
        """
        Root endpoint.

        Returns:
            Welcome message
        """
        return {
            "message": f"Welcome to {settings.app_name}",
            "version": settings.app_version,
            "docs": "/docs",
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
        log_level=settings.log_level.lower(),
    )
