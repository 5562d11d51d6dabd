"""Storage backends."""

import structlog

from app.config import Settings
from app.storage.base import DuplicateUsernameError, Record, Storage
from app.storage.memory import MemoryStorage

logger = structlog.get_logger()


def build_storage(settings: Settings) -> Storage:
    """Create the storage backend selected by STORAGE_BACKEND."""
    if settings.storage_backend == "database":
        from app.database import create_engine_for
        from app.storage.database import DatabaseStorage

        logger.info("storage_selected", backend="database")
        return DatabaseStorage(create_engine_for(settings.database_url, echo=settings.debug))

    logger.info("storage_selected", backend="memory")
    return MemoryStorage()


__all__ = ["DuplicateUsernameError", "MemoryStorage", "Record", "Storage", "build_storage"]
