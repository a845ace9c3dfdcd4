# app/core/dependencies.py
import logging
from functools import lru_cache

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.database import get_db
from app.domains.project.service import ProjectService
from app.domains.project_file.service import ProjectFileService
from app.services.object_store import ObjectStore

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def _shared_object_store() -> ObjectStore:
    store = ObjectStore.from_settings(settings)
    logger.info("Object store ready for bucket %s", store.bucket_name)
    return store


def get_object_store() -> ObjectStore | None:
    """Shared object store, or ``None`` when no bucket is configured.

    The boto3 client is thread-safe and created once per process.
    """
    if not settings.has_file_storage:
        return None
    return _shared_object_store()


def get_project_service(db: AsyncSession = Depends(get_db)) -> ProjectService:
    return ProjectService(db)


def get_project_file_service(
    db: AsyncSession = Depends(get_db),
    object_store: ObjectStore | None = Depends(get_object_store),
) -> ProjectFileService:
    return ProjectFileService(db, object_store)


__all__ = [
    "get_db",
    "get_object_store",
    "get_project_service",
    "get_project_file_service",
]
