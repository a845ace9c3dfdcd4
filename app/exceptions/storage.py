# ruff: noqa: D107
"""Storage backend exceptions."""

from typing import Any

from .base import BaseAppException


class StorageError(BaseAppException):
    """Raised when the relational database fails to execute a statement."""

    def __init__(
        self,
        message: str = "Database operation failed",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(
            message=message,
            status_code=503,
            error_code="STORAGE_ERROR",
            details=details,
        )


class ObjectStoreError(BaseAppException):
    """Raised when the object store rejects or fails a request."""

    def __init__(
        self,
        message: str = "Object store operation failed",
        key: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        self.key = key
        merged = dict(details or {})
        if key is not None:
            merged.setdefault("key", key)
        super().__init__(
            message=message,
            status_code=502,
            error_code="OBJECT_STORE_ERROR",
            details=merged,
        )
