"""Project file schemas for request/response serialization."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field, field_validator

from .base import BaseSchema, SnapshotSchema


def _clean_file_name(v: str | None) -> str | None:
    if v is not None and isinstance(v, str):
        v = v.strip()
        if not v:
            raise ValueError("File name cannot be empty or only whitespace")
        if "/" in v:
            raise ValueError("File name cannot contain '/'")
    return v


class ProjectFileSnapshot(SnapshotSchema):
    """All columns of a project file row."""

    file_id: int | None = None
    project_id: int
    parent_directory: int | None = None
    file_name: str
    is_directory: bool = False
    creation_date: datetime


class ProjectFileCreate(BaseSchema):
    """Schema for creating a file or directory."""

    project_id: int
    parent_directory: int | None = None
    file_name: str = Field(..., min_length=1, max_length=255)
    is_directory: bool = False
    creation_date: datetime | None = None

    @field_validator("file_name")
    @classmethod
    def validate_file_name(cls, v: str) -> str:
        return _clean_file_name(v)


class ProjectFileUpdate(BaseSchema):
    """
    Schema for updating a file or directory.

    ``parent_directory`` is only changed when present in the request body;
    an explicit ``null`` moves the node to the project root.
    """

    project_id: int | None = None
    parent_directory: int | None = None
    file_name: str | None = Field(None, min_length=1, max_length=255)
    is_directory: bool | None = None
    creation_date: datetime | None = None

    @field_validator("file_name")
    @classmethod
    def validate_file_name(cls, v: str | None) -> str | None:
        return _clean_file_name(v)


class ProjectFileFilter(BaseSchema):
    """Schema for filtering project files."""

    project_id: int | None = None
    parent_directory: int | None = None
    file_name: str | None = None
    is_directory: bool | None = None


class FileContentResponse(BaseSchema):
    """Stored content of a file."""

    file_id: int
    key: str
    content: str
