"""Project schemas for request/response serialization."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field, field_validator

from .base import BaseSchema, SnapshotSchema


def _clean_name(v: str | None) -> str | None:
    if v is not None and isinstance(v, str):
        v = v.strip()
        if not v:
            raise ValueError("Project name cannot be empty or only whitespace")
    return v


class ProjectSnapshot(SnapshotSchema):
    """All columns of a project row."""

    project_id: int | None = None
    owning_user_id: int
    project_name: str
    creation_date: datetime


class ProjectCreate(BaseSchema):
    """Schema for creating a new project."""

    owning_user_id: int = Field(..., ge=0)
    project_name: str = Field(..., min_length=1, max_length=255)
    creation_date: datetime | None = None

    @field_validator("project_name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Validate and clean the project name."""
        return _clean_name(v)


class ProjectUpdate(BaseSchema):
    """Schema for updating a project."""

    owning_user_id: int | None = Field(None, ge=0)
    project_name: str | None = Field(None, min_length=1, max_length=255)
    creation_date: datetime | None = None

    @field_validator("project_name")
    @classmethod
    def validate_name(cls, v: str | None) -> str | None:
        """Validate and clean the project name."""
        return _clean_name(v)


class ProjectFilter(BaseSchema):
    """Schema for filtering projects."""

    project_name: str | None = None
    owning_user_id: int | None = None
