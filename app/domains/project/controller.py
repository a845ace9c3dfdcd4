"""Project API controller with FastAPI endpoints."""

import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends, Path, Query

from app.core.config import settings
from app.core.dependencies import get_project_service
from app.domains.project.service import ProjectService
from app.schemas.base import ResponseSchema
from app.schemas.project import ProjectCreate, ProjectFilter, ProjectUpdate

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/projects",
    tags=["projects"],
)


@router.get("/", response_model=ResponseSchema)
async def get_projects(
    limit: int = Query(20, ge=0, le=settings.max_page_size),
    offset: int = Query(0, ge=0),
    project_name: Optional[str] = Query(None, description="Substring of the project name"),
    owning_user_id: Optional[int] = Query(None),
    sort: Optional[str] = Query(None, description="Column to sort by"),
    order: str = Query("asc", description="asc or desc"),
    service: ProjectService = Depends(get_project_service),
):
    """Get a page of projects with optional filters."""

    filters = ProjectFilter(project_name=project_name, owning_user_id=owning_user_id)
    page = await service.list_projects(
        filters=filters, limit=limit, offset=offset, sort=sort, order=order
    )

    return ResponseSchema(
        status="success",
        message="Projects retrieved successfully",
        data={
            "items": [project.snapshot.model_dump(mode="json") for project in page.items],
            "total": page.total,
            "limit": page.limit,
            "offset": page.offset,
        },
    )


@router.get("/{project_id}", response_model=ResponseSchema)
async def get_project(
    project_id: int = Path(..., description="Project ID"),
    service: ProjectService = Depends(get_project_service),
):
    """Get a specific project by ID."""

    project = await service.get_project(project_id)

    return ResponseSchema(
        status="success",
        message="Project retrieved successfully",
        data=project.snapshot.model_dump(mode="json"),
    )


@router.post("/", response_model=ResponseSchema, status_code=201)
async def create_project(
    project_data: ProjectCreate,
    service: ProjectService = Depends(get_project_service),
):
    """Create a new project."""

    project = await service.create_project(project_data)

    return ResponseSchema(
        status="success",
        message="Project created successfully",
        data=project.snapshot.model_dump(mode="json"),
    )


@router.put("/{project_id}", response_model=ResponseSchema)
async def update_project(
    project_id: int = Path(..., description="Project ID"),
    project_data: ProjectUpdate = Body(...),
    service: ProjectService = Depends(get_project_service),
):
    """Update a specific project."""

    project = await service.update_project(project_id, project_data)

    return ResponseSchema(
        status="success",
        message="Project updated successfully",
        data=project.snapshot.model_dump(mode="json"),
    )


@router.delete("/{project_id}", response_model=ResponseSchema)
async def delete_project(
    project_id: int = Path(..., description="Project ID"),
    service: ProjectService = Depends(get_project_service),
):
    """Delete a specific project. The project must not contain files."""

    await service.delete_project(project_id)

    return ResponseSchema(
        status="success",
        message="Project deleted successfully",
        data=None,
    )
