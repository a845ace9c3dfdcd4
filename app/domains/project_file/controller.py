"""Project file API controller with FastAPI endpoints."""

import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends, Path, Query, Request

from app.core.config import settings
from app.core.dependencies import get_project_file_service
from app.domains.project_file.service import ProjectFileService
from app.exceptions.base import ValidationError
from app.schemas.base import ResponseSchema
from app.schemas.project_file import (
    FileContentResponse,
    ProjectFileCreate,
    ProjectFileFilter,
    ProjectFileUpdate,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/project_files",
    tags=["project_files"],
)


@router.get("/", response_model=ResponseSchema)
async def get_project_files(
    limit: int = Query(20, ge=0, le=settings.max_page_size),
    offset: int = Query(0, ge=0),
    project_id: Optional[int] = Query(None),
    parent_directory: Optional[int] = Query(None),
    file_name: Optional[str] = Query(None, description="Substring of the file name"),
    is_directory: Optional[bool] = Query(None),
    sort: Optional[str] = Query(None, description="Column to sort by"),
    order: str = Query("asc", description="asc or desc"),
    service: ProjectFileService = Depends(get_project_file_service),
):
    """Get a page of project files with optional filters."""

    filters = ProjectFileFilter(
        project_id=project_id,
        parent_directory=parent_directory,
        file_name=file_name,
        is_directory=is_directory,
    )
    page = await service.list_files(
        filters=filters, limit=limit, offset=offset, sort=sort, order=order
    )

    return ResponseSchema(
        status="success",
        message="Project files retrieved successfully",
        data={
            "items": [item.snapshot.model_dump(mode="json") for item in page.items],
            "total": page.total,
            "limit": page.limit,
            "offset": page.offset,
        },
    )


@router.get("/{file_id}", response_model=ResponseSchema)
async def get_project_file(
    file_id: int = Path(..., description="File ID"),
    service: ProjectFileService = Depends(get_project_file_service),
):
    """Get a specific project file by ID."""

    project_file = await service.get_file(file_id)

    return ResponseSchema(
        status="success",
        message="Project file retrieved successfully",
        data=project_file.snapshot.model_dump(mode="json"),
    )


@router.post("/", response_model=ResponseSchema, status_code=201)
async def create_project_file(
    file_data: ProjectFileCreate,
    service: ProjectFileService = Depends(get_project_file_service),
):
    """Create a file or directory."""

    project_file = await service.create_file(file_data)

    return ResponseSchema(
        status="success",
        message="Project file created successfully",
        data=project_file.snapshot.model_dump(mode="json"),
    )


@router.put("/{file_id}", response_model=ResponseSchema)
async def update_project_file(
    file_id: int = Path(..., description="File ID"),
    file_data: ProjectFileUpdate = Body(...),
    service: ProjectFileService = Depends(get_project_file_service),
):
    """Rename, move or otherwise update a file or directory."""

    project_file = await service.update_file(file_id, file_data)

    return ResponseSchema(
        status="success",
        message="Project file updated successfully",
        data=project_file.snapshot.model_dump(mode="json"),
    )


@router.delete("/{file_id}", response_model=ResponseSchema)
async def delete_project_file(
    file_id: int = Path(..., description="File ID"),
    service: ProjectFileService = Depends(get_project_file_service),
):
    """Delete a file or an empty directory."""

    await service.delete_file(file_id)

    return ResponseSchema(
        status="success",
        message="Project file deleted successfully",
        data=None,
    )


@router.put("/{file_id}/content", response_model=ResponseSchema)
async def upload_file_content(
    request: Request,
    file_id: int = Path(..., description="File ID"),
    project_id: int = Query(..., description="Project the file belongs to"),
    user_id: int = Query(..., description="Owner of the project"),
    service: ProjectFileService = Depends(get_project_file_service),
):
    """Store the raw request body as the text content of a file."""

    body = await request.body()
    try:
        content = body.decode("utf-8")
    except UnicodeDecodeError as e:
        raise ValidationError("File content must be UTF-8 text") from e

    key = await service.upload_content(project_id, user_id, file_id, content)

    return ResponseSchema(
        status="success",
        message="File content uploaded successfully",
        data={"file_id": file_id, "key": key},
    )


@router.get("/{file_id}/content", response_model=ResponseSchema)
async def download_file_content(
    file_id: int = Path(..., description="File ID"),
    project_id: int = Query(..., description="Project the file belongs to"),
    user_id: int = Query(..., description="Owner of the project"),
    service: ProjectFileService = Depends(get_project_file_service),
):
    """Fetch the text content of a file."""

    key, content = await service.download_content(project_id, user_id, file_id)

    return ResponseSchema(
        status="success",
        message="File content retrieved successfully",
        data=FileContentResponse(file_id=file_id, key=key, content=content).model_dump(),
    )
