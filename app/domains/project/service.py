"""Project service layer with business logic."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from app.domains.project.entity import ProjectEntity
from app.domains.project.repository import ProjectRepository
from app.domains.project_file.repository import ProjectFileRepository
from app.exceptions.project import ProjectNotEmptyError, ProjectNotFoundError
from app.schemas.project import ProjectCreate, ProjectFilter, ProjectUpdate
from app.shared.pagination import ListOptions, Page

logger = logging.getLogger(__name__)


class ProjectService:
    """Service class for project business logic."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.repository = ProjectRepository(db)

    async def create_project(self, project_data: ProjectCreate) -> ProjectEntity:
        """Create a new project."""
        project = ProjectEntity.new(
            owning_user_id=project_data.owning_user_id,
            project_name=project_data.project_name,
            creation_date=project_data.creation_date,
        )
        await self.repository.save(project)
        logger.info("Created project %s for user %s", project.project_id, project.owning_user_id)
        return project

    async def get_project(self, project_id: int) -> ProjectEntity:
        """Get a project by ID."""
        project = await self.repository.find(project_id)
        if project is None:
            raise ProjectNotFoundError(f"Project {project_id} not found")
        return project

    async def list_projects(
        self,
        filters: ProjectFilter | None = None,
        limit: int = 20,
        offset: int = 0,
        sort: str | None = None,
        order: str = "asc",
    ) -> Page[ProjectEntity]:
        """Get a page of projects with optional filters."""
        options = ListOptions(
            limit=limit,
            offset=offset,
            filters=filters.model_dump(exclude_none=True) if filters else {},
            sort=sort,
            order=order,
        )
        return await self.repository.find_all(options)

    async def update_project(self, project_id: int, project_data: ProjectUpdate) -> ProjectEntity:
        """Update a project. Fields equal to the stored values are not written."""
        project = await self.get_project(project_id)

        update_data = project_data.model_dump(exclude_unset=True, exclude_none=True)
        for field, value in update_data.items():
            setattr(project, field, value)

        return await self.repository.save(project)

    async def delete_project(self, project_id: int) -> bool:
        """Delete an empty project."""
        files = ProjectFileRepository(self.db)
        if await files.count_in_project(project_id):
            raise ProjectNotEmptyError(f"Project {project_id} still contains files")

        if not await self.repository.delete_by_id(project_id):
            raise ProjectNotFoundError(f"Project {project_id} not found")
        logger.info("Deleted project %s", project_id)
        return True
