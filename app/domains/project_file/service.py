"""Project file service layer with business logic."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from app.domains.project.repository import ProjectRepository
from app.domains.project_file.entity import ProjectFileEntity
from app.domains.project_file.repository import ProjectFileRepository
from app.exceptions.project import (
    FileContentNotFoundError,
    InvalidFileTreeError,
    ProjectFileNotFoundError,
    ProjectNotFoundError,
)
from app.exceptions.storage import ObjectStoreError, StorageError
from app.schemas.project_file import ProjectFileCreate, ProjectFileFilter, ProjectFileUpdate
from app.services.object_store import ObjectStore, file_content_key
from app.shared.pagination import ListOptions, Page

logger = logging.getLogger(__name__)


class ProjectFileService:
    """
    Service class for project file business logic.

    Keeps each project's file tree well formed: a parent must be a directory
    of the same project, re-parenting may not create a cycle, and a directory
    with children cannot become a plain file or move to another project.
    """

    def __init__(self, db: AsyncSession, object_store: ObjectStore | None = None):
        self.db = db
        self.object_store = object_store
        self.repository = ProjectFileRepository(db)
        self.projects = ProjectRepository(db)

    async def create_file(self, file_data: ProjectFileCreate) -> ProjectFileEntity:
        """Create a file or directory inside a project."""
        await self._require_project(file_data.project_id)

        project_file = ProjectFileEntity.new(
            project_id=file_data.project_id,
            file_name=file_data.file_name,
            is_directory=file_data.is_directory,
            parent_directory=file_data.parent_directory,
            creation_date=file_data.creation_date,
        )
        await self._validate_parent(project_file)

        await self.repository.save(project_file)
        logger.info(
            "Created %s %s in project %s",
            "directory" if project_file.is_directory else "file",
            project_file.file_id,
            project_file.project_id,
        )
        return project_file

    async def get_file(self, file_id: int) -> ProjectFileEntity:
        """Get a file by ID."""
        project_file = await self.repository.find(file_id)
        if project_file is None:
            raise ProjectFileNotFoundError(f"Project file {file_id} not found")
        return project_file

    async def get_owned_file(
        self, project_id: int, owner_user_id: int, file_id: int
    ) -> ProjectFileEntity:
        """Get a file only if it belongs to the project and the project to the user."""
        project_file = await self.repository.find_owned(project_id, owner_user_id, file_id)
        if project_file is None:
            raise ProjectFileNotFoundError(
                f"Project file {file_id} not found in project {project_id}"
            )
        return project_file

    async def list_files(
        self,
        filters: ProjectFileFilter | None = None,
        limit: int = 20,
        offset: int = 0,
        sort: str | None = None,
        order: str = "asc",
    ) -> Page[ProjectFileEntity]:
        """Get a page of files with optional filters."""
        options = ListOptions(
            limit=limit,
            offset=offset,
            filters=filters.model_dump(exclude_none=True) if filters else {},
            sort=sort,
            order=order,
        )
        return await self.repository.find_all(options)

    async def update_file(
        self, file_id: int, file_data: ProjectFileUpdate
    ) -> ProjectFileEntity:
        """Update a file. ``parent_directory`` may be set to ``None`` to move to the root."""
        project_file = await self.get_file(file_id)
        original_project = project_file.project_id
        original_parent = project_file.parent_directory
        was_directory = project_file.is_directory

        for field, value in file_data.model_dump(exclude_unset=True).items():
            if value is None and field != "parent_directory":
                continue
            setattr(project_file, field, value)

        if not project_file.is_dirty:
            return project_file

        moved_project = project_file.project_id != original_project
        if moved_project:
            await self._require_project(project_file.project_id)

        if (moved_project or (was_directory and not project_file.is_directory)) and (
            await self.repository.count_children(file_id)
        ):
            raise InvalidFileTreeError(f"Directory {file_id} is not empty")

        if moved_project or project_file.parent_directory != original_parent:
            await self._validate_parent(project_file)

        if not (moved_project and not was_directory and self.object_store is not None):
            return await self.repository.save(project_file)

        # The content key embeds the project, so the object moves with the row
        old_key = file_content_key(original_project, file_id)
        new_key = file_content_key(project_file.project_id, file_id)
        content = await self.object_store.get(old_key)
        if content is not None:
            await self.object_store.put(new_key, content)

        try:
            await self.repository.save(project_file)
        except StorageError:
            if content is not None:
                await self.object_store.delete(new_key)
            raise

        if content is not None:
            await self._discard_content(old_key)
        return project_file

    async def delete_file(self, file_id: int) -> bool:
        """Delete a file, or an empty directory, and its stored content."""
        project_file = await self.get_file(file_id)
        if project_file.is_directory and await self.repository.count_children(file_id):
            raise InvalidFileTreeError(f"Directory {file_id} is not empty")

        # Content goes first; a failure here leaves the row in place for a retry
        if self.object_store is not None and not project_file.is_directory:
            await self.object_store.delete(file_content_key(project_file.project_id, file_id))

        if not await self.repository.delete_by_id(file_id):
            raise ProjectFileNotFoundError(f"Project file {file_id} not found")
        logger.info("Deleted project file %s", file_id)
        return True

    async def upload_content(
        self, project_id: int, owner_user_id: int, file_id: int, content: str
    ) -> str:
        """Store the content of a file and return its object key."""
        project_file = await self.get_owned_file(project_id, owner_user_id, file_id)
        if project_file.is_directory:
            raise InvalidFileTreeError(f"{project_file.file_name} is a directory")

        key = file_content_key(project_id, file_id)
        await self._require_store().put(key, content)
        return key

    async def download_content(
        self, project_id: int, owner_user_id: int, file_id: int
    ) -> tuple[str, str]:
        """Return ``(key, content)`` for a file."""
        project_file = await self.get_owned_file(project_id, owner_user_id, file_id)
        if project_file.is_directory:
            raise InvalidFileTreeError(f"{project_file.file_name} is a directory")

        key = file_content_key(project_id, file_id)
        content = await self._require_store().get(key)
        if content is None:
            raise FileContentNotFoundError(f"No content stored for file {file_id}")
        return key, content

    # Private helper methods
    def _require_store(self) -> ObjectStore:
        if self.object_store is None:
            raise ObjectStoreError("Object storage is not configured")
        return self.object_store

    async def _discard_content(self, key: str) -> None:
        """Remove a superseded object, logging a failure instead of raising it."""
        try:
            await self.object_store.delete(key)
        except ObjectStoreError as e:
            logger.warning("Orphaned object %s left behind: %s", key, e.message)

    async def _require_project(self, project_id: int) -> None:
        if await self.projects.find(project_id) is None:
            raise ProjectNotFoundError(f"Project {project_id} not found")

    async def _validate_parent(self, project_file: ProjectFileEntity) -> None:
        """Check the parent exists, is a directory of the same project, and is not a descendant."""
        parent_id = project_file.parent_directory
        if parent_id is None:
            return

        parent = await self.repository.find(parent_id)
        if parent is None:
            raise InvalidFileTreeError(f"Parent directory {parent_id} does not exist")
        if not parent.is_directory:
            raise InvalidFileTreeError(f"Parent {parent_id} is not a directory")
        if parent.project_id != project_file.project_id:
            raise InvalidFileTreeError(
                f"Parent directory {parent_id} belongs to another project"
            )

        if project_file.file_id is None:
            return

        seen: set[int] = set()
        node = parent
        while node is not None and node.file_id not in seen:
            if node.file_id == project_file.file_id:
                raise InvalidFileTreeError(
                    f"Moving {project_file.file_id} under {parent_id} would create a cycle"
                )
            seen.add(node.file_id)
            if node.parent_directory is None:
                break
            node = await self.repository.find(node.parent_directory)
