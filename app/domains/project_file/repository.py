"""Persistence for project files."""

from sqlalchemy import func, select

from app.domains.project_file.entity import ProjectFileEntity
from app.shared.pagination import FilterField, MatchKind
from app.shared.repository import TableRepository
from models.project import Project
from models.project_file import ProjectFile

projects = Project.__table__
project_files = ProjectFile.__table__


class ProjectFileRepository(TableRepository[ProjectFileEntity]):
    """Reads and writes rows of the ``project_files`` table."""

    table = project_files
    entity_type = ProjectFileEntity
    entity_name = "project file"
    filter_fields = {
        "project_id": FilterField(column="project_id"),
        "parent_directory": FilterField(column="parent_directory"),
        "file_name": FilterField(column="file_name", kind=MatchKind.contains),
        "is_directory": FilterField(column="is_directory", kind=MatchKind.flag),
    }
    sort_fields = ("file_id", "file_name", "creation_date", "is_directory")
    default_sort = "file_id"

    async def find_owned(
        self, project_id: int, owner_user_id: int, file_id: int
    ) -> ProjectFileEntity | None:
        """
        Fetch a file only if it belongs to ``project_id`` and that project is
        owned by ``owner_user_id``.
        """
        stmt = (
            select(project_files)
            .join(projects, projects.c.project_id == project_files.c.project_id)
            .where(
                project_files.c.project_id == project_id,
                projects.c.owning_user_id == owner_user_id,
                project_files.c.file_id == file_id,
            )
        )
        result = await self._execute(
            stmt,
            f"fetching project file {file_id} of project {project_id} for user {owner_user_id}",
        )
        row = result.mappings().first()
        if row is None:
            return None
        return ProjectFileEntity.hydrate(row)

    async def find_children(self, directory_id: int) -> list[ProjectFileEntity]:
        """Direct children of a directory, ordered by ``file_id``."""
        stmt = (
            select(project_files)
            .where(project_files.c.parent_directory == directory_id)
            .order_by(project_files.c.file_id)
        )
        result = await self._execute(stmt, f"listing children of directory {directory_id}")
        return [ProjectFileEntity.hydrate(row) for row in result.mappings().all()]

    async def count_children(self, directory_id: int) -> int:
        stmt = (
            select(func.count())
            .select_from(project_files)
            .where(project_files.c.parent_directory == directory_id)
        )
        result = await self._execute(stmt, f"counting children of directory {directory_id}")
        return result.scalar() or 0

    async def count_in_project(self, project_id: int) -> int:
        stmt = (
            select(func.count())
            .select_from(project_files)
            .where(project_files.c.project_id == project_id)
        )
        result = await self._execute(stmt, f"counting files of project {project_id}")
        return result.scalar() or 0
