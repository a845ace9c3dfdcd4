"""Persistence for projects."""

from app.domains.project.entity import ProjectEntity
from app.shared.pagination import FilterField, MatchKind
from app.shared.repository import TableRepository
from models.project import Project


class ProjectRepository(TableRepository[ProjectEntity]):
    """Reads and writes rows of the ``projects`` table."""

    table = Project.__table__
    entity_type = ProjectEntity
    entity_name = "project"
    filter_fields = {
        "project_name": FilterField(column="project_name", kind=MatchKind.contains),
        "owning_user_id": FilterField(column="owning_user_id"),
    }
    sort_fields = ("project_id", "owning_user_id", "project_name", "creation_date")
    default_sort = "project_id"
