"""Project file entity with change tracking."""

from datetime import datetime

from app.schemas.project_file import ProjectFileSnapshot
from app.shared.tracking import TrackedEntity


class ProjectFileEntity(TrackedEntity[ProjectFileSnapshot]):
    """In-memory copy of one ``project_files`` row."""

    snapshot_type = ProjectFileSnapshot
    identity_field = "file_id"

    @classmethod
    def new(
        cls,
        project_id: int,
        file_name: str,
        is_directory: bool = False,
        parent_directory: int | None = None,
        creation_date: datetime | None = None,
    ) -> "ProjectFileEntity":
        """A file or directory that has not been stored yet."""
        return cls(
            ProjectFileSnapshot(
                file_id=None,
                project_id=project_id,
                parent_directory=parent_directory,
                file_name=file_name,
                is_directory=is_directory,
                creation_date=creation_date or datetime.utcnow(),
            )
        )

    @property
    def file_id(self) -> int | None:
        return self.identity

    @property
    def project_id(self) -> int:
        return self._get("project_id")

    @project_id.setter
    def project_id(self, value: int) -> None:
        self._set("project_id", value)

    @property
    def parent_directory(self) -> int | None:
        return self._get("parent_directory")

    @parent_directory.setter
    def parent_directory(self, value: int | None) -> None:
        self._set("parent_directory", value)

    @property
    def file_name(self) -> str:
        return self._get("file_name")

    @file_name.setter
    def file_name(self, value: str) -> None:
        self._set("file_name", value)

    @property
    def is_directory(self) -> bool:
        return self._get("is_directory")

    @is_directory.setter
    def is_directory(self, value: bool) -> None:
        self._set("is_directory", value)

    @property
    def creation_date(self) -> datetime:
        return self._get("creation_date")

    @creation_date.setter
    def creation_date(self, value: datetime) -> None:
        self._set("creation_date", value)
