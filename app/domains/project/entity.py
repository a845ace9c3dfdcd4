"""Project entity with change tracking."""

from datetime import datetime

from app.schemas.project import ProjectSnapshot
from app.shared.tracking import TrackedEntity


class ProjectEntity(TrackedEntity[ProjectSnapshot]):
    """In-memory copy of one ``projects`` row."""

    snapshot_type = ProjectSnapshot
    identity_field = "project_id"

    @classmethod
    def new(
        cls,
        owning_user_id: int,
        project_name: str,
        creation_date: datetime | None = None,
    ) -> "ProjectEntity":
        """A project that has not been stored yet."""
        return cls(
            ProjectSnapshot(
                project_id=None,
                owning_user_id=owning_user_id,
                project_name=project_name,
                creation_date=creation_date or datetime.utcnow(),
            )
        )

    @property
    def project_id(self) -> int | None:
        return self.identity

    @property
    def owning_user_id(self) -> int:
        return self._get("owning_user_id")

    @owning_user_id.setter
    def owning_user_id(self, value: int) -> None:
        self._set("owning_user_id", value)

    @property
    def project_name(self) -> str:
        return self._get("project_name")

    @project_name.setter
    def project_name(self, value: str) -> None:
        self._set("project_name", value)

    @property
    def creation_date(self) -> datetime:
        return self._get("creation_date")

    @creation_date.setter
    def creation_date(self, value: datetime) -> None:
        self._set("creation_date", value)
