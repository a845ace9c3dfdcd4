"""Change tracking for entities backed by a single table row."""

from collections.abc import Mapping
from typing import Any, ClassVar, Generic, TypeVar

from pydantic import BaseModel

SnapshotT = TypeVar("SnapshotT", bound=BaseModel)


class TrackedEntity(Generic[SnapshotT]):
    """
    Wraps an immutable snapshot of a row together with a dirty flag.

    Field changes replace the snapshot with a revalidated copy; the flag tells
    the repository whether ``save`` has anything to write. An entity without
    an identity has never been stored and starts out dirty. Hydrated entities
    start out clean.

    Subclasses declare ``snapshot_type`` and ``identity_field`` and expose the
    mutable columns as properties built on :meth:`_get` and :meth:`_set`.
    """

    snapshot_type: ClassVar[type[BaseModel]]
    identity_field: ClassVar[str]

    def __init__(self, snapshot: SnapshotT, *, dirty: bool | None = None):
        self._snapshot = snapshot
        self._dirty = self.identity is None if dirty is None else dirty

    @classmethod
    def hydrate(cls, row: Mapping[str, Any]):
        """Build a clean entity from a storage row."""
        return cls(cls.snapshot_type.model_validate(dict(row)), dirty=False)

    @property
    def identity(self) -> int | None:
        return getattr(self._snapshot, self.identity_field)

    @property
    def snapshot(self) -> SnapshotT:
        return self._snapshot

    @property
    def is_dirty(self) -> bool:
        return self._dirty

    def _get(self, field: str) -> Any:
        return getattr(self._snapshot, field)

    def _set(self, field: str, value: Any) -> None:
        # Compare after validation so "1" and 1 count as the same value
        data = self._snapshot.model_dump()
        data[field] = value
        candidate = self.snapshot_type.model_validate(data)
        if getattr(candidate, field) == getattr(self._snapshot, field):
            return
        self._snapshot = candidate
        self._dirty = True

    def column_values(self) -> dict[str, Any]:
        """Every column except the identity, as written by insert and update."""
        return self._snapshot.model_dump(exclude={self.identity_field})

    def mark_persisted(self, identity: int) -> None:
        """Adopt the stored identity and clear the dirty flag."""
        current = self.identity
        if current is None:
            self._snapshot = self._snapshot.model_copy(update={self.identity_field: identity})
        elif current != identity:
            raise ValueError(
                f"{type(self).__name__} already has identity {current}, got {identity}"
            )
        self._dirty = False

    def to_json(self) -> str:
        return self._snapshot.model_dump_json()

    def __repr__(self) -> str:
        state = "dirty" if self._dirty else "clean"
        return f"<{type(self).__name__} {self._snapshot!r} ({state})>"
