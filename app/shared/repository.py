"""Table-backed repository shared by the entity repositories."""

import logging
from collections.abc import Mapping
from typing import ClassVar, Generic, TypeVar

from sqlalchemy import Table, delete, insert, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Executable

from app.exceptions.storage import StorageError
from app.shared.pagination import FilterField, ListOptions, Page, build_page_queries, paginate
from app.shared.tracking import TrackedEntity

logger = logging.getLogger(__name__)

EntityT = TypeVar("EntityT", bound=TrackedEntity)


class TableRepository(Generic[EntityT]):
    """
    find / find_all / save / delete_by_id over a single table.

    Absence is returned as a value (``None`` or ``False``); any database
    failure is logged and raised as :class:`StorageError` with the driver
    error chained. Every write commits on its own.
    """

    table: ClassVar[Table]
    entity_type: ClassVar[type[TrackedEntity]]
    filter_fields: ClassVar[Mapping[str, FilterField]] = {}
    sort_fields: ClassVar[tuple[str, ...]] = ()
    default_sort: ClassVar[str]
    entity_name: ClassVar[str] = "record"

    def __init__(self, db: AsyncSession):
        self.db = db

    @property
    def _pk(self):
        return self.table.c[self.entity_type.identity_field]

    async def find(self, identity: int) -> EntityT | None:
        """Fetch one row by primary key, or ``None`` when it does not exist."""
        stmt = select(self.table).where(self._pk == identity)
        result = await self._execute(stmt, f"fetching {self.entity_name} {identity}")
        row = result.mappings().first()
        if row is None:
            return None
        return self.entity_type.hydrate(row)

    async def find_all(self, options: ListOptions) -> Page[EntityT]:
        """Fetch one filtered, sorted page and the total number of matches."""
        count_stmt, data_stmt = build_page_queries(
            self.table,
            options,
            self.filter_fields,
            self.sort_fields,
            self.default_sort,
        )
        try:
            rows, total = await paginate(self.db, count_stmt, data_stmt)
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error("Error listing %s rows: %s", self.entity_name, e)
            raise StorageError(f"Failed to list {self.entity_name} rows") from e

        return Page(
            items=[self.entity_type.hydrate(row) for row in rows],
            total=total,
            limit=options.limit,
            offset=options.offset,
        )

    async def save(self, entity: EntityT) -> EntityT:
        """
        Insert or update ``entity`` when it is dirty.

        A clean entity is returned untouched without touching the database.
        A new entity is inserted and adopts the generated key; a stored one is
        rewritten in full, keyed by its identity.
        """
        if not entity.is_dirty:
            return entity

        values = entity.column_values()
        identity = entity.identity
        try:
            if identity is None:
                result = await self.db.execute(insert(self.table).values(**values))
                identity = result.inserted_primary_key[0]
            else:
                result = await self.db.execute(
                    update(self.table).where(self._pk == identity).values(**values)
                )
                if result.rowcount == 0:
                    logger.warning(
                        "Update of %s %s matched no rows", self.entity_name, identity
                    )
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error("Error saving %s %s: %s", self.entity_name, identity, e)
            raise StorageError(f"Failed to save {self.entity_name}") from e

        entity.mark_persisted(identity)
        return entity

    async def delete_by_id(self, identity: int) -> bool:
        """Delete one row by primary key; ``False`` when nothing matched."""
        stmt = delete(self.table).where(self._pk == identity)
        result = await self._execute(
            stmt, f"deleting {self.entity_name} {identity}", commit=True
        )
        return result.rowcount > 0

    async def _execute(self, stmt: Executable, action: str, commit: bool = False):
        try:
            result = await self.db.execute(stmt)
            if commit:
                await self.db.commit()
            return result
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error("Error %s: %s", action, e)
            raise StorageError(f"Database error while {action}") from e
