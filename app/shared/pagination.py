"""Pagination, filtering and sorting utilities."""

from collections.abc import Collection, Mapping
from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy import Table, and_, func, select, true
from sqlalchemy.engine import RowMapping
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import ColumnElement, Select

from app.exceptions.base import ValidationError

T = TypeVar("T")

SORT_ORDERS = ("asc", "desc")


class MatchKind(str, Enum):
    """How a filter value is compared against its column."""

    equals = "equals"
    flag = "flag"
    contains = "contains"


class FilterField(BaseModel):
    """A recognized filter: the column it targets and how it matches."""

    model_config = ConfigDict(frozen=True)

    column: str
    kind: MatchKind = MatchKind.equals

    def clause(self, table: Table, value: Any) -> ColumnElement[bool] | None:
        """Build the WHERE clause for ``value``, or ``None`` to skip the filter."""
        if value is None:
            return None
        column = table.c[self.column]
        if self.kind is MatchKind.contains:
            if value == "":
                return None
            # LIKE '%value%' with % and _ in the value escaped
            return column.contains(str(value), autoescape=True)
        if self.kind is MatchKind.flag:
            return column == int(bool(value))
        return column == value


class ListOptions(BaseModel):
    """Pagination, filter and sort options for a list query."""

    limit: int = Field(default=20, ge=0, description="Maximum number of items")
    offset: int = Field(default=0, ge=0, description="Number of items to skip")
    filters: dict[str, Any] = Field(default_factory=dict)
    sort: str | None = Field(default=None, description="Column to sort by")
    order: str = Field(default="asc", description="asc or desc")


class Page(BaseModel, Generic[T]):
    """One page of results plus the total number of matching rows."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    items: list[T]
    total: int
    limit: int
    offset: int


def build_page_queries(
    table: Table,
    options: ListOptions,
    filter_fields: Mapping[str, FilterField],
    sort_fields: Collection[str],
    default_sort: str,
) -> tuple[Select, Select]:
    """
    Build the count and data statements for a filtered, sorted page.

    Sort field and order are checked against allow-lists before anything is
    built, so a rejected request never reaches the database. Filter values,
    limit and offset are always bound parameters.

    Args:
        table: Table to select from
        options: Pagination, filter and sort options
        filter_fields: Recognized filter names
        sort_fields: Columns allowed in ORDER BY
        default_sort: Column used when ``options.sort`` is not set

    Returns:
        Tuple of (count statement, data statement)

    Raises:
        ValidationError: On an unknown sort field, order value or filter name
    """
    sort = options.sort or default_sort
    if sort not in sort_fields:
        raise ValidationError(
            f"Invalid sort field: {sort}",
            details={"allowed": sorted(sort_fields)},
        )

    order = (options.order or "asc").lower()
    if order not in SORT_ORDERS:
        raise ValidationError(
            f"Invalid order value: {options.order}",
            details={"allowed": list(SORT_ORDERS)},
        )

    clauses: list[ColumnElement[bool]] = [true()]
    for name, value in options.filters.items():
        field = filter_fields.get(name)
        if field is None:
            raise ValidationError(
                f"Unknown filter: {name}",
                details={"allowed": sorted(filter_fields)},
            )
        clause = field.clause(table, value)
        if clause is not None:
            clauses.append(clause)
    where = and_(*clauses)

    sort_column = table.c[sort]
    ordering = [sort_column.asc() if order == "asc" else sort_column.desc()]
    # Primary key as tie-breaker keeps pages stable
    ordering.extend(column for column in table.primary_key.columns if column.name != sort)

    count_stmt = select(func.count()).select_from(table).where(where)
    data_stmt = (
        select(table)
        .where(where)
        .order_by(*ordering)
        .limit(options.limit)
        .offset(options.offset)
    )
    return count_stmt, data_stmt


async def paginate(
    db: AsyncSession, count_stmt: Select, data_stmt: Select
) -> tuple[list[RowMapping], int]:
    """
    Run a count query and then the bounded data query.

    Args:
        db: Database session
        count_stmt: Statement returning the number of matching rows
        data_stmt: Statement returning the requested page

    Returns:
        Tuple of (rows of the page, total matching rows)
    """
    total_result = await db.execute(count_stmt)
    total = total_result.scalar() or 0

    result = await db.execute(data_stmt)
    rows = list(result.mappings().all())
    return rows, total
