# This file matches sort directives against the columns visible in a query.
# Resolution fails closed: an unqualified field present in several joined tables is rejected
# instead of silently picking one of them, and directive order is always preserved.

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, NamedTuple

from src.common.logging import get_logger
from src.pagination.errors import PaginationError
from src.pagination.pageable import SortDirection, SortDirective

LOGGER = get_logger()


class SortableColumn(NamedTuple):
    """A column in scope for ordering; `target` is the engine-specific column object."""

    table: str
    field: str
    target: Any = None


@dataclass(frozen=True)
class SortableColumnRef:
    """A directive resolved to exactly one column. Built only by `resolve_sort`."""

    column: SortableColumn
    direction: SortDirection

    @property
    def table(self) -> str:
        return self.column.table

    @property
    def field(self) -> str:
        return self.column.field

    def order_by(self) -> Any:
        """Return an ORDER BY clause for the column's SQLAlchemy target."""

        if self.column.target is None:
            raise ValueError(f"Column {self.table}.{self.field} has no query target to order by.")
        if self.direction is SortDirection.DESC:
            return self.column.target.desc()
        return self.column.target.asc()


def _as_column(entry: SortableColumn | tuple[Any, ...]) -> SortableColumn:
    if isinstance(entry, SortableColumn):
        return entry
    return SortableColumn(*entry)


def _resolve_one(directive: SortDirective, catalog: list[SortableColumn]) -> SortableColumn:
    candidates = [column for column in catalog if column.field == directive.field]

    if directive.table is not None:
        matches = [column for column in candidates if column.table == directive.table]
        if not matches:
            raise PaginationError.invalid_sort_directive(
                directive,
                reason=f"Field '{directive.field}' not found in table '{directive.table}'.",
            )
        if len(matches) > 1:
            raise PaginationError.invalid_sort_directive(
                directive,
                reason=f"Field '{directive.field}' matches {len(matches)} columns in table '{directive.table}'.",
            )
        return matches[0]

    if not candidates:
        raise PaginationError.invalid_sort_directive(
            directive,
            reason=f"Field '{directive.field}' not found in any queried table.",
        )
    if len(candidates) > 1:
        tables = ", ".join(column.table for column in candidates)
        raise PaginationError.ambiguous_sort_field(
            directive,
            reason=f"Field '{directive.field}' exists in tables: {tables}. Qualify it as 'table.field'.",
        )
    return candidates[0]


def resolve_sort(
    directives: Iterable[SortDirective] | None,
    available_columns: Iterable[SortableColumn | tuple[Any, ...]],
) -> list[SortableColumnRef]:
    """Resolve directives, in order, against the complete column catalog of the query."""

    catalog = [_as_column(entry) for entry in available_columns]
    resolved: list[SortableColumnRef] = []
    for directive in directives or ():
        try:
            column = _resolve_one(directive, catalog)
        except PaginationError as exc:
            LOGGER.info("rejected sort directive %s: %s", directive, exc.reason)
            raise
        resolved.append(SortableColumnRef(column=column, direction=directive.direction))

    LOGGER.debug(
        "resolved sort %s",
        [f"{ref.table}.{ref.field} {ref.direction.value}" for ref in resolved],
    )
    return resolved
