# This file converts loosely typed request input into the strict Pageable model.
# Sort entries use the query-string form `[table.]field[,direction]`, with `asc` as the default direction.
# It is the only place raw page/size/sort values are interpreted.

from __future__ import annotations

from collections.abc import Iterable

from src.common.logging import get_logger
from src.pagination.errors import PaginationError
from src.pagination.pageable import Pageable, SortDirection, SortDirective

LOGGER = get_logger()


def _parse_direction(token: str | None) -> SortDirection:
    if token is None or not token.strip():
        return SortDirection.ASC
    try:
        return SortDirection(token.strip().upper())
    except ValueError as exc:
        raise PaginationError.invalid_order_direction(
            token, reason="Expected 'asc' or 'desc'."
        ) from exc


def parse_sort_directive(raw: str) -> SortDirective:
    """Parse one `[table.]field[,direction]` entry."""

    field_spec, _, direction_token = raw.partition(",")

    table, _, field = field_spec.strip().rpartition(".")
    field = field.strip()
    table = table.strip() or None
    if not field:
        raise PaginationError.missing_sort_directive(reason=f"Sort entry {raw!r} has no field name.")

    return SortDirective(table=table, field=field, direction=_parse_direction(direction_token))


def parse_sort_directives(raw_directives: Iterable[str]) -> list[SortDirective]:
    """Parse sort entries in order; the first entry becomes the primary sort key."""

    return [parse_sort_directive(raw) for raw in raw_directives]


def parse_pageable(
    page: int | None,
    size: int | None,
    sort: Iterable[str] | None = None,
) -> Pageable | None:
    """Build a Pageable from request values, or None when nothing was requested.

    `page` and `size` must be supplied together. A sort-only request pages
    nothing (`page=0`, `size=0`) and only reorders. Negative values fail
    Pageable validation with `pydantic.ValidationError`.
    """

    if (page is None) != (size is None):
        LOGGER.info("rejected pageable page=%s size=%s", page, size)
        raise PaginationError.invalid_pageable_pair(
            reason=f"Received page={page!r} and size={size!r}."
        )

    raw_sort = list(sort or [])
    if page is None and not raw_sort:
        return None

    directives = parse_sort_directives(raw_sort)
    return Pageable(
        page=page if page is not None else 0,
        size=size if size is not None else 0,
        sort=tuple(directives) or None,
    )
