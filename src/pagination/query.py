# This file applies pagination decisions to SQLAlchemy select statements.
# It discovers the sortable column catalog from the statement's FROM list, appends ORDER BY and
# LIMIT/OFFSET, and runs the count and row fetch through any object exposing `execute`.
# When the count is zero the row fetch is skipped and an empty page is returned.

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from typing import Any, Protocol, TypeVar

from sqlalchemy import distinct, func, select
from sqlalchemy.sql import Select
from sqlalchemy.sql.selectable import FromClause, Join

from src.common.logging import get_logger
from src.pagination.grouping import ChildKey, ChildMapper, ParentMapper, group_rows
from src.pagination.page import Page, build_page, compute_offset_limit, empty_page
from src.pagination.pageable import Pageable, SortDirective
from src.pagination.sort_resolver import SortableColumn, resolve_sort

LOGGER = get_logger()

T = TypeVar("T")
P = TypeVar("P")


class Executor(Protocol):
    """A SQLAlchemy `Connection` or `Session`."""

    def execute(self, statement: Any, *args: Any, **kwargs: Any) -> Any: ...


def _iter_tables(from_clause: FromClause) -> Iterator[FromClause]:
    if isinstance(from_clause, Join):
        yield from _iter_tables(from_clause.left)
        yield from _iter_tables(from_clause.right)
    else:
        yield from_clause


def sortable_columns(statement: Select) -> list[SortableColumn]:
    """List every column of every table (or alias) the statement selects from."""

    columns: list[SortableColumn] = []
    for from_clause in statement.get_final_froms():
        for table in _iter_tables(from_clause):
            table_name = getattr(table, "name", None)
            if table_name is None:
                continue
            columns.extend(
                SortableColumn(table=str(table_name), field=column.key, target=column)
                for column in table.columns
            )
    return columns


def apply_sort(statement: Select, sort: tuple[SortDirective, ...] | None) -> Select:
    if not sort:
        return statement
    refs = resolve_sort(sort, sortable_columns(statement))
    return statement.order_by(*(ref.order_by() for ref in refs))


def apply_pageable(statement: Select, pageable: Pageable | None) -> Select:
    """Order and window `statement`; a size of 0 leaves it unlimited."""

    if pageable is None:
        return statement

    statement = apply_sort(statement, pageable.sort)
    window = compute_offset_limit(pageable)
    if window.limit is not None:
        statement = statement.limit(window.limit).offset(window.offset)
    return statement


def count_rows(connection: Executor, statement: Select) -> int:
    subquery = statement.order_by(None).limit(None).offset(None).subquery()
    count_query = select(func.count()).select_from(subquery)
    return int(connection.execute(count_query).scalar_one())


def count_distinct(connection: Executor, statement: Select, key_column: str) -> int:
    subquery = statement.order_by(None).limit(None).offset(None).subquery()
    count_query = select(func.count(distinct(subquery.c[key_column])))
    return int(connection.execute(count_query).scalar_one())


def paginate(
    connection: Executor,
    statement: Select,
    pageable: Pageable | None,
    mapper: Callable[[Mapping[str, Any]], T],
) -> Page[T]:
    """Count, fetch and map one page of `statement`.

    Sort directives are resolved before anything is executed, so an invalid
    sort is reported even when the result set is empty.
    """

    paged_statement = apply_pageable(statement, pageable)

    total_elements = count_rows(connection, statement)
    if total_elements == 0:
        LOGGER.debug("count is zero; skipping row fetch")
        return empty_page(pageable)

    rows = connection.execute(paged_statement).mappings().all()
    LOGGER.debug("fetched %s of %s rows", len(rows), total_elements)
    return build_page([mapper(row) for row in rows], total_elements, pageable)


def paginate_grouped(
    connection: Executor,
    statement: Select,
    pageable: Pageable | None,
    *,
    parent_key: str,
    parent_mapper: ParentMapper[P],
    child_mappers: Mapping[str, ChildMapper] | None = None,
    child_keys: Mapping[str, ChildKey] | None = None,
) -> Page[P]:
    """Page a one-to-many join by parent.

    The total is the number of distinct parent keys, and the page window is
    applied to grouped parents rather than to flat rows, since one parent
    spans a variable number of rows.
    """

    ordered = apply_sort(statement, pageable.sort if pageable is not None else None)

    total_elements = count_distinct(connection, statement, parent_key)
    if total_elements == 0:
        LOGGER.debug("distinct parent count is zero; skipping row fetch")
        return empty_page(pageable)

    rows = connection.execute(ordered).mappings().all()
    parents = group_rows(rows, parent_key, parent_mapper, child_mappers, child_keys)

    window = compute_offset_limit(pageable)
    if window.limit is not None:
        parents = parents[window.offset : window.offset + window.limit]
    LOGGER.debug("grouped %s rows into %s parents", len(rows), len(parents))
    return build_page(parents, total_elements, pageable)
