# This file tests resolution of sort directives against a joined-table column catalog.
# It covers the ambiguity rule, table qualification, unknown fields and order preservation.

from __future__ import annotations

import logging

import pytest
from sqlalchemy import Column, Integer, MetaData, String, Table

from src.pagination.errors import PaginationError, PaginationErrorKind
from src.pagination.pageable import SortDirection, SortDirective
from src.pagination.sort_resolver import SortableColumn, resolve_sort

CATALOG = [
    SortableColumn("employee", "id"),
    SortableColumn("employee", "firstName"),
    SortableColumn("employee", "createdAt"),
    SortableColumn("contact", "id"),
    SortableColumn("contact", "email"),
    SortableColumn("contact", "createdAt"),
]


def test_unique_unqualified_field_resolves() -> None:
    refs = resolve_sort([SortDirective(field="firstName")], CATALOG)

    assert len(refs) == 1
    assert refs[0].table == "employee"
    assert refs[0].field == "firstName"
    assert refs[0].direction is SortDirection.ASC


def test_field_in_both_tables_is_ambiguous() -> None:
    directive = SortDirective(field="createdAt", direction=SortDirection.DESC)

    with pytest.raises(PaginationError) as exc_info:
        resolve_sort([directive], CATALOG)

    error = exc_info.value
    assert error.kind is PaginationErrorKind.AMBIGUOUS_SORT_FIELD
    assert error.sort == directive
    assert "employee" in error.reason
    assert "contact" in error.reason


@pytest.mark.parametrize("table", ["employee", "contact"])
def test_qualified_field_selects_that_table(table: str) -> None:
    refs = resolve_sort([SortDirective(table=table, field="createdAt")], CATALOG)

    assert refs[0].table == table


def test_qualifying_a_unique_field_also_works() -> None:
    refs = resolve_sort([SortDirective(table="contact", field="email")], CATALOG)

    assert (refs[0].table, refs[0].field) == ("contact", "email")


def test_unknown_field_is_invalid() -> None:
    with pytest.raises(PaginationError) as exc_info:
        resolve_sort([SortDirective(field="salary")], CATALOG)

    assert exc_info.value.kind is PaginationErrorKind.INVALID_SORT_DIRECTIVE


def test_field_missing_from_named_table_is_invalid() -> None:
    with pytest.raises(PaginationError) as exc_info:
        resolve_sort([SortDirective(table="employee", field="email")], CATALOG)

    assert exc_info.value.kind is PaginationErrorKind.INVALID_SORT_DIRECTIVE
    assert "employee" in exc_info.value.reason


def test_duplicate_catalog_entry_for_qualified_field_is_invalid() -> None:
    catalog = [*CATALOG, SortableColumn("contact", "email")]

    with pytest.raises(PaginationError) as exc_info:
        resolve_sort([SortDirective(table="contact", field="email")], catalog)

    assert exc_info.value.kind is PaginationErrorKind.INVALID_SORT_DIRECTIVE


def test_field_match_is_case_sensitive() -> None:
    with pytest.raises(PaginationError):
        resolve_sort([SortDirective(field="firstname")], CATALOG)


def test_order_is_preserved_and_plain_pairs_are_accepted() -> None:
    directives = [
        SortDirective(field="email", direction=SortDirection.DESC),
        SortDirective(table="employee", field="id"),
        SortDirective(field="firstName"),
    ]

    refs = resolve_sort(directives, [(column.table, column.field) for column in CATALOG])

    assert [(ref.table, ref.field, ref.direction) for ref in refs] == [
        ("contact", "email", SortDirection.DESC),
        ("employee", "id", SortDirection.ASC),
        ("employee", "firstName", SortDirection.ASC),
    ]


def test_first_bad_directive_fails_whole_resolution() -> None:
    with pytest.raises(PaginationError) as exc_info:
        resolve_sort([SortDirective(field="email"), SortDirective(field="id")], CATALOG)

    assert exc_info.value.kind is PaginationErrorKind.AMBIGUOUS_SORT_FIELD


def test_no_directives_resolve_to_nothing() -> None:
    assert resolve_sort(None, CATALOG) == []
    assert resolve_sort([], CATALOG) == []


def test_order_by_uses_column_target() -> None:
    table = Table("employee", MetaData(), Column("id", Integer), Column("name", String))
    catalog = [SortableColumn("employee", column.key, column) for column in table.columns]

    refs = resolve_sort([SortDirective(field="name", direction=SortDirection.DESC)], catalog)

    assert str(refs[0].order_by()) == "employee.name DESC"


def test_order_by_without_target_is_rejected() -> None:
    refs = resolve_sort([SortDirective(field="email")], CATALOG)

    with pytest.raises(ValueError):
        refs[0].order_by()


def test_rejection_is_logged_under_pagination_namespace(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.INFO, logger="pagination"):
        with pytest.raises(PaginationError):
            resolve_sort((SortDirective(field="createdAt"),), CATALOG)

    assert [record.name for record in caplog.records] == ["pagination"]
    assert "createdAt" in caplog.records[0].getMessage()
