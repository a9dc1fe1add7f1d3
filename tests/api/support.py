# This file provides shared helpers for API endpoint tests.
# It builds a small FastAPI app whose route reads a Pageable from the query string
# and pages an in-memory employee list, so no database is needed.

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from fastapi import FastAPI, HTTPException, Query
from fastapi.testclient import TestClient

from src.api.error_handlers import register_error_handlers
from src.api.pageable_request import PageableDep
from src.pagination.page import build_page, compute_offset_limit
from src.pagination.pageable import SortDirection
from src.pagination.sort_resolver import SortableColumn, resolve_sort

EMPLOYEES: list[dict[str, Any]] = [
    {"id": 1, "name": "Ada", "created_at": 30},
    {"id": 2, "name": "Bo", "created_at": 10},
    {"id": 3, "name": "Cy", "created_at": 20},
]

CATALOG = [
    SortableColumn("employee", "id"),
    SortableColumn("employee", "name"),
    SortableColumn("employee", "created_at"),
    SortableColumn("contact", "created_at"),
]


def build_test_app() -> FastAPI:
    """Create an app with one paged route over EMPLOYEES."""

    app = FastAPI()
    register_error_handlers(app)

    @app.get("/employees")
    def list_employees(pageable: PageableDep) -> dict[str, Any]:
        rows = list(EMPLOYEES)
        sort = pageable.sort if pageable is not None else None
        for ref in reversed(resolve_sort(sort, CATALOG)):
            rows.sort(key=lambda row: row[ref.field], reverse=ref.direction is SortDirection.DESC)

        window = compute_offset_limit(pageable)
        content = rows[window.offset :] if window.limit is None else rows[window.offset : window.offset + window.limit]
        page = build_page(content, len(EMPLOYEES), pageable)
        return {
            "requested": pageable.model_dump(mode="json") if pageable is not None else None,
            "page": page.model_dump(mode="json", by_alias=True),
        }

    @app.get("/employees/{employee_id}")
    def get_employee(employee_id: int) -> dict[str, Any]:
        for row in EMPLOYEES:
            if row["id"] == employee_id:
                return row
        raise HTTPException(status_code=404, detail=f"Employee {employee_id} not found.")

    @app.get("/reports/headcount")
    def headcount(year: int = Query()) -> dict[str, Any]:
        raise LookupError(f"No headcount snapshot for {year}.")

    return app


@contextmanager
def api_test_client(*, raise_server_exceptions: bool = True) -> Iterator[TestClient]:
    """Yield a TestClient for the paged test app."""

    with TestClient(build_test_app(), raise_server_exceptions=raise_server_exceptions) as client:
        yield client
