# This file reads pagination query parameters for FastAPI routes.
# Routes declare `PageableDep` and receive a validated Pageable, or None when the request
# asked for neither paging nor sorting. Parameter names come from settings.

from __future__ import annotations

import re
from typing import Annotated

from fastapi import Depends, Request
from pydantic import ValidationError

from src.api.error_handlers import APIError
from src.common.settings import get_settings
from src.pagination.pageable import Pageable
from src.pagination.sort_parser import parse_pageable

_INT_RE = re.compile(r"[+-]?[0-9]+")
_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1


def _int_or_none(raw: str | None) -> int | None:
    # Plain 32-bit integers only; "1_000" or out-of-range values count as absent.
    if raw is None or not _INT_RE.fullmatch(raw):
        return None
    value = int(raw)
    if value < _INT_MIN or value > _INT_MAX:
        return None
    return value


def get_pageable(request: Request) -> Pageable | None:
    """Build the request's Pageable from `page`, `size` and repeatable `sort` parameters.

    Values that are not integers count as absent, so `page=abc&size=10` is a
    page/size mismatch rather than a type error.
    """

    settings = get_settings()
    params = request.query_params

    try:
        return parse_pageable(
            _int_or_none(params.get(settings.PAGINATION_PAGE_PARAM)),
            _int_or_none(params.get(settings.PAGINATION_SIZE_PARAM)),
            params.getlist(settings.PAGINATION_SORT_PARAM),
        )
    except ValidationError as exc:
        raise APIError(
            status_code=400,
            error_code="INVALID_QUERY_PARAM",
            message="Page index and page size must be >= 0.",
            details=[str(error["msg"]) for error in exc.errors()],
        ) from exc


PageableDep = Annotated[Pageable | None, Depends(get_pageable)]
