# This file defines the caller-facing pagination error taxonomy.
# Every failure is a single exception type tagged with a kind, so handlers can map kinds to responses
# without walking a class hierarchy. Codes are stable and safe to expose to API clients.

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from src.pagination.pageable import SortDirective


class PaginationErrorKind(str, Enum):
    AMBIGUOUS_SORT_FIELD = "AMBIGUOUS_SORT_FIELD"
    INVALID_PAGEABLE_PAIR = "INVALID_PAGEABLE_PAIR"
    INVALID_ORDER_DIRECTION = "INVALID_ORDER_DIRECTION"
    INVALID_SORT_DIRECTIVE = "INVALID_SORT_DIRECTIVE"
    MISSING_SORT_DIRECTIVE = "MISSING_SORT_DIRECTIVE"


class PaginationError(Exception):
    """Input-validation failure raised while parsing or resolving a page request.

    These are never transient: callers should report them back to the client
    rather than retry.
    """

    def __init__(
        self,
        *,
        kind: PaginationErrorKind,
        description: str,
        reason: str | None = None,
        sort: SortDirective | None = None,
        direction: str | None = None,
    ) -> None:
        self.kind = kind
        self.description = description
        self.reason = reason
        self.sort = sort
        self.direction = direction
        super().__init__(description)

    @property
    def error_code(self) -> str:
        return self.kind.value

    def __str__(self) -> str:
        if self.reason:
            return f"{self.description} ({self.reason})"
        return self.description

    @classmethod
    def ambiguous_sort_field(cls, sort: SortDirective, reason: str) -> PaginationError:
        return cls(
            kind=PaginationErrorKind.AMBIGUOUS_SORT_FIELD,
            description=f"Detected ambiguous field: {sort.field}",
            reason=reason,
            sort=sort,
        )

    @classmethod
    def invalid_pageable_pair(cls, reason: str | None = None) -> PaginationError:
        return cls(
            kind=PaginationErrorKind.INVALID_PAGEABLE_PAIR,
            description="Page attributes mismatch. Expected both 'page' and 'size', or none of them.",
            reason=reason,
        )

    @classmethod
    def invalid_order_direction(cls, direction: str, reason: str | None = None) -> PaginationError:
        return cls(
            kind=PaginationErrorKind.INVALID_ORDER_DIRECTION,
            description=f"Ordering sort direction is invalid. Received: '{direction}'",
            reason=reason,
            direction=direction,
        )

    @classmethod
    def invalid_sort_directive(cls, sort: SortDirective, reason: str) -> PaginationError:
        return cls(
            kind=PaginationErrorKind.INVALID_SORT_DIRECTIVE,
            description=f"Unexpected sort directive: {sort}",
            reason=reason,
            sort=sort,
        )

    @classmethod
    def missing_sort_directive(cls, reason: str | None = None) -> PaginationError:
        return cls(
            kind=PaginationErrorKind.MISSING_SORT_DIRECTIVE,
            description="Must specify a sort field name.",
            reason=reason,
        )


class MalformedRowError(LookupError):
    """A fetched row lacks a column the caller promised it would contain."""
