# This file defines the canonical page request shape used by every pagination helper.
# Instances are immutable and validated on construction, so downstream code never re-checks bounds.

from __future__ import annotations

from enum import Enum
from typing import Final

from pydantic import BaseModel, ConfigDict, Field, field_validator

MAX_PAGE_VALUE: Final[int] = 2**31 - 1


class SortDirection(str, Enum):
    ASC = "ASC"
    DESC = "DESC"


class SortDirective(BaseModel):
    """One sort key; `table` disambiguates fields shared by joined tables."""

    model_config = ConfigDict(frozen=True)

    table: str | None = None
    field: str
    direction: SortDirection = SortDirection.ASC

    @field_validator("field")
    @classmethod
    def validate_field(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("The sorting field name must not be blank.")
        return value

    @field_validator("table")
    @classmethod
    def validate_table(cls, value: str | None) -> str | None:
        if value is not None and not value.strip():
            raise ValueError("The table name must not be an empty string if provided.")
        return value

    def __str__(self) -> str:
        qualified = f"{self.table}.{self.field}" if self.table else self.field
        return f"{qualified},{self.direction.value.lower()}"


class Pageable(BaseModel):
    """Page index (0-based), page size (0 means all elements) and ordered sort keys."""

    model_config = ConfigDict(frozen=True)

    page: int = Field(ge=0, le=MAX_PAGE_VALUE)
    size: int = Field(ge=0, le=MAX_PAGE_VALUE)
    sort: tuple[SortDirective, ...] | None = None

    @property
    def is_unbounded(self) -> bool:
        return self.size == 0
