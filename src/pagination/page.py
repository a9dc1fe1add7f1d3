# This file computes limit/offset windows and the metadata attached to every page of results.
# Metadata depends only on the content length, the total count and the originating Pageable,
# so the same numbers always produce the same flags.

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Generic, NamedTuple, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from src.pagination.pageable import Pageable, SortDirective

T = TypeVar("T")
U = TypeVar("U")


class PageWindow(NamedTuple):
    offset: int
    limit: int | None

    @property
    def is_unbounded(self) -> bool:
        return self.limit is None


def compute_offset_limit(pageable: Pageable | None) -> PageWindow:
    """Return the row window for a request; `limit=None` means fetch everything."""

    if pageable is None or pageable.size == 0:
        return PageWindow(offset=0, limit=None)
    return PageWindow(offset=pageable.page * pageable.size, limit=pageable.size)


class PageDetails(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    total_pages: int = Field(ge=0)
    page_index: int = Field(ge=0)
    total_elements: int = Field(ge=0)
    elements_per_page: int = Field(ge=0)
    elements_in_page: int = Field(ge=0)
    is_first: bool
    is_last: bool
    has_next: bool
    has_previous: bool
    is_overflow: bool
    sort: tuple[SortDirective, ...] | None = None


class Page(BaseModel, Generic[T]):
    model_config = ConfigDict(frozen=True)

    details: PageDetails
    content: tuple[T, ...]

    def map(self, transform: Callable[[T], U]) -> Page[U]:
        """Transform each element while keeping the page metadata."""

        return Page(details=self.details, content=tuple(transform(item) for item in self.content))


def _total_pages(*, total_elements: int, page_size: int) -> int:
    if total_elements <= 0 or page_size <= 0:
        return 0
    return max(1, ((total_elements - 1) // page_size) + 1)


def build_page(content: Sequence[T], total_elements: int, pageable: Pageable | None) -> Page[T]:
    """Build a page from a fetched slice and the separately counted total.

    An unbounded request (no pageable, or `size == 0`) reports the whole set
    as a single page. A page index at or past the last page is flagged as
    overflow rather than rejected.
    """

    page_size = pageable.size if pageable is not None and pageable.size > 0 else total_elements
    total_pages = _total_pages(total_elements=total_elements, page_size=page_size)
    page_index = pageable.page if pageable is not None else 0

    details = PageDetails(
        total_pages=total_pages,
        page_index=page_index,
        total_elements=total_elements,
        elements_per_page=page_size,
        elements_in_page=len(content),
        is_first=total_pages == 0 or page_index == 0,
        is_last=total_pages == 0 or page_index >= total_pages - 1,
        has_next=total_pages > 0 and page_index < total_pages - 1,
        has_previous=total_pages > 0 and page_index > 0,
        is_overflow=page_index >= total_pages if total_pages > 0 else page_index > 0,
        sort=pageable.sort if pageable is not None else None,
    )
    return Page(details=details, content=tuple(content))


def empty_page(pageable: Pageable | None) -> Page[T]:
    """Page for a zero count; lets callers skip the row fetch entirely."""

    return build_page([], 0, pageable)
