"""Collection pipeline -- sort -> paginate over the in-memory deadline list

Also holds the page-scoped selection. Filtering happens server-side; quick
filters only change the FilterState sent with the next fetch.
"""

import math
from collections.abc import Iterable, Sequence
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .config import DEFAULT_PAGE_SIZE
from .models.deadline import Deadline
from .models.enums import SortDirection, SortField


class SortState(BaseModel):
    """Current sort column and direction"""

    model_config = ConfigDict(frozen=True)

    field: SortField = Field(default=SortField.DUE_DATE, description="Sort column")
    direction: SortDirection = Field(default=SortDirection.ASC, description="Sort direction")

    def toggle(self, field: SortField) -> "SortState":
        """Same field flips the direction; a new field restarts ascending"""
        field = SortField(field)
        if field == self.field:
            flipped = SortDirection.DESC if self.direction == SortDirection.ASC else SortDirection.ASC
            return SortState(field=field, direction=flipped)
        return SortState(field=field, direction=SortDirection.ASC)


class ProjectedPage(BaseModel):
    """One page of the sorted collection"""

    items: list[Deadline] = Field(default_factory=list, description="Deadlines on this page")
    total_count: int = Field(ge=0, description="Size of the whole collection")
    total_pages: int = Field(ge=1, description="Page count, at least 1")
    page: int = Field(ge=1, description="1-indexed page number")
    page_size: int = Field(ge=1, description="Items per page")

    @property
    def ids(self) -> list[str]:
        return [d.id for d in self.items]


def _sort_key(deadline: Deadline, field: SortField) -> tuple[bool, Any]:
    """(missing, value) so that missing optional values group together"""
    value = getattr(deadline, field.value)
    if value is None:
        return (True, "")
    if field == SortField.DUE_DATE:
        return (False, value.timestamp())
    return (False, str(value).lower())


def sort_deadlines(
    deadlines: Iterable[Deadline],
    field: SortField = SortField.DUE_DATE,
    direction: SortDirection = SortDirection.ASC,
) -> list[Deadline]:
    """Stable single-key sort

    Dates compare by epoch value, strings case-insensitively. Equal keys keep
    their input order in both directions.
    """
    field = SortField(field)
    return sorted(
        deadlines,
        key=lambda d: _sort_key(d, field),
        reverse=SortDirection(direction) == SortDirection.DESC,
    )


def total_pages(count: int, page_size: int) -> int:
    """Page count for a collection, never less than 1"""
    if page_size < 1:
        raise ValueError(f"page_size must be >= 1, got {page_size}")
    return max(1, math.ceil(count / page_size))


def paginate(items: Sequence[Deadline], page: int, page_size: int) -> list[Deadline]:
    """Slice one 1-indexed page; pages past the end are empty"""
    if page < 1:
        raise ValueError(f"page must be >= 1, got {page}")
    if page_size < 1:
        raise ValueError(f"page_size must be >= 1, got {page_size}")
    start = (page - 1) * page_size
    return list(items[start : start + page_size])


def project(
    deadlines: Iterable[Deadline],
    sort_field: SortField = SortField.DUE_DATE,
    sort_direction: SortDirection = SortDirection.ASC,
    page: int = 1,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> ProjectedPage:
    """Sort then paginate

    Returns:
        ProjectedPage with the page items, total count and page count
    """
    ordered = sort_deadlines(deadlines, sort_field, sort_direction)
    return ProjectedPage(
        items=paginate(ordered, page, page_size),
        total_count=len(ordered),
        total_pages=total_pages(len(ordered), page_size),
        page=page,
        page_size=page_size,
    )


class Selection(BaseModel):
    """Selected deadline IDs, independent of pagination

    "Select all" only ever touches the IDs of the current page.
    """

    model_config = ConfigDict(frozen=True)

    ids: frozenset[str] = Field(default_factory=frozenset, description="Selected IDs")

    def __contains__(self, deadline_id: str) -> bool:
        return deadline_id in self.ids

    def __len__(self) -> int:
        return len(self.ids)

    def toggle(self, deadline_id: str) -> "Selection":
        if deadline_id in self.ids:
            return Selection(ids=self.ids - {deadline_id})
        return Selection(ids=self.ids | {deadline_id})

    def all_selected(self, page_ids: Iterable[str]) -> bool:
        """True when the page is non-empty and every ID on it is selected"""
        page = set(page_ids)
        return bool(page) and page <= self.ids

    def toggle_page(self, page_ids: Iterable[str]) -> "Selection":
        """Deselect the page when fully selected, otherwise select all of it"""
        page = frozenset(page_ids)
        if self.all_selected(page):
            return Selection(ids=self.ids - page)
        return Selection(ids=self.ids | page)

    def restrict(self, ids: Iterable[str]) -> "Selection":
        """Keep only the IDs still present in ``ids``"""
        return Selection(ids=self.ids & frozenset(ids))

    def clear(self) -> "Selection":
        return Selection()

    def ordered(self, order: Iterable[str]) -> list[str]:
        """Selected IDs following the given ordering"""
        return [i for i in order if i in self.ids]
