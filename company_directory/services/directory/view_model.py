"""Search, filter, sort and paginate a fetched company list.

Everything here is a pure function of `(records, ViewState)`. The state
transitions on `ViewState` return new states and send the user back to the
first page whenever the filtered or sorted set changes.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field, replace
from enum import Enum

from company_directory.config import settings
from company_directory.models.company import CompanyRecord


class SortKey(str, Enum):
    NAME = "name"
    LOCATION = "location"
    INDUSTRY = "industry"
    EMPLOYEES = "employees"
    FOUNDED = "founded"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"

    def flipped(self) -> "SortDirection":
        return SortDirection.DESC if self is SortDirection.ASC else SortDirection.ASC


_STRING_KEYS = frozenset({SortKey.NAME, SortKey.LOCATION, SortKey.INDUSTRY})


@dataclass(frozen=True)
class ViewState:
    """User-controlled parameters for one browsing session."""

    search_term: str = ""
    location_filter: str = ""
    industry_filter: str = ""
    sort_key: SortKey = SortKey.NAME
    sort_direction: SortDirection = SortDirection.ASC
    page: int = 1
    page_size: int = field(default_factory=lambda: settings.page_size)

    def __post_init__(self) -> None:
        if self.page_size <= 0:
            raise ValueError("page_size must be a positive integer.")
        if self.page < 1:
            object.__setattr__(self, "page", 1)
        object.__setattr__(self, "sort_key", SortKey(self.sort_key))
        object.__setattr__(self, "sort_direction", SortDirection(self.sort_direction))

    def with_search(self, term: str) -> "ViewState":
        return replace(self, search_term=term, page=1)

    def with_location_filter(self, location: str) -> "ViewState":
        return replace(self, location_filter=location, page=1)

    def with_industry_filter(self, industry: str) -> "ViewState":
        return replace(self, industry_filter=industry, page=1)

    def with_sort(self, key: SortKey | str, direction: SortDirection | str) -> "ViewState":
        return replace(self, sort_key=SortKey(key), sort_direction=SortDirection(direction), page=1)

    def toggle_sort(self, key: SortKey | str) -> "ViewState":
        """Clicking the active column flips direction; a new column starts ascending."""
        key = SortKey(key)
        if key is self.sort_key:
            return self.with_sort(key, self.sort_direction.flipped())
        return self.with_sort(key, SortDirection.ASC)

    def with_page(self, page: int) -> "ViewState":
        return replace(self, page=page)

    def reset(self) -> "ViewState":
        return ViewState(page_size=self.page_size)


@dataclass(frozen=True)
class DirectoryPage:
    """Visible slice of the filtered and sorted records."""

    records: tuple[CompanyRecord, ...]
    page: int
    page_size: int
    total_count: int
    total_pages: int

    @property
    def first_index(self) -> int:
        """1-based position of the first visible record, 0 when empty."""
        if not self.records:
            return 0
        return (self.page - 1) * self.page_size + 1

    @property
    def last_index(self) -> int:
        if not self.records:
            return 0
        return self.first_index + len(self.records) - 1

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    def summary(self) -> str:
        return f"Showing {self.first_index} to {self.last_index} of {self.total_count} companies"


def matches(record: CompanyRecord, state: ViewState) -> bool:
    term = state.search_term.casefold()
    if term and term not in record.name.casefold() and term not in record.location.casefold():
        return False
    if state.location_filter and record.location != state.location_filter:
        return False
    if state.industry_filter and record.industry != state.industry_filter:
        return False
    return True


def filter_records(records: Iterable[CompanyRecord], state: ViewState) -> list[CompanyRecord]:
    return [record for record in records if matches(record, state)]


def sort_records(
    records: Iterable[CompanyRecord],
    key: SortKey | str,
    direction: SortDirection | str = SortDirection.ASC,
) -> list[CompanyRecord]:
    """Stable sort; equal keys keep their incoming order in both directions."""
    key = SortKey(key)
    if key in _STRING_KEYS:
        sort_value = lambda record: getattr(record, key.value).casefold()  # noqa: E731
    else:
        sort_value = lambda record: getattr(record, key.value)  # noqa: E731
    return sorted(records, key=sort_value, reverse=SortDirection(direction) is SortDirection.DESC)


def total_pages(count: int, page_size: int) -> int:
    if count <= 0:
        return 0
    return math.ceil(count / page_size)


def clamp_page(page: int, pages: int) -> int:
    return min(max(page, 1), max(pages, 1))


def paginate(records: Sequence[CompanyRecord], page: int, page_size: int) -> DirectoryPage:
    pages = total_pages(len(records), page_size)
    current = clamp_page(page, pages)
    start = (current - 1) * page_size
    return DirectoryPage(
        records=tuple(records[start : start + page_size]),
        page=current,
        page_size=page_size,
        total_count=len(records),
        total_pages=pages,
    )


def filtered_sorted(records: Iterable[CompanyRecord], state: ViewState) -> list[CompanyRecord]:
    return sort_records(filter_records(records, state), state.sort_key, state.sort_direction)


def apply_view(records: Iterable[CompanyRecord], state: ViewState) -> DirectoryPage:
    """Project the full record list onto the page the user is looking at."""
    return paginate(filtered_sorted(records, state), state.page, state.page_size)


def distinct_locations(records: Iterable[CompanyRecord]) -> list[str]:
    return sorted({record.location for record in records})


def distinct_industries(records: Iterable[CompanyRecord]) -> list[str]:
    return sorted({record.industry for record in records})
