"""Client-side browsing session over the directory API."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Protocol

from company_directory.clients.directory_api import CompanyListing
from company_directory.models.company import CompanyRecord
from company_directory.services.directory.errors import (
    DirectoryApiError,
    DirectoryConnectionError,
    DirectoryResponseError,
)
from company_directory.services.directory.view_model import (
    DirectoryPage,
    SortDirection,
    SortKey,
    ViewState,
    apply_view,
    clamp_page,
    distinct_industries,
    distinct_locations,
)

logger = logging.getLogger(__name__)

CONNECTION_ERROR_MESSAGE = (
    "Unable to load companies. Make sure the directory service is running and reachable."
)


class DirectoryApi(Protocol):
    def list_companies(self) -> CompanyListing:
        ...

    def refresh(self) -> None:
        ...


class LoadStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    CONNECTION_ERROR = "connection_error"
    SERVICE_ERROR = "service_error"


class ViewMode(str, Enum):
    TABLE = "table"
    CARD = "card"


class DirectorySession:
    """Holds the fetched records and the user's view state for one session.

    Records are replaced only by a successful load. Retries happen only when
    the caller asks for them.
    """

    def __init__(self, api: DirectoryApi, *, state: ViewState | None = None) -> None:
        self._api = api
        self.state = state or ViewState()
        self.view_mode = ViewMode.TABLE
        self.status = LoadStatus.IDLE
        self.error: str | None = None
        self.source: str | None = None
        self.refreshing = False
        self._records: tuple[CompanyRecord, ...] = ()
        self._locations: list[str] = []
        self._industries: list[str] = []

    @property
    def records(self) -> tuple[CompanyRecord, ...]:
        return self._records

    @property
    def locations(self) -> list[str]:
        return self._locations

    @property
    def industries(self) -> list[str]:
        return self._industries

    def load(self) -> LoadStatus:
        self.status = LoadStatus.LOADING
        self.error = None
        try:
            listing = self._api.list_companies()
        except DirectoryConnectionError as exc:
            logger.error("directory.session.connection_error", extra={"error": str(exc)})
            self.status = LoadStatus.CONNECTION_ERROR
            self.error = CONNECTION_ERROR_MESSAGE
            return self.status
        except DirectoryResponseError as exc:
            logger.error("directory.session.service_error", extra={"error": str(exc)})
            self.status = LoadStatus.SERVICE_ERROR
            self.error = str(exc)
            return self.status

        self._set_records(listing.data)
        self.source = listing.source
        self.status = LoadStatus.READY
        logger.info(
            "directory.session.loaded",
            extra={"count": len(self._records), "source": listing.source},
        )
        return self.status

    def retry(self) -> LoadStatus:
        return self.load()

    def refresh(self) -> LoadStatus:
        """Ask the service to refetch, then reload the list."""
        self.refreshing = True
        try:
            try:
                self._api.refresh()
            except DirectoryApiError as exc:
                logger.warning("directory.session.refresh_failed", extra={"error": str(exc)})
            return self.load()
        finally:
            self.refreshing = False

    def current_page(self) -> DirectoryPage:
        return apply_view(self._records, self.state)

    def set_search(self, term: str) -> None:
        self.state = self.state.with_search(term)

    def set_location_filter(self, location: str) -> None:
        self.state = self.state.with_location_filter(location)

    def set_industry_filter(self, industry: str) -> None:
        self.state = self.state.with_industry_filter(industry)

    def toggle_sort(self, key: SortKey | str) -> None:
        self.state = self.state.toggle_sort(key)

    def set_sort(self, key: SortKey | str, direction: SortDirection | str) -> None:
        self.state = self.state.with_sort(key, direction)

    def go_to_page(self, page: int) -> None:
        pages = self.current_page().total_pages
        self.state = self.state.with_page(clamp_page(page, pages))

    def next_page(self) -> None:
        self.go_to_page(self.state.page + 1)

    def previous_page(self) -> None:
        self.go_to_page(self.state.page - 1)

    def reset_filters(self) -> None:
        self.state = self.state.reset()

    def set_view_mode(self, mode: ViewMode | str) -> None:
        self.view_mode = ViewMode(mode)

    def _set_records(self, records: list[CompanyRecord]) -> None:
        self._records = tuple(records)
        self._locations = distinct_locations(self._records)
        self._industries = distinct_industries(self._records)
