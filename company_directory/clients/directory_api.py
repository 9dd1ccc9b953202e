"""Client for the directory service's own JSON API."""

from __future__ import annotations

from typing import Any

import httpx
from pydantic import BaseModel, ValidationError

from company_directory.config import settings
from company_directory.models.company import CompanyRecord
from company_directory.services.directory.errors import (
    DirectoryConnectionError,
    DirectoryResponseError,
)


class CompanyListing(BaseModel):
    """Decoded `GET /api/companies` payload."""

    data: list[CompanyRecord]
    count: int
    source: str | None = None
    origin: str | None = None


class DirectoryApiClient:
    """Talks to `/api/companies` the way the browser client does."""

    def __init__(
        self,
        *,
        base_url: str = settings.directory_api_base_url,
        timeout: float = settings.directory_api_timeout_seconds,
        http_client: httpx.Client | None = None,
    ) -> None:
        self._owns_http_client = http_client is None
        self._http = http_client or httpx.Client(base_url=base_url.rstrip("/"), timeout=timeout)

    def close(self) -> None:
        if self._owns_http_client:
            self._http.close()

    def list_companies(self) -> CompanyListing:
        payload = self._request("GET", "/api/companies")
        try:
            return CompanyListing.model_validate(payload)
        except ValidationError as exc:
            raise DirectoryConnectionError(f"Malformed company listing: {exc}") from exc

    def refresh(self) -> None:
        self._request("POST", "/api/companies/refresh")

    def _request(self, method: str, path: str) -> dict[str, Any]:
        try:
            response = self._http.request(method, path)
        except httpx.HTTPError as exc:
            raise DirectoryConnectionError(f"Unable to reach directory service: {exc}") from exc

        try:
            payload = response.json()
        except ValueError as exc:
            raise DirectoryConnectionError(
                f"Directory service responded with {response.status_code} and no JSON body"
            ) from exc

        # A failed request that still carries the service envelope is a service error.
        if isinstance(payload, dict) and payload.get("success") is False:
            raise DirectoryResponseError(payload.get("message") or "Directory request failed")
        if response.status_code >= 400 or not isinstance(payload, dict):
            raise DirectoryConnectionError(
                f"Directory service responded with {response.status_code}"
            )
        if not payload.get("success"):
            raise DirectoryResponseError()
        return payload

    def __enter__(self) -> "DirectoryApiClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
