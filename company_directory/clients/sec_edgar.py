"""Client for the SEC EDGAR company tickers registry."""

from __future__ import annotations

from typing import Any

import httpx

from company_directory.config import settings


class RegistryError(RuntimeError):
    """Base error for registry client failures."""

    def __init__(self, message: str, code: str = "REGISTRY_ERROR") -> None:
        super().__init__(message)
        self.code = code


class RegistryTimeoutError(RegistryError):
    """Raised when the registry request times out."""

    def __init__(self, message: str = "Registry request timed out") -> None:
        super().__init__(message, code="REGISTRY_TIMEOUT")


class RegistryStatusError(RegistryError):
    """Raised when the registry answers with a non-success status."""

    def __init__(self, status_code: int) -> None:
        super().__init__(
            f"Registry request failed: {status_code}",
            code=f"REGISTRY_HTTP_{status_code}",
        )
        self.status_code = status_code


class RegistrySchemaError(RegistryError):
    """Raised when the registry response schema is not as expected."""

    def __init__(self, message: str = "Unexpected registry response schema") -> None:
        super().__init__(message, code="REGISTRY_SCHEMA_ERR")


class SecEdgarClient:
    """Minimal client for `company_tickers.json`."""

    def __init__(
        self,
        *,
        url: str = settings.registry_url,
        user_agent: str = settings.registry_user_agent,
        timeout: float = settings.registry_timeout_seconds,
        http_client: httpx.Client | None = None,
    ) -> None:
        self._url = url
        self._headers = {"User-Agent": user_agent, "Accept": "application/json"}
        self._owns_http_client = http_client is None
        self._http = http_client or httpx.Client(timeout=timeout)

    @classmethod
    def from_settings(cls) -> "SecEdgarClient":
        return cls(
            url=settings.registry_url,
            user_agent=settings.registry_user_agent,
            timeout=settings.registry_timeout_seconds,
        )

    def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._owns_http_client:
            self._http.close()

    def fetch_entries(self, *, limit: int | None = None) -> list[dict[str, Any]]:
        """Return registry entries in source order, each with `title` and `ticker`."""
        if limit is not None and limit <= 0:
            raise ValueError("limit must be a positive integer.")

        try:
            response = self._http.get(self._url, headers=self._headers)
        except httpx.TimeoutException as exc:
            raise RegistryTimeoutError() from exc
        except httpx.HTTPError as exc:
            raise RegistryError(f"HTTP error calling registry: {exc}") from exc

        if response.status_code in (408, 504):
            raise RegistryTimeoutError()
        if response.status_code >= 400:
            raise RegistryStatusError(response.status_code)

        try:
            data = response.json()
        except ValueError as exc:
            raise RegistrySchemaError("Failed to decode registry response JSON.") from exc

        # Keyed by position ("0", "1", ...) in the published file.
        if isinstance(data, dict):
            entries = list(data.values())
        elif isinstance(data, list):
            entries = data
        else:
            raise RegistrySchemaError("Registry payload must be a JSON object or array.")

        if limit is not None:
            entries = entries[:limit]

        for entry in entries:
            if not isinstance(entry, dict):
                raise RegistrySchemaError("Registry entries must be JSON objects.")
            title = entry.get("title")
            if not isinstance(title, str) or not title.strip():
                raise RegistrySchemaError("Registry entry is missing `title`.")
            ticker = entry.get("ticker")
            if ticker is not None and not isinstance(ticker, str):
                raise RegistrySchemaError("Registry entry `ticker` must be a string.")

        return entries

    def __enter__(self) -> "SecEdgarClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
