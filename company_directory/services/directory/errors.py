"""Shared error classes for the directory cache and client session."""

from __future__ import annotations


class DirectoryError(RuntimeError):
    """Base exception raised by the directory services."""

    def __init__(self, message: str, code: str = "DIRECTORY_ERROR") -> None:
        super().__init__(message)
        self.code = code


class DirectoryUnavailableError(DirectoryError):
    """Raised when not even the fallback dataset can be produced."""

    def __init__(self, message: str = "Directory data is unavailable") -> None:
        super().__init__(message, code="500_DIRECTORY_UNAVAILABLE")


class DirectoryApiError(DirectoryError):
    """Base error for talking to the directory HTTP API."""


class DirectoryConnectionError(DirectoryApiError):
    """Raised when the directory API cannot be reached or answers with a non-2xx status."""

    def __init__(self, message: str = "Unable to reach the directory service") -> None:
        super().__init__(message, code="DIRECTORY_CONNECTION")


class DirectoryResponseError(DirectoryApiError):
    """Raised when the directory API answers with `success: false`."""

    def __init__(self, message: str = "Directory service returned an unsuccessful response") -> None:
        super().__init__(message, code="DIRECTORY_UNSUCCESSFUL")
