"""API endpoints serving the cached company directory."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Literal

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from company_directory.api.routes.dependencies import get_directory_service
from company_directory.models.company import CacheSnapshot, CompanyRecord, SnapshotSource
from company_directory.services.directory.cache import DirectoryCacheService
from company_directory.services.directory.errors import DirectoryError

router = APIRouter()
logger = logging.getLogger(__name__)


class CompanyListResponse(BaseModel):
    success: bool = True
    message: str | None = None
    data: list[CompanyRecord]
    count: int
    source: Literal["cache", "api"]
    origin: Literal["primary", "fallback"]
    timestamp: datetime | None = None


class CompanyResponse(BaseModel):
    success: bool = True
    data: CompanyRecord


@router.get(
    "/companies",
    response_model=CompanyListResponse,
    response_model_exclude_none=True,
)
def list_companies(
    service: DirectoryCacheService = Depends(get_directory_service),
) -> CompanyListResponse | JSONResponse:
    """Return the full directory, from cache while it is fresh."""
    try:
        snapshot = service.get_snapshot()
    except Exception as exc:
        return _error_response("Failed to fetch companies", exc)
    return _listing(snapshot)


@router.get(
    "/companies/{company_id}",
    response_model=CompanyResponse,
    response_model_exclude_none=True,
    responses={404: {"description": "Company not found"}},
)
def get_company(
    company_id: int,
    service: DirectoryCacheService = Depends(get_directory_service),
) -> CompanyResponse | JSONResponse:
    """Fetch a single company from the current snapshot."""
    try:
        record = service.get_by_id(company_id)
    except Exception as exc:
        return _error_response("Error fetching company", exc)
    if record is None:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"success": False, "message": "Company not found"},
        )
    return CompanyResponse(data=record)


@router.post(
    "/companies/refresh",
    response_model=CompanyListResponse,
    response_model_exclude_none=True,
)
def refresh_companies(
    service: DirectoryCacheService = Depends(get_directory_service),
) -> CompanyListResponse | JSONResponse:
    """Force a refetch from the registry, falling back to curated data."""
    logger.info("directory.refresh.requested")
    try:
        snapshot = service.refresh()
    except Exception as exc:
        return _error_response("Failed to refresh data", exc)
    return _listing(snapshot, message="Data refreshed successfully")


def _listing(snapshot: CacheSnapshot, *, message: str | None = None) -> CompanyListResponse:
    from_cache = snapshot.source is SnapshotSource.CACHE
    return CompanyListResponse(
        message=message,
        data=list(snapshot.records),
        count=snapshot.count,
        source="cache" if from_cache else "api",
        origin=snapshot.origin.value,
        timestamp=None if from_cache else snapshot.fetched_at,
    )


def _error_response(message: str, exc: Exception) -> JSONResponse:
    if isinstance(exc, DirectoryError):
        logger.error("directory.api_error", extra={"code": exc.code, "error": str(exc)})
    else:
        logger.exception("directory.api_unexpected_error", extra={"error": str(exc)})
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"success": False, "message": message, "error": str(exc)},
    )
