from __future__ import annotations

import logging
from datetime import UTC, datetime

from fastapi import APIRouter, Depends

from company_directory.api.routes.dependencies import get_directory_service
from company_directory.config import settings
from company_directory.services.directory.cache import DirectoryCacheService

logger = logging.getLogger(__name__)
router = APIRouter()

ENDPOINTS = {
    "companies": "GET /api/companies",
    "single_company": "GET /api/companies/{id}",
    "refresh": "POST /api/companies/refresh",
    "health": "GET /api/health",
}


@router.get("/health")
def health_check(service: DirectoryCacheService = Depends(get_directory_service)):
    """Liveness check reporting how much of the directory is cached."""
    snapshot = service.snapshot
    cached_count = snapshot.count if snapshot else 0
    return {
        "success": True,
        "message": "Server is running",
        "timestamp": datetime.now(UTC).isoformat(),
        "version": settings.app_version,
        "environment": settings.environment,
        "cache_status": f"{cached_count} companies cached" if snapshot else "empty",
        "cached_count": cached_count,
        "fetched_at": snapshot.fetched_at.isoformat() if snapshot else None,
        "endpoints": ENDPOINTS,
    }
