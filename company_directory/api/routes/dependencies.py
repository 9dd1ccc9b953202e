from __future__ import annotations

from fastapi import Request

from company_directory.services.directory.cache import DirectoryCacheService


def get_directory_service(request: Request) -> DirectoryCacheService:
    """Return the cache service owned by the running application."""
    return request.app.state.directory_service
