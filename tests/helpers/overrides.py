from __future__ import annotations

from contextlib import contextmanager

from company_directory.api.routes.dependencies import get_directory_service
from company_directory.main import app
from company_directory.services.directory.cache import DirectoryCacheService


@contextmanager
def override_service(service: DirectoryCacheService):
    app.dependency_overrides[get_directory_service] = lambda: service
    try:
        yield service
    finally:
        app.dependency_overrides.pop(get_directory_service, None)
        service.close()
