import pytest
from fastapi.testclient import TestClient

from company_directory.main import app


@pytest.fixture
def client():
    """Create test client without running the application lifespan."""
    return TestClient(app)
