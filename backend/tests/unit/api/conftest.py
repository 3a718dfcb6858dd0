"""Shared fixtures for endpoint tests.

The app is exercised without its lifespan: the container dependency is
overridden with the fake-backed ``test_container`` and the database session
with a mock.
"""

from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from presida.api import deps
from presida.main import app


@pytest.fixture
def client(test_container):
    """TestClient wired to the fake container."""
    app.dependency_overrides[deps.get_container] = lambda: test_container
    app.dependency_overrides[deps.get_db] = lambda: AsyncMock()
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
