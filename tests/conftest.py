"""Shared test fixtures."""

import pytest
from fastapi.testclient import TestClient

from loggly_relay.app import app


@pytest.fixture(scope="session")
def client() -> TestClient:
    """Create a TestClient for the FastAPI app."""
    return TestClient(app)


@pytest.fixture(autouse=True)
def _clear_dependency_overrides():
    """Ensure overrides set by one test never leak into another."""
    yield
    app.dependency_overrides.clear()
