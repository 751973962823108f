"""Pytest fixtures."""

import pytest
from fastapi.testclient import TestClient

from tests.fixtures import build_session
from tracker.context import SessionContext
from tracker.main import app
from tracker.routers.session import get_session


@pytest.fixture
def session() -> SessionContext:
    """Deterministic session on a ManualClock."""
    return build_session()


@pytest.fixture
def client(session: SessionContext):
    """Test client with the session dependency overridden."""
    app.dependency_overrides[get_session] = lambda: session
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
