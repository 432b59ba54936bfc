"""API tests: health and root endpoints."""
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from db import get_db
from main import app

pytestmark = pytest.mark.api


def test_api_health_returns_200(client):
    """GET /api/health returns 200 and service info."""
    r = client.get("/api/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok", "service": "movr-rides"}


def test_api_health_database_unreachable(client):
    """GET /api/health returns 503 unavailable when the database cannot be reached."""
    broken = MagicMock()
    broken.execute.side_effect = OperationalError("SELECT 1", {}, Exception("connection refused"))

    def override():
        yield broken

    app.dependency_overrides[get_db] = override
    r = client.get("/api/health")
    assert r.status_code == 503
    assert r.json()["error"] == "unavailable"


def test_root_returns_info(client):
    """GET / returns service info and docs link."""
    r = client.get("/")
    assert r.status_code == 200
    data = r.json()
    assert data["service"] == "movr-rides"
    assert data["health"] == "/api/health"
