"""
Tests for health check endpoints.
"""

from unittest.mock import patch

from fastapi.testclient import TestClient

from assistant.main import app

client = TestClient(app)


def test_healthz_endpoint():
    """Test the basic health check endpoint."""
    response = client.get("/healthz")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert "canonical_timezone" in data


def test_readyz_endpoint_tz_database_healthy():
    """Test readiness endpoint when the canonical zone resolves."""
    response = client.get("/readyz")

    assert response.status_code == 200
    data = response.json()
    assert data["overall_ok"] is True
    assert data["checks"]["tz_database"]["ok"] is True


def test_readyz_endpoint_unknown_canonical_zone():
    """Test readiness endpoint when the tz database lacks the canonical zone."""
    with patch("assistant.routes.health.is_known_zone", return_value=False):
        response = client.get("/readyz")

        # Should still return 200, but overall_ok should be False
        assert response.status_code == 200
        data = response.json()
        assert data["overall_ok"] is False
        assert data["checks"]["tz_database"]["ok"] is False
