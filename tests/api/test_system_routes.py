"""API tests for system routes (root and health)."""

from fastapi.testclient import TestClient

from t212_dashboard.core.config import settings
from t212_dashboard.main import app

client = TestClient(app)


def test_root_endpoint_returns_status_and_version() -> None:
    response = client.get("/")

    assert response.status_code == 200
    assert response.json() == {
        "message": settings.app_name,
        "status": "operational",
        "version": settings.app_version,
    }


def test_health_endpoint_returns_healthy_status() -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}
