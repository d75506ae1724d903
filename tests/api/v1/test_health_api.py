# tests/api/v1/test_health_api.py

from fastapi.testclient import TestClient


def test_health(client: TestClient) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    # Disabled in tests
    assert response.json()["scheduler"] == "not_initialized"


def test_database_health(client: TestClient) -> None:
    response = client.get("/health/db")
    assert response.status_code == 200
    assert response.json()["component"] == "database"
