"""Application-level tests: health, routing and error envelopes."""

from fastapi.testclient import TestClient

from sweetshop.api.dependencies import get_inventory_service
from sweetshop.config import Settings
from sweetshop.main import app


class BrokenInventory:
    def list_sweets(self):
        raise RuntimeError("database exploded")


def test_health_check(client):
    """Test health check endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "OK"


def test_legacy_health_path(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["status"] == "OK"


def test_unknown_route_returns_error_envelope(client):
    """Test unmatched routes give 404 in the common error shape."""
    response = client.get("/api/v1/does-not-exist")
    assert response.status_code == 404
    assert response.json() == {"error": {"message": "Not Found"}}


def test_wrong_method_returns_error_envelope(client):
    response = client.patch("/api/v1/sweets")
    assert response.status_code == 405
    assert "message" in response.json()["error"]


def test_validation_error_envelope(client):
    """Test request validation failures use the error envelope."""
    response = client.post("/api/v1/auth/register", json={"username": "al"})
    assert response.status_code == 422
    error = response.json()["error"]
    assert error["message"] == "Validation failed"
    fields = {tuple(d["loc"]) for d in error["details"]}
    assert ("body", "username") in fields
    assert ("body", "password") in fields


def test_unhandled_error_returns_500_without_details():
    """Test unexpected exceptions are hidden behind a generic 500."""
    app.dependency_overrides[get_inventory_service] = lambda: BrokenInventory()
    try:
        client = TestClient(app, raise_server_exceptions=False)
        response = client.get("/api/v1/sweets")
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    assert response.json() == {"error": {"message": "Internal Server Error"}}


def test_unhandled_error_includes_stack_in_development():
    """Test development mode exposes the stack trace."""
    original = app.state.settings
    app.state.settings = Settings(environment="development")
    app.dependency_overrides[get_inventory_service] = lambda: BrokenInventory()
    try:
        client = TestClient(app, raise_server_exceptions=False)
        response = client.get("/api/v1/sweets")
    finally:
        app.dependency_overrides.clear()
        app.state.settings = original

    assert response.status_code == 500
    error = response.json()["error"]
    assert error["message"] == "Internal Server Error"
    assert "database exploded" in error["stack"]
