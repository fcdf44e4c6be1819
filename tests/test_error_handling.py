"""
Error handling and edge case tests.

This test suite covers:
- The service exception hierarchy and its payloads
- The uniform error envelope produced by the API handlers
- Unexpected errors mapped to 500 without leaking details
- Settings parsing from MEALGRID_* variables
"""

import pytest
from fastapi.testclient import TestClient

from app.config import Environment, Settings
from app.exceptions import (
    ConflictError,
    NotFoundError,
    ServiceValidationError,
    UnauthorizedError,
)
from main import app
from services.recipe_service import RecipeService


# =============================================================================
# EXCEPTIONS
# =============================================================================


@pytest.mark.parametrize(
    "exc_class, status",
    [
        (ServiceValidationError, 400),
        (UnauthorizedError, 401),
        (NotFoundError, 404),
        (ConflictError, 409),
    ],
)
def test_exception_status_codes(exc_class, status):
    assert exc_class().http_status == status
    assert issubclass(exc_class, ServiceValidationError)


def test_exception_payload():
    exc = NotFoundError("Recipe not found", details={"recipe_id": "abc"}, code="RECIPE_NOT_FOUND")

    assert str(exc) == "Recipe not found"
    assert exc.to_dict() == {
        "message": "Recipe not found",
        "code": "RECIPE_NOT_FOUND",
        "details": {"recipe_id": "abc"},
    }
    assert ServiceValidationError("bad").to_dict() == {"message": "bad"}


# =============================================================================
# ERROR ENVELOPE
# =============================================================================


def test_unknown_route_uses_envelope(api_client):
    response = api_client.get("/no-such-route")

    assert response.status_code == 404
    body = response.json()
    assert body["success"] is False
    assert body["error"]["code"] == "HTTP_404"
    assert "timestamp" in body


def test_request_validation_envelope(api_client, headers):
    response = api_client.post("/recipes", json={"description": "no title"}, headers=headers)

    assert response.status_code == 422
    body = response.json()
    assert body["error"]["code"] == "VALIDATION_ERROR"
    assert body["error"]["details"][0]["loc"][-1] == "title"


def test_not_found_envelope(api_client, headers):
    response = api_client.get("/recipes/00000000-0000-0000-0000-000000000000", headers=headers)

    assert response.status_code == 404
    assert response.json()["error"] == {
        "code": "RECIPE_NOT_FOUND",
        "message": "Recipe not found: 00000000-0000-0000-0000-000000000000",
    }


def test_request_id_is_echoed(api_client):
    response = api_client.get("/health-check", headers={"X-Request-ID": "req-123"})

    assert response.headers["X-Request-ID"] == "req-123"


def test_unexpected_error_is_500_without_details(api_client, headers, monkeypatch):
    def boom(*args, **kwargs):
        raise RuntimeError("secret connection string")

    monkeypatch.setattr(RecipeService, "list_recipes", staticmethod(boom))
    safe_client = TestClient(app, raise_server_exceptions=False)

    response = safe_client.get("/recipes", headers=headers)

    assert response.status_code == 500
    assert response.json()["error"]["code"] == "INTERNAL_SERVER_ERROR"
    assert "secret" not in response.text


# =============================================================================
# SETTINGS
# =============================================================================


def test_settings_read_prefixed_environment(monkeypatch):
    monkeypatch.setenv("MEALGRID_ENVIRONMENT", "Production")
    monkeypatch.setenv("MEALGRID_SIGNED_URL_TTL_SEC", "120")
    monkeypatch.setenv("MEALGRID_DATABASE_URL", "sqlite:///./mealgrid.db")

    settings = Settings(_env_file=None)

    assert settings.environment is Environment.PRODUCTION
    assert settings.is_production()
    assert settings.signed_url_ttl_sec == 120
    assert settings.is_sqlite()
    assert settings.max_tags == 12


def test_settings_reject_invalid_port(monkeypatch):
    monkeypatch.setenv("MEALGRID_PORT", "70000")

    with pytest.raises(ValueError):
        Settings(_env_file=None)
