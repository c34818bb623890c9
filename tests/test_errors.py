"""Error rendering across the exception handlers."""

from __future__ import annotations

from fastapi.testclient import TestClient

from folio.errors import (
    Conflict,
    InvalidToken,
    NotFound,
    Unauthenticated,
    ValidationError,
)
from folio.main import app
from folio.routers.projects import get_project_service


def test_error_payloads():
    assert NotFound("Blog not found").to_payload() == {
        "success": False,
        "message": "Blog not found",
    }
    assert ValidationError(["a", "b"]).to_payload() == {
        "success": False,
        "message": "Validation error",
        "errors": ["a", "b"],
    }
    assert Unauthenticated().to_payload() == {
        "message": "Access denied - No token provided"
    }
    assert InvalidToken().status_code == 403
    assert Conflict().status_code == 409


def test_unknown_route(client):
    resp = client.get("/api/does-not-exist")
    assert resp.status_code == 404
    assert resp.json() == {"message": "API route not found"}


def test_malformed_json_body(client, auth_headers):
    resp = client.post(
        "/api/projects",
        content=b"{not json",
        headers={**auth_headers, "Content-Type": "application/json"},
    )
    assert resp.status_code == 400
    body = resp.json()
    assert body["success"] is False
    assert body["message"] == "Validation error"
    assert body["errors"]


def test_out_of_range_query(client):
    resp = client.get("/api/projects", params={"limit": 0})
    assert resp.status_code == 400
    assert resp.json()["message"] == "Validation error"


def test_unhandled_error_returns_500(client):
    def broken_service():
        raise RuntimeError("boom")

    app.dependency_overrides[get_project_service] = broken_service
    try:
        with TestClient(app, raise_server_exceptions=False) as raw_client:
            resp = raw_client.get("/api/projects")
    finally:
        app.dependency_overrides.pop(get_project_service, None)

    assert resp.status_code == 500
    assert resp.json() == {"success": False, "message": "Server error", "error": "boom"}
