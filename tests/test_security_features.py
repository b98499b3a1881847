"""Tests covering security and hardening features."""

from __future__ import annotations

from conftest import API, build_app


def test_cors_allows_configured_origin(tmp_path):
    app = build_app(tmp_path, CORS_ORIGINS=["https://client.example"])
    client = app.test_client()

    response = client.get(
        "/health", headers={"Origin": "https://client.example"}
    )

    assert response.status_code == 200
    assert response.headers.get("Access-Control-Allow-Origin") == "https://client.example"
    assert response.headers.get("Access-Control-Allow-Credentials") == "true"
    assert response.headers.get("X-Request-ID")


def test_cors_ignores_unknown_origin(tmp_path):
    app = build_app(tmp_path, CORS_ORIGINS=["https://client.example"])
    client = app.test_client()

    response = client.get("/health", headers={"Origin": "https://evil.example"})

    assert "Access-Control-Allow-Origin" not in response.headers


def test_rate_limit_exceeded_returns_json(tmp_path):
    app = build_app(tmp_path, RATELIMIT_ENABLED=True, RATE_LIMIT="2 per minute")
    client = app.test_client()

    client.get("/health")
    client.get("/health")
    response = client.get("/health")

    assert response.status_code == 429
    payload = response.get_json()
    assert payload["success"] is False
    assert payload["message"] == "Too many requests, please try again later."
    assert "requestId" in payload


def test_json_error_shape_for_invalid_request(tmp_path):
    app = build_app(tmp_path)
    client = app.test_client()

    response = client.post(
        f"{API}/auth/login",
        data="not-json",
        content_type="text/plain",
    )

    assert response.status_code == 400
    payload = response.get_json()
    assert payload["success"] is False
    assert "content type" in payload["message"]
    assert payload["requestId"]


def test_validation_errors_name_fields(client):
    response = client.post(f"{API}/auth/login", json={"email": "not-an-email"})

    assert response.status_code == 400
    payload = response.get_json()
    assert payload["message"] == "Validation failed"
    fields = {error["field"] for error in payload["errors"]}
    assert fields == {"email", "password"}


def test_internal_errors_are_redacted(tmp_path):
    app = build_app(tmp_path)

    @app.route("/boom")
    def boom():
        raise RuntimeError("secret detail")

    response = app.test_client().get("/boom")

    assert response.status_code == 500
    assert response.get_json()["message"] == "Internal server error"


def test_internal_errors_are_detailed_in_development(tmp_path):
    app = build_app(tmp_path, ENVIRONMENT="development")

    @app.route("/boom")
    def boom():
        raise RuntimeError("secret detail")

    response = app.test_client().get("/boom")

    assert response.status_code == 500
    assert response.get_json()["message"] == "secret detail"
