"""Shared pytest fixtures for the application tests."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest
from flask import Flask
from flask.testing import FlaskClient

ROOT_DIR = Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from app import create_app  # noqa: E402
from config import Config  # noqa: E402
from models import db  # noqa: E402
from models.user import User  # noqa: E402

API = "/api/v1"
ADMIN_PASSWORD = "AdminPass1!"


class _BaseTestConfig(Config):
    TESTING = True
    ENVIRONMENT = "test"
    API_VERSION = "v1"
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS: dict = {}
    JWT_SECRET = "test-access-secret"
    JWT_REFRESH_SECRET = "test-refresh-secret"
    JWT_EXPIRE = "1h"
    JWT_REFRESH_EXPIRE = "1d"
    BCRYPT_ROUNDS = 4
    ADMIN_EMAIL = "owner@portfolio.dev"
    ADMIN_PASSWORD = "Owner123!@#"
    SMTP_HOST = None
    CORS_ORIGINS = "*"
    RATELIMIT_ENABLED = False
    RATELIMIT_STORAGE_URI = "memory://"
    PAGINATION_COUNT_TOTAL = False


def build_app(tmp_path: Path, **overrides) -> Flask:
    upload_dir = tmp_path / "uploads"

    class TestConfig(_BaseTestConfig):
        UPLOAD_DIR = str(upload_dir)

    for key, value in overrides.items():
        setattr(TestConfig, key, value)

    return create_app(TestConfig)


@pytest.fixture()
def app(tmp_path) -> Flask:
    """Create a Flask application instance for tests."""

    application = build_app(tmp_path)

    with application.app_context():
        db.create_all()

    yield application

    with application.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    """Return a test client for the Flask app."""

    return app.test_client()


def create_user(
    app: Flask,
    email: str,
    password: str = ADMIN_PASSWORD,
    *,
    role: str = "admin",
    name: str = "Test Admin",
    is_active: bool = True,
) -> int:
    """Persist a user and return its id."""

    with app.app_context():
        service = app.extensions["auth_service"]
        user = User(
            name=name,
            email=email,
            password=service.hash_password(password),
            role=role,
            is_active=is_active,
        )
        db.session.add(user)
        db.session.commit()
        return user.id


def login(
    client: FlaskClient,
    email: str,
    password: str = ADMIN_PASSWORD,
    *,
    keep_cookies: bool = False,
) -> dict:
    """Log in and return the response data.

    The auth cookies are dropped unless ``keep_cookies`` is set, so later
    requests on the same client stay anonymous unless they send a header.
    """

    response = client.post(f"{API}/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.get_json()
    if not keep_cookies:
        client.delete_cookie("token")
        client.delete_cookie("refreshToken")
    return response.get_json()["data"]


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def admin_id(app: Flask) -> int:
    return create_user(app, "admin@example.com")


@pytest.fixture()
def admin_headers(client: FlaskClient, admin_id: int) -> dict:
    return bearer(login(client, "admin@example.com")["token"])


@pytest.fixture()
def super_admin_headers(app: Flask, client: FlaskClient) -> dict:
    create_user(app, "root@example.com", role="super_admin", name="Root Admin")
    return bearer(login(client, "root@example.com")["token"])
