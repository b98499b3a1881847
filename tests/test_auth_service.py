"""Tests for token, password and identity handling in the auth service."""

from __future__ import annotations

from datetime import timedelta

import jwt
import pytest
from flask import request

from conftest import create_user
from models import db
from models.user import User
from services.auth import AuthService, parse_duration
from utils.errors import (
    AuthenticationError,
    InactiveAccountError,
    InvalidTokenError,
    TokenMissingError,
)


@pytest.fixture()
def service(app) -> AuthService:
    return app.extensions["auth_service"]


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("7d", timedelta(days=7)),
        ("30d", timedelta(days=30)),
        ("15m", timedelta(minutes=15)),
        ("2h", timedelta(hours=2)),
        ("1w", timedelta(weeks=1)),
        ("45", timedelta(seconds=45)),
        (90, timedelta(seconds=90)),
    ],
)
def test_parse_duration(raw, expected):
    assert parse_duration(raw) == expected


def test_parse_duration_rejects_garbage():
    with pytest.raises(ValueError):
        parse_duration("soon")


def test_access_token_carries_identity(service):
    token = service.issue_access_token({"id": 7, "email": "a@example.com", "role": "admin"})
    claims = service.verify_access_token(token)

    assert claims["id"] == 7
    assert claims["email"] == "a@example.com"
    assert claims["role"] == "admin"
    assert claims["exp"] > claims["iat"]


def test_tokens_are_not_interchangeable(service):
    refresh = service.issue_refresh_token({"id": 1, "email": "a@example.com", "role": "admin"})

    with pytest.raises(InvalidTokenError):
        service.verify_access_token(refresh)


def test_foreign_and_expired_tokens_fail_alike(service):
    claims = {"id": 1, "email": "a@example.com", "role": "admin"}
    foreign = jwt.encode({**claims, "iat": 0, "exp": 9999999999}, "someone-else", algorithm="HS256")
    expired = AuthService(
        access_secret=service.access_secret,
        refresh_secret=service.refresh_secret,
        access_ttl=timedelta(seconds=-10),
        refresh_ttl=timedelta(seconds=-10),
        bcrypt_rounds=4,
    ).issue_access_token(claims)

    with pytest.raises(InvalidTokenError) as foreign_exc:
        service.verify_access_token(foreign)
    with pytest.raises(InvalidTokenError) as expired_exc:
        service.verify_access_token(expired)

    assert foreign_exc.value.description == expired_exc.value.description


def test_malformed_token_is_invalid(service):
    with pytest.raises(InvalidTokenError):
        service.verify_access_token("not.a.jwt")


def test_password_hashing(service):
    hashed = service.hash_password("Secret123!")

    assert hashed != "Secret123!"
    assert service.verify_password("Secret123!", hashed)
    assert not service.verify_password("secret123!", hashed)
    assert not service.verify_password("Secret123!", "not-a-bcrypt-hash")


def test_password_hashing_beyond_bcrypt_limit(service):
    password = "Aa1!" + "é" * 60
    hashed = service.hash_password(password)

    assert service.verify_password(password, hashed)
    # Only the first 72 bytes count.
    assert service.verify_password(password + "tail", hashed)
    assert not service.verify_password("Aa1!" + "é" * 30, hashed)


def test_login_then_verify_resolves_same_user(app, service):
    user_id = create_user(app, "login@example.com")

    with app.app_context():
        user, pair = service.login("LOGIN@example.com", "AdminPass1!")
        assert user.id == user_id
        assert user.last_login is not None
        assert service.verify_access_token(pair.token)["id"] == user_id
        assert service.verify_refresh_token(pair.refresh_token)["id"] == user_id


def test_login_rejects_bad_password_and_inactive_user(app, service):
    create_user(app, "active@example.com")
    create_user(app, "gone@example.com", is_active=False)

    with app.app_context():
        with pytest.raises(AuthenticationError) as exc:
            service.login("active@example.com", "WrongPass1!")
        assert exc.value.description == "Invalid email or password"

        with pytest.raises(AuthenticationError):
            service.login("gone@example.com", "AdminPass1!")


def test_resolve_user_errors(app, service):
    active_id = create_user(app, "active@example.com")
    inactive_id = create_user(app, "inactive@example.com", is_active=False)

    def _claims(user_id):
        return {"id": user_id, "email": "x@example.com", "role": "admin"}

    with app.test_request_context("/"):
        with pytest.raises(TokenMissingError):
            service.resolve_user(request)

    headers = {"Authorization": f"Bearer {service.issue_access_token(_claims(active_id))}"}
    with app.test_request_context("/", headers=headers):
        assert service.resolve_user(request).id == active_id

    headers = {"Authorization": f"Bearer {service.issue_access_token(_claims(inactive_id))}"}
    with app.test_request_context("/", headers=headers):
        with pytest.raises(InactiveAccountError):
            service.resolve_user(request)

    headers = {"Authorization": f"Bearer {service.issue_access_token(_claims(9999))}"}
    with app.test_request_context("/", headers=headers):
        with pytest.raises(InvalidTokenError):
            service.resolve_user(request)


def test_extract_token_prefers_header_over_cookie(app, service):
    with app.test_request_context(
        "/",
        headers={"Authorization": "Bearer header-token", "Cookie": "token=cookie-token"},
    ):
        assert service.extract_token(request) == "header-token"

    with app.test_request_context("/", headers={"Cookie": "token=cookie-token"}):
        assert service.extract_token(request) == "cookie-token"


def test_refresh_requires_a_valid_refresh_token(app, service):
    user_id = create_user(app, "refresh@example.com")

    with app.app_context():
        user = db.session.get(User, user_id)
        pair = service.issue_token_pair(user)

        with pytest.raises(TokenMissingError):
            service.refresh(None)
        with pytest.raises(InvalidTokenError):
            service.refresh(pair.token)

        renewed = service.refresh(pair.refresh_token)
        assert service.verify_access_token(renewed.token)["id"] == user_id


def test_ensure_default_admin_is_idempotent(app, service):
    with app.app_context():
        admin, created = service.ensure_default_admin(
            email="Boss@Example.com", password="Boss123!@#", name="Boss"
        )
        assert created is True
        assert admin.role == "super_admin"
        assert admin.email == "boss@example.com"

        again, created_again = service.ensure_default_admin(
            email="boss@example.com", password="Other123!@#"
        )
        assert created_again is False
        assert again.id == admin.id
