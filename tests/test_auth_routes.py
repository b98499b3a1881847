"""Tests covering the session and account management endpoints."""

from __future__ import annotations

import pytest
from flask.testing import FlaskClient

from conftest import API, bearer, create_user, login


def test_login_returns_tokens_and_user(client: FlaskClient, admin_id):
    response = client.post(
        f"{API}/auth/login",
        json={"email": "Admin@Example.com", "password": "AdminPass1!"},
    )

    assert response.status_code == 200
    payload = response.get_json()
    assert payload["success"] is True
    assert payload["message"] == "Login successful"
    data = payload["data"]
    assert data["user"]["id"] == admin_id
    assert data["user"]["email"] == "admin@example.com"
    assert "password" not in data["user"]
    assert data["token"] and data["refreshToken"]


@pytest.mark.parametrize(
    "payload, status_code",
    [
        ({"email": "admin@example.com"}, 400),
        ({"password": "AdminPass1!"}, 400),
        ({"email": "admin@example.com", "password": "wrong"}, 401),
        ({"email": "nobody@example.com", "password": "AdminPass1!"}, 401),
    ],
)
def test_login_validation(client: FlaskClient, admin_id, payload, status_code):
    response = client.post(f"{API}/auth/login", json=payload)

    assert response.status_code == status_code
    assert response.get_json()["success"] is False


def test_profile_requires_token(client: FlaskClient):
    response = client.get(f"{API}/auth/profile")

    assert response.status_code == 401
    assert response.get_json()["message"] == "Access denied. No token provided."


def test_profile_with_bad_token(client: FlaskClient):
    response = client.get(f"{API}/auth/profile", headers=bearer("garbage"))

    assert response.status_code == 401
    assert response.get_json()["message"] == "Invalid token."


def test_profile_via_cookie(client: FlaskClient, admin_id):
    login(client, "admin@example.com", keep_cookies=True)

    response = client.get(f"{API}/auth/profile")

    assert response.status_code == 200
    assert response.get_json()["data"]["user"]["id"] == admin_id


def test_deactivated_account_is_reported(app, client: FlaskClient, admin_headers, admin_id):
    other_id = create_user(app, "other@example.com")
    other_token = login(client, "other@example.com")["token"]

    client.delete(f"{API}/auth/users/{other_id}", headers=admin_headers)
    response = client.get(f"{API}/auth/profile", headers=bearer(other_token))

    assert response.status_code == 401
    assert response.get_json()["message"] == "Account is deactivated."


def test_refresh_from_body_and_cookie(client: FlaskClient, admin_id):
    tokens = login(client, "admin@example.com", keep_cookies=True)

    from_cookie = client.post(f"{API}/auth/refresh")
    assert from_cookie.status_code == 200
    assert from_cookie.get_json()["data"]["token"]

    client.delete_cookie("refreshToken")
    from_body = client.post(f"{API}/auth/refresh", json={"refreshToken": tokens["refreshToken"]})
    assert from_body.status_code == 200
    assert from_body.get_json()["message"] == "Token refreshed successfully"


def test_refresh_rejects_missing_and_access_tokens(client: FlaskClient, admin_id):
    tokens = login(client, "admin@example.com")

    missing = client.post(f"{API}/auth/refresh")
    assert missing.status_code == 401
    assert missing.get_json()["message"] == "Refresh token not provided"

    wrong = client.post(f"{API}/auth/refresh", json={"refreshToken": tokens["token"]})
    assert wrong.status_code == 401
    assert wrong.get_json()["message"] == "Invalid refresh token"


def test_logout_clears_cookies(client: FlaskClient, admin_id):
    login(client, "admin@example.com", keep_cookies=True)

    response = client.post(f"{API}/auth/logout")

    assert response.status_code == 200
    cookies = response.headers.getlist("Set-Cookie")
    assert any(c.startswith("token=;") for c in cookies)
    assert any(c.startswith("refreshToken=;") for c in cookies)


def test_logout_works_anonymously(client: FlaskClient):
    response = client.post(f"{API}/auth/logout")

    assert response.status_code == 200
    assert response.get_json()["message"] == "Logout successful"


def test_update_profile(app, client: FlaskClient, admin_headers):
    create_user(app, "taken@example.com")

    conflict = client.put(
        f"{API}/auth/profile", json={"email": "taken@example.com"}, headers=admin_headers
    )
    assert conflict.status_code == 400
    assert conflict.get_json()["message"] == "Email is already taken"

    response = client.put(
        f"{API}/auth/profile",
        json={"name": "Renamed", "avatar": "https://cdn.example.com/me.png"},
        headers=admin_headers,
    )
    assert response.status_code == 200
    user = response.get_json()["data"]["user"]
    assert user["name"] == "Renamed"
    assert user["avatar"] == "https://cdn.example.com/me.png"
    assert user["email"] == "admin@example.com"


def test_update_profile_rejects_null(client: FlaskClient, admin_headers):
    response = client.put(f"{API}/auth/profile", json={"name": None}, headers=admin_headers)

    assert response.status_code == 400
    assert response.get_json()["errors"][0]["field"] == "name"


def test_change_password(client: FlaskClient, admin_headers):
    wrong = client.put(
        f"{API}/auth/change-password",
        json={"currentPassword": "Nope1234!", "newPassword": "Fresh123!"},
        headers=admin_headers,
    )
    assert wrong.status_code == 400
    assert wrong.get_json()["message"] == "Current password is incorrect"

    weak = client.put(
        f"{API}/auth/change-password",
        json={"currentPassword": "AdminPass1!", "newPassword": "alllowercase"},
        headers=admin_headers,
    )
    assert weak.status_code == 400
    assert weak.get_json()["errors"][0]["field"] == "newPassword"

    ok = client.put(
        f"{API}/auth/change-password",
        json={"currentPassword": "AdminPass1!", "newPassword": "Fresh123!"},
        headers=admin_headers,
    )
    assert ok.status_code == 200
    login(client, "admin@example.com", "Fresh123!")


def test_register_and_list_users(client: FlaskClient, admin_headers):
    body = {"name": "Second", "email": "second@example.com", "password": "Second12!"}

    created = client.post(f"{API}/auth/register", json=body, headers=admin_headers)
    assert created.status_code == 201
    assert created.get_json()["data"]["user"]["role"] == "admin"

    duplicate = client.post(f"{API}/auth/register", json=body, headers=admin_headers)
    assert duplicate.status_code == 400
    assert duplicate.get_json()["message"] == "User with this email already exists"

    listing = client.get(f"{API}/auth/users?limit=1", headers=admin_headers)
    data = listing.get_json()["data"]
    assert listing.status_code == 200
    assert len(data["users"]) == 1
    assert data["pagination"] == {"page": 1, "limit": 1, "total": 1}


def test_register_requires_authentication(client: FlaskClient):
    response = client.post(
        f"{API}/auth/register",
        json={"name": "Nobody", "email": "nobody@example.com", "password": "Nobody12!"},
    )

    assert response.status_code == 401


def test_delete_user(app, client: FlaskClient, admin_headers, admin_id):
    other_id = create_user(app, "other@example.com")

    self_delete = client.delete(f"{API}/auth/users/{admin_id}", headers=admin_headers)
    assert self_delete.status_code == 400
    assert self_delete.get_json()["message"] == "You cannot delete your own account"

    first = client.delete(f"{API}/auth/users/{other_id}", headers=admin_headers)
    second = client.delete(f"{API}/auth/users/{other_id}", headers=admin_headers)
    assert first.status_code == 200
    assert second.status_code == 404

    listing = client.get(f"{API}/auth/users", headers=admin_headers).get_json()["data"]
    assert [user["email"] for user in listing["users"]] == ["admin@example.com"]


def test_register_and_login_with_long_password(client: FlaskClient, admin_headers):
    password = "Aa1!" + "x" * 96
    body = {"name": "Long Pass", "email": "long@example.com", "password": password}

    created = client.post(f"{API}/auth/register", json=body, headers=admin_headers)
    assert created.status_code == 201

    tokens = login(client, "long@example.com", password)
    assert tokens["user"]["email"] == "long@example.com"

    changed = client.put(
        f"{API}/auth/change-password",
        json={"currentPassword": password, "newPassword": "Bb2@" + "y" * 120},
        headers=bearer(tokens["token"]),
    )
    assert changed.status_code == 200
