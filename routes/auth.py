"""Authentication blueprint: sessions, profile and user administration."""

from __future__ import annotations

import logging

from flask import Blueprint, current_app, g, request

from extensions import limiter
from models.user import WRITE_ROLES
from repositories.users import UserRepository
from schemas.auth import (
    ChangePasswordRequest,
    LoginRequest,
    RefreshRequest,
    RegisterRequest,
    UpdateProfileRequest,
    UserListParams,
)
from services.auth import ACCESS_COOKIE, REFRESH_COOKIE, TokenPair, get_auth_service
from utils.auth import authenticate, current_user, optional_authenticate, require_roles
from utils.errors import ConflictError, ValidationError
from utils.request_validation import validate_body, validate_data, validate_query
from utils.responses import created, paginated, success

logger = logging.getLogger(__name__)

auth_bp = Blueprint("auth", __name__)


def _set_auth_cookies(response, pair: TokenPair) -> None:
    service = get_auth_service()
    options = {
        "httponly": True,
        "secure": current_app.config.get("ENVIRONMENT") == "production",
        "samesite": "Strict",
    }
    response.set_cookie(
        ACCESS_COOKIE,
        pair.token,
        max_age=int(service.access_ttl.total_seconds()),
        **options,
    )
    response.set_cookie(
        REFRESH_COOKIE,
        pair.refresh_token,
        max_age=int(service.refresh_ttl.total_seconds()),
        **options,
    )


@auth_bp.route("/login", methods=["POST"])
@limiter.limit(lambda: current_app.config["AUTH_RATE_LIMIT"])
def login():
    """Check credentials and hand out an access/refresh token pair."""
    body = validate_body(request, LoginRequest)
    user, pair = get_auth_service().login(body.email, body.password)

    response, status = success(
        {"user": user.to_dict(), **pair.to_dict()}, "Login successful"
    )
    _set_auth_cookies(response, pair)
    return response, status


@auth_bp.route("/refresh", methods=["POST"])
def refresh():
    """Exchange a refresh token (body or cookie) for a new pair."""
    payload = request.get_json(silent=True) if request.is_json else None
    body = validate_data(RefreshRequest, payload if isinstance(payload, dict) else {})
    token = body.refresh_token or request.cookies.get(REFRESH_COOKIE)

    pair = get_auth_service().refresh(token)
    response, status = success(pair.to_dict(), "Token refreshed successfully")
    _set_auth_cookies(response, pair)
    return response, status


@auth_bp.route("/logout", methods=["POST"])
@optional_authenticate
def logout():
    user = current_user()
    logger.info("User logged out: %s", user.email if user else "Unknown")
    response, status = success(message="Logout successful")
    response.delete_cookie(ACCESS_COOKIE)
    response.delete_cookie(REFRESH_COOKIE)
    return response, status


@auth_bp.route("/profile", methods=["GET"])
@authenticate
def get_profile():
    return success({"user": g.current_user.to_dict()})


@auth_bp.route("/profile", methods=["PUT"])
@authenticate
def update_profile():
    body = validate_body(request, UpdateProfileRequest, allow_empty=True)
    changes = body.values()
    user = g.current_user
    users = UserRepository()

    if "email" in changes and changes["email"] != user.email:
        if users.email_taken(changes["email"], exclude_id=user.id):
            raise ConflictError("Email is already taken")

    users.update(user, changes)
    logger.info("User profile updated: %s", user.email)
    return success({"user": user.to_dict()}, "Profile updated successfully")


@auth_bp.route("/change-password", methods=["PUT"])
@authenticate
def change_password():
    body = validate_body(request, ChangePasswordRequest)
    service = get_auth_service()
    user = g.current_user

    if not service.verify_password(body.current_password, user.password):
        raise ValidationError("Current password is incorrect")

    UserRepository().update(user, {"password": service.hash_password(body.new_password)})
    logger.info("Password changed for user: %s", user.email)
    return success(message="Password changed successfully")


@auth_bp.route("/register", methods=["POST"])
@authenticate
@require_roles(*WRITE_ROLES)
def register():
    """Create another administrator account."""
    body = validate_body(request, RegisterRequest)
    users = UserRepository()
    if users.email_taken(body.email):
        raise ConflictError("User with this email already exists")

    user = users.create(
        name=body.name,
        email=body.email,
        password=get_auth_service().hash_password(body.password),
        role=body.role,
    )
    logger.info("New user registered: %s", user.email)
    return created({"user": user.to_dict()}, "User registered successfully")


@auth_bp.route("/users", methods=["GET"])
@authenticate
@require_roles(*WRITE_ROLES)
def list_users():
    params = validate_query(request, UserListParams)
    page = UserRepository().list(params.to_list_query())
    return success(paginated("users", page.items, page))


@auth_bp.route("/users/<int:user_id>", methods=["DELETE"])
@authenticate
@require_roles(*WRITE_ROLES)
def delete_user(user_id: int):
    """Deactivate an account; callers cannot deactivate themselves."""
    if user_id == g.current_user.id:
        raise ValidationError("You cannot delete your own account")

    users = UserRepository()
    user = users.get_or_404(user_id)
    users.soft_delete(user)
    logger.info("User deleted: %s by %s", user.email, g.current_user.email)
    return success(message="User deleted successfully")
