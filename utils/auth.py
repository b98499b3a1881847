"""View decorators for authentication and role checks."""

from __future__ import annotations

import logging
from functools import wraps
from typing import Callable

from flask import g, request
from werkzeug.exceptions import HTTPException

from models.user import Role, User
from services.auth import get_auth_service
from utils.errors import AuthenticationError, AuthorizationError

logger = logging.getLogger(__name__)


def current_user() -> User | None:
    return g.get("current_user")


def authenticate(view: Callable) -> Callable:
    """Require a valid access token; the user is stored on ``g``."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        g.current_user = get_auth_service().resolve_user(request)
        return view(*args, **kwargs)

    return wrapper


def optional_authenticate(view: Callable) -> Callable:
    """Resolve the caller when possible, otherwise continue anonymously."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        g.current_user = None
        service = get_auth_service()
        if service.extract_token(request):
            try:
                g.current_user = service.resolve_user(request)
            except HTTPException as exc:
                logger.warning("Optional auth token verification failed: %s", exc.description)
        return view(*args, **kwargs)

    return wrapper


def require_roles(*roles: Role) -> Callable:
    """Allow only identities whose role is one of ``roles``.

    Stack it under ``authenticate``.
    """

    allowed = frozenset(Role(role) for role in roles)

    def decorator(view: Callable) -> Callable:
        @wraps(view)
        def wrapper(*args, **kwargs):
            user = current_user()
            if user is None:
                raise AuthenticationError()
            if user.role_enum not in allowed:
                raise AuthorizationError()
            return view(*args, **kwargs)

        return wrapper

    return decorator


def require_ownership(owner_field: str = "userId") -> Callable:
    """Allow super admins, the owner named by ``owner_field``, and admins."""

    def decorator(view: Callable) -> Callable:
        @wraps(view)
        def wrapper(*args, **kwargs):
            user = current_user()
            if user is None:
                raise AuthenticationError()
            if user.role_enum is Role.SUPER_ADMIN:
                return view(*args, **kwargs)

            body = request.get_json(silent=True) if request.is_json else None
            owner_id = None
            if isinstance(body, dict):
                owner_id = body.get(owner_field)
            if owner_id is None:
                owner_id = kwargs.get(owner_field)
            if owner_id is not None and str(owner_id) == str(user.id):
                return view(*args, **kwargs)

            if user.role_enum is Role.ADMIN:
                return view(*args, **kwargs)
            raise AuthorizationError("Access denied. You can only access your own resources.")

        return wrapper

    return decorator


def client_info() -> dict:
    """Caller address and user agent, as seen through ``ProxyFix``."""

    return {
        "ipAddress": request.remote_addr,
        "userAgent": request.headers.get("User-Agent") or "Unknown",
    }


def attach_client_info(view: Callable) -> Callable:
    @wraps(view)
    def wrapper(*args, **kwargs):
        g.client_info = client_info()
        return view(*args, **kwargs)

    return wrapper
