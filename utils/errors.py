"""HTTP error taxonomy shared by services, repositories and views."""

from __future__ import annotations

from typing import Iterable

from werkzeug.exceptions import (
    BadRequest,
    Forbidden,
    InternalServerError,
    NotFound,
    TooManyRequests,
    Unauthorized,
)


class ValidationError(BadRequest):
    """Malformed or missing input, reported field by field."""

    def __init__(
        self,
        description: str = "Validation failed",
        errors: Iterable[dict] | None = None,
    ):
        super().__init__(description)
        self.errors = list(errors or [])


class ConflictError(BadRequest):
    """A unique constraint would be violated (duplicate slug, email...)."""


class UploadError(BadRequest):
    """Rejected upload, identified by an enumerable code."""

    def __init__(self, description: str, code: str):
        super().__init__(description)
        self.error_code = code


class AuthenticationError(Unauthorized):
    """No usable identity on the request."""

    def __init__(self, description: str = "Access denied. Please authenticate."):
        super().__init__(description)


class TokenMissingError(AuthenticationError):
    def __init__(self, description: str = "Access denied. No token provided."):
        super().__init__(description)


class InvalidTokenError(AuthenticationError):
    """Bad signature, wrong secret, malformed or expired token.

    The message never says which of those happened.
    """

    def __init__(self, description: str = "Invalid token."):
        super().__init__(description)


class InactiveAccountError(AuthenticationError):
    def __init__(self, description: str = "Account is deactivated."):
        super().__init__(description)


class AuthorizationError(Forbidden):
    def __init__(self, description: str = "Access denied. Insufficient permissions."):
        super().__init__(description)


class NotFoundError(NotFound):
    pass


class RateLimitError(TooManyRequests):
    def __init__(self, description: str = "Too many requests, please try again later."):
        super().__init__(description)


class UpstreamError(InternalServerError):
    """The mail transport or the database failed underneath a request."""
