"""Token issuance, password hashing and identity resolution."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any, Mapping

import bcrypt
import jwt
from flask import Request, current_app
from sqlalchemy import func

from models import db
from models.mixins import utcnow
from models.user import Role, User
from utils.errors import (
    AuthenticationError,
    InactiveAccountError,
    InvalidTokenError,
    TokenMissingError,
)

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
# bcrypt only reads the first 72 bytes and newer releases refuse longer input.
BCRYPT_MAX_BYTES = 72
ACCESS_COOKIE = "token"
REFRESH_COOKIE = "refreshToken"

_DURATION_RE = re.compile(r"^\s*(\d+)\s*([smhdw]?)\s*$", re.IGNORECASE)
_UNIT_SECONDS = {"": 1, "s": 1, "m": 60, "h": 3600, "d": 86400, "w": 604800}


def parse_duration(raw: str | int | timedelta) -> timedelta:
    """Parse ``"7d"``, ``"15m"``, ``"3600"`` or a bare number of seconds."""

    if isinstance(raw, timedelta):
        return raw
    if isinstance(raw, int):
        return timedelta(seconds=raw)
    match = _DURATION_RE.match(str(raw))
    if not match:
        raise ValueError(f"Unrecognised duration: {raw!r}")
    amount, unit = match.groups()
    return timedelta(seconds=int(amount) * _UNIT_SECONDS[unit.lower()])


def _password_bytes(plain: str) -> bytes:
    encoded = plain.encode("utf-8")
    if len(encoded) > BCRYPT_MAX_BYTES:
        logger.debug("Password is %d bytes, truncating to %d", len(encoded), BCRYPT_MAX_BYTES)
    return encoded[:BCRYPT_MAX_BYTES]


def token_claims(user: User) -> dict:
    return {"id": user.id, "email": user.email, "role": user.role}


@dataclass(frozen=True)
class TokenPair:
    token: str
    refresh_token: str

    def to_dict(self) -> dict:
        return {"token": self.token, "refreshToken": self.refresh_token}


class AuthService:
    """Signs and verifies JWTs and hashes passwords.

    Access and refresh tokens carry the same ``{id, email, role}`` claims and
    are signed with distinct secrets, so neither verifies as the other.
    """

    def __init__(
        self,
        *,
        access_secret: str,
        refresh_secret: str,
        access_ttl: timedelta,
        refresh_ttl: timedelta,
        bcrypt_rounds: int = 12,
    ):
        if access_secret == refresh_secret:
            logger.warning("Access and refresh tokens share one signing secret")
        self.access_secret = access_secret
        self.refresh_secret = refresh_secret
        self.access_ttl = access_ttl
        self.refresh_ttl = refresh_ttl
        self.bcrypt_rounds = bcrypt_rounds

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> "AuthService":
        return cls(
            access_secret=config["JWT_SECRET"],
            refresh_secret=config["JWT_REFRESH_SECRET"],
            access_ttl=parse_duration(config.get("JWT_EXPIRE", "7d")),
            refresh_ttl=parse_duration(config.get("JWT_REFRESH_EXPIRE", "30d")),
            bcrypt_rounds=int(config.get("BCRYPT_ROUNDS", 12)),
        )

    # Tokens

    def _sign(self, claims: Mapping[str, Any], secret: str, ttl: timedelta) -> str:
        now = datetime.now(UTC)
        payload = {
            "id": claims["id"],
            "email": claims["email"],
            "role": claims["role"],
            "iat": now,
            "exp": now + ttl,
        }
        return jwt.encode(payload, secret, algorithm=ALGORITHM)

    def _verify(self, token: str, secret: str) -> dict:
        try:
            claims = jwt.decode(
                token,
                secret,
                algorithms=[ALGORITHM],
                options={"require": ["exp", "iat"]},
            )
        except jwt.PyJWTError as exc:
            logger.info("Token verification failed: %s", exc)
            raise InvalidTokenError() from exc
        if "id" not in claims:
            raise InvalidTokenError()
        return claims

    def issue_access_token(self, claims: Mapping[str, Any]) -> str:
        return self._sign(claims, self.access_secret, self.access_ttl)

    def issue_refresh_token(self, claims: Mapping[str, Any]) -> str:
        return self._sign(claims, self.refresh_secret, self.refresh_ttl)

    def issue_token_pair(self, user: User) -> TokenPair:
        claims = token_claims(user)
        return TokenPair(
            token=self.issue_access_token(claims),
            refresh_token=self.issue_refresh_token(claims),
        )

    def verify_access_token(self, token: str) -> dict:
        return self._verify(token, self.access_secret)

    def verify_refresh_token(self, token: str) -> dict:
        return self._verify(token, self.refresh_secret)

    # Passwords

    def hash_password(self, plain: str) -> str:
        salt = bcrypt.gensalt(rounds=self.bcrypt_rounds)
        return bcrypt.hashpw(_password_bytes(plain), salt).decode("utf-8")

    @staticmethod
    def verify_password(plain: str, hashed: str | None) -> bool:
        if not plain or not hashed:
            return False
        try:
            return bcrypt.checkpw(_password_bytes(plain), hashed.encode("utf-8"))
        except ValueError:
            # Malformed stored hash.
            return False

    # Identity

    @staticmethod
    def extract_token(req: Request) -> str | None:
        """Bearer header first, then the ``token`` cookie."""

        header = req.headers.get("Authorization", "")
        if header.startswith("Bearer"):
            parts = header.split(" ", 1)
            token = parts[1].strip() if len(parts) == 2 else ""
            if token:
                return token
        return req.cookies.get(ACCESS_COOKIE) or None

    def resolve_user(self, req: Request) -> User:
        token = self.extract_token(req)
        if not token:
            raise TokenMissingError()

        claims = self.verify_access_token(token)
        # Inactive rows are loaded on purpose so they can be reported as such.
        user = db.session.get(User, claims["id"])
        if user is None:
            raise InvalidTokenError("Invalid token. User not found.")
        if not user.is_active:
            raise InactiveAccountError()
        return user

    def login(self, email: str, password: str) -> tuple[User, TokenPair]:
        """Check credentials, stamp ``last_login`` and issue a token pair."""

        user = User.query.filter(
            func.lower(User.email) == email.strip().lower(),
            User.is_active.is_(True),
        ).first()
        if user is None or not self.verify_password(password, user.password):
            raise AuthenticationError("Invalid email or password")

        user.last_login = utcnow()
        db.session.commit()
        logger.info("User logged in: %s", user.email)
        return user, self.issue_token_pair(user)

    def refresh(self, refresh_token: str | None) -> TokenPair:
        if not refresh_token:
            raise TokenMissingError("Refresh token not provided")
        try:
            claims = self.verify_refresh_token(refresh_token)
        except InvalidTokenError as exc:
            raise InvalidTokenError("Invalid refresh token") from exc

        user = db.session.get(User, claims["id"])
        if user is None or not user.is_active:
            raise InvalidTokenError("Invalid refresh token")
        return self.issue_token_pair(user)

    def ensure_default_admin(
        self,
        *,
        email: str,
        password: str,
        name: str = "Portfolio Admin",
    ) -> tuple[User, bool]:
        """Create the seeded ``super_admin`` unless the email is taken."""

        existing = User.query.filter(func.lower(User.email) == email.lower()).first()
        if existing is not None:
            return existing, False

        admin = User(
            name=name,
            email=email.lower(),
            password=self.hash_password(password),
            role=Role.SUPER_ADMIN.value,
            is_active=True,
        )
        db.session.add(admin)
        db.session.commit()
        logger.info("Default admin user created: %s", admin.email)
        return admin, True


def get_auth_service() -> AuthService:
    return current_app.extensions["auth_service"]
