"""User model definition."""

from __future__ import annotations

import enum

from sqlalchemy.orm import validates

from . import db
from .mixins import TimestampMixin, isoformat


class Role(str, enum.Enum):
    """Closed set of account roles."""

    ADMIN = "admin"
    SUPER_ADMIN = "super_admin"

    @classmethod
    def values(cls) -> tuple[str, ...]:
        return tuple(role.value for role in cls)


# Roles allowed to create, change and delete content.
WRITE_ROLES = frozenset({Role.ADMIN, Role.SUPER_ADMIN})


class User(TimestampMixin, db.Model):
    """An administrator account of the portfolio back office."""

    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    password = db.Column(db.String(255), nullable=False)
    role = db.Column(
        db.Enum(*Role.values(), name="user_role_enum"),
        nullable=False,
        default=Role.ADMIN.value,
        index=True,
    )
    avatar = db.Column(db.String(500), nullable=True)
    is_active = db.Column(
        db.Boolean,
        nullable=False,
        default=True,
        server_default=db.true(),
        index=True,
    )
    last_login = db.Column(db.DateTime, nullable=True)

    posts = db.relationship("BlogPost", back_populates="author", passive_deletes=True)

    @validates("role")
    def _coerce_role(self, key, value):
        return Role(value).value

    @property
    def role_enum(self) -> Role:
        return Role(self.role)

    def to_dict(self) -> dict:
        """Serialize the user; the password hash never leaves the model."""

        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "role": self.role,
            "avatar": self.avatar,
            "isActive": self.is_active,
            "lastLogin": isoformat(self.last_login),
            "createdAt": isoformat(self.created_at),
            "updatedAt": isoformat(self.updated_at),
        }

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"<User {self.email}>"
