"""Column types and mixins shared by every model."""

from __future__ import annotations

import json
from datetime import UTC, date, datetime

from sqlalchemy.types import Text, TypeDecorator

from . import db


def utcnow() -> datetime:
    """Naive UTC timestamp, the form every DateTime column stores."""

    return datetime.now(UTC).replace(tzinfo=None)


def isoformat(value: date | datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


class JSONList(TypeDecorator):
    """A list of strings persisted as JSON text.

    Reads always yield a list; ``NULL`` and undecodable text become ``[]``.
    """

    impl = Text
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return json.dumps(list(value))

    def process_result_value(self, value, dialect):
        if not value:
            return []
        try:
            decoded = json.loads(value)
        except (TypeError, ValueError):
            return []
        return decoded if isinstance(decoded, list) else []

    def coerce_compared_value(self, op, value):
        # LIKE patterns against the encoded text must not be JSON-encoded again.
        return Text()


class TimestampMixin:
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow, index=True)
    updated_at = db.Column(
        db.DateTime, nullable=False, default=utcnow, onupdate=utcnow
    )
