"""URL slug generation."""

from __future__ import annotations

import re

from utils.errors import ValidationError

_INVALID = re.compile(r"[^a-z0-9\s-]")
_WHITESPACE = re.compile(r"\s+")
_DASHES = re.compile(r"-+")


def slugify(text: str) -> str:
    """``"Hello, World!"`` -> ``"hello-world"``."""

    slug = _INVALID.sub("", text.lower())
    slug = _WHITESPACE.sub("-", slug.strip())
    return _DASHES.sub("-", slug).strip("-")


def derive_slug(explicit: str | None, title: str) -> str:
    """The explicit slug when given, else one built from ``title``."""

    slug = explicit or slugify(title)
    if not slug:
        raise ValidationError(
            "Validation failed",
            errors=[{"field": "slug", "message": "could not be derived from the title"}],
        )
    return slug
