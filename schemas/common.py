"""Shared pydantic building blocks: camelCase models, field types, list params."""

from __future__ import annotations

import re
from datetime import UTC, datetime
from typing import Annotated, Any, ClassVar

from pydantic import (
    AfterValidator,
    AnyUrl,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    EmailStr,
    Field,
    UrlConstraints,
    field_validator,
)
from pydantic.alias_generators import to_camel

from repositories.base import ListQuery

_PASSWORD_RE = re.compile(r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)(?=.*[@$!%*?&])[A-Za-z\d@$!%*?&]")
PASSWORD_MESSAGE = (
    "Password must contain at least one lowercase letter, one uppercase letter, "
    "one number, and one special character"
)


def _check_password(value: str) -> str:
    if not _PASSWORD_RE.match(value):
        raise ValueError(PASSWORD_MESSAGE)
    return value


def _strict_bool(value: Any) -> Any:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value in ("true", "false"):
        return value == "true"
    raise ValueError("must be a boolean")


def to_naive_utc(value: datetime | None) -> datetime | None:
    if value is not None and value.tzinfo is not None:
        return value.astimezone(UTC).replace(tzinfo=None)
    return value


Email = EmailStr
# Stored as the normalised string, not a Url object.
Url = Annotated[
    AnyUrl,
    UrlConstraints(max_length=500, allowed_schemes=["http", "https"]),
    AfterValidator(str),
]
Slug = Annotated[str, Field(max_length=255, pattern=r"^[a-z0-9-]+$")]
Password = Annotated[str, Field(min_length=8, max_length=128), AfterValidator(_check_password)]
Tag = Annotated[str, Field(max_length=50)]
QueryBool = Annotated[bool, BeforeValidator(_strict_bool)]
UtcDateTime = Annotated[datetime, AfterValidator(to_naive_utc)]


class CamelModel(BaseModel):
    """Snake_case attributes, camelCase on the wire, unknown keys dropped."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def values(self) -> dict:
        """Attribute values keyed by column name."""

        return self.model_dump()


class PartialModel(CamelModel):
    """Update body: every field optional, but an explicit ``null`` is refused."""

    @field_validator("*", mode="before")
    @classmethod
    def _reject_null(cls, value):
        if value is None:
            raise ValueError("must not be null")
        return value

    def values(self) -> dict:
        return self.model_dump(exclude_unset=True)


class ListParams(CamelModel):
    """Pagination, search and ordering shared by every list query."""

    # Keys that are not filters.
    control_fields: ClassVar[frozenset[str]] = frozenset({"page", "limit", "search", "order_by"})

    page: int = Field(1, ge=1)
    limit: int = Field(10, ge=1, le=100)
    search: str | None = Field(None, max_length=255)
    order_by: str | None = None

    def filters(self) -> dict:
        data = self.model_dump(by_alias=True, exclude_none=True)
        for name in self.control_fields:
            data.pop(to_camel(name), None)
        return data

    def to_list_query(self, **overrides) -> ListQuery:
        filters = self.filters()
        filters.update(overrides)
        return ListQuery(
            page=self.page,
            limit=self.limit,
            filters=filters,
            search=self.search or None,
            order_by=self.order_by,
        )


class LimitParams(CamelModel):
    limit: int = Field(10, ge=1, le=100)
