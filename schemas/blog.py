"""Blog post payloads."""

from __future__ import annotations

from pydantic import Field

from .common import CamelModel, ListParams, PartialModel, Slug, Tag, Url, UtcDateTime
from .portfolio import Status


class BlogCreate(CamelModel):
    title: str = Field(min_length=5, max_length=255)
    slug: Slug | None = None
    excerpt: str | None = Field(None, min_length=20, max_length=500)
    content: str = Field(min_length=100)
    image: Url | None = None
    category: str | None = Field(None, min_length=2, max_length=100)
    tags: list[Tag] = Field(default_factory=list, max_length=10)
    status: Status = "draft"
    read_time: str | None = Field(None, max_length=20)
    publish_date: UtcDateTime | None = None


class BlogUpdate(PartialModel):
    title: str | None = Field(None, min_length=5, max_length=255)
    slug: Slug | None = None
    excerpt: str | None = Field(None, min_length=20, max_length=500)
    content: str | None = Field(None, min_length=100)
    image: Url | None = None
    category: str | None = Field(None, min_length=2, max_length=100)
    tags: list[Tag] | None = Field(None, max_length=10)
    status: Status | None = None
    read_time: str | None = Field(None, max_length=20)
    publish_date: UtcDateTime | None = None


class BlogListParams(ListParams):
    status: Status | None = None
    category: str | None = Field(None, max_length=100)
    tag: str | None = Field(None, max_length=50)
