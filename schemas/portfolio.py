"""Portfolio payloads."""

from __future__ import annotations

from typing import Literal

from pydantic import Field

from .common import CamelModel, ListParams, PartialModel, QueryBool, Slug, Tag, Url

Status = Literal["draft", "published"]


class PortfolioCreate(CamelModel):
    title: str = Field(min_length=3, max_length=255)
    slug: Slug | None = None
    category: str = Field(min_length=2, max_length=100)
    description: str = Field(min_length=10, max_length=1000)
    long_description: str | None = Field(None, min_length=50, max_length=5000)
    image: Url | None = None
    technologies: list[Tag] = Field(min_length=1, max_length=20)
    live_url: Url | None = None
    github_url: Url | None = None
    featured: bool = False
    status: Status = "draft"
    sort_order: int = Field(0, ge=0)


class PortfolioUpdate(PartialModel):
    title: str | None = Field(None, min_length=3, max_length=255)
    slug: Slug | None = None
    category: str | None = Field(None, min_length=2, max_length=100)
    description: str | None = Field(None, min_length=10, max_length=1000)
    long_description: str | None = Field(None, min_length=50, max_length=5000)
    image: Url | None = None
    technologies: list[Tag] | None = Field(None, min_length=1, max_length=20)
    live_url: Url | None = None
    github_url: Url | None = None
    featured: bool | None = None
    status: Status | None = None
    sort_order: int | None = Field(None, ge=0)


class PortfolioListParams(ListParams):
    status: Status | None = None
    category: str | None = Field(None, max_length=100)
    featured: QueryBool | None = None


class FeaturedParams(CamelModel):
    limit: int = Field(6, ge=1, le=100)
