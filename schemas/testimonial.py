"""Testimonial payloads."""

from __future__ import annotations

from typing import Literal

from pydantic import Field

from .common import CamelModel, ListParams, PartialModel, QueryBool, Url

TestimonialStatus = Literal["pending", "approved", "rejected"]


class TestimonialCreate(CamelModel):
    name: str = Field(min_length=2, max_length=255)
    position: str | None = Field(None, max_length=255)
    company: str | None = Field(None, max_length=255)
    content: str = Field(min_length=20, max_length=1000)
    rating: int = Field(5, ge=1, le=5)
    avatar: Url | None = None
    featured: bool = False
    status: TestimonialStatus = "pending"
    project_type: str | None = Field(None, max_length=100)
    sort_order: int = Field(0, ge=0)


class TestimonialUpdate(PartialModel):
    name: str | None = Field(None, min_length=2, max_length=255)
    position: str | None = Field(None, max_length=255)
    company: str | None = Field(None, max_length=255)
    content: str | None = Field(None, min_length=20, max_length=1000)
    rating: int | None = Field(None, ge=1, le=5)
    avatar: Url | None = None
    featured: bool | None = None
    status: TestimonialStatus | None = None
    project_type: str | None = Field(None, max_length=100)
    sort_order: int | None = Field(None, ge=0)


class TestimonialListParams(ListParams):
    status: TestimonialStatus | None = None
    featured: QueryBool | None = None
    rating: int | None = Field(None, ge=1, le=5)
    company: str | None = Field(None, max_length=255)
    project_type: str | None = Field(None, max_length=100)
