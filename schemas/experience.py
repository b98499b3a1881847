"""Experience payloads."""

from __future__ import annotations

from datetime import date
from typing import Annotated, Literal

from pydantic import Field, ValidationInfo, field_validator

from .common import CamelModel, ListParams, PartialModel, QueryBool, Tag

ExperienceType = Literal["full-time", "part-time", "contract", "freelance", "internship"]
Achievement = Annotated[str, Field(max_length=500)]


def check_date_range(start: date | None, end: date | None) -> None:
    if start is not None and end is not None and end <= start:
        raise ValueError("endDate must be greater than startDate")


class ExperienceCreate(CamelModel):
    title: str = Field(min_length=3, max_length=255)
    company: str = Field(min_length=2, max_length=255)
    location: str | None = Field(None, max_length=255)
    start_date: date
    end_date: date | None = None
    current: bool = False
    description: str | None = Field(None, max_length=2000)
    achievements: list[Achievement] = Field(default_factory=list, max_length=10)
    technologies: list[Tag] = Field(default_factory=list, max_length=20)
    type: ExperienceType = "full-time"
    sort_order: int = Field(0, ge=0)

    @field_validator("end_date")
    @classmethod
    def _end_after_start(cls, value, info: ValidationInfo):
        check_date_range(info.data.get("start_date"), value)
        return value


class ExperienceUpdate(PartialModel):
    title: str | None = Field(None, min_length=3, max_length=255)
    company: str | None = Field(None, min_length=2, max_length=255)
    location: str | None = Field(None, max_length=255)
    start_date: date | None = None
    end_date: date | None = None
    current: bool | None = None
    description: str | None = Field(None, max_length=2000)
    achievements: list[Achievement] | None = Field(None, max_length=10)
    technologies: list[Tag] | None = Field(None, max_length=20)
    type: ExperienceType | None = None
    sort_order: int | None = Field(None, ge=0)

    @field_validator("end_date")
    @classmethod
    def _end_after_start(cls, value, info: ValidationInfo):
        check_date_range(info.data.get("start_date"), value)
        return value


class ExperienceListParams(ListParams):
    type: ExperienceType | None = None
    current: QueryBool | None = None
    company: str | None = Field(None, max_length=255)
