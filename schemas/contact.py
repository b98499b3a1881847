"""Contact form payloads."""

from __future__ import annotations

import re
from datetime import date, datetime, time
from typing import Literal

from pydantic import Field, field_validator

from .common import CamelModel, Email, ListParams, QueryBool, to_naive_utc

ContactStatus = Literal["unread", "read", "replied", "archived"]

_DATE_ONLY = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class ContactCreate(CamelModel):
    name: str = Field(min_length=2, max_length=255)
    email: Email
    subject: str = Field(min_length=5, max_length=500)
    message: str = Field(min_length=20, max_length=2000)


class ContactReply(CamelModel):
    reply_message: str = Field(min_length=10, max_length=2000)


class ContactStatusUpdate(CamelModel):
    status: ContactStatus


class ContactListParams(ListParams):
    status: ContactStatus | None = None
    replied: QueryBool | None = None
    email: str | None = Field(None, max_length=255)
    date_from: datetime | None = None
    date_to: datetime | None = None

    @field_validator("date_from", "date_to", mode="before")
    @classmethod
    def _expand_dates(cls, value, info):
        # A bare date spans the whole day: from its first to its last instant.
        if isinstance(value, str) and _DATE_ONLY.match(value):
            day = date.fromisoformat(value)
            bound = time.max if info.field_name == "date_to" else time.min
            return datetime.combine(day, bound)
        return value

    @field_validator("date_from", "date_to")
    @classmethod
    def _normalize(cls, value):
        return to_naive_utc(value)
