"""Contact message repository."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any

from sqlalchemy import case, func, select

from models.contact import ContactMessage
from models.mixins import utcnow

from .base import Repository


class ContactRepository(Repository[ContactMessage]):
    model = ContactMessage
    not_found_message = "Contact message not found"
    equality_filters = {"status": "status", "replied": "replied"}
    search_columns = ("name", "email", "subject", "message")
    orderings = {
        "name": (ContactMessage.name.asc(),),
        "email": (ContactMessage.email.asc(),),
        "status": (ContactMessage.status.asc(),),
    }
    default_ordering = (ContactMessage.created_at.desc(),)

    def _apply_filters(self, filters: dict[str, Any]) -> list:
        criteria = super()._apply_filters(filters)
        if filters.get("email"):
            criteria.append(ContactMessage.email.ilike(f"%{filters['email']}%"))
        if filters.get("dateFrom") is not None:
            criteria.append(ContactMessage.created_at >= filters["dateFrom"])
        if filters.get("dateTo") is not None:
            criteria.append(ContactMessage.created_at <= filters["dateTo"])
        return criteria

    def mark_read(self, contact: ContactMessage) -> ContactMessage:
        if contact.status == "unread":
            return self.update(contact, {"status": "read"})
        return contact

    def mark_replied(self, contact: ContactMessage, reply_message: str) -> ContactMessage:
        return self.update(
            contact,
            {
                "status": "replied",
                "replied": True,
                "reply_message": reply_message,
                "replied_at": utcnow(),
            },
        )

    def archive(self, contact: ContactMessage) -> ContactMessage:
        return self.update(contact, {"status": "archived"})

    def stats(self, now: datetime | None = None) -> dict:
        now = now or utcnow()
        start_of_day = now.replace(hour=0, minute=0, second=0, microsecond=0)

        def _count_where(condition):
            return func.coalesce(func.sum(case((condition, 1), else_=0)), 0)

        row = self.session.execute(
            select(
                func.count(ContactMessage.id),
                _count_where(ContactMessage.status == "unread"),
                _count_where(ContactMessage.status == "read"),
                _count_where(ContactMessage.status == "replied"),
                _count_where(ContactMessage.status == "archived"),
                _count_where(ContactMessage.created_at >= start_of_day),
                _count_where(ContactMessage.created_at >= now - timedelta(days=7)),
                _count_where(ContactMessage.created_at >= now - timedelta(days=30)),
            )
        ).one()
        keys = ("total", "unread", "read", "replied", "archived", "today", "this_week", "this_month")
        return {key: int(value or 0) for key, value in zip(keys, row)}
