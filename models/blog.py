"""Blog post model."""

from __future__ import annotations

import math
import re

from . import db
from .mixins import JSONList, TimestampMixin, isoformat
from .portfolio import PUBLICATION_STATUSES

WORDS_PER_MINUTE = 200


def estimate_read_time(content: str | None) -> str:
    """Return ``"N min read"`` at 200 words per minute, rounded up."""

    words = len(re.findall(r"\S+", content or ""))
    return f"{math.ceil(words / WORDS_PER_MINUTE)} min read"


class BlogPost(TimestampMixin, db.Model):
    """An article, optionally attributed to its author."""

    __tablename__ = "blog"

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(255), nullable=False)
    slug = db.Column(db.String(255), unique=True, nullable=False, index=True)
    excerpt = db.Column(db.Text, nullable=True)
    content = db.Column(db.Text, nullable=False)
    image = db.Column(db.String(500), nullable=True)
    category = db.Column(db.String(100), nullable=True, index=True)
    tags = db.Column(JSONList, nullable=True, default=list)
    status = db.Column(
        db.Enum(*PUBLICATION_STATUSES, name="blog_status_enum"),
        nullable=False,
        default="draft",
        index=True,
    )
    read_time = db.Column(db.String(20), nullable=True)
    views = db.Column(db.Integer, nullable=False, default=0)
    publish_date = db.Column(db.DateTime, nullable=True, index=True)
    author_id = db.Column(
        db.Integer,
        db.ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    author = db.relationship("User", back_populates="posts", lazy="joined")

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "title": self.title,
            "slug": self.slug,
            "excerpt": self.excerpt,
            "content": self.content,
            "image": self.image,
            "category": self.category,
            "tags": self.tags or [],
            "status": self.status,
            "readTime": self.read_time,
            "views": self.views,
            "publishDate": isoformat(self.publish_date),
            "authorId": self.author_id,
            "createdAt": isoformat(self.created_at),
            "updatedAt": isoformat(self.updated_at),
        }
        if self.author is not None:
            data["author"] = {"name": self.author.name, "email": self.author.email}
        return data
