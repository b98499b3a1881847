"""Portfolio project model."""

from __future__ import annotations

from . import db
from .mixins import JSONList, TimestampMixin, isoformat

PUBLICATION_STATUSES = ("draft", "published")


class PortfolioItem(TimestampMixin, db.Model):
    """A showcased project."""

    __tablename__ = "portfolio"

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(255), nullable=False)
    slug = db.Column(db.String(255), unique=True, nullable=False, index=True)
    category = db.Column(db.String(100), nullable=False, index=True)
    description = db.Column(db.Text, nullable=False)
    long_description = db.Column(db.Text, nullable=True)
    image = db.Column(db.String(500), nullable=True)
    technologies = db.Column(JSONList, nullable=True, default=list)
    live_url = db.Column(db.String(500), nullable=True)
    github_url = db.Column(db.String(500), nullable=True)
    featured = db.Column(db.Boolean, nullable=False, default=False, index=True)
    status = db.Column(
        db.Enum(*PUBLICATION_STATUSES, name="portfolio_status_enum"),
        nullable=False,
        default="draft",
        index=True,
    )
    sort_order = db.Column(db.Integer, nullable=False, default=0, index=True)
    views = db.Column(db.Integer, nullable=False, default=0)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "slug": self.slug,
            "category": self.category,
            "description": self.description,
            "longDescription": self.long_description,
            "image": self.image,
            "technologies": self.technologies or [],
            "liveUrl": self.live_url,
            "githubUrl": self.github_url,
            "featured": self.featured,
            "status": self.status,
            "sortOrder": self.sort_order,
            "views": self.views,
            "createdAt": isoformat(self.created_at),
            "updatedAt": isoformat(self.updated_at),
        }
