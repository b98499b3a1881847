"""Client testimonial model."""

from __future__ import annotations

from . import db
from .mixins import TimestampMixin, isoformat

TESTIMONIAL_STATUSES = ("pending", "approved", "rejected")


class Testimonial(TimestampMixin, db.Model):
    __tablename__ = "testimonials"
    __table_args__ = (
        db.CheckConstraint("rating >= 1 AND rating <= 5", name="ck_testimonials_rating"),
    )

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    position = db.Column(db.String(255), nullable=True)
    company = db.Column(db.String(255), nullable=True, index=True)
    content = db.Column(db.Text, nullable=False)
    rating = db.Column(db.Integer, nullable=False, default=5, index=True)
    avatar = db.Column(db.String(500), nullable=True)
    featured = db.Column(db.Boolean, nullable=False, default=False, index=True)
    status = db.Column(
        db.Enum(*TESTIMONIAL_STATUSES, name="testimonial_status_enum"),
        nullable=False,
        default="pending",
        index=True,
    )
    project_type = db.Column(db.String(100), nullable=True)
    sort_order = db.Column(db.Integer, nullable=False, default=0, index=True)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "position": self.position,
            "company": self.company,
            "content": self.content,
            "rating": self.rating,
            "avatar": self.avatar,
            "featured": self.featured,
            "status": self.status,
            "projectType": self.project_type,
            "sortOrder": self.sort_order,
            "createdAt": isoformat(self.created_at),
            "updatedAt": isoformat(self.updated_at),
        }
