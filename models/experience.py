"""Work experience model."""

from __future__ import annotations

from . import db
from .mixins import JSONList, TimestampMixin, isoformat

EXPERIENCE_TYPES = ("full-time", "part-time", "contract", "freelance", "internship")


class Experience(TimestampMixin, db.Model):
    """A position held, shown on the resume timeline."""

    __tablename__ = "experience"

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(255), nullable=False)
    company = db.Column(db.String(255), nullable=False, index=True)
    location = db.Column(db.String(255), nullable=True)
    start_date = db.Column(db.Date, nullable=False, index=True)
    end_date = db.Column(db.Date, nullable=True)
    current = db.Column(db.Boolean, nullable=False, default=False, index=True)
    description = db.Column(db.Text, nullable=True)
    achievements = db.Column(JSONList, nullable=True, default=list)
    technologies = db.Column(JSONList, nullable=True, default=list)
    type = db.Column(
        db.Enum(*EXPERIENCE_TYPES, name="experience_type_enum"),
        nullable=False,
        default="full-time",
        index=True,
    )
    sort_order = db.Column(db.Integer, nullable=False, default=0, index=True)

    @property
    def period(self) -> str:
        """Human readable span, e.g. ``2019 - Present`` or ``2019 - 2021``."""

        start_year = self.start_date.year if self.start_date else None
        if self.current:
            return f"{start_year} - Present"
        if self.end_date and self.end_date.year != start_year:
            return f"{start_year} - {self.end_date.year}"
        return str(start_year)

    def to_dict(self, include_period: bool = False) -> dict:
        data = {
            "id": self.id,
            "title": self.title,
            "company": self.company,
            "location": self.location,
            "startDate": isoformat(self.start_date),
            "endDate": isoformat(self.end_date),
            "current": self.current,
            "description": self.description,
            "achievements": self.achievements or [],
            "technologies": self.technologies or [],
            "type": self.type,
            "sortOrder": self.sort_order,
            "createdAt": isoformat(self.created_at),
            "updatedAt": isoformat(self.updated_at),
        }
        if include_period:
            data["period"] = self.period
        return data
