"""Testimonial repository."""

from __future__ import annotations

from typing import Any

from sqlalchemy import case, func, select

from models.testimonial import Testimonial

from .base import Repository


class TestimonialRepository(Repository[Testimonial]):
    model = Testimonial
    not_found_message = "Testimonial not found"
    equality_filters = {
        "status": "status",
        "featured": "featured",
        "company": "company",
        "projectType": "project_type",
    }
    search_columns = ("name", "company", "content")
    orderings = {
        "rating": (Testimonial.rating.desc(),),
        "name": (Testimonial.name.asc(),),
        "company": (Testimonial.company.asc(),),
    }
    default_ordering = (Testimonial.sort_order.asc(), Testimonial.created_at.desc())

    def _apply_filters(self, filters: dict[str, Any]) -> list:
        criteria = super()._apply_filters(filters)
        if filters.get("rating") is not None:
            criteria.append(Testimonial.rating >= filters["rating"])
        return criteria

    def set_status(self, testimonial: Testimonial, status: str) -> Testimonial:
        return self.update(testimonial, {"status": status})

    def toggle_featured(self, testimonial: Testimonial) -> Testimonial:
        return self.update(testimonial, {"featured": not testimonial.featured})

    def stats(self) -> dict:
        def _count_where(condition):
            return func.coalesce(func.sum(case((condition, 1), else_=0)), 0)

        row = self.session.execute(
            select(
                func.count(Testimonial.id),
                _count_where(Testimonial.status == "pending"),
                _count_where(Testimonial.status == "approved"),
                _count_where(Testimonial.status == "rejected"),
                _count_where(Testimonial.featured.is_(True)),
                func.avg(Testimonial.rating),
                func.count(func.distinct(Testimonial.company)),
            )
        ).one()
        total, pending, approved, rejected, featured, average, companies = row
        return {
            "total": int(total or 0),
            "pending": int(pending),
            "approved": int(approved),
            "rejected": int(rejected),
            "featured": int(featured),
            "average_rating": round(float(average), 2) if average is not None else None,
            "unique_companies": int(companies or 0),
        }

    def companies(self) -> list[str]:
        return self.distinct_values("company")

    def project_types(self) -> list[str]:
        return self.distinct_values("project_type")
