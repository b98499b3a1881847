"""Experience repository."""

from __future__ import annotations

from sqlalchemy import select

from models.experience import Experience

from .base import ListQuery, Repository


class ExperienceRepository(Repository[Experience]):
    model = Experience
    not_found_message = "Experience entry not found"
    equality_filters = {"type": "type", "current": "current", "company": "company"}
    orderings = {
        "company": (Experience.company.asc(),),
        "date": (Experience.start_date.desc(),),
    }
    default_ordering = (Experience.sort_order.asc(), Experience.start_date.desc())

    def current(self) -> Experience | None:
        stmt = (
            select(Experience)
            .where(Experience.current.is_(True))
            .order_by(*self._ordering(None))
            .limit(1)
        )
        return self.session.scalars(stmt).first()

    def timeline(self, limit: int = 10) -> list[Experience]:
        return self.list(ListQuery(page=1, limit=limit, order_by="date")).items

    def companies(self) -> list[str]:
        return self.distinct_values("company")

    def technologies(self) -> list[str]:
        return self.json_values("technologies")
