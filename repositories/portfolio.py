"""Portfolio item repository."""

from __future__ import annotations

from sqlalchemy import select

from models.portfolio import PortfolioItem

from .base import Repository


class PortfolioRepository(Repository[PortfolioItem]):
    model = PortfolioItem
    not_found_message = "Portfolio item not found"
    conflict_message = "Portfolio with this slug already exists"
    equality_filters = {"status": "status", "category": "category", "featured": "featured"}
    search_columns = ("title", "description")
    orderings = {
        "views": (PortfolioItem.views.desc(),),
        "title": (PortfolioItem.title.asc(),),
    }
    default_ordering = (PortfolioItem.sort_order.asc(), PortfolioItem.created_at.desc())

    def get_by_slug(self, slug: str) -> PortfolioItem | None:
        return self.find_one(slug=slug)

    def slug_taken(self, slug: str, exclude_id: int | None = None) -> bool:
        return self.exists(slug=slug, exclude_id=exclude_id)

    def featured(self, limit: int = 6) -> list[PortfolioItem]:
        """Published featured items, most viewed first."""

        stmt = (
            select(PortfolioItem)
            .where(PortfolioItem.status == "published", PortfolioItem.featured.is_(True))
            .order_by(*self._ordering("views"))
            .limit(limit)
        )
        return list(self.session.scalars(stmt))

    def categories(self) -> list[str]:
        return self.distinct_values("category", PortfolioItem.status == "published")
