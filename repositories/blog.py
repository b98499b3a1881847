"""Blog post repository."""

from __future__ import annotations

import json
from typing import Any

from models.blog import BlogPost

from .base import Repository


class BlogRepository(Repository[BlogPost]):
    model = BlogPost
    not_found_message = "Blog post not found"
    conflict_message = "Blog post with this slug already exists"
    equality_filters = {"status": "status", "category": "category"}
    search_columns = ("title", "excerpt", "content")
    orderings = {
        "views": (BlogPost.views.desc(),),
        "title": (BlogPost.title.asc(),),
        "publish_date": (BlogPost.publish_date.desc(),),
    }
    default_ordering = (BlogPost.publish_date.desc(), BlogPost.created_at.desc())

    def _apply_filters(self, filters: dict[str, Any]) -> list:
        criteria = super()._apply_filters(filters)
        tag = filters.get("tag")
        if tag:
            # Tags are stored as a JSON array; match one encoded element.
            criteria.append(BlogPost.tags.contains(json.dumps(tag), autoescape=True))
        return criteria

    def get_by_slug(self, slug: str) -> BlogPost | None:
        return self.find_one(slug=slug)

    def slug_taken(self, slug: str, exclude_id: int | None = None) -> bool:
        return self.exists(slug=slug, exclude_id=exclude_id)

    def categories(self) -> list[str]:
        return self.distinct_values("category", BlogPost.status == "published")

    def tags(self) -> list[str]:
        return self.json_values("tags", BlogPost.status == "published")
