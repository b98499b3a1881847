"""Blog blueprint."""

from __future__ import annotations

import logging

from flask import Blueprint, g, request

from models.blog import BlogPost, estimate_read_time
from models.mixins import utcnow
from models.user import WRITE_ROLES
from repositories.blog import BlogRepository
from schemas.blog import BlogCreate, BlogListParams, BlogUpdate
from utils.auth import (
    authenticate,
    current_user,
    optional_authenticate,
    require_ownership,
    require_roles,
)
from utils.errors import ConflictError, NotFoundError
from utils.request_validation import validate_body, validate_query
from utils.responses import created, paginated, success
from utils.slugs import derive_slug

logger = logging.getLogger(__name__)

blog_bp = Blueprint("blog", __name__)


def _visible(repo: BlogRepository, post: BlogPost | None) -> BlogPost:
    if post is None or (current_user() is None and post.status != "published"):
        raise NotFoundError(repo.not_found_message)
    return post


@blog_bp.route("", methods=["GET"])
@optional_authenticate
def list_posts():
    params = validate_query(request, BlogListParams)
    overrides = {} if current_user() else {"status": "published"}
    page = BlogRepository().list(params.to_list_query(**overrides))
    return success(paginated("blogs", page.items, page))


@blog_bp.route("/categories", methods=["GET"])
def categories():
    return success({"categories": BlogRepository().categories()})


@blog_bp.route("/tags", methods=["GET"])
def tags():
    return success({"tags": BlogRepository().tags()})


@blog_bp.route("/slug/<string:slug>", methods=["GET"])
@optional_authenticate
def get_by_slug(slug: str):
    """Read a post by slug; anonymous reads count as a view."""
    repo = BlogRepository()
    post = _visible(repo, repo.get_by_slug(slug))
    if current_user() is None:
        repo.increment_views(post)
    return success({"blog": post.to_dict()})


@blog_bp.route("/<int:post_id>", methods=["GET"])
@optional_authenticate
def get_post(post_id: int):
    repo = BlogRepository()
    post = _visible(repo, repo.get(post_id))
    return success({"blog": post.to_dict()})


@blog_bp.route("/<int:post_id>/views", methods=["PATCH"])
@optional_authenticate
def increment_views(post_id: int):
    repo = BlogRepository()
    post = _visible(repo, repo.get(post_id))
    views = repo.increment_views(post)
    return success({"views": views}, "Views incremented successfully")


@blog_bp.route("", methods=["POST"])
@authenticate
@require_roles(*WRITE_ROLES)
def create_post():
    body = validate_body(request, BlogCreate)
    values = body.values()
    values["slug"] = derive_slug(body.slug, body.title)
    values["author_id"] = g.current_user.id
    if body.status == "published" and body.publish_date is None:
        values["publish_date"] = utcnow()
    if not body.read_time:
        values["read_time"] = estimate_read_time(body.content)

    repo = BlogRepository()
    if repo.slug_taken(values["slug"]):
        raise ConflictError(repo.conflict_message)

    post = repo.create(**values)
    logger.info("Blog post created: %s by %s", post.title, g.current_user.email)
    return created({"blog": post.to_dict()}, "Blog post created successfully")


@blog_bp.route("/<int:post_id>", methods=["PUT"])
@authenticate
@require_roles(*WRITE_ROLES)
@require_ownership("authorId")
def update_post(post_id: int):
    body = validate_body(request, BlogUpdate, allow_empty=True)
    repo = BlogRepository()
    post = repo.get_or_404(post_id)

    changes = body.values()
    if "slug" in changes and repo.slug_taken(changes["slug"], exclude_id=post.id):
        raise ConflictError(repo.conflict_message)
    if (
        changes.get("status") == "published"
        and post.publish_date is None
        and "publish_date" not in changes
    ):
        changes["publish_date"] = utcnow()
    if "content" in changes and "read_time" not in changes:
        changes["read_time"] = estimate_read_time(changes["content"])

    repo.update(post, changes)
    logger.info("Blog post updated: %s by %s", post.title, g.current_user.email)
    return success({"blog": post.to_dict()}, "Blog post updated successfully")


@blog_bp.route("/<int:post_id>", methods=["DELETE"])
@authenticate
@require_roles(*WRITE_ROLES)
@require_ownership("authorId")
def delete_post(post_id: int):
    repo = BlogRepository()
    post = repo.get_or_404(post_id)
    title = post.title
    repo.delete(post)
    logger.info("Blog post deleted: %s by %s", title, g.current_user.email)
    return success(message="Blog post deleted successfully")
