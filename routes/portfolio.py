"""Portfolio blueprint: public showcase reads and admin management."""

from __future__ import annotations

import logging

from flask import Blueprint, g, request

from models.portfolio import PortfolioItem
from models.user import WRITE_ROLES
from repositories.portfolio import PortfolioRepository
from schemas.portfolio import FeaturedParams, PortfolioCreate, PortfolioListParams, PortfolioUpdate
from utils.auth import authenticate, current_user, optional_authenticate, require_roles
from utils.errors import ConflictError, NotFoundError
from utils.request_validation import validate_body, validate_query
from utils.responses import created, paginated, success
from utils.slugs import derive_slug

logger = logging.getLogger(__name__)

portfolio_bp = Blueprint("portfolio", __name__)


def _readable(repo: PortfolioRepository, item: PortfolioItem | None) -> PortfolioItem:
    """Anonymous callers only ever see published items."""
    if item is None or (current_user() is None and item.status != "published"):
        raise NotFoundError(repo.not_found_message)
    if item.status == "published":
        repo.increment_views(item)
    return item


@portfolio_bp.route("", methods=["GET"])
@optional_authenticate
def list_portfolio():
    params = validate_query(request, PortfolioListParams)
    overrides = {} if current_user() else {"status": "published"}
    page = PortfolioRepository().list(params.to_list_query(**overrides))
    return success(paginated("portfolios", page.items, page))


@portfolio_bp.route("/featured", methods=["GET"])
def featured():
    params = validate_query(request, FeaturedParams)
    items = PortfolioRepository().featured(params.limit)
    return success({"portfolios": [item.to_dict() for item in items]})


@portfolio_bp.route("/categories", methods=["GET"])
def categories():
    return success({"categories": PortfolioRepository().categories()})


@portfolio_bp.route("/slug/<string:slug>", methods=["GET"])
@optional_authenticate
def get_by_slug(slug: str):
    repo = PortfolioRepository()
    item = _readable(repo, repo.get_by_slug(slug))
    return success({"portfolio": item.to_dict()})


@portfolio_bp.route("/<int:item_id>", methods=["GET"])
@optional_authenticate
def get_portfolio(item_id: int):
    repo = PortfolioRepository()
    item = _readable(repo, repo.get(item_id))
    return success({"portfolio": item.to_dict()})


@portfolio_bp.route("", methods=["POST"])
@authenticate
@require_roles(*WRITE_ROLES)
def create_portfolio():
    body = validate_body(request, PortfolioCreate)
    values = body.values()
    values["slug"] = derive_slug(body.slug, body.title)

    repo = PortfolioRepository()
    if repo.slug_taken(values["slug"]):
        raise ConflictError(repo.conflict_message)

    item = repo.create(**values)
    logger.info("Portfolio item created: %s by %s", item.title, g.current_user.email)
    return created({"portfolio": item.to_dict()}, "Portfolio item created successfully")


@portfolio_bp.route("/<int:item_id>", methods=["PUT"])
@authenticate
@require_roles(*WRITE_ROLES)
def update_portfolio(item_id: int):
    body = validate_body(request, PortfolioUpdate, allow_empty=True)
    repo = PortfolioRepository()
    item = repo.get_or_404(item_id)

    changes = body.values()
    if "slug" in changes and repo.slug_taken(changes["slug"], exclude_id=item.id):
        raise ConflictError(repo.conflict_message)

    repo.update(item, changes)
    logger.info("Portfolio item updated: %s by %s", item.title, g.current_user.email)
    return success({"portfolio": item.to_dict()}, "Portfolio item updated successfully")


@portfolio_bp.route("/<int:item_id>/featured", methods=["PATCH"])
@authenticate
@require_roles(*WRITE_ROLES)
def toggle_featured(item_id: int):
    repo = PortfolioRepository()
    item = repo.get_or_404(item_id)
    repo.update(item, {"featured": not item.featured})
    state = "featured" if item.featured else "unfeatured"
    return success({"portfolio": item.to_dict()}, f"Portfolio item {state} successfully")


@portfolio_bp.route("/<int:item_id>", methods=["DELETE"])
@authenticate
@require_roles(*WRITE_ROLES)
def delete_portfolio(item_id: int):
    repo = PortfolioRepository()
    item = repo.get_or_404(item_id)
    title = item.title
    repo.delete(item)
    logger.info("Portfolio item deleted: %s by %s", title, g.current_user.email)
    return success(message="Portfolio item deleted successfully")
