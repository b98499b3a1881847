"""Experience blueprint: resume timeline."""

from __future__ import annotations

import logging

from flask import Blueprint, g, request

from models.user import WRITE_ROLES
from repositories.experience import ExperienceRepository
from schemas.common import LimitParams
from schemas.experience import (
    ExperienceCreate,
    ExperienceListParams,
    ExperienceUpdate,
    check_date_range,
)
from utils.auth import authenticate, optional_authenticate, require_roles
from utils.errors import ValidationError
from utils.request_validation import validate_body, validate_query
from utils.responses import created, paginated, success

logger = logging.getLogger(__name__)

experience_bp = Blueprint("experience", __name__)


@experience_bp.route("", methods=["GET"])
@optional_authenticate
def list_experience():
    params = validate_query(request, ExperienceListParams)
    page = ExperienceRepository().list(params.to_list_query())
    return success(paginated("experiences", page.items, page))


@experience_bp.route("/current", methods=["GET"])
def current_position():
    entry = ExperienceRepository().current()
    return success({"experience": entry.to_dict() if entry else None})


@experience_bp.route("/timeline", methods=["GET"])
def timeline():
    params = validate_query(request, LimitParams)
    entries = ExperienceRepository().timeline(params.limit)
    return success({"timeline": [entry.to_dict(include_period=True) for entry in entries]})


@experience_bp.route("/companies", methods=["GET"])
def companies():
    return success({"companies": ExperienceRepository().companies()})


@experience_bp.route("/technologies", methods=["GET"])
def technologies():
    return success({"technologies": ExperienceRepository().technologies()})


@experience_bp.route("/<int:entry_id>", methods=["GET"])
@optional_authenticate
def get_experience(entry_id: int):
    entry = ExperienceRepository().get_or_404(entry_id)
    return success({"experience": entry.to_dict()})


@experience_bp.route("", methods=["POST"])
@authenticate
@require_roles(*WRITE_ROLES)
def create_experience():
    body = validate_body(request, ExperienceCreate)
    entry = ExperienceRepository().create(**body.values())
    logger.info("Experience entry created: %s at %s", entry.title, entry.company)
    return created({"experience": entry.to_dict()}, "Experience entry created successfully")


@experience_bp.route("/<int:entry_id>", methods=["PUT"])
@authenticate
@require_roles(*WRITE_ROLES)
def update_experience(entry_id: int):
    body = validate_body(request, ExperienceUpdate, allow_empty=True)
    repo = ExperienceRepository()
    entry = repo.get_or_404(entry_id)

    changes = body.values()
    try:
        check_date_range(
            changes.get("start_date", entry.start_date),
            changes.get("end_date", entry.end_date),
        )
    except ValueError as exc:
        raise ValidationError(
            "Validation failed", errors=[{"field": "endDate", "message": str(exc)}]
        ) from exc

    repo.update(entry, changes)
    logger.info("Experience entry updated: %s by %s", entry.title, g.current_user.email)
    return success({"experience": entry.to_dict()}, "Experience entry updated successfully")


@experience_bp.route("/<int:entry_id>", methods=["DELETE"])
@authenticate
@require_roles(*WRITE_ROLES)
def delete_experience(entry_id: int):
    repo = ExperienceRepository()
    entry = repo.get_or_404(entry_id)
    repo.delete(entry)
    logger.info("Experience entry %s deleted by %s", entry_id, g.current_user.email)
    return success(message="Experience entry deleted successfully")
