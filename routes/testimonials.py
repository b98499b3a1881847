"""Testimonials blueprint."""

from __future__ import annotations

import logging

from flask import Blueprint, g, request

from models.user import WRITE_ROLES
from repositories.testimonial import TestimonialRepository
from schemas.testimonial import TestimonialCreate, TestimonialListParams, TestimonialUpdate
from utils.auth import authenticate, optional_authenticate, require_roles
from utils.request_validation import validate_body, validate_query
from utils.responses import created, paginated, success

logger = logging.getLogger(__name__)

testimonials_bp = Blueprint("testimonials", __name__)


@testimonials_bp.route("", methods=["GET"])
@optional_authenticate
def list_testimonials():
    params = validate_query(request, TestimonialListParams)
    page = TestimonialRepository().list(params.to_list_query())
    return success(paginated("testimonials", page.items, page))


@testimonials_bp.route("/stats", methods=["GET"])
@authenticate
@require_roles(*WRITE_ROLES)
def stats():
    return success({"stats": TestimonialRepository().stats()})


@testimonials_bp.route("/companies", methods=["GET"])
def companies():
    return success({"companies": TestimonialRepository().companies()})


@testimonials_bp.route("/project-types", methods=["GET"])
def project_types():
    return success({"projectTypes": TestimonialRepository().project_types()})


@testimonials_bp.route("/<int:testimonial_id>", methods=["GET"])
@optional_authenticate
def get_testimonial(testimonial_id: int):
    testimonial = TestimonialRepository().get_or_404(testimonial_id)
    return success({"testimonial": testimonial.to_dict()})


@testimonials_bp.route("", methods=["POST"])
@authenticate
@require_roles(*WRITE_ROLES)
def create_testimonial():
    body = validate_body(request, TestimonialCreate)
    testimonial = TestimonialRepository().create(**body.values())
    logger.info("Testimonial created: %s by %s", testimonial.name, g.current_user.email)
    return created({"testimonial": testimonial.to_dict()}, "Testimonial created successfully")


@testimonials_bp.route("/<int:testimonial_id>", methods=["PUT"])
@authenticate
@require_roles(*WRITE_ROLES)
def update_testimonial(testimonial_id: int):
    body = validate_body(request, TestimonialUpdate, allow_empty=True)
    repo = TestimonialRepository()
    testimonial = repo.update(repo.get_or_404(testimonial_id), body.values())
    return success({"testimonial": testimonial.to_dict()}, "Testimonial updated successfully")


@testimonials_bp.route("/<int:testimonial_id>/featured", methods=["PATCH"])
@authenticate
@require_roles(*WRITE_ROLES)
def toggle_featured(testimonial_id: int):
    repo = TestimonialRepository()
    testimonial = repo.toggle_featured(repo.get_or_404(testimonial_id))
    return success({"testimonial": testimonial.to_dict()}, "Featured status toggled successfully")


@testimonials_bp.route("/<int:testimonial_id>/approve", methods=["PATCH"])
@authenticate
@require_roles(*WRITE_ROLES)
def approve(testimonial_id: int):
    repo = TestimonialRepository()
    testimonial = repo.set_status(repo.get_or_404(testimonial_id), "approved")
    logger.info("Testimonial %s approved by %s", testimonial_id, g.current_user.email)
    return success({"testimonial": testimonial.to_dict()}, "Testimonial approved successfully")


@testimonials_bp.route("/<int:testimonial_id>/reject", methods=["PATCH"])
@authenticate
@require_roles(*WRITE_ROLES)
def reject(testimonial_id: int):
    repo = TestimonialRepository()
    testimonial = repo.set_status(repo.get_or_404(testimonial_id), "rejected")
    logger.info("Testimonial %s rejected by %s", testimonial_id, g.current_user.email)
    return success({"testimonial": testimonial.to_dict()}, "Testimonial rejected successfully")


@testimonials_bp.route("/<int:testimonial_id>", methods=["DELETE"])
@authenticate
@require_roles(*WRITE_ROLES)
def delete_testimonial(testimonial_id: int):
    repo = TestimonialRepository()
    repo.delete(repo.get_or_404(testimonial_id))
    logger.info("Testimonial %s deleted by %s", testimonial_id, g.current_user.email)
    return success(message="Testimonial deleted successfully")
