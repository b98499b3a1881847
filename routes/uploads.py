"""Upload blueprint: file intake, metadata and removal."""

from __future__ import annotations

import logging

from flask import Blueprint, g, request

from models.user import WRITE_ROLES
from services.uploads import StoredFile, get_upload_service
from storage import CATEGORIES
from utils.auth import authenticate, require_roles
from utils.errors import NotFoundError, ValidationError
from utils.responses import success

logger = logging.getLogger(__name__)

upload_bp = Blueprint("upload", __name__)


def _category_param() -> str:
    category = request.args.get("type", "images")
    if category not in CATEGORIES:
        raise ValidationError('Invalid file type. Must be "images" or "documents"')
    return category


def _image_payload(stored: StoredFile) -> dict:
    return {
        "originalName": stored.original_name,
        "filename": stored.filename,
        "url": stored.url,
        "webpUrl": stored.webp_url,
        "processedVersions": stored.processed_versions,
    }


@upload_bp.route("/single", methods=["POST"])
@authenticate
@require_roles(*WRITE_ROLES)
def upload_single():
    service = get_upload_service()
    (upload,) = service.collect(request.files, "file")
    stored = service.store(upload, "file")
    logger.info("File uploaded: %s by %s", stored.original_name, g.current_user.email)
    return success({"file": stored.to_dict()}, "File uploaded successfully")


@upload_bp.route("/multiple", methods=["POST"])
@authenticate
@require_roles(*WRITE_ROLES)
def upload_multiple():
    service = get_upload_service()
    uploads = service.collect(
        request.files,
        "files",
        max_count=service.max_files,
        missing_message="No files uploaded",
    )
    stored = service.store_all(uploads, "files")
    logger.info("%d files uploaded by %s", len(stored), g.current_user.email)
    return success(
        {"files": [item.to_dict() for item in stored], "count": len(stored)},
        f"{len(stored)} files uploaded successfully",
    )


@upload_bp.route("/avatar", methods=["POST"])
@authenticate
@require_roles(*WRITE_ROLES)
def upload_avatar():
    service = get_upload_service()
    uploads = service.collect(request.files, "avatar", missing_message="No avatar file uploaded")
    service.require_images(uploads, "Avatar must be an image file")
    stored = service.store(uploads[0], "avatar")
    return success({"avatar": _image_payload(stored)}, "Avatar uploaded successfully")


@upload_bp.route("/portfolio-image", methods=["POST"])
@authenticate
@require_roles(*WRITE_ROLES)
def upload_portfolio_image():
    service = get_upload_service()
    uploads = service.collect(
        request.files, "image", missing_message="No portfolio image uploaded"
    )
    service.require_images(uploads, "Portfolio image must be an image file")
    stored = service.store(uploads[0], "image")
    return success({"image": _image_payload(stored)}, "Portfolio image uploaded successfully")


@upload_bp.route("/stats", methods=["GET"])
@authenticate
@require_roles(*WRITE_ROLES)
def upload_stats():
    return success({"stats": get_upload_service().stats()})


@upload_bp.route("/<string:filename>", methods=["GET"])
def file_info(filename: str):
    category = _category_param()
    info = get_upload_service().info(category, filename)
    if info is None:
        raise NotFoundError("File not found")
    return success({"filename": filename, "url": f"/uploads/{category}/{filename}", **info})


@upload_bp.route("/<string:filename>", methods=["DELETE"])
@authenticate
@require_roles(*WRITE_ROLES)
def delete_file(filename: str):
    category = _category_param()
    service = get_upload_service()
    if service.info(category, filename) is None:
        raise NotFoundError("File not found")
    service.delete(category, filename)
    logger.info("File deleted: %s by %s", filename, g.current_user.email)
    return success(message="File deleted successfully")
