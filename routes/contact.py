"""Contact blueprint: public form submission and the admin inbox."""

from __future__ import annotations

import logging

from flask import Blueprint, current_app, g, request

from extensions import limiter
from models.user import WRITE_ROLES
from repositories.contact import ContactRepository
from schemas.contact import ContactCreate, ContactListParams, ContactReply, ContactStatusUpdate
from services.mailer import get_mailer
from utils.auth import attach_client_info, authenticate, require_roles
from utils.errors import UpstreamError
from utils.request_validation import validate_body, validate_query
from utils.responses import created, paginated, success

logger = logging.getLogger(__name__)

contact_bp = Blueprint("contact", __name__)


@contact_bp.route("", methods=["POST"])
@limiter.limit(lambda: current_app.config["CONTACT_RATE_LIMIT"])
@attach_client_info
def submit():
    """Store a contact form message and notify the site owner."""
    body = validate_body(request, ContactCreate)
    contact = ContactRepository().create(
        **body.values(),
        ip_address=g.client_info["ipAddress"],
        user_agent=g.client_info["userAgent"],
        status="unread",
    )

    try:
        get_mailer().notify_new_contact(contact)
    except UpstreamError:
        logger.error("Failed to send contact form notification for %s", contact.email)

    logger.info("Contact form submitted: %s - %s", contact.email, contact.subject)
    return created(
        {"contact": contact.to_dict()},
        "Message sent successfully! We'll get back to you soon.",
    )


@contact_bp.route("", methods=["GET"])
@authenticate
@require_roles(*WRITE_ROLES)
def list_messages():
    params = validate_query(request, ContactListParams)
    page = ContactRepository().list(params.to_list_query())
    return success(paginated("contacts", page.items, page))


@contact_bp.route("/stats", methods=["GET"])
@authenticate
@require_roles(*WRITE_ROLES)
def stats():
    return success({"stats": ContactRepository().stats()})


@contact_bp.route("/<int:contact_id>", methods=["GET"])
@authenticate
@require_roles(*WRITE_ROLES)
def get_message(contact_id: int):
    """Read a message; the first read moves it from unread to read."""
    repo = ContactRepository()
    contact = repo.mark_read(repo.get_or_404(contact_id))
    return success({"contact": contact.to_dict()})


@contact_bp.route("/<int:contact_id>/reply", methods=["POST"])
@authenticate
@require_roles(*WRITE_ROLES)
def reply(contact_id: int):
    body = validate_body(request, ContactReply)
    repo = ContactRepository()
    contact = repo.mark_replied(repo.get_or_404(contact_id), body.reply_message)

    try:
        email_sent = get_mailer().send_reply(contact, body.reply_message)
    except UpstreamError:
        logger.error("Failed to send reply email to %s", contact.email)
        email_sent = False

    logger.info("Reply to %s recorded by %s", contact.email, g.current_user.email)
    message = "Reply sent successfully" if email_sent else "Reply recorded, but the email was not sent"
    return success({"contact": contact.to_dict(), "emailSent": email_sent}, message)


@contact_bp.route("/<int:contact_id>/status", methods=["PATCH"])
@authenticate
@require_roles(*WRITE_ROLES)
def update_status(contact_id: int):
    body = validate_body(request, ContactStatusUpdate)
    repo = ContactRepository()
    contact = repo.update(repo.get_or_404(contact_id), {"status": body.status})
    logger.info("Contact message status updated: %s to %s", contact_id, body.status)
    return success({"contact": contact.to_dict()}, "Status updated successfully")


@contact_bp.route("/<int:contact_id>/archive", methods=["PATCH"])
@authenticate
@require_roles(*WRITE_ROLES)
def archive(contact_id: int):
    repo = ContactRepository()
    contact = repo.archive(repo.get_or_404(contact_id))
    return success({"contact": contact.to_dict()}, "Contact message archived successfully")


@contact_bp.route("/<int:contact_id>", methods=["DELETE"])
@authenticate
@require_roles(*WRITE_ROLES)
def delete_message(contact_id: int):
    repo = ContactRepository()
    repo.delete(repo.get_or_404(contact_id))
    logger.info("Contact message %s deleted by %s", contact_id, g.current_user.email)
    return success(message="Contact message deleted successfully")
