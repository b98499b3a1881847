"""Outbound email over SMTP."""

from __future__ import annotations

import html
import logging
import smtplib
from dataclasses import dataclass
from email.message import EmailMessage
from email.utils import formataddr
from typing import Any, Mapping

from flask import current_app

from models.contact import ContactMessage
from utils.errors import UpstreamError

logger = logging.getLogger(__name__)


@dataclass
class Mailer:
    host: str | None
    port: int = 587
    username: str | None = None
    password: str | None = None
    sender_email: str = "no-reply@portfolio.com"
    sender_name: str = "Portfolio Team"
    admin_email: str | None = None
    timeout: int = 30

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> "Mailer":
        return cls(
            host=config.get("SMTP_HOST"),
            port=int(config.get("SMTP_PORT", 587)),
            username=config.get("SMTP_USER"),
            password=config.get("SMTP_PASS"),
            sender_email=config.get("FROM_EMAIL") or "no-reply@portfolio.com",
            sender_name=config.get("FROM_NAME") or "Portfolio Team",
            admin_email=config.get("ADMIN_EMAIL") or config.get("SMTP_USER"),
            timeout=int(config.get("SMTP_TIMEOUT", 30)),
        )

    @property
    def enabled(self) -> bool:
        return bool(self.host)

    def send(self, to: str, subject: str, html_body: str) -> bool:
        """Send one HTML message.

        Returns ``False`` when no SMTP host is configured. Transport errors
        raise :class:`UpstreamError`.
        """

        if not self.enabled:
            logger.info("SMTP not configured; skipping email to %s (%s)", to, subject)
            return False

        message = EmailMessage()
        message["From"] = formataddr((self.sender_name, self.sender_email))
        message["To"] = to
        message["Subject"] = subject
        message.set_content("This message requires an HTML capable mail client.")
        message.add_alternative(html_body, subtype="html")

        try:
            if self.port == 465:
                client = smtplib.SMTP_SSL(self.host, self.port, timeout=self.timeout)
            else:
                client = smtplib.SMTP(self.host, self.port, timeout=self.timeout)
            with client:
                if self.port != 465 and self.username:
                    client.starttls()
                if self.username:
                    client.login(self.username, self.password or "")
                client.send_message(message)
        except (smtplib.SMTPException, OSError) as exc:
            logger.error("Failed to send email to %s: %s", to, exc)
            raise UpstreamError("Failed to send email") from exc

        logger.info("Email sent to %s: %s", to, subject)
        return True

    def notify_new_contact(self, contact: ContactMessage) -> bool:
        if not self.admin_email:
            logger.info("No admin address configured; contact notification skipped")
            return False
        body = (
            "<h2>New Contact Form Submission</h2>"
            f"<p><strong>Name:</strong> {html.escape(contact.name)}</p>"
            f"<p><strong>Email:</strong> {html.escape(contact.email)}</p>"
            f"<p><strong>Subject:</strong> {html.escape(contact.subject)}</p>"
            "<p><strong>Message:</strong></p>"
            f"<p>{_paragraphs(contact.message)}</p>"
            "<hr>"
            f"<p><small>IP Address: {html.escape(contact.ip_address or '')}</small></p>"
            f"<p><small>User Agent: {html.escape(contact.user_agent or '')}</small></p>"
            f"<p><small>Submitted: {contact.created_at:%Y-%m-%d %H:%M:%S} UTC</small></p>"
        )
        return self.send(
            self.admin_email, f"New Contact Form Submission: {contact.subject}", body
        )

    def send_reply(self, contact: ContactMessage, reply_message: str) -> bool:
        body = (
            "<h2>Thank you for contacting us!</h2>"
            f"<p>Dear {html.escape(contact.name)},</p>"
            f"<p>{_paragraphs(reply_message)}</p>"
            "<hr>"
            "<p><strong>Your original message:</strong></p>"
            f"<p><em>\"{html.escape(contact.message)}\"</em></p>"
            f"<p>Best regards,<br>{html.escape(self.sender_name)}</p>"
        )
        return self.send(contact.email, f"Re: {contact.subject}", body)


def _paragraphs(text: str) -> str:
    return html.escape(text).replace("\n", "<br>")


def get_mailer() -> Mailer:
    return current_app.extensions["mailer"]
