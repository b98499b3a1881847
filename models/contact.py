"""Contact message model."""

from __future__ import annotations

from . import db
from .mixins import TimestampMixin, isoformat

CONTACT_STATUSES = ("unread", "read", "replied", "archived")


class ContactMessage(TimestampMixin, db.Model):
    """A message left through the public contact form."""

    __tablename__ = "contact_messages"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    email = db.Column(db.String(255), nullable=False, index=True)
    subject = db.Column(db.String(500), nullable=False)
    message = db.Column(db.Text, nullable=False)
    status = db.Column(
        db.Enum(*CONTACT_STATUSES, name="contact_status_enum"),
        nullable=False,
        default="unread",
        index=True,
    )
    ip_address = db.Column(db.String(45), nullable=True)
    user_agent = db.Column(db.Text, nullable=True)
    replied = db.Column(db.Boolean, nullable=False, default=False, index=True)
    reply_message = db.Column(db.Text, nullable=True)
    replied_at = db.Column(db.DateTime, nullable=True)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "subject": self.subject,
            "message": self.message,
            "status": self.status,
            "ipAddress": self.ip_address,
            "userAgent": self.user_agent,
            "replied": self.replied,
            "replyMessage": self.reply_message,
            "repliedAt": isoformat(self.replied_at),
            "createdAt": isoformat(self.created_at),
            "updatedAt": isoformat(self.updated_at),
        }
