"""Database initialization and model exports."""

from flask_sqlalchemy import SQLAlchemy


db = SQLAlchemy()

# Import models to register them with SQLAlchemy metadata.
from .user import Role, User, WRITE_ROLES  # noqa: E402,F401
from .portfolio import PortfolioItem  # noqa: E402,F401
from .experience import Experience  # noqa: E402,F401
from .blog import BlogPost  # noqa: E402,F401
from .contact import ContactMessage  # noqa: E402,F401
from .testimonial import Testimonial  # noqa: E402,F401

__all__ = [
    "db",
    "Role",
    "WRITE_ROLES",
    "User",
    "PortfolioItem",
    "Experience",
    "BlogPost",
    "ContactMessage",
    "Testimonial",
]
