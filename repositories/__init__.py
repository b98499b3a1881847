"""Data access objects, one per resource."""

from .base import ListQuery, Page, Repository
from .blog import BlogRepository
from .contact import ContactRepository
from .experience import ExperienceRepository
from .portfolio import PortfolioRepository
from .testimonial import TestimonialRepository
from .users import UserRepository

__all__ = [
    "ListQuery",
    "Page",
    "Repository",
    "BlogRepository",
    "ContactRepository",
    "ExperienceRepository",
    "PortfolioRepository",
    "TestimonialRepository",
    "UserRepository",
]
