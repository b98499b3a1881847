"""User repository. Deactivated accounts are invisible to every lookup."""

from __future__ import annotations

from sqlalchemy import func

from models.user import User

from .base import Repository


class UserRepository(Repository[User]):
    model = User
    not_found_message = "User not found"
    conflict_message = "User with this email already exists"
    equality_filters = {"role": "role"}
    search_columns = ("name", "email")
    default_ordering = (User.created_at.desc(),)

    def default_criteria(self) -> list:
        return [User.is_active.is_(True)]

    def get_by_email(self, email: str) -> User | None:
        return self.find_one(email=email.strip().lower())

    def email_taken(self, email: str, exclude_id: int | None = None) -> bool:
        criteria = [func.lower(User.email) == email.strip().lower()]
        if exclude_id is not None:
            criteria.append(User.id != exclude_id)
        return self.count(criteria) > 0

    def soft_delete(self, user: User) -> User:
        return self.update(user, {"is_active": False})
