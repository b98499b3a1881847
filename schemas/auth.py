"""Auth and user management payloads."""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import AfterValidator, Field

from models.user import Role

from .common import CamelModel, Email, ListParams, PartialModel, Password, Url

RoleName = Literal["admin", "super_admin"]
AccountEmail = Annotated[Email, AfterValidator(lambda value: value.strip().lower())]


class RegisterRequest(CamelModel):
    name: str = Field(min_length=2, max_length=255)
    email: AccountEmail
    password: Password
    role: RoleName = Role.ADMIN.value


class LoginRequest(CamelModel):
    email: AccountEmail
    password: str = Field(min_length=1)


class RefreshRequest(CamelModel):
    refresh_token: str | None = None


class UpdateProfileRequest(PartialModel):
    name: str | None = Field(None, min_length=2, max_length=255)
    email: AccountEmail | None = None
    avatar: Url | None = None


class ChangePasswordRequest(CamelModel):
    current_password: str = Field(min_length=1)
    new_password: Password


class UserListParams(ListParams):
    role: RoleName | None = None
