from datetime import datetime
from uuid import UUID

from pydantic import EmailStr, Field, field_validator

from src.portfolio.core.validators import validate_url, validate_username
from src.portfolio.schemas.base import CamelModel
from src.portfolio.schemas.pagination import PaginationMeta


class UserRead(CamelModel):
    """Outward view of a user. The password hash is never part of it."""

    id: UUID
    username: str
    email: EmailStr
    role: str
    is_active: bool
    profile_image: str | None = None
    last_login: datetime | None = None
    created_at: datetime
    updated_at: datetime


class ProfileUpdate(CamelModel):
    username: str | None = Field(default=None, min_length=3, max_length=30)
    email: EmailStr | None = None
    profile_image: str | None = Field(default=None, max_length=500)

    @field_validator("username")
    @classmethod
    def check_username(cls, v: str | None) -> str | None:
        return validate_username(v) if v is not None else None

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str | None) -> str | None:
        return v.lower().strip() if v is not None else None

    @field_validator("profile_image")
    @classmethod
    def check_profile_image(cls, v: str | None) -> str | None:
        return validate_url(v, "Profile image URL")


class UserResponse(CamelModel):
    success: bool = True
    message: str | None = None
    user: UserRead


class UserListResponse(CamelModel):
    success: bool = True
    users: list[UserRead]
    pagination: PaginationMeta
