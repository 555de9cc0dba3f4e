"""User model - portfolio administrators."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel

from src.portfolio.models.base import utc_now
from src.portfolio.models.enums import UserRole


class User(SQLModel, table=True):
    """Account allowed to sign in. Never hard-deleted, only deactivated."""

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    username: str = Field(max_length=30, unique=True, index=True)
    email: str = Field(max_length=255, unique=True, index=True)
    hashed_password: str = Field(max_length=255)
    role: str = Field(default=UserRole.ADMIN.value, max_length=20)
    is_active: bool = Field(default=True)
    profile_image: str | None = Field(default=None, max_length=500)
    last_login: datetime | None = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value
