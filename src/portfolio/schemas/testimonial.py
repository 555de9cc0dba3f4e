"""Testimonial schemas for API request/response."""

from datetime import datetime
from uuid import UUID

from pydantic import EmailStr, Field, StrictBool, computed_field, field_validator

from src.portfolio.core.validators import strip_or_none, validate_url
from src.portfolio.models.enums import TestimonialStatus
from src.portfolio.schemas.base import CamelModel
from src.portfolio.schemas.pagination import PaginationMeta


class _TestimonialFields(CamelModel):
    """Field rules shared by create and update payloads."""

    @field_validator("name", check_fields=False)
    @classmethod
    def validate_name(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        if len(v) < 2:
            raise ValueError("Name must be between 2 and 100 characters")
        return v

    @field_validator("message", check_fields=False)
    @classmethod
    def validate_message(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        if len(v) < 10:
            raise ValueError("Message must be between 10 and 1000 characters")
        return v

    @field_validator("position", "company", "location", check_fields=False)
    @classmethod
    def strip_text(cls, v: str | None) -> str | None:
        return strip_or_none(v)

    @field_validator("email", mode="before", check_fields=False)
    @classmethod
    def normalize_email(cls, v: str | None) -> str | None:
        v = strip_or_none(v)
        return v.lower() if v is not None else None

    @field_validator("avatar_url", check_fields=False)
    @classmethod
    def check_avatar_url(cls, v: str | None) -> str | None:
        return validate_url(v, "Avatar URL")

    @field_validator("website", check_fields=False)
    @classmethod
    def check_website(cls, v: str | None) -> str | None:
        return validate_url(v, "Website URL")


class TestimonialCreate(_TestimonialFields):
    """Schema for creating a testimonial."""

    name: str = Field(max_length=100)
    position: str | None = Field(default=None, max_length=100)
    company: str | None = Field(default=None, max_length=100)
    message: str = Field(max_length=1000)
    rating: int = Field(ge=1, le=5)
    featured: StrictBool = False
    status: TestimonialStatus = TestimonialStatus.APPROVED.value  # type: ignore[assignment]
    avatar_url: str | None = None
    website: str | None = None
    project_id: UUID | None = None
    email: EmailStr | None = None
    location: str | None = Field(default=None, max_length=100)
    verified: StrictBool = False


class TestimonialUpdate(_TestimonialFields):
    """Schema for updating a testimonial. Only provided fields change."""

    name: str | None = Field(default=None, max_length=100)
    position: str | None = Field(default=None, max_length=100)
    company: str | None = Field(default=None, max_length=100)
    message: str | None = Field(default=None, max_length=1000)
    rating: int | None = Field(default=None, ge=1, le=5)
    featured: StrictBool | None = None
    status: TestimonialStatus | None = None
    avatar_url: str | None = None
    website: str | None = None
    project_id: UUID | None = None
    email: EmailStr | None = None
    location: str | None = Field(default=None, max_length=100)
    verified: StrictBool | None = None


class TestimonialRead(CamelModel):
    """Schema for reading a testimonial."""

    id: UUID
    name: str
    position: str | None
    company: str | None
    message: str
    rating: int
    featured: bool
    status: str
    avatar_url: str | None
    website: str | None
    project_id: UUID | None
    email: str | None
    location: str | None
    verified: bool
    created_by: UUID
    updated_by: UUID | None
    created_at: datetime
    updated_at: datetime

    @computed_field  # type: ignore[prop-decorator]
    @property
    def full_title(self) -> str:
        title = self.name
        if self.position and self.company:
            title += f", {self.position} at {self.company}"
        elif self.position:
            title += f", {self.position}"
        elif self.company:
            title += f" from {self.company}"
        return title

    @computed_field  # type: ignore[prop-decorator]
    @property
    def rating_stars(self) -> str:
        return "★" * self.rating + "☆" * (5 - self.rating)


class TestimonialResponse(CamelModel):
    success: bool = True
    message: str | None = None
    testimonial: TestimonialRead


class TestimonialDeleteResponse(CamelModel):
    success: bool = True
    message: str
    deleted_testimonial: TestimonialRead


class TestimonialListResponse(CamelModel):
    success: bool = True
    testimonials: list[TestimonialRead]
    pagination: PaginationMeta
    rating: int | None = None
    company: str | None = None


class FeaturedTestimonialsResponse(CamelModel):
    success: bool = True
    testimonials: list[TestimonialRead]
    total: int
