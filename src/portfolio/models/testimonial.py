"""Testimonial model - client feedback shown on the portfolio."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import CheckConstraint
from sqlmodel import Field, SQLModel

from src.portfolio.models.base import utc_now
from src.portfolio.models.enums import TestimonialStatus

# At most this many testimonials hold featured=True at once.
MAX_FEATURED_TESTIMONIALS = 10

MIN_RATING = 1
MAX_RATING = 5


class Testimonial(SQLModel, table=True):
    """A client testimonial. Only ``approved`` testimonials are public."""

    __tablename__ = "testimonials"
    __table_args__ = (
        CheckConstraint(
            f"rating >= {MIN_RATING} AND rating <= {MAX_RATING}",
            name="ck_testimonials_rating_range",
        ),
    )

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=100)
    position: str | None = Field(default=None, max_length=100)
    company: str | None = Field(default=None, max_length=100, index=True)
    message: str = Field(max_length=1000)
    rating: int = Field(index=True)
    featured: bool = Field(default=False, index=True)
    status: str = Field(default=TestimonialStatus.APPROVED.value, max_length=20, index=True)
    avatar_url: str | None = Field(default=None, max_length=500)
    website: str | None = Field(default=None, max_length=500)
    project_id: UUID | None = Field(default=None, foreign_key="projects.id", ondelete="SET NULL")
    email: str | None = Field(default=None, max_length=255)
    location: str | None = Field(default=None, max_length=100)
    verified: bool = Field(default=False)
    created_by: UUID = Field(foreign_key="users.id")
    updated_by: UUID | None = Field(default=None, foreign_key="users.id")
    created_at: datetime = Field(default_factory=utc_now, index=True)
    updated_at: datetime = Field(default_factory=utc_now)
