"""Statistics summaries for the admin dashboards."""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from src.portfolio.schemas.base import CamelModel


class YearCount(CamelModel):
    year: str
    count: int


class TechnologyCount(CamelModel):
    technology: str
    count: int


class RecentProject(CamelModel):
    id: UUID
    title: str
    created_at: datetime
    view_count: int
    featured: bool


class ProjectStats(CamelModel):
    total: int = 0
    published: int = 0
    draft: int = 0
    archived: int = 0
    featured: int = 0
    total_views: int = 0
    year_distribution: list[YearCount] = Field(default_factory=list)
    tech_distribution: list[TechnologyCount] = Field(default_factory=list)
    recent_projects: list[RecentProject] = Field(default_factory=list)


class RatingCount(CamelModel):
    rating: int
    count: int


class CompanySummary(CamelModel):
    company: str
    count: int
    average_rating: float


class RecentTestimonial(CamelModel):
    id: UUID
    name: str
    company: str | None
    rating: int
    created_at: datetime
    featured: bool


class TestimonialStats(CamelModel):
    total: int = 0
    approved: int = 0
    pending: int = 0
    rejected: int = 0
    featured: int = 0
    average_rating: float = 0.0
    rating_distribution: list[RatingCount] = Field(default_factory=list)
    top_companies: list[CompanySummary] = Field(default_factory=list)
    recent_testimonials: list[RecentTestimonial] = Field(default_factory=list)
    pending_count: int = 0


class ProjectStatsResponse(CamelModel):
    success: bool = True
    stats: ProjectStats


class TestimonialStatsResponse(CamelModel):
    success: bool = True
    stats: TestimonialStats
