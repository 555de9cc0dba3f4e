"""Project model - portfolio work items."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel

from src.portfolio.models.base import current_year, utc_now
from src.portfolio.models.enums import ProjectStatus


class Project(SQLModel, table=True):
    """A portfolio project. Only ``published`` projects are public."""

    __tablename__ = "projects"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    title: str = Field(max_length=200, index=True)
    subtitle: str | None = Field(default=None, max_length=200)
    description: str | None = Field(default=None, max_length=1000)
    technologies: list[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    year: str = Field(default_factory=current_year, max_length=4, index=True)
    featured: bool = Field(default=False, index=True)
    status: str = Field(default=ProjectStatus.PUBLISHED.value, max_length=20, index=True)
    thumbnail_url: str | None = Field(default=None, max_length=500)
    live_url: str | None = Field(default=None, max_length=500)
    github_url: str | None = Field(default=None, max_length=500)
    view_count: int = Field(default=0)
    tags: list[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    created_by: UUID = Field(foreign_key="users.id")
    updated_by: UUID | None = Field(default=None, foreign_key="users.id")
    created_at: datetime = Field(default_factory=utc_now, index=True)
    updated_at: datetime = Field(default_factory=utc_now)
