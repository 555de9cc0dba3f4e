"""Project schemas for API request/response."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import Field, StrictBool, computed_field, field_validator, model_validator

from src.portfolio.core.validators import (
    clean_string_list,
    strip_or_none,
    validate_url,
    validate_year,
)
from src.portfolio.models.enums import ProjectStatus
from src.portfolio.schemas.base import CamelModel
from src.portfolio.schemas.pagination import PaginationMeta

MAX_TECHNOLOGY_LENGTH = 50


def _fold_legacy_tech(data: Any) -> Any:
    """Accept the legacy ``tech`` field (list or comma string) as ``technologies``."""
    if isinstance(data, dict) and "tech" in data:
        data = dict(data)
        tech = data.pop("tech")
        if "technologies" not in data and tech is not None:
            data["technologies"] = tech
    return data


class _ProjectFields(CamelModel):
    """Field rules shared by create and update payloads."""

    @model_validator(mode="before")
    @classmethod
    def fold_legacy_tech(cls, data: Any) -> Any:
        return _fold_legacy_tech(data)

    @field_validator("title", check_fields=False)
    @classmethod
    def validate_title(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        if len(v) < 2:
            raise ValueError("Title must be between 2 and 200 characters")
        return v

    @field_validator("subtitle", "description", check_fields=False)
    @classmethod
    def strip_text(cls, v: str | None) -> str | None:
        return strip_or_none(v)

    @field_validator("technologies", mode="before", check_fields=False)
    @classmethod
    def clean_technologies(cls, v: Any) -> list[str] | None:
        if v is None:
            return None
        return clean_string_list(v, max_item_length=MAX_TECHNOLOGY_LENGTH, label="Technology")

    @field_validator("tags", mode="before", check_fields=False)
    @classmethod
    def clean_tags(cls, v: Any) -> list[str] | None:
        if v is None:
            return None
        return clean_string_list(v, lower=True)

    @field_validator("year", check_fields=False)
    @classmethod
    def check_year(cls, v: str | None) -> str | None:
        return validate_year(v)

    @field_validator("thumbnail_url", "live_url", "github_url", check_fields=False)
    @classmethod
    def check_urls(cls, v: str | None) -> str | None:
        return validate_url(v)


class ProjectCreate(_ProjectFields):
    """Schema for creating a project."""

    title: str = Field(max_length=200)
    subtitle: str | None = Field(default=None, max_length=200)
    description: str | None = Field(default=None, max_length=1000)
    technologies: list[str] = Field(default_factory=list)
    year: str | None = None
    featured: StrictBool = False
    status: ProjectStatus = ProjectStatus.PUBLISHED.value  # type: ignore[assignment]
    thumbnail_url: str | None = None
    live_url: str | None = None
    github_url: str | None = None
    tags: list[str] = Field(default_factory=list)


class ProjectUpdate(_ProjectFields):
    """Schema for updating a project. Only provided fields change."""

    title: str | None = Field(default=None, max_length=200)
    subtitle: str | None = Field(default=None, max_length=200)
    description: str | None = Field(default=None, max_length=1000)
    technologies: list[str] | None = None
    year: str | None = None
    featured: StrictBool | None = None
    status: ProjectStatus | None = None
    thumbnail_url: str | None = None
    live_url: str | None = None
    github_url: str | None = None
    tags: list[str] | None = None


class FeaturedToggle(CamelModel):
    """Explicit featured value; omit it to flip the current value."""

    featured: StrictBool | None = None


class ProjectRead(CamelModel):
    """Schema for reading a project."""

    id: UUID
    title: str
    subtitle: str | None
    description: str | None
    technologies: list[str]
    year: str
    featured: bool
    status: str
    thumbnail_url: str | None
    live_url: str | None
    github_url: str | None
    view_count: int
    tags: list[str]
    created_by: UUID
    updated_by: UUID | None
    created_at: datetime
    updated_at: datetime

    @computed_field  # type: ignore[prop-decorator]
    @property
    def tech(self) -> list[str]:
        return self.technologies


class ProjectResponse(CamelModel):
    success: bool = True
    message: str | None = None
    project: ProjectRead


class ProjectDeleteResponse(CamelModel):
    success: bool = True
    message: str
    deleted_project: ProjectRead


class ProjectListResponse(CamelModel):
    success: bool = True
    projects: list[ProjectRead]
    pagination: PaginationMeta
    year: str | None = None
    technology: str | None = None


class FeaturedProjectsResponse(CamelModel):
    success: bool = True
    projects: list[ProjectRead]
    total: int
