"""Repository for Project entity."""

from collections.abc import Sequence
from typing import Any
from uuid import UUID

from sqlalchemy import case, func, update
from sqlmodel import select

from src.portfolio.models import Project, ProjectStatus
from src.portfolio.repositories.base import BaseRepository
from src.portfolio.repositories.query import Page, QueryBuilder
from src.portfolio.schemas.pagination import ListParams
from src.portfolio.services.access import PUBLIC, AccessPolicy

PUBLIC_STATUS = ProjectStatus.PUBLISHED.value


class ProjectRepository(BaseRepository[Project]):
    """Repository for Project entity."""

    model = Project
    sortable_fields = frozenset(
        {"created_at", "updated_at", "title", "year", "view_count", "featured", "status"}
    )

    async def find(
        self,
        params: ListParams,
        policy: AccessPolicy,
        *,
        status: str | None = None,
        featured: str | None = None,
        year: str | None = None,
        technology: str | None = None,
    ) -> Page[Project]:
        """List projects visible to ``policy`` with optional filters."""
        query = (
            QueryBuilder()
            .status(Project.status, status, PUBLIC_STATUS, policy)
            .flag(Project.featured, featured)
            .equals(Project.year, year)
            .contains(Project.technologies, technology)
            .any_contains(
                [Project.title, Project.description, Project.technologies], params.search
            )
        )
        return await self.fetch_page(query.clauses, params)

    async def find_by_year(self, year: str, params: ListParams) -> Page[Project]:
        return await self.find(params, PUBLIC, year=year)

    async def find_by_technology(self, technology: str, params: ListParams) -> Page[Project]:
        return await self.find(params, PUBLIC, technology=technology)

    async def featured(self, limit: int) -> list[Project]:
        """Published featured projects, most recently updated first."""
        result = await self.session.execute(
            select(Project)
            .where(Project.featured == True, Project.status == PUBLIC_STATUS)  # noqa: E712
            .order_by(Project.updated_at.desc())  # type: ignore[attr-defined]
            .limit(limit)
        )
        return list(result.scalars().all())

    async def increment_views(self, project_id: UUID) -> None:
        """Atomically bump the view counter in the database."""
        await self.session.execute(
            update(Project)
            .where(Project.id == project_id)  # type: ignore[arg-type]
            .values(view_count=Project.view_count + 1)
        )

    async def status_summary(self) -> Sequence[Any]:
        """One row per status: ``status``, ``total``, ``featured`` and ``views``."""
        featured = func.sum(case((Project.featured == True, 1), else_=0))  # noqa: E712
        result = await self.session.execute(
            select(
                Project.status,
                func.count().label("total"),
                featured.label("featured"),
                func.sum(Project.view_count).label("views"),
            ).group_by(Project.status)
        )
        return result.all()

    async def year_counts(self) -> Sequence[Any]:
        """Published projects per year, latest year first."""
        result = await self.session.execute(
            select(Project.year, func.count())
            .where(Project.status == PUBLIC_STATUS)
            .group_by(Project.year)
            .order_by(Project.year.desc())  # type: ignore[attr-defined]
        )
        return result.all()

    async def published_technologies(self) -> list[list[str]]:
        # JSON arrays have no portable GROUP BY; callers tally the lists.
        result = await self.session.execute(
            select(Project.technologies).where(Project.status == PUBLIC_STATUS)
        )
        return [techs or [] for techs in result.scalars().all()]

    async def recent_published(self, limit: int = 5) -> list[Project]:
        result = await self.session.execute(
            select(Project)
            .where(Project.status == PUBLIC_STATUS)
            .order_by(Project.created_at.desc())  # type: ignore[attr-defined]
            .limit(limit)
        )
        return list(result.scalars().all())
