"""Repository for Testimonial entity."""

from collections.abc import Sequence
from typing import Any
from uuid import UUID

from sqlalchemy import case, func, update
from sqlmodel import select

from src.portfolio.core.logging import get_logger
from src.portfolio.models import (
    MAX_FEATURED_TESTIMONIALS,
    MAX_RATING,
    MIN_RATING,
    Testimonial,
    TestimonialStatus,
)
from src.portfolio.models.base import utc_now
from src.portfolio.repositories.base import BaseRepository
from src.portfolio.repositories.query import Page, QueryBuilder
from src.portfolio.schemas.pagination import ListParams
from src.portfolio.services.access import PUBLIC, AccessPolicy

logger = get_logger(__name__)

PUBLIC_STATUS = TestimonialStatus.APPROVED.value


class TestimonialRepository(BaseRepository[Testimonial]):
    """Repository for Testimonial entity.

    ``save`` enforces the featured cap: after a featured testimonial is
    written, the least recently updated of the others is unfeatured when
    the cap would otherwise be exceeded.
    """

    model = Testimonial
    sortable_fields = frozenset(
        {"created_at", "updated_at", "name", "company", "rating", "featured", "status"}
    )

    async def save(self, testimonial: Testimonial) -> Testimonial:
        """Write pending changes (no commit) and apply the featured cap."""
        self.session.add(testimonial)
        await self.session.flush()
        if testimonial.featured:
            await self._evict_oldest_featured(testimonial.id)
        return testimonial

    async def _evict_oldest_featured(self, keep_id: UUID) -> None:
        others = (Testimonial.featured == True, Testimonial.id != keep_id)  # noqa: E712
        if await self.count(others) < MAX_FEATURED_TESTIMONIALS:
            return
        result = await self.session.execute(
            select(Testimonial)
            .where(*others)
            .order_by(Testimonial.updated_at.asc())  # type: ignore[attr-defined]
            .limit(1)
        )
        oldest = result.scalar_one_or_none()
        if oldest is None:
            return
        oldest.featured = False
        oldest.updated_at = utc_now()
        self.session.add(oldest)
        await self.session.flush()
        logger.info("Featured testimonial evicted", testimonial_id=str(oldest.id))

    async def find(
        self,
        params: ListParams,
        policy: AccessPolicy,
        *,
        status: str | None = None,
        featured: str | None = None,
        min_rating: str | int | None = None,
        company: str | None = None,
    ) -> Page[Testimonial]:
        """List testimonials visible to ``policy`` with optional filters.

        A ``min_rating`` that is not an integer from 1 to 5 is ignored rather
        than rejected.
        """
        query = (
            QueryBuilder()
            .status(Testimonial.status, status, PUBLIC_STATUS, policy)
            .flag(Testimonial.featured, featured)
            .at_least(Testimonial.rating, min_rating, lo=MIN_RATING, hi=MAX_RATING)
            .contains(Testimonial.company, company)
            .any_contains(
                [
                    Testimonial.name,
                    Testimonial.company,
                    Testimonial.position,
                    Testimonial.message,
                ],
                params.search,
            )
        )
        return await self.fetch_page(query.clauses, params)

    async def find_by_rating(self, min_rating: int, params: ListParams) -> Page[Testimonial]:
        return await self.find(params, PUBLIC, min_rating=min_rating)

    async def find_by_company(self, company: str, params: ListParams) -> Page[Testimonial]:
        return await self.find(params, PUBLIC, company=company)

    async def featured(self, limit: int) -> list[Testimonial]:
        """Approved featured testimonials, most recently updated first."""
        result = await self.session.execute(
            select(Testimonial)
            .where(Testimonial.featured == True, Testimonial.status == PUBLIC_STATUS)  # noqa: E712
            .order_by(Testimonial.updated_at.desc())  # type: ignore[attr-defined]
            .limit(limit)
        )
        return list(result.scalars().all())

    async def detach_project(self, project_id: UUID) -> None:
        """Clear the project link on testimonials that reference ``project_id``."""
        await self.session.execute(
            update(Testimonial)
            .where(Testimonial.project_id == project_id)  # type: ignore[arg-type]
            .values(project_id=None)
        )

    async def status_summary(self) -> Sequence[Any]:
        """One row per status: ``status``, ``total``, ``featured`` and ``rating_sum``."""
        featured = func.sum(case((Testimonial.featured == True, 1), else_=0))  # noqa: E712
        result = await self.session.execute(
            select(
                Testimonial.status,
                func.count().label("total"),
                featured.label("featured"),
                func.sum(Testimonial.rating).label("rating_sum"),
            ).group_by(Testimonial.status)
        )
        return result.all()

    async def rating_counts(self) -> Sequence[Any]:
        """Approved testimonials per rating, lowest rating first."""
        result = await self.session.execute(
            select(Testimonial.rating, func.count())
            .where(Testimonial.status == PUBLIC_STATUS)
            .group_by(Testimonial.rating)
            .order_by(Testimonial.rating.asc())  # type: ignore[attr-defined]
        )
        return result.all()

    async def top_companies(self, limit: int) -> Sequence[Any]:
        """Companies with the most approved testimonials and their average rating."""
        total = func.count().label("total")
        average = func.avg(Testimonial.rating).label("average")
        result = await self.session.execute(
            select(Testimonial.company, total, average)
            .where(
                Testimonial.status == PUBLIC_STATUS,
                Testimonial.company.is_not(None),  # type: ignore[union-attr]
                Testimonial.company != "",
            )
            .group_by(Testimonial.company)
            .order_by(total.desc(), average.desc(), Testimonial.company.asc())  # type: ignore[union-attr]
            .limit(limit)
        )
        return result.all()

    async def recent_approved(self, limit: int = 5) -> list[Testimonial]:
        result = await self.session.execute(
            select(Testimonial)
            .where(Testimonial.status == PUBLIC_STATUS)
            .order_by(Testimonial.created_at.desc())  # type: ignore[attr-defined]
            .limit(limit)
        )
        return list(result.scalars().all())
