"""Testimonial service - visibility, moderation and the featured cap."""

from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.portfolio.core.exceptions import NotFoundError, ValidationError
from src.portfolio.core.logging import get_logger
from src.portfolio.models import MAX_RATING, MIN_RATING, Testimonial, TestimonialStatus
from src.portfolio.repositories import Page, TestimonialRepository
from src.portfolio.schemas.pagination import ListParams
from src.portfolio.schemas.testimonial import TestimonialCreate, TestimonialUpdate
from src.portfolio.services import transitions
from src.portfolio.services.access import AccessPolicy

logger = get_logger(__name__)

PUBLIC_STATUS = TestimonialStatus.APPROVED.value
NOT_FOUND = "Testimonial not found"
REQUIRED_FIELDS = frozenset({"name", "message", "rating", "featured", "status", "verified"})


class TestimonialService:
    def __init__(self, testimonial_repo: TestimonialRepository, session: AsyncSession):
        self.testimonial_repo = testimonial_repo
        self.session = session

    async def _get_or_404(self, testimonial_id: UUID) -> Testimonial:
        testimonial = await self.testimonial_repo.get_by_id(testimonial_id)
        if testimonial is None:
            raise NotFoundError(NOT_FOUND)
        return testimonial

    async def _persist(self, testimonial: Testimonial) -> Testimonial:
        try:
            await self.testimonial_repo.save(testimonial)
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            raise ValidationError("Linked project does not exist") from None
        await self.session.refresh(testimonial)
        return testimonial

    async def list_testimonials(
        self,
        params: ListParams,
        policy: AccessPolicy,
        *,
        status: str | None = None,
        featured: str | None = None,
        rating: str | None = None,
        company: str | None = None,
    ) -> Page[Testimonial]:
        return await self.testimonial_repo.find(
            params, policy, status=status, featured=featured, min_rating=rating, company=company
        )

    async def featured(self, limit: int) -> list[Testimonial]:
        return await self.testimonial_repo.featured(limit)

    async def by_rating(self, raw_rating: str, params: ListParams) -> tuple[int, Page[Testimonial]]:
        """Approved testimonials rated at least ``raw_rating``.

        Raises:
            ValidationError: if the rating is not an integer from 1 to 5
        """
        try:
            min_rating = int(raw_rating)
        except ValueError:
            min_rating = 0
        if not MIN_RATING <= min_rating <= MAX_RATING:
            raise ValidationError("Invalid rating. Must be between 1 and 5")
        return min_rating, await self.testimonial_repo.find_by_rating(min_rating, params)

    async def by_company(self, company: str, params: ListParams) -> Page[Testimonial]:
        return await self.testimonial_repo.find_by_company(company, params)

    async def get(self, testimonial_id: UUID, policy: AccessPolicy) -> Testimonial:
        testimonial = await self._get_or_404(testimonial_id)
        if not policy.can_view(testimonial.status, PUBLIC_STATUS):
            raise NotFoundError(NOT_FOUND)
        return testimonial

    async def create(self, data: TestimonialCreate, actor_id: UUID) -> Testimonial:
        values = data.model_dump(exclude_none=True)
        if transitions.should_auto_feature(data.rating, data.verified):
            values["featured"] = True
        testimonial = Testimonial(**values, created_by=actor_id, updated_by=actor_id)
        await self._persist(testimonial)
        logger.info(
            "Testimonial created",
            testimonial_id=str(testimonial.id),
            featured=testimonial.featured,
        )
        return testimonial

    async def update(
        self, testimonial_id: UUID, data: TestimonialUpdate, actor_id: UUID
    ) -> Testimonial:
        testimonial = await self._get_or_404(testimonial_id)
        updates = {
            field: value
            for field, value in data.model_dump(exclude_unset=True).items()
            if value is not None or field not in REQUIRED_FIELDS
        }
        self.testimonial_repo.apply(testimonial, transitions.edit(updates, actor_id))
        await self._persist(testimonial)
        logger.info(
            "Testimonial updated", testimonial_id=str(testimonial.id), fields=sorted(updates)
        )
        return testimonial

    async def approve(self, testimonial_id: UUID, actor_id: UUID) -> Testimonial:
        testimonial = await self._get_or_404(testimonial_id)
        self.testimonial_repo.apply(testimonial, transitions.approve(testimonial, actor_id))
        return await self._persist(testimonial)

    async def reject(self, testimonial_id: UUID, actor_id: UUID) -> Testimonial:
        testimonial = await self._get_or_404(testimonial_id)
        self.testimonial_repo.apply(testimonial, transitions.reject(testimonial, actor_id))
        return await self._persist(testimonial)

    async def verify(self, testimonial_id: UUID, actor_id: UUID) -> Testimonial:
        testimonial = await self._get_or_404(testimonial_id)
        self.testimonial_repo.apply(testimonial, transitions.verify(testimonial, actor_id))
        return await self._persist(testimonial)

    async def set_featured(
        self, testimonial_id: UUID, featured: bool | None, actor_id: UUID
    ) -> Testimonial:
        testimonial = await self._get_or_404(testimonial_id)
        self.testimonial_repo.apply(
            testimonial, transitions.set_featured(testimonial, featured, actor_id)
        )
        return await self._persist(testimonial)

    async def delete(self, testimonial_id: UUID) -> Testimonial:
        testimonial = await self._get_or_404(testimonial_id)
        await self.testimonial_repo.delete(testimonial)
        await self.session.commit()
        logger.info("Testimonial deleted", testimonial_id=str(testimonial_id))
        return testimonial
