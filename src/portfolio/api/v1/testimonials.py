"""Testimonial endpoints.

Reads are public and status-gated: anonymous callers only see approved
testimonials. Moderation and edits require an admin token.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Body, Query, status

from src.portfolio.api.dependencies import (
    Access,
    AdminUser,
    FeaturedLimit,
    Listing,
    Paging,
    StatsServiceDep,
    TestimonialServiceDep,
)
from src.portfolio.schemas.project import FeaturedToggle
from src.portfolio.schemas.stats import TestimonialStatsResponse
from src.portfolio.schemas.testimonial import (
    FeaturedTestimonialsResponse,
    TestimonialCreate,
    TestimonialDeleteResponse,
    TestimonialListResponse,
    TestimonialRead,
    TestimonialResponse,
    TestimonialUpdate,
)

router = APIRouter(prefix="/testimonials", tags=["testimonials"])


def _one(testimonial: object, message: str | None = None) -> TestimonialResponse:
    return TestimonialResponse(
        message=message, testimonial=TestimonialRead.model_validate(testimonial)
    )


@router.get("", response_model=TestimonialListResponse, summary="List testimonials")
async def list_testimonials(
    params: Listing,
    policy: Access,
    service: TestimonialServiceDep,
    featured: Annotated[str | None, Query()] = None,
    rating: Annotated[str | None, Query(description="Minimum rating")] = None,
    company: Annotated[str | None, Query()] = None,
    status_filter: Annotated[str | None, Query(alias="status")] = None,
) -> TestimonialListResponse:
    """An unparseable ``rating`` is ignored rather than rejected."""
    page = await service.list_testimonials(
        params, policy, status=status_filter, featured=featured, rating=rating, company=company
    )
    return TestimonialListResponse(
        testimonials=[TestimonialRead.model_validate(t) for t in page.items],
        pagination=page.meta(),
    )


@router.get(
    "/featured", response_model=FeaturedTestimonialsResponse, summary="Featured testimonials"
)
async def featured_testimonials(
    limit: FeaturedLimit, service: TestimonialServiceDep
) -> FeaturedTestimonialsResponse:
    testimonials = await service.featured(limit)
    return FeaturedTestimonialsResponse(
        testimonials=[TestimonialRead.model_validate(t) for t in testimonials],
        total=len(testimonials),
    )


@router.get(
    "/statistics", response_model=TestimonialStatsResponse, summary="Testimonial statistics"
)
async def testimonial_statistics(
    _admin: AdminUser, stats: StatsServiceDep
) -> TestimonialStatsResponse:
    return TestimonialStatsResponse(stats=await stats.testimonial_stats())


@router.get(
    "/rating/{rating}",
    response_model=TestimonialListResponse,
    summary="Testimonials with at least a given rating",
    responses={400: {"description": "Rating outside 1-5"}},
)
async def testimonials_by_rating(
    rating: str, params: Paging, service: TestimonialServiceDep
) -> TestimonialListResponse:
    min_rating, page = await service.by_rating(rating, params)
    return TestimonialListResponse(
        testimonials=[TestimonialRead.model_validate(t) for t in page.items],
        pagination=page.meta(),
        rating=min_rating,
    )


@router.get(
    "/company/{company}",
    response_model=TestimonialListResponse,
    summary="Testimonials from a company",
)
async def testimonials_by_company(
    company: str, params: Paging, service: TestimonialServiceDep
) -> TestimonialListResponse:
    page = await service.by_company(company, params)
    return TestimonialListResponse(
        testimonials=[TestimonialRead.model_validate(t) for t in page.items],
        pagination=page.meta(),
        company=company,
    )


@router.get(
    "/{testimonial_id}",
    response_model=TestimonialResponse,
    summary="Get testimonial",
    responses={404: {"description": "Testimonial not found or not visible"}},
)
async def get_testimonial(
    testimonial_id: UUID, policy: Access, service: TestimonialServiceDep
) -> TestimonialResponse:
    return _one(await service.get(testimonial_id, policy))


@router.post(
    "",
    response_model=TestimonialResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create testimonial",
)
async def create_testimonial(
    data: TestimonialCreate, admin: AdminUser, service: TestimonialServiceDep
) -> TestimonialResponse:
    """Five-star testimonials from verified sources start out featured."""
    testimonial = await service.create(data, admin.id)
    return _one(testimonial, "Testimonial created successfully")


@router.put("/{testimonial_id}", response_model=TestimonialResponse, summary="Update testimonial")
async def update_testimonial(
    testimonial_id: UUID,
    data: TestimonialUpdate,
    admin: AdminUser,
    service: TestimonialServiceDep,
) -> TestimonialResponse:
    testimonial = await service.update(testimonial_id, data, admin.id)
    return _one(testimonial, "Testimonial updated successfully")


@router.patch("/{testimonial_id}/approve", response_model=TestimonialResponse)
async def approve_testimonial(
    testimonial_id: UUID, admin: AdminUser, service: TestimonialServiceDep
) -> TestimonialResponse:
    testimonial = await service.approve(testimonial_id, admin.id)
    return _one(testimonial, "Testimonial approved successfully")


@router.patch("/{testimonial_id}/reject", response_model=TestimonialResponse)
async def reject_testimonial(
    testimonial_id: UUID, admin: AdminUser, service: TestimonialServiceDep
) -> TestimonialResponse:
    testimonial = await service.reject(testimonial_id, admin.id)
    return _one(testimonial, "Testimonial rejected successfully")


@router.patch("/{testimonial_id}/verify", response_model=TestimonialResponse)
async def verify_testimonial(
    testimonial_id: UUID, admin: AdminUser, service: TestimonialServiceDep
) -> TestimonialResponse:
    testimonial = await service.verify(testimonial_id, admin.id)
    return _one(testimonial, "Testimonial verified successfully")


@router.patch("/{testimonial_id}/toggle-featured", response_model=TestimonialResponse)
async def toggle_featured(
    testimonial_id: UUID,
    admin: AdminUser,
    service: TestimonialServiceDep,
    data: Annotated[FeaturedToggle | None, Body()] = None,
) -> TestimonialResponse:
    featured = data.featured if data is not None else None
    testimonial = await service.set_featured(testimonial_id, featured, admin.id)
    return _one(testimonial, "Testimonial featured status updated successfully")


@router.delete(
    "/{testimonial_id}", response_model=TestimonialDeleteResponse, summary="Delete testimonial"
)
async def delete_testimonial(
    testimonial_id: UUID, _admin: AdminUser, service: TestimonialServiceDep
) -> TestimonialDeleteResponse:
    testimonial = await service.delete(testimonial_id)
    return TestimonialDeleteResponse(
        message="Testimonial deleted successfully",
        deleted_testimonial=TestimonialRead.model_validate(testimonial),
    )
