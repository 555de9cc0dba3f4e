"""Tests for testimonial endpoints: visibility, moderation and the featured cap."""

from datetime import timedelta
from uuid import uuid4

import pytest
from httpx import AsyncClient
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.portfolio import models
from src.portfolio.core.db import Database
from src.portfolio.models import MAX_FEATURED_TESTIMONIALS
from src.portfolio.models.base import utc_now
from src.portfolio.repositories import TestimonialRepository as Reviews
from tests.helpers import reload

pytestmark = pytest.mark.integration


def payload(**overrides) -> dict:
    body = {
        "name": "Grace Hopper",
        "position": "Rear Admiral",
        "company": "Navy",
        "message": "Exceptional work, delivered ahead of schedule.",
        "rating": 4,
    }
    body.update(overrides)
    return body


def names(response) -> list[str]:
    return [t["name"] for t in response.json()["testimonials"]]


async def featured_count(database: Database) -> int:
    async with database.session() as session:
        return await Reviews(session).count((models.Testimonial.featured == True,))  # noqa: E712


class TestCreate:
    async def test_create_defaults(self, client: AsyncClient, admin_headers) -> None:
        response = await client.post("/api/testimonials", headers=admin_headers, json=payload())

        assert response.status_code == 201
        data = response.json()
        assert data["message"] == "Testimonial created successfully"
        testimonial = data["testimonial"]
        assert testimonial["status"] == "approved"
        assert testimonial["featured"] is False
        assert testimonial["verified"] is False
        assert testimonial["fullTitle"] == "Grace Hopper, Rear Admiral at Navy"
        assert testimonial["ratingStars"] == "★★★★☆"

    async def test_verified_five_star_auto_featured(
        self, client: AsyncClient, admin_headers
    ) -> None:
        response = await client.post(
            "/api/testimonials",
            headers=admin_headers,
            json=payload(rating=5, verified=True),
        )

        assert response.json()["testimonial"]["featured"] is True

    async def test_unverified_five_star_not_featured(
        self, client: AsyncClient, admin_headers
    ) -> None:
        response = await client.post(
            "/api/testimonials", headers=admin_headers, json=payload(rating=5)
        )

        assert response.json()["testimonial"]["featured"] is False

    async def test_rating_out_of_range(self, client: AsyncClient, admin_headers) -> None:
        response = await client.post(
            "/api/testimonials", headers=admin_headers, json=payload(rating=6)
        )

        assert response.status_code == 400
        assert response.json()["details"][0]["field"] == "rating"

    async def test_unknown_project_link(self, client: AsyncClient, admin_headers) -> None:
        response = await client.post(
            "/api/testimonials", headers=admin_headers, json=payload(projectId=str(uuid4()))
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Linked project does not exist"

    async def test_link_to_project(
        self, client: AsyncClient, make_project, admin_headers
    ) -> None:
        project = await make_project()

        response = await client.post(
            "/api/testimonials", headers=admin_headers, json=payload(projectId=str(project.id))
        )

        assert response.status_code == 201
        assert response.json()["testimonial"]["projectId"] == str(project.id)


class TestFeaturedCap:
    async def test_eleventh_featured_evicts_oldest(
        self, client: AsyncClient, make_testimonial, admin_headers, database: Database
    ) -> None:
        now = utc_now()
        existing = [
            await make_testimonial(featured=True, updated_at=now - timedelta(hours=i + 1))
            for i in range(MAX_FEATURED_TESTIMONIALS)
        ]
        oldest = existing[-1]

        response = await client.post(
            "/api/testimonials",
            headers=admin_headers,
            json=payload(rating=5, verified=True),
        )

        assert response.json()["testimonial"]["featured"] is True
        assert await featured_count(database) == MAX_FEATURED_TESTIMONIALS
        evicted = await reload(database, models.Testimonial, oldest.id)
        assert evicted is not None
        assert evicted.featured is False

    async def test_toggle_respects_cap(
        self, client: AsyncClient, make_testimonial, admin_headers, database: Database
    ) -> None:
        now = utc_now()
        for i in range(MAX_FEATURED_TESTIMONIALS):
            await make_testimonial(featured=True, updated_at=now - timedelta(hours=i + 1))
        candidate = await make_testimonial(featured=False)

        response = await client.patch(
            f"/api/testimonials/{candidate.id}/toggle-featured", headers=admin_headers
        )

        assert response.json()["testimonial"]["featured"] is True
        assert await featured_count(database) == MAX_FEATURED_TESTIMONIALS

    async def test_below_cap_nothing_evicted(
        self, client: AsyncClient, make_testimonial, admin_headers, database: Database
    ) -> None:
        await make_testimonial(featured=True)
        candidate = await make_testimonial(featured=False)

        await client.patch(
            f"/api/testimonials/{candidate.id}/toggle-featured",
            headers=admin_headers,
            json={"featured": True},
        )

        assert await featured_count(database) == 2


class TestVisibility:
    async def test_public_listing_shows_approved_only(
        self, client: AsyncClient, make_testimonial
    ) -> None:
        await make_testimonial(name="Approved")
        await make_testimonial(name="Waiting", status="pending")
        await make_testimonial(name="Refused", status="rejected")

        response = await client.get("/api/testimonials?status=pending")

        assert names(response) == ["Approved"]

    async def test_admin_filters_by_status(
        self, client: AsyncClient, make_testimonial, admin_headers
    ) -> None:
        await make_testimonial(name="Approved")
        await make_testimonial(name="Waiting", status="pending")

        response = await client.get("/api/testimonials?status=pending", headers=admin_headers)

        assert names(response) == ["Waiting"]

    async def test_pending_hidden_from_public(
        self, client: AsyncClient, make_testimonial, admin_headers
    ) -> None:
        testimonial = await make_testimonial(status="pending")

        public = await client.get(f"/api/testimonials/{testimonial.id}")
        admin = await client.get(f"/api/testimonials/{testimonial.id}", headers=admin_headers)

        assert public.status_code == 404
        assert public.json()["error"] == "Testimonial not found"
        assert admin.status_code == 200

    async def test_featured_endpoint(self, client: AsyncClient, make_testimonial) -> None:
        await make_testimonial(name="Shown", featured=True)
        await make_testimonial(name="Pending", featured=True, status="pending")
        await make_testimonial(name="Plain")

        response = await client.get("/api/testimonials/featured")

        assert names(response) == ["Shown"]
        assert response.json()["total"] == 1


class TestFilters:
    async def test_min_rating_filter(self, client: AsyncClient, make_testimonial) -> None:
        await make_testimonial(name="Low", rating=2)
        await make_testimonial(name="High", rating=5)

        response = await client.get("/api/testimonials?rating=4")

        assert names(response) == ["High"]

    async def test_invalid_rating_filter_ignored(
        self, client: AsyncClient, make_testimonial
    ) -> None:
        await make_testimonial(name="Low", rating=2)
        await make_testimonial(name="High", rating=5)

        response = await client.get("/api/testimonials?rating=great&sortBy=rating&sortOrder=asc")

        assert response.status_code == 200
        assert names(response) == ["Low", "High"]

    @pytest.mark.parametrize("rating", ["0", "6", "99999999999999999999"])
    async def test_out_of_range_rating_filter_ignored(
        self, client: AsyncClient, make_testimonial, rating: str
    ) -> None:
        await make_testimonial(name="Low", rating=2)
        await make_testimonial(name="High", rating=5)

        response = await client.get(
            f"/api/testimonials?rating={rating}&sortBy=rating&sortOrder=asc"
        )

        assert response.status_code == 200
        assert names(response) == ["Low", "High"]

    async def test_company_and_search(self, client: AsyncClient, make_testimonial) -> None:
        await make_testimonial(name="Ann", company="Globex Corp", message="Stellar delivery.")
        await make_testimonial(name="Bob", company="Initech", message="Solid code quality.")

        by_company = await client.get("/api/testimonials?company=globex")
        by_search = await client.get("/api/testimonials?search=quality")

        assert names(by_company) == ["Ann"]
        assert names(by_search) == ["Bob"]

    async def test_rating_endpoint(self, client: AsyncClient, make_testimonial) -> None:
        await make_testimonial(name="Three", rating=3)
        await make_testimonial(name="Five", rating=5)
        await make_testimonial(name="Hidden", rating=5, status="pending")

        response = await client.get("/api/testimonials/rating/4")

        assert response.status_code == 200
        assert names(response) == ["Five"]
        assert response.json()["rating"] == 4

    @pytest.mark.parametrize("rating", ["0", "6", "five"])
    async def test_rating_endpoint_rejects_bad_rating(
        self, client: AsyncClient, rating: str
    ) -> None:
        response = await client.get(f"/api/testimonials/rating/{rating}")

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid rating. Must be between 1 and 5"

    async def test_company_endpoint(self, client: AsyncClient, make_testimonial) -> None:
        await make_testimonial(name="Ann", company="Globex Corp")
        await make_testimonial(name="Bob", company="Initech")

        response = await client.get("/api/testimonials/company/Globex")

        assert names(response) == ["Ann"]
        assert response.json()["company"] == "Globex"


class TestModeration:
    async def test_approve_pending(
        self, client: AsyncClient, make_testimonial, admin_user, admin_headers
    ) -> None:
        testimonial = await make_testimonial(status="pending")

        response = await client.patch(
            f"/api/testimonials/{testimonial.id}/approve", headers=admin_headers
        )

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Testimonial approved successfully"
        assert body["testimonial"]["status"] == "approved"
        assert body["testimonial"]["updatedBy"] == str(admin_user.id)

        public = await client.get(f"/api/testimonials/{testimonial.id}")
        assert public.status_code == 200

    async def test_reject_hides_from_public(
        self, client: AsyncClient, make_testimonial, admin_headers
    ) -> None:
        testimonial = await make_testimonial()

        response = await client.patch(
            f"/api/testimonials/{testimonial.id}/reject", headers=admin_headers
        )

        assert response.json()["testimonial"]["status"] == "rejected"
        assert (await client.get(f"/api/testimonials/{testimonial.id}")).status_code == 404

    async def test_verify(self, client: AsyncClient, make_testimonial, admin_headers) -> None:
        testimonial = await make_testimonial(verified=False, status="pending")

        response = await client.patch(
            f"/api/testimonials/{testimonial.id}/verify", headers=admin_headers
        )

        testimonial_body = response.json()["testimonial"]
        assert testimonial_body["verified"] is True
        assert testimonial_body["status"] == "pending"

    async def test_moderation_requires_admin(
        self, client: AsyncClient, make_testimonial, viewer_headers
    ) -> None:
        testimonial = await make_testimonial(status="pending")

        response = await client.patch(
            f"/api/testimonials/{testimonial.id}/approve", headers=viewer_headers
        )

        assert response.status_code == 403

    async def test_moderating_missing_testimonial(
        self, client: AsyncClient, admin_headers
    ) -> None:
        response = await client.patch(f"/api/testimonials/{uuid4()}/approve", headers=admin_headers)

        assert response.status_code == 404


class TestEditAndDelete:
    async def test_partial_update(
        self, client: AsyncClient, make_testimonial, admin_headers
    ) -> None:
        testimonial = await make_testimonial(position="CTO", company="Acme")

        response = await client.put(
            f"/api/testimonials/{testimonial.id}",
            headers=admin_headers,
            json={"rating": 2, "company": None},
        )

        assert response.status_code == 200
        body = response.json()["testimonial"]
        assert body["rating"] == 2
        assert body["company"] is None
        assert body["position"] == "CTO"
        assert body["fullTitle"].endswith(", CTO")

    async def test_required_fields_not_cleared(
        self, client: AsyncClient, make_testimonial, admin_headers
    ) -> None:
        testimonial = await make_testimonial(name="Keeps Name")

        response = await client.put(
            f"/api/testimonials/{testimonial.id}", headers=admin_headers, json={"name": None}
        )

        assert response.json()["testimonial"]["name"] == "Keeps Name"

    async def test_delete(
        self, client: AsyncClient, make_testimonial, admin_headers, database: Database
    ) -> None:
        testimonial = await make_testimonial(name="Gone")

        response = await client.delete(
            f"/api/testimonials/{testimonial.id}", headers=admin_headers
        )

        assert response.status_code == 200
        assert response.json()["deletedTestimonial"]["name"] == "Gone"
        assert await reload(database, models.Testimonial, testimonial.id) is None


class TestStoredRating:
    @pytest.mark.parametrize("rating", [0, 6])
    async def test_rating_range_enforced_by_table(
        self, db_session: AsyncSession, admin_user, rating: int
    ) -> None:
        db_session.add(
            models.Testimonial(
                name="Out Of Range",
                message="Stored without going through validation.",
                rating=rating,
                created_by=admin_user.id,
            )
        )

        with pytest.raises(IntegrityError):
            await db_session.commit()
