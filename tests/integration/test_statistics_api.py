"""Tests for the admin statistics endpoints."""

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.integration


class TestProjectStatistics:
    async def test_summary(self, client: AsyncClient, make_project, admin_headers) -> None:
        await make_project(
            year="2023", technologies=["React", "Node.js"], featured=True, view_count=10
        )
        await make_project(year="2024", technologies=["React"], view_count=5)
        await make_project(year="2024", technologies=["Vue"], featured=True, status="draft")
        await make_project(year="2022", technologies=["Go"], status="archived")

        response = await client.get("/api/projects/statistics", headers=admin_headers)

        assert response.status_code == 200
        stats = response.json()["stats"]
        assert stats["total"] == 4
        assert stats["published"] == 2
        assert stats["draft"] == 1
        assert stats["archived"] == 1
        assert stats["featured"] == 2
        assert stats["totalViews"] == 15
        assert stats["yearDistribution"] == [
            {"year": "2024", "count": 1},
            {"year": "2023", "count": 1},
        ]
        assert stats["techDistribution"][0] == {"technology": "React", "count": 2}
        assert {t["technology"] for t in stats["techDistribution"]} == {"React", "Node.js"}
        assert len(stats["recentProjects"]) == 2

    async def test_empty(self, client: AsyncClient, admin_headers) -> None:
        response = await client.get("/api/projects/statistics", headers=admin_headers)

        stats = response.json()["stats"]
        assert stats["total"] == 0
        assert stats["totalViews"] == 0
        assert stats["yearDistribution"] == []
        assert stats["recentProjects"] == []

    async def test_requires_admin(self, client: AsyncClient, viewer_headers) -> None:
        anonymous = await client.get("/api/projects/statistics")
        viewer = await client.get("/api/projects/statistics", headers=viewer_headers)

        assert anonymous.status_code == 401
        assert viewer.status_code == 403


class TestTestimonialStatistics:
    async def test_summary(self, client: AsyncClient, make_testimonial, admin_headers) -> None:
        await make_testimonial(rating=5, company="Acme", featured=True)
        await make_testimonial(rating=3, company="Acme")
        await make_testimonial(rating=4, company="Globex")
        await make_testimonial(rating=1, company="Acme", status="pending")
        await make_testimonial(rating=2, company=None, status="rejected")

        response = await client.get("/api/testimonials/statistics", headers=admin_headers)

        assert response.status_code == 200
        stats = response.json()["stats"]
        assert stats["total"] == 5
        assert stats["approved"] == 3
        assert stats["pending"] == 1
        assert stats["pendingCount"] == 1
        assert stats["rejected"] == 1
        assert stats["featured"] == 1
        assert stats["averageRating"] == 3.0
        assert stats["ratingDistribution"] == [
            {"rating": 3, "count": 1},
            {"rating": 4, "count": 1},
            {"rating": 5, "count": 1},
        ]
        assert stats["topCompanies"] == [
            {"company": "Acme", "count": 2, "averageRating": 4.0},
            {"company": "Globex", "count": 1, "averageRating": 4.0},
        ]
        assert len(stats["recentTestimonials"]) == 3

    async def test_top_companies_limited_to_five(
        self, client: AsyncClient, make_testimonial, admin_headers
    ) -> None:
        companies = ["Acme", "Globex", "Initech", "Umbrella", "Hooli", "Vandelay"]
        for count, company in enumerate(companies, start=1):
            for _ in range(count):
                await make_testimonial(company=company, rating=4)
        await make_testimonial(company=None, rating=5)

        response = await client.get("/api/testimonials/statistics", headers=admin_headers)

        top = response.json()["stats"]["topCompanies"]
        assert [c["company"] for c in top] == [
            "Vandelay",
            "Hooli",
            "Umbrella",
            "Initech",
            "Globex",
        ]
        assert top[0] == {"company": "Vandelay", "count": 6, "averageRating": 4.0}

    async def test_empty(self, client: AsyncClient, admin_headers) -> None:
        response = await client.get("/api/testimonials/statistics", headers=admin_headers)

        stats = response.json()["stats"]
        assert stats["total"] == 0
        assert stats["averageRating"] == 0.0
        assert stats["topCompanies"] == []
