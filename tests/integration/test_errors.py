"""Tests for error bodies, request ids and response headers."""

from collections.abc import AsyncGenerator
from uuid import uuid4

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from src.portfolio.core.exceptions import ConflictError

pytestmark = pytest.mark.integration


@pytest.fixture
async def crashing_client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Client for an app with routes that fail on purpose."""

    async def boom() -> None:
        raise RuntimeError("kaboom")

    async def conflict() -> None:
        raise ConflictError("Already there", details=[{"field": "slug", "message": "taken"}])

    app.add_api_route("/api/boom", boom)
    app.add_api_route("/api/conflict", conflict)
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


class TestErrorBodies:
    async def test_unknown_route(self, client: AsyncClient) -> None:
        response = await client.get("/api/nonexistent-endpoint")

        assert response.status_code == 404
        data = response.json()
        assert data["success"] is False
        assert data["error"] == "Route not found"
        assert isinstance(data["request_id"], str)

    async def test_request_id_propagated(self, client: AsyncClient) -> None:
        request_id = str(uuid4())

        response = await client.get("/api/nope", headers={"X-Request-ID": request_id})

        assert response.headers["X-Request-ID"] == request_id
        assert response.json()["request_id"] == request_id

    async def test_validation_details(self, client: AsyncClient, admin_headers) -> None:
        response = await client.post(
            "/api/testimonials",
            headers=admin_headers,
            json={"name": "A", "message": "Too short", "rating": 9},
        )

        assert response.status_code == 400
        data = response.json()
        assert data["error"] == "Validation failed"
        assert {d["field"] for d in data["details"]} == {"name", "message", "rating"}
        assert data["request_id"]

    async def test_application_error_details(self, crashing_client: AsyncClient) -> None:
        response = await crashing_client.get("/api/conflict")

        assert response.status_code == 409
        assert response.json()["details"] == [{"field": "slug", "message": "taken"}]

    async def test_unhandled_exception(self, crashing_client: AsyncClient) -> None:
        response = await crashing_client.get("/api/boom")

        assert response.status_code == 500
        data = response.json()
        assert data["success"] is False
        assert data["error"] == "Internal server error"
        assert "stack" not in data
        assert "kaboom" not in response.text


class TestResponseHeaders:
    async def test_security_headers(self, client: AsyncClient) -> None:
        response = await client.get("/api/health")

        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "SAMEORIGIN"
        assert response.headers["Referrer-Policy"] == "no-referrer"
        assert "Content-Security-Policy" in response.headers
        assert "X-Request-ID" in response.headers
