"""Integration test fixtures for database and HTTP client operations.

Each test gets its own SQLite file under ``tmp_path``; the schema is created
from the model metadata. Uses polyfactory for test data generation.
"""

from collections.abc import AsyncGenerator, Awaitable, Callable
from pathlib import Path
from typing import Any

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from src.portfolio.core.db import Database
from src.portfolio.main import create_app
from src.portfolio.models import Project, Testimonial, User
from tests.factories import ProjectFactory, TestimonialFactory
from tests.helpers import auth_headers, create_user


@pytest.fixture
async def database(tmp_path: Path) -> AsyncGenerator[Database]:
    """A connected store backed by a throwaway SQLite file."""
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'portfolio-test.db'}")
    await db.connect()
    await db.create_all()
    yield db
    await db.disconnect()


@pytest.fixture
async def db_session(database: Database) -> AsyncGenerator[AsyncSession]:
    """Session for arranging test data. Call ``commit`` to make rows visible."""
    async with database.session() as session:
        yield session


@pytest.fixture
def app(database: Database) -> FastAPI:
    """Application wired to the test database.

    ASGITransport does not run the lifespan, so the store handle is attached
    directly.
    """
    application = create_app()
    application.state.database = database
    return application


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c


@pytest.fixture
async def admin_user(db_session: AsyncSession) -> User:
    return await create_user(db_session)


@pytest.fixture
def admin_headers(admin_user: User) -> dict[str, str]:
    return auth_headers(admin_user)


@pytest.fixture
async def viewer_headers(db_session: AsyncSession) -> dict[str, str]:
    """Valid token for an account without the admin role."""
    return auth_headers(await create_user(db_session, role="viewer"))


@pytest.fixture
def make_project(
    db_session: AsyncSession, admin_user: User
) -> Callable[..., Awaitable[Project]]:
    """Insert a project directly, bypassing the API."""

    async def _make(**overrides: Any) -> Project:
        project = ProjectFactory.build(created_by=admin_user.id, **overrides)
        db_session.add(project)
        await db_session.commit()
        return project

    return _make


@pytest.fixture
def make_testimonial(
    db_session: AsyncSession, admin_user: User
) -> Callable[..., Awaitable[Testimonial]]:
    """Insert a testimonial directly, bypassing the API and the featured cap."""

    async def _make(**overrides: Any) -> Testimonial:
        testimonial = TestimonialFactory.build(created_by=admin_user.id, **overrides)
        db_session.add(testimonial)
        await db_session.commit()
        return testimonial

    return _make
