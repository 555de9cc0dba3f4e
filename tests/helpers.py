"""Test helper functions for common data creation patterns."""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel

from src.portfolio.core.db import Database
from src.portfolio.core.security import create_access_token
from src.portfolio.models import User
from tests.factories import UserFactory


def auth_headers(user: User) -> dict[str, str]:
    """Authorization header carrying a fresh access token for ``user``."""
    token = create_access_token(user.id, user.email, user.role)
    return {"Authorization": f"Bearer {token}"}


async def create_user(session: AsyncSession, **user_kwargs) -> User:
    """Create and commit a user.

    Args:
        session: Database session
        **user_kwargs: Additional args passed to UserFactory

    Returns:
        The committed user
    """
    user = UserFactory.build(**user_kwargs)
    session.add(user)
    await session.commit()
    return user


async def reload[T: SQLModel](
    database: Database, model: type[T], id: UUID
) -> T | None:
    """Read a row through a fresh session so no identity-map copy is reused."""
    async with database.session() as session:
        return await session.get(model, id)
