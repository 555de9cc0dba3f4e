"""Repository for User entity."""

from sqlmodel import select

from src.portfolio.models import User
from src.portfolio.repositories.base import BaseRepository
from src.portfolio.repositories.query import Page, QueryBuilder
from src.portfolio.schemas.pagination import ListParams


class UserRepository(BaseRepository[User]):
    """Repository for User entity."""

    model = User
    sortable_fields = frozenset({"created_at", "updated_at", "username", "email", "last_login"})

    async def get_by_email(self, email: str) -> User | None:
        """Get user by email address (stored lower-cased)."""
        result = await self.session.execute(select(User).where(User.email == email.lower()))
        return result.scalar_one_or_none()

    async def get_by_username(self, username: str) -> User | None:
        result = await self.session.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()

    async def find(self, params: ListParams, role: str | None = None) -> Page[User]:
        """List users filtered by role and a username/email search."""
        query = (
            QueryBuilder()
            .equals(User.role, role)
            .any_contains([User.username, User.email], params.search)
        )
        return await self.fetch_page(query.clauses, params)
