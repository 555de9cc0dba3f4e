"""Base repository with common CRUD operations."""

from collections.abc import Mapping, Sequence
from typing import Any
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement
from sqlmodel import SQLModel, select

from src.portfolio.repositories.query import Page
from src.portfolio.schemas.pagination import DEFAULT_SORT_FIELD, ListParams


class BaseRepository[ModelType: SQLModel]:
    """Base repository providing common database operations.

    Repositories handle data access only. Transaction control (commit)
    should be done in the service layer.
    """

    model: type[ModelType]
    sortable_fields: frozenset[str] = frozenset({DEFAULT_SORT_FIELD, "updated_at"})

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, id: UUID) -> ModelType | None:
        """Get a record by its primary key."""
        result = await self.session.execute(
            select(self.model).where(self.model.id == id)  # type: ignore[attr-defined]
        )
        return result.scalar_one_or_none()

    def add(self, entity: ModelType) -> None:
        """Add entity to session (no flush/commit)."""
        self.session.add(entity)

    async def delete(self, entity: ModelType) -> None:
        await self.session.delete(entity)
        await self.session.flush()

    def apply(self, entity: ModelType, changes: Mapping[str, Any]) -> ModelType:
        """Copy ``changes`` onto ``entity`` (no flush/commit)."""
        for field, value in changes.items():
            setattr(entity, field, value)
        self.session.add(entity)
        return entity

    def sort_column(self, sort_by: str) -> Any:
        """Resolve a sort field, falling back to ``created_at`` for unknown names."""
        field = sort_by if sort_by in self.sortable_fields else DEFAULT_SORT_FIELD
        return getattr(self.model, field)

    async def count(self, clauses: Sequence[ColumnElement[bool]] = ()) -> int:
        query = select(func.count()).select_from(self.model)
        if clauses:
            query = query.where(*clauses)
        result = await self.session.execute(query)
        return int(result.scalar_one())

    async def fetch_page(
        self,
        clauses: Sequence[ColumnElement[bool]],
        params: ListParams,
    ) -> Page[ModelType]:
        """Execute offset pagination over the filtered rows.

        Args:
            clauses: WHERE clauses, ANDed together
            params: page, limit and sort settings

        Returns:
            A ``Page`` holding at most ``params.limit`` items and the total
            number of matching rows.
        """
        column = self.sort_column(params.sort_by)
        order = column.asc() if params.sort_order == "asc" else column.desc()

        query = select(self.model)
        if clauses:
            query = query.where(*clauses)
        # Secondary key keeps page boundaries stable when sort values tie
        query = query.order_by(order, self.model.id).offset(params.offset).limit(params.limit)  # type: ignore[attr-defined]

        result = await self.session.execute(query)
        items = list(result.scalars().all())
        total = await self.count(clauses)
        return Page(items=items, total=total, page=params.page, limit=params.limit)
