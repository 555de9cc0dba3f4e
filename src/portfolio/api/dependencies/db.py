"""Database session dependency."""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.portfolio.core.db import Database


def get_database(request: Request) -> Database:
    """The store handle opened by the application lifespan."""
    return request.app.state.database  # type: ignore[no-any-return]


async def get_db_session(
    database: Annotated[Database, Depends(get_database)],
) -> AsyncGenerator[AsyncSession]:
    """One session per request, closed when the response is done."""
    async with database.session() as session:
        yield session


DBSession = Annotated[AsyncSession, Depends(get_db_session)]
