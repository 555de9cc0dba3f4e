"""Listing parameter dependencies."""

from typing import Annotated

from fastapi import Depends, Query

from src.portfolio.core.validators import parse_int
from src.portfolio.schemas.pagination import MAX_LIMIT, ListParams

DEFAULT_FEATURED_LIMIT = 6


def get_list_params(
    page: Annotated[str | None, Query(description="1-based page number")] = None,
    limit: Annotated[str | None, Query(description="Page size, at most 100")] = None,
    search: Annotated[str | None, Query(description="Case-insensitive text search")] = None,
    sort_by: Annotated[str | None, Query(alias="sortBy")] = None,
    sort_order: Annotated[str | None, Query(alias="sortOrder")] = None,
) -> ListParams:
    """Parse listing parameters leniently; unusable values fall back to defaults."""
    return ListParams.from_query(
        page=page, limit=limit, search=search, sort_by=sort_by, sort_order=sort_order
    )


def get_page_params(
    page: Annotated[str | None, Query()] = None,
    limit: Annotated[str | None, Query()] = None,
) -> ListParams:
    """Page and limit only; results keep the newest-first default order."""
    return ListParams.from_query(page=page, limit=limit)


def get_featured_limit(limit: Annotated[str | None, Query()] = None) -> int:
    value = parse_int(limit)
    if value is None or value < 1:
        return DEFAULT_FEATURED_LIMIT
    return min(value, MAX_LIMIT)


Listing = Annotated[ListParams, Depends(get_list_params)]
Paging = Annotated[ListParams, Depends(get_page_params)]
FeaturedLimit = Annotated[int, Depends(get_featured_limit)]
