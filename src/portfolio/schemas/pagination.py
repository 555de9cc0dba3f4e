"""Offset pagination: request parameters and response metadata."""

from typing import Literal

from pydantic import BaseModel, Field

from src.portfolio.core.validators import camel_to_snake, parse_int, strip_or_none
from src.portfolio.schemas.base import CamelModel

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100
# Keeps (page - 1) * limit inside a signed 64-bit OFFSET.
MAX_PAGE = (2**63 - 1) // MAX_LIMIT
DEFAULT_SORT_FIELD = "created_at"

SortOrder = Literal["asc", "desc"]


class ListParams(BaseModel):
    """Validated listing parameters with documented defaults.

    - ``page``: 1-based page number, default 1, capped at ``MAX_PAGE``.
    - ``limit``: page size, default 10, at most 100.
    - ``search``: free text matched case-insensitively, optional.
    - ``sort_by``: column name (snake_case), default ``created_at``.
    - ``sort_order``: ``asc`` or ``desc``, default ``desc``.
    """

    page: int = Field(default=DEFAULT_PAGE, ge=1, le=MAX_PAGE)
    limit: int = Field(default=DEFAULT_LIMIT, ge=1, le=MAX_LIMIT)
    search: str | None = None
    sort_by: str = DEFAULT_SORT_FIELD
    sort_order: SortOrder = "desc"

    @classmethod
    def from_query(
        cls,
        page: str | int | None = None,
        limit: str | int | None = None,
        search: str | None = None,
        sort_by: str | None = None,
        sort_order: str | None = None,
    ) -> "ListParams":
        """Build params from raw query strings, ignoring anything unusable.

        Non-numeric or non-positive ``page``/``limit`` fall back to the
        defaults; ``page`` and ``limit`` above their maximums are capped.
        """
        parsed_page = parse_int(page)
        parsed_limit = parse_int(limit)
        if parsed_page is None or parsed_page < 1:
            parsed_page = DEFAULT_PAGE
        if parsed_limit is None or parsed_limit < 1:
            parsed_limit = DEFAULT_LIMIT
        sort_field = strip_or_none(sort_by)
        return cls(
            page=min(parsed_page, MAX_PAGE),
            limit=min(parsed_limit, MAX_LIMIT),
            search=strip_or_none(search),
            sort_by=camel_to_snake(sort_field) if sort_field else DEFAULT_SORT_FIELD,
            sort_order="asc" if sort_order == "asc" else "desc",
        )

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class PaginationMeta(CamelModel):
    page: int
    pages: int
    total: int
    limit: int
