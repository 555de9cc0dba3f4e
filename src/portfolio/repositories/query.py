"""Composable list filters and offset pagination.

A ``QueryBuilder`` collects optional filter clauses from raw query values and
leaves out anything the caller did not supply (or supplied in an unusable
form). Repositories hand the collected clauses to
``BaseRepository.fetch_page`` together with ``ListParams``.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from math import ceil
from typing import TYPE_CHECKING, Any

from sqlalchemy import JSON, String, cast, or_
from sqlalchemy.sql.elements import ColumnElement

from src.portfolio.core.validators import parse_int, strip_or_none
from src.portfolio.schemas.pagination import PaginationMeta

if TYPE_CHECKING:
    from src.portfolio.services.access import AccessPolicy

LIKE_ESCAPE = "\\"


def escape_like(text: str) -> str:
    """Escape LIKE wildcards so ``text`` matches literally."""
    return (
        text.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", f"{LIKE_ESCAPE}%")
        .replace("_", f"{LIKE_ESCAPE}_")
    )


def substring_clause(column: Any, text: str) -> ColumnElement[bool]:
    """Case-insensitive literal substring match.

    JSON list columns are compared on their serialized form, which is enough
    to find a tag inside the list on both PostgreSQL and SQLite.
    """
    target = column
    if isinstance(getattr(column, "type", None), JSON):
        target = cast(column, String)
    return target.ilike(f"%{escape_like(text)}%", escape=LIKE_ESCAPE)


class QueryBuilder:
    """Accumulates WHERE clauses for a listing query."""

    def __init__(self) -> None:
        self._clauses: list[ColumnElement[bool]] = []

    @property
    def clauses(self) -> list[ColumnElement[bool]]:
        return list(self._clauses)

    def where(self, clause: ColumnElement[bool]) -> "QueryBuilder":
        self._clauses.append(clause)
        return self

    def status(
        self,
        column: Any,
        requested: str | None,
        public_value: str,
        policy: "AccessPolicy",
    ) -> "QueryBuilder":
        """Restrict to the status the caller is allowed to see."""
        return self.where(column == policy.visible_status(requested, public_value))

    def equals(self, column: Any, value: Any) -> "QueryBuilder":
        if isinstance(value, str):
            value = strip_or_none(value)
        if value is not None:
            self.where(column == value)
        return self

    def flag(self, column: Any, raw: str | None) -> "QueryBuilder":
        """``"true"`` selects flagged rows; any other supplied value selects the rest."""
        if raw is not None:
            self.where(column == (raw.strip().lower() == "true"))
        return self

    def contains(self, column: Any, text: str | None) -> "QueryBuilder":
        text = strip_or_none(text)
        if text is not None:
            self.where(substring_clause(column, text))
        return self

    def at_least(
        self,
        column: Any,
        raw: str | int | None,
        *,
        lo: int | None = None,
        hi: int | None = None,
    ) -> "QueryBuilder":
        """Lower bound filter. Values outside ``lo``..``hi`` are dropped."""
        value = parse_int(raw)
        if value is None:
            return self
        if (lo is None or value >= lo) and (hi is None or value <= hi):
            self.where(column >= value)
        return self

    def any_contains(self, columns: Sequence[Any], text: str | None) -> "QueryBuilder":
        text = strip_or_none(text)
        if text is not None and columns:
            self.where(or_(*(substring_clause(column, text) for column in columns)))
        return self


@dataclass
class Page[T]:
    """One page of results plus the numbers needed for pagination metadata."""

    items: list[T]
    total: int
    page: int
    limit: int

    @property
    def pages(self) -> int:
        return ceil(self.total / self.limit) if self.limit else 0

    def meta(self) -> PaginationMeta:
        return PaginationMeta(page=self.page, pages=self.pages, total=self.total, limit=self.limit)
