"""Database utilities - connection handle and migrations."""

from src.portfolio.core.db.engine import Database
from src.portfolio.core.db.migrations import run_migrations_async, run_migrations_sync

__all__ = [
    "Database",
    "run_migrations_async",
    "run_migrations_sync",
]
