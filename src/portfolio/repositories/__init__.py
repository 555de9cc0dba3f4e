"""Repository layer - data access abstraction."""

from src.portfolio.repositories.base import BaseRepository
from src.portfolio.repositories.project import ProjectRepository
from src.portfolio.repositories.query import Page, QueryBuilder
from src.portfolio.repositories.testimonial import TestimonialRepository
from src.portfolio.repositories.user import UserRepository

__all__ = [
    "BaseRepository",
    "Page",
    "ProjectRepository",
    "QueryBuilder",
    "TestimonialRepository",
    "UserRepository",
]
