"""FastAPI dependency injection definitions.

Re-exports all dependencies for convenience.
"""

from src.portfolio.api.dependencies.auth import (
    Access,
    AdminUser,
    BearerToken,
    CurrentUser,
    OptionalUser,
    get_access_policy,
    get_current_user,
    get_optional_user,
    require_admin,
)
from src.portfolio.api.dependencies.db import DBSession, get_database, get_db_session
from src.portfolio.api.dependencies.pagination import FeaturedLimit, Listing, Paging
from src.portfolio.api.dependencies.repositories import (
    ProjectRepo,
    TestimonialRepo,
    UserRepo,
)
from src.portfolio.api.dependencies.services import (
    AuthServiceDep,
    ProjectServiceDep,
    StatsServiceDep,
    TestimonialServiceDep,
)

__all__ = [
    # Auth
    "Access",
    "AdminUser",
    "BearerToken",
    "CurrentUser",
    "OptionalUser",
    "get_access_policy",
    "get_current_user",
    "get_optional_user",
    "require_admin",
    # Database
    "DBSession",
    "get_database",
    "get_db_session",
    # Listing parameters
    "FeaturedLimit",
    "Listing",
    "Paging",
    # Repositories
    "ProjectRepo",
    "TestimonialRepo",
    "UserRepo",
    # Services
    "AuthServiceDep",
    "ProjectServiceDep",
    "StatsServiceDep",
    "TestimonialServiceDep",
]
