"""Repository factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.portfolio.api.dependencies.db import DBSession
from src.portfolio.repositories import (
    ProjectRepository,
    TestimonialRepository,
    UserRepository,
)


def get_user_repository(session: DBSession) -> UserRepository:
    return UserRepository(session)


def get_project_repository(session: DBSession) -> ProjectRepository:
    return ProjectRepository(session)


def get_testimonial_repository(session: DBSession) -> TestimonialRepository:
    return TestimonialRepository(session)


UserRepo = Annotated[UserRepository, Depends(get_user_repository)]
ProjectRepo = Annotated[ProjectRepository, Depends(get_project_repository)]
TestimonialRepo = Annotated[TestimonialRepository, Depends(get_testimonial_repository)]
