"""Service factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.portfolio.api.dependencies.db import DBSession
from src.portfolio.api.dependencies.repositories import ProjectRepo, TestimonialRepo, UserRepo
from src.portfolio.services.auth_service import AuthService
from src.portfolio.services.project_service import ProjectService
from src.portfolio.services.stats import StatsService
from src.portfolio.services.testimonial_service import TestimonialService


def get_auth_service(user_repo: UserRepo, session: DBSession) -> AuthService:
    return AuthService(user_repo, session)


def get_project_service(
    project_repo: ProjectRepo,
    testimonial_repo: TestimonialRepo,
    session: DBSession,
) -> ProjectService:
    return ProjectService(project_repo, testimonial_repo, session)


def get_testimonial_service(
    testimonial_repo: TestimonialRepo, session: DBSession
) -> TestimonialService:
    return TestimonialService(testimonial_repo, session)


def get_stats_service(
    project_repo: ProjectRepo, testimonial_repo: TestimonialRepo
) -> StatsService:
    return StatsService(project_repo, testimonial_repo)


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
ProjectServiceDep = Annotated[ProjectService, Depends(get_project_service)]
TestimonialServiceDep = Annotated[TestimonialService, Depends(get_testimonial_service)]
StatsServiceDep = Annotated[StatsService, Depends(get_stats_service)]
