"""Project endpoints.

Reads are public and status-gated: anonymous callers only see published
projects. Every mutation requires an admin token.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Body, Query, status

from src.portfolio.api.dependencies import (
    Access,
    AdminUser,
    FeaturedLimit,
    Listing,
    Paging,
    ProjectServiceDep,
    StatsServiceDep,
)
from src.portfolio.schemas.project import (
    FeaturedProjectsResponse,
    FeaturedToggle,
    ProjectCreate,
    ProjectDeleteResponse,
    ProjectListResponse,
    ProjectRead,
    ProjectResponse,
    ProjectUpdate,
)
from src.portfolio.schemas.stats import ProjectStatsResponse

router = APIRouter(prefix="/projects", tags=["projects"])


@router.get(
    "",
    response_model=ProjectListResponse,
    summary="List projects",
    description="Filter, search, sort and paginate projects visible to the caller.",
)
async def list_projects(
    params: Listing,
    policy: Access,
    service: ProjectServiceDep,
    featured: Annotated[str | None, Query()] = None,
    year: Annotated[str | None, Query()] = None,
    tech: Annotated[str | None, Query(description="Technology substring")] = None,
    status_filter: Annotated[str | None, Query(alias="status")] = None,
) -> ProjectListResponse:
    page = await service.list_projects(
        params, policy, status=status_filter, featured=featured, year=year, technology=tech
    )
    return ProjectListResponse(
        projects=[ProjectRead.model_validate(p) for p in page.items],
        pagination=page.meta(),
    )


@router.get("/featured", response_model=FeaturedProjectsResponse, summary="Featured projects")
async def featured_projects(
    limit: FeaturedLimit, service: ProjectServiceDep
) -> FeaturedProjectsResponse:
    projects = await service.featured(limit)
    return FeaturedProjectsResponse(
        projects=[ProjectRead.model_validate(p) for p in projects],
        total=len(projects),
    )


@router.get("/statistics", response_model=ProjectStatsResponse, summary="Project statistics")
async def project_statistics(_admin: AdminUser, stats: StatsServiceDep) -> ProjectStatsResponse:
    return ProjectStatsResponse(stats=await stats.project_stats())


@router.get(
    "/technology/{tech}",
    response_model=ProjectListResponse,
    summary="Projects using a technology",
)
async def projects_by_technology(
    tech: str, params: Paging, service: ProjectServiceDep
) -> ProjectListResponse:
    page = await service.by_technology(tech, params)
    return ProjectListResponse(
        projects=[ProjectRead.model_validate(p) for p in page.items],
        pagination=page.meta(),
        technology=tech,
    )


@router.get("/year/{year}", response_model=ProjectListResponse, summary="Projects by year")
async def projects_by_year(
    year: str, params: Paging, service: ProjectServiceDep
) -> ProjectListResponse:
    page = await service.by_year(year, params)
    return ProjectListResponse(
        projects=[ProjectRead.model_validate(p) for p in page.items],
        pagination=page.meta(),
        year=year,
    )


@router.get(
    "/{project_id}",
    response_model=ProjectResponse,
    summary="Get project",
    responses={404: {"description": "Project not found or not visible"}},
)
async def get_project(
    project_id: UUID, policy: Access, service: ProjectServiceDep
) -> ProjectResponse:
    """Get a project by ID. Fetching a published project counts as a view."""
    project = await service.get(project_id, policy)
    return ProjectResponse(project=ProjectRead.model_validate(project))


@router.post(
    "",
    response_model=ProjectResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create project",
)
async def create_project(
    data: ProjectCreate, admin: AdminUser, service: ProjectServiceDep
) -> ProjectResponse:
    project = await service.create(data, admin.id)
    return ProjectResponse(
        message="Project created successfully", project=ProjectRead.model_validate(project)
    )


@router.put("/{project_id}", response_model=ProjectResponse, summary="Update project")
async def update_project(
    project_id: UUID, data: ProjectUpdate, admin: AdminUser, service: ProjectServiceDep
) -> ProjectResponse:
    project = await service.update(project_id, data, admin.id)
    return ProjectResponse(
        message="Project updated successfully", project=ProjectRead.model_validate(project)
    )


@router.patch(
    "/{project_id}/toggle-featured",
    response_model=ProjectResponse,
    summary="Set or flip the featured flag",
)
async def toggle_featured(
    project_id: UUID,
    admin: AdminUser,
    service: ProjectServiceDep,
    data: Annotated[FeaturedToggle | None, Body()] = None,
) -> ProjectResponse:
    featured = data.featured if data is not None else None
    project = await service.set_featured(project_id, featured, admin.id)
    return ProjectResponse(
        message="Project featured status updated successfully",
        project=ProjectRead.model_validate(project),
    )


@router.post(
    "/{project_id}/duplicate",
    response_model=ProjectResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Duplicate project as a draft",
)
async def duplicate_project(
    project_id: UUID, admin: AdminUser, service: ProjectServiceDep
) -> ProjectResponse:
    project = await service.duplicate(project_id, admin.id)
    return ProjectResponse(
        message="Project duplicated successfully", project=ProjectRead.model_validate(project)
    )


@router.delete("/{project_id}", response_model=ProjectDeleteResponse, summary="Delete project")
async def delete_project(
    project_id: UUID, _admin: AdminUser, service: ProjectServiceDep
) -> ProjectDeleteResponse:
    project = await service.delete(project_id)
    return ProjectDeleteResponse(
        message="Project deleted successfully",
        deleted_project=ProjectRead.model_validate(project),
    )
