"""Project service - visibility checks, view counting and admin edits."""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.portfolio.core.exceptions import NotFoundError
from src.portfolio.core.logging import get_logger
from src.portfolio.models import Project, ProjectStatus
from src.portfolio.repositories import Page, ProjectRepository, TestimonialRepository
from src.portfolio.schemas.pagination import ListParams
from src.portfolio.schemas.project import ProjectCreate, ProjectUpdate
from src.portfolio.services import transitions
from src.portfolio.services.access import AccessPolicy

logger = get_logger(__name__)

PUBLIC_STATUS = ProjectStatus.PUBLISHED.value
NOT_FOUND = "Project not found"
NULLABLE_FIELDS = frozenset({"subtitle", "description", "thumbnail_url", "live_url", "github_url"})


class ProjectService:
    def __init__(
        self,
        project_repo: ProjectRepository,
        testimonial_repo: TestimonialRepository,
        session: AsyncSession,
    ):
        self.project_repo = project_repo
        self.testimonial_repo = testimonial_repo
        self.session = session

    async def _get_or_404(self, project_id: UUID) -> Project:
        project = await self.project_repo.get_by_id(project_id)
        if project is None:
            raise NotFoundError(NOT_FOUND)
        return project

    async def list_projects(
        self,
        params: ListParams,
        policy: AccessPolicy,
        *,
        status: str | None = None,
        featured: str | None = None,
        year: str | None = None,
        technology: str | None = None,
    ) -> Page[Project]:
        return await self.project_repo.find(
            params, policy, status=status, featured=featured, year=year, technology=technology
        )

    async def featured(self, limit: int) -> list[Project]:
        return await self.project_repo.featured(limit)

    async def by_year(self, year: str, params: ListParams) -> Page[Project]:
        return await self.project_repo.find_by_year(year, params)

    async def by_technology(self, technology: str, params: ListParams) -> Page[Project]:
        return await self.project_repo.find_by_technology(technology, params)

    async def get(self, project_id: UUID, policy: AccessPolicy) -> Project:
        """Fetch a project the caller may see; published fetches count as a view.

        Non-public projects are reported as missing to non-admins.
        """
        project = await self._get_or_404(project_id)
        if not policy.can_view(project.status, PUBLIC_STATUS):
            raise NotFoundError(NOT_FOUND)

        if project.status == PUBLIC_STATUS:
            await self.project_repo.increment_views(project.id)
            await self.session.commit()
            await self.session.refresh(project)
        return project

    async def create(self, data: ProjectCreate, actor_id: UUID) -> Project:
        project = Project(
            **data.model_dump(exclude_none=True),
            created_by=actor_id,
            updated_by=actor_id,
        )
        self.project_repo.add(project)
        await self.session.commit()
        await self.session.refresh(project)
        logger.info("Project created", project_id=str(project.id))
        return project

    async def update(self, project_id: UUID, data: ProjectUpdate, actor_id: UUID) -> Project:
        project = await self._get_or_404(project_id)
        updates = {
            field: value
            for field, value in data.model_dump(exclude_unset=True).items()
            if value is not None or field in NULLABLE_FIELDS
        }
        self.project_repo.apply(project, transitions.edit(updates, actor_id))
        await self.session.commit()
        await self.session.refresh(project)
        logger.info("Project updated", project_id=str(project.id), fields=sorted(updates))
        return project

    async def set_featured(self, project_id: UUID, featured: bool | None, actor_id: UUID) -> Project:
        project = await self._get_or_404(project_id)
        self.project_repo.apply(project, transitions.set_featured(project, featured, actor_id))
        await self.session.commit()
        await self.session.refresh(project)
        return project

    async def duplicate(self, project_id: UUID, actor_id: UUID) -> Project:
        """Copy a project as an unfeatured draft titled "<title> (Copy)"."""
        original = await self._get_or_404(project_id)
        copy = Project(
            title=f"{original.title} (Copy)"[:200],
            subtitle=original.subtitle,
            description=original.description,
            technologies=list(original.technologies),
            year=original.year,
            featured=False,
            status=ProjectStatus.DRAFT.value,
            thumbnail_url=original.thumbnail_url,
            live_url=original.live_url,
            github_url=original.github_url,
            tags=list(original.tags),
            created_by=actor_id,
            updated_by=actor_id,
        )
        self.project_repo.add(copy)
        await self.session.commit()
        await self.session.refresh(copy)
        logger.info("Project duplicated", project_id=str(copy.id), source_id=str(original.id))
        return copy

    async def delete(self, project_id: UUID) -> Project:
        """Delete a project and unlink testimonials that referenced it."""
        project = await self._get_or_404(project_id)
        await self.testimonial_repo.detach_project(project.id)
        await self.project_repo.delete(project)
        await self.session.commit()
        logger.info("Project deleted", project_id=str(project_id))
        return project
