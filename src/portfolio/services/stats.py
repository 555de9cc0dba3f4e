"""Read-only statistics over projects and testimonials.

Counts, sums and distributions are grouped in the database; only the
technology tally runs here because it unpacks JSON lists. Empty collections
produce zero/empty values.
"""

from collections import Counter

from src.portfolio.models import ProjectStatus, TestimonialStatus
from src.portfolio.repositories import ProjectRepository, TestimonialRepository
from src.portfolio.schemas.stats import (
    CompanySummary,
    ProjectStats,
    RatingCount,
    RecentProject,
    RecentTestimonial,
    TechnologyCount,
    TestimonialStats,
    YearCount,
)

TOP_TECHNOLOGIES = 10
TOP_COMPANIES = 5
RECENT_LIMIT = 5


class StatsService:
    def __init__(
        self, project_repo: ProjectRepository, testimonial_repo: TestimonialRepository
    ):
        self.project_repo = project_repo
        self.testimonial_repo = testimonial_repo

    async def project_stats(self) -> ProjectStats:
        summary = await self.project_repo.status_summary()
        by_status = {row.status: row.total for row in summary}

        technologies: Counter[str] = Counter()
        for techs in await self.project_repo.published_technologies():
            technologies.update(techs)

        years = await self.project_repo.year_counts()
        recent = await self.project_repo.recent_published(RECENT_LIMIT)
        return ProjectStats(
            total=sum(by_status.values()),
            published=by_status.get(ProjectStatus.PUBLISHED.value, 0),
            draft=by_status.get(ProjectStatus.DRAFT.value, 0),
            archived=by_status.get(ProjectStatus.ARCHIVED.value, 0),
            featured=sum(int(row.featured or 0) for row in summary),
            total_views=sum(int(row.views or 0) for row in summary),
            year_distribution=[YearCount(year=year, count=count) for year, count in years],
            tech_distribution=[
                TechnologyCount(technology=tech, count=count)
                for tech, count in technologies.most_common(TOP_TECHNOLOGIES)
            ],
            recent_projects=[RecentProject.model_validate(p) for p in recent],
        )

    async def testimonial_stats(self) -> TestimonialStats:
        summary = await self.testimonial_repo.status_summary()
        by_status = {row.status: row.total for row in summary}
        total = sum(by_status.values())
        rating_sum = sum(int(row.rating_sum or 0) for row in summary)

        ratings = await self.testimonial_repo.rating_counts()
        companies = await self.testimonial_repo.top_companies(TOP_COMPANIES)
        recent = await self.testimonial_repo.recent_approved(RECENT_LIMIT)
        pending = by_status.get(TestimonialStatus.PENDING.value, 0)
        return TestimonialStats(
            total=total,
            approved=by_status.get(TestimonialStatus.APPROVED.value, 0),
            pending=pending,
            rejected=by_status.get(TestimonialStatus.REJECTED.value, 0),
            featured=sum(int(row.featured or 0) for row in summary),
            average_rating=round(rating_sum / total, 2) if total else 0.0,
            rating_distribution=[
                RatingCount(rating=rating, count=count) for rating, count in ratings
            ],
            top_companies=[
                CompanySummary(
                    company=row.company,
                    count=row.total,
                    average_rating=round(float(row.average), 2),
                )
                for row in companies
            ],
            recent_testimonials=[RecentTestimonial.model_validate(t) for t in recent],
            pending_count=pending,
        )
