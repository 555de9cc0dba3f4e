"""Model exports.

Import from here: `from src.portfolio.models import User, Project`
"""

from src.portfolio.models.enums import ProjectStatus, TestimonialStatus, UserRole
from src.portfolio.models.project import Project
from src.portfolio.models.testimonial import (
    MAX_FEATURED_TESTIMONIALS,
    MAX_RATING,
    MIN_RATING,
    Testimonial,
)
from src.portfolio.models.user import User

__all__ = [
    # Enums
    "ProjectStatus",
    "TestimonialStatus",
    "UserRole",
    # Models
    "MAX_FEATURED_TESTIMONIALS",
    "MAX_RATING",
    "MIN_RATING",
    "Project",
    "Testimonial",
    "User",
]
