"""Shared enums for models."""

from enum import Enum


class UserRole(str, Enum):
    """Roles a user can hold. Admin is the only elevated role."""

    ADMIN = "admin"


class ProjectStatus(str, Enum):
    """Project lifecycle visibility."""

    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"


class TestimonialStatus(str, Enum):
    """Testimonial moderation state."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
