"""Pure state changes for projects and testimonials.

Each function inspects a record and returns the field changes an action
implies. Nothing here touches the session; repositories persist the result.
"""

from typing import Any
from uuid import UUID

from src.portfolio.models import Project, Testimonial, TestimonialStatus
from src.portfolio.models.base import utc_now

Changes = dict[str, Any]


def _stamp(changes: Changes, actor_id: UUID) -> Changes:
    changes["updated_by"] = actor_id
    changes["updated_at"] = utc_now()
    return changes


def approve(testimonial: Testimonial, actor_id: UUID) -> Changes:
    return _stamp({"status": TestimonialStatus.APPROVED.value}, actor_id)


def reject(testimonial: Testimonial, actor_id: UUID) -> Changes:
    return _stamp({"status": TestimonialStatus.REJECTED.value}, actor_id)


def verify(testimonial: Testimonial, actor_id: UUID) -> Changes:
    return _stamp({"verified": True}, actor_id)


def set_featured(
    record: Project | Testimonial, featured: bool | None, actor_id: UUID
) -> Changes:
    """Set ``featured`` explicitly, or flip it when ``featured`` is None."""
    value = (not record.featured) if featured is None else featured
    return _stamp({"featured": value}, actor_id)


def toggle_featured(record: Project | Testimonial, actor_id: UUID) -> Changes:
    return set_featured(record, None, actor_id)


def edit(updates: Changes, actor_id: UUID) -> Changes:
    """Field updates from a partial payload; ownership fields are never editable."""
    changes = {k: v for k, v in updates.items() if k not in {"id", "created_by", "created_at"}}
    return _stamp(changes, actor_id)


def should_auto_feature(rating: int, verified: bool) -> bool:
    """New five-star testimonials from verified sources start out featured."""
    return rating == 5 and verified
