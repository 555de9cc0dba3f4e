"""Record visibility rules per caller role."""

from abc import ABC, abstractmethod

from src.portfolio.models import User


class AccessPolicy(ABC):
    """Decides which lifecycle states a caller may observe."""

    is_admin: bool = False

    @abstractmethod
    def visible_status(self, requested: str | None, public_value: str) -> str:
        """Status a listing query is restricted to."""

    @abstractmethod
    def can_view(self, status: str, public_value: str) -> bool:
        """Whether a single record in ``status`` may be returned."""


class PublicAccess(AccessPolicy):
    """Anonymous or non-admin callers only ever see the public state."""

    def visible_status(self, requested: str | None, public_value: str) -> str:
        return public_value

    def can_view(self, status: str, public_value: str) -> bool:
        return status == public_value


class AdminAccess(AccessPolicy):
    """Admins may filter by any status and read every record."""

    is_admin = True

    def visible_status(self, requested: str | None, public_value: str) -> str:
        return requested or public_value

    def can_view(self, status: str, public_value: str) -> bool:
        return True


PUBLIC = PublicAccess()
ADMIN = AdminAccess()


def policy_for(user: User | None) -> AccessPolicy:
    if user is not None and user.is_active and user.is_admin:
        return ADMIN
    return PUBLIC
