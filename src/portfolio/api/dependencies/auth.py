"""Authentication and authorization dependencies."""

from typing import Annotated

from fastapi import Depends, Header

from src.portfolio.api.dependencies.services import AuthServiceDep
from src.portfolio.core.exceptions import AuthenticationError, AuthorizationError
from src.portfolio.core.logging import bind_user_context
from src.portfolio.models import User
from src.portfolio.services.access import AccessPolicy, policy_for

BEARER_PREFIX = "Bearer "


def _bearer_token(authorization: str | None) -> str | None:
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        return None
    return authorization[len(BEARER_PREFIX) :].strip() or None


def get_bearer_token(authorization: Annotated[str | None, Header()] = None) -> str:
    """The raw bearer token. Missing or malformed headers are rejected."""
    token = _bearer_token(authorization)
    if token is None:
        raise AuthenticationError("Access denied. No token provided.")
    return token


BearerToken = Annotated[str, Depends(get_bearer_token)]


async def get_current_user(token: BearerToken, auth_service: AuthServiceDep) -> User:
    """Validate the access token and return the active user it names."""
    user = await auth_service.verify_token(token)
    bind_user_context(user.id, user.role, user.email)
    return user


CurrentUser = Annotated[User, Depends(get_current_user)]


async def get_optional_user(
    auth_service: AuthServiceDep,
    authorization: Annotated[str | None, Header()] = None,
) -> User | None:
    """Like ``get_current_user`` but anonymous callers get None.

    An invalid or expired token is treated as no token at all.
    """
    token = _bearer_token(authorization)
    if token is None:
        return None
    try:
        user = await auth_service.verify_token(token)
    except AuthenticationError:
        return None
    bind_user_context(user.id, user.role, user.email)
    return user


OptionalUser = Annotated[User | None, Depends(get_optional_user)]


async def require_admin(current_user: CurrentUser) -> User:
    """Require the current user to hold the admin role."""
    if not current_user.is_admin:
        raise AuthorizationError()
    return current_user


AdminUser = Annotated[User, Depends(require_admin)]


def get_access_policy(user: OptionalUser) -> AccessPolicy:
    return policy_for(user)


Access = Annotated[AccessPolicy, Depends(get_access_policy)]
