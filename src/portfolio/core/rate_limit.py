"""Rate limiting configuration.

Two layers, both per client IP:
1. Global default limit applied to every route by ``SlowAPIMiddleware``.
2. A stricter limit decorated onto the login/register endpoints.

Storage is in-memory (per process).
"""

from slowapi import Limiter
from slowapi.util import get_remote_address
from starlette.requests import Request

from src.portfolio.core.config import get_settings
from src.portfolio.core.logging import get_logger

logger = get_logger(__name__)


def get_rate_limit_key(request: Request) -> str:
    """Generate rate limit key from client IP only.

    Never include user-controlled headers in the key, rotating them would
    create unlimited fresh buckets.
    """
    return get_remote_address(request) or "unknown"


def auth_rate_limit() -> str:
    """Limit string for authentication endpoints, read lazily from settings."""
    return get_settings().rate_limit_auth


def create_limiter() -> Limiter:
    """Create the rate limiter. Disabled in the testing environment."""
    settings = get_settings()

    if settings.is_testing:
        logger.info("Rate limiter disabled (testing environment)")
        return Limiter(key_func=get_rate_limit_key, enabled=False)

    return Limiter(
        key_func=get_rate_limit_key,
        default_limits=[settings.rate_limit_default],
    )


# Reads settings at import time; reconfiguration requires a restart.
limiter = create_limiter()
