"""Logging context middleware for request correlation and access lines."""

import time

from asgi_correlation_id import correlation_id
from fastapi import Request, Response
from starlette.middleware.base import RequestResponseEndpoint

from src.portfolio.core.logging import bind_request_context, clear_request_context, get_logger

logger = get_logger("portfolio.access")


async def logging_context_middleware(
    request: Request, call_next: RequestResponseEndpoint
) -> Response:
    """Bind request_id to the log context and log one access line per request."""
    clear_request_context()
    bind_request_context(correlation_id.get())
    start = time.perf_counter()
    try:
        response = await call_next(request)
        logger.info(
            "Request completed",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration_ms=round((time.perf_counter() - start) * 1000, 2),
        )
        return response
    finally:
        clear_request_context()
