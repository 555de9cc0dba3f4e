"""Security headers middleware (Helmet-style)."""

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add Helmet-equivalent security headers to every response."""

    def __init__(
        self,
        app: ASGIApp,
        content_security_policy: str | None = None,
        x_content_type_options: str = "nosniff",
        x_frame_options: str = "SAMEORIGIN",
        strict_transport_security: str = "max-age=15552000; includeSubDomains",
        referrer_policy: str = "no-referrer",
        cross_origin_opener_policy: str = "same-origin",
        cross_origin_resource_policy: str = "same-origin",
    ):
        super().__init__(app)
        self.headers: dict[str, str] = {}
        if content_security_policy:
            self.headers["Content-Security-Policy"] = content_security_policy
        if x_content_type_options:
            self.headers["X-Content-Type-Options"] = x_content_type_options
        if x_frame_options:
            self.headers["X-Frame-Options"] = x_frame_options
        if strict_transport_security:
            self.headers["Strict-Transport-Security"] = strict_transport_security
        if referrer_policy:
            self.headers["Referrer-Policy"] = referrer_policy
        if cross_origin_opener_policy:
            self.headers["Cross-Origin-Opener-Policy"] = cross_origin_opener_policy
        if cross_origin_resource_policy:
            self.headers["Cross-Origin-Resource-Policy"] = cross_origin_resource_policy

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        response = await call_next(request)
        for header, value in self.headers.items():
            response.headers[header] = value
        return response
