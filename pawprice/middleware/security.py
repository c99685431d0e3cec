"""Security headers middleware."""

from fastapi import Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.types import ASGIApp

DEFAULT_SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "no-referrer",
}


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Adds fixed security headers to every response.

    ``Strict-Transport-Security`` is only sent when ``hsts`` is enabled,
    since the API is often served over plain HTTP in development.
    """

    def __init__(self, app: ASGIApp, hsts: bool = False) -> None:
        super().__init__(app)
        self.security_headers = dict(DEFAULT_SECURITY_HEADERS)
        if hsts:
            self.security_headers["Strict-Transport-Security"] = "max-age=31536000"

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        response = await call_next(request)
        for header_name, header_value in self.security_headers.items():
            response.headers.setdefault(header_name, header_value)
        return response
