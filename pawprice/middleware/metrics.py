"""Request metrics middleware for Prometheus monitoring."""

import time

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.routing import Match

from pawprice.core.logging import get_logger
from pawprice.core.metrics import REQUESTS_TOTAL, RESPONSES_TOTAL

logger = get_logger(__name__)

UNMATCHED_PATH = "unmatched"


def route_path(request: Request) -> str:
    """The route template a request matches, to keep label cardinality low."""
    for route in request.app.router.routes:
        match, _ = route.matches(request.scope)
        if match is Match.FULL:
            return str(getattr(route, "path", UNMATCHED_PATH))
    return UNMATCHED_PATH


class MetricsMiddleware(BaseHTTPMiddleware):
    """
    Middleware to collect request/response metrics.

    Records:
    - Total requests by method and route
    - Total responses by status code
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        REQUESTS_TOTAL.labels(method=request.method, path=route_path(request)).inc()

        start_time = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "request_failed",
                method=request.method,
                path=request.url.path,
                error=str(e),
            )
            raise
        duration = time.perf_counter() - start_time

        RESPONSES_TOTAL.labels(status_code=str(response.status_code)).inc()
        logger.info(
            "request_processed",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration_ms=round(duration * 1000, 2),
        )
        return response
