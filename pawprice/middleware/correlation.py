"""Correlation ID middleware for request tracking."""

import uuid

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from structlog.contextvars import bind_contextvars, clear_contextvars

REQUEST_ID_HEADER = "X-Request-ID"
TEST_ID_PREFIX = "test-"


def is_valid_correlation_id(value: str | None) -> bool:
    """A UUID, or a ``test-`` prefixed id supplied by test clients."""
    if not value:
        return False
    if value.startswith(TEST_ID_PREFIX):
        return True
    try:
        uuid.UUID(value)
    except ValueError:
        return False
    return True


class CorrelationMiddleware(BaseHTTPMiddleware):
    """
    Middleware to handle request correlation IDs.

    Reuses a valid incoming ``X-Request-ID`` or generates one, then exposes
    it on ``request.state``, in the structlog context and on the response.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        clear_contextvars()

        header_value = request.headers.get(REQUEST_ID_HEADER)
        if is_valid_correlation_id(header_value):
            correlation_id = str(header_value)
        else:
            correlation_id = str(uuid.uuid4())

        bind_contextvars(correlation_id=correlation_id)
        request.state.correlation_id = correlation_id

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = correlation_id
        return response
