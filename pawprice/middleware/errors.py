"""Error handling middleware and exception handlers."""

from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_429_TOO_MANY_REQUESTS,
    HTTP_500_INTERNAL_SERVER_ERROR,
)
from starlette.types import ASGIApp

from pawprice.core.logging import get_logger
from pawprice.exceptions import InvalidInputError, PawPriceError, RateLimitExceeded

logger = get_logger(__name__)

GENERIC_ERROR_DETAIL = "Internal Server Error"


def format_validation_errors(errors: Any) -> list[str]:
    """One ``"field: message"`` line per pydantic error."""
    details = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ()) if part != "body"]
        field = ".".join(loc) or "body"
        details.append(f"{field}: {error.get('msg', 'invalid value')}")
    return details


def _rate_limit_headers(request: Request) -> dict[str, str]:
    decision = getattr(request.state, "rate_limit", None)
    return decision.headers() if decision is not None else {}


def _log_error(request: Request, exc: Exception, status_code: int, detail: str) -> None:
    logger.error(
        "request_error",
        error_type=type(exc).__name__,
        error_message=detail,
        status_code=status_code,
        path=request.url.path,
        method=request.method,
        correlation_id=getattr(request.state, "correlation_id", None),
    )


class ErrorRenderer:
    """Renders application errors in the pricing API's response shapes.

    Args:
        expose_details: Include exception messages in 500 bodies. Disabled
            in production so provider responses never reach clients.
    """

    def __init__(self, expose_details: bool = True) -> None:
        self.expose_details = expose_details

    def render(self, request: Request, exc: Exception) -> JSONResponse:
        headers = _rate_limit_headers(request)
        content: dict[str, Any]

        if isinstance(exc, RateLimitExceeded):
            status_code = HTTP_429_TOO_MANY_REQUESTS
            headers.update(exc.decision.headers())
            content = {"error": "Rate limit exceeded", "retryAfter": exc.retry_after}
            detail = str(exc)
        elif isinstance(exc, InvalidInputError):
            status_code = HTTP_400_BAD_REQUEST
            content = {"error": "Invalid input", "details": exc.details}
            detail = str(exc)
        elif isinstance(exc, RequestValidationError | ValidationError):
            status_code = HTTP_400_BAD_REQUEST
            details = format_validation_errors(exc.errors())
            content = {"error": "Invalid input", "details": details}
            detail = "; ".join(details)
        elif isinstance(exc, StarletteHTTPException):
            status_code = exc.status_code
            detail = str(exc.detail)
            content = {"error": detail}
            headers.update(exc.headers or {})
        else:
            status_code = HTTP_500_INTERNAL_SERVER_ERROR
            detail = str(exc) or type(exc).__name__
            content = {
                "error": "Pricing service error",
                "details": detail if self.expose_details else GENERIC_ERROR_DETAIL,
            }

        _log_error(request, exc, status_code, detail)

        correlation_id = getattr(request.state, "correlation_id", None)
        if correlation_id:
            headers["X-Request-ID"] = str(correlation_id)
        return JSONResponse(status_code=status_code, content=content, headers=headers)

    async def __call__(self, request: Request, exc: Exception) -> JSONResponse:
        return self.render(request, exc)


def register_exception_handlers(app: FastAPI, renderer: ErrorRenderer) -> None:
    """Route handled exception types through ``renderer``."""
    app.exception_handlers[PawPriceError] = renderer
    app.exception_handlers[RequestValidationError] = renderer
    app.exception_handlers[StarletteHTTPException] = renderer


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """Turns exceptions that escape the routes into 500 responses."""

    def __init__(self, app: ASGIApp, renderer: ErrorRenderer) -> None:
        super().__init__(app)
        self.renderer = renderer

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            return self.renderer.render(request, exc)
