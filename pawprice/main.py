"""Main FastAPI application module."""

from fastapi import FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from starlette import status

from pawprice.api.v1.router import router as v1_router
from pawprice.core.config import Settings, get_settings
from pawprice.core.events import create_lifespan
from pawprice.core.logging import configure_logging
from pawprice.middleware.correlation import CorrelationMiddleware
from pawprice.middleware.errors import (
    ErrorHandlingMiddleware,
    ErrorRenderer,
    register_exception_handlers,
)
from pawprice.middleware.metrics import MetricsMiddleware
from pawprice.middleware.security import SecurityHeadersMiddleware
from pawprice.pricing.service import PricingService

EXPOSED_HEADERS = [
    "X-Request-ID",
    "X-RateLimit-Limit",
    "X-RateLimit-Remaining",
    "X-RateLimit-Reset",
    "Retry-After",
]


def create_app(
    settings: Settings | None = None, service: PricingService | None = None
) -> FastAPI:
    """Build the application.

    Args:
        settings: Settings to use; loaded from the environment when omitted
        service: Pre-built pricing service. When given, startup does not
            build one and shutdown leaves it open.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Grooming price estimates from nearby groomers",
        version=settings.version,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        default_response_class=JSONResponse,
        lifespan=create_lifespan(settings),
    )
    app.state.settings = settings
    app.state.pricing_service = service

    renderer = ErrorRenderer(expose_details=not settings.is_production)
    register_exception_handlers(app, renderer)

    # Each add_middleware call wraps the previous ones, so the stack from
    # the outside in is: CORS, security headers, correlation, metrics,
    # error handling.
    app.add_middleware(ErrorHandlingMiddleware, renderer=renderer)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(CorrelationMiddleware)
    app.add_middleware(SecurityHeadersMiddleware, hsts=settings.is_production)
    origins = settings.cors_origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins or ["*"],
        allow_credentials=settings.cors_allow_credentials and bool(origins),
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "X-Request-ID"],
        expose_headers=EXPOSED_HEADERS,
        max_age=600,
    )

    @app.get("/metrics", include_in_schema=False)
    async def metrics() -> Response:
        """Expose Prometheus metrics."""
        return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)

    @app.get("/", include_in_schema=False)
    async def root_redirect() -> Response:
        """Redirect root path to docs."""
        return RedirectResponse(
            url="/docs", status_code=status.HTTP_307_TEMPORARY_REDIRECT
        )

    app.include_router(v1_router, prefix=settings.api_prefix)
    return app


def create_default_app() -> FastAPI:
    """Entry point for ``uvicorn --factory``."""
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL, json_logs=settings.JSON_LOGS)
    return create_app(settings)
