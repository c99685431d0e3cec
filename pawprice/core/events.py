"""Application startup and shutdown events."""

from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import AbstractAsyncContextManager, asynccontextmanager

import httpx
from fastapi import FastAPI

from pawprice.core.config import Settings
from pawprice.core.logging import get_logger, mask_secret
from pawprice.pricing.service import PricingService

logger = get_logger(__name__)

EventHandler = Callable[[], Awaitable[None]]


def build_http_client(settings: Settings) -> httpx.AsyncClient:
    """The process-wide client for geocoding and search calls."""
    return httpx.AsyncClient(
        timeout=httpx.Timeout(max(settings.GEOCODING_TIMEOUT, settings.SEARCH_TIMEOUT)),
        headers={"User-Agent": f"{settings.app_name}/{settings.version}"},
        follow_redirects=True,
    )


def create_start_app_handler(app: FastAPI, settings: Settings) -> EventHandler:
    """Build the pricing service unless one was injected."""

    async def start_app() -> None:
        if getattr(app.state, "pricing_service", None) is not None:
            app.state.owns_pricing_service = False
            logger.info("pricing_service_injected")
            return

        client = build_http_client(settings)
        app.state.pricing_service = PricingService.from_settings(settings, client)
        app.state.owns_pricing_service = True
        logger.info(
            "application_started",
            environment=settings.ENVIRONMENT,
            geocoding_provider=settings.GEOCODING_PROVIDER,
            places_provider=settings.PLACES_PROVIDER,
            model=settings.GROQ_MODEL,
            groq_api_key=mask_secret(settings.GROQ_API_KEY),
            max_concurrent_llm_calls=settings.MAX_CONCURRENT_LLM_CALLS,
        )

    return start_app


def create_stop_app_handler(app: FastAPI) -> EventHandler:
    """Close the outbound connections opened at startup."""

    async def stop_app() -> None:
        service: PricingService | None = getattr(app.state, "pricing_service", None)
        if service is not None and getattr(app.state, "owns_pricing_service", False):
            await service.aclose()
            app.state.pricing_service = None
        logger.info("application_stopped")

    return stop_app


def create_lifespan(
    settings: Settings,
) -> Callable[[FastAPI], AbstractAsyncContextManager[None]]:
    """Lifespan context running the start and stop handlers."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        await create_start_app_handler(app, settings)()
        try:
            yield
        finally:
            await create_stop_app_handler(app)()

    return lifespan
