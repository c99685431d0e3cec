"""Health check endpoint."""

from fastapi import APIRouter, Depends, Request

from pawprice.api.v1.models import HealthResponse
from pawprice.api.v1.price import get_pricing_service
from pawprice.core.config import Settings, get_settings
from pawprice.pricing.service import PricingService

router = APIRouter(tags=["health"])


def get_app_settings(request: Request) -> Settings:
    return getattr(request.app.state, "settings", None) or get_settings()


@router.get("/health", response_model=HealthResponse)
async def health_check(
    request: Request,
    settings: Settings = Depends(get_app_settings),
    service: PricingService = Depends(get_pricing_service),
) -> HealthResponse:
    """
    Health check endpoint.

    Returns
    -------
        Service version, configured providers and model slot usage
    """
    return HealthResponse(
        status="healthy",
        version=settings.version,
        geocoding_provider=service.search.geocoder.name,
        places_provider=service.search.provider.name,
        model=service.estimator.provider.model_name,
        llm_slots_in_use=service.limiter.held,
        llm_queue_depth=service.limiter.queued,
        correlation_id=getattr(request.state, "correlation_id", None),
    )
