"""The pricing pipeline as one injectable unit."""

from dataclasses import dataclass

import httpx

from pawprice.admission import ConcurrencyLimiter, RateLimiter
from pawprice.core.config import Settings
from pawprice.core.logging import get_logger
from pawprice.geocoding import build_geocoder
from pawprice.llm import build_llm_provider
from pawprice.pricing.estimator import Estimator
from pawprice.pricing.models import EstimateMethod, PriceEstimate
from pawprice.search import build_groomer_search, build_places_provider
from pawprice.search.groomer_search import GroomerSearch
from pawprice.search.models import GroomerCandidate

logger = get_logger(__name__)


@dataclass(frozen=True)
class PriceQuery:
    """Validated, normalized request parameters."""

    location: str
    size: str
    pet_type: str


@dataclass(frozen=True)
class PriceQuote:
    """Everything one successful request returns."""

    query: PriceQuery
    price: PriceEstimate
    method: EstimateMethod
    groomers: list[GroomerCandidate]
    radius_miles_used: int | None


class PricingService:
    """Owns the process-wide state behind ``POST /api/price``.

    The rate limiter counters and the concurrency queue live here so tests
    can build isolated instances.
    """

    def __init__(
        self,
        rate_limiter: RateLimiter,
        limiter: ConcurrencyLimiter,
        search: GroomerSearch,
        estimator: Estimator,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.rate_limiter = rate_limiter
        self.limiter = limiter
        self.search = search
        self.estimator = estimator
        self._client = client

    @classmethod
    def from_settings(
        cls, settings: Settings, client: httpx.AsyncClient
    ) -> "PricingService":
        """Wire the configured providers around a shared HTTP client."""
        limiter = ConcurrencyLimiter(settings.MAX_CONCURRENT_LLM_CALLS)
        search = build_groomer_search(
            settings,
            build_geocoder(settings, client),
            build_places_provider(settings, client),
        )
        estimator = Estimator(
            build_llm_provider(settings),
            limiter,
            slot_timeout=settings.LLM_SLOT_TIMEOUT_SECONDS,
        )
        rate_limiter = RateLimiter(
            window_seconds=settings.rate_limit_window_seconds,
            max_requests=settings.RATE_LIMIT_MAX_REQUESTS,
            max_clients=settings.RATE_LIMIT_MAX_CLIENTS,
        )
        return cls(rate_limiter, limiter, search, estimator, client=client)

    async def quote(self, query: PriceQuery) -> PriceQuote:
        """Search for groomers, then estimate.

        Raises:
            ModelInvocationError: If the model call fails
        """
        result = await self.search.search(query.location, query.pet_type)
        outcome = await self.estimator.estimate(
            query.location,
            query.pet_type,
            query.size,
            result.groomers,
            result.radius_miles_used,
        )
        logger.info(
            "price_estimated",
            method=outcome.method.value,
            groomers=len(result.groomers),
            radius_miles_used=result.radius_miles_used,
        )
        return PriceQuote(
            query=query,
            price=outcome.price,
            method=outcome.method,
            groomers=result.groomers,
            radius_miles_used=result.radius_miles_used,
        )

    async def aclose(self) -> None:
        """Close outbound connections owned by this service."""
        await self.estimator.provider.aclose()
        if self._client is not None:
            await self._client.aclose()
