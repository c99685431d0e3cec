"""Error taxonomy for the pricing pipeline.

Only three of these ever reach a client: ``InvalidInputError`` (400),
``RateLimitExceeded`` (429) and ``ModelInvocationError`` (500). Upstream
geocoding/search failures and unusable model output are recovered inside
the pipeline.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pawprice.admission.rate_limiter import RateLimitDecision


class PawPriceError(Exception):
    """Base class for all application errors."""


class InvalidInputError(PawPriceError):
    """Request parameters failed validation."""

    status_code = 400

    def __init__(self, details: list[str]) -> None:
        super().__init__("; ".join(details) or "Invalid input")
        self.details = details


class RateLimitExceeded(PawPriceError):
    """Client exceeded its request budget for the current window."""

    status_code = 429

    def __init__(self, decision: "RateLimitDecision") -> None:
        super().__init__(f"Rate limit exceeded, retry in {decision.retry_after}s")
        self.decision = decision

    @property
    def retry_after(self) -> int:
        return self.decision.retry_after


class UpstreamUnavailable(PawPriceError):
    """A geocoding or search provider could not answer."""


class GeocodingProviderError(UpstreamUnavailable):
    """Geocoding request failed (network, status, timeout, credentials)."""


class LocationNotFoundError(UpstreamUnavailable):
    """Geocoding provider returned no results for the location."""


class PlacesProviderError(UpstreamUnavailable):
    """Business search request failed."""


class ModelInvocationError(PawPriceError):
    """The text-generation call failed or is misconfigured."""

    status_code = 500


class SlotTimeoutError(PawPriceError):
    """Waited too long for a model concurrency slot."""


class ModelParseError(PawPriceError):
    """The model answered but not with a usable price object."""
