"""Nominatim (OpenStreetMap) geocoding adapter built on geopy."""

from typing import Any

from geopy.adapters import AioHTTPAdapter
from geopy.exc import GeocoderServiceError, GeopyError
from geopy.geocoders import Nominatim
from pydantic import ValidationError

from pawprice.core.distance import Coordinate, GeocodedLocation
from pawprice.core.logging import get_logger
from pawprice.exceptions import GeocodingProviderError, LocationNotFoundError
from pawprice.geocoding.base import Geocoder

logger = get_logger(__name__)


class NominatimGeocoder(Geocoder):
    """Forward geocoding through the public Nominatim service.

    Needs no credential, only a descriptive user agent. geopy's aiohttp
    adapter keeps the call on the event loop.
    """

    name = "nominatim"

    def __init__(
        self,
        user_agent: str = "pawprice",
        timeout: float = 10.0,
        domain: str | None = None,
        adapter_factory: Any = AioHTTPAdapter,
    ) -> None:
        self.user_agent = user_agent
        self.timeout = timeout
        self.domain = domain
        self._adapter_factory = adapter_factory

    def _build(self) -> Nominatim:
        kwargs: dict[str, Any] = {
            "user_agent": self.user_agent,
            "timeout": self.timeout,
            "adapter_factory": self._adapter_factory,
        }
        if self.domain:
            kwargs["domain"] = self.domain
        return Nominatim(**kwargs)

    async def geocode(self, location: str) -> GeocodedLocation:
        if not location or not location.strip():
            raise LocationNotFoundError("Empty location")

        logger.info("geocode_started", provider=self.name, location=location[:100])
        try:
            async with self._build() as geolocator:
                result = await geolocator.geocode(location, exactly_one=True)
        except GeocoderServiceError as e:
            # Covers timeouts, unavailability, quota and auth failures
            logger.warning(
                "geocode_request_failed", provider=self.name, error=type(e).__name__
            )
            raise GeocodingProviderError(f"Geocoding request failed: {e}") from e
        except GeopyError as e:
            raise GeocodingProviderError(f"Geocoding request failed: {e}") from e

        if result is None:
            logger.info("geocode_no_results", provider=self.name, location=location[:100])
            raise LocationNotFoundError(f"Address not found: {location}")

        try:
            coordinate = Coordinate(latitude=result.latitude, longitude=result.longitude)
        except ValidationError as e:
            raise GeocodingProviderError("Malformed geocoding result") from e

        formatted = result.address or location
        logger.info(
            "geocode_succeeded",
            provider=self.name,
            formatted_address=formatted,
            latitude=coordinate.latitude,
            longitude=coordinate.longitude,
        )
        return GeocodedLocation(coordinate=coordinate, formatted_address=formatted)
