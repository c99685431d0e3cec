"""Geocodio geocoding adapter."""

from typing import Any

import httpx
from pydantic import ValidationError

from pawprice.core.distance import Coordinate, GeocodedLocation
from pawprice.core.logging import get_logger
from pawprice.exceptions import GeocodingProviderError, LocationNotFoundError
from pawprice.geocoding.base import Geocoder

logger = get_logger(__name__)

GEOCODIO_URL = "https://api.geocod.io/v1.7/geocode"


class GeocodioGeocoder(Geocoder):
    """Forward geocoding through the Geocodio REST API."""

    name = "geocodio"

    def __init__(
        self,
        client: httpx.AsyncClient,
        api_key: str | None,
        url: str = GEOCODIO_URL,
        timeout: float = 10.0,
    ) -> None:
        self._client = client
        self._api_key = api_key
        self.url = url
        self.timeout = timeout

    async def geocode(self, location: str) -> GeocodedLocation:
        """Geocode a free-text location.

        Args:
            location: Address, city or postal code

        Returns:
            The first result's coordinate and formatted address

        Raises:
            LocationNotFoundError: When Geocodio returns no results
            GeocodingProviderError: On missing key, network, status or payload errors
        """
        if not location or not location.strip():
            raise LocationNotFoundError("Empty location")
        if not self._api_key:
            logger.error("geocodio_key_missing")
            raise GeocodingProviderError("Geocoding API key not configured")

        logger.info("geocode_started", provider=self.name, location=location[:100])
        try:
            response = await self._client.get(
                self.url,
                params={"q": location, "api_key": self._api_key},
                timeout=self.timeout,
            )
            response.raise_for_status()
            payload: dict[str, Any] = response.json()
        except httpx.TimeoutException as e:
            logger.warning("geocode_timeout", provider=self.name)
            raise GeocodingProviderError("Geocoding request timed out") from e
        except httpx.HTTPStatusError as e:
            logger.warning(
                "geocode_http_error",
                provider=self.name,
                status_code=e.response.status_code,
            )
            raise GeocodingProviderError(
                f"Geocoding failed with status {e.response.status_code}"
            ) from e
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(
                "geocode_request_failed", provider=self.name, error=type(e).__name__
            )
            raise GeocodingProviderError(f"Geocoding request failed: {e}") from e

        if not isinstance(payload, dict):
            raise GeocodingProviderError("Malformed geocoding response")
        results = payload.get("results") or []
        if not results:
            logger.info("geocode_no_results", provider=self.name, location=location[:100])
            raise LocationNotFoundError(f"Address not found: {location}")

        first = results[0]
        try:
            coordinate = Coordinate(
                latitude=first["location"]["lat"],
                longitude=first["location"]["lng"],
            )
        except (KeyError, TypeError, ValidationError) as e:
            raise GeocodingProviderError("Malformed geocoding result") from e

        formatted = first.get("formatted_address") or location
        logger.info(
            "geocode_succeeded",
            provider=self.name,
            formatted_address=formatted,
            latitude=coordinate.latitude,
            longitude=coordinate.longitude,
        )
        return GeocodedLocation(coordinate=coordinate, formatted_address=formatted)
