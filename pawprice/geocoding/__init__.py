"""Geocoding strategies.

The provider is a configuration detail: ``GEOCODING_PROVIDER`` picks one of
the adapters below and everything downstream only sees ``Geocoder``.
"""

import httpx

from pawprice.core.config import Settings
from pawprice.geocoding.base import Geocoder
from pawprice.geocoding.geocodio import GeocodioGeocoder
from pawprice.geocoding.nominatim import NominatimGeocoder


def build_geocoder(settings: Settings, client: httpx.AsyncClient) -> Geocoder:
    """Create the geocoder named by ``settings.GEOCODING_PROVIDER``."""
    provider = settings.GEOCODING_PROVIDER
    if provider == "geocodio":
        return GeocodioGeocoder(
            client,
            api_key=settings.GEOCODIO_API_KEY,
            url=settings.GEOCODIO_URL,
            timeout=settings.GEOCODING_TIMEOUT,
        )
    if provider == "nominatim":
        return NominatimGeocoder(
            user_agent=settings.NOMINATIM_USER_AGENT,
            timeout=settings.GEOCODING_TIMEOUT,
        )
    raise ValueError(f"Unknown geocoding provider: {provider}")


__all__ = [
    "Geocoder",
    "GeocodioGeocoder",
    "NominatimGeocoder",
    "build_geocoder",
]
