"""Groomer discovery around a location."""

import httpx

from pawprice.core.config import Settings
from pawprice.geocoding.base import Geocoder
from pawprice.search.base import PlacesProvider
from pawprice.search.google_places import GooglePlacesProvider
from pawprice.search.groomer_search import GroomerSearch
from pawprice.search.models import (
    CandidateSource,
    GroomerCandidate,
    PlaceResult,
    SearchResult,
)
from pawprice.search.overpass import OverpassProvider


def build_places_provider(
    settings: Settings, client: httpx.AsyncClient
) -> PlacesProvider:
    """Create the business search provider named by ``settings.PLACES_PROVIDER``."""
    provider = settings.PLACES_PROVIDER
    if provider == "google":
        return GooglePlacesProvider(
            client,
            api_key=settings.GOOGLE_PLACES_API_KEY,
            url=settings.GOOGLE_PLACES_URL,
            timeout=settings.SEARCH_TIMEOUT,
        )
    if provider in {"overpass", "openstreetmap", "osm"}:
        return OverpassProvider(
            client, url=settings.OVERPASS_URL, timeout=settings.SEARCH_TIMEOUT
        )
    raise ValueError(f"Unknown places provider: {provider}")


def build_groomer_search(
    settings: Settings, geocoder: Geocoder, provider: PlacesProvider
) -> GroomerSearch:
    return GroomerSearch(
        geocoder,
        provider,
        radii_miles=settings.SEARCH_RADII_MILES,
        min_results=settings.SEARCH_MIN_RESULTS,
        max_results=settings.SEARCH_MAX_RESULTS,
        radius_delay_seconds=settings.SEARCH_RADIUS_DELAY_SECONDS,
        fallback_radius_miles=settings.FALLBACK_RADIUS_MILES,
    )


__all__ = [
    "CandidateSource",
    "GooglePlacesProvider",
    "GroomerCandidate",
    "GroomerSearch",
    "OverpassProvider",
    "PlaceResult",
    "PlacesProvider",
    "SearchResult",
    "build_groomer_search",
    "build_places_provider",
]
