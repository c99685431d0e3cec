"""Progressive-radius groomer discovery."""

import asyncio
import random
from collections.abc import Iterable, Sequence

from pydantic import ValidationError

from pawprice.core.distance import GeocodedLocation, haversine_km, miles_to_km
from pawprice.core.logging import get_logger
from pawprice.core.metrics import FALLBACK_SEARCHES_TOTAL
from pawprice.exceptions import PlacesProviderError
from pawprice.geocoding.base import Geocoder
from pawprice.search.base import PET_CARE_KEYWORDS, PlacesProvider
from pawprice.search.fallback import synthesize_groomers
from pawprice.search.models import GroomerCandidate, PlaceResult, SearchResult

logger = get_logger(__name__)

DEFAULT_RADII_MILES = (10, 20, 30, 40)


def is_service_match(place: PlaceResult, pet_type: str) -> bool:
    """Whether the place advertises pet care or the requested pet type."""
    haystack = " ".join([place.name, place.address, *place.types]).lower()
    keywords: Iterable[str] = (*PET_CARE_KEYWORDS, pet_type.lower())
    return any(keyword in haystack for keyword in keywords)


def to_candidate(
    place: PlaceResult, center: GeocodedLocation, pet_type: str
) -> GroomerCandidate:
    """Attach distance and service flags to a provider result."""
    matched = is_service_match(place, pet_type)
    return GroomerCandidate(
        name=place.name,
        address=place.address,
        place_id=place.place_id,
        lat=place.coordinate.latitude,
        lng=place.coordinate.longitude,
        rating=place.rating,
        phone=place.phone,
        hours=place.hours,
        website=place.website,
        types=list(place.types),
        services=[pet_type] if matched else [],
        service_match=matched,
        distance_km=haversine_km(center.coordinate, place.coordinate),
        source=place.source,
    )


def dedupe(groomers: Iterable[GroomerCandidate]) -> list[GroomerCandidate]:
    """Keep the first groomer seen for each identity, preserving order."""
    unique: dict[str, GroomerCandidate] = {}
    for groomer in groomers:
        unique.setdefault(groomer.dedup_key, groomer)
    return list(unique.values())


def rank(groomers: Iterable[GroomerCandidate], limit: int) -> list[GroomerCandidate]:
    """Closest first, truncated to ``limit``."""
    return sorted(groomers, key=lambda g: g.distance_km)[:limit]


class GroomerSearch:
    """Finds groomers near a location, widening the radius as needed.

    Never raises: any failure ends in an empty result with no radius, and a
    search that finds nothing at every radius returns synthesized groomers.
    """

    def __init__(
        self,
        geocoder: Geocoder,
        provider: PlacesProvider,
        radii_miles: Sequence[int] = DEFAULT_RADII_MILES,
        min_results: int = 10,
        max_results: int = 12,
        radius_delay_seconds: float = 1.0,
        fallback_radius_miles: int = 20,
        rng: random.Random | None = None,
    ) -> None:
        if not radii_miles:
            raise ValueError("At least one search radius is required")
        self.geocoder = geocoder
        self.provider = provider
        self.radii_miles = sorted(radii_miles)
        self.min_results = min_results
        self.max_results = max_results
        self.radius_delay_seconds = radius_delay_seconds
        self.fallback_radius_miles = fallback_radius_miles
        self._rng = rng or random.Random()

    async def search(self, location: str, pet_type: str) -> SearchResult:
        """Geocode ``location`` and find groomers around it."""
        try:
            center = await self.geocoder.geocode(location)
            return await self._search_around(center, pet_type)
        except Exception as e:
            logger.error(
                "groomer_search_failed",
                location=location[:100],
                error_type=type(e).__name__,
                error=str(e),
            )
            return SearchResult(groomers=[], radius_miles_used=None)

    async def _search_around(
        self, center: GeocodedLocation, pet_type: str
    ) -> SearchResult:
        found: dict[str, GroomerCandidate] = {}
        radius_used: int | None = None

        for index, miles in enumerate(self.radii_miles):
            radius_used = miles
            for groomer in await self._query_radius(center, miles, pet_type):
                found.setdefault(groomer.dedup_key, groomer)

            logger.info("radius_searched", radius_miles=miles, total_found=len(found))
            if len(found) >= self.min_results:
                break
            if index < len(self.radii_miles) - 1 and self.radius_delay_seconds > 0:
                await asyncio.sleep(self.radius_delay_seconds)

        if not found:
            FALLBACK_SEARCHES_TOTAL.inc()
            fallback = synthesize_groomers(center, pet_type, self._rng)
            logger.warning(
                "fallback_groomers_synthesized",
                count=len(fallback),
                formatted_address=center.formatted_address,
            )
            found = {g.dedup_key: g for g in dedupe(fallback)}
            radius_used = self.fallback_radius_miles

        groomers = rank(found.values(), self.max_results)
        logger.info(
            "groomer_search_completed",
            count=len(groomers),
            radius_miles_used=radius_used,
        )
        return SearchResult(groomers=groomers, radius_miles_used=radius_used)

    async def _query_radius(
        self, center: GeocodedLocation, miles: int, pet_type: str
    ) -> list[GroomerCandidate]:
        try:
            places = await self.provider.nearby(center.coordinate, miles, pet_type)
        except PlacesProviderError as e:
            logger.warning(
                "radius_search_failed",
                provider=self.provider.name,
                radius_miles=miles,
                error=str(e),
            )
            return []

        limit_km = miles_to_km(miles)
        candidates = []
        for place in places:
            try:
                candidate = to_candidate(place, center, pet_type)
            except ValidationError as e:
                logger.warning(
                    "place_skipped",
                    provider=self.provider.name,
                    place_id=place.place_id,
                    error_count=e.error_count(),
                )
                continue
            if candidate.distance_km <= limit_km:
                candidates.append(candidate)
        return candidates
