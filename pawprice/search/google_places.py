"""Client for the Google Places Nearby Search API."""

from typing import Any

import httpx
from pydantic import ValidationError

from pawprice.core.distance import Coordinate, miles_to_meters
from pawprice.core.logging import get_logger
from pawprice.exceptions import PlacesProviderError
from pawprice.search.base import PlacesProvider
from pawprice.search.models import CandidateSource, PlaceResult

logger = get_logger(__name__)

NEARBY_SEARCH_URL = "https://maps.googleapis.com/maps/api/place/nearbysearch/json"
# Nearby Search rejects radii above 50 km
MAX_RADIUS_METERS = 50_000


class GooglePlacesProvider(PlacesProvider):
    """Nearby Search for pet stores matching a grooming keyword."""

    name = "google"

    def __init__(
        self,
        client: httpx.AsyncClient,
        api_key: str | None,
        url: str = NEARBY_SEARCH_URL,
        timeout: float = 10.0,
    ) -> None:
        self._client = client
        self._api_key = api_key
        self.url = url
        self.timeout = timeout

    @property
    def configured(self) -> bool:
        return bool(self._api_key)

    async def nearby(
        self, center: Coordinate, radius_miles: float, pet_type: str
    ) -> list[PlaceResult]:
        if not self._api_key:
            logger.warning("google_places_key_missing")
            return []

        radius_meters = min(miles_to_meters(radius_miles), MAX_RADIUS_METERS)
        params = {
            "location": f"{center.latitude},{center.longitude}",
            "radius": str(round(radius_meters)),
            "type": "pet_store",
            "keyword": f"pet grooming {pet_type}",
            "key": self._api_key,
        }
        try:
            response = await self._client.get(
                self.url, params=params, timeout=self.timeout
            )
            response.raise_for_status()
            payload: dict[str, Any] = response.json()
        except httpx.HTTPStatusError as e:
            raise PlacesProviderError(
                f"Places request failed with status {e.response.status_code}"
            ) from e
        except (httpx.HTTPError, ValueError) as e:
            raise PlacesProviderError(f"Places request failed: {e}") from e

        status = payload.get("status")
        if status not in {"OK", "ZERO_RESULTS"}:
            logger.error(
                "google_places_error",
                status=status,
                error_message=payload.get("error_message"),
            )
            raise PlacesProviderError(payload.get("error_message") or str(status))

        places = [
            place
            for place in (self._to_place(raw) for raw in payload.get("results", []))
            if place is not None
        ]
        logger.info(
            "google_places_results", radius_miles=radius_miles, count=len(places)
        )
        return places

    @staticmethod
    def _to_place(raw: dict[str, Any]) -> PlaceResult | None:
        try:
            location = raw["geometry"]["location"]
            coordinate = Coordinate(latitude=location["lat"], longitude=location["lng"])
        except (KeyError, TypeError, ValidationError):
            logger.debug("google_place_skipped", place_id=raw.get("place_id"))
            return None

        opening_hours = raw.get("opening_hours") or {}
        return PlaceResult(
            name=raw.get("name") or "Unnamed groomer",
            address=raw.get("vicinity") or raw.get("formatted_address") or "",
            place_id=raw.get("place_id"),
            coordinate=coordinate,
            rating=raw.get("rating"),
            # Phone and website need a Place Details call per result
            phone=None,
            hours="Open now" if opening_hours.get("open_now") else None,
            website=None,
            types=tuple(raw.get("types") or ()),
            source=CandidateSource.GOOGLE_PLACES,
        )
