"""OpenStreetMap search through the Overpass API."""

from typing import Any

import httpx
from pydantic import ValidationError

from pawprice.core.distance import Coordinate, miles_to_meters
from pawprice.core.logging import get_logger
from pawprice.exceptions import PlacesProviderError
from pawprice.search.base import PlacesProvider
from pawprice.search.models import CandidateSource, PlaceResult

logger = get_logger(__name__)

OVERPASS_URL = "https://overpass-api.de/api/interpreter"

# (key, value) tag pairs that identify pet-care businesses in OSM
PET_CARE_TAGS = (
    ("shop", "pet_grooming"),
    ("craft", "pet_grooming"),
    ("shop", "pet"),
    ("amenity", "veterinary"),
)


def build_query(center: Coordinate, radius_meters: float, timeout: int = 25) -> str:
    """Overpass QL for pet-care nodes, ways and relations around a point."""
    around = f"around:{round(radius_meters)},{center.latitude},{center.longitude}"
    clauses = "\n".join(f'  nwr["{k}"="{v}"]({around});' for k, v in PET_CARE_TAGS)
    return f"[out:json][timeout:{timeout}];\n(\n{clauses}\n);\nout center tags;"


def format_address(tags: dict[str, str]) -> str:
    street = " ".join(
        part for part in (tags.get("addr:housenumber"), tags.get("addr:street")) if part
    )
    locality = " ".join(
        part for part in (tags.get("addr:state"), tags.get("addr:postcode")) if part
    )
    parts = [street, tags.get("addr:city", ""), locality]
    return ", ".join(part for part in parts if part)


class OverpassProvider(PlacesProvider):
    """Pet-care businesses from OpenStreetMap. Needs no credential."""

    name = "overpass"

    def __init__(
        self,
        client: httpx.AsyncClient,
        url: str = OVERPASS_URL,
        timeout: float = 10.0,
    ) -> None:
        self._client = client
        self.url = url
        self.timeout = timeout

    async def nearby(
        self, center: Coordinate, radius_miles: float, pet_type: str
    ) -> list[PlaceResult]:
        query = build_query(center, miles_to_meters(radius_miles))
        try:
            response = await self._client.post(
                self.url, data={"data": query}, timeout=self.timeout
            )
            response.raise_for_status()
            payload: dict[str, Any] = response.json()
        except httpx.HTTPStatusError as e:
            raise PlacesProviderError(
                f"Overpass request failed with status {e.response.status_code}"
            ) from e
        except (httpx.HTTPError, ValueError) as e:
            raise PlacesProviderError(f"Overpass request failed: {e}") from e

        places = [
            place
            for place in (self._to_place(el) for el in payload.get("elements", []))
            if place is not None
        ]
        logger.info("overpass_results", radius_miles=radius_miles, count=len(places))
        return places

    @staticmethod
    def _to_place(element: dict[str, Any]) -> PlaceResult | None:
        tags: dict[str, str] = element.get("tags") or {}
        name = tags.get("name")
        if not name:
            return None

        point = element if "lat" in element else element.get("center") or {}
        try:
            coordinate = Coordinate(latitude=point["lat"], longitude=point["lon"])
        except (KeyError, TypeError, ValidationError):
            return None

        keys = dict.fromkeys(k for k, _ in PET_CARE_TAGS if k in tags)
        types = tuple(f"{k}={tags[k]}" for k in keys)
        return PlaceResult(
            name=name,
            address=format_address(tags),
            place_id=f"osm:{element.get('type', 'node')}/{element.get('id')}",
            coordinate=coordinate,
            phone=tags.get("phone") or tags.get("contact:phone"),
            hours=tags.get("opening_hours"),
            website=tags.get("website") or tags.get("contact:website"),
            types=types,
            source=CandidateSource.OPENSTREETMAP,
        )
