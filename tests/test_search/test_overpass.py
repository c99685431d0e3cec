"""Tests for the Overpass provider."""

from urllib.parse import parse_qs

import httpx
import pytest

from pawprice.core.distance import Coordinate
from pawprice.exceptions import PlacesProviderError
from pawprice.search.models import CandidateSource
from pawprice.search.overpass import OverpassProvider, build_query, format_address

CENTER = Coordinate(latitude=30.2672, longitude=-97.7431)

ELEMENTS = {
    "elements": [
        {
            "type": "node",
            "id": 101,
            "lat": 30.27,
            "lon": -97.74,
            "tags": {
                "name": "Wag Salon",
                "shop": "pet_grooming",
                "addr:housenumber": "500",
                "addr:street": "Lamar Blvd",
                "addr:city": "Austin",
                "addr:state": "TX",
                "addr:postcode": "78703",
                "phone": "+1 512 555 0100",
                "opening_hours": "Mo-Fr 09:00-17:00",
            },
        },
        {
            "type": "way",
            "id": 202,
            "center": {"lat": 30.28, "lon": -97.75},
            "tags": {"name": "Lamar Vet", "amenity": "veterinary"},
        },
        {"type": "node", "id": 303, "lat": 30.0, "lon": -97.0, "tags": {"shop": "pet"}},
    ]
}


def test_build_query() -> None:
    query = build_query(CENTER, 16093.4)
    assert query.startswith("[out:json][timeout:25];")
    assert 'nwr["shop"="pet_grooming"](around:16093,30.2672,-97.7431);' in query
    assert 'nwr["amenity"="veterinary"]' in query
    assert query.endswith("out center tags;")


def test_format_address() -> None:
    tags = ELEMENTS["elements"][0]["tags"]
    assert format_address(tags) == "500 Lamar Blvd, Austin, TX 78703"
    assert format_address({}) == ""


@pytest.mark.asyncio
async def test_maps_elements() -> None:
    bodies: list[bytes] = []

    def handler(request: httpx.Request) -> httpx.Response:
        bodies.append(request.content)
        return httpx.Response(200, json=ELEMENTS)

    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    places = await OverpassProvider(client).nearby(CENTER, 10, "dog")

    assert [p.name for p in places] == ["Wag Salon", "Lamar Vet"]
    salon, vet = places
    assert salon.place_id == "osm:node/101"
    assert salon.address == "500 Lamar Blvd, Austin, TX 78703"
    assert salon.phone == "+1 512 555 0100"
    assert salon.hours == "Mo-Fr 09:00-17:00"
    assert salon.types == ("shop=pet_grooming",)
    assert salon.source is CandidateSource.OPENSTREETMAP
    assert vet.place_id == "osm:way/202"
    assert vet.coordinate.latitude == 30.28

    form = parse_qs(bodies[0].decode())
    assert "out center tags;" in form["data"][0]


@pytest.mark.asyncio
async def test_http_failure_raises() -> None:
    client = httpx.AsyncClient(
        transport=httpx.MockTransport(lambda request: httpx.Response(429))
    )
    with pytest.raises(PlacesProviderError, match="429"):
        await OverpassProvider(client).nearby(CENTER, 10, "dog")
