"""Tests for progressive-radius groomer search."""

import random

import pytest
from prometheus_client import REGISTRY

from pawprice.exceptions import GeocodingProviderError
from pawprice.search.groomer_search import (
    GroomerSearch,
    dedupe,
    is_service_match,
    to_candidate,
)
from pawprice.search.models import CandidateSource
from tests.fixtures.providers import (
    AUSTIN,
    FailingPlacesProvider,
    FakeGeocoder,
    FakePlacesProvider,
    make_place,
    places_near,
)


def make_search(provider: FakePlacesProvider, **kwargs) -> GroomerSearch:
    kwargs.setdefault("radius_delay_seconds", 0)
    kwargs.setdefault("rng", random.Random(0))
    return GroomerSearch(FakeGeocoder(), provider, **kwargs)


def fallback_count() -> float:
    return REGISTRY.get_sample_value("pawprice_fallback_searches_total") or 0.0


@pytest.mark.asyncio
async def test_stops_once_enough_results() -> None:
    provider = FakePlacesProvider({10: places_near(AUSTIN, 10)})
    result = await make_search(provider).search("Austin, TX", "dog")

    assert len(result.groomers) == 10
    assert result.radius_miles_used == 10
    assert [call[1] for call in provider.calls] == [10]


@pytest.mark.asyncio
async def test_widens_until_widest_radius() -> None:
    provider = FakePlacesProvider(
        {10: places_near(AUSTIN, 2, "Near"), 30: places_near(AUSTIN, 3, "Far")}
    )
    result = await make_search(provider).search("Austin, TX", "dog")

    assert [call[1] for call in provider.calls] == [10, 20, 30, 40]
    assert result.radius_miles_used == 40
    assert len(result.groomers) == 5


@pytest.mark.asyncio
async def test_accumulates_and_dedupes_across_radii() -> None:
    near = places_near(AUSTIN, 6, "Near")
    provider = FakePlacesProvider({10: near, 20: near + places_near(AUSTIN, 4, "Mid")})
    result = await make_search(provider).search("Austin, TX", "dog")

    assert result.radius_miles_used == 20
    assert len(result.groomers) == 10
    assert len({g.place_id for g in result.groomers}) == 10


@pytest.mark.asyncio
async def test_drops_places_beyond_radius() -> None:
    far = make_place("Far Pet Spa", AUSTIN.coordinate.latitude + 0.5, -97.7431, "far")
    near = make_place("Near Pet Spa", AUSTIN.coordinate.latitude + 0.01, -97.7431, "near")
    provider = FakePlacesProvider({10: [far, near]})
    result = await make_search(provider, radii_miles=[10]).search("Austin", "dog")

    assert [g.place_id for g in result.groomers] == ["near"]


@pytest.mark.asyncio
async def test_sorted_by_distance_and_truncated() -> None:
    places = list(reversed(places_near(AUSTIN, 15)))
    provider = FakePlacesProvider({10: places})
    result = await make_search(provider).search("Austin, TX", "dog")

    distances = [g.distance_km for g in result.groomers]
    assert len(distances) == 12
    assert distances == sorted(distances)
    assert result.groomers[0].place_id == "groomer-0"


@pytest.mark.asyncio
async def test_flags_service_match() -> None:
    places = [
        make_place("Joe's Hardware", 30.27, -97.7431, "hw", "1 Main St", types=["store"]),
        make_place("Reptile Room", 30.271, -97.7431, "rr", "2 Main St", types=["store"]),
        make_place("Paws Spa", 30.272, -97.7431, "ps", "3 Main St", types=["spa"]),
    ]
    provider = FakePlacesProvider({10: places})
    result = await make_search(provider).search("Austin", "reptile")
    by_id = {g.place_id: g for g in result.groomers}

    assert not by_id["hw"].service_match
    assert by_id["hw"].services == []
    assert by_id["rr"].service_match
    assert by_id["rr"].services == ["reptile"]
    assert by_id["ps"].service_match


@pytest.mark.asyncio
async def test_fallback_when_nothing_found() -> None:
    before = fallback_count()
    provider = FakePlacesProvider()
    result = await make_search(provider).search("Middle of Nowhere", "cat")

    assert len(result.groomers) == 8
    assert result.radius_miles_used == 20
    assert all(g.source is CandidateSource.FALLBACK for g in result.groomers)
    assert fallback_count() == before + 1


@pytest.mark.asyncio
async def test_provider_failure_counts_as_empty() -> None:
    provider = FailingPlacesProvider()
    result = await make_search(provider).search("Austin, TX", "dog")

    assert len(provider.calls) == 4
    assert result.radius_miles_used == 20
    assert all(g.is_fallback for g in result.groomers)


@pytest.mark.asyncio
async def test_geocoding_failure_returns_empty() -> None:
    provider = FakePlacesProvider({10: places_near(AUSTIN, 3)})
    search = GroomerSearch(
        FakeGeocoder(error=GeocodingProviderError("down")),
        provider,
        radius_delay_seconds=0,
    )
    result = await search.search("Austin, TX", "dog")

    assert result.groomers == []
    assert result.radius_miles_used is None
    assert provider.calls == []


@pytest.mark.asyncio
async def test_unexpected_provider_error_returns_empty() -> None:
    def explode(radius: float) -> list:
        raise RuntimeError("bug")

    result = await make_search(FakePlacesProvider(responder=explode)).search(
        "Austin, TX", "dog"
    )
    assert result.groomers == []
    assert result.radius_miles_used is None


@pytest.mark.asyncio
async def test_invalid_place_is_skipped() -> None:
    good = places_near(AUSTIN, 2)
    bad = make_place("Odd Ratings Pet Grooming", 30.27, -97.74, "bad", rating=7.5)
    provider = FakePlacesProvider({10: [good[0], bad, good[1]]})

    result = await make_search(provider, min_results=2).search("Austin, TX", "dog")

    assert [g.place_id for g in result.groomers] == ["groomer-0", "groomer-1"]
    assert result.radius_miles_used == 10


@pytest.mark.asyncio
async def test_pauses_between_radii(mocker) -> None:
    sleep = mocker.patch(
        "pawprice.search.groomer_search.asyncio.sleep", new_callable=mocker.AsyncMock
    )
    provider = FakePlacesProvider({40: places_near(AUSTIN, 1)})
    await make_search(provider, radius_delay_seconds=1.0).search("Austin", "dog")

    assert sleep.await_count == 3
    sleep.assert_awaited_with(1.0)


def test_dedupe_by_place_id_then_location() -> None:
    first = make_place("A", 30.27, -97.74, "same")
    second = make_place("B", 30.28, -97.74, "same")
    third = make_place("C", 30.29, -97.74, None, address="9 Elm")
    fourth = make_place("D", 30.29, -97.74, None, address="9 Elm")

    candidates = [to_candidate(p, AUSTIN, "dog") for p in (first, second, third, fourth)]
    assert [g.name for g in dedupe(candidates)] == ["A", "C"]


def test_is_service_match_uses_pet_type() -> None:
    place = make_place("Hoppy Hutch", 30.27, -97.74, types=["store"], address="1 Rd")
    assert is_service_match(place, "rabbit") is False
    assert is_service_match(place.model_copy(update={"name": "Rabbit Hutch"}), "rabbit")


def test_requires_a_radius() -> None:
    with pytest.raises(ValueError):
        GroomerSearch(FakeGeocoder(), FakePlacesProvider(), radii_miles=[])
