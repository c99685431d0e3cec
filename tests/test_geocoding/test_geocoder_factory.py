"""Tests for geocoder selection."""

import httpx
import pytest

from pawprice.core.config import Settings
from pawprice.geocoding import GeocodioGeocoder, NominatimGeocoder, build_geocoder


@pytest.mark.parametrize(
    "provider,expected",
    [("geocodio", GeocodioGeocoder), ("nominatim", NominatimGeocoder)],
)
def test_build_geocoder(provider: str, expected: type) -> None:
    settings = Settings(_env_file=None, GEOCODING_PROVIDER=provider)
    assert isinstance(build_geocoder(settings, httpx.AsyncClient()), expected)


def test_unknown_provider() -> None:
    settings = Settings(_env_file=None, GEOCODING_PROVIDER="mapquest")
    with pytest.raises(ValueError, match="mapquest"):
        build_geocoder(settings, httpx.AsyncClient())
