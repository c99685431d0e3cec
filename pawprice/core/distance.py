"""Great-circle distance helpers and the coordinate value type."""

from math import asin, cos, radians, sin, sqrt

from pydantic import BaseModel, ConfigDict, Field

EARTH_RADIUS_KM = 6371.0
METERS_PER_MILE = 1609.34
KM_PER_MILE = METERS_PER_MILE / 1000


class Coordinate(BaseModel):
    """A WGS84 point in decimal degrees."""

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)


class GeocodedLocation(BaseModel):
    """A coordinate plus the provider's canonical address for it."""

    model_config = ConfigDict(frozen=True)

    coordinate: Coordinate
    formatted_address: str


def haversine_km(a: Coordinate, b: Coordinate) -> float:
    """Calculate the great circle distance between two points in kilometers."""
    lat1, lon1, lat2, lon2 = map(
        radians, [a.latitude, a.longitude, b.latitude, b.longitude]
    )

    dlat = lat2 - lat1
    dlon = lon2 - lon1

    h = sin(dlat / 2) ** 2 + cos(lat1) * cos(lat2) * sin(dlon / 2) ** 2
    # Clamp rounding noise so asin never sees a value above 1
    return 2 * EARTH_RADIUS_KM * asin(sqrt(min(1.0, h)))


def miles_to_km(miles: float) -> float:
    return miles * KM_PER_MILE


def miles_to_meters(miles: float) -> float:
    """Convert miles to meters."""
    return miles * METERS_PER_MILE
