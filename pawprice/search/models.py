"""Models for discovered groomers."""

import math
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pawprice.core.distance import Coordinate


class CandidateSource(str, Enum):
    """Where a groomer record came from."""

    GOOGLE_PLACES = "google-places"
    OPENSTREETMAP = "openstreetmap"
    FALLBACK = "fallback"


class PlaceResult(BaseModel):
    """A business as reported by a places provider, before ranking."""

    model_config = ConfigDict(frozen=True)

    name: str
    address: str = ""
    place_id: str | None = None
    coordinate: Coordinate
    rating: float | None = None
    phone: str | None = None
    hours: str | None = None
    website: str | None = None
    types: tuple[str, ...] = ()
    source: CandidateSource


class GroomerCandidate(BaseModel):
    """A groomer near the requested location, as returned to clients."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    address: str
    place_id: str | None = None
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)
    rating: float | None = Field(default=None, ge=0, le=5)
    phone: str | None = None
    hours: str | None = None
    website: str | None = None
    types: list[str] = Field(default_factory=list)
    services: list[str] = Field(default_factory=list)
    service_match: bool = False
    distance_km: float = Field(..., ge=0, alias="distanceKm")
    source: CandidateSource

    @field_validator("distance_km")
    @classmethod
    def validate_distance(cls, v: float) -> float:
        if not math.isfinite(v):
            raise ValueError("distance must be finite")
        return v

    @property
    def coordinate(self) -> Coordinate:
        return Coordinate(latitude=self.lat, longitude=self.lng)

    @property
    def dedup_key(self) -> str:
        """Identity within one result set."""
        if self.place_id:
            return self.place_id
        return f"{self.lat},{self.lng}|{self.address}"

    @property
    def is_fallback(self) -> bool:
        return self.source is CandidateSource.FALLBACK


class SearchResult(BaseModel):
    """Ranked groomers plus the radius the search settled on."""

    groomers: list[GroomerCandidate] = Field(default_factory=list)
    radius_miles_used: int | None = None
