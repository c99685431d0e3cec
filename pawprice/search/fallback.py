"""Synthesized groomers for areas the providers do not cover."""

import random

from pawprice.core.distance import Coordinate, GeocodedLocation, haversine_km
from pawprice.search.models import CandidateSource, GroomerCandidate

GROOMER_NAMES = (
    "Pampered Paws Grooming",
    "Happy Tails Pet Salon",
    "Fur & Feather Care",
    "Pawsitive Grooming Studio",
    "The Grooming Lab",
    "Bark & Bubble Pet Spa",
    "Elegant Paws Boutique",
    "Tail Waggers Grooming",
    "Premium Pet Grooming Co.",
    "Fluffy Friends Salon",
    "Noble Hound Grooming",
    "Sunshine Pet Care",
    "Pristine Paws Professional Grooming",
    "The Pet Parlor",
    "Royal Pet Grooming",
)

STREETS = ("Main St", "Oak Ave", "Elm Blvd", "Maple Dr")

# Degree offsets (lat, lng) from the search center, roughly 1-3 km out
OFFSETS = (
    (0.01, 0.01),
    (-0.015, 0.008),
    (0.008, -0.012),
    (0.012, 0.015),
    (-0.02, -0.005),
    (0.018, 0.002),
    (-0.008, 0.018),
    (0.022, -0.010),
)

DEFAULT_HOURS = "Mon-Fri 9AM-6PM, Sat 10AM-4PM"


def generate_phone_number(rng: random.Random) -> str:
    """A phone number in North American ``(AAA) EEE-NNNN`` format."""
    area_code = rng.randint(200, 999)
    exchange = rng.randint(200, 999)
    number = rng.randint(1000, 9999)
    return f"({area_code}) {exchange}-{number}"


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def synthesize_groomers(
    center: GeocodedLocation,
    pet_type: str,
    rng: random.Random | None = None,
) -> list[GroomerCandidate]:
    """Build one plausible groomer per entry in ``OFFSETS``.

    Every record is tagged ``CandidateSource.FALLBACK``.
    """
    rng = rng or random.Random()
    origin = center.coordinate
    groomers = []
    for i, (dlat, dlng) in enumerate(OFFSETS):
        point = Coordinate(
            latitude=_clamp(origin.latitude + dlat, -90, 90),
            longitude=_clamp(origin.longitude + dlng, -180, 180),
        )
        groomers.append(
            GroomerCandidate(
                name=GROOMER_NAMES[i % len(GROOMER_NAMES)],
                address=(
                    f"{100 + i * 25} {STREETS[i % len(STREETS)]}, "
                    f"near {center.formatted_address}"
                ),
                place_id=None,
                lat=point.latitude,
                lng=point.longitude,
                rating=round(3.8 + rng.random() * 1.2, 1),
                phone=generate_phone_number(rng),
                hours=DEFAULT_HOURS,
                website=None,
                types=["pet_groomer"],
                services=[pet_type],
                service_match=True,
                distance_km=haversine_km(origin, point),
                source=CandidateSource.FALLBACK,
            )
        )
    return groomers
