"""Request and response models for the pricing API."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from pawprice.pricing.models import PriceEstimate
from pawprice.search.models import GroomerCandidate

PET_SIZES = ("tiny", "small", "medium", "large", "x-large")
PET_TYPES = (
    "dog",
    "cat",
    "lizard",
    "rabbit",
    "bird",
    "other",
    "hamster",
    "fish",
    "amphibian",
    "snake",
    "tortoise",
)


class PriceRequest(BaseModel):
    """Body of ``POST /api/price``.

    Fields are deliberately loose; ``validate_price_input`` produces the
    client-facing validation messages.
    """

    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={
            "examples": [{"location": "Austin, TX", "size": "medium", "type": "dog"}]
        },
    )

    address: Any = Field(default=None, description="Street address; wins over location")
    zip: Any = Field(default=None, description="Postal code appended to the address")
    location: Any = Field(default=None, description="Free-form location")
    size: Any = Field(default=None, description=f"One of: {', '.join(PET_SIZES)}")
    type: Any = Field(default=None, description=f"One of: {', '.join(PET_TYPES)}")


class PriceInputEcho(BaseModel):
    """The normalized request, echoed back."""

    model_config = ConfigDict(populate_by_name=True)

    location: str
    size: str
    type: str
    groomers_count: int = Field(alias="groomersCount")
    radius_miles_used: int | None = Field(alias="radiusMilesUsed")


class PriceResponse(BaseModel):
    input: PriceInputEcho
    price: PriceEstimate
    groomers: list[GroomerCandidate]


class HealthResponse(BaseModel):
    status: str
    version: str
    geocoding_provider: str
    places_provider: str
    model: str
    llm_slots_in_use: int
    llm_queue_depth: int
    correlation_id: str | None = None
