"""Price estimate models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, model_validator


class Confidence(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class EstimateMethod(str, Enum):
    """How an estimate was produced."""

    MODEL = "model"
    HEURISTIC = "heuristic"
    EMPTY = "empty"


class PriceEstimate(BaseModel):
    """A grooming price range.

    Either both bounds are numbers with ``min <= max`` or both are null.
    """

    model_config = ConfigDict(frozen=True)

    min: int | float | None = None
    max: int | float | None = None
    currency: str = "USD"
    confidence: Confidence = Confidence.MEDIUM
    notes: str = ""

    @model_validator(mode="after")
    def validate_bounds(self) -> "PriceEstimate":
        if (self.min is None) != (self.max is None):
            raise ValueError("min and max must both be set or both be null")
        if self.min is not None and self.max is not None and self.min > self.max:
            raise ValueError("min must not exceed max")
        return self


class EstimateOutcome(BaseModel):
    """An estimate together with the method that produced it."""

    price: PriceEstimate
    method: EstimateMethod


NO_GROOMERS_ESTIMATE = PriceEstimate(
    min=None,
    max=None,
    currency="USD",
    confidence=Confidence.LOW,
    notes="No local groomers found",
)
