"""Grooming price estimation."""

from pawprice.pricing.estimator import Estimator
from pawprice.pricing.models import (
    Confidence,
    EstimateMethod,
    EstimateOutcome,
    PriceEstimate,
)
from pawprice.pricing.parsing import heuristic_estimate, parse_model_output
from pawprice.pricing.service import PriceQuery, PriceQuote, PricingService

__all__ = [
    "Confidence",
    "EstimateMethod",
    "EstimateOutcome",
    "Estimator",
    "PriceEstimate",
    "PriceQuery",
    "PriceQuote",
    "PricingService",
    "heuristic_estimate",
    "parse_model_output",
]
