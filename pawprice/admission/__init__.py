"""Admission control: request rate limiting and model call concurrency."""

from pawprice.admission.concurrency import ConcurrencyLimiter
from pawprice.admission.rate_limiter import (
    RateLimitDecision,
    RateLimitEntry,
    RateLimiter,
)

__all__ = [
    "ConcurrencyLimiter",
    "RateLimitDecision",
    "RateLimitEntry",
    "RateLimiter",
]
