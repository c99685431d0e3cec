"""Turning model output into a ``PriceEstimate``."""

import json
import math
import re
from typing import Any

from pawprice.exceptions import ModelParseError
from pawprice.pricing.models import Confidence, PriceEstimate

FENCED_BLOCK = re.compile(r"```(?:json)?\s*\n(.*?)\n```", re.DOTALL)
OBJECT_SPAN = re.compile(r"\{.*\}", re.DOTALL)

HEURISTIC_NOTES = "Fallback estimate (LLM parse error)"
HEURISTIC_SPREAD = 50
SIZE_BASE_PRICES = {"tiny": 30, "small": 30, "medium": 50}
DEFAULT_BASE_PRICE = 80


def extract_json_from_markdown(text: str) -> str:
    """Return the body of the first fenced code block, or ``text`` unchanged."""
    match = FENCED_BLOCK.search(text)
    if match:
        return match.group(1).strip()
    return text


def _load_object(text: str) -> dict[str, Any]:
    candidate = extract_json_from_markdown(text.strip())
    try:
        data = json.loads(candidate)
    except ValueError:
        match = OBJECT_SPAN.search(candidate)
        if not match:
            raise ModelParseError("No JSON object in model output") from None
        try:
            data = json.loads(match.group(0))
        except ValueError as e:
            raise ModelParseError(f"Invalid JSON in model output: {e}") from e
    if not isinstance(data, dict):
        raise ModelParseError("Model output is not a JSON object")
    return data


def _to_bound(value: Any, field: str) -> int | float | None:
    if value is None:
        return None
    if isinstance(value, bool):
        raise ModelParseError(f"{field} is not a number")
    if isinstance(value, str):
        try:
            value = float(value.strip().lstrip("$").replace(",", ""))
        except ValueError:
            raise ModelParseError(f"{field} is not a number") from None
    if not isinstance(value, int | float):
        raise ModelParseError(f"{field} is not a number")
    try:
        finite = math.isfinite(float(value))
    except (OverflowError, ValueError):
        finite = False
    if not finite:
        raise ModelParseError(f"{field} is not a number")
    if value < 0:
        raise ModelParseError(f"{field} is negative")
    return value


def parse_model_output(text: str) -> PriceEstimate:
    """Parse and normalize a model reply.

    Accepts bare JSON, JSON inside a fenced block, or JSON embedded in
    prose. Reversed bounds are swapped, an unknown confidence becomes
    ``medium`` and a missing currency becomes ``USD``.

    Raises:
        ModelParseError: If no usable price object can be recovered
    """
    data = _load_object(text)
    low = _to_bound(data.get("min"), "min")
    high = _to_bound(data.get("max"), "max")
    if (low is None) != (high is None):
        raise ModelParseError("min and max must both be present")
    if low is not None and high is not None and low > high:
        low, high = high, low

    try:
        confidence = Confidence(str(data.get("confidence", "")).strip().lower())
    except ValueError:
        confidence = Confidence.MEDIUM

    currency = data.get("currency")
    if not isinstance(currency, str) or not currency.strip():
        currency = "USD"
    notes = data.get("notes")
    return PriceEstimate(
        min=low,
        max=high,
        currency=currency.strip().upper(),
        confidence=confidence,
        notes=notes if isinstance(notes, str) else "",
    )


def heuristic_estimate(size: str) -> PriceEstimate:
    """Deterministic size-based range used when model output is unusable."""
    base = SIZE_BASE_PRICES.get(size, DEFAULT_BASE_PRICE)
    return PriceEstimate(
        min=base,
        max=base + HEURISTIC_SPREAD,
        currency="USD",
        confidence=Confidence.MEDIUM,
        notes=HEURISTIC_NOTES,
    )
