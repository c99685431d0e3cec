"""Prompt rendering for the pricing model."""

from collections.abc import Sequence

from pawprice.search.models import GroomerCandidate

PROMPT_TEMPLATE = """You are a pet grooming pricing expert. Based on these local groomers and market data, estimate grooming costs:

Location: {location}
Pet type: {pet_type}
Pet size: {size}
Search radius: {radius} miles

Local groomers:
{groomers}

Respond ONLY with valid JSON (no markdown, no code blocks):
{{
  "min": 50,
  "max": 150,
  "currency": "USD",
  "confidence": "high",
  "notes": "Based on local market rates"
}}"""


def format_rating(rating: float) -> str:
    """``4.0`` renders as ``4`` and ``4.5`` as ``4.5``."""
    return f"{rating:g}"


def format_groomer_line(position: int, groomer: GroomerCandidate) -> str:
    rating = f"(rating: {format_rating(groomer.rating)})" if groomer.rating else ""
    if groomer.service_match:
        services = f"SERVICES: {', '.join(groomer.services)}"
    else:
        services = "SERVICES: unknown"
    return f"{position}. {groomer.name} — {groomer.address} {rating} — {services}"


def render_groomer_list(groomers: Sequence[GroomerCandidate]) -> str:
    return "\n".join(
        format_groomer_line(i, groomer) for i, groomer in enumerate(groomers, start=1)
    )


def render_prompt(
    location: str,
    pet_type: str,
    size: str,
    radius_miles: int | None,
    groomers: Sequence[GroomerCandidate],
) -> str:
    """The user message sent to the model for one estimate."""
    return PROMPT_TEMPLATE.format(
        location=location,
        pet_type=pet_type,
        size=size,
        radius=radius_miles if radius_miles is not None else "unknown",
        groomers=render_groomer_list(groomers),
    )
