"""Tests for prompt rendering."""

from pawprice.pricing.prompt import format_groomer_line, render_prompt
from pawprice.search.models import CandidateSource, GroomerCandidate


def groomer(**overrides) -> GroomerCandidate:
    fields = {
        "name": "Bark Avenue",
        "address": "123 Congress Ave",
        "lat": 30.27,
        "lng": -97.74,
        "rating": 4.5,
        "services": ["dog"],
        "service_match": True,
        "distance_km": 1.2,
        "source": CandidateSource.GOOGLE_PLACES,
    }
    fields.update(overrides)
    return GroomerCandidate(**fields)


def test_line_with_rating_and_services() -> None:
    assert (
        format_groomer_line(1, groomer())
        == "1. Bark Avenue — 123 Congress Ave (rating: 4.5) — SERVICES: dog"
    )


def test_line_without_rating_or_match() -> None:
    line = format_groomer_line(
        3, groomer(rating=None, services=[], service_match=False)
    )
    assert line == "3. Bark Avenue — 123 Congress Ave  — SERVICES: unknown"


def test_whole_number_rating() -> None:
    assert "(rating: 4)" in format_groomer_line(1, groomer(rating=4.0))


def test_render_prompt() -> None:
    prompt = render_prompt(
        "Austin, TX", "dog", "medium", 10, [groomer(), groomer(name="Second")]
    )
    assert "Location: Austin, TX\n" in prompt
    assert "Pet type: dog\n" in prompt
    assert "Pet size: medium\n" in prompt
    assert "Search radius: 10 miles\n" in prompt
    assert "1. Bark Avenue" in prompt
    assert "\n2. Second" in prompt
    assert prompt.rstrip().endswith('"notes": "Based on local market rates"\n}')


def test_unknown_radius() -> None:
    prompt = render_prompt("Austin, TX", "dog", "small", None, [groomer()])
    assert "Search radius: unknown miles" in prompt
