"""Tests for synthesized groomers."""

import random
import re

from pawprice.search.fallback import (
    DEFAULT_HOURS,
    GROOMER_NAMES,
    OFFSETS,
    synthesize_groomers,
)
from pawprice.search.models import CandidateSource
from tests.fixtures.providers import AUSTIN

PHONE = re.compile(r"^\(([2-9]\d\d)\) ([2-9]\d\d)-\d{4}$")


def test_synthesizes_one_entry_per_offset() -> None:
    groomers = synthesize_groomers(AUSTIN, "cat", random.Random(7))

    assert len(groomers) == len(OFFSETS) == 8
    assert [g.name for g in groomers] == list(GROOMER_NAMES[:8])
    assert groomers[0].address == "100 Main St, near Austin, TX, USA"
    assert groomers[5].address == "225 Oak Ave, near Austin, TX, USA"


def test_entries_are_tagged_and_plausible() -> None:
    for groomer in synthesize_groomers(AUSTIN, "cat", random.Random(1)):
        assert groomer.source is CandidateSource.FALLBACK
        assert groomer.is_fallback
        assert groomer.services == ["cat"]
        assert groomer.service_match
        assert groomer.hours == DEFAULT_HOURS
        assert 3.8 <= groomer.rating <= 5.0
        assert round(groomer.rating, 1) == groomer.rating
        assert PHONE.match(groomer.phone)
        assert 0 < groomer.distance_km < 5


def test_seeded_rng_is_deterministic() -> None:
    first = synthesize_groomers(AUSTIN, "dog", random.Random(42))
    second = synthesize_groomers(AUSTIN, "dog", random.Random(42))
    assert first == second


def test_dedup_keys_are_unique() -> None:
    groomers = synthesize_groomers(AUSTIN, "dog", random.Random(3))
    assert len({g.dedup_key for g in groomers}) == len(groomers)
