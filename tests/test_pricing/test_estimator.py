"""Tests for the estimator."""

import asyncio

import pytest
from prometheus_client import REGISTRY

from pawprice.admission.concurrency import ConcurrencyLimiter
from pawprice.exceptions import ModelInvocationError
from pawprice.llm.providers.test_mock import ErrorProvider, MockProvider
from pawprice.llm.providers.types import LLMResponse
from pawprice.pricing.estimator import Estimator
from pawprice.pricing.models import Confidence, EstimateMethod
from pawprice.pricing.parsing import HEURISTIC_NOTES
from pawprice.search.groomer_search import to_candidate
from tests.fixtures.providers import AUSTIN, places_near

GROOMERS = [to_candidate(p, AUSTIN, "dog") for p in places_near(AUSTIN, 3)]


def estimate_count(method: EstimateMethod) -> float:
    return (
        REGISTRY.get_sample_value(
            "pawprice_estimate_total", {"method": method.value}
        )
        or 0.0
    )


@pytest.mark.asyncio
async def test_model_estimate() -> None:
    llm = MockProvider(['{"min": 45, "max": 85, "confidence": "high"}'])
    before = estimate_count(EstimateMethod.MODEL)
    outcome = await Estimator(llm, ConcurrencyLimiter(1)).estimate(
        "Austin, TX", "dog", "medium", GROOMERS, 10
    )

    assert outcome.method is EstimateMethod.MODEL
    assert (outcome.price.min, outcome.price.max) == (45, 85)
    assert outcome.price.confidence is Confidence.HIGH
    assert "Search radius: 10 miles" in llm.prompts[0]
    assert estimate_count(EstimateMethod.MODEL) == before + 1


@pytest.mark.asyncio
async def test_empty_groomers_skip_model() -> None:
    llm = MockProvider()
    outcome = await Estimator(llm, ConcurrencyLimiter(1)).estimate(
        "Austin, TX", "dog", "medium", [], None
    )

    assert outcome.method is EstimateMethod.EMPTY
    assert outcome.price.min is None
    assert outcome.price.max is None
    assert outcome.price.confidence is Confidence.LOW
    assert outcome.price.notes == "No local groomers found"
    assert llm.prompts == []


@pytest.mark.parametrize(
    "reply",
    [
        "I think it costs about fifty dollars.",
        '{"min": ' + "9" * 400 + ', "max": 100}',
    ],
)
@pytest.mark.asyncio
async def test_unparseable_output_uses_heuristic(reply: str) -> None:
    llm = MockProvider([reply])
    outcome = await Estimator(llm, ConcurrencyLimiter(1)).estimate(
        "Austin, TX", "dog", "large", GROOMERS, 20
    )

    assert outcome.method is EstimateMethod.HEURISTIC
    assert (outcome.price.min, outcome.price.max) == (80, 130)
    assert outcome.price.notes == HEURISTIC_NOTES


@pytest.mark.asyncio
async def test_model_failure_propagates_and_releases_slot() -> None:
    limiter = ConcurrencyLimiter(1)
    with pytest.raises(ModelInvocationError):
        await Estimator(ErrorProvider(), limiter).estimate(
            "Austin, TX", "dog", "medium", GROOMERS, 10
        )
    assert limiter.held == 0


@pytest.mark.asyncio
async def test_slot_timeout_becomes_invocation_error() -> None:
    limiter = ConcurrencyLimiter(1)
    await limiter.acquire()
    estimator = Estimator(MockProvider(), limiter, slot_timeout=0.01)

    with pytest.raises(ModelInvocationError, match="No model slot"):
        await estimator.estimate("Austin, TX", "dog", "medium", GROOMERS, 10)
    assert limiter.queued == 0


class SlowProvider(MockProvider):
    def __init__(self) -> None:
        super().__init__()
        self.active = 0
        self.peak = 0

    async def generate(self, prompt, config=None, **kwargs) -> LLMResponse:
        self.active += 1
        self.peak = max(self.peak, self.active)
        await asyncio.sleep(0.01)
        self.active -= 1
        return await super().generate(prompt, config, **kwargs)


@pytest.mark.asyncio
async def test_concurrent_calls_bounded_by_limiter() -> None:
    llm = SlowProvider()
    estimator = Estimator(llm, ConcurrencyLimiter(2))

    outcomes = await asyncio.gather(
        *(
            estimator.estimate("Austin, TX", "dog", "medium", GROOMERS, 10)
            for _ in range(6)
        )
    )
    assert len(outcomes) == 6
    assert llm.peak == 2
    assert len(llm.prompts) == 6
