"""Price estimation from nearby groomers."""

import time
from collections.abc import Sequence

from pawprice.admission.concurrency import ConcurrencyLimiter
from pawprice.core.logging import get_logger
from pawprice.core.metrics import ESTIMATES_TOTAL, LLM_QUEUE_DEPTH, LLM_SLOTS_IN_USE
from pawprice.exceptions import ModelInvocationError, ModelParseError, SlotTimeoutError
from pawprice.llm.providers.base import BaseLLMProvider
from pawprice.pricing.models import (
    NO_GROOMERS_ESTIMATE,
    EstimateMethod,
    EstimateOutcome,
)
from pawprice.pricing.parsing import heuristic_estimate, parse_model_output
from pawprice.pricing.prompt import render_prompt
from pawprice.search.models import GroomerCandidate

logger = get_logger(__name__)


class Estimator:
    """Asks the model for a price range, one concurrency slot per call."""

    def __init__(
        self,
        provider: BaseLLMProvider,
        limiter: ConcurrencyLimiter,
        slot_timeout: float | None = None,
    ) -> None:
        self.provider = provider
        self.limiter = limiter
        self.slot_timeout = slot_timeout

    async def estimate(
        self,
        location: str,
        pet_type: str,
        size: str,
        groomers: Sequence[GroomerCandidate],
        radius_miles: int | None,
    ) -> EstimateOutcome:
        """Estimate grooming cost for a pet given the groomers nearby.

        With no groomers the model is not consulted. Unusable model output
        falls back to a size-based heuristic.

        Raises:
            ModelInvocationError: If the model could not be called, including
                when no concurrency slot was granted in time
        """
        if not groomers:
            ESTIMATES_TOTAL.labels(method=EstimateMethod.EMPTY.value).inc()
            return EstimateOutcome(
                price=NO_GROOMERS_ESTIMATE, method=EstimateMethod.EMPTY
            )

        prompt = render_prompt(location, pet_type, size, radius_miles, groomers)
        text = await self._generate(prompt)

        try:
            price = parse_model_output(text)
            method = EstimateMethod.MODEL
        except ModelParseError as e:
            logger.warning("model_output_unparseable", error=str(e), size=size)
            price = heuristic_estimate(size)
            method = EstimateMethod.HEURISTIC

        ESTIMATES_TOTAL.labels(method=method.value).inc()
        return EstimateOutcome(price=price, method=method)

    async def _generate(self, prompt: str) -> str:
        LLM_QUEUE_DEPTH.inc()
        queued_at = time.monotonic()
        try:
            await self.limiter.acquire(self.slot_timeout)
        except SlotTimeoutError as e:
            logger.error("llm_slot_timeout", timeout=self.slot_timeout)
            raise ModelInvocationError(str(e)) from e
        finally:
            LLM_QUEUE_DEPTH.dec()

        LLM_SLOTS_IN_USE.inc()
        try:
            logger.info(
                "llm_call_started",
                model=self.provider.model_name,
                waited_ms=round((time.monotonic() - queued_at) * 1000),
                slots_held=self.limiter.held,
            )
            response = await self.provider.generate(prompt)
            logger.info("llm_call_completed", model=response.model)
            return response.text
        finally:
            LLM_SLOTS_IN_USE.dec()
            self.limiter.release()
