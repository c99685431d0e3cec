"""Text-generation model access."""

from pawprice.core.config import Settings
from pawprice.llm.config import LLMConfig
from pawprice.llm.providers import BaseLLMProvider, OpenAIProvider


def build_llm_provider(settings: Settings) -> BaseLLMProvider:
    """The OpenAI-compatible provider configured from ``GROQ_*``/``LLM_*``."""
    config = LLMConfig(
        model_name=settings.GROQ_MODEL,
        temperature=settings.LLM_TEMPERATURE,
        max_tokens=settings.LLM_MAX_TOKENS,
        timeout=settings.LLM_TIMEOUT,
    )
    return OpenAIProvider(
        config, api_key=settings.GROQ_API_KEY, base_url=settings.LLM_BASE_URL
    )


__all__ = ["BaseLLMProvider", "LLMConfig", "OpenAIProvider", "build_llm_provider"]
