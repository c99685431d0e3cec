"""LLM provider implementations."""

from pawprice.llm.providers.base import BaseLLMProvider
from pawprice.llm.providers.openai import OpenAIProvider
from pawprice.llm.providers.types import GenerateConfig, LLMResponse

__all__ = ["BaseLLMProvider", "GenerateConfig", "LLMResponse", "OpenAIProvider"]
