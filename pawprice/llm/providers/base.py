"""Base classes for LLM providers."""

import os
from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

from pawprice.llm.config import LLMConfig
from pawprice.llm.providers.types import GenerateConfig, LLMInput, LLMResponse

ModelType = TypeVar("ModelType")


class BaseLLMProvider(ABC, Generic[ModelType]):
    """Base class for LLM providers.

    All LLM providers should inherit from this class and implement
    its abstract methods.
    """

    def __init__(
        self,
        config: LLMConfig,
        api_key: str | None = None,
        base_url: str | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        """Initialize the LLM provider.

        Args:
            config: Model name and sampling defaults
            api_key: Optional API key; falls back to ``environment_key``
            base_url: Optional base URL for the API endpoint
            headers: Optional additional HTTP headers
        """
        self.config = config
        self._api_key = api_key
        self._base_url = base_url
        self._headers = headers or {}

    @property
    def model_name(self) -> str:
        return self.config.model_name

    @property
    @abstractmethod
    def environment_key(self) -> str:
        """The environment variable name for the API key."""
        raise NotImplementedError

    @property
    def api_key(self) -> str | None:
        """Get the API key, checking environment if not explicitly set."""
        if not self._api_key:
            self._api_key = os.environ.get(self.environment_key) or None
        return self._api_key

    @property
    def base_url(self) -> str | None:
        return self._base_url

    @property
    def headers(self) -> dict[str, str]:
        return self._headers

    @property
    @abstractmethod
    def model(self) -> ModelType:
        """Get the underlying client instance."""
        raise NotImplementedError

    @abstractmethod
    async def generate(
        self,
        prompt: LLMInput,
        config: GenerateConfig | None = None,
        **kwargs: Any,
    ) -> LLMResponse:
        """Generate a response from the model.

        Args:
            prompt: The input prompt or chat messages
            config: Optional per-call overrides
            **kwargs: Additional provider-specific parameters

        Raises:
            ModelInvocationError: If the model could not be called
        """
        raise NotImplementedError

    async def aclose(self) -> None:
        """Release any underlying connections."""

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(model_name='{self.model_name}')"
