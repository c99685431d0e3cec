"""OpenAI-compatible chat completion provider (Groq by default)."""

from typing import Any, cast

from openai import APIStatusError, APITimeoutError, AsyncOpenAI, OpenAIError
from openai.types.chat.chat_completion import ChatCompletion
from openai.types.completion_usage import CompletionUsage

from pawprice.core.logging import get_logger
from pawprice.exceptions import ModelInvocationError
from pawprice.llm.config import LLMConfig
from pawprice.llm.providers.base import BaseLLMProvider
from pawprice.llm.providers.types import GenerateConfig, LLMInput, LLMResponse

logger = get_logger().bind(module="openai_provider")

GROQ_BASE_URL = "https://api.groq.com/openai/v1"


def _validate_usage(usage: CompletionUsage | dict[str, Any] | None) -> dict[str, int]:
    """Normalize usage statistics from an API response."""
    if usage is None:
        return {}
    if isinstance(usage, CompletionUsage):
        usage = usage.model_dump()
    return {
        "prompt_tokens": int(usage.get("prompt_tokens") or 0),
        "completion_tokens": int(usage.get("completion_tokens") or 0),
        "total_tokens": int(usage.get("total_tokens") or 0),
    }


class OpenAIProvider(BaseLLMProvider[AsyncOpenAI]):
    """Chat completions over any OpenAI-compatible endpoint."""

    def __init__(
        self,
        config: LLMConfig,
        api_key: str | None = None,
        base_url: str | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        self._client: AsyncOpenAI | None = None
        super().__init__(
            config,
            api_key=api_key,
            base_url=base_url or GROQ_BASE_URL,
            headers=headers,
        )

    @property
    def environment_key(self) -> str:
        return "GROQ_API_KEY"

    @property
    def model(self) -> AsyncOpenAI:
        """Get or create the client instance."""
        if self._client is None:
            api_key = self.api_key
            if not api_key:
                raise ModelInvocationError(
                    f"{self.environment_key} not configured in environment"
                )
            self._client = AsyncOpenAI(
                api_key=api_key,
                base_url=self.base_url,
                default_headers=self.headers or None,
                timeout=self.config.timeout,
                max_retries=self.config.retries,
            )
        return self._client

    def _format_messages(self, prompt: LLMInput) -> list[dict[str, str]]:
        if not isinstance(prompt, str):
            return cast(list[dict[str, str]], prompt)
        messages = []
        if self.config.system_prompt:
            messages.append({"role": "system", "content": self.config.system_prompt})
        messages.append({"role": "user", "content": prompt})
        return messages

    def _build_api_params(
        self,
        messages: list[dict[str, str]],
        config: GenerateConfig | None = None,
    ) -> dict[str, Any]:
        temperature = self.config.temperature
        max_tokens = self.config.max_tokens
        if config is not None:
            if config.temperature is not None:
                temperature = config.temperature
            if config.max_tokens is not None:
                max_tokens = config.max_tokens

        params: dict[str, Any] = {
            "model": self.config.model_name,
            "messages": messages,
            "temperature": temperature,
        }
        if max_tokens is not None:
            params["max_tokens"] = max_tokens
        if config is not None and config.stop:
            params["stop"] = config.stop
        return params

    def _process_api_response(self, result: ChatCompletion) -> LLMResponse:
        content = ""
        if result.choices and result.choices[0].message:
            content = str(result.choices[0].message.content or "")
        if not content.strip():
            logger.warning("empty_model_response", model=self.config.model_name)
            raise ModelInvocationError("Empty response from model")
        return LLMResponse(
            text=content.strip(),
            model=result.model or self.config.model_name,
            usage=_validate_usage(result.usage),
        )

    def _handle_api_error(self, error: Exception) -> ModelInvocationError:
        """Translate a client failure into ``ModelInvocationError``."""
        if isinstance(error, APITimeoutError):
            message = f"Model request timed out after {self.config.timeout}s"
        elif isinstance(error, APIStatusError):
            message = f"Model API returned status {error.status_code}: {error.message}"
        else:
            message = f"Error generating completion: {error}"
        logger.error(
            "model_call_failed",
            model=self.config.model_name,
            error_type=type(error).__name__,
            error=str(error),
        )
        return ModelInvocationError(message)

    async def generate(
        self,
        prompt: LLMInput,
        config: GenerateConfig | None = None,
        **kwargs: Any,
    ) -> LLMResponse:
        """Send one chat completion request.

        Args:
            prompt: User prompt, or a prepared list of chat messages
            config: Per-call overrides of temperature, max_tokens and stop
            **kwargs: Extra parameters passed through to the API

        Returns:
            LLMResponse: The first choice's text plus usage

        Raises:
            ModelInvocationError: On missing credentials, timeouts, non-2xx
                statuses or transport errors
        """
        client = self.model
        params = self._build_api_params(self._format_messages(prompt), config)
        params.update(kwargs)
        try:
            result = await client.chat.completions.create(**params)
        except OpenAIError as e:
            raise self._handle_api_error(e) from e

        response = self._process_api_response(result)
        logger.info(
            "model_call_completed",
            model=response.model,
            total_tokens=response.usage.get("total_tokens"),
        )
        return response

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.close()
            self._client = None
