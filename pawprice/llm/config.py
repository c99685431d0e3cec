"""LLM configuration."""

from dataclasses import dataclass

DEFAULT_SYSTEM_PROMPT = (
    "You are a pet grooming pricing expert. "
    "Respond ONLY with valid JSON, no markdown formatting."
)


@dataclass
class LLMConfig:
    """Configuration for LLM providers."""

    model_name: str
    temperature: float = 0.7
    max_tokens: int | None = 500
    timeout: float = 30.0
    system_prompt: str | None = DEFAULT_SYSTEM_PROMPT
    retries: int = 0

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if not self.model_name or self.model_name.isspace():
            raise ValueError("model_name is required")
        if not 0 <= self.temperature <= 1:
            raise ValueError("Temperature must be between 0 and 1")
        if self.max_tokens is not None and self.max_tokens <= 0:
            raise ValueError("Max tokens must be positive")
        if self.timeout <= 0:
            raise ValueError("Timeout must be positive")
        if self.retries < 0:
            raise ValueError("Retries must be non-negative")
