"""Type definitions for LLM providers."""

from dataclasses import dataclass
from typing import Any, Union

from pydantic import BaseModel, Field, field_validator


@dataclass
class GenerateConfig:
    """Per-call overrides for a generation request."""

    temperature: float | None = None
    max_tokens: int | None = None
    stop: list[str] | None = None

    def __post_init__(self) -> None:
        if self.temperature is not None and not 0 <= self.temperature <= 1:
            raise ValueError("Temperature must be between 0 and 1")
        if self.max_tokens is not None and self.max_tokens < 1:
            raise ValueError("Max tokens must be positive")
        if self.stop is not None and any(not s for s in self.stop):
            raise ValueError("Stop sequences cannot be empty")


class LLMResponse(BaseModel):
    """Standard response format for LLM generations."""

    text: str = Field(description="Generated text content")
    model: str = Field(description="Name of the model used")
    usage: dict[str, int] = Field(
        default_factory=dict, description="Token usage statistics"
    )

    @field_validator("text")
    @classmethod
    def validate_text(cls, v: str) -> str:
        """Validate text field."""
        if not v or v.isspace():
            raise ValueError("Response text cannot be empty")
        return v

    @field_validator("model")
    @classmethod
    def validate_model(cls, v: str) -> str:
        """Validate model field."""
        if not v or v.isspace():
            raise ValueError("Model name cannot be empty")
        return v

    @field_validator("usage", mode="before")
    @classmethod
    def validate_usage(cls, v: dict[str, Any] | None) -> dict[str, int]:
        """Drop missing counts and reject negative or fractional ones."""
        result: dict[str, int] = {}
        for key, value in (v or {}).items():
            if value is None:
                continue
            if not isinstance(value, int | float) or float(value) != int(value):
                raise ValueError("Usage values must be integers")
            if value < 0:
                raise ValueError("Usage values must be non-negative")
            result[key] = int(value)
        return result

    def __str__(self) -> str:
        return self.text


LLMInput = Union[str, list[dict[str, Any]]]  # Text or chat messages
