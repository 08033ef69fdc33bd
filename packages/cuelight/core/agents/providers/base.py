"""Base types and protocol for completion providers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Protocol


class ProviderType(str, Enum):
    """Supported provider types."""

    OPENAI = "openai"


@dataclass(frozen=True)
class TokenUsage:
    """Standardized token usage."""

    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


class CompletionProvider(Protocol):
    """Free-text completion service.

    Output is not guaranteed to be well-formed structured data. Callers run
    it through ``StructuredResponseParser``. Providers do not retry.
    """

    async def complete(self, prompt: str, temperature: float) -> str:
        """Return the model's text reply to ``prompt``.

        Args:
            prompt: User prompt
            temperature: Sampling temperature

        Returns:
            Raw completion text (empty string when the model returned nothing)

        Raises:
            LLMProviderError: If the service call fails
        """
        ...
