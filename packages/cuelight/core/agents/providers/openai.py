"""OpenAI provider implementation."""

from __future__ import annotations

import logging
import threading

from openai import AsyncOpenAI

from cuelight.core.agents.providers.base import ProviderType, TokenUsage
from cuelight.core.agents.providers.errors import LLMProviderError

logger = logging.getLogger(__name__)


class OpenAIProvider:
    """Completion provider backed by OpenAI chat completions.

    Responsibilities:
    - Single-shot async completion calls
    - Thread-safe token tracking
    """

    def __init__(
        self,
        *,
        model: str = "gpt-4o",
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float = 60.0,
        max_tokens: int | None = None,
        client: AsyncOpenAI | None = None,
    ):
        """Initialize OpenAI provider.

        Args:
            model: Chat model identifier
            api_key: OpenAI API key (uses env var if not provided)
            base_url: Optional API base URL override
            timeout: Request timeout in seconds
            max_tokens: Optional completion token cap
            client: Pre-built client (tests)
        """
        self.model = model
        self.max_tokens = max_tokens
        self._client = client or AsyncOpenAI(api_key=api_key, base_url=base_url, timeout=timeout)

        self._token_lock = threading.Lock()
        self._total_tokens = TokenUsage()

    @property
    def provider_type(self) -> ProviderType:
        """Provider type identifier."""
        return ProviderType.OPENAI

    async def complete(self, prompt: str, temperature: float) -> str:
        """Send one user prompt and return the reply text.

        Args:
            prompt: User prompt
            temperature: Sampling temperature

        Returns:
            Reply text, or "" when the model returned no content

        Raises:
            LLMProviderError: If the API call fails
        """
        kwargs: dict = {}
        if self.max_tokens is not None:
            kwargs["max_tokens"] = self.max_tokens

        try:
            response = await self._client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                temperature=temperature,
                **kwargs,
            )
        except Exception as e:
            logger.error(f"OpenAI provider error: {e}")
            raise LLMProviderError(f"Provider error: {e}") from e

        if response.usage:
            self._update_token_usage(
                prompt_tokens=response.usage.prompt_tokens,
                completion_tokens=response.usage.completion_tokens,
                total_tokens=response.usage.total_tokens,
            )

        content = response.choices[0].message.content if response.choices else None
        logger.debug(f"Completion received ({len(content or '')} chars, T={temperature})")
        return content or ""

    def get_token_usage(self) -> TokenUsage:
        """Get cumulative token usage across all calls."""
        with self._token_lock:
            return self._total_tokens

    def reset_token_tracking(self) -> None:
        """Reset token usage tracking."""
        with self._token_lock:
            self._total_tokens = TokenUsage()

    def _update_token_usage(
        self, prompt_tokens: int, completion_tokens: int, total_tokens: int
    ) -> None:
        with self._token_lock:
            self._total_tokens = TokenUsage(
                prompt_tokens=self._total_tokens.prompt_tokens + prompt_tokens,
                completion_tokens=self._total_tokens.completion_tokens + completion_tokens,
                total_tokens=self._total_tokens.total_tokens + total_tokens,
            )
