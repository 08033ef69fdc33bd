"""Provider factory for completion provider dispatch."""

from __future__ import annotations

from cuelight.core.agents.providers.base import CompletionProvider
from cuelight.core.agents.providers.openai import OpenAIProvider
from cuelight.core.config.models import AppConfig


def create_completion_provider(app_config: AppConfig) -> CompletionProvider:
    """Create the configured completion provider."""
    provider_name = app_config.llm.provider.lower().strip()

    if provider_name == "openai":
        return OpenAIProvider(
            model=app_config.llm.model,
            api_key=app_config.llm.api_key,
            base_url=app_config.llm.base_url,
            timeout=app_config.llm.timeout_seconds,
            max_tokens=app_config.llm.max_tokens,
        )

    raise ValueError(f"Unknown LLM provider configured: {app_config.llm.provider}")
