"""Completion provider abstraction."""

from cuelight.core.agents.providers.base import CompletionProvider, ProviderType, TokenUsage
from cuelight.core.agents.providers.errors import LLMProviderError
from cuelight.core.agents.providers.factory import create_completion_provider
from cuelight.core.agents.providers.openai import OpenAIProvider

__all__ = [
    "CompletionProvider",
    "LLMProviderError",
    "OpenAIProvider",
    "ProviderType",
    "TokenUsage",
    "create_completion_provider",
]
