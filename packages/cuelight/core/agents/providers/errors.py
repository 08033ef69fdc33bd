"""Provider error types."""

from __future__ import annotations

from cuelight.core.errors import ExternalServiceError


class LLMProviderError(ExternalServiceError):
    """Raised when the completion service call fails."""

    pass
