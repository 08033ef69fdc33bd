"""Structured errors raised by the HTTP client.

All of them are ``ExternalServiceError`` so service code can wrap any
transport failure with ``external_failure``.
"""

from __future__ import annotations

from cuelight.core.errors import ExternalServiceError


class ApiError(ExternalServiceError):
    """Base exception for all HTTP client errors.

    Attributes:
        message: Human-readable error description
        method: HTTP method
        url: Request URL
        status_code: HTTP status code, when a response was received
        request_id: Tracing ID taken from the response headers
        response_body_snippet: Truncated response body for debugging
        cause: Underlying httpx or decode exception
    """

    def __init__(
        self,
        *,
        message: str,
        method: str,
        url: str,
        status_code: int | None = None,
        request_id: str | None = None,
        response_body_snippet: str | None = None,
        cause: BaseException | None = None,
    ) -> None:
        self.message = message
        self.method = method
        self.url = url
        self.status_code = status_code
        self.request_id = request_id
        self.response_body_snippet = response_body_snippet
        self.cause = cause
        super().__init__(str(self))

    def __str__(self) -> str:
        parts = [self.message, f"{self.method} {self.url}"]
        if self.status_code is not None:
            parts.append(f"status={self.status_code}")
        if self.request_id:
            parts.append(f"request_id={self.request_id}")
        return " | ".join(parts)


class NetworkError(ApiError):
    """Connection could not be made or was dropped."""


class TimeoutError(ApiError):
    """Request timed out."""


class DecodeError(ApiError):
    """Response body was not the JSON the backend should send."""


class AuthError(ApiError):
    """HTTP 401/403."""


class ClientError(ApiError):
    """HTTP 4xx other than auth failures."""


class ServerError(ApiError):
    """HTTP 5xx."""


class UnexpectedStatusError(ApiError):
    """Status >= 400 outside the 4xx/5xx ranges."""
