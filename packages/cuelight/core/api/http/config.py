from __future__ import annotations

import httpx
from pydantic import BaseModel, Field, field_validator

SENSITIVE_HEADERS = ("authorization", "proxy-authorization", "cookie", "x-api-key")


class HttpClientConfig(BaseModel):
    """Settings for AsyncApiClient.

    Args:
        base_url: Scheme and host of the backend (e.g. "http://localhost:4000")
        timeout: HTTPX timeout configuration
        headers: Default headers sent with every request
        user_agent: User-Agent header value
        redact_headers: Header names masked in debug logs (case-insensitive)
        max_response_body_for_error: Bytes of response body kept on errors
    """

    model_config = {"frozen": True, "arbitrary_types_allowed": True}

    base_url: str
    timeout: httpx.Timeout = Field(default_factory=lambda: httpx.Timeout(30.0, connect=5.0))
    headers: dict[str, str] = Field(default_factory=dict)
    user_agent: str = "cuelight/0.1"
    redact_headers: tuple[str, ...] = SENSITIVE_HEADERS
    max_response_body_for_error: int = 4096

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"base_url must start with http:// or https://, got {v!r}")
        return v.rstrip("/")
