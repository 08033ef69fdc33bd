"""HTTPX wrapper used by backend clients.

Exposes:
- AsyncApiClient: async client
- HttpClientConfig: configuration
- Exceptions: ApiError and subclasses
"""

from cuelight.core.api.http.client import AsyncApiClient
from cuelight.core.api.http.config import HttpClientConfig
from cuelight.core.api.http.errors import (
    ApiError,
    AuthError,
    ClientError,
    DecodeError,
    NetworkError,
    ServerError,
    TimeoutError,
    UnexpectedStatusError,
)

__all__ = [
    "ApiError",
    "AsyncApiClient",
    "AuthError",
    "ClientError",
    "DecodeError",
    "HttpClientConfig",
    "NetworkError",
    "ServerError",
    "TimeoutError",
    "UnexpectedStatusError",
]
