"""Async HTTP client used by the GraphQL backend.

Wraps ``httpx.AsyncClient`` so that every transport, status and decode
failure surfaces as an ``ApiError`` subclass carrying the method, URL,
status code and a bounded body snippet. Requests are sent once.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Mapping
from typing import Any

import httpx

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

logger = logging.getLogger(__name__)

_REQUEST_ID_HEADERS = ("x-request-id", "x-correlation-id", "request-id", "trace-id")


def _redact(headers: Mapping[str, str], redact: tuple[str, ...]) -> dict[str, str]:
    hidden = {h.lower() for h in redact}
    return {k: ("***REDACTED***" if k.lower() in hidden else v) for k, v in headers.items()}


def error_for_status(status_code: int) -> type[ApiError]:
    """Pick the ApiError subclass for an HTTP status code."""
    if status_code in (401, 403):
        return AuthError
    if 400 <= status_code < 500:
        return ClientError
    if 500 <= status_code < 600:
        return ServerError
    return UnexpectedStatusError


class AsyncApiClient:
    """Asynchronous HTTP API client.

    Args:
        config: Client configuration
        transport: Optional custom transport (tests pass ``httpx.MockTransport``)

    Example:
        >>> config = HttpClientConfig(base_url="http://localhost:4000")
        >>> async with AsyncApiClient(config) as client:
        ...     resp = await client.post("/graphql", json_body={"query": "{ projects { id } }"})
        ...     data = client.json(resp)
    """

    def __init__(
        self,
        config: HttpClientConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config
        self._client = httpx.AsyncClient(
            base_url=config.base_url,
            headers={"User-Agent": config.user_agent, **config.headers},
            timeout=config.timeout,
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> AsyncApiClient:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    def _error(
        self,
        exc_type: type[ApiError],
        message: str,
        *,
        method: str,
        url: str,
        response: httpx.Response | None = None,
        cause: BaseException | None = None,
    ) -> ApiError:
        status_code = request_id = snippet = None
        if response is not None:
            status_code = response.status_code
            lowered = {k.lower(): v for k, v in response.headers.items()}
            request_id = next(
                (lowered[h] for h in _REQUEST_ID_HEADERS if h in lowered), None
            )
            limit = self.config.max_response_body_for_error
            snippet = (response.content or b"")[:limit].decode("utf-8", errors="replace")

        return exc_type(
            message=message,
            method=method,
            url=url,
            status_code=status_code,
            request_id=request_id,
            response_body_snippet=snippet or None,
            cause=cause,
        )

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
        json_body: Any = None,
    ) -> httpx.Response:
        """Send a request and raise a typed ApiError on failure.

        Args:
            method: HTTP method
            path: Request path (relative to base_url)
            params: Query parameters
            headers: Extra request headers
            json_body: JSON-serializable request body

        Returns:
            HTTP response with a status below 400

        Raises:
            TimeoutError: If the request timed out
            NetworkError: If the request could not be sent
            ApiError: Subclass matching the HTTP status for 4xx/5xx responses
        """
        method = method.upper()
        url = str(self._client.base_url.join(path))
        if logger.isEnabledFor(logging.DEBUG):
            sent = _redact({**self._client.headers, **(headers or {})}, self.config.redact_headers)
            logger.debug(f"{method} {url} headers={sent}")
        start = time.perf_counter()

        try:
            resp = await self._client.request(
                method, path, params=params, headers=headers, json=json_body
            )
        except httpx.TimeoutException as e:
            raise self._error(
                TimeoutError, "Request timed out", method=method, url=url, cause=e
            ) from e
        except httpx.RequestError as e:
            raise self._error(
                NetworkError,
                "Network error while sending request",
                method=method,
                url=url,
                cause=e,
            ) from e

        elapsed_ms = int((time.perf_counter() - start) * 1000)
        logger.debug(f"{method} {url} -> {resp.status_code} in {elapsed_ms}ms")

        if resp.status_code >= 400:
            raise self._error(
                error_for_status(resp.status_code),
                "HTTP error response",
                method=method,
                url=url,
                response=resp,
            )
        return resp

    async def post(self, path: str, **kwargs: Any) -> httpx.Response:
        return await self.request("POST", path, **kwargs)

    def json(self, response: httpx.Response) -> Any:
        """Decode a JSON response body.

        Returns:
            Decoded JSON data, or None for empty bodies

        Raises:
            DecodeError: If response is not JSON or parsing fails
        """
        if response.status_code == 204 or not response.content:
            return None

        method, url = response.request.method, str(response.request.url)
        ctype = response.headers.get("content-type", "")
        if "application/json" not in ctype and "+json" not in ctype:
            raise self._error(
                DecodeError,
                "Response is not JSON (content-type mismatch)",
                method=method,
                url=url,
                response=response,
            )
        try:
            return response.json()
        except ValueError as e:
            raise self._error(
                DecodeError,
                "Failed to parse JSON response",
                method=method,
                url=url,
                response=response,
                cause=e,
            ) from e
