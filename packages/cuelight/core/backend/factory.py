"""Backend client factory."""

from __future__ import annotations

import httpx

from cuelight.core.backend.graphql import GraphQLBackendClient
from cuelight.core.config.models import AppConfig


def create_backend_client(
    app_config: AppConfig, *, transport: httpx.AsyncBaseTransport | None = None
) -> GraphQLBackendClient:
    """Create the GraphQL backend client for the configured endpoint."""
    return GraphQLBackendClient(app_config.backend, transport=transport)
