"""Backend persistence contract and its GraphQL client."""

from cuelight.core.backend.factory import create_backend_client
from cuelight.core.backend.graphql import BackendError, GraphQLBackendClient
from cuelight.core.backend.protocol import BackendClient, BulkDeleteResult, FixtureInstancePage

__all__ = [
    "BackendClient",
    "BackendError",
    "BulkDeleteResult",
    "FixtureInstancePage",
    "GraphQLBackendClient",
    "create_backend_client",
]
