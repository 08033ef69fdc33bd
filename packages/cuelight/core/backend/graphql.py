"""GraphQL implementation of the backend contract."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from cuelight.core.api.http import AsyncApiClient, HttpClientConfig
from cuelight.core.backend import queries
from cuelight.core.backend.protocol import BulkDeleteResult, FixtureInstancePage
from cuelight.core.config.models import BackendConfig
from cuelight.core.errors import ExternalServiceError
from cuelight.core.models import (
    Cue,
    CueList,
    CueListPlaybackStatus,
    FixtureDefinition,
    FixtureInstance,
    Project,
    Scene,
)

logger = logging.getLogger(__name__)


class BackendError(ExternalServiceError):
    """The backend answered with GraphQL errors.

    Attributes:
        operation: GraphQL operation field that failed
        errors: Raw ``errors`` entries from the response
    """

    def __init__(self, operation: str, errors: list[dict[str, Any]]) -> None:
        self.operation = operation
        self.errors = errors
        message = errors[0].get("message", "Unknown GraphQL error") if errors else "Unknown error"
        super().__init__(f"{operation}: {message}")


def _split_endpoint(endpoint: str) -> tuple[str, str]:
    """Split a GraphQL endpoint into (base_url, path)."""
    url = httpx.URL(endpoint)
    return f"{url.scheme}://{url.netloc.decode('ascii')}", url.path or "/"


class GraphQLBackendClient:
    """Backend client speaking GraphQL over HTTP.

    Args:
        config: Backend configuration
        transport: Optional custom transport (useful for testing)

    Example:
        >>> async with GraphQLBackendClient(BackendConfig()) as backend:
        ...     project = await backend.get_project("p1")
    """

    def __init__(
        self,
        config: BackendConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        base_url, self._path = _split_endpoint(config.graphql_endpoint)
        self._http = AsyncApiClient(
            HttpClientConfig(
                base_url=base_url,
                timeout=httpx.Timeout(config.timeout_seconds, connect=5.0),
                user_agent=config.user_agent,
            ),
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> GraphQLBackendClient:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def _execute(
        self, operation: str, document: str, variables: dict[str, Any] | None = None
    ) -> Any:
        """Run a GraphQL document and return ``data[operation]``.

        Raises:
            BackendError: If the response carries GraphQL errors
            ApiError: On transport or HTTP failure
        """
        logger.debug(f"GraphQL {operation}")
        resp = await self._http.post(
            self._path, json_body={"query": document, "variables": variables or {}}
        )
        payload = self._http.json(resp) or {}
        errors = payload.get("errors")
        if errors:
            raise BackendError(operation, errors)
        return (payload.get("data") or {}).get(operation)

    # =========================================================================
    # Projects
    # =========================================================================

    async def get_projects(self) -> list[Project]:
        data = await self._execute("projects", queries.GET_PROJECTS)
        return [Project.model_validate(p) for p in data or []]

    async def get_project(self, project_id: str) -> Project | None:
        data = await self._execute("project", queries.GET_PROJECT, {"id": project_id})
        return Project.model_validate(data) if data else None

    # =========================================================================
    # Cue lists and cues
    # =========================================================================

    async def get_cue_list(self, cue_list_id: str) -> CueList | None:
        data = await self._execute("cueList", queries.GET_CUE_LIST, {"id": cue_list_id})
        return CueList.model_validate(data) if data else None

    async def create_cue_list(
        self, name: str, description: str | None, project_id: str
    ) -> CueList:
        data = await self._execute(
            "createCueList",
            queries.CREATE_CUE_LIST,
            {"input": {"name": name, "description": description, "projectId": project_id}},
        )
        return CueList.model_validate(data)

    async def update_cue_list(self, cue_list_id: str, fields: dict[str, Any]) -> CueList:
        data = await self._execute(
            "updateCueList", queries.UPDATE_CUE_LIST, {"id": cue_list_id, "input": fields}
        )
        return CueList.model_validate(data)

    async def delete_cue_list(self, cue_list_id: str) -> bool:
        return bool(
            await self._execute("deleteCueList", queries.DELETE_CUE_LIST, {"id": cue_list_id})
        )

    async def create_cue(self, fields: dict[str, Any]) -> Cue:
        data = await self._execute("createCue", queries.CREATE_CUE, {"input": fields})
        return Cue.model_validate(data)

    async def update_cue(self, cue_id: str, fields: dict[str, Any]) -> Cue:
        data = await self._execute(
            "updateCue", queries.UPDATE_CUE, {"id": cue_id, "input": fields}
        )
        return Cue.model_validate(data)

    async def delete_cue(self, cue_id: str) -> bool:
        return bool(await self._execute("deleteCue", queries.DELETE_CUE, {"id": cue_id}))

    async def bulk_update_cues(self, fields: dict[str, Any]) -> list[Cue]:
        data = await self._execute("bulkUpdateCues", queries.BULK_UPDATE_CUES, {"input": fields})
        return [Cue.model_validate(c) for c in data or []]

    # =========================================================================
    # Fixtures
    # =========================================================================

    async def get_fixture_instances(
        self,
        project_id: str,
        filter: dict[str, Any] | None = None,
        page: int = 1,
        per_page: int = 50,
    ) -> FixtureInstancePage:
        data = await self._execute(
            "fixtureInstances",
            queries.GET_FIXTURE_INSTANCES,
            {"projectId": project_id, "filter": filter, "page": page, "perPage": per_page},
        )
        return FixtureInstancePage.model_validate(data)

    async def get_fixture_instance(self, fixture_id: str) -> FixtureInstance | None:
        data = await self._execute(
            "fixtureInstance", queries.GET_FIXTURE_INSTANCE, {"id": fixture_id}
        )
        return FixtureInstance.model_validate(data) if data else None

    async def create_fixture_instance(self, fields: dict[str, Any]) -> FixtureInstance:
        data = await self._execute(
            "createFixtureInstance", queries.CREATE_FIXTURE_INSTANCE, {"input": fields}
        )
        return FixtureInstance.model_validate(data)

    async def update_fixture_instance(
        self, fixture_id: str, fields: dict[str, Any]
    ) -> FixtureInstance:
        data = await self._execute(
            "updateFixtureInstance",
            queries.UPDATE_FIXTURE_INSTANCE,
            {"id": fixture_id, "input": fields},
        )
        return FixtureInstance.model_validate(data)

    async def delete_fixture_instance(self, fixture_id: str) -> bool:
        return bool(
            await self._execute(
                "deleteFixtureInstance", queries.DELETE_FIXTURE_INSTANCE, {"id": fixture_id}
            )
        )

    async def bulk_update_fixtures(self, updates: list[dict[str, Any]]) -> list[FixtureInstance]:
        data = await self._execute(
            "bulkUpdateFixtures", queries.BULK_UPDATE_FIXTURES, {"input": {"fixtures": updates}}
        )
        return [FixtureInstance.model_validate(f) for f in data or []]

    async def bulk_delete_fixtures(self, fixture_ids: list[str]) -> BulkDeleteResult:
        data = await self._execute(
            "bulkDeleteFixtures", queries.BULK_DELETE_FIXTURES, {"fixtureIds": fixture_ids}
        )
        return BulkDeleteResult.model_validate(data or {})

    async def get_fixture_definitions(self) -> list[FixtureDefinition]:
        data = await self._execute("fixtureDefinitions", queries.GET_FIXTURE_DEFINITIONS)
        return [FixtureDefinition.model_validate(d) for d in data or []]

    async def create_fixture_definition(self, fields: dict[str, Any]) -> FixtureDefinition:
        data = await self._execute(
            "createFixtureDefinition", queries.CREATE_FIXTURE_DEFINITION, {"input": fields}
        )
        return FixtureDefinition.model_validate(data)

    # =========================================================================
    # Playback
    # =========================================================================

    async def start_cue_list(self, cue_list_id: str, start_index: int = 0) -> bool:
        return bool(
            await self._execute(
                "startCueList",
                queries.START_CUE_LIST,
                {"cueListId": cue_list_id, "startFromCue": start_index},
            )
        )

    async def next_cue(self, cue_list_id: str, fade_in_time: float | None = None) -> bool:
        return bool(
            await self._execute(
                "nextCue", queries.NEXT_CUE, {"cueListId": cue_list_id, "fadeInTime": fade_in_time}
            )
        )

    async def previous_cue(self, cue_list_id: str, fade_in_time: float | None = None) -> bool:
        return bool(
            await self._execute(
                "previousCue",
                queries.PREVIOUS_CUE,
                {"cueListId": cue_list_id, "fadeInTime": fade_in_time},
            )
        )

    async def go_to_cue(
        self, cue_list_id: str, cue_index: int, fade_in_time: float | None = None
    ) -> bool:
        return bool(
            await self._execute(
                "goToCue",
                queries.GO_TO_CUE,
                {"cueListId": cue_list_id, "cueIndex": cue_index, "fadeInTime": fade_in_time},
            )
        )

    async def stop_cue_list(self, cue_list_id: str) -> bool:
        return bool(
            await self._execute("stopCueList", queries.STOP_CUE_LIST, {"cueListId": cue_list_id})
        )

    async def get_cue_list_playback_status(
        self, cue_list_id: str
    ) -> CueListPlaybackStatus | None:
        data = await self._execute(
            "cueListPlaybackStatus",
            queries.GET_CUE_LIST_PLAYBACK_STATUS,
            {"cueListId": cue_list_id},
        )
        return CueListPlaybackStatus.model_validate(data) if data else None

    async def get_current_active_scene(self) -> Scene | None:
        data = await self._execute("currentActiveScene", queries.GET_CURRENT_ACTIVE_SCENE)
        return Scene.model_validate(data) if data else None
