"""Paged fixture listings."""

from __future__ import annotations

import logging
from typing import Any

from cuelight.core.backend import BackendClient, FixtureInstancePage
from cuelight.core.errors import NotFoundError, external_failure
from cuelight.core.fixtures.occupancy import ChannelOccupancy
from cuelight.core.utils.pagination import format_pagination_info, normalize_pagination_params

logger = logging.getLogger(__name__)


class FixtureInventory:
    """Read-side views over a project's patched fixtures.

    Args:
        backend: Persistence backend
    """

    def __init__(self, backend: BackendClient) -> None:
        self.backend = backend

    async def list_fixtures(
        self,
        project_id: str,
        filter: dict[str, Any] | None = None,
        page: int | None = None,
        per_page: int | None = None,
    ) -> FixtureInstancePage:
        """One page of fixture instances, filtered by the backend.

        Paging parameters are clamped (page >= 1, 1 <= per_page <= 100)
        before the query is sent.
        """
        page, per_page = normalize_pagination_params(page, per_page)
        with external_failure("list fixtures"):
            return await self.backend.get_fixture_instances(
                project_id, filter=filter, page=page, per_page=per_page
            )

    async def universe_fixtures(
        self, project_id: str, universe: int, page: int | None = None, per_page: int | None = None
    ) -> FixtureInstancePage:
        """Fixtures patched into one universe, ordered by start channel.

        Raises:
            NotFoundError: If the project does not exist
        """
        page, per_page = normalize_pagination_params(page, per_page)
        with external_failure("list universe fixtures"):
            project = await self.backend.get_project(project_id)
        if project is None:
            raise NotFoundError("Project", project_id)

        fixtures = sorted(project.fixtures_in_universe(universe), key=lambda f: f.start_channel)
        start = (page - 1) * per_page
        return FixtureInstancePage(
            fixtures=fixtures[start : start + per_page],
            pagination=format_pagination_info(len(fixtures), page, per_page),
        )

    async def channel_occupancy(self, project_id: str, universe: int) -> ChannelOccupancy:
        """Current occupancy of ``universe``.

        Raises:
            NotFoundError: If the project does not exist
        """
        with external_failure("load channel occupancy"):
            project = await self.backend.get_project(project_id)
        if project is None:
            raise NotFoundError("Project", project_id)
        occupancy = ChannelOccupancy.from_fixtures(universe, project.fixtures)
        logger.debug(
            f"Universe {universe} of project {project_id}: {occupancy.used_channels} channels used"
        )
        return occupancy
