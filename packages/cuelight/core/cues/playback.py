"""Cue list playback control.

Playback runs in the backend. The caller owns a ``PlaybackSession`` that
remembers which cue list it started; every navigation command takes that
session explicitly.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone

from cuelight.core.backend import BackendClient
from cuelight.core.cues.models import (
    CueListSummary,
    CuePosition,
    CueRef,
    PlaybackNavigation,
    PlaybackResult,
    PlaybackState,
)
from cuelight.core.errors import InputValidationError, NotFoundError, external_failure
from cuelight.core.models import Cue

logger = logging.getLogger(__name__)

UNKNOWN_SCENE = "Unknown Scene"


@dataclass
class PlaybackSession:
    """Caller-owned playback state."""

    active_cue_list_id: str | None = None

    @property
    def is_active(self) -> bool:
        return self.active_cue_list_id is not None

    def require_active(self) -> str:
        if self.active_cue_list_id is None:
            raise InputValidationError(
                "No cue list is currently playing. Use start_cue_list first."
            )
        return self.active_cue_list_id


def _name_matches(candidate: str, wanted: str) -> bool:
    candidate, wanted = candidate.lower(), wanted.lower()
    return candidate == wanted or wanted in candidate


def _position(cue: Cue, index: int, scene_name: str | None = None) -> CuePosition:
    return CuePosition(
        index=index + 1,
        number=cue.cue_number,
        name=cue.name,
        scene=scene_name or cue.scene.name or UNKNOWN_SCENE,
        fade_in_time=cue.fade_in_time,
        fade_out_time=cue.fade_out_time,
        follow_time=cue.follow_time,
    )


def _navigation(cues: list[Cue], index: int) -> PlaybackNavigation:
    has_previous = index > 0
    has_next = index < len(cues) - 1
    return PlaybackNavigation(
        can_go_previous=has_previous,
        can_go_next=has_next,
        previous_cue=(
            CueRef(number=cues[index - 1].cue_number, name=cues[index - 1].name)
            if has_previous
            else None
        ),
        next_cue=(
            CueRef(number=cues[index + 1].cue_number, name=cues[index + 1].name)
            if has_next
            else None
        ),
    )


def _scene_at(cues: list[Cue], index: int) -> str:
    if 0 <= index < len(cues) and cues[index].scene.name:
        return cues[index].scene.name
    return UNKNOWN_SCENE


class PlaybackController:
    """Starts, navigates and stops cue list playback.

    Args:
        backend: Persistence and playback backend
    """

    def __init__(self, backend: BackendClient) -> None:
        self.backend = backend

    async def start(
        self,
        session: PlaybackSession,
        cue_list_id: str | None = None,
        cue_list_name: str | None = None,
        project_id: str | None = None,
        start_from_cue: float | None = None,
    ) -> PlaybackResult:
        """Start a cue list, by id or by (partial, case-insensitive) name.

        Name lookup searches ``project_id`` when given, otherwise every
        project. On success the session tracks the started list.

        Raises:
            InputValidationError: If neither id nor name is given, the list
                has no cues, or ``start_from_cue`` is not in the list
            NotFoundError: If the project or cue list cannot be found
        """
        with external_failure("start cue list"):
            resolved_id = cue_list_id
            if not resolved_id and cue_list_name:
                resolved_id = await self._find_cue_list_id(cue_list_name, project_id)
                if resolved_id is None:
                    raise NotFoundError("Cue list", f'"{cue_list_name}"', key="name")
            if not resolved_id:
                raise InputValidationError("Either cueListId or cueListName must be provided")

            cue_list = await self.backend.get_cue_list(resolved_id)
            if cue_list is None:
                raise NotFoundError("Cue list", resolved_id)

            cues = cue_list.sorted_cues()
            if not cues:
                raise InputValidationError("Cue list has no cues to play")

            start_index = 0
            if start_from_cue is not None:
                numbers = [c.cue_number for c in cues]
                if start_from_cue not in numbers:
                    raise InputValidationError(
                        f"Cue number {start_from_cue:g} not found in cue list"
                    )
                start_index = numbers.index(start_from_cue)

            await self.backend.start_cue_list(resolved_id, start_index)

        session.active_cue_list_id = resolved_id
        first = cues[start_index]
        logger.info(f"Started cue list {resolved_id} at cue {first.cue_number:g}")
        return PlaybackResult(
            success=True,
            cue_list=CueListSummary.from_cue_list(cue_list),
            current_cue=_position(first, start_index),
            message=f'Started playing cue list "{cue_list.name}" from cue {first.cue_number:g}',
        )

    async def next_cue(
        self, session: PlaybackSession, fade_in_time: float | None = None
    ) -> PlaybackResult:
        cue_list_id = session.require_active()
        with external_failure("advance to next cue"):
            await self.backend.next_cue(cue_list_id, fade_in_time)
            return await self._after_move(cue_list_id, fade_in_time, "Advanced to", "next")

    async def previous_cue(
        self, session: PlaybackSession, fade_in_time: float | None = None
    ) -> PlaybackResult:
        cue_list_id = session.require_active()
        with external_failure("go back to previous cue"):
            await self.backend.previous_cue(cue_list_id, fade_in_time)
            return await self._after_move(cue_list_id, fade_in_time, "Went back to", "previous")

    async def go_to_cue(
        self,
        session: PlaybackSession,
        cue_number: float | None = None,
        cue_name: str | None = None,
        fade_in_time: float | None = None,
    ) -> PlaybackResult:
        """Jump to a cue by number, or by (partial, case-insensitive) name.

        Raises:
            InputValidationError: If no session is active, neither selector
                is given, or no cue matches
        """
        cue_list_id = session.require_active()
        if cue_number is None and not cue_name:
            raise InputValidationError("Either cueNumber or cueName must be provided")

        with external_failure("go to cue"):
            cue_list = await self.backend.get_cue_list(cue_list_id)
            if cue_list is None:
                raise NotFoundError("Cue list", cue_list_id)
            cues = cue_list.sorted_cues()

            if cue_number is not None:
                matches = [i for i, c in enumerate(cues) if c.cue_number == cue_number]
                search = f"number {cue_number:g}"
            else:
                matches = [i for i, c in enumerate(cues) if _name_matches(c.name, cue_name)]
                search = f'name "{cue_name}"'
            if not matches:
                raise InputValidationError(f"Cue with {search} not found in current cue list")
            target = matches[0]

            await self.backend.go_to_cue(cue_list_id, target, fade_in_time)
            status = await self.backend.get_cue_list_playback_status(cue_list_id)

        current = status.current_cue if status and status.current_cue else cues[target]
        return PlaybackResult(
            success=True,
            current_cue=_position(current, target, _scene_at(cues, target)),
            fade_time=fade_in_time if fade_in_time is not None else current.fade_in_time,
            message=f'Jumped to cue {current.cue_number:g} - "{current.name}"',
        )

    async def stop(self, session: PlaybackSession) -> PlaybackResult:
        """Stop the session's cue list and clear the session."""
        if not session.is_active:
            return PlaybackResult(success=True, message="No cue list is currently active")

        cue_list_id = session.require_active()
        with external_failure("stop cue list"):
            status = await self.backend.get_cue_list_playback_status(cue_list_id)
            await self.backend.stop_cue_list(cue_list_id)

        session.active_cue_list_id = None
        last = status.current_cue if status else None
        logger.info(f"Stopped cue list {cue_list_id}")
        return PlaybackResult(
            success=True,
            last_played_cue=CueRef(number=last.cue_number, name=last.name) if last else None,
            message="Stopped cue list playback",
        )

    async def status(self, session: PlaybackSession) -> PlaybackState:
        """Report what is playing.

        With an active session that the backend reports as playing, returns
        full navigation. Otherwise looks for a cue whose scene is the
        currently active scene.
        """
        with external_failure("get cue list status"):
            if session.is_active:
                state = await self._active_state(session.require_active())
                if state is not None:
                    return state

            scene = await self.backend.get_current_active_scene()
            if scene is None:
                return PlaybackState(
                    is_playing=False,
                    message="No cue list is currently playing and no active scene was found",
                )

            for project in await self.backend.get_projects():
                for cue_list in project.cue_lists:
                    cues = cue_list.sorted_cues()
                    index = next(
                        (i for i, c in enumerate(cues) if c.scene.id == scene.id), None
                    )
                    if index is None:
                        continue
                    cue = cues[index]
                    return PlaybackState(
                        is_playing=False,
                        cue_list=CueListSummary.from_cue_list(cue_list),
                        current_cue=_position(cue, index, scene.name),
                        navigation=_navigation(cues, index),
                        started_at=datetime.now(timezone.utc).isoformat(),
                        message=(
                            f'Scene "{scene.name}" matches cue {cue.cue_number:g} in '
                            f'"{cue_list.name}". Use start_cue_list to enable formal playback.'
                        ),
                    )

        return PlaybackState(
            is_playing=False,
            message=(
                f'Active scene "{scene.name}" was found but does not match any cue '
                "in available cue lists"
            ),
        )

    # =========================================================================
    # Internals
    # =========================================================================

    async def _find_cue_list_id(self, name: str, project_id: str | None) -> str | None:
        if project_id:
            project = await self.backend.get_project(project_id)
            if project is None:
                raise NotFoundError("Project", project_id)
            projects = [project]
        else:
            projects = await self.backend.get_projects()

        for project in projects:
            for cue_list in project.cue_lists:
                if _name_matches(cue_list.name, name):
                    return cue_list.id
        return None

    async def _after_move(
        self, cue_list_id: str, fade_in_time: float | None, verb: str, direction: str
    ) -> PlaybackResult:
        status = await self.backend.get_cue_list_playback_status(cue_list_id)
        if status is None or status.current_cue_index is None:
            return PlaybackResult(success=False, message=f"Could not go to {direction} cue")

        cue_list = await self.backend.get_cue_list(cue_list_id)
        index = status.current_cue_index
        scene = _scene_at(cue_list.sorted_cues(), index) if cue_list else UNKNOWN_SCENE
        current = status.current_cue

        return PlaybackResult(
            success=True,
            current_cue=CuePosition(
                index=index + 1,
                number=current.cue_number if current else 0,
                name=current.name if current else "",
                scene=scene,
                fade_in_time=current.fade_in_time if current else None,
            ),
            fade_time=(
                fade_in_time
                if fade_in_time is not None
                else (current.fade_in_time if current else None)
            ),
            message=(
                f'{verb} cue {current.cue_number:g} - "{current.name}"'
                if current
                else f"{verb} cue {index + 1}"
            ),
        )

    async def _active_state(self, cue_list_id: str) -> PlaybackState | None:
        status = await self.backend.get_cue_list_playback_status(cue_list_id)
        if status is None or not status.is_playing:
            return None
        cue_list = await self.backend.get_cue_list(cue_list_id)
        if cue_list is None:
            return None

        cues = cue_list.sorted_cues()
        index = status.current_cue_index or 0
        current = status.current_cue
        return PlaybackState(
            is_playing=True,
            cue_list=CueListSummary.from_cue_list(cue_list),
            current_cue=_position(current, index, _scene_at(cues, index)) if current else None,
            navigation=_navigation(cues, index),
            started_at=status.last_updated,
        )
