"""Cue, cue list and cue sequence models."""

from __future__ import annotations

from pydantic import Field, field_validator

from cuelight.core.models.base import CueLightModel


class SceneRef(CueLightModel):
    id: str
    name: str = ""


class Cue(CueLightModel):
    """A numbered instruction to move to a scene.

    ``follow_time`` of None means the cue waits for the operator.
    """

    id: str
    name: str
    cue_number: float
    scene: SceneRef
    fade_in_time: float = Field(default=3.0, ge=0)
    fade_out_time: float = Field(default=3.0, ge=0)
    follow_time: float | None = Field(default=None, ge=0)
    easing_type: str | None = None
    notes: str | None = None

    @property
    def scene_id(self) -> str:
        return self.scene.id

    @property
    def has_follow_time(self) -> bool:
        """True when a follow time is set, including 0. Used for follow-cue counts."""
        return self.follow_time is not None

    @property
    def is_auto_follow(self) -> bool:
        """True when the cue advances on its own after a non-zero wait."""
        return bool(self.follow_time)


class CueList(CueLightModel):
    """An ordered collection of cues."""

    id: str
    name: str
    description: str | None = None
    loop: bool = False
    cues: list[Cue] = Field(default_factory=list)

    def sorted_cues(self) -> list[Cue]:
        """Cues in playback order (ascending cue number)."""
        return sorted(self.cues, key=lambda c: c.cue_number)


class CueListPlaybackStatus(CueLightModel):
    """Backend playback state for one cue list."""

    cue_list_id: str
    current_cue: Cue | None = None
    current_cue_index: int | None = None
    is_playing: bool = False
    is_fading: bool = False
    last_updated: str | None = None


class ProposedCue(CueLightModel):
    """A cue proposed by synthesis, not yet bound to a persisted scene.

    ``scene_id`` holds whatever the model returned: usually a scene index,
    sometimes a scene id.
    """

    name: str
    cue_number: float
    scene_id: str
    fade_in_time: float = Field(default=3.0, ge=0)
    fade_out_time: float = Field(default=3.0, ge=0)
    follow_time: float | None = Field(default=None, ge=0)
    notes: str | None = None

    @field_validator("scene_id", mode="before")
    @classmethod
    def _stringify_scene_ref(cls, value: object) -> object:
        if isinstance(value, bool):
            return value
        if isinstance(value, int | float):
            return str(int(value)) if float(value).is_integer() else str(value)
        return value


class CueSequence(CueLightModel):
    """Synthesized cue sequence awaiting persistence."""

    name: str
    description: str = ""
    cues: list[ProposedCue] = Field(default_factory=list)
    reasoning: str = ""


class TransitionPreferences(CueLightModel):
    """Fade and follow preferences for cue synthesis."""

    default_fade_in: float = Field(default=3.0, ge=0)
    default_fade_out: float = Field(default=3.0, ge=0)
    follow_cues: bool = False
    auto_advance: bool = False
