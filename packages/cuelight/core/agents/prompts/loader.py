"""Prompt pack loader."""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Any

from cuelight.core.agents.prompts.renderer import PromptRenderer

logger = logging.getLogger(__name__)

DEFAULT_PACKS_DIR = Path(__file__).parent / "packs"


class LoadError(Exception):
    """Raised when prompt pack loading fails."""

    pass


class PromptPackLoader:
    """Loads prompt packs from filesystem.

    Prompt Pack Structure:
        pack_name/
        └── user.j2              # Required: user message template
    """

    def __init__(self, base_path: str | Path = DEFAULT_PACKS_DIR):
        """Initialize prompt pack loader.

        Args:
            base_path: Base directory containing prompt packs
        """
        self.base_path = Path(base_path)
        self.renderer = PromptRenderer()

        logger.debug(f"PromptPackLoader initialized: base_path={self.base_path}")

    def load(self, pack_name: str) -> str:
        """Load a pack's user template (not rendered).

        Args:
            pack_name: Name of the prompt pack directory

        Returns:
            Template source

        Raises:
            LoadError: If pack doesn't exist or the template is missing
        """
        return _read_template(self.base_path / pack_name, pack_name)

    def load_and_render(self, pack_name: str, variables: dict[str, Any]) -> str:
        """Load and render a pack's user template.

        Raises:
            LoadError: If loading fails
            RenderError: If rendering fails
        """
        return self.renderer.render(self.load(pack_name), variables).strip()


@lru_cache(maxsize=32)
def _read_template(pack_dir: Path, pack_name: str) -> str:
    if not pack_dir.is_dir():
        raise LoadError(f"Prompt pack '{pack_name}' does not exist at {pack_dir}")

    user_path = pack_dir / "user.j2"
    if not user_path.exists():
        raise LoadError(f"Prompt pack '{pack_name}' missing required user.j2 at {user_path}")

    logger.debug(f"Loaded prompt pack '{pack_name}'")
    return user_path.read_text(encoding="utf-8")
