"""Prompt packs, rendering and prompt construction."""

from cuelight.core.agents.prompts.builder import PromptBuilder, summarize_fixture
from cuelight.core.agents.prompts.loader import LoadError, PromptPackLoader
from cuelight.core.agents.prompts.renderer import PromptRenderer, RenderError

__all__ = [
    "LoadError",
    "PromptBuilder",
    "PromptPackLoader",
    "PromptRenderer",
    "RenderError",
    "summarize_fixture",
]
