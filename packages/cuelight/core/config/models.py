"""Configuration models for cuelight."""

from __future__ import annotations

from pathlib import Path
from typing import Self

from pydantic import BaseModel, ConfigDict, Field


class LLMConfig(BaseModel):
    """Completion service configuration."""

    provider: str = Field(default="openai", description="Completion provider name")

    model: str = Field(default="gpt-4o", description="Model used for completions")

    api_key: str | None = Field(
        default=None, description="API key (falls back to OPENAI_API_KEY)", repr=False
    )

    base_url: str | None = Field(default=None, description="Override API base URL")

    max_tokens: int = Field(default=4000, gt=0, description="Maximum tokens per completion")

    timeout_seconds: float = Field(default=60.0, gt=0, description="Timeout for completion call")


class GenerationConfig(BaseModel):
    """Sampling temperatures and prompt limits for generation."""

    scene_temperature: float = Field(default=0.3, ge=0.0, le=2.0)

    cue_sequence_temperature: float = Field(default=0.4, ge=0.0, le=2.0)

    fixture_usage_temperature: float = Field(default=0.3, ge=0.0, le=2.0)

    script_analysis_temperature: float = Field(default=0.3, ge=0.0, le=2.0)

    recommendation_temperature: float = Field(default=0.4, ge=0.0, le=2.0)

    max_prompt_fixtures: int = Field(
        default=15, gt=0, description="Fixtures listed in a scene prompt before truncation"
    )

    additive_preview_count: int = Field(
        default=5, ge=0, description="Unmodified fixtures previewed in additive prompts"
    )

    act_fixture_types: list[str] = Field(
        default_factory=lambda: ["LED_PAR", "MOVING_HEAD"],
        description="Fixture types passed to recommendations for act cue templates",
    )


class BackendConfig(BaseModel):
    """GraphQL backend configuration."""

    graphql_endpoint: str = Field(
        default="http://localhost:4000/graphql", description="GraphQL HTTP endpoint"
    )

    timeout_seconds: float = Field(default=30.0, gt=0)

    user_agent: str = Field(default="cuelight/0.1")


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Root log level",
    )

    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Text log format (ignored when structured)",
    )

    structured: bool = Field(default=False, description="Emit JSON log lines")

    filename: str | None = Field(default=None, description="Log file path (stdout if unset)")


class ConfigBase(BaseModel):
    """Base class for cuelight configuration files."""

    model_config = ConfigDict(extra="ignore")  # Forward compatibility

    @classmethod
    def default_path(cls) -> Path:
        """Return the default config file path for this config type."""
        raise NotImplementedError(f"{cls.__name__} must implement default_path()")

    @classmethod
    def load_or_default(cls, path: Path | str | None = None) -> Self:
        """Load config from ``path`` or the default location.

        Args:
            path: Path to config file, or None to use default

        Returns:
            Loaded config instance
        """
        from cuelight.core.config.loader import load_app_config

        return load_app_config(path or cls.default_path())  # type: ignore[return-value]


class AppConfig(ConfigBase):
    """Top-level application configuration."""

    llm: LLMConfig = Field(default_factory=LLMConfig)

    generation: GenerationConfig = Field(default_factory=GenerationConfig)

    backend: BackendConfig = Field(default_factory=BackendConfig)

    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def default_path(cls) -> Path:
        return Path("cuelight.yaml")
