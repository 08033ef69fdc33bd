"""Configuration loading utilities with JSON and YAML support."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

import yaml

from cuelight.core.config.models import AppConfig
from cuelight.core.utils.logging import configure_logging as _configure_logging

logger = logging.getLogger(__name__)

OPENAI_API_KEY_ENV = "OPENAI_API_KEY"
GRAPHQL_ENDPOINT_ENV = "CUELIGHT_GRAPHQL_ENDPOINT"


def detect_format(file_path: Path | str) -> str:
    """Detect config file format from extension.

    Args:
        file_path: Path to config file

    Returns:
        Format string: "json" or "yaml"

    Raises:
        ValueError: If format cannot be determined

    Example:
        >>> detect_format("cuelight.yml")
        'yaml'
    """
    suffix = Path(file_path).suffix.lower()

    if suffix == ".json":
        return "json"
    elif suffix in [".yaml", ".yml"]:
        return "yaml"
    else:
        raise ValueError(f"Unsupported config format: {suffix}")


def load_config(path: str | Path) -> dict[str, Any]:
    """Load and return raw configuration dictionary.

    Args:
        path: Path to config file (.json, .yaml, or .yml)

    Returns:
        Raw configuration dictionary

    Raises:
        FileNotFoundError: If config file does not exist
        ValueError: If format is not supported or file content is invalid
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Config file does not exist: {path}")

    fmt = detect_format(path)

    if fmt == "json":
        try:
            with path.open("r", encoding="utf-8") as f:
                return json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {path}: {e}") from e

    try:
        with path.open("r", encoding="utf-8") as f:
            content = yaml.safe_load(f)
            # safe_load returns None for empty files
            return content if content is not None else {}
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {path}: {e}") from e


def load_app_config(path: str | Path | None = None) -> AppConfig:
    """Load and validate application configuration.

    A missing file yields defaults. Environment variables fill the API key
    and GraphQL endpoint when the file does not set them.

    Args:
        path: Path to app config file (.json, .yaml, or .yml)

    Returns:
        Validated AppConfig instance

    Raises:
        ValidationError: If config is invalid
    """
    if path is not None and Path(path).exists():
        config = AppConfig.model_validate(load_config(path))
    else:
        if path is not None:
            logger.debug(f"Config file {path} not found, using defaults")
        config = AppConfig()

    return _apply_env_overrides(config)


def configure_logging(config: AppConfig | None = None) -> None:
    """Configure Python logging from app config.

    Args:
        config: AppConfig instance (defaults if None)
    """
    config = config or AppConfig()
    _configure_logging(
        level=config.logging.level,
        format_string=config.logging.format,
        filename=config.logging.filename,
        structured=config.logging.structured,
    )


def _apply_env_overrides(config: AppConfig) -> AppConfig:
    """Return ``config`` with unset values filled from the environment."""
    if config.llm.api_key is None:
        api_key = os.getenv(OPENAI_API_KEY_ENV)
        if api_key:
            logger.debug(f"Loaded {OPENAI_API_KEY_ENV} from environment")
            config = config.model_copy(
                update={"llm": config.llm.model_copy(update={"api_key": api_key})}
            )

    endpoint = os.getenv(GRAPHQL_ENDPOINT_ENV)
    if endpoint and "graphql_endpoint" not in config.backend.model_fields_set:
        logger.debug(f"Loaded {GRAPHQL_ENDPOINT_ENV} from environment")
        config = config.model_copy(
            update={"backend": config.backend.model_copy(update={"graphql_endpoint": endpoint})}
        )

    return config
