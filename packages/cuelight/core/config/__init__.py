"""Configuration management for cuelight."""

from cuelight.core.config.loader import (
    configure_logging,
    detect_format,
    load_app_config,
    load_config,
)
from cuelight.core.config.models import (
    AppConfig,
    BackendConfig,
    GenerationConfig,
    LLMConfig,
    LoggingConfig,
)

__all__ = [
    "AppConfig",
    "BackendConfig",
    "GenerationConfig",
    "LLMConfig",
    "LoggingConfig",
    "configure_logging",
    "detect_format",
    "load_app_config",
    "load_config",
]
