"""Configuration management.

Loads from an optional TOML config file + environment variables.
Uses pydantic-settings for validation and env var overriding.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings

from .enums import LogFormat
from .errors import ConfigError

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Sub-configs
# ---------------------------------------------------------------------------

class ErrorConfig(BaseModel):
    capture_stack: bool = True  # Record a formatted traceback on HostFailure
    max_stack_frames: int = Field(default=20, ge=1)


class ObservabilityConfig(BaseModel):
    log_level: str = "INFO"
    log_format: LogFormat = LogFormat.CONSOLE

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level: {value}")
        return level


# ---------------------------------------------------------------------------
# Top-level settings
# ---------------------------------------------------------------------------

class Settings(BaseSettings):
    """Top-level library settings.

    Loaded from a TOML config file, overridden by environment variables
    such as ``FUTURECHAIN_ERRORS__CAPTURE_STACK=false``.
    """

    errors: ErrorConfig = Field(default_factory=ErrorConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)

    model_config = {"env_prefix": "FUTURECHAIN_", "env_nested_delimiter": "__"}


def load_settings(
    config_path: str | Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> Settings:
    """Load settings from TOML file + env vars.

    Args:
        config_path: Path to TOML config file (optional).
        overrides: Dict of overrides to apply on top.

    Raises:
        ConfigError: The merged data does not validate.
    """
    data: dict[str, Any] = {}

    if config_path:
        path = Path(config_path)
        if path.exists():
            import tomli

            with open(path, "rb") as f:
                data = tomli.load(f)

    if overrides:
        data.update(overrides)

    try:
        return Settings(**data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid futurechain configuration: {exc}") from exc


# ---------------------------------------------------------------------------
# Process-wide settings
# ---------------------------------------------------------------------------

_settings: Settings | None = None


def get_settings() -> Settings:
    """Return the cached settings, loading them from the environment once.

    Invalid environment values are reported once and replaced by the
    defaults, so error normalization never fails on bad configuration.
    Call ``load_settings`` directly to get the ``ConfigError`` instead.
    """
    global _settings
    if _settings is None:
        try:
            _settings = load_settings()
        except ConfigError:
            logger.warning(
                "Ignoring invalid FUTURECHAIN_* settings; using defaults",
                exc_info=True,
            )
            _settings = Settings.model_construct()
    return _settings


def configure(settings: Settings) -> None:
    """Replace the process-wide settings."""
    global _settings
    _settings = settings


def reset_settings() -> None:
    """Drop the cached settings so the next access reloads them."""
    global _settings
    _settings = None
