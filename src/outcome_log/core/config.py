"""Configuration management.

Loads from TOML config files + environment variables.
Uses pydantic-settings for validation and env var overriding.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings


class LoggingSettings(BaseSettings):
    """Logging backend settings for applications emitting outcomes.

    Loaded from a TOML config file, overridden by environment variables
    (``OUTCOME_LOG_LOG_LEVEL``, ``OUTCOME_LOG_LOG_FORMAT``, ...).
    """

    log_level: str = "INFO"
    log_format: Literal["json", "console"] = "json"
    capture_warnings: bool = False

    model_config = {"env_prefix": "OUTCOME_LOG_"}

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level: {value}")
        return level


def load_settings(
    config_path: str | Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> LoggingSettings:
    """Load settings from TOML file + env vars.

    Args:
        config_path: Path to TOML config file (optional). Settings are read
            from its ``[logging]`` table when present, else from the top level.
        overrides: Dict of overrides to apply on top.
    """
    data: dict[str, Any] = {}

    if config_path:
        path = Path(config_path)
        if path.exists():
            import tomli

            with open(path, "rb") as f:
                raw = tomli.load(f)
            data = dict(raw.get("logging", raw))

    if overrides:
        data.update(overrides)

    return LoggingSettings(**data)
