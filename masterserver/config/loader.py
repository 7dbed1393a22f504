"""Configuration loading utilities."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic_settings import SettingsConfigDict

from masterserver.config.schema import Config


def get_config_path() -> Path:
    """Get the default configuration file path (``config.json`` in the cwd)."""
    return Path.cwd() / "config.json"


def load_config(config_path: Path | str | None = None, **overrides: Any) -> Config:
    """
    Load configuration from file, environment and explicit overrides.

    Args:
        config_path: Optional path to a JSON config file. Uses default if not provided.
        overrides: Values that win over every other source (e.g. CLI options).
            ``None`` values are ignored.

    Returns:
        Loaded configuration object.
    """
    path = Path(config_path) if config_path else get_config_path()

    class _FileConfig(Config):
        model_config = SettingsConfigDict(json_file=path)

    return _FileConfig(**{k: v for k, v in overrides.items() if v is not None})
