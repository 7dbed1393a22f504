"""Configuration module for masterserver."""

from masterserver.config.loader import get_config_path, load_config
from masterserver.config.schema import Config

__all__ = ["Config", "load_config", "get_config_path"]
