"""Configuration management for the archiver."""

from .loader import DEFAULT_CONFIG_PATH, build_archiver_config, load_config, save_config, validate_dirs
from .models import ArchiverConfig, ConfigModel, FetchConfig

__all__ = [
    "ArchiverConfig",
    "ConfigModel",
    "FetchConfig",
    "DEFAULT_CONFIG_PATH",
    "build_archiver_config",
    "load_config",
    "save_config",
    "validate_dirs",
]
