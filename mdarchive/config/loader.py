"""Configuration loader."""

from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError

from ..errors import ConfigError
from .models import ArchiverConfig, ConfigModel, FetchConfig

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "mdarchive" / "config.yaml"


def load_config(config_path: Optional[Path] = None) -> ConfigModel:
    """
    Load settings from a YAML file.

    Without an explicit path the default location is tried, and a missing
    default file yields the built-in defaults. A missing explicit file is an
    error.
    """
    if config_path is None:
        if not DEFAULT_CONFIG_PATH.exists():
            return ConfigModel()
        config_path = DEFAULT_CONFIG_PATH
    elif not config_path.exists():
        raise ConfigError(f"Config file not found: {config_path}")

    try:
        with open(config_path, encoding="utf-8") as f:
            config_data = yaml.safe_load(f)

        if config_data is None:
            config_data = {}

        return ConfigModel(**config_data)
    except OSError as e:
        raise ConfigError(f"Cannot read config file {config_path}: {e}")
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in config file: {e}")
    except (TypeError, ValidationError) as e:
        raise ConfigError(f"Invalid configuration: {e}")


def save_config(config: ConfigModel, config_path: Path) -> None:
    """Save settings to a YAML file."""
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "w", encoding="utf-8") as f:
        yaml.safe_dump(config.model_dump(), f, default_flow_style=False, sort_keys=False)


def validate_dirs(input_dir: Optional[Path], output_dir: Optional[Path]) -> None:
    """Check that both directories were given, exist, and are directories."""
    if not input_dir or not output_dir:
        raise ConfigError("input and output directory must be specified")

    for label, path in (("input", input_dir), ("output", output_dir)):
        if not path.exists():
            raise ConfigError(f"{label} does not exist")
        if not path.is_dir():
            raise ConfigError(f"{label} is not a directory")


def build_archiver_config(
    input_dir: Optional[Path],
    output_dir: Optional[Path],
    config_path: Optional[Path] = None,
    timeout: Optional[float] = None,
    max_concurrent: Optional[int] = None,
) -> ArchiverConfig:
    """Validate command line values and merge them over the settings file."""
    validate_dirs(input_dir, output_dir)
    settings = load_config(config_path)

    overrides = {}
    if timeout is not None:
        overrides["timeout"] = timeout
    if max_concurrent is not None:
        overrides["max_concurrent"] = max_concurrent

    try:
        fetch = FetchConfig(**{**settings.fetch.model_dump(), **overrides})
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}")

    return ArchiverConfig(input_dir=input_dir, output_dir=output_dir, fetch=fetch)
