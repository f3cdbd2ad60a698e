"""Configuration file I/O operations.

This module provides functions for loading and saving config.toml with
validation through the Pydantic models in pkgmerge.models.config.
"""

import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Any

import tomli_w
from pydantic import ValidationError

from pkgmerge.core.paths import get_config_path
from pkgmerge.models.config import AppConfig, SourceConfig


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigNotFoundError(ConfigError):
    """Raised when the config file is not found."""


class ConfigParseError(ConfigError):
    """Raised when the config file cannot be parsed."""


class ConfigValidationError(ConfigError):
    """Raised when config content is invalid."""


def load_config(path: Path | None = None) -> AppConfig:
    """Load and validate the configuration from a TOML file.

    Args:
        path: Path to the config file. If None, uses the default path.

    Returns:
        Validated AppConfig object.

    Raises:
        ConfigNotFoundError: If the config file doesn't exist.
        ConfigParseError: If the TOML syntax is invalid.
        ConfigValidationError: If the content doesn't match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        raise ConfigNotFoundError(f"Config not found: {config_path}")

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax: {e}") from e
    except UnicodeDecodeError as e:
        raise ConfigParseError(f"Config is not valid UTF-8: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config: {e}") from e

    try:
        return AppConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigValidationError(f"Invalid config content: {e}") from e


def save_config(config: AppConfig, path: Path | None = None) -> Path:
    """Save the configuration to a TOML file.

    The file is written to a temporary file in the same directory and
    then moved into place with os.replace().

    Args:
        config: The AppConfig object to save.
        path: Path to save to. If None, uses the default path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()
    data = _config_to_dict(config)

    tmp_path: Path | None = None
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    return config_path


def config_exists(path: Path | None = None) -> bool:
    """Check if a config file exists.

    Args:
        path: Path to check. If None, uses the default path.

    Returns:
        True if the config file exists, False otherwise.
    """
    return (path or get_config_path()).exists()


def default_config() -> AppConfig:
    """Build the configuration written by 'pkgmerge config init'."""
    return AppConfig(
        inventory=Path("inventory.toml"),
        sort_by="api",
        sources=[
            SourceConfig(
                url="https://dl.example.com/repository/repository.xml",
                name="Main Repository",
                catalog=Path("catalogs/main.toml"),
            )
        ],
    )


def _config_to_dict(config: AppConfig) -> dict[str, Any]:
    """Convert an AppConfig to a dictionary suitable for TOML serialization.

    Args:
        config: The AppConfig object to convert.

    Returns:
        Dictionary ready for TOML serialization.
    """
    result: dict[str, Any] = {"sort_by": config.sort_by}
    if config.inventory is not None:
        result["inventory"] = str(config.inventory)
    result["sources"] = [_source_to_dict(entry) for entry in config.sources]
    return result


def _source_to_dict(entry: SourceConfig) -> dict[str, Any]:
    result: dict[str, Any] = {"url": entry.url}
    if entry.name:
        result["name"] = entry.name
    result["catalog"] = str(entry.catalog)
    return result
