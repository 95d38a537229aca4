"""
Configuration management for dosekit.

Settings are read from ``~/.dosekit/config.toml``. Each table is validated
by its own settings model; a missing, unreadable or invalid table falls
back to the model defaults so that a bad config file never stops a host
application from preparing uploads.

Example config.toml:

    [pipeline]
    max_workers = 4
    excluded_sources = ["com.example.manual"]

    [logging]
    level = "info"
    max_size_mb = 5
"""

import logging
import tomllib

from collections.abc import Mapping
from pathlib import Path
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from dosekit.constants import DEFAULT_CONFIG_DIR, DEFAULT_CONFIG_FILE
from dosekit.types import LoggingSettings, PipelineConfig

logger = logging.getLogger(__name__)

SettingsT = TypeVar("SettingsT", bound=BaseModel)


def get_config_path() -> Path:
    """
    Get the path to the configuration file.

    Returns:
        Path to ~/.dosekit/config.toml
    """
    return DEFAULT_CONFIG_DIR / DEFAULT_CONFIG_FILE


def load_config() -> dict[str, Any]:
    """
    Load configuration from TOML file.

    Returns:
        Configuration dictionary. Returns empty dict if the file doesn't
        exist, can't be read, or isn't valid TOML.
    """
    config_path = get_config_path()

    try:
        with open(config_path, "rb") as f:
            return tomllib.load(f)
    except FileNotFoundError:
        return {}
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning(f"Failed to load config from {config_path}: {e}")
        logger.warning("Treating config as empty. Fix or delete the file to resolve.")
        return {}


def load_settings(
    section: str,
    model: type[SettingsT],
    config: Mapping[str, Any] | None = None,
) -> SettingsT:
    """
    Validate one config table into a settings model.

    Args:
        section: Table name (e.g., "pipeline")
        model: Settings model for the table
        config: Parsed config (default: read the config file)

    Returns:
        Validated settings, or the model defaults if the table is not
        a table or fails validation
    """
    if config is None:
        config = load_config()

    table = config.get(section, {})
    if not isinstance(table, Mapping):
        logger.warning(f"Ignoring [{section}] config: expected a table")
        return model()

    try:
        return model.model_validate(dict(table))
    except ValidationError as e:
        logger.warning(f"Invalid [{section}] config, using defaults: {e}")
        return model()


def load_pipeline_config(config: Mapping[str, Any] | None = None) -> PipelineConfig:
    """Build the pipeline settings from the [pipeline] config table."""
    return load_settings("pipeline", PipelineConfig, config)


def load_logging_settings(config: Mapping[str, Any] | None = None) -> LoggingSettings:
    """Build the file logging settings from the [logging] config table."""
    return load_settings("logging", LoggingSettings, config)
