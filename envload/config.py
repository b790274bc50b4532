"""Settings loading/saving, merging, paths.

Provides loader settings with global defaults and directory-local overrides.
"""

from __future__ import annotations

import copy
import json
import logging
from pathlib import Path

import dacite

from .exceptions import (
    ConfigLoadError,
    ConfigSaveError,
    ConfigValidationError,
    record_error,
)
from .models import EnvSettings, settings_from_dict, settings_to_dict

logger = logging.getLogger(__name__)

# Configuration file locations
CONFIG_DIR = Path.home() / ".config" / "envload"
GLOBAL_CONFIG_PATH = CONFIG_DIR / "config.json"
PROJECT_CONFIG_FILENAME = ".envload.json"


def merge_configs(global_config: dict, project_config: dict) -> dict:
    """
    Merge project config into global config.

    Rules:
    - Scalars: project overrides global
    - Dicts: recursive merge
    - None in project: removes key from global

    Args:
        global_config: The base configuration dictionary
        project_config: The override configuration dictionary

    Returns:
        Merged configuration dictionary
    """
    result = copy.deepcopy(global_config)

    for key, value in project_config.items():
        if value is None:
            result.pop(key, None)
        elif isinstance(value, dict) and key in result and isinstance(result[key], dict):
            result[key] = merge_configs(result[key], value)
        else:
            result[key] = value

    return result


def _read_json(path: Path, label: str) -> dict:
    """Read a JSON object from *path*, or an empty dict if it does not exist."""
    if not path.exists():
        logger.debug("No %s config found at %s", label, path)
        return {}

    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        logger.debug("Loaded %s config from %s", label, path)
    except json.JSONDecodeError as e:
        logger.error("Invalid JSON in %s config: %s", label, e)
        record_error(e)
        raise ConfigLoadError(
            f"Invalid JSON in {label} config at line {e.lineno}",
            file_path=str(path),
            context={"line": e.lineno, "column": e.colno},
            cause=e,
        ) from e
    except OSError as e:
        logger.error("Failed to read %s config: %s", label, e)
        record_error(e)
        raise ConfigLoadError(
            f"Failed to read {label} config",
            file_path=str(path),
            cause=e,
        ) from e

    if not isinstance(data, dict):
        error = ConfigValidationError(
            f"{label.capitalize()} config must be a JSON object",
            value=data,
            context={"file_path": str(path)},
        )
        record_error(error)
        raise error
    return data


def load_project_config(project_path: str | Path) -> dict:
    """
    Load directory-local settings overrides.

    Args:
        project_path: Directory that may contain a .envload.json file

    Returns:
        Dictionary of overrides, or empty dict if no config exists

    Raises:
        ConfigLoadError: If the config file exists but cannot be parsed.
    """
    return _read_json(Path(project_path) / PROJECT_CONFIG_FILENAME, "project")


def load_settings(project_path: str | Path | None = None) -> EnvSettings:
    """
    Load loader settings with directory-local overrides merged.

    Args:
        project_path: Optional directory holding a .envload.json override

    Returns:
        EnvSettings built from the merged configuration

    Raises:
        ConfigLoadError: If configuration files cannot be read.
        ConfigValidationError: If the merged config is invalid.
    """
    merged_data = _read_json(GLOBAL_CONFIG_PATH, "global")

    if project_path is not None:
        merged_data = merge_configs(merged_data, load_project_config(project_path))
        logger.debug("Merged project config from %s", project_path)

    try:
        return settings_from_dict(merged_data)
    except dacite.DaciteError as e:
        logger.error("Config schema validation failed: %s", e)
        record_error(e)
        raise ConfigValidationError(
            f"Config schema validation failed: {e}",
            cause=e,
        ) from e


def save_settings(settings: EnvSettings) -> None:
    """
    Save global loader settings.

    Saves to ~/.config/envload/config.json, creating the directory if needed.

    Raises:
        ConfigSaveError: If the settings cannot be saved.
    """
    try:
        CONFIG_DIR.mkdir(parents=True, exist_ok=True)
        with open(GLOBAL_CONFIG_PATH, "w", encoding="utf-8") as f:
            json.dump(settings_to_dict(settings), f, indent=2)
        logger.debug("Saved global config to %s", GLOBAL_CONFIG_PATH)
    except OSError as e:
        logger.error("Failed to write config file: %s", e)
        record_error(e)
        raise ConfigSaveError(
            "Failed to write config file",
            file_path=str(GLOBAL_CONFIG_PATH),
            cause=e,
        ) from e


def get_project_config_path(project_path: str | Path) -> Path:
    """Return the path to a directory's local config file."""
    return Path(project_path) / PROJECT_CONFIG_FILENAME
