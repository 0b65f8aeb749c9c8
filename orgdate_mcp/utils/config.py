"""
Configuration Module

Loads config.yaml (path overridable through CONFIG_FILE_PATH) and merges it over
the built-in defaults. The merged result is cached for the life of the process.
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from orgdate_mcp.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_CONFIG: Dict[str, Any] = {
    "server": {
        "log_level": "INFO",
        "log_file": None,
    },
    # None keeps the built-in English tables
    "weekday_abbreviations": None,
    "month_abbreviations": None,
    "trace": False,
    # Bracket style applied by the MCP tools to unbracketed input: none, active or inactive
    "default_activity": "none",
}

_config_cache: Optional[Dict[str, Any]] = None


def get_config_path() -> Path:
    """
    Get the path of the YAML configuration file.

    Returns:
        Path: CONFIG_FILE_PATH if set, otherwise ./config.yaml.
    """
    return Path(os.getenv("CONFIG_FILE_PATH", "config.yaml")).expanduser()


def load_yaml_config(path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load the raw YAML configuration.

    Args:
        path: File to read. Defaults to get_config_path().

    Returns:
        Dict[str, Any]: The parsed file, or an empty dict when the file is
        missing or unreadable.
    """
    config_path = path or get_config_path()
    if not config_path.exists():
        return {}
    try:
        with open(config_path, "r") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.warning(f"Could not read config file {config_path}: {e}")
        return {}
    if not isinstance(data, dict):
        logger.warning(f"Ignoring config file {config_path}: top level is not a mapping")
        return {}
    return data


def _merge(defaults: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    merged = dict(defaults)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def get_config() -> Dict[str, Any]:
    """
    Get the application configuration, loading it on first use.

    Returns:
        Dict[str, Any]: Defaults merged with the contents of config.yaml.
    """
    global _config_cache
    if _config_cache is None:
        _config_cache = _merge(DEFAULT_CONFIG, load_yaml_config())
    return _config_cache


def reset_config() -> None:
    """Drop the cached configuration so the next get_config() reloads it."""
    global _config_cache
    _config_cache = None
