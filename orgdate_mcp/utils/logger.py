"""
Logger Utility Module

This module provides functions for setting up and configuring the application logger.
"""

import os
import logging
import sys
import yaml
from pathlib import Path
from typing import Any, Dict, Optional


def _read_server_section() -> Dict[str, Any]:
    """
    Read the ``server`` section of config.yaml without going through the config cache.

    The logger is configured before the rest of the configuration is loaded,
    so it reads the file directly.

    Returns:
        Dict[str, Any]: The server section, or an empty dict.
    """
    config_path = Path(os.getenv("CONFIG_FILE_PATH", "config.yaml"))
    if not config_path.exists():
        return {}
    with open(config_path, "r") as f:
        config = yaml.safe_load(f) or {}
    return config.get("server", {}) or {}


def get_log_level() -> str:
    """
    Get the log level from config.yaml.

    Returns:
        str: The log level (INFO by default).
    """
    try:
        return str(_read_server_section().get("log_level", "INFO"))
    except (OSError, yaml.YAMLError):
        return "INFO"


def get_log_file_path() -> Path:
    """
    Get the log file path from config or default.

    Returns:
        Path: The log file path.
    """
    try:
        log_path = _read_server_section().get("log_file")
        if log_path:
            return Path(log_path).expanduser()
    except (OSError, yaml.YAMLError):
        pass
    # Default to ~/.orgdate-mcp/orgdate-mcp.log
    default_path = Path.home() / ".orgdate-mcp" / "orgdate-mcp.log"
    default_path.parent.mkdir(parents=True, exist_ok=True)
    return default_path


def setup_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Set up and configure a logger.

    Args:
        name (Optional[str], optional): The name of the logger. Defaults to None.

    Returns:
        logging.Logger: The configured logger.
    """
    logger = logging.getLogger(name or "orgdate_mcp")

    # Avoid adding duplicate handlers on repeated calls
    if logger.handlers:
        return logger

    log_level_str = get_log_level().upper()
    log_level = getattr(logging, log_level_str, logging.INFO)
    logger.setLevel(log_level)

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    # MCP speaks JSON-RPC over stdout, so console output goes to stderr
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    try:
        log_file = get_log_file_path()
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
    except OSError:
        pass  # No file logging when the path is not writable

    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger with the specified name.

    Args:
        name (str): The name of the logger.

    Returns:
        logging.Logger: The logger.
    """
    return logging.getLogger(name)
