"""
Org Date MCP Utilities Module

Provides configuration loading and logging.
"""

from orgdate_mcp.utils.config import get_config, reset_config
from orgdate_mcp.utils.logger import get_logger, setup_logger

__all__ = [
    'get_config',
    'get_logger',
    'reset_config',
    'setup_logger',
]
