#!/usr/bin/env python3
"""
Org Date MCP Server

This module provides the main entry point for the Org Date MCP server.
"""

import os
import sys
import traceback
from typing import Any, Dict

from mcp.server.fastmcp import FastMCP

from orgdate_mcp.utils.logger import get_logger, setup_logger
from orgdate_mcp.utils.config import get_config
from orgdate_mcp.timestamps import (
    set_month_abbreviations,
    set_trace_enabled,
    set_weekday_abbreviations,
)
from orgdate_mcp.mcp.tools import setup_tools
from orgdate_mcp.mcp.resources import setup_resources

# Setup logger for the whole package
setup_logger("orgdate_mcp")
logger = get_logger(__name__)


def apply_config(config: Dict[str, Any]) -> None:
    """
    Apply the configured name tables and trace flag.

    Args:
        config (Dict[str, Any]): The application configuration.
    """
    weekdays = config.get("weekday_abbreviations")
    if weekdays is not None:
        if len(weekdays) != 7:
            logger.warning(f"weekday_abbreviations needs 7 names, got {len(weekdays)}; using English")
        set_weekday_abbreviations(weekdays)

    months = config.get("month_abbreviations")
    if months is not None:
        if len(months) != 12:
            logger.warning(f"month_abbreviations needs 12 names, got {len(months)}; using English")
        set_month_abbreviations(months)

    set_trace_enabled(bool(config.get("trace", False)))


def create_app() -> FastMCP:
    """
    Create the FastMCP application with all tools and resources.

    Returns:
        FastMCP: The configured application.
    """
    apply_config(get_config())
    app = FastMCP(
        name=os.getenv("MCP_SERVER_NAME", "Org Date MCP"),
    )
    setup_tools(app)
    setup_resources(app)
    return app


def main() -> None:
    """
    Main entry point for the Org Date MCP server.
    """
    try:
        mcp = create_app()
        logger.info("Starting MCP server")
        mcp.run()
    except Exception as e:
        logger.error(f"Error running MCP server: {e}")
        logger.error(traceback.format_exc())
        sys.exit(1)


if __name__ == "__main__":
    main()
