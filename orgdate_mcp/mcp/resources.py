"""
MCP Resources Module

This module defines the resources available in the Org Date MCP server.
Resources are data that Claude can access to get context.
"""

from typing import Dict, Any

from mcp.server.fastmcp import FastMCP

from orgdate_mcp.utils.logger import get_logger
from orgdate_mcp.timestamps import Timestamp, get_name_tables, is_trace_enabled
from orgdate_mcp.mcp.schemas import NameTablesInfo, TimestampInfo

# Get logger
logger = get_logger(__name__)


def setup_resources(mcp: FastMCP) -> None:
    """
    Set up all MCP resources on the FastMCP application.

    Args:
        mcp (FastMCP): The FastMCP application.
    """

    @mcp.resource("orgdate://names")
    def name_tables() -> Dict[str, Any]:
        """
        Get the weekday and month names used for parsing and formatting.

        Returns:
            Dict[str, Any]: Weekday names (starting with Sunday) and month names.
        """
        return NameTablesInfo.from_tables(get_name_tables()).model_dump()

    @mcp.resource("orgdate://today")
    def today() -> Dict[str, Any]:
        """
        Get today's date as an Org timestamp.

        Returns:
            Dict[str, Any]: Today's timestamp and the current trace setting.
        """
        return {
            **TimestampInfo.from_timestamp(Timestamp()).model_dump(),
            "trace": is_trace_enabled(),
        }

    logger.info("Org date resources registered successfully")
