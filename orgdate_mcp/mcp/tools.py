"""
MCP Tools Module

This module defines all the tools available in the Org Date MCP server.
Tools are functions that Claude can call to turn date input into Org timestamps.
"""

from typing import Dict, Any, List, Optional

from mcp.server.fastmcp import FastMCP

from orgdate_mcp.utils.logger import get_logger
from orgdate_mcp.utils.config import get_config
from orgdate_mcp.timestamps import (
    Activity,
    Timestamp,
    get_name_tables,
    set_month_abbreviations,
    set_trace_enabled,
    set_weekday_abbreviations,
)
from orgdate_mcp.timestamps.models import BRACKETS
from orgdate_mcp.mcp.schemas import NameTablesInfo, TimestampInfo

# Get logger
logger = get_logger(__name__)

DATE_INPUT_HINT = (
    "Supported input: '.', '+4d', '-2w', '++5', '+2tue', '-wed', 'fri', "
    "'sep 15', '2018-9-5', '5.9.2018', '9/5/18', 'w4', '2012-w04-5', "
    "'14', '12:45', '11am-1:15pm', '11am+2:15'"
)


def resolve_activity(activity: Optional[str]) -> Activity:
    """
    Resolve the bracket style for unbracketed input.

    Args:
        activity: "active", "inactive" or "none". None falls back to the
            ``default_activity`` configuration value.

    Returns:
        Activity: The bracket style.

    Raises:
        ValueError: If an explicit activity is not one of the accepted values.
    """
    if activity is None:
        configured = str(get_config().get("default_activity") or "none").lower()
        if configured == "none":
            return Activity.UNMARKED
        try:
            return Activity(configured)
        except ValueError:
            logger.warning(f"Invalid default_activity '{configured}' in config, using none")
            return Activity.UNMARKED

    activity = activity.lower()
    if activity == "none":
        return Activity.UNMARKED
    return Activity(activity)


def apply_activity(timestamp: Timestamp, activity: Activity) -> Timestamp:
    """
    Put an unbracketed timestamp into <> or [] brackets.

    Timestamps that already carry brackets, or that have no date, are returned unchanged.
    """
    if activity not in BRACKETS or timestamp.activity != Activity.UNMARKED or timestamp.start is None:
        return timestamp
    opening, closing = BRACKETS[activity]
    return Timestamp.from_canonical(f"{opening}{timestamp.format()}{closing}", names=timestamp.names)


def setup_tools(mcp: FastMCP) -> None:
    """
    Set up all MCP tools on the FastMCP application.

    Args:
        mcp (FastMCP): The FastMCP application.
    """

    @mcp.tool()
    def parse_date_input(
        text: str,
        default_timestamp: Optional[str] = None,
        activity: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Turn terse date input into an Org timestamp.

        Accepts absolute dates ("sep 15", "2018-9-5", "9/5/18", "5.9.2018", "w4"),
        relative offsets ("+4d", "-2w", "+2tue", "."), offsets from a default
        timestamp ("++5", "--wed"), times ("10am", "11am-1:15pm", "11am+2:15")
        and canonical timestamps ("<2018-10-21 Sun 19:10 +1w>").

        Args:
            text (str): The date input.
            default_timestamp (str, optional): Timestamp that "++"/"--" offsets are relative to.
            activity (str, optional): "active", "inactive" or "none" brackets for unbracketed input.

        Returns:
            Dict[str, Any]: The canonical timestamp and its fields.
        """
        try:
            timestamp = Timestamp.parse(text, default=default_timestamp)
            timestamp = apply_activity(timestamp, resolve_activity(activity))
            if timestamp.start is None:
                return {
                    "success": False,
                    "error": f"Could not resolve a date from '{text}'",
                    "hint": DATE_INPUT_HINT,
                }
            return {"success": True, **TimestampInfo.from_timestamp(timestamp).model_dump()}
        except Exception as e:
            logger.error(f"Failed to parse date input '{text}': {e}")
            return {"success": False, "error": f"Failed to parse date input: {e}", "hint": DATE_INPUT_HINT}

    @mcp.tool()
    def describe_timestamp(timestamp: str) -> Dict[str, Any]:
        """
        Break a canonical Org timestamp into its fields.

        Args:
            timestamp (str): A timestamp such as "<2018-10-21 Sun 19:10 -2d>".

        Returns:
            Dict[str, Any]: Kind, activity, start/end moments, repeater and delay.
        """
        try:
            parsed = Timestamp.from_canonical(timestamp)
            if parsed.start is None:
                return {"success": False, "error": f"Not an Org timestamp: '{timestamp}'"}
            return {"success": True, **TimestampInfo.from_timestamp(parsed).model_dump()}
        except Exception as e:
            logger.error(f"Failed to describe timestamp '{timestamp}': {e}")
            return {"success": False, "error": f"Failed to describe timestamp: {e}"}

    @mcp.tool()
    def adjust_timestamp(timestamp: str, amount: int, unit: str = "d") -> Dict[str, Any]:
        """
        Shift a timestamp by a number of units.

        Args:
            timestamp (str): The timestamp to shift, canonical or free-form.
            amount (int): Signed number of units.
            unit (str): "h", "d", "w", "m", "y", or a weekday name to move to
                the n-th such weekday ("fri").

        Returns:
            Dict[str, Any]: The shifted timestamp and its fields.
        """
        try:
            parsed = Timestamp.parse(timestamp)
            if parsed.start is None:
                return {"success": False, "error": f"Not an Org timestamp: '{timestamp}'"}
            parsed.adjust(amount, unit)
            return {"success": True, **TimestampInfo.from_timestamp(parsed).model_dump()}
        except Exception as e:
            logger.error(f"Failed to adjust timestamp '{timestamp}': {e}")
            return {"success": False, "error": f"Failed to adjust timestamp: {e}"}

    @mcp.tool()
    def set_weekday_names(names: Optional[List[str]] = None) -> Dict[str, Any]:
        """
        Replace the weekday abbreviations used for parsing and formatting.

        Args:
            names (List[str], optional): Seven names starting with Sunday.
                Anything else restores the English names.

        Returns:
            Dict[str, Any]: The name tables now in use.
        """
        set_weekday_abbreviations(names)
        tables = get_name_tables()
        logger.info(f"Weekday names set to {list(tables.weekdays)}")
        return {"success": True, **NameTablesInfo.from_tables(tables).model_dump()}

    @mcp.tool()
    def set_month_names(names: Optional[List[str]] = None) -> Dict[str, Any]:
        """
        Replace the month abbreviations used for parsing.

        Args:
            names (List[str], optional): Twelve names starting with January.
                Anything else restores the English names.

        Returns:
            Dict[str, Any]: The name tables now in use.
        """
        set_month_abbreviations(names)
        tables = get_name_tables()
        logger.info(f"Month names set to {list(tables.months)}")
        return {"success": True, **NameTablesInfo.from_tables(tables).model_dump()}

    @mcp.tool()
    def set_trace(enabled: bool) -> Dict[str, Any]:
        """
        Turn logging of matched date grammars on or off.

        Args:
            enabled (bool): Whether to log each grammar match.

        Returns:
            Dict[str, Any]: The new trace state.
        """
        set_trace_enabled(enabled)
        return {"success": True, "trace": enabled}

    logger.info("Org date tools registered successfully")
