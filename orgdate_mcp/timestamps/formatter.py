"""
Rendering of timestamps in canonical Org form.

    <2003-09-16 Tue>
    <2003-09-16 Tue 09:39>
    <2003-09-16 Tue 12:00-12:30>
    <2007-05-16 Wed 12:30 +1w -2d>
    [2018-10-21 Sun]--[2018-10-24 Wed]
"""

from datetime import datetime
from typing import TYPE_CHECKING, Optional

from orgdate_mcp.timestamps.arithmetic import sunday_based_weekday
from orgdate_mcp.timestamps.models import BRACKETS, RANGE_KINDS, Activity, TimestampKind
from orgdate_mcp.timestamps.names import NameTables, get_name_tables

if TYPE_CHECKING:
    from orgdate_mcp.timestamps.timestamp import Timestamp

DATE_ONLY_KINDS = (TimestampKind.DATE, TimestampKind.DATE_RANGE)


def format_date(moment: datetime, names: NameTables) -> str:
    return (
        f"{moment.year:04d}-{moment.month:02d}-{moment.day:02d} "
        f"{names.weekday_name(sunday_based_weekday(moment))}"
    )


def format_time(moment: datetime) -> str:
    return f"{moment.hour:02d}:{moment.minute:02d}"


def wrap_brackets(text: str, activity: Activity) -> str:
    """Surround text with <> or [] according to the activity marker."""
    if activity not in BRACKETS:
        return text
    opening, closing = BRACKETS[activity]
    return f"{opening}{text}{closing}"


def format_timestamp(timestamp: "Timestamp", names: Optional[NameTables] = None) -> str:
    """
    Render a timestamp in canonical form.

    Args:
        timestamp: The timestamp to render.
        names: Name tables for the weekday abbreviation. Defaults to the process-wide tables.

    Returns:
        str: The canonical text, or "" if the timestamp has no start moment.
    """
    start = timestamp.start
    if start is None:
        return ""
    names = names or get_name_tables()
    kind = timestamp.kind

    result = format_date(start, names)
    if kind not in DATE_ONLY_KINDS:
        result += " " + format_time(start)
    if kind == TimestampKind.DIARY:
        result += "-" + format_time(timestamp.end)
    else:
        result += str(timestamp.repeater) + str(timestamp.delay)
    result = wrap_brackets(result, timestamp.activity)

    if kind in RANGE_KINDS:
        end = timestamp.end
        second = format_date(end, names)
        if kind == TimestampKind.DATE_TIME_RANGE:
            second += " " + format_time(end)
        result += "--" + wrap_brackets(second, timestamp.activity)
    return result
