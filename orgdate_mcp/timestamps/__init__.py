"""
Org Timestamps Module

Parses terse date input ("+4d", "sep 15", "fri 10am", "++wed") and canonical
Org timestamps, adjusts them, and renders them back in canonical form.
"""

from orgdate_mcp.timestamps.grammars import set_trace_enabled, is_trace_enabled
from orgdate_mcp.timestamps.models import Activity, TimeOffset, TimestampKind
from orgdate_mcp.timestamps.names import (
    DEFAULT_MONTHS,
    DEFAULT_WEEKDAYS,
    NameTables,
    get_name_tables,
    set_month_abbreviations,
    set_weekday_abbreviations,
)
from orgdate_mcp.timestamps.timestamp import Timestamp, parse_and_format

__all__ = [
    'Activity',
    'DEFAULT_MONTHS',
    'DEFAULT_WEEKDAYS',
    'NameTables',
    'TimeOffset',
    'Timestamp',
    'TimestampKind',
    'get_name_tables',
    'is_trace_enabled',
    'parse_and_format',
    'set_month_abbreviations',
    'set_trace_enabled',
    'set_weekday_abbreviations',
]
