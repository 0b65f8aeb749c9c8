"""
MCP Schemas Module

This module defines the schemas used by the MCP tools and resources.
"""

from typing import List, Optional
from datetime import datetime
from pydantic import BaseModel, field_serializer

from orgdate_mcp.timestamps import NameTables, TimeOffset, Timestamp


class TimeOffsetInfo(BaseModel):
    """
    Schema for a repeater or warning delay.
    """
    magnitude: int = 0
    unit: str = ""
    text: str = ""

    @classmethod
    def from_offset(cls, offset: TimeOffset) -> "TimeOffsetInfo":
        return cls(magnitude=offset.magnitude, unit=offset.unit, text=str(offset).strip())


class TimestampInfo(BaseModel):
    """
    Schema for a parsed timestamp.

    This schema describes every field of a Timestamp so that callers do not
    have to parse the canonical text themselves.
    """
    timestamp: str
    kind: str
    activity: str
    start: Optional[datetime] = None
    end: Optional[datetime] = None
    repeater: Optional[TimeOffsetInfo] = None
    delay: Optional[TimeOffsetInfo] = None

    @field_serializer("start", "end")
    def serialize_datetime(self, value: Optional[datetime]) -> Optional[str]:
        """Serialize datetime fields to ISO format."""
        return value.isoformat() if value else None

    @classmethod
    def from_timestamp(cls, timestamp: Timestamp) -> "TimestampInfo":
        """
        Build the schema from a Timestamp.

        Args:
            timestamp: The timestamp to describe.

        Returns:
            TimestampInfo: The description.
        """
        return cls(
            timestamp=timestamp.format(),
            kind=timestamp.kind.name.lower(),
            activity=timestamp.activity.value,
            start=timestamp.start,
            end=timestamp.end,
            repeater=TimeOffsetInfo.from_offset(timestamp.repeater) if timestamp.repeater.is_set() else None,
            delay=TimeOffsetInfo.from_offset(timestamp.delay) if timestamp.delay.is_set() else None,
        )


class NameTablesInfo(BaseModel):
    """
    Schema for the weekday and month name tables.
    """
    weekdays: List[str]
    months: List[str]

    @classmethod
    def from_tables(cls, tables: NameTables) -> "NameTablesInfo":
        return cls(weekdays=list(tables.weekdays), months=list(tables.months))
