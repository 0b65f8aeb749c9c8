"""
Value types shared by the timestamp parser and formatter.
"""

from dataclasses import dataclass
from enum import Enum, IntEnum

UNIT_CODES = ("h", "d", "w", "m", "y")


class TimestampKind(IntEnum):
    """Which fields of a Timestamp are meaningful."""
    DATE = 0
    DATE_TIME = 1
    DIARY = 2            # same-day start/end time, e.g. 12:00-12:30
    DATE_RANGE = 3
    DATE_TIME_RANGE = 4


class Activity(Enum):
    """Bracket marker of a timestamp."""
    UNMARKED = "unmarked"
    ACTIVE = "active"        # <...>
    INACTIVE = "inactive"    # [...]


OPEN_BRACKETS = {"<": Activity.ACTIVE, "[": Activity.INACTIVE}
BRACKETS = {Activity.ACTIVE: ("<", ">"), Activity.INACTIVE: ("[", "]")}

RANGE_KINDS = (TimestampKind.DATE_RANGE, TimestampKind.DATE_TIME_RANGE)
TWO_MOMENT_KINDS = (TimestampKind.DIARY,) + RANGE_KINDS


@dataclass
class TimeOffset:
    """
    A signed interval such as the repeater ``+1w`` or the warning delay ``-2d``.

    A repeater has a positive magnitude and a delay a negative one; zero means unset.
    """
    magnitude: int = 0
    unit: str = ""

    def is_set(self) -> bool:
        return self.magnitude != 0

    def is_delay(self) -> bool:
        return self.magnitude < 0

    def __str__(self) -> str:
        if not self.is_set():
            return ""
        return f" {self.magnitude:+d}{self.unit}"
