"""
Weekday and month name tables.

The tables are used for matching weekday/month tokens in user input and for the
weekday abbreviation in rendered timestamps. They are immutable values; the
process-wide current table is swapped as a whole, so a parse that grabbed the
table once never sees a half-updated one.
"""

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

DEFAULT_WEEKDAYS: Tuple[str, ...] = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")
DEFAULT_MONTHS: Tuple[str, ...] = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


@dataclass(frozen=True)
class NameTables:
    """
    Weekday abbreviations (index 0 is Sunday) and month abbreviations (index 0 is January).
    """
    weekdays: Tuple[str, ...] = DEFAULT_WEEKDAYS
    months: Tuple[str, ...] = DEFAULT_MONTHS

    def weekday_index(self, token: str) -> Optional[int]:
        """
        Look up a weekday token, case-insensitively.

        Args:
            token: The token typed by the user, e.g. "wed".

        Returns:
            Index into the weekday table (0 = Sunday), or None if not found.
        """
        lower = token.lower()
        for index, name in enumerate(self.weekdays):
            if name.lower() == lower:
                return index
        return None

    def month_number(self, token: str) -> Optional[int]:
        """
        Look up a month token, case-insensitively.

        Returns:
            Month number 1-12, or None if not found.
        """
        lower = token.lower()
        for index, name in enumerate(self.months):
            if name.lower() == lower:
                return index + 1
        return None

    def weekday_name(self, sunday_based_index: int) -> str:
        return self.weekdays[sunday_based_index % 7]


_current = NameTables()


def get_name_tables() -> NameTables:
    """Get the process-wide name tables."""
    return _current


def set_weekday_abbreviations(names: Optional[Sequence[str]]) -> None:
    """
    Replace the process-wide weekday table.

    Args:
        names: Seven names starting with Sunday. Anything else restores the English defaults.
    """
    global _current
    if names is not None and len(names) == 7:
        _current = NameTables(weekdays=tuple(names), months=_current.months)
    else:
        _current = NameTables(weekdays=DEFAULT_WEEKDAYS, months=_current.months)


def set_month_abbreviations(names: Optional[Sequence[str]]) -> None:
    """
    Replace the process-wide month table.

    Args:
        names: Twelve names starting with January. Anything else restores the English defaults.
    """
    global _current
    if names is not None and len(names) == 12:
        _current = NameTables(weekdays=_current.weekdays, months=tuple(names))
    else:
        _current = NameTables(weekdays=_current.weekdays, months=DEFAULT_MONTHS)
