"""
Date arithmetic for timestamps.

Covers the unit offsets (hours, days, weeks, months, years), the "n-th weekday
after/before" jump, and the completion policy that fills in the year and month
a user left out so that the resulting date is never in the past.
"""

from datetime import datetime, timedelta
from typing import Optional, Union

from dateutil.relativedelta import relativedelta

from orgdate_mcp.timestamps.models import UNIT_CODES
from orgdate_mcp.timestamps.names import NameTables

Delta = Union[timedelta, relativedelta]

# Two-digit years below the pivot belong to this century, the rest to the last one
YEAR_PIVOT = 38


def sunday_based_weekday(moment: datetime) -> int:
    """Weekday of a datetime with Sunday as 0, matching the weekday table order."""
    return (moment.weekday() + 1) % 7


def expand_year(year: int) -> int:
    """
    Expand a partial year.

    Examples:
        >>> expand_year(18)
        2018
        >>> expand_year(69)
        1969
        >>> expand_year(2012)
        2012
    """
    if year < YEAR_PIVOT:
        return 2000 + year
    if year < 100:
        return 1900 + year
    return year


def build_date(year: int, month: int, day: int) -> datetime:
    """
    Build a midnight datetime, letting out-of-range months and days overflow.

    ``build_date(2018, 2, 30)`` is March 2nd and ``build_date(2018, 13, 1)`` is
    January 1st 2019, the way a calendar counts forward.

    Raises:
        ValueError, OverflowError: If the year leaves the range datetime supports.
    """
    return datetime(year, 1, 1) + relativedelta(months=month - 1) + timedelta(days=day - 1)


def complete_date(
    year: Optional[int],
    month: Optional[int],
    day: int,
    today: datetime,
) -> datetime:
    """
    Turn possibly partial date parts into a date.

    Args:
        year: Year as typed (two-digit years are expanded), or None.
        month: Month 1-12, or None.
        day: Day of month.
        today: Reference date for the missing parts.

    Returns:
        Midnight datetime. When the year is missing the date is moved forward
        rather than landing before ``today``.
    """
    if year is not None and month is not None:
        return build_date(expand_year(year), month, day)

    if month is None:
        full_year = expand_year(year) if year is not None else today.year
        month = today.month
        if year is None and day < today.day:
            month += 1
        return build_date(full_year, month, day)

    full_year = today.year
    if (month, day) < (today.month, today.day):
        full_year += 1
    return build_date(full_year, month, day)


def iso_week_date(year: Optional[int], week: int, weekday: int, today: datetime) -> datetime:
    """
    Resolve a week date such as ``2012-w04-5``.

    Args:
        year: Year, or None for the current year.
        week: Week number, 1-based.
        weekday: 0 (Sunday) to 6 (Saturday).
        today: Reference date for the missing year.
    """
    full_year = expand_year(year) if year is not None else today.year
    jan1 = datetime(full_year, 1, 1)
    return jan1 + timedelta(days=weekday - sunday_based_weekday(jan1) + (week - 1) * 7)


def weekday_steps(current: int, target: int, n: int) -> int:
    """
    Days to move from weekday ``current`` to the n-th ``target`` weekday.

    Positive ``n`` counts occurrences strictly after the current day, negative
    ``n`` strictly before it. Both weekdays are indexes into the weekday table,
    so 0 is a valid target.
    """
    if n > 0:
        return n * 7 - (current - target) % 7
    if n < 0:
        return n * 7 + (target - current) % 7
    return 0


def unit_delta(n: int, unit: str) -> Optional[Delta]:
    """Offset for ``n`` units of one of h/d/w/m/y, or None for any other unit."""
    if unit == "h":
        return timedelta(hours=n)
    if unit == "d":
        return timedelta(days=n)
    if unit == "w":
        return timedelta(weeks=n)
    if unit == "m":
        return relativedelta(months=n)
    if unit == "y":
        return relativedelta(years=n)
    return None


def resolve_offset(moment: datetime, n: int, unit: Optional[str], names: NameTables) -> Optional[Delta]:
    """
    Work out how far ``adjust(n, unit)`` moves a timestamp whose start is ``moment``.

    Args:
        moment: Start of the timestamp; weekday jumps are measured from it.
        n: Signed count.
        unit: One of h/d/w/m/y or a weekday name from ``names``. Empty means days.
        names: Weekday table for the weekday lookup.

    Returns:
        The offset to add to every moment of the timestamp, or None if nothing moves.
    """
    if n == 0:
        return None
    unit = (unit or "d").lower()
    if unit in UNIT_CODES:
        return unit_delta(n, unit)
    return weekday_offset(moment, n, unit, names)


def weekday_offset(moment: datetime, n: int, token: str, names: NameTables) -> Optional[timedelta]:
    """
    Offset from ``moment`` to the n-th weekday named ``token``.

    Returns:
        None if ``token`` is not in the weekday table or ``n`` is 0.
    """
    target = names.weekday_index(token)
    if target is None or n == 0:
        return None
    return timedelta(days=weekday_steps(sunday_based_weekday(moment), target, n))
