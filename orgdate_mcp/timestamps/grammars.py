"""
Grammars for Org-style date input.

Every matcher is a pure function over the not-yet-consumed text. It either
returns None or a match object telling how many characters it consumed and
what it extracted; the Timestamp decides what to do with the result.

Free-form input examples, assuming today is June 13, 2006:
- 3-2-5         => 2003-02-05
- 2/5/3         => 2003-02-05
- 14            => 2006-06-14
- 12            => 2006-07-12
- 2/5           => 2007-02-05
- fri           => nearest Friday after today
- sep 15        => 2006-09-15
- feb 15        => 2007-02-15
- sep 12 9      => 2009-09-12
- 12:45         => 2006-06-13 12:45
- w4            => ISO week four of 2006
- 2012-w04-5    => Friday of ISO week 4 in 2012
- 11am-1:15pm   => 11:00-13:15 on today's date
- 11am+2:15     => same as above
- +4d, +4       => four days from today
- ++5           => five days from the default date
- +2tue         => second Tuesday from now
- -wed          => last Wednesday
"""

import re
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from orgdate_mcp.timestamps.models import TimeOffset
from orgdate_mcp.timestamps.names import NameTables
from orgdate_mcp.utils.logger import get_logger

logger = get_logger(__name__)

# Free-form date grammars
ISO_WEEK_PATTERN = re.compile(r'^(?:([0-9]+)-)?[wW]([0-9]{1,2})(?:-([0-6]))?(?:[ \t]|$)')
ISO_DATE_PATTERN = re.compile(r'^(?:([0-9]+)-)?([0-1]?[0-9])-([0-3]?[0-9])(?![-0-9])')
EU_DATE_PATTERN = re.compile(r'^(3[01]|0?[1-9]|[12][0-9])\. ?(0?[1-9]|1[012])\.(?: ?([1-9][0-9]{3}))?')
US_DATE_PATTERN = re.compile(r'^(0?[1-9]|1[012])/(0?[1-9]|[12][0-9]|3[01])(?:/([0-9]+))?(?![/0-9])')
MONTH_DAY_YEAR_PATTERN = re.compile(r'^([^-+\s\d.]+)(?: (\d{1,2}))?(?: (\d{1,4}))?(?:[ \t]|$)')
DAY_PATTERN = re.compile(r'^([0-3]?[0-9])(?=\s|$)')
WORD_PATTERN = re.compile(r'^[^-+\s\d.]+(?=\s|$)')

# Clock times: 24-hour or am/pm
TIME_OF_DAY_PATTERN = re.compile(r'^([012]?[0-9])(?::([0-5][0-9]))?(am|pm)?(?=[-+\s]|$)', re.IGNORECASE)

# Relative offsets: sign run, magnitude, unit letter or weekday name
RELATIVE_PATTERN = re.compile(r'^(\+{1,2}|-{1,2})?([0-9]+)?([^\W\d_]*)$')

# Canonical timestamp parts. The weekday word is kept as text, never checked against the date.
CANONICAL_DATE_PATTERN = re.compile(r'^(\d{4})-(\d{2})-(\d{2})(?: ([^-+\s\d>\]]+))?')
CANONICAL_TIME_PATTERN = re.compile(r'^([012]?[0-9]):([0-5][0-9])')
REPEATER_PATTERN = re.compile(r'^(\+{0,2})([0-9]+)?([hdwmy])')
DELAY_PATTERN = re.compile(r'^(-{1,2})([0-9]+)?([hdwmy])')

_trace_enabled = False


def set_trace_enabled(enabled: bool) -> None:
    """Log which grammar matched each input."""
    global _trace_enabled
    _trace_enabled = bool(enabled)


def is_trace_enabled() -> bool:
    return _trace_enabled


def trace_match(grammar: str, text: str) -> None:
    if _trace_enabled:
        logger.info(f"Grammar '{grammar}' matched '{text}'")


@dataclass
class DateMatch:
    """
    Result of a date grammar.

    Free-form grammars fill in exactly one way of fixing the date: an ISO week
    (``week``), a weekday name to advance to (``weekday_token``), or
    year/month/day parts where year and month may be missing. Canonical
    matches carry all three date parts plus the weekday word as written.
    """
    consumed: int
    year: Optional[int] = None
    month: Optional[int] = None
    day: Optional[int] = None
    week: Optional[int] = None
    week_day: int = 1
    weekday_token: Optional[str] = None


@dataclass
class TimeOfDayMatch:
    """A clock time, optionally with an end time. End hours may run past 23."""
    consumed: int
    hour: int
    minute: int
    end_hour: Optional[int] = None
    end_minute: Optional[int] = None

    @property
    def has_end(self) -> bool:
        return self.end_hour is not None


@dataclass
class RelativeMatch:
    """A relative offset such as ``+4d``, ``--wed`` or ``.``."""
    from_default: bool
    amount: int
    unit: str


def _optional_int(value: Optional[str]) -> Optional[int]:
    return int(value) if value else None


def match_iso_week(text: str, names: NameTables) -> Optional[DateMatch]:
    match = ISO_WEEK_PATTERN.match(text)
    if not match:
        return None
    year, week, week_day = match.groups()
    return DateMatch(
        consumed=match.end(),
        year=_optional_int(year),
        week=int(week),
        week_day=int(week_day) if week_day else 1,
    )


def match_iso_date(text: str, names: NameTables) -> Optional[DateMatch]:
    match = ISO_DATE_PATTERN.match(text)
    if not match:
        return None
    year, month, day = match.groups()
    return DateMatch(match.end(), year=_optional_int(year), month=int(month), day=int(day))


def match_european_date(text: str, names: NameTables) -> Optional[DateMatch]:
    match = EU_DATE_PATTERN.match(text)
    if not match:
        return None
    day, month, year = match.groups()
    return DateMatch(match.end(), year=_optional_int(year), month=int(month), day=int(day))


def match_american_date(text: str, names: NameTables) -> Optional[DateMatch]:
    match = US_DATE_PATTERN.match(text)
    if not match:
        return None
    month, day, year = match.groups()
    return DateMatch(match.end(), year=_optional_int(year), month=int(month), day=int(day))


def match_month_day_year(text: str, names: NameTables) -> Optional[DateMatch]:
    """
    Match "sep 15", "sep 12 9", or a lone weekday name like "fri".

    A token that is not a month and comes without day or year is taken as a
    weekday name. A month without a day means the first of that month.
    """
    match = MONTH_DAY_YEAR_PATTERN.match(text)
    if not match:
        return None
    token, day, year = match.groups()
    month = names.month_number(token)
    if month is None and day is None and year is None:
        return DateMatch(match.end(), weekday_token=token)
    return DateMatch(
        match.end(),
        year=_optional_int(year),
        month=month,
        day=int(day) if day else 1,
    )


def match_day(text: str, names: NameTables) -> Optional[DateMatch]:
    match = DAY_PATTERN.match(text)
    if not match:
        return None
    return DateMatch(match.end(), day=int(match.group(1)))


# Tried in order; the first grammar that matches fixes the date.
ABSOLUTE_GRAMMARS: List[Tuple[str, Callable[[str, NameTables], Optional[DateMatch]]]] = [
    ("iso-week", match_iso_week),
    ("iso-date", match_iso_date),
    ("european-date", match_european_date),
    ("american-date", match_american_date),
    ("month-day-year", match_month_day_year),
    ("day", match_day),
]


def match_absolute_date(text: str, names: NameTables) -> Optional[DateMatch]:
    """
    Run the absolute date grammars in priority order.

    Returns:
        The first match, or None if no grammar applies.
    """
    for name, grammar in ABSOLUTE_GRAMMARS:
        result = grammar(text, names)
        if result is not None:
            trace_match(name, text)
            return result
    return None


def match_weekday_word(text: str, names: NameTables) -> int:
    """
    Match a weekday name written after a date, as in "2018-10-21 Sun 10am".

    Returns:
        Characters consumed, or 0 if the next word is not in the weekday table.
    """
    match = WORD_PATTERN.match(text)
    if not match or names.weekday_index(match.group(0)) is None:
        return 0
    return match.end()


def _match_clock(text: str, twelve_hour: bool = True) -> Optional[Tuple[int, int, int]]:
    """
    Match a single clock time.

    Returns:
        (hour, minute, consumed) or None. With ``twelve_hour`` the am/pm rules
        apply: 12 without pm is midnight, pm adds 12 to earlier hours.
    """
    match = TIME_OF_DAY_PATTERN.match(text)
    if not match:
        return None
    hour = int(match.group(1))
    minute = int(match.group(2)) if match.group(2) else 0
    if twelve_hour:
        pm = (match.group(3) or "").lower() == "pm"
        if not pm and hour == 12:
            hour = 0
        elif pm and hour < 12:
            hour += 12
    return hour, minute, match.end()


def match_time_of_day(text: str) -> Optional[TimeOfDayMatch]:
    """
    Match "12:45", "11am", "11am-1:15pm", "11am--1:15pm" or "11am+2:15".

    After ``-`` the second time is the end time; after ``+`` it is a duration
    added to the start.
    """
    first = _match_clock(text)
    if first is None:
        return None
    hour, minute, consumed = first
    result = TimeOfDayMatch(consumed, hour, minute)

    rest = text[consumed:]
    if not rest.startswith(("-", "+")):
        return result
    is_duration = rest.startswith("+")
    skip = 2 if rest.startswith("--") else 1
    second = _match_clock(rest[skip:], twelve_hour=not is_duration)
    if second is None:
        return result

    end_hour, end_minute, used = second
    if is_duration:
        end_hour += hour
        end_minute += minute
        if end_minute >= 60:
            end_hour += 1
            end_minute -= 60
    result.end_hour = end_hour
    result.end_minute = end_minute
    result.consumed += skip + used
    return result


def match_relative(text: str) -> Optional[RelativeMatch]:
    """
    Match a relative offset covering the whole text.

    ``.`` is today. A missing magnitude is 1 and a missing unit is days; a
    double sign means the offset is taken from the default timestamp.
    """
    if text == ".":
        return RelativeMatch(from_default=False, amount=0, unit="d")
    if not text:
        return None
    match = RELATIVE_PATTERN.match(text)
    if not match:
        return None
    sign, digits, unit = match.groups()
    sign = sign or ""
    amount = int(digits) if digits else 1
    if sign.startswith("-"):
        amount = -amount
    return RelativeMatch(from_default=len(sign) == 2, amount=amount, unit=unit or "d")


def match_canonical_date(text: str) -> Optional[DateMatch]:
    """
    Match ``YYYY-MM-DD`` with an optional weekday word.

    The word, if any, is kept in ``weekday_token``.
    """
    match = CANONICAL_DATE_PATTERN.match(text)
    if not match:
        return None
    year, month, day, weekday = match.groups()
    return DateMatch(match.end(), year=int(year), month=int(month), day=int(day), weekday_token=weekday)


def match_canonical_time(text: str) -> Optional[Tuple[int, int, int]]:
    """
    Match ``HH:MM``.

    Returns:
        (hour, minute, consumed) or None.
    """
    match = CANONICAL_TIME_PATTERN.match(text)
    if not match:
        return None
    return int(match.group(1)), int(match.group(2)), match.end()


def match_repeater(text: str) -> Optional[Tuple[TimeOffset, int]]:
    """
    Match a repeater such as ``+1w`` or ``++2d``.

    Returns:
        (offset, consumed) or None. The magnitude defaults to 1.
    """
    match = REPEATER_PATTERN.match(text)
    if not match:
        return None
    magnitude = int(match.group(2)) if match.group(2) else 1
    return TimeOffset(magnitude, match.group(3)), match.end()


def match_delay(text: str) -> Optional[Tuple[TimeOffset, int]]:
    """
    Match a warning delay such as ``-2d`` or ``--1w``.

    Returns:
        (offset, consumed) or None. The stored magnitude is negative and defaults to -1.
    """
    match = DELAY_PATTERN.match(text)
    if not match:
        return None
    magnitude = int(match.group(2)) if match.group(2) else 1
    return TimeOffset(-magnitude, match.group(3)), match.end()
