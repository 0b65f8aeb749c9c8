"""
Org-mode timestamps.

A Timestamp is built either by re-hydrating its canonical text
(``<2018-10-21 Sun 19:10 +1w -2d>``) or by parsing terse user input
(``+4d``, ``sep 15``, ``fri 10am``, ``++wed``). Parsing never raises: input
that matches nothing leaves the timestamp at today.
"""

from datetime import date, datetime, timedelta
from typing import Optional, Union

from orgdate_mcp.timestamps.arithmetic import (
    Delta,
    build_date,
    complete_date,
    iso_week_date,
    resolve_offset,
    weekday_offset,
)
from orgdate_mcp.timestamps.formatter import format_timestamp
from orgdate_mcp.timestamps.grammars import (
    DateMatch,
    TimeOfDayMatch,
    match_absolute_date,
    match_canonical_date,
    match_canonical_time,
    match_delay,
    match_relative,
    match_repeater,
    match_time_of_day,
    match_weekday_word,
    trace_match,
)
from orgdate_mcp.timestamps.models import (
    BRACKETS,
    OPEN_BRACKETS,
    TWO_MOMENT_KINDS,
    Activity,
    TimeOffset,
    TimestampKind,
)
from orgdate_mcp.timestamps.names import NameTables, get_name_tables
from orgdate_mcp.utils.logger import get_logger

logger = get_logger(__name__)

BaseDate = Union[date, datetime]

# An hour offset gives date-only kinds a time of day
_WITH_TIME = {
    TimestampKind.DATE: TimestampKind.DATE_TIME,
    TimestampKind.DATE_RANGE: TimestampKind.DATE_TIME_RANGE,
}


def _midnight(base_date: Optional[BaseDate] = None) -> datetime:
    base = base_date or datetime.now()
    return datetime(base.year, base.month, base.day)


def _at_clock(moment: datetime, hour: int, minute: int) -> datetime:
    # Hours past 23 roll over into the next day
    return _midnight(moment) + timedelta(hours=hour, minutes=minute)


class Timestamp:
    """
    A parsed Org timestamp.

    Holds the start moment, the optional second moment (end of a diary time
    range or of a date range), the kind, the bracket marker, and the
    repeater and warning delay.
    """

    def __init__(self, base_date: Optional[BaseDate] = None, names: Optional[NameTables] = None) -> None:
        """
        Create a timestamp for today.

        Args:
            base_date: The date to treat as today. Defaults to the current date.
            names: Name tables used for parsing and formatting. Defaults to the process-wide tables.
        """
        self._names = names or get_name_tables()
        self._base_date = base_date
        self._moment: Optional[datetime] = _midnight(base_date)
        self._moment2: Optional[datetime] = None
        self._kind = TimestampKind.DATE
        self._activity = Activity.UNMARKED
        self._repeat = TimeOffset()
        self._delay = TimeOffset()

    @classmethod
    def parse(
        cls,
        text: Optional[str],
        default: Optional[str] = None,
        base_date: Optional[BaseDate] = None,
        names: Optional[NameTables] = None,
    ) -> "Timestamp":
        """
        Parse canonical or free-form text.

        Bracketed text is always read as a canonical timestamp. Unbracketed
        text is read as canonical when it carries the weekday word after the
        date and the canonical grammar accounts for all of it, and as user
        input otherwise, so "2018-10-29 12:30" follows the same clock rules
        as "12:30".

        Args:
            text: The text to parse.
            default: Canonical timestamp that ``++``/``--`` offsets are relative to.
            base_date: The date to treat as today.
            names: Name tables. Defaults to the process-wide tables.

        Returns:
            Timestamp: The parsed timestamp.
        """
        text = (text or "").strip()
        names = names or get_name_tables()
        if text[:1] in OPEN_BRACKETS:
            return cls.from_canonical(text, base_date=base_date, names=names)

        date_match = match_canonical_date(text)
        if date_match is not None and date_match.weekday_token is not None:
            timestamp = cls(base_date, names)
            if timestamp._read_canonical(text) == "":
                return timestamp
        return cls.from_input(text, default=default, base_date=base_date, names=names)

    @classmethod
    def from_canonical(
        cls,
        text: Optional[str],
        base_date: Optional[BaseDate] = None,
        names: Optional[NameTables] = None,
    ) -> "Timestamp":
        """
        Re-hydrate a timestamp from its canonical text.

        If the text does not start with a ``YYYY-MM-DD`` date (after an
        optional bracket) the result has no start moment and formats as "".
        """
        timestamp = cls(base_date, names)
        timestamp._read_canonical((text or "").strip())
        return timestamp

    @classmethod
    def from_input(
        cls,
        text: Optional[str],
        default: Optional[str] = None,
        base_date: Optional[BaseDate] = None,
        names: Optional[NameTables] = None,
    ) -> "Timestamp":
        """
        Parse terse user input such as ``sep 15 10am``, ``+2w`` or ``++fri``.

        Args:
            text: The user's input.
            default: Timestamp text that double-sign offsets are relative to.
                Without it they are relative to today.
            base_date: The date to treat as today.
            names: Name tables. Defaults to the process-wide tables.
        """
        timestamp = cls(base_date, names)
        timestamp._read_input((text or "").strip(), default)
        return timestamp

    # Accessors

    @property
    def start(self) -> Optional[datetime]:
        return self._moment

    @property
    def end(self) -> Optional[datetime]:
        return self._moment2

    @property
    def kind(self) -> TimestampKind:
        return self._kind

    @property
    def activity(self) -> Activity:
        return self._activity

    @property
    def repeater(self) -> TimeOffset:
        return self._repeat

    @property
    def delay(self) -> TimeOffset:
        return self._delay

    @property
    def names(self) -> NameTables:
        return self._names

    def is_active(self) -> bool:
        return self._activity == Activity.ACTIVE

    def is_inactive(self) -> bool:
        return self._activity == Activity.INACTIVE

    # Arithmetic

    def adjust(self, n: int, unit: Optional[str] = "d") -> None:
        """
        Move the timestamp by ``n`` units.

        Args:
            n: Signed count. Zero leaves the timestamp unchanged.
            unit: ``h``, ``d``, ``w``, ``m`` or ``y``, or a weekday name to
                move to the n-th such weekday after (n > 0) or before (n < 0)
                the start date. Empty means days.
        """
        if self._moment is None:
            return
        try:
            delta = resolve_offset(self._moment, n, unit, self._names)
        except (ValueError, OverflowError) as e:
            logger.warning(f"Adjustment by {n} {unit} is out of range, ignoring it: {e}")
            return
        if delta is None:
            if n != 0:
                logger.debug(f"Ignoring adjustment by unknown unit '{unit}'")
            return
        if self._shift(delta) and (unit or "").lower() == "h":
            self._kind = _WITH_TIME.get(self._kind, self._kind)

    def _shift(self, delta: Delta) -> bool:
        try:
            moment = self._moment + delta
            moment2 = self._moment2 + delta if self._moment2 is not None else None
        except (ValueError, OverflowError) as e:
            logger.warning(f"Adjustment leaves the supported date range, ignoring it: {e}")
            return False
        self._moment = moment
        self._moment2 = moment2
        return True

    # Formatting

    def format(self) -> str:
        """Render the timestamp in canonical form, or "" when it has no start moment."""
        return format_timestamp(self, self._names)

    def __str__(self) -> str:
        return self.format()

    def __repr__(self) -> str:
        return f"Timestamp({self.format()!r}, kind={self._kind.name})"

    # Canonical text

    def _reset(self) -> None:
        self._moment = None
        self._moment2 = None
        self._kind = TimestampKind.DATE
        self._activity = Activity.UNMARKED
        self._repeat = TimeOffset()
        self._delay = TimeOffset()

    def _read_canonical(self, text: str) -> Optional[str]:
        """
        Read canonical timestamp text into this timestamp.

        Returns:
            The text left over, or None if no canonical date was found.
        """
        self._reset()
        opening = text[:1]
        closing = ""
        if opening in OPEN_BRACKETS:
            self._activity = OPEN_BRACKETS[opening]
            closing = BRACKETS[self._activity][1]
            text = text[1:]
        else:
            opening = ""

        date_match = match_canonical_date(text)
        if date_match is None:
            return None
        try:
            self._moment = build_date(date_match.year, date_match.month, date_match.day)
        except (ValueError, OverflowError) as e:
            logger.warning(f"Unsupported date in timestamp '{text}': {e}")
            return None
        text = text[date_match.consumed:].strip()

        clock = match_canonical_time(text)
        if clock:
            hour, minute, used = clock
            self._moment = _at_clock(self._moment, hour, minute)
            self._kind = TimestampKind.DATE_TIME
            text = text[used:].strip()
            if text.startswith("-"):
                end_clock = match_canonical_time(text[1:])
                if end_clock:
                    end_hour, end_minute, used = end_clock
                    self._moment2 = _at_clock(self._moment, end_hour, end_minute)
                    self._kind = TimestampKind.DIARY
                    # Nothing but the closing bracket may follow a time range
                    return self._skip_closing(text[1 + used:].strip(), closing)

        text = self._read_offsets(text)
        text = self._skip_closing(text, closing)

        separator = "--" + opening
        if len(text) > 4 and text.startswith(separator):
            text = self._read_range_end(text[len(separator):].strip(), closing)
        return text

    def _read_range_end(self, text: str, closing: str) -> str:
        date_match = match_canonical_date(text)
        if date_match is None:
            return text
        try:
            moment2 = build_date(date_match.year, date_match.month, date_match.day)
        except (ValueError, OverflowError) as e:
            logger.warning(f"Unsupported range end in timestamp '{text}': {e}")
            return text
        text = text[date_match.consumed:].strip()

        clock = match_canonical_time(text)
        if clock:
            hour, minute, used = clock
            text = text[used:].strip()
        else:
            hour, minute = self._moment.hour, self._moment.minute
        self._moment2 = _at_clock(moment2, hour, minute)
        if self._kind == TimestampKind.DATE:
            self._kind = TimestampKind.DATE_RANGE
        else:
            self._kind = TimestampKind.DATE_TIME_RANGE
        return self._skip_closing(text, closing)

    @staticmethod
    def _skip_closing(text: str, closing: str) -> str:
        if not closing:
            return text
        index = text.find(closing)
        if index < 0:
            return text
        return text[index + 1:].strip()

    def _read_offsets(self, text: str) -> str:
        """Read a repeater and then a delay, each optional, in that order."""
        repeater = match_repeater(text)
        if repeater:
            self._repeat, used = repeater
            text = text[used:].strip()
        delay = match_delay(text)
        if delay:
            self._delay, used = delay
            text = text[used:].strip()
        return text

    # Free-form input

    def _read_input(self, text: str, default: Optional[str]) -> None:
        today = self._moment
        rest = text

        date_match = match_absolute_date(rest, self._names)
        if date_match is not None:
            self._apply_date(date_match, today)
            rest = rest[date_match.consumed:].lstrip()
            if date_match.weekday_token is None:
                rest = rest[match_weekday_word(rest, self._names):]
        rest = rest.lstrip()

        time_match = match_time_of_day(rest)
        if time_match is not None:
            trace_match("time-of-day", rest)
            self._apply_time(time_match)
            rest = rest[time_match.consumed:].lstrip()

        if date_match is not None or time_match is not None:
            if self._kind != TimestampKind.DIARY:
                self._read_offsets(rest)
            return

        relative = match_relative(text)
        if relative is None:
            logger.debug(f"No grammar matched '{text}', keeping today")
            return
        trace_match("relative", text)
        if relative.from_default:
            self._copy_from(Timestamp.parse(default, base_date=self._base_date, names=self._names))
        self.adjust(relative.amount, relative.unit)

    def _apply_date(self, date_match: DateMatch, today: datetime) -> None:
        try:
            if date_match.week is not None:
                self._moment = iso_week_date(date_match.year, date_match.week, date_match.week_day, today)
            elif date_match.weekday_token is not None:
                delta = weekday_offset(self._moment, 1, date_match.weekday_token, self._names)
                if delta is None:
                    logger.debug(f"'{date_match.weekday_token}' is not a weekday, keeping today")
                    return
                self._shift(delta)
            else:
                self._moment = complete_date(date_match.year, date_match.month, date_match.day, today)
        except (ValueError, OverflowError) as e:
            logger.warning(f"Date out of the supported range, keeping today: {e}")

    def _apply_time(self, time_match: TimeOfDayMatch) -> None:
        day = self._moment
        self._moment = _at_clock(day, time_match.hour, time_match.minute)
        self._kind = TimestampKind.DATE_TIME
        if time_match.has_end:
            self._moment2 = _at_clock(day, time_match.end_hour, time_match.end_minute)
            # A diary pair is same-day; an end past midnight makes a range
            if self._moment2.date() == self._moment.date():
                self._kind = TimestampKind.DIARY
            else:
                self._kind = TimestampKind.DATE_TIME_RANGE

    def _copy_from(self, other: "Timestamp") -> None:
        self._moment = other._moment
        self._moment2 = other._moment2
        self._kind = other._kind
        self._activity = other._activity
        self._repeat = TimeOffset(other._repeat.magnitude, other._repeat.unit)
        self._delay = TimeOffset(other._delay.magnitude, other._delay.unit)


def parse_and_format(
    text: Optional[str],
    default_timestamp: Optional[str] = None,
    base_date: Optional[BaseDate] = None,
    names: Optional[NameTables] = None,
) -> str:
    """
    Parse date input and return it in canonical form.

    Args:
        text: Free-form or canonical input, e.g. "+4d", "sep 15", "<2018-10-21 Sun>".
        default_timestamp: Timestamp that "++"/"--" offsets are relative to.
        base_date: The date to treat as today. Defaults to the current date.
        names: Name tables. Defaults to the process-wide tables.

    Returns:
        str: The canonical rendering, or "" if no date could be resolved.

    Examples:
        >>> parse_and_format("++4d", "2018-10-21 Sun 19:10")
        '2018-10-25 Thu 19:10'
        >>> parse_and_format("9/5/18")
        '2018-09-05 Wed'
    """
    return Timestamp.parse(text, default=default_timestamp, base_date=base_date, names=names).format()
