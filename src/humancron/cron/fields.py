"""Cron field reading and rendering shared by every dialect.

A field is read into a small token describing its *shape* (wildcard,
step, span, list, single value). Dialect codecs decide what each shape
means for their numbering; this module only knows field domains.

Design Principles:
    1. Shape first: tokens keep the written form (``1-5`` is a span, not
       five values) so decoders can prefer ranges over lists.
    2. Strict domains: every number is checked against its field domain.
    3. Shared inference: all dialects derive the repeat unit the same way.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Callable, Mapping, Sequence, Union, assert_never

from humancron.errors import ErrorKind, ScheduleError
from humancron.notation import collapse_values, compact_values
from humancron.schedule import (
    DayPattern,
    IntervalUnit,
    MonthList,
    MonthRange,
    MonthSpecifier,
    NoMonth,
    SingleMonth,
    SingleWeekday,
    ValueList,
    ValueRange,
    ValueSet,
    Weekday,
    WeekdayList,
    WeekdayPatternSelection,
    WeekdayRange,
    WeekdaySelection,
)


# =============================================================================
# Field Types
# =============================================================================


class CronFieldType(Enum):
    """Types of cron fields."""

    SECOND = auto()
    MINUTE = auto()
    HOUR = auto()
    DAY_OF_MONTH = auto()
    MONTH = auto()
    DAY_OF_WEEK = auto()
    YEAR = auto()

    @property
    def label(self) -> str:
        return self.name.lower().replace("_", "-")


@dataclass(frozen=True)
class FieldConstraints:
    """Constraints for a cron field."""

    min_value: int
    max_value: int
    names: dict[str, int] = field(default_factory=dict)
    supports_question: bool = False


MONTH_NAMES: dict[str, int] = {
    "JAN": 1, "FEB": 2, "MAR": 3, "APR": 4,
    "MAY": 5, "JUN": 6, "JUL": 7, "AUG": 8,
    "SEP": 9, "OCT": 10, "NOV": 11, "DEC": 12,
}

DAY_NAMES: dict[str, int] = {
    "SUN": 0, "MON": 1, "TUE": 2, "WED": 3,
    "THU": 4, "FRI": 5, "SAT": 6,
}

# Unix cron accepts both 0 and 7 for Sunday.
UNIX_CONSTRAINTS: dict[CronFieldType, FieldConstraints] = {
    CronFieldType.MINUTE: FieldConstraints(0, 59),
    CronFieldType.HOUR: FieldConstraints(0, 23),
    CronFieldType.DAY_OF_MONTH: FieldConstraints(1, 31),
    CronFieldType.MONTH: FieldConstraints(1, 12, names=MONTH_NAMES),
    CronFieldType.DAY_OF_WEEK: FieldConstraints(0, 7, names=DAY_NAMES),
}

NCRONTAB_CONSTRAINTS: dict[CronFieldType, FieldConstraints] = {
    CronFieldType.SECOND: FieldConstraints(0, 59),
    **UNIX_CONSTRAINTS,
    CronFieldType.DAY_OF_WEEK: FieldConstraints(0, 6, names=DAY_NAMES),
}

# Quartz numbers days 1 (Sunday) to 7 (Saturday).
QUARTZ_CONSTRAINTS: dict[CronFieldType, FieldConstraints] = {
    CronFieldType.SECOND: FieldConstraints(0, 59),
    CronFieldType.MINUTE: FieldConstraints(0, 59),
    CronFieldType.HOUR: FieldConstraints(0, 23),
    CronFieldType.DAY_OF_MONTH: FieldConstraints(1, 31, supports_question=True),
    CronFieldType.MONTH: FieldConstraints(1, 12, names=MONTH_NAMES),
    CronFieldType.DAY_OF_WEEK: FieldConstraints(
        1, 7,
        names={name: value + 1 for name, value in DAY_NAMES.items()},
        supports_question=True,
    ),
    CronFieldType.YEAR: FieldConstraints(1970, 2099),
}


# =============================================================================
# Field Tokens
# =============================================================================


@dataclass(frozen=True)
class Wildcard:
    """``*``"""


@dataclass(frozen=True)
class NoSpecificValue:
    """``?`` (Quartz only)."""


@dataclass(frozen=True)
class Step:
    """``*/n`` (no start), ``s/n`` (start only) or ``a-b/n``."""

    step: int
    start: int | None = None
    end: int | None = None


@dataclass(frozen=True)
class Span:
    """``a-b``; ``start > end`` is kept as written."""

    start: int
    end: int


@dataclass(frozen=True)
class Values:
    """Comma list with sub-ranges expanded, in written order."""

    values: tuple[int, ...]


@dataclass(frozen=True)
class Single:
    """One value."""

    value: int


FieldToken = Union[Wildcard, NoSpecificValue, Step, Span, Values, Single]


def is_open(token: FieldToken) -> bool:
    """True for ``*`` and ``?``."""
    match token:
        case Wildcard() | NoSpecificValue():
            return True
        case _:
            return False


# =============================================================================
# Reader
# =============================================================================


class FieldReader:
    """Reads plain cron fields into tokens.

    Operators such as ``L``, ``W`` and ``#`` are not understood here; a
    dialect that supports them must recognise them before delegating.

    Example:
        >>> reader = FieldReader("*/5 * * * *", UNIX_CONSTRAINTS)
        >>> reader.read("*/5", CronFieldType.MINUTE)
        Step(step=5, start=None, end=None)
    """

    def __init__(
        self,
        expression: str,
        constraints: Mapping[CronFieldType, FieldConstraints],
    ) -> None:
        self._expression = expression
        self._constraints = constraints

    def read(self, part: str, field_type: CronFieldType) -> FieldToken:
        """Read one field.

        Raises:
            ScheduleError: For unreadable text or out-of-domain values.
        """
        constraints = self._constraints[field_type]
        if part == "*":
            return Wildcard()
        if part == "?":
            if not constraints.supports_question:
                raise self._malformed(f"'?' is not allowed in the {field_type.label} field")
            return NoSpecificValue()
        if "/" in part:
            return self._read_step(part, field_type)
        if "," in part:
            return self._read_list(part, field_type)
        if "-" in part:
            return Span(*self._read_span(part, field_type))
        return Single(self.resolve_value(part, field_type))

    def resolve_value(self, text: str, field_type: CronFieldType) -> int:
        """Resolve a number or name and check it against the field domain."""
        constraints = self._constraints[field_type]
        text = text.strip().upper()
        if text in constraints.names:
            return constraints.names[text]
        if not text.isdigit():
            raise self._malformed(f"Invalid value '{text}' in {field_type.label} field")
        number = int(text)
        if number < constraints.min_value or number > constraints.max_value:
            raise ScheduleError(
                f"Value {number} out of range "
                f"[{constraints.min_value}-{constraints.max_value}] "
                f"in {field_type.label} field",
                ErrorKind.OUT_OF_RANGE,
                self._expression,
            )
        return number

    def _read_step(self, part: str, field_type: CronFieldType) -> FieldToken:
        base, _, step_text = part.partition("/")
        if not step_text.isdigit():
            raise self._malformed(f"Invalid step: {part}")
        step = int(step_text)
        if step <= 0:
            raise ScheduleError(
                f"Step must be positive: {step}", ErrorKind.OUT_OF_RANGE, self._expression
            )
        if base == "*":
            return Step(step)
        if "-" in base:
            start, end = self._read_span(base, field_type)
            if start > end:
                raise ScheduleError(
                    f"Range start ({start}) must not be after end ({end}) in stepped field {part}",
                    ErrorKind.OUT_OF_RANGE,
                    self._expression,
                )
            return Step(step, start, end)
        return Step(step, start=self.resolve_value(base, field_type))

    def _read_span(self, part: str, field_type: CronFieldType) -> tuple[int, int]:
        pieces = part.split("-")
        if len(pieces) != 2:
            raise self._malformed(f"Invalid range: {part}")
        return (
            self.resolve_value(pieces[0], field_type),
            self.resolve_value(pieces[1], field_type),
        )

    def _read_list(self, part: str, field_type: CronFieldType) -> FieldToken:
        constraints = self._constraints[field_type]
        values: list[int] = []
        for segment in part.split(","):
            if not segment:
                raise self._malformed(f"Empty list item in {field_type.label} field: {part}")
            if "/" in segment:
                raise self._malformed(f"Steps are not supported inside lists: {part}")
            if "-" in segment:
                start, end = self._read_span(segment, field_type)
                if start <= end:
                    segment_values = list(range(start, end + 1))
                else:
                    # Wraparound, e.g. FRI-MON
                    segment_values = list(range(start, constraints.max_value + 1))
                    segment_values.extend(range(constraints.min_value, end + 1))
            else:
                segment_values = [self.resolve_value(segment, field_type)]
            values.extend(value for value in segment_values if value not in values)
        return Values(tuple(values))

    def _malformed(self, message: str) -> ScheduleError:
        return ScheduleError(message, ErrorKind.MALFORMED_FIELD, self._expression)


def split_fields(expression: str, counts: Sequence[int], usage: str) -> list[str]:
    """Split an expression on whitespace and check the number of fields.

    Args:
        expression: Raw cron expression.
        counts: Accepted field counts.
        usage: Message prefix naming the dialect, e.g. ``"Unix cron expressions
            must have 5 parts"``.
    """
    if not expression or not expression.strip():
        raise ScheduleError("Cron expression cannot be empty", ErrorKind.EMPTY_INPUT)
    parts = expression.split()
    if len(parts) not in counts:
        raise ScheduleError(
            usage.format(count=len(parts)), ErrorKind.MALFORMED_FIELD, expression
        )
    return parts


# =============================================================================
# Rendering
# =============================================================================


def render_values(values: ValueSet) -> str:
    """Render auxiliary values as ``1-3,7`` or ``0-30/5``."""
    match values:
        case ValueList(values=items):
            return compact_values(items)
        case ValueRange(start=start, end=end, step=None):
            return f"{start}-{end}"
        case ValueRange(start=start, end=end, step=step):
            return f"{start}-{end}/{step}"
        case _ as unreachable:
            assert_never(unreachable)


def render_field(
    values: ValueSet | None,
    *,
    step: str | None = None,
    single: int | None = None,
    default: str,
) -> str:
    """Render one numeric field.

    Priority: explicit values, then the repeat step, then a single value
    (usually from the time of day), then the default.
    """
    if values is not None:
        return render_values(values)
    if step is not None:
        return step
    if single is not None:
        return str(single)
    return default


def unit_step(interval: int, unit: IntervalUnit, field_unit: IntervalUnit) -> str | None:
    """``*`` or ``*/n`` when the schedule repeats in this field's unit."""
    if unit is not field_unit:
        return None
    return "*" if interval == 1 else f"*/{interval}"


# =============================================================================
# Decoding
# =============================================================================


def token_values(
    token: FieldToken,
    field_type: CronFieldType,
    *,
    default: int | None,
    expression: str,
) -> ValueSet | None:
    """Map a numeric field token to auxiliary values.

    Args:
        token: Field token.
        field_type: Field the token came from.
        default: Single value that carries no information (the value the
            encoder writes when nothing is set); ``None`` keeps all singles.
        expression: Source expression for error reporting.

    Returns:
        Values, or ``None`` when the token is implied by the repeat unit,
        time of day or default.
    """
    match token:
        case Wildcard() | NoSpecificValue():
            return None
        case Step(end=None):
            return None
        case Step(step=step, start=start, end=end):
            return ValueRange(start, end, step)
        case Span(start=start, end=end):
            if start > end:
                raise ScheduleError(
                    f"Range start ({start}) must not be after end ({end}) "
                    f"in {field_type.label} field",
                    ErrorKind.OUT_OF_RANGE,
                    expression,
                )
            return ValueRange(start, end)
        case Values(values=values):
            return collapse_values(values)
        case Single(value=value):
            return None if value == default else ValueList((value,))
        case _ as unreachable:
            assert_never(unreachable)


def infer_interval(
    *,
    second: FieldToken | None,
    minute: FieldToken,
    hour: FieldToken,
    day: FieldToken,
    weekday: FieldToken,
    has_operator: bool = False,
) -> tuple[int, IntervalUnit]:
    """Derive the repeat interval and unit from field shapes.

    The finest field written as ``*`` or a step sets the unit. Below
    hours, open day fields mean daily, a day step means every N days,
    and a plain weekday selection means weekly. Anything else repeats
    monthly.
    """
    for token, unit in (
        (second, IntervalUnit.SECONDS),
        (minute, IntervalUnit.MINUTES),
        (hour, IntervalUnit.HOURS),
    ):
        match token:
            case Wildcard():
                return 1, unit
            case Step(step=step):
                return step, unit
            case _:
                pass

    if has_operator:
        return 1, IntervalUnit.MONTHS
    if is_open(day) and is_open(weekday):
        return 1, IntervalUnit.DAYS
    match day:
        case Step(step=step):
            return step, IntervalUnit.DAYS
        case _:
            pass
    if is_open(day):
        return 1, IntervalUnit.WEEKS
    return 1, IntervalUnit.MONTHS


# =============================================================================
# Months
# =============================================================================


def decode_month(token: FieldToken, expression: str) -> MonthSpecifier:
    """Map a month token, preferring a range for one consecutive run."""
    match token:
        case Wildcard():
            return NoMonth()
        case NoSpecificValue():
            raise ScheduleError(
                "'?' is not allowed in the month field", ErrorKind.MALFORMED_FIELD, expression
            )
        case Single(value=value):
            return SingleMonth(value)
        case Span(start=start, end=end):
            if start == end:
                return SingleMonth(start)
            if start > end:
                raise ScheduleError(
                    f"Month range start ({start}) must be before end ({end})",
                    ErrorKind.OUT_OF_RANGE,
                    expression,
                )
            return MonthRange(start, end)
        case Values(values=values):
            return _month_set(sorted(set(values)))
        case Step(step=step, start=start, end=end):
            first = 1 if start is None else start
            last = 12 if end is None else end
            return _month_set(list(range(first, last + 1, step)))
        case _ as unreachable:
            assert_never(unreachable)


def _month_set(months: list[int]) -> MonthSpecifier:
    if len(months) == 1:
        return SingleMonth(months[0])
    if months[-1] - months[0] == len(months) - 1:
        return MonthRange(months[0], months[-1])
    return MonthList(tuple(months))


def encode_month(month: MonthSpecifier, unit: IntervalUnit) -> str:
    """Render the month field; yearly schedules default to January."""
    match month:
        case NoMonth():
            return "1" if unit is IntervalUnit.YEARS else "*"
        case SingleMonth(month=number):
            return str(number)
        case MonthRange(start=start, end=end):
            return f"{start}-{end}"
        case MonthList(months=months):
            return compact_values(months)
        case _ as unreachable:
            assert_never(unreachable)


# =============================================================================
# Weekdays
# =============================================================================

_WEEKDAY_SET = frozenset(range(Weekday.MONDAY, Weekday.FRIDAY + 1))
_WEEKEND_SET = frozenset((Weekday.SATURDAY, Weekday.SUNDAY))


def is_consecutive_run(days: Sequence[Weekday]) -> bool:
    """True when the days advance one at a time, wrapping at most once.

    Example:
        >>> is_consecutive_run([Weekday.FRIDAY, Weekday.SATURDAY, Weekday.SUNDAY])
        True
    """
    if len(days) < 2 or len(set(days)) != len(days):
        return False
    descents = 0
    for previous, current in zip(days, days[1:]):
        if current != (previous + 1) % 7:
            return False
        if current < previous:
            descents += 1
    return descents <= 1


def classify_weekdays(days: Sequence[Weekday]) -> WeekdaySelection:
    """Choose the closest selection for an ordered day sequence.

    Weekday and weekend sets become patterns, consecutive runs become
    ranges, anything else stays a list in the given order.
    """
    unique: list[Weekday] = []
    for day in days:
        if day not in unique:
            unique.append(day)
    if len(unique) == 1:
        return SingleWeekday(unique[0])
    if set(unique) == _WEEKDAY_SET:
        return WeekdayPatternSelection(DayPattern.WEEKDAYS)
    if set(unique) == _WEEKEND_SET:
        return WeekdayPatternSelection(DayPattern.WEEKENDS)
    if is_consecutive_run(unique):
        return WeekdayRange(unique[0], unique[-1])
    return WeekdayList(tuple(unique))


def decode_weekdays(
    token: FieldToken,
    to_weekday: Callable[[int], Weekday],
    expression: str,
) -> WeekdaySelection | None:
    """Map a day-of-week token using the dialect's numbering."""
    match token:
        case Wildcard() | NoSpecificValue():
            return None
        case Single(value=value):
            return SingleWeekday(to_weekday(value))
        case Span(start=start, end=end):
            return classify_weekdays(WeekdayRange(to_weekday(start), to_weekday(end)).days())
        case Values(values=values):
            return classify_weekdays([to_weekday(value) for value in values])
        case Step():
            raise ScheduleError(
                "Steps are not supported in the day-of-week field",
                ErrorKind.MALFORMED_FIELD,
                expression,
            )
        case _ as unreachable:
            assert_never(unreachable)


def encode_weekdays(
    selection: WeekdaySelection,
    name: Callable[[Weekday], str],
    *,
    weekdays: str,
    weekends: str,
) -> str:
    """Render a day-of-week selection.

    Args:
        selection: Selection to render.
        name: Renders one day in the dialect's notation.
        weekdays: Field text for Monday-Friday.
        weekends: Field text for Saturday and Sunday.

    Non-wrapping runs render as ``a-b``; wrapping runs as an explicit list.
    Lists and ranges covering exactly the weekday or weekend days render
    as the pattern text, the form they decode back from.
    """
    match selection:
        case WeekdayList(days=days) if set(days) == _WEEKDAY_SET:
            return weekdays
        case WeekdayList(days=days) if set(days) == _WEEKEND_SET:
            return weekends
        case WeekdayRange() if set(selection.days()) == _WEEKDAY_SET:
            return weekdays
        case WeekdayRange() if set(selection.days()) == _WEEKEND_SET:
            return weekends
        case _:
            pass

    match selection:
        case SingleWeekday(day=day):
            return name(day)
        case WeekdayPatternSelection(pattern=DayPattern.WEEKDAYS):
            return weekdays
        case WeekdayPatternSelection(pattern=DayPattern.WEEKENDS):
            return weekends
        case WeekdayList(days=days) if is_consecutive_run(days):
            return _encode_run(days[0], days[-1], name)
        case WeekdayList(days=days):
            return ",".join(name(day) for day in days)
        case WeekdayRange(start=start, end=end):
            return _encode_run(start, end, name)
        case _ as unreachable:
            assert_never(unreachable)


def _encode_run(start: Weekday, end: Weekday, name: Callable[[Weekday], str]) -> str:
    if start < end:
        return f"{name(start)}-{name(end)}"
    return ",".join(name(day) for day in WeekdayRange(start, end).days())
