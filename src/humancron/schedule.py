"""Schedule specification model.

The specification is the intermediate representation shared by the
natural-language parser, the formatter and every cron dialect codec.
It is immutable: transforms return new instances built with
``dataclasses.replace``.

Design Principles:
    1. Closed unions: mutually exclusive choices (month, weekday form,
       advanced day operator, auxiliary values) are each a single field
       typed as a union of frozen dataclasses, so two alternatives can
       never be set at once.
    2. Dialect agnostic: numbers use the base-dialect conventions
       (Sunday=0, January=1); codecs translate to their own numbering.
    3. Exhaustive matching: consumers use ``match`` with a final
       ``assert_never`` arm.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import time
from enum import Enum, IntEnum
from typing import Union


# =============================================================================
# Enumerations
# =============================================================================


class IntervalUnit(Enum):
    """Repeat unit of a schedule, ordered from finest to coarsest."""

    SECONDS = "seconds"
    MINUTES = "minutes"
    HOURS = "hours"
    DAYS = "days"
    WEEKS = "weeks"
    MONTHS = "months"
    YEARS = "years"

    @property
    def singular(self) -> str:
        """Singular noun used in phrases ("every minute")."""
        return self.value[:-1]

    @property
    def is_calendar(self) -> bool:
        """True for monthly and yearly units, which own day-of-month data."""
        return self in (IntervalUnit.MONTHS, IntervalUnit.YEARS)

    @property
    def is_sub_daily(self) -> bool:
        """True for units finer than a day."""
        return self in (IntervalUnit.SECONDS, IntervalUnit.MINUTES, IntervalUnit.HOURS)


class DayPattern(Enum):
    """Named groups of weekdays."""

    WEEKDAYS = "weekdays"
    WEEKENDS = "weekends"


class Weekday(IntEnum):
    """Day of week, numbered like the base cron dialect."""

    SUNDAY = 0
    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6

    @property
    def label(self) -> str:
        return self.name.lower()


# =============================================================================
# Month Specifier
# =============================================================================


@dataclass(frozen=True)
class NoMonth:
    """No month constraint (every month)."""


@dataclass(frozen=True)
class SingleMonth:
    """One month, 1-12."""

    month: int


@dataclass(frozen=True)
class MonthRange:
    """Inclusive month range."""

    start: int
    end: int


@dataclass(frozen=True)
class MonthList:
    """Explicit month list in ascending order."""

    months: tuple[int, ...]


MonthSpecifier = Union[NoMonth, SingleMonth, MonthRange, MonthList]


# =============================================================================
# Weekday Selection
# =============================================================================


@dataclass(frozen=True)
class SingleWeekday:
    """One day of the week."""

    day: Weekday


@dataclass(frozen=True)
class WeekdayPatternSelection:
    """Weekdays (Monday-Friday) or weekends (Saturday, Sunday)."""

    pattern: DayPattern


@dataclass(frozen=True)
class WeekdayList:
    """Explicit list of days, kept in the order given."""

    days: tuple[Weekday, ...]


@dataclass(frozen=True)
class WeekdayRange:
    """Inclusive run of days; ``start > end`` wraps across Saturday."""

    start: Weekday
    end: Weekday

    def days(self) -> tuple[Weekday, ...]:
        """Expand the run, following the wrap when present."""
        span = (self.end - self.start) % 7
        return tuple(Weekday((self.start + offset) % 7) for offset in range(span + 1))


WeekdaySelection = Union[SingleWeekday, WeekdayPatternSelection, WeekdayList, WeekdayRange]


# =============================================================================
# Advanced Day Operators
# =============================================================================


@dataclass(frozen=True)
class LastDay:
    """Last day of the month."""


@dataclass(frozen=True)
class LastWeekdayOfMonth:
    """Last Monday-Friday day of the month."""


@dataclass(frozen=True)
class DaysBeforeLast:
    """``offset`` days before the last day of the month."""

    offset: int


@dataclass(frozen=True)
class NearestWeekday:
    """Monday-Friday day nearest to the given day of month."""

    day: int


@dataclass(frozen=True)
class NthWeekday:
    """The Nth (1-5) occurrence of a weekday in the month."""

    day: Weekday
    occurrence: int


@dataclass(frozen=True)
class LastWeekdayOccurrence:
    """The last occurrence of a weekday in the month."""

    day: Weekday


DayOperator = Union[
    LastDay,
    LastWeekdayOfMonth,
    DaysBeforeLast,
    NearestWeekday,
    NthWeekday,
    LastWeekdayOccurrence,
]


# =============================================================================
# Auxiliary Values
# =============================================================================


@dataclass(frozen=True)
class ValueList:
    """Explicit ascending list of field values."""

    values: tuple[int, ...]


@dataclass(frozen=True)
class ValueRange:
    """Inclusive range with an optional step."""

    start: int
    end: int
    step: int | None = None

    def expand(self) -> tuple[int, ...]:
        return tuple(range(self.start, self.end + 1, self.step or 1))


ValueSet = Union[ValueList, ValueRange]


# =============================================================================
# Schedule Specification
# =============================================================================


@dataclass(frozen=True)
class ScheduleSpec:
    """Immutable schedule description.

    Attributes:
        interval: Repeat count, 1-1000.
        unit: Repeat unit.
        time_of_day: Fixed time for daily and coarser schedules.
        timezone: IANA zone key the time of day is expressed in.
        weekdays: Day-of-week constraint.
        day_operator: Advanced day-of-month or day-of-week operator.
        day_of_month: Single day of month, 1-31.
        days: Day-of-month list or range.
        month: Month constraint.
        seconds: Seconds auxiliary values.
        minutes: Minutes auxiliary values.
        hours: Hours auxiliary values.
        year: Explicit year.
    """

    interval: int = 1
    unit: IntervalUnit = IntervalUnit.DAYS
    time_of_day: time | None = None
    timezone: str = "UTC"
    weekdays: WeekdaySelection | None = None
    day_operator: DayOperator | None = None
    day_of_month: int | None = None
    days: ValueSet | None = None
    month: MonthSpecifier = field(default_factory=NoMonth)
    seconds: ValueSet | None = None
    minutes: ValueSet | None = None
    hours: ValueSet | None = None
    year: int | None = None

    @property
    def has_day_constraint(self) -> bool:
        """True when any day-of-month or weekday data is present."""
        return (
            self.weekdays is not None
            or self.day_operator is not None
            or self.day_of_month is not None
            or self.days is not None
        )
