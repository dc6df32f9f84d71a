"""Canonical natural-language rendering of schedule specifications.

Formatting is two pure steps:

1. :func:`normalize` rewrites combinations that the parser accepts but
   that have a simpler equivalent (a monthly schedule pinned to one
   month, a monthly schedule that really fires on weekdays, ...).
2. :class:`NaturalLanguageFormatter` renders the normalized value in a
   fixed phrase order so that ``format(parse(text)) == text`` for every
   canonical phrase.

Phrase order:
    head ("every day", "every monday", "on january 15th", "on the last
    day" when pinned to one month), weekday refinement, day-of-month
    phrase, hours, minutes, seconds, time of day, month, year.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Callable, assert_never

from humancron.errors import ErrorKind, ScheduleError
from humancron.notation import (
    clock_hour,
    clock_time,
    compact_names,
    compact_values,
    ordinal,
    ordinal_list,
)
from humancron.patterns import MONTH_LABELS
from humancron.result import Error, Result, Success
from humancron.schedule import (
    DayOperator,
    DayPattern,
    DaysBeforeLast,
    IntervalUnit,
    LastDay,
    LastWeekdayOccurrence,
    LastWeekdayOfMonth,
    MonthList,
    MonthRange,
    MonthSpecifier,
    NearestWeekday,
    NoMonth,
    NthWeekday,
    ScheduleSpec,
    SingleMonth,
    SingleWeekday,
    ValueList,
    ValueRange,
    ValueSet,
    WeekdayList,
    WeekdayPatternSelection,
    WeekdayRange,
    WeekdaySelection,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Normalization
# =============================================================================


def normalize(spec: ScheduleSpec) -> ScheduleSpec:
    """Rewrite redundant combinations into their simplest equivalent.

    Rules, applied in order:
        1. A one-element day list becomes a plain day of month.
        2. Yearly interval 1 pinned to a single month becomes monthly;
           both fire once a year.
        3. Monthly (or month-constrained yearly) interval 1 with a weekday
           selection and no day-of-month data becomes weekly.
        4. Monthly interval 1 restricted to a plain day range becomes daily.

    The function is idempotent: ``normalize(normalize(s)) == normalize(s)``.
    """
    match spec.days:
        case ValueList(values=(only,)) if spec.day_of_month is None:
            spec = replace(spec, day_of_month=only, days=None)
        case _:
            pass

    if spec.interval != 1:
        return spec

    match spec.month:
        case SingleMonth() if spec.unit is IntervalUnit.YEARS:
            spec = replace(spec, unit=IntervalUnit.MONTHS)
        case _:
            pass

    pinned_to_months = spec.unit is IntervalUnit.MONTHS or (
        spec.unit is IntervalUnit.YEARS and spec.month != NoMonth()
    )
    if (
        pinned_to_months
        and spec.weekdays is not None
        and spec.day_operator is None
        and spec.day_of_month is None
        and spec.days is None
    ):
        return replace(spec, unit=IntervalUnit.WEEKS)

    if spec.unit is IntervalUnit.MONTHS and spec.weekdays is None and spec.day_operator is None:
        match spec.days:
            case ValueRange(step=None) if spec.day_of_month is None:
                return replace(spec, unit=IntervalUnit.DAYS)
            case _:
                pass

    return spec


# =============================================================================
# Formatter
# =============================================================================


class NaturalLanguageFormatter:
    """Renders specifications as canonical phrases.

    Example:
        >>> formatter = NaturalLanguageFormatter()
        >>> formatter.format(spec)
        Success(value='every day at 2pm')
    """

    def format(self, spec: ScheduleSpec) -> Result[str]:
        """Normalize and render a specification.

        Args:
            spec: Specification to render.

        Returns:
            ``Success`` with the phrase, or ``Error`` for values no phrase can express.
        """
        try:
            _validate(spec)
            text = self._render(normalize(spec))
        except ScheduleError as exc:
            logger.debug(f"Cannot format {spec}: {exc.message}")
            return Error.from_exception(exc)
        return Success(text)

    def _render(self, spec: ScheduleSpec) -> str:
        range_step = _range_step_phrase(spec)
        if range_step is not None:
            return _join(range_step, _month_phrase(spec.month), _year_phrase(spec.year))

        combined = _combined_month_day(spec)
        yearly_day = None if combined is not None else _once_a_year_day(spec)
        parts: list[str | None] = []
        if combined is not None:
            parts.append(combined)
        elif yearly_day is not None:
            parts.append(yearly_day)
        elif spec.unit is IntervalUnit.WEEKS and spec.interval == 1 and spec.weekdays is not None:
            parts.append(f"every {_weekday_subject(spec.weekdays)}")
        else:
            parts.append(_interval_phrase(spec))
            if spec.weekdays is not None:
                parts.append(f"on {_weekday_object(spec.weekdays)}")

        if combined is None and yearly_day is None:
            parts.append(_day_phrase(spec))

        parts.append(_values_phrase(spec.hours, "hours", clock_hour))
        parts.append(_values_phrase(spec.minutes, "minutes", str))
        parts.append(_values_phrase(spec.seconds, "seconds", str))
        if spec.time_of_day is not None and spec.hours is None and spec.minutes is None:
            parts.append(f"at {clock_time(spec.time_of_day)}")

        if combined is None:
            parts.append(_month_phrase(spec.month))
        parts.append(_year_phrase(spec.year))
        return _join(*parts)


def format_schedule(spec: ScheduleSpec) -> Result[str]:
    """Render a specification with the default formatter."""
    return NaturalLanguageFormatter().format(spec)


# =============================================================================
# Phrase Builders
# =============================================================================


def _validate(spec: ScheduleSpec) -> None:
    if spec.interval < 1:
        raise ScheduleError(
            f"Interval must be a positive number (1 or greater), got: {spec.interval}",
            ErrorKind.OUT_OF_RANGE,
        )
    for month in _months_of(spec.month):
        if month not in MONTH_LABELS:
            raise ScheduleError(
                f"Invalid month: {month} (must be 1-12)", ErrorKind.OUT_OF_RANGE
            )


def _join(*parts: str | None) -> str:
    return " ".join(part for part in parts if part)


def _interval_phrase(spec: ScheduleSpec) -> str:
    if spec.interval == 1:
        return f"every {spec.unit.singular}"
    return f"every {spec.interval} {spec.unit.value}"


def _range_step_phrase(spec: ScheduleSpec) -> str | None:
    """Render "every 5 minutes between 0 and 30 of each hour" when it applies."""
    if spec.unit is IntervalUnit.MINUTES:
        values, bare = spec.minutes, replace(spec, minutes=None)
    elif spec.unit is IntervalUnit.HOURS:
        values, bare = spec.hours, replace(spec, hours=None)
    elif spec.unit is IntervalUnit.DAYS:
        values, bare = spec.days, replace(spec, days=None)
    else:
        return None

    # Only month and year may accompany the range form, plus a time of day
    # for day ranges.
    bare = replace(bare, month=NoMonth(), year=None)
    if spec.unit is IntervalUnit.DAYS:
        bare = replace(bare, time_of_day=None)
    if bare != ScheduleSpec(interval=spec.interval, unit=spec.unit, timezone=spec.timezone):
        return None

    match values:
        case ValueRange(start=start, end=end, step=step) if step == spec.interval:
            pass
        case _:
            return None

    head = f"every {spec.interval} {spec.unit.value} between"
    if spec.unit is IntervalUnit.MINUTES:
        return f"{head} {start} and {end} of each hour"
    if spec.unit is IntervalUnit.HOURS:
        return f"{head} {clock_hour(start)} and {clock_hour(end)} of each day"
    phrase = f"{head} the {ordinal(start)} and {ordinal(end)} of each month"
    if spec.time_of_day is not None:
        return f"{phrase} at {clock_time(spec.time_of_day)}"
    return phrase


def _combined_month_day(spec: ScheduleSpec) -> str | None:
    """Render "on january 15th" for a once-a-year date."""
    if (
        spec.unit is IntervalUnit.MONTHS
        and spec.interval == 1
        and spec.day_of_month is not None
        and spec.days is None
        and spec.day_operator is None
        and spec.weekdays is None
    ):
        match spec.month:
            case SingleMonth(month=month):
                return f"on {MONTH_LABELS[month]} {ordinal(spec.day_of_month)}"
            case _:
                return None
    return None


def _once_a_year_day(spec: ScheduleSpec) -> str | None:
    """Render "on the 3rd friday" or "on the 1st and 15th" as the head of a
    monthly schedule pinned to one month, which fires only in that month.
    """
    if spec.unit is not IntervalUnit.MONTHS or spec.interval != 1 or spec.weekdays is not None:
        return None
    match spec.month:
        case SingleMonth():
            pass
        case _:
            return None
    if spec.day_operator is not None:
        return _operator_phrase(spec.day_operator)
    if spec.days is not None:
        return _day_list_phrase(_expand(spec.days))
    return None


def _weekday_subject(selection: WeekdaySelection) -> str:
    """Weekday wording after "every": monday, weekday, monday,friday."""
    match selection:
        case WeekdayPatternSelection(pattern=DayPattern.WEEKDAYS):
            return "weekday"
        case WeekdayPatternSelection(pattern=DayPattern.WEEKENDS):
            return "weekend"
        case _:
            return _weekday_object(selection)


def _weekday_object(selection: WeekdaySelection) -> str:
    """Weekday wording after "on": monday, weekdays, tuesday-thursday."""
    match selection:
        case SingleWeekday(day=day):
            return day.label
        case WeekdayPatternSelection(pattern=pattern):
            return pattern.value
        case WeekdayList(days=days):
            return ",".join(day.label for day in days)
        case WeekdayRange(start=start, end=end):
            return f"{start.label}-{end.label}"
        case _ as unreachable:
            assert_never(unreachable)


def _operator_phrase(operator: DayOperator) -> str:
    match operator:
        case LastDay():
            return "on the last day"
        case LastWeekdayOfMonth():
            return "on the last weekday"
        case DaysBeforeLast(offset=1):
            return "on the day before last"
        case DaysBeforeLast(offset=offset):
            return f"on the {ordinal(offset)} to last day"
        case NearestWeekday(day=day):
            return f"on the weekday nearest the {ordinal(day)}"
        case NthWeekday(day=day, occurrence=occurrence):
            return f"on the {ordinal(occurrence)} {day.label}"
        case LastWeekdayOccurrence(day=day):
            return f"on the last {day.label}"
        case _ as unreachable:
            assert_never(unreachable)


def _day_phrase(spec: ScheduleSpec) -> str | None:
    """Day-of-month wording.

    "on the 15th" reads as a monthly date, so units below a month use the
    auxiliary form instead: "at days 1,15".
    """
    if spec.day_operator is not None:
        return _operator_phrase(spec.day_operator)
    calendar = spec.unit.is_calendar
    match spec.days:
        case None:
            pass
        case ValueRange(start=start, end=end, step=None):
            return f"between the {ordinal(start)} and {ordinal(end)}"
        case ValueRange() | ValueList() if not calendar:
            return f"at days {compact_values(_expand(spec.days))}"
        case ValueRange() | ValueList():
            return _day_list_phrase(_expand(spec.days))
        case _ as unreachable:
            assert_never(unreachable)
    if spec.day_of_month is None:
        return None
    if not calendar:
        return f"at days {spec.day_of_month}"
    return f"on the {ordinal(spec.day_of_month)}"


def _day_list_phrase(values: tuple[int, ...]) -> str:
    compact = compact_values(values)
    if "-" in compact:
        return f"on the {compact}"
    return f"on the {ordinal_list(values)}"


def _values_phrase(
    values: ValueSet | None,
    noun: str,
    render: Callable[[int], str],
) -> str | None:
    """Render an auxiliary field as "at hours 9-11,17" or "between hours 9am and 5pm"."""
    match values:
        case None:
            return None
        case ValueRange(start=start, end=end, step=None):
            return f"between {noun} {render(start)} and {render(end)}"
        case ValueRange() | ValueList():
            return f"at {noun} {compact_values(_expand(values))}"
        case _ as unreachable:
            assert_never(unreachable)


def _expand(values: ValueSet) -> tuple[int, ...]:
    match values:
        case ValueList(values=items):
            return tuple(sorted(set(items)))
        case ValueRange():
            return values.expand()
        case _ as unreachable:
            assert_never(unreachable)


def _month_phrase(month: MonthSpecifier) -> str | None:
    match month:
        case NoMonth():
            return None
        case SingleMonth(month=number):
            return f"in {MONTH_LABELS[number]}"
        case MonthRange(start=start, end=end):
            return f"between {MONTH_LABELS[start]} and {MONTH_LABELS[end]}"
        case MonthList(months=months) if len(set(months)) == 1:
            return f"in {MONTH_LABELS[months[0]]}"
        case MonthList(months=months):
            return f"in {compact_names(months, MONTH_LABELS)}"
        case _ as unreachable:
            assert_never(unreachable)


def _months_of(month: MonthSpecifier) -> tuple[int, ...]:
    match month:
        case NoMonth():
            return ()
        case SingleMonth(month=number):
            return (number,)
        case MonthRange(start=start, end=end):
            return (start, end)
        case MonthList(months=months):
            return months
        case _ as unreachable:
            assert_never(unreachable)


def _year_phrase(year: int | None) -> str | None:
    return None if year is None else f"in year {year}"
