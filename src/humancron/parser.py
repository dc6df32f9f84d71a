"""Natural-language schedule parser.

Turns phrases such as ``"every weekday at 9am"`` or
``"every month on the last friday in january,july"`` into a
:class:`~humancron.schedule.ScheduleSpec`.

Resolution runs in a fixed order:
    1. Range with step, which is self-contained and returns immediately.
    2. Interval count and unit ("on ..." means monthly, a bare weekday
       phrase means weekly).
    3. Time of day.
    4. Day constraints, split on whether the unit is monthly/yearly.
    5. Day range, month, auxiliary minute/hour values and year.

Each step raises :class:`~humancron.errors.ScheduleError` on the first
problem; :meth:`NaturalLanguageParser.parse` turns that into an ``Error``
result so no partial specification is ever returned.

Usage:
    >>> from humancron.parser import parse
    >>> parse("every day at 2pm")
    Success(value=ScheduleSpec(interval=1, unit=<IntervalUnit.DAYS: 'days'>, ...))
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from datetime import time
from typing import Callable, assert_never

from humancron import patterns
from humancron.config import ParserOptions
from humancron.errors import ErrorKind, ScheduleError
from humancron.notation import collapse_values, expand_list_notation
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
    ValueRange,
    ValueSet,
    Weekday,
    WeekdayList,
    WeekdayPatternSelection,
    WeekdayRange,
    WeekdaySelection,
)

logger = logging.getLogger(__name__)

_RANGE_STEP_ANCHORS = {
    IntervalUnit.MINUTES: "hour",
    IntervalUnit.HOURS: "day",
    IntervalUnit.DAYS: "month",
}

_WEEKDAY_SPAN = (Weekday.MONDAY, Weekday.FRIDAY)
_WEEKEND_SPAN = (Weekday.SATURDAY, Weekday.SUNDAY)


# =============================================================================
# Draft
# =============================================================================


@dataclass
class _Draft:
    """Mutable accumulator used while a single phrase is being resolved."""

    timezone: str
    interval: int = 1
    unit: IntervalUnit = IntervalUnit.DAYS
    time_of_day: time | None = None
    weekdays: WeekdaySelection | None = None
    day_operator: DayOperator | None = None
    day_of_month: int | None = None
    days: ValueSet | None = None
    month: MonthSpecifier = field(default_factory=NoMonth)
    seconds: ValueSet | None = None
    minutes: ValueSet | None = None
    hours: ValueSet | None = None
    year: int | None = None

    def build(self, text: str) -> ScheduleSpec:
        """Verify cross-field consistency and freeze the draft."""
        if self.weekdays is not None and (
            self.day_operator is not None
            or self.day_of_month is not None
            or self.days is not None
        ):
            raise ScheduleError(
                "Cannot combine a day-of-week constraint with day-of-month "
                "constraints in the same schedule",
                ErrorKind.CONFLICTING,
                text,
            )
        return ScheduleSpec(
            interval=self.interval,
            unit=self.unit,
            time_of_day=self.time_of_day,
            timezone=self.timezone,
            weekdays=self.weekdays,
            day_operator=self.day_operator,
            day_of_month=self.day_of_month,
            days=self.days,
            month=self.month,
            seconds=self.seconds,
            minutes=self.minutes,
            hours=self.hours,
            year=self.year,
        )


# =============================================================================
# Parser
# =============================================================================


class NaturalLanguageParser:
    """Parses natural-language schedule phrases.

    The parser holds only immutable options and compiled patterns, so a
    single instance can be shared across threads.
    """

    def __init__(self, options: ParserOptions | None = None) -> None:
        """Initialize parser.

        Args:
            options: Parser options; defaults come from :func:`~humancron.config.get_config`.
        """
        self._options = options or ParserOptions.from_config()
        self._operator_builders: dict[str, Callable[[re.Match[str]], DayOperator]] = {
            "last_weekday": self._last_weekday,
            "days_before_last": self._days_before_last,
            "last_day": self._last_day,
            "last_occurrence": self._last_occurrence,
            "nearest_weekday": self._nearest_weekday,
            "nth_weekday": self._nth_weekday,
        }

    @property
    def options(self) -> ParserOptions:
        return self._options

    def parse(self, text: str) -> Result[ScheduleSpec]:
        """Parse a phrase into a schedule specification.

        Args:
            text: Phrase beginning with "every" or "on".

        Returns:
            ``Success`` with the specification, or ``Error`` naming the problem.
        """
        try:
            spec = self._parse(text)
        except ScheduleError as exc:
            logger.debug(f"Rejected phrase {text!r}: {exc.message}")
            return Error.from_exception(exc)
        logger.debug(f"Parsed phrase {text!r} -> {spec}")
        return Success(spec)

    def _parse(self, text: str) -> ScheduleSpec:
        if text is None or not text.strip():
            raise ScheduleError("Input cannot be empty", ErrorKind.EMPTY_INPUT)
        limit = self._options.max_input_length
        if len(text) > limit:
            raise ScheduleError(
                f"Natural language input exceeds maximum length of {limit} characters",
                ErrorKind.OUT_OF_RANGE,
            )

        phrase = " ".join(text.lower().split())
        anchor = patterns.ANCHOR.match(phrase)
        if anchor is None:
            first_word = phrase.split(" ", 1)[0]
            raise ScheduleError(
                f"Input must start with 'every' or 'on' (got: '{first_word}'). "
                "Expected format like 'every day at 2pm' or 'on january 15th'",
                ErrorKind.GRAMMAR_MISMATCH,
                phrase,
            )

        draft = _Draft(timezone=self._options.timezone)

        range_step = patterns.RANGE_STEP.search(phrase)
        if range_step is not None:
            self._resolve_range_step(phrase, range_step, draft)
            self._resolve_month(phrase, draft)
            draft.year = self._resolve_year(phrase)
            return draft.build(phrase)

        if anchor.group(1) == "on":
            draft.interval, draft.unit = 1, IntervalUnit.MONTHS
        else:
            draft.interval, draft.unit = self._resolve_interval(phrase)

        draft.time_of_day = self._resolve_time(phrase)

        if draft.unit.is_calendar:
            self._resolve_calendar_days(phrase, draft)
        else:
            self._reject_calendar_only_forms(phrase, draft.unit)
            draft.weekdays = self._resolve_weekdays(phrase)

        self._resolve_day_range(phrase, draft)
        self._resolve_month(phrase, draft)
        self._resolve_auxiliary(phrase, draft)
        draft.year = self._resolve_year(phrase)
        return draft.build(phrase)

    # -------------------------------------------------------------------------
    # Intervals
    # -------------------------------------------------------------------------

    def _resolve_interval(self, phrase: str) -> tuple[int, IntervalUnit]:
        match = patterns.INTERVAL.match(phrase)
        if match is not None:
            count = self._check_interval(match.group(1), phrase)
            return count, patterns.UNIT_WORDS[match.group(2)]
        if patterns.BARE_DAY.match(phrase):
            return 1, IntervalUnit.WEEKS
        raise ScheduleError(
            f"Unable to parse interval from: {phrase}. Expected format like "
            "'every 30 minutes', 'every day', or 'every monday'",
            ErrorKind.GRAMMAR_MISMATCH,
            phrase,
        )

    def _check_interval(self, digits: str | None, phrase: str) -> int:
        if digits is None:
            return 1
        count = int(digits)
        if count < 1:
            raise ScheduleError(
                "Interval must be a positive number (1 or greater)",
                ErrorKind.OUT_OF_RANGE,
                phrase,
            )
        if count > self._options.max_interval:
            raise ScheduleError(
                f"Interval too large: {count}. Maximum allowed is {self._options.max_interval}.",
                ErrorKind.OUT_OF_RANGE,
                phrase,
            )
        return count

    def _resolve_range_step(self, phrase: str, match: re.Match[str], draft: _Draft) -> None:
        step_text, unit_word, start_text, start_meridiem, end_text, end_meridiem, anchor = (
            match.groups()
        )
        unit = patterns.UNIT_WORDS[unit_word]
        expected_anchor = _RANGE_STEP_ANCHORS[unit]
        if anchor != expected_anchor:
            raise ScheduleError(
                f"A range of {unit.value} must end with 'of each {expected_anchor}' "
                f"(got: 'of each {anchor}')",
                ErrorKind.GRAMMAR_MISMATCH,
                phrase,
            )
        step = self._check_interval(step_text, phrase)

        if unit is IntervalUnit.HOURS:
            start = _to_24_hour(int(start_text), start_meridiem, phrase)
            end = _to_24_hour(int(end_text), end_meridiem, phrase)
        else:
            if start_meridiem or end_meridiem:
                raise ScheduleError(
                    "am/pm is only valid in hour ranges", ErrorKind.GRAMMAR_MISMATCH, phrase
                )
            low, high = (0, 59) if unit is IntervalUnit.MINUTES else (1, 31)
            start = _check_domain(int(start_text), low, high, unit.singular, phrase)
            end = _check_domain(int(end_text), low, high, unit.singular, phrase)
        _check_order(start, end, phrase)

        values = ValueRange(start, end, step)
        draft.interval, draft.unit = step, unit
        if unit is IntervalUnit.MINUTES:
            draft.minutes = values
        elif unit is IntervalUnit.HOURS:
            draft.hours = values
        else:
            draft.days = values

        # Only a day range leaves the hour and minute free for a time of day.
        time_of_day = self._resolve_time(phrase)
        if time_of_day is not None and unit is not IntervalUnit.DAYS:
            raise ScheduleError(
                f"A time of day cannot be combined with a range of {unit.value}",
                ErrorKind.GRAMMAR_MISMATCH,
                phrase,
            )
        draft.time_of_day = time_of_day

    # -------------------------------------------------------------------------
    # Time of day
    # -------------------------------------------------------------------------

    def _resolve_time(self, phrase: str) -> time | None:
        match = patterns.TIME.search(phrase)
        if match is None:
            return None
        hour_text, minute_text, meridiem = match.groups()
        hour = _to_24_hour(int(hour_text), meridiem, phrase)
        minute = int(minute_text) if minute_text else 0
        if not 0 <= minute <= 59:
            raise ScheduleError(
                f"Invalid minutes: {minute} (must be 0-59)", ErrorKind.OUT_OF_RANGE, phrase
            )
        return time(hour, minute)

    # -------------------------------------------------------------------------
    # Day constraints
    # -------------------------------------------------------------------------

    def _reject_calendar_only_forms(self, phrase: str, unit: IntervalUnit) -> None:
        for _, pattern in patterns.DAY_OPERATOR_RULES:
            match = pattern.search(phrase)
            if match is not None:
                raise ScheduleError(
                    f"'{match.group(0)}' is only valid with monthly (month/months) or "
                    f"yearly (year/years) intervals, not {unit.value}",
                    ErrorKind.GRAMMAR_MISMATCH,
                    phrase,
                )
        match = patterns.DAY_OF_MONTH.search(phrase)
        if match is not None:
            raise ScheduleError(
                f"Day-of-month (on {match.group(1)}) is only valid with monthly "
                f"(month/months) or yearly (year/years) intervals, not {unit.value}. "
                "Did you mean to use a day-of-week instead? (e.g., 'every monday')",
                ErrorKind.GRAMMAR_MISMATCH,
                phrase,
            )

    def _resolve_calendar_days(self, phrase: str, draft: _Draft) -> None:
        for name, pattern in patterns.DAY_OPERATOR_RULES:
            match = pattern.search(phrase)
            if match is not None:
                draft.day_operator = self._operator_builders[name](match)
                return

        # Days of the month are still read so build() can reject the pairing.
        draft.weekdays = self._resolve_weekdays(phrase)

        match = patterns.ORDINAL_DAY_LIST.search(phrase)
        if match is not None:
            numbers = [
                _check_day(int(number), phrase)
                for number in patterns.ORDINAL_NUMBER.findall(match.group(1))
            ]
            self._set_days(draft, tuple(sorted(set(numbers))))
            return

        match = patterns.COMPACT_DAY_LIST.search(phrase)
        if match is not None:
            values = expand_list_notation(match.group(1).replace(" ", ""), 1, 31)
            if not values:
                raise ScheduleError(
                    f"Day list must contain at least one day between 1 and 31: {match.group(1)}",
                    ErrorKind.OUT_OF_RANGE,
                    phrase,
                )
            self._set_days(draft, values)
            return

        match = patterns.DAY_OF_MONTH.search(phrase)
        if match is not None:
            draft.day_of_month = _check_day(int(match.group(1)), phrase)

    @staticmethod
    def _set_days(draft: _Draft, values: tuple[int, ...]) -> None:
        if len(values) == 1:
            draft.day_of_month = values[0]
        else:
            draft.days = collapse_values(values)

    def _resolve_day_range(self, phrase: str, draft: _Draft) -> None:
        match = patterns.DAY_RANGE.search(phrase)
        if match is None:
            return
        if draft.day_of_month is not None or draft.days is not None or draft.day_operator:
            raise ScheduleError(
                "Cannot combine a day range with another day-of-month constraint",
                ErrorKind.CONFLICTING,
                phrase,
            )
        start = _check_day(int(match.group(1)), phrase)
        end = _check_day(int(match.group(2)), phrase)
        _check_order(start, end, phrase)
        draft.days = ValueRange(start, end)

    # Advanced operators ------------------------------------------------------

    def _last_weekday(self, match: re.Match[str]) -> DayOperator:
        return LastWeekdayOfMonth()

    def _days_before_last(self, match: re.Match[str]) -> DayOperator:
        offset = int(match.group(1)) if match.group(1) else 1
        if not 1 <= offset <= 30:
            raise ScheduleError(
                f"Days before last must be 1-30, got: {offset}",
                ErrorKind.OUT_OF_RANGE,
                match.string,
            )
        return DaysBeforeLast(offset)

    def _last_day(self, match: re.Match[str]) -> DayOperator:
        return LastDay()

    def _last_occurrence(self, match: re.Match[str]) -> DayOperator:
        return LastWeekdayOccurrence(patterns.WEEKDAY_NAMES[match.group(1)])

    def _nearest_weekday(self, match: re.Match[str]) -> DayOperator:
        day = int(match.group(1))
        if not 1 <= day <= 31:
            raise ScheduleError(
                f"Day for weekday nearest must be 1-31, got: {day}",
                ErrorKind.OUT_OF_RANGE,
                match.string,
            )
        return NearestWeekday(day)

    def _nth_weekday(self, match: re.Match[str]) -> DayOperator:
        occurrence = int(match.group(1))
        if not 1 <= occurrence <= 5:
            raise ScheduleError(
                f"Occurrence number must be 1-5, got: {occurrence}",
                ErrorKind.OUT_OF_RANGE,
                match.string,
            )
        return NthWeekday(patterns.WEEKDAY_NAMES[match.group(2)], occurrence)

    # Day-of-week forms -------------------------------------------------------

    def _resolve_weekdays(self, phrase: str) -> WeekdaySelection | None:
        leading = self._first_weekday_form(phrase, patterns.LEADING_WEEKDAY_RULES)
        trailing = self._first_weekday_form(phrase, patterns.TRAILING_WEEKDAY_RULES)
        if leading is not None and trailing is not None and leading != trailing:
            raise ScheduleError(
                "Cannot specify both a specific day and a day pattern: "
                f"'{_describe(leading)}' and '{_describe(trailing)}'",
                ErrorKind.CONFLICTING,
                phrase,
            )
        return leading if leading is not None else trailing

    def _first_weekday_form(
        self,
        phrase: str,
        rules: tuple[tuple[str, re.Pattern[str]], ...],
    ) -> WeekdaySelection | None:
        for kind, pattern in rules:
            match = pattern.search(phrase)
            if match is None:
                continue
            if kind == "list":
                return _weekday_list(match.group(1), phrase)
            if kind == "range":
                return _weekday_range(match.group(1), match.group(2), phrase)
            if kind == "between":
                return _weekday_between(match.group(1), match.group(2), phrase)
            return _weekday_single(match.group(1))
        return None

    # -------------------------------------------------------------------------
    # Months
    # -------------------------------------------------------------------------

    def _resolve_month(self, phrase: str, draft: _Draft) -> None:
        for kind, pattern in patterns.MONTH_RULES:
            match = pattern.search(phrase)
            if match is None:
                continue
            if kind == "month_and_day":
                self._apply_month_and_day(phrase, match, draft)
            elif kind == "list":
                draft.month = _month_list(match.group(1), phrase)
            elif kind == "range":
                start = patterns.MONTH_NAMES[match.group(1)]
                end = patterns.MONTH_NAMES[match.group(2)]
                if start >= end:
                    raise ScheduleError(
                        f"Month range start ({match.group(1)}) must be before end ({match.group(2)})",
                        ErrorKind.OUT_OF_RANGE,
                        phrase,
                    )
                draft.month = MonthRange(start, end)
            else:
                draft.month = SingleMonth(patterns.MONTH_NAMES[match.group(1)])
            return

    def _apply_month_and_day(self, phrase: str, match: re.Match[str], draft: _Draft) -> None:
        if not draft.unit.is_calendar:
            raise ScheduleError(
                f"'{match.group(0)}' is only valid with monthly (month/months) or "
                f"yearly (year/years) intervals, not {draft.unit.value}",
                ErrorKind.GRAMMAR_MISMATCH,
                phrase,
            )
        if draft.day_operator is not None or draft.weekdays is not None:
            raise ScheduleError(
                f"Cannot combine '{match.group(0)}' with another day constraint",
                ErrorKind.CONFLICTING,
                phrase,
            )
        day = int(match.group(2))
        if not 1 <= day <= 31:
            raise ScheduleError(
                f"Invalid day of month: {day}. Must be 1-31.", ErrorKind.OUT_OF_RANGE, phrase
            )
        draft.month = SingleMonth(patterns.MONTH_NAMES[match.group(1)])
        draft.day_of_month = day
        draft.days = None

    # -------------------------------------------------------------------------
    # Auxiliary minute and hour values
    # -------------------------------------------------------------------------

    def _resolve_auxiliary(self, phrase: str, draft: _Draft) -> None:
        draft.seconds = _sixty_values(
            phrase, patterns.SECOND_LIST, patterns.SECOND_RANGE, "second"
        )
        draft.minutes = _sixty_values(
            phrase, patterns.MINUTE_LIST, patterns.MINUTE_RANGE, "minute"
        )

        match = patterns.HOUR_LIST.search(phrase)
        if match is not None:
            draft.hours = _value_list(match.group(1), 0, 23, "hour", phrase)
        else:
            match = patterns.HOUR_RANGE.search(phrase)
            if match is not None:
                start = _to_24_hour(int(match.group(1)), match.group(2), phrase)
                end = _to_24_hour(int(match.group(3)), match.group(4), phrase)
                _check_order(start, end, phrase)
                draft.hours = ValueRange(start, end)

        match = patterns.DAY_VALUES.search(phrase)
        if match is not None:
            if (
                draft.day_of_month is not None
                or draft.days is not None
                or draft.day_operator is not None
            ):
                raise ScheduleError(
                    "Cannot combine day values with another day-of-month constraint",
                    ErrorKind.CONFLICTING,
                    phrase,
                )
            values = expand_list_notation(match.group(1), 1, 31)
            if not values:
                raise ScheduleError(
                    f"No valid day values in '{match.group(1)}' (must be 1-31)",
                    ErrorKind.OUT_OF_RANGE,
                    phrase,
                )
            self._set_days(draft, values)

    # -------------------------------------------------------------------------
    # Year
    # -------------------------------------------------------------------------

    def _resolve_year(self, phrase: str) -> int | None:
        match = patterns.YEAR.search(phrase)
        if match is None:
            return None
        return _check_domain(int(match.group(1)), 1970, 2099, "year", phrase)


# =============================================================================
# Helpers
# =============================================================================


def _to_24_hour(hour: int, meridiem: str | None, phrase: str) -> int:
    """Convert an hour with optional am/pm to the 24-hour clock."""
    if meridiem:
        if not 1 <= hour <= 12:
            raise ScheduleError(
                f"Invalid hour for 12-hour format: {hour} (must be 1-12)",
                ErrorKind.OUT_OF_RANGE,
                phrase,
            )
        if meridiem == "am":
            return 0 if hour == 12 else hour
        return 12 if hour == 12 else hour + 12
    if not 0 <= hour <= 23:
        raise ScheduleError(
            f"Invalid hour for 24-hour format: {hour} (must be 0-23)",
            ErrorKind.OUT_OF_RANGE,
            phrase,
        )
    return hour


def _check_domain(value: int, low: int, high: int, name: str, phrase: str) -> int:
    if not low <= value <= high:
        raise ScheduleError(
            f"Invalid {name}: {value} (must be {low}-{high})", ErrorKind.OUT_OF_RANGE, phrase
        )
    return value


def _check_day(day: int, phrase: str) -> int:
    if not 1 <= day <= 31:
        raise ScheduleError(
            f"Day of month must be 1-31, got: {day}", ErrorKind.OUT_OF_RANGE, phrase
        )
    return day


def _check_order(start: int, end: int, phrase: str) -> None:
    if start > end:
        raise ScheduleError(
            f"Range start ({start}) must not be after end ({end})",
            ErrorKind.OUT_OF_RANGE,
            phrase,
        )


def _sixty_values(
    phrase: str,
    list_pattern: re.Pattern[str],
    range_pattern: re.Pattern[str],
    name: str,
) -> ValueSet | None:
    """Resolve a 0-59 field from its list form, else its range form."""
    match = list_pattern.search(phrase)
    if match is not None:
        return _value_list(match.group(1), 0, 59, name, phrase)
    match = range_pattern.search(phrase)
    if match is None:
        return None
    start = _check_domain(int(match.group(1)), 0, 59, name, phrase)
    end = _check_domain(int(match.group(2)), 0, 59, name, phrase)
    _check_order(start, end, phrase)
    return ValueRange(start, end)


def _value_list(text: str, low: int, high: int, name: str, phrase: str) -> ValueSet:
    values = expand_list_notation(text, low, high)
    if not values:
        raise ScheduleError(
            f"No valid {name} values in '{text}' (must be {low}-{high})",
            ErrorKind.OUT_OF_RANGE,
            phrase,
        )
    return collapse_values(values)


def _weekday_single(word: str) -> WeekdaySelection:
    if word.startswith("weekday"):
        return WeekdayPatternSelection(DayPattern.WEEKDAYS)
    if word.startswith("weekend"):
        return WeekdayPatternSelection(DayPattern.WEEKENDS)
    return SingleWeekday(patterns.WEEKDAY_NAMES[word])


def _weekday_list(text: str, phrase: str) -> WeekdaySelection:
    days: list[Weekday] = []
    for name in text.split(","):
        day = patterns.WEEKDAY_NAMES[name.strip().removesuffix("s")]
        if day not in days:
            days.append(day)
    if len(days) < 2:
        raise ScheduleError(
            "Day-of-week list must contain at least 2 days", ErrorKind.GRAMMAR_MISMATCH, phrase
        )
    return WeekdayList(tuple(days))


def _weekday_range(first: str, last: str, phrase: str) -> WeekdaySelection:
    start = patterns.WEEKDAY_NAMES[first]
    end = patterns.WEEKDAY_NAMES[last]
    if start == end:
        raise ScheduleError(
            f"Day-of-week range must span at least 2 days (got: {first}-{last})",
            ErrorKind.GRAMMAR_MISMATCH,
            phrase,
        )
    return WeekdayRange(start, end)


def _weekday_between(first: str, last: str, phrase: str) -> WeekdaySelection:
    span = (patterns.WEEKDAY_NAMES[first], patterns.WEEKDAY_NAMES[last])
    if span == _WEEKDAY_SPAN:
        return WeekdayPatternSelection(DayPattern.WEEKDAYS)
    if span == _WEEKEND_SPAN:
        return WeekdayPatternSelection(DayPattern.WEEKENDS)
    raise ScheduleError(
        "Day ranges other than 'between monday and friday' (weekdays) or "
        "'between saturday and sunday' (weekends) are not yet supported. "
        f"Found: {first} to {last}. Try using compact notation instead: "
        f"'every {first}-{last}'",
        ErrorKind.GRAMMAR_MISMATCH,
        phrase,
    )


def _month_list(text: str, phrase: str) -> MonthSpecifier:
    months: set[int] = set()
    for segment in text.replace(" ", "").split(","):
        first, _, last = segment.partition("-")
        start = patterns.MONTH_NAMES[first]
        end = patterns.MONTH_NAMES[last] if last else start
        if start > end:
            raise ScheduleError(
                f"Month range start ({first}) must be before end ({last})",
                ErrorKind.OUT_OF_RANGE,
                phrase,
            )
        months.update(range(start, end + 1))
    if len(months) < 2:
        raise ScheduleError(
            "Month list must contain at least 2 months", ErrorKind.GRAMMAR_MISMATCH, phrase
        )
    ordered = sorted(months)
    if ordered[-1] - ordered[0] == len(ordered) - 1:
        return MonthRange(ordered[0], ordered[-1])
    return MonthList(tuple(ordered))


def _describe(selection: WeekdaySelection) -> str:
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


# =============================================================================
# Module-level API
# =============================================================================


def parse(text: str, options: ParserOptions | None = None) -> Result[ScheduleSpec]:
    """Parse a phrase with the given options (or library defaults).

    Args:
        text: Natural-language phrase.
        options: Parser options; library defaults when omitted.

    Returns:
        ``Success`` with the specification or ``Error``.
    """
    return NaturalLanguageParser(options).parse(text)
