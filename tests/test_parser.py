"""Tests for the natural-language parser.

Covers intervals, times of day, day-of-week forms, day-of-month forms,
advanced day operators, months, auxiliary values, years and the error
messages reported for rejected phrases.
"""

from datetime import time

import pytest

from humancron.config import ParserOptions
from humancron.errors import ErrorKind
from humancron.parser import NaturalLanguageParser, parse
from humancron.result import Error, Success
from humancron.schedule import (
    DayPattern,
    DaysBeforeLast,
    IntervalUnit,
    LastDay,
    LastWeekdayOccurrence,
    LastWeekdayOfMonth,
    MonthList,
    MonthRange,
    NearestWeekday,
    NoMonth,
    NthWeekday,
    SingleMonth,
    SingleWeekday,
    ValueList,
    ValueRange,
    Weekday,
    WeekdayList,
    WeekdayPatternSelection,
    WeekdayRange,
)


def parsed(text, options=None):
    result = parse(text, options)
    assert isinstance(result, Success), result
    return result.value


def rejected(text, options=None):
    result = parse(text, options)
    assert isinstance(result, Error), result
    return result


# =============================================================================
# Intervals
# =============================================================================


class TestIntervals:
    """Tests for interval and unit resolution."""

    @pytest.mark.parametrize(
        "text,interval,unit",
        [
            ("every second", 1, IntervalUnit.SECONDS),
            ("every 10 seconds", 10, IntervalUnit.SECONDS),
            ("every minute", 1, IntervalUnit.MINUTES),
            ("every 30 minutes", 30, IntervalUnit.MINUTES),
            ("every hour", 1, IntervalUnit.HOURS),
            ("every 2 hours", 2, IntervalUnit.HOURS),
            ("every day", 1, IntervalUnit.DAYS),
            ("every 3 days", 3, IntervalUnit.DAYS),
            ("every week", 1, IntervalUnit.WEEKS),
            ("every month", 1, IntervalUnit.MONTHS),
            ("every year", 1, IntervalUnit.YEARS),
        ],
    )
    def test_interval_and_unit(self, text, interval, unit):
        """Test count and unit words."""
        spec = parsed(text)
        assert spec.interval == interval
        assert spec.unit is unit

    def test_bare_weekday_is_weekly(self):
        """Test that "every monday" repeats weekly."""
        spec = parsed("every monday")
        assert spec.unit is IntervalUnit.WEEKS
        assert spec.weekdays == SingleWeekday(Weekday.MONDAY)

    def test_on_anchor_is_monthly(self):
        """Test that phrases starting with "on" repeat monthly."""
        spec = parsed("on january 15th")
        assert spec.unit is IntervalUnit.MONTHS
        assert spec.interval == 1

    def test_case_and_whitespace_are_ignored(self):
        """Test that input is lower-cased and whitespace collapsed."""
        assert parsed("  Every   DAY  at 2PM ") == parsed("every day at 2pm")

    def test_timezone_from_options(self):
        """Test that the parsed zone comes from the parser options."""
        spec = parsed("every day at 2pm", ParserOptions(timezone="America/New_York"))
        assert spec.timezone == "America/New_York"

    def test_timezone_from_config(self, default_config):
        """Test that the default zone comes from configuration."""
        assert parsed("every day").timezone == default_config.default_timezone

    def test_parser_is_reusable(self):
        """Test that one parser instance handles several phrases."""
        parser = NaturalLanguageParser()
        first = parser.parse("every day at 2pm")
        second = parser.parse("every monday")
        assert isinstance(first, Success)
        assert isinstance(second, Success)
        assert first.value.unit is IntervalUnit.DAYS
        assert second.value.unit is IntervalUnit.WEEKS


# =============================================================================
# Time of Day
# =============================================================================


class TestTimeOfDay:
    """Tests for time-of-day parsing."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("every day at 2pm", time(14, 0)),
            ("every day at 2:30pm", time(14, 30)),
            ("every day at 9am", time(9, 0)),
            ("every day at 12am", time(0, 0)),
            ("every day at 12pm", time(12, 0)),
            ("every day at 14:30", time(14, 30)),
            ("every day at 0:05", time(0, 5)),
            ("every day at 8:30 am", time(8, 30)),
        ],
    )
    def test_time_forms(self, text, expected):
        """Test 12-hour and 24-hour forms."""
        assert parsed(text).time_of_day == expected

    def test_no_time(self):
        """Test that a phrase without "at" has no time of day."""
        assert parsed("every day").time_of_day is None

    def test_invalid_12_hour(self):
        """Test hours outside 1-12 with am/pm."""
        error = rejected("every day at 13pm")
        assert error.message == "Invalid hour for 12-hour format: 13 (must be 1-12)"
        assert error.kind is ErrorKind.OUT_OF_RANGE

    def test_zero_am_is_invalid(self):
        """Test that 0am is rejected."""
        error = rejected("every day at 0am")
        assert error.message == "Invalid hour for 12-hour format: 0 (must be 1-12)"

    def test_invalid_24_hour(self):
        """Test hours outside 0-23 without am/pm."""
        error = rejected("every day at 24:00")
        assert error.message == "Invalid hour for 24-hour format: 24 (must be 0-23)"
        assert error.kind is ErrorKind.OUT_OF_RANGE

    def test_invalid_minutes(self):
        """Test minutes outside 0-59."""
        error = rejected("every day at 9:75")
        assert error.message == "Invalid minutes: 75 (must be 0-59)"


# =============================================================================
# Day-of-week Forms
# =============================================================================


class TestWeekdays:
    """Tests for day-of-week forms."""

    def test_weekday_pattern(self):
        """Test "every weekday"."""
        spec = parsed("every weekday at 9am")
        assert spec.weekdays == WeekdayPatternSelection(DayPattern.WEEKDAYS)
        assert spec.unit is IntervalUnit.WEEKS

    def test_weekend_pattern(self):
        """Test "every weekend"."""
        spec = parsed("every weekend")
        assert spec.weekdays == WeekdayPatternSelection(DayPattern.WEEKENDS)

    def test_day_list(self):
        """Test comma-separated day lists keep their order."""
        spec = parsed("every monday,wednesday,friday at 8:30am")
        assert spec.weekdays == WeekdayList(
            (Weekday.MONDAY, Weekday.WEDNESDAY, Weekday.FRIDAY)
        )
        assert spec.time_of_day == time(8, 30)

    def test_day_list_with_abbreviations(self):
        """Test abbreviated day names."""
        spec = parsed("every mon,fri")
        assert spec.weekdays == WeekdayList((Weekday.MONDAY, Weekday.FRIDAY))

    def test_compact_range(self):
        """Test "every tuesday-thursday"."""
        spec = parsed("every tuesday-thursday")
        assert spec.weekdays == WeekdayRange(Weekday.TUESDAY, Weekday.THURSDAY)

    def test_wrapping_range(self):
        """Test ranges that wrap across Saturday."""
        spec = parsed("every friday-monday")
        assert spec.weekdays == WeekdayRange(Weekday.FRIDAY, Weekday.MONDAY)
        assert spec.weekdays.days() == (
            Weekday.FRIDAY, Weekday.SATURDAY, Weekday.SUNDAY, Weekday.MONDAY,
        )

    def test_between_monday_and_friday(self):
        """Test the "between" form for weekdays."""
        spec = parsed("every day between monday and friday")
        assert spec.weekdays == WeekdayPatternSelection(DayPattern.WEEKDAYS)

    def test_between_other_days_rejected(self):
        """Test that other "between" day ranges suggest compact notation."""
        error = rejected("every day between tuesday and thursday")
        assert "'every tuesday-thursday'" in error.message

    def test_trailing_weekday(self):
        """Test "on weekdays" refining a sub-daily schedule."""
        spec = parsed("every 15 minutes on weekdays")
        assert spec.unit is IntervalUnit.MINUTES
        assert spec.weekdays == WeekdayPatternSelection(DayPattern.WEEKDAYS)

    def test_conflicting_weekdays(self):
        """Test two different weekday forms."""
        error = rejected("every monday on tuesday")
        assert error.message == (
            "Cannot specify both a specific day and a day pattern: 'monday' and 'tuesday'"
        )
        assert error.kind is ErrorKind.CONFLICTING

    def test_same_range_endpoints_rejected(self):
        """Test a compact range naming one day twice."""
        error = rejected("every monday-monday")
        assert "at least 2 days" in error.message

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("every minute on mondays", SingleWeekday(Weekday.MONDAY)),
            ("every mondays at 9am", SingleWeekday(Weekday.MONDAY)),
            ("every hour on fridays", SingleWeekday(Weekday.FRIDAY)),
            ("every 15 minutes on tues", SingleWeekday(Weekday.TUESDAY)),
            (
                "every mondays,fridays",
                WeekdayList((Weekday.MONDAY, Weekday.FRIDAY)),
            ),
            (
                "every day on tuesdays-thursdays",
                WeekdayRange(Weekday.TUESDAY, Weekday.THURSDAY),
            ),
        ],
    )
    def test_plural_day_names(self, text, expected):
        """Test that plural day names are read, not skipped."""
        assert parsed(text).weekdays == expected

    def test_plural_day_keeps_unit(self):
        """Test that a plural day refines a sub-daily schedule."""
        spec = parsed("every minute on mondays")
        assert spec.unit is IntervalUnit.MINUTES
        assert spec.interval == 1

    def test_month_word_is_not_a_day(self):
        """Test that "months" is not read as "mon" plus a plural."""
        spec = parsed("every 2 months on the 1st")
        assert spec.weekdays is None
        assert spec.unit is IntervalUnit.MONTHS


# =============================================================================
# Day-of-month Forms
# =============================================================================


class TestDaysOfMonth:
    """Tests for day-of-month forms."""

    def test_single_day(self):
        """Test "on the 15th"."""
        spec = parsed("every month on the 15th at 9am")
        assert spec.day_of_month == 15
        assert spec.days is None

    def test_ordinal_list(self):
        """Test "on the 1st, 10th and 20th"."""
        spec = parsed("every month on the 1st, 10th and 20th")
        assert spec.days == ValueList((1, 10, 20))
        assert spec.day_of_month is None

    def test_ordinal_pair(self):
        """Test "on the 1st and 15th"."""
        assert parsed("every month on the 1st and 15th").days == ValueList((1, 15))

    def test_compact_list(self):
        """Test compact day lists with runs."""
        spec = parsed("every month on the 1-7,15")
        assert spec.days == ValueList((1, 2, 3, 4, 5, 6, 7, 15))

    def test_compact_single_run_becomes_range(self):
        """Test that one consecutive run is stored as a range."""
        assert parsed("every month on the 1-7").days == ValueRange(1, 7)

    def test_day_range(self):
        """Test "between the 1st and 7th"."""
        spec = parsed("every day between the 1st and 7th")
        assert spec.days == ValueRange(1, 7)
        assert spec.unit is IntervalUnit.DAYS

    def test_day_out_of_range(self):
        """Test days above 31."""
        error = rejected("every month on the 32nd")
        assert error.message == "Day of month must be 1-31, got: 32"
        assert error.kind is ErrorKind.OUT_OF_RANGE

    def test_day_of_month_needs_calendar_unit(self):
        """Test that a day of month is rejected for daily schedules."""
        error = rejected("every day on the 15th")
        assert error.message.startswith(
            "Day-of-month (on 15) is only valid with monthly (month/months) or "
            "yearly (year/years) intervals, not days."
        )
        assert error.kind is ErrorKind.GRAMMAR_MISMATCH

    def test_weekday_with_day_of_month_conflicts(self):
        """Test that a weekday and a day of month are not silently merged."""
        error = rejected("every month on monday on the 1st")
        assert error.message == (
            "Cannot combine a day-of-week constraint with day-of-month "
            "constraints in the same schedule"
        )
        assert error.kind is ErrorKind.CONFLICTING

    @pytest.mark.parametrize(
        "text,day_of_month,days",
        [
            ("every 15 minutes at days 1", 1, None),
            ("every hour at days 1,15", None, ValueList((1, 15))),
            ("every 3 days at days 1-15/3", None, ValueList((1, 4, 7, 10, 13))),
            ("every minute at days 1-3", None, ValueRange(1, 3)),
        ],
    )
    def test_day_values_below_monthly(self, text, day_of_month, days):
        """Test "at days ..." for units shorter than a month."""
        spec = parsed(text)
        assert spec.day_of_month == day_of_month
        assert spec.days == days

    def test_day_values_conflict_with_day_of_month(self):
        """Test that "at days" cannot be added to another day constraint."""
        error = rejected("every month on the 15th at days 1")
        assert error.message == "Cannot combine day values with another day-of-month constraint"
        assert error.kind is ErrorKind.CONFLICTING

    def test_month_and_day(self):
        """Test "on january 15th"."""
        spec = parsed("on january 15th at 9am")
        assert spec.month == SingleMonth(1)
        assert spec.day_of_month == 15
        assert spec.time_of_day == time(9, 0)


# =============================================================================
# Advanced Day Operators
# =============================================================================


class TestDayOperators:
    """Tests for last-day, nearest-weekday and nth-weekday forms."""

    @pytest.mark.parametrize(
        "text,operator",
        [
            ("every month on the last day", LastDay()),
            ("every month on the last day of the month", LastDay()),
            ("every month on the last weekday", LastWeekdayOfMonth()),
            ("every month on the 3rd to last day", DaysBeforeLast(3)),
            ("every month on the day before last", DaysBeforeLast(1)),
            ("every month on the weekday nearest the 15th", NearestWeekday(15)),
            ("every month on the 3rd friday", NthWeekday(Weekday.FRIDAY, 3)),
            ("every month on the 1st monday", NthWeekday(Weekday.MONDAY, 1)),
            ("every month on the last friday", LastWeekdayOccurrence(Weekday.FRIDAY)),
        ],
    )
    def test_operator(self, text, operator):
        """Test each operator form."""
        spec = parsed(text)
        assert spec.day_operator == operator
        assert spec.weekdays is None
        assert spec.day_of_month is None

    def test_occurrence_out_of_range(self):
        """Test occurrences above 5."""
        error = rejected("every month on the 6th monday")
        assert error.message == "Occurrence number must be 1-5, got: 6"
        assert error.kind is ErrorKind.OUT_OF_RANGE

    def test_operator_needs_calendar_unit(self):
        """Test that operators are rejected for weekly schedules."""
        error = rejected("every week on the last day")
        assert "'last day' is only valid with monthly" in error.message

    def test_operator_with_month(self):
        """Test an operator limited to some months."""
        spec = parsed("every month on the last day in march,june,september,december")
        assert spec.day_operator == LastDay()
        assert spec.month == MonthList((3, 6, 9, 12))


# =============================================================================
# Months
# =============================================================================


class TestMonths:
    """Tests for month forms."""

    def test_single_month(self):
        """Test "in january"."""
        assert parsed("every day in january").month == SingleMonth(1)

    def test_month_list(self):
        """Test "in january,april,july,october"."""
        spec = parsed("every weekday in january,april,july,october at 9am")
        assert spec.month == MonthList((1, 4, 7, 10))

    def test_contiguous_list_becomes_range(self):
        """Test that a list of consecutive months is stored as a range."""
        assert parsed("every day in jan,feb,mar").month == MonthRange(1, 3)

    def test_compact_month_range(self):
        """Test "in jan-mar,jul"."""
        assert parsed("every day in jan-mar,jul").month == MonthList((1, 2, 3, 7))

    def test_month_range(self):
        """Test "between january and march"."""
        assert parsed("every day between january and march").month == MonthRange(1, 3)

    def test_reversed_month_range(self):
        """Test that a backwards month range is rejected."""
        error = rejected("every day between march and january")
        assert error.message == "Month range start (march) must be before end (january)"

    def test_reversed_compact_month_range(self):
        """Test that a backwards compact month range is rejected."""
        error = rejected("every day in march-january")
        assert error.message == "Month range start (march) must be before end (january)"

    def test_no_month(self):
        """Test that phrases without a month leave it open."""
        assert parsed("every day").month == NoMonth()


# =============================================================================
# Auxiliary Values and Ranges With Steps
# =============================================================================


class TestAuxiliaryValues:
    """Tests for second, minute and hour values."""

    def test_hour_list(self):
        """Test "at hours 9-11,17"."""
        spec = parsed("every day at hours 9-11,17")
        assert spec.hours == ValueList((9, 10, 11, 17))
        assert spec.time_of_day is None

    def test_hour_range(self):
        """Test "between hours 9am and 5pm"."""
        assert parsed("every day between hours 9am and 5pm").hours == ValueRange(9, 17)

    def test_minute_list(self):
        """Test "at minutes 0,30"."""
        assert parsed("every hour at minutes 0,30").minutes == ValueList((0, 30))

    def test_minute_range(self):
        """Test "between minutes 0 and 30"."""
        assert parsed("every minute between minutes 0 and 30").minutes == ValueRange(0, 30)

    def test_second_list(self):
        """Test "at seconds 30"."""
        spec = parsed("every day at seconds 30 at 9am")
        assert spec.seconds == ValueList((30,))
        assert spec.time_of_day == time(9, 0)

    def test_minute_range_with_step(self):
        """Test "every 5 minutes between 0 and 30 of each hour"."""
        spec = parsed("every 5 minutes between 0 and 30 of each hour")
        assert spec.interval == 5
        assert spec.unit is IntervalUnit.MINUTES
        assert spec.minutes == ValueRange(0, 30, 5)

    def test_hour_range_with_step(self):
        """Test "every 2 hours between 9am and 5pm of each day"."""
        spec = parsed("every 2 hours between 9am and 5pm of each day")
        assert spec.unit is IntervalUnit.HOURS
        assert spec.hours == ValueRange(9, 17, 2)

    def test_day_range_with_step(self):
        """Test "every 2 days between the 1st and 15th of each month"."""
        spec = parsed("every 2 days between the 1st and 15th of each month")
        assert spec.unit is IntervalUnit.DAYS
        assert spec.days == ValueRange(1, 15, 2)

    def test_day_range_with_step_and_time(self):
        """Test that a day range with step may carry a time of day."""
        spec = parsed("every 3 days between the 1st and 15th of each month at 12am")
        assert spec.days == ValueRange(1, 15, 3)
        assert spec.time_of_day == time(0, 0)

    def test_minute_range_with_step_rejects_time(self):
        """Test that a minute range leaves no room for a time of day."""
        error = rejected("every 5 minutes between 0 and 30 of each hour at 9am")
        assert error.message == "A time of day cannot be combined with a range of minutes"
        assert error.kind is ErrorKind.GRAMMAR_MISMATCH

    def test_range_with_wrong_anchor(self):
        """Test that a minute range must end with "of each hour"."""
        error = rejected("every 5 minutes between 0 and 30 of each day")
        assert error.message == (
            "A range of minutes must end with 'of each hour' (got: 'of each day')"
        )

    def test_range_backwards(self):
        """Test that a range start after its end is rejected."""
        error = rejected("every 5 minutes between 30 and 10 of each hour")
        assert error.message == "Range start (30) must not be after end (10)"


# =============================================================================
# Year
# =============================================================================


class TestYear:
    """Tests for the year form."""

    def test_year(self):
        """Test "in year 2025"."""
        assert parsed("every month on the 15th in year 2025").year == 2025

    def test_year_out_of_range(self):
        """Test years outside 1970-2099."""
        error = rejected("every day in year 2100")
        assert error.message == "Invalid year: 2100 (must be 1970-2099)"


# =============================================================================
# Rejected Input
# =============================================================================


class TestRejectedInput:
    """Tests for input-level errors."""

    @pytest.mark.parametrize("text", ["", "   "])
    def test_empty(self, text):
        """Test empty and blank input."""
        error = rejected(text)
        assert error.message == "Input cannot be empty"
        assert error.kind is ErrorKind.EMPTY_INPUT

    def test_wrong_anchor(self):
        """Test input that does not start with every/on."""
        error = rejected("daily at 2pm")
        assert error.message.startswith("Input must start with 'every' or 'on' (got: 'daily')")
        assert error.kind is ErrorKind.GRAMMAR_MISMATCH

    def test_unknown_unit(self):
        """Test an unrecognised interval unit."""
        error = rejected("every fortnight")
        assert error.message.startswith("Unable to parse interval from: every fortnight")

    def test_zero_interval(self):
        """Test a zero interval."""
        error = rejected("every 0 minutes")
        assert error.message == "Interval must be a positive number (1 or greater)"
        assert error.kind is ErrorKind.OUT_OF_RANGE

    def test_interval_too_large(self):
        """Test intervals above the configured maximum."""
        error = rejected("every 1001 minutes")
        assert error.message == "Interval too large: 1001. Maximum allowed is 1000."

    def test_interval_limit_from_options(self):
        """Test a custom interval limit."""
        error = rejected("every 11 minutes", ParserOptions(max_interval=10))
        assert error.message == "Interval too large: 11. Maximum allowed is 10."

    def test_input_too_long(self):
        """Test input above the configured length."""
        error = rejected("every day " * 200)
        assert error.message == (
            "Natural language input exceeds maximum length of 1000 characters"
        )
        assert error.kind is ErrorKind.OUT_OF_RANGE
