"""Tests for the Quartz cron converter."""

from datetime import time

import pytest

from humancron.cron.quartz import QuartzCronConverter
from humancron.errors import ErrorKind
from humancron.parser import parse
from humancron.result import Error, Success, unwrap
from humancron.schedule import (
    DayPattern,
    DaysBeforeLast,
    IntervalUnit,
    LastDay,
    LastWeekdayOccurrence,
    LastWeekdayOfMonth,
    NearestWeekday,
    NthWeekday,
    ScheduleSpec,
    SingleWeekday,
    Weekday,
    WeekdayPatternSelection,
)


@pytest.fixture
def converter(winter_clock):
    return QuartzCronConverter(local_timezone="UTC", clock=winter_clock)


def encode(converter, text):
    result = converter.to_cron(unwrap(parse(text)))
    assert isinstance(result, Success), result
    return result.value


def decode(converter, expression):
    result = converter.from_cron(expression)
    assert isinstance(result, Success), result
    return result.value


# =============================================================================
# Encoding Tests
# =============================================================================


class TestQuartzEncoding:
    """Tests for rendering specifications as Quartz expressions."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("every second", "* * * * * ?"),
            ("every 10 seconds", "*/10 * * * * ?"),
            ("every 30 minutes", "0 */30 * * * ?"),
            ("every day at 2pm", "0 0 14 * * ?"),
            ("every month", "0 0 0 1 * ?"),
            ("every weekday at 9am", "0 0 9 ? * MON-FRI"),
            ("every weekend at 12pm", "0 0 12 ? * SAT,SUN"),
            ("every monday,friday at 9am", "0 0 9 ? * MON,FRI"),
            ("every friday-monday at 9am", "0 0 9 ? * FRI,SAT,SUN,MON"),
            ("every month on the 15th at 9am", "0 0 9 15 * ?"),
            ("on january 15th at 9am", "0 0 9 15 1 ?"),
            ("every month on the 15th in year 2025", "0 0 0 15 * ? 2025"),
            ("every sat,sun", "0 0 0 ? * SAT,SUN"),
            ("every saturday-sunday at 12pm", "0 0 12 ? * SAT,SUN"),
            ("every month on weekdays", "0 0 0 ? * MON-FRI"),
            ("every hour on fridays", "0 0 * ? * FRI"),
        ],
    )
    def test_encode(self, converter, text, expected):
        """Test phrase to expression."""
        assert encode(converter, text) == expected

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("every month on the last day at 2pm", "0 0 14 L * ?"),
            ("every month on the last weekday", "0 0 0 LW * ?"),
            ("every month on the 3rd to last day", "0 0 0 L-3 * ?"),
            ("every month on the day before last", "0 0 0 L-1 * ?"),
            ("every month on the weekday nearest the 15th", "0 0 0 15W * ?"),
            ("every month on the 3rd friday", "0 0 0 ? * 6#3"),
            ("every month on the 1st monday at 9am", "0 0 9 ? * 2#1"),
            ("every month on the last monday", "0 0 0 ? * 2L"),
            ("every month on the last friday at 5pm", "0 0 17 ? * 6L"),
            ("every month on the last day in january", "0 0 0 L 1 ?"),
            ("every month on the last day in january,april,july,october", "0 0 0 L 1,4,7,10 ?"),
            ("on the 3rd friday at 9am in january", "0 0 9 ? 1 6#3"),
            ("on the last friday in january", "0 0 0 ? 1 6L"),
            ("on the last day at 6pm in january", "0 0 18 L 1 ?"),
        ],
    )
    def test_encode_operators(self, converter, text, expected):
        """Test day operators."""
        assert encode(converter, text) == expected

    def test_week_defaults_to_today(self, converter):
        """Test that "every week" names the clock's current weekday."""
        assert encode(converter, "every week") == "0 0 0 ? * WED"

    def test_time_not_converted(self, converter):
        """Test that the time of day is written in the phrase's zone."""
        spec = ScheduleSpec(time_of_day=time(14, 0), timezone="America/New_York")
        assert unwrap(converter.to_cron(spec)) == "0 0 14 * * ?"

    def test_seconds_values(self, converter):
        """Test explicit seconds."""
        assert encode(converter, "every day at seconds 30 at 9am") == "30 0 9 * * ?"

    def test_weekday_with_day_of_month_rejected(self, converter):
        """Test that weekdays and a day of month cannot be combined."""
        spec = ScheduleSpec(
            unit=IntervalUnit.MONTHS,
            weekdays=SingleWeekday(Weekday.MONDAY),
            day_of_month=15,
        )
        result = converter.to_cron(spec)
        assert isinstance(result, Error)
        assert result.message == (
            "Quartz cron cannot combine day-of-month and day-of-week constraints"
        )
        assert result.kind is ErrorKind.UNSUPPORTED_BY_DIALECT

    def test_multi_week_rejected(self, converter):
        """Test that multi-week intervals name the dialect."""
        result = converter.to_cron(unwrap(parse("every 2 weeks")))
        assert isinstance(result, Error)
        assert result.message.startswith("Quartz cron does not support multi-week intervals (2w).")


# =============================================================================
# Decoding Tests
# =============================================================================


class TestQuartzDecoding:
    """Tests for reading Quartz expressions."""

    @pytest.mark.parametrize(
        "expression,operator",
        [
            ("0 0 14 L * ?", LastDay()),
            ("0 0 0 LW * ?", LastWeekdayOfMonth()),
            ("0 0 0 L-3 * ?", DaysBeforeLast(3)),
            ("0 0 0 15W * ?", NearestWeekday(15)),
            ("0 0 0 ? * 6#3", NthWeekday(Weekday.FRIDAY, 3)),
            ("0 0 0 ? * FRI#3", NthWeekday(Weekday.FRIDAY, 3)),
            ("0 0 17 ? * 6L", LastWeekdayOccurrence(Weekday.FRIDAY)),
            ("0 0 0 ? * 2L", LastWeekdayOccurrence(Weekday.MONDAY)),
        ],
    )
    def test_operators(self, converter, expression, operator):
        """Test each operator."""
        spec = decode(converter, expression)
        assert spec.day_operator == operator
        assert spec.unit is IntervalUnit.MONTHS
        assert spec.weekdays is None
        assert spec.day_of_month is None

    def test_weekday_numbering(self, converter):
        """Test that 1 is Sunday and names are accepted."""
        assert decode(converter, "0 0 9 ? * 1").weekdays == SingleWeekday(Weekday.SUNDAY)
        assert decode(converter, "0 0 9 ? * 7").weekdays == SingleWeekday(Weekday.SATURDAY)
        assert decode(converter, "0 0 9 ? * MON-FRI").weekdays == WeekdayPatternSelection(
            DayPattern.WEEKDAYS
        )
        assert decode(converter, "0 0 9 ? * 2-6").weekdays == WeekdayPatternSelection(
            DayPattern.WEEKDAYS
        )

    def test_bare_l_in_day_of_week(self, converter):
        """Test that "L" alone in day-of-week means Saturday."""
        assert decode(converter, "0 0 9 ? * L").weekdays == SingleWeekday(Weekday.SATURDAY)

    def test_time_and_seconds(self, converter):
        """Test seconds kept apart from the time of day."""
        spec = decode(converter, "30 0 9 * * ?")
        assert spec.time_of_day == time(9, 0)
        assert spec.seconds is not None

    def test_seconds_step(self, converter):
        """Test a seconds step."""
        spec = decode(converter, "*/10 * * * * ?")
        assert (spec.interval, spec.unit) == (10, IntervalUnit.SECONDS)
        assert spec.minutes is None
        assert spec.hours is None

    def test_year(self, converter):
        """Test the optional year field."""
        assert decode(converter, "0 0 0 15 * ? 2025").year == 2025
        assert decode(converter, "0 0 0 15 * ? *").year is None

    @pytest.mark.parametrize(
        "expression,kind",
        [
            ("0 0 9 15 * MON", ErrorKind.CONFLICTING),
            ("0 0 9 L * 6L", ErrorKind.CONFLICTING),
            ("0 0 9 * *", ErrorKind.MALFORMED_FIELD),
            ("0 0 9 * * ? 2025 1", ErrorKind.MALFORMED_FIELD),
            ("0 0 9 ? * 2#6", ErrorKind.OUT_OF_RANGE),
            ("0 0 9 L-31 * ?", ErrorKind.OUT_OF_RANGE),
            ("0 0 9 15 * ? 2100", ErrorKind.OUT_OF_RANGE),
            ("0 0 9 15 * ? 2025-2026", ErrorKind.MALFORMED_FIELD),
            ("0 0 9 XW * ?", ErrorKind.MALFORMED_FIELD),
            ("0 0 9 ? * 8", ErrorKind.OUT_OF_RANGE),
        ],
    )
    def test_errors(self, converter, expression, kind):
        """Test decode failures."""
        result = converter.from_cron(expression)
        assert isinstance(result, Error)
        assert result.kind is kind

    def test_conflict_message(self, converter):
        """Test the message for two constrained day fields."""
        result = converter.from_cron("0 0 9 15 * MON")
        assert result.message == (
            "Quartz cron cannot specify both day-of-month and day-of-week; "
            "use '?' in one of them"
        )

    def test_field_count_message(self, converter):
        """Test the usage message."""
        result = converter.from_cron("0 0 9 * *")
        assert result.message == (
            "Quartz cron expressions must have 6 or 7 parts (got 5). "
            "Format: second minute hour day month dayOfWeek [year]"
        )


# =============================================================================
# Round-trip Tests
# =============================================================================


class TestQuartzRoundTrip:
    """Tests that expressions survive decode and re-encode."""

    @pytest.mark.parametrize(
        "expression",
        [
            "*/10 * * * * ?",
            "0 */30 * * * ?",
            "0 0 14 * * ?",
            "0 0 14 L * ?",
            "0 0 0 LW * ?",
            "0 0 0 L-3 * ?",
            "0 0 0 15W * ?",
            "0 0 0 ? * 6#3",
            "0 0 17 ? * 6L",
            "0 0 9 ? * MON-FRI",
            "0 0 12 ? * SAT,SUN",
            "0 0 9 15 1 ?",
            "0 0 0 L 1,4,7,10 ?",
            "0 0 0 15 * ? 2025",
            "30 0 9 * * ?",
        ],
    )
    def test_round_trip(self, converter, expression):
        """Test encode(decode(expression)) == expression."""
        assert unwrap(converter.to_cron(decode(converter, expression))) == expression
