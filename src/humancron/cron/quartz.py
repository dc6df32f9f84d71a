"""Quartz scheduler cron: ``second minute hour day month dayOfWeek [year]``.

Quartz differs from Unix cron in three ways that matter here:
    - Days of week are numbered 1 (Sunday) to 7 (Saturday).
    - Exactly one of day-of-month and day-of-week carries a value; the
      other is ``?``.
    - Day operators: ``L``, ``LW``, ``L-n`` and ``nW`` in day-of-month,
      ``d#n`` and ``dL`` in day-of-week.

Quartz triggers carry their own zone, so times are emitted as written
and the specification's zone is left for the caller to attach.
"""

from __future__ import annotations

import re
from typing import assert_never

from humancron.cron.base import CronConverter, DecodedFields
from humancron.cron.fields import (
    QUARTZ_CONSTRAINTS,
    CronFieldType,
    FieldReader,
    FieldToken,
    NoSpecificValue,
    Single,
    Wildcard,
    decode_month,
    decode_weekdays,
    encode_month,
    encode_weekdays,
    is_open,
    split_fields,
)
from humancron.errors import ErrorKind, ScheduleError
from humancron.schedule import (
    DayOperator,
    DaysBeforeLast,
    LastDay,
    LastWeekdayOccurrence,
    LastWeekdayOfMonth,
    NearestWeekday,
    NthWeekday,
    ScheduleSpec,
    Weekday,
)

_DAYS_BEFORE_LAST = re.compile(r"^L-(\d+)$")
_NEAREST_WEEKDAY = re.compile(r"^(\d+)W$")
_NTH_WEEKDAY = re.compile(r"^([A-Z0-9]+)#(\d+)$")
_LAST_OCCURRENCE = re.compile(r"^([A-Z0-9]+)L$")


def _day_name(day: Weekday) -> str:
    return day.name[:3]


def _day_number(day: Weekday) -> int:
    return int(day) + 1


class QuartzCronConverter(CronConverter):
    """Converter for Quartz expressions, including day operators and years.

    Example:
        >>> converter = QuartzCronConverter()
        >>> converter.to_cron(unwrap(parse("every month on the last friday at 5pm")))
        Success(value='0 0 17 ? * 6L')
    """

    dialect_name = "Quartz cron"
    converts_timezone = False

    # -------------------------------------------------------------------------
    # Encoding
    # -------------------------------------------------------------------------

    def _encode(self, spec: ScheduleSpec) -> str:
        if spec.weekdays is not None and (
            spec.day_of_month is not None or spec.days is not None
        ):
            raise self._unsupported(
                "Quartz cron cannot combine day-of-month and day-of-week constraints"
            )

        local = self._local_time(spec)
        day, weekday = self._day_fields(spec)
        fields = [
            self._second_field(spec, local),
            self._minute_field(spec, local),
            self._hour_field(spec, local),
            day,
            encode_month(spec.month, spec.unit),
            weekday,
        ]
        if spec.year is not None:
            fields.append(str(spec.year))
        return " ".join(fields)

    def _day_fields(self, spec: ScheduleSpec) -> tuple[str, str]:
        """Render the (day-of-month, day-of-week) pair."""
        if spec.day_operator is not None:
            return _encode_operator(spec.day_operator)
        if spec.weekdays is not None:
            return "?", encode_weekdays(
                spec.weekdays, _day_name, weekdays="MON-FRI", weekends="SAT,SUN"
            )
        default = self._weekly_default(spec)
        if default is not None:
            return "?", _day_name(default)
        return self._day_field(spec), "?"

    # -------------------------------------------------------------------------
    # Decoding
    # -------------------------------------------------------------------------

    def _decode_fields(self, expression: str) -> DecodedFields:
        parts = split_fields(
            expression,
            (6, 7),
            "Quartz cron expressions must have 6 or 7 parts (got {count}). "
            "Format: second minute hour day month dayOfWeek [year]",
        )
        reader = FieldReader(expression, QUARTZ_CONSTRAINTS)
        second = reader.read(parts[0], CronFieldType.SECOND)
        minute = reader.read(parts[1], CronFieldType.MINUTE)
        hour = reader.read(parts[2], CronFieldType.HOUR)

        day_text, weekday_text = parts[3].upper(), parts[5].upper()
        day_operator = _decode_day_operator(day_text, reader)
        weekday_operator = _decode_weekday_operator(weekday_text, reader)
        day: FieldToken = (
            NoSpecificValue() if day_operator is not None
            else reader.read(day_text, CronFieldType.DAY_OF_MONTH)
        )
        weekday: FieldToken = (
            NoSpecificValue() if weekday_operator is not None
            else self._read_weekday(weekday_text, reader)
        )
        month = decode_month(reader.read(parts[4], CronFieldType.MONTH), expression)

        day_constrained = day_operator is not None or not is_open(day)
        weekday_constrained = weekday_operator is not None or not is_open(weekday)
        if day_constrained and weekday_constrained:
            raise ScheduleError(
                "Quartz cron cannot specify both day-of-month and day-of-week; "
                "use '?' in one of them",
                ErrorKind.CONFLICTING,
                expression,
            )

        year = None
        if len(parts) == 7:
            year = self._read_year(parts[6], reader, expression)

        return DecodedFields(
            second=second,
            minute=minute,
            hour=hour,
            day=day,
            weekday=weekday,
            month=month,
            weekdays=decode_weekdays(weekday, lambda value: Weekday(value - 1), expression),
            day_operator=day_operator or weekday_operator,
            year=year,
        )

    @staticmethod
    def _read_weekday(text: str, reader: FieldReader) -> FieldToken:
        # A bare L in day-of-week is the last day of the week.
        if text == "L":
            return Single(_day_number(Weekday.SATURDAY))
        return reader.read(text, CronFieldType.DAY_OF_WEEK)

    @staticmethod
    def _read_year(text: str, reader: FieldReader, expression: str) -> int | None:
        match reader.read(text, CronFieldType.YEAR):
            case Wildcard():
                return None
            case Single(value=value):
                return value
            case _:
                raise ScheduleError(
                    f"Quartz year field must be a single year or '*' (got: {text})",
                    ErrorKind.MALFORMED_FIELD,
                    expression,
                )


# =============================================================================
# Operators
# =============================================================================


def _encode_operator(operator: DayOperator) -> tuple[str, str]:
    match operator:
        case LastDay():
            return "L", "?"
        case LastWeekdayOfMonth():
            return "LW", "?"
        case DaysBeforeLast(offset=offset):
            return f"L-{offset}", "?"
        case NearestWeekday(day=day):
            return f"{day}W", "?"
        case NthWeekday(day=day, occurrence=occurrence):
            return "?", f"{_day_number(day)}#{occurrence}"
        case LastWeekdayOccurrence(day=day):
            return "?", f"{_day_number(day)}L"
        case _ as unreachable:
            assert_never(unreachable)


def _decode_day_operator(text: str, reader: FieldReader) -> DayOperator | None:
    if text == "L":
        return LastDay()
    if text == "LW":
        return LastWeekdayOfMonth()
    match = _DAYS_BEFORE_LAST.match(text)
    if match is not None:
        offset = int(match.group(1))
        if not 1 <= offset <= 30:
            raise ScheduleError(
                f"Days before last must be 1-30, got: {offset}",
                ErrorKind.OUT_OF_RANGE,
                text,
            )
        return DaysBeforeLast(offset)
    match = _NEAREST_WEEKDAY.match(text)
    if match is not None:
        return NearestWeekday(reader.resolve_value(match.group(1), CronFieldType.DAY_OF_MONTH))
    if "L" in text or "W" in text:
        raise ScheduleError(
            f"Invalid day-of-month operator: {text}", ErrorKind.MALFORMED_FIELD, text
        )
    return None


def _decode_weekday_operator(text: str, reader: FieldReader) -> DayOperator | None:
    match = _NTH_WEEKDAY.match(text)
    if match is not None:
        day = reader.resolve_value(match.group(1), CronFieldType.DAY_OF_WEEK)
        occurrence = int(match.group(2))
        if not 1 <= occurrence <= 5:
            raise ScheduleError(
                f"Occurrence number must be 1-5, got: {occurrence}",
                ErrorKind.OUT_OF_RANGE,
                text,
            )
        return NthWeekday(Weekday(day - 1), occurrence)
    match = _LAST_OCCURRENCE.match(text)
    if match is not None:
        day = reader.resolve_value(match.group(1), CronFieldType.DAY_OF_WEEK)
        return LastWeekdayOccurrence(Weekday(day - 1))
    return None
