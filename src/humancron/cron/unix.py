"""Unix (Vixie) cron: ``minute hour day month dayOfWeek``.

Times are shifted from the specification's zone into the zone the cron
daemon runs in. Seconds, years and Quartz day operators have no Unix
form and are rejected.
"""

from __future__ import annotations

from humancron.cron.base import CronConverter, DecodedFields
from humancron.cron.fields import (
    UNIX_CONSTRAINTS,
    CronFieldType,
    FieldReader,
    decode_month,
    decode_weekdays,
    encode_month,
    encode_weekdays,
    split_fields,
)
from humancron.schedule import IntervalUnit, ScheduleSpec, Weekday


class UnixCronConverter(CronConverter):
    """Converter for classic five-field cron.

    Example:
        >>> converter = UnixCronConverter(local_timezone="UTC")
        >>> converter.to_cron(unwrap(parse("every weekday at 9am")))
        Success(value='0 9 * * 1-5')
    """

    dialect_name = "Unix cron"

    def _encode(self, spec: ScheduleSpec) -> str:
        if spec.unit is IntervalUnit.SECONDS:
            raise self._unsupported(
                f"Unix cron does not support second-level intervals ({spec.interval}s). "
                "Use Quartz or NCrontab instead."
            )
        if spec.seconds is not None:
            raise self._unsupported(
                "Unix cron does not support a seconds field. Use Quartz or NCrontab instead."
            )
        if spec.year is not None:
            raise self._unsupported(
                "Unix cron does not support a year field. Use Quartz instead."
            )
        if spec.day_operator is not None:
            raise self._unsupported(
                "Unix cron does not support advanced day operators (L, W, #). "
                "Use Quartz instead."
            )

        local = self._local_time(spec)
        fields = [
            self._minute_field(spec, local),
            self._hour_field(spec, local),
            self._day_field(spec),
            encode_month(spec.month, spec.unit),
            self._weekday_field(spec),
        ]
        return " ".join(fields)

    def _weekday_field(self, spec: ScheduleSpec) -> str:
        if spec.weekdays is None:
            default = self._weekly_default(spec)
            return "*" if default is None else str(int(default))
        return encode_weekdays(
            spec.weekdays, lambda day: str(int(day)), weekdays="1-5", weekends="0,6"
        )

    def _decode_fields(self, expression: str) -> DecodedFields:
        parts = split_fields(
            expression,
            (5,),
            "Unix cron expressions must have 5 parts (got {count}). "
            "Format: minute hour day month dayOfWeek",
        )
        reader = FieldReader(expression, UNIX_CONSTRAINTS)
        minute = reader.read(parts[0], CronFieldType.MINUTE)
        hour = reader.read(parts[1], CronFieldType.HOUR)
        day = reader.read(parts[2], CronFieldType.DAY_OF_MONTH)
        month = reader.read(parts[3], CronFieldType.MONTH)
        weekday = reader.read(parts[4], CronFieldType.DAY_OF_WEEK)
        return DecodedFields(
            second=None,
            minute=minute,
            hour=hour,
            day=day,
            weekday=weekday,
            month=decode_month(month, expression),
            weekdays=decode_weekdays(weekday, lambda value: Weekday(value % 7), expression),
        )

