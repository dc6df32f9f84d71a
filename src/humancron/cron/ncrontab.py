"""NCrontab (.NET): ``second minute hour day month dayOfWeek``.

Same numbering as Unix cron with a leading seconds field. Days of week
run 0-6 only. Like Unix cron, times are shifted into the local zone.
"""

from __future__ import annotations

from humancron.cron.base import CronConverter, DecodedFields
from humancron.cron.fields import (
    NCRONTAB_CONSTRAINTS,
    CronFieldType,
    FieldReader,
    decode_month,
    decode_weekdays,
    encode_month,
    encode_weekdays,
    split_fields,
)
from humancron.schedule import ScheduleSpec, Weekday


class NCrontabConverter(CronConverter):
    """Converter for six-field NCrontab expressions."""

    dialect_name = "NCrontab"

    def _encode(self, spec: ScheduleSpec) -> str:
        if spec.year is not None:
            raise self._unsupported(
                "NCrontab does not support a year field. Use Quartz instead."
            )
        if spec.day_operator is not None:
            raise self._unsupported(
                "NCrontab does not support advanced day operators (L, W, #). "
                "Use Quartz instead."
            )

        local = self._local_time(spec)
        return " ".join([
            self._second_field(spec, local),
            self._minute_field(spec, local),
            self._hour_field(spec, local),
            self._day_field(spec),
            encode_month(spec.month, spec.unit),
            self._weekday_field(spec),
        ])

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
            (6,),
            "NCrontab expressions must have 6 parts (got {count}). "
            "Format: second minute hour day month dayOfWeek",
        )
        reader = FieldReader(expression, NCRONTAB_CONSTRAINTS)
        second = reader.read(parts[0], CronFieldType.SECOND)
        minute = reader.read(parts[1], CronFieldType.MINUTE)
        hour = reader.read(parts[2], CronFieldType.HOUR)
        day = reader.read(parts[3], CronFieldType.DAY_OF_MONTH)
        month = reader.read(parts[4], CronFieldType.MONTH)
        weekday = reader.read(parts[5], CronFieldType.DAY_OF_WEEK)
        return DecodedFields(
            second=second,
            minute=minute,
            hour=hour,
            day=day,
            weekday=weekday,
            month=decode_month(month, expression),
            weekdays=decode_weekdays(weekday, Weekday, expression),
        )
