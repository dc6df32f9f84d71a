"""Base class for cron dialect converters.

Every dialect follows the same template:

    to_cron:   validate support -> time zone conversion -> render fields
    from_cron: split -> read fields -> infer interval -> build spec

Dialect classes supply field layout, numbering and the operators they
understand; the numeric minute/hour/day/month logic lives here.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import time
from typing import ClassVar

from humancron.config import get_config
from humancron.cron.fields import (
    CronFieldType,
    FieldToken,
    Single,
    Step,
    infer_interval,
    render_field,
    token_values,
    unit_step,
)
from humancron.errors import ErrorKind, ScheduleError
from humancron.result import Error, Result, Success
from humancron.schedule import (
    DayOperator,
    IntervalUnit,
    MonthSpecifier,
    ScheduleSpec,
    ValueSet,
    Weekday,
    WeekdaySelection,
)
from humancron.timezones import (
    Clock,
    SystemClock,
    TimeZoneProvider,
    ZoneInfoProvider,
    civil_date_in,
    convert_time_of_day,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DecodedFields:
    """Field tokens and dialect-resolved values of one expression."""

    second: FieldToken | None
    minute: FieldToken
    hour: FieldToken
    day: FieldToken
    weekday: FieldToken
    month: MonthSpecifier
    weekdays: WeekdaySelection | None = None
    day_operator: DayOperator | None = None
    year: int | None = None


class CronConverter(ABC):
    """Converts between schedule specifications and one cron dialect.

    Subclasses must implement:
        - _encode: Render a validated specification.
        - _decode_fields: Split and read an expression.

    Attributes:
        dialect_name: Human-readable dialect name used in messages.
        converts_timezone: Whether times are shifted to the local zone.
    """

    dialect_name: ClassVar[str] = "cron"
    converts_timezone: ClassVar[bool] = True

    def __init__(
        self,
        local_timezone: str | None = None,
        clock: Clock | None = None,
        provider: TimeZoneProvider | None = None,
    ) -> None:
        """Initialize converter.

        Args:
            local_timezone: Zone the cron daemon runs in; defaults to config.
            clock: Source of "today" for offset capture.
            provider: Zone lookup.
        """
        self._local_timezone = local_timezone or get_config().local_timezone
        self._clock = clock or SystemClock()
        self._provider = provider or ZoneInfoProvider()

    @property
    def local_timezone(self) -> str:
        return self._local_timezone

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------

    def to_cron(self, spec: ScheduleSpec) -> Result[str]:
        """Render a specification as a cron expression.

        Args:
            spec: Specification to render.

        Returns:
            ``Success`` with the expression or ``Error``.
        """
        try:
            self._check_common(spec)
            expression = self._encode(spec)
        except ScheduleError as exc:
            logger.debug(f"{self.dialect_name}: cannot encode {spec}: {exc.message}")
            return Error.from_exception(exc)
        logger.debug(f"{self.dialect_name}: encoded {spec} -> {expression}")
        return Success(expression)

    def from_cron(self, expression: str) -> Result[ScheduleSpec]:
        """Read a cron expression into a specification.

        Args:
            expression: Expression in this dialect.

        Returns:
            ``Success`` with the specification or ``Error``.
        """
        try:
            spec = self._decode(expression)
        except ScheduleError as exc:
            logger.debug(f"{self.dialect_name}: cannot decode {expression!r}: {exc.message}")
            return Error.from_exception(exc)
        logger.debug(f"{self.dialect_name}: decoded {expression!r} -> {spec}")
        return Success(spec)

    # -------------------------------------------------------------------------
    # Encoding
    # -------------------------------------------------------------------------

    @abstractmethod
    def _encode(self, spec: ScheduleSpec) -> str:
        """Render a specification that passed the common checks."""

    def _check_common(self, spec: ScheduleSpec) -> None:
        if spec.interval < 1:
            raise ScheduleError(
                f"Interval must be a positive number (1 or greater), got: {spec.interval}",
                ErrorKind.OUT_OF_RANGE,
            )
        limit = get_config().max_interval
        if spec.interval > limit:
            raise ScheduleError(
                f"Interval too large: {spec.interval}. Maximum allowed is {limit}.",
                ErrorKind.OUT_OF_RANGE,
            )
        if spec.interval == 1:
            return
        if spec.unit is IntervalUnit.WEEKS:
            raise self._unsupported(
                f"{self.dialect_name} does not support multi-week intervals "
                f"({spec.interval}w). Use '1w' with specific day-of-week."
            )
        if spec.unit is IntervalUnit.MONTHS:
            raise self._unsupported(
                f"{self.dialect_name} does not support multi-month intervals "
                f"({spec.interval}M). Use '1M' with a specific month list instead."
            )
        if spec.unit is IntervalUnit.YEARS:
            raise self._unsupported(
                f"{self.dialect_name} does not support multi-year intervals ({spec.interval}y)."
            )

    def _unsupported(self, message: str) -> ScheduleError:
        return ScheduleError(message, ErrorKind.UNSUPPORTED_BY_DIALECT)

    def _local_time(self, spec: ScheduleSpec) -> time | None:
        """Time of day in the execution zone."""
        if spec.time_of_day is None:
            return None
        if not self.converts_timezone:
            return spec.time_of_day
        return convert_time_of_day(
            spec.time_of_day,
            spec.timezone,
            self._local_timezone,
            self._clock,
            self._provider,
        )

    def _today_weekday(self) -> Weekday:
        """Current day of week in the execution zone."""
        today = civil_date_in(self._provider.lookup(self._local_timezone), self._clock.now())
        return Weekday((today.weekday() + 1) % 7)

    def _second_field(self, spec: ScheduleSpec, local: time | None) -> str:
        return render_field(
            spec.seconds,
            step=unit_step(spec.interval, spec.unit, IntervalUnit.SECONDS),
            single=local.second if local is not None else None,
            default="0",
        )

    def _minute_field(self, spec: ScheduleSpec, local: time | None) -> str:
        step = unit_step(spec.interval, spec.unit, IntervalUnit.MINUTES)
        if spec.unit is IntervalUnit.SECONDS and local is None:
            step = "*"
        return render_field(
            spec.minutes,
            step=step,
            single=local.minute if local is not None else None,
            default="0",
        )

    def _hour_field(self, spec: ScheduleSpec, local: time | None) -> str:
        step = unit_step(spec.interval, spec.unit, IntervalUnit.HOURS)
        if spec.unit is IntervalUnit.HOURS and spec.interval > 1 and local is not None:
            step = f"{local.hour}/{spec.interval}"
        elif spec.unit in (IntervalUnit.SECONDS, IntervalUnit.MINUTES) and local is None:
            step = "*"
        return render_field(
            spec.hours,
            step=step,
            single=local.hour if local is not None else None,
            default="0",
        )

    def _day_field(self, spec: ScheduleSpec) -> str:
        # Cron fires when either day field matches, so a weekday selection
        # must leave day-of-month open.
        return render_field(
            spec.days,
            step=unit_step(spec.interval, spec.unit, IntervalUnit.DAYS),
            single=spec.day_of_month,
            default="1" if spec.unit.is_calendar and spec.weekdays is None else "*",
        )

    def _weekly_default(self, spec: ScheduleSpec) -> Weekday | None:
        """Day a weekly schedule without weekdays runs on (today)."""
        if spec.unit is IntervalUnit.WEEKS and spec.weekdays is None:
            return self._today_weekday()
        return None

    # -------------------------------------------------------------------------
    # Decoding
    # -------------------------------------------------------------------------

    @abstractmethod
    def _decode_fields(self, expression: str) -> DecodedFields:
        """Split and read an expression."""

    def _decode(self, expression: str) -> ScheduleSpec:
        fields = self._decode_fields(expression)
        interval, unit = infer_interval(
            second=fields.second,
            minute=fields.minute,
            hour=fields.hour,
            day=fields.day,
            weekday=fields.weekday,
            has_operator=fields.day_operator is not None,
        )
        limit = get_config().max_interval
        if interval > limit:
            raise ScheduleError(
                f"Interval too large: {interval}. Maximum allowed is {limit}.",
                ErrorKind.OUT_OF_RANGE,
                expression,
            )

        time_of_day = _time_of_day(fields, unit)
        consumed = time_of_day is not None
        sub_hourly = unit in (IntervalUnit.SECONDS, IntervalUnit.MINUTES)

        seconds = None
        if fields.second is not None:
            seconds = token_values(
                fields.second,
                CronFieldType.SECOND,
                default=None if unit is IntervalUnit.SECONDS else 0,
                expression=expression,
            )
        minutes = None
        if not consumed:
            minutes = token_values(
                fields.minute,
                CronFieldType.MINUTE,
                default=None if unit is IntervalUnit.SECONDS else 0,
                expression=expression,
            )
        hours = None
        if not consumed:
            hours = token_values(
                fields.hour,
                CronFieldType.HOUR,
                default=None if sub_hourly or unit is IntervalUnit.HOURS else 0,
                expression=expression,
            )
        day_of_month, days = _day_values(fields.day, expression)

        return ScheduleSpec(
            interval=interval,
            unit=unit,
            time_of_day=time_of_day,
            timezone=self._decoded_timezone(),
            weekdays=fields.weekdays,
            day_operator=fields.day_operator,
            day_of_month=day_of_month,
            days=days,
            month=fields.month,
            seconds=seconds,
            minutes=minutes,
            hours=hours,
            year=fields.year,
        )

    def _decoded_timezone(self) -> str:
        return self._local_timezone


# =============================================================================
# Helpers
# =============================================================================


def _time_of_day(fields: DecodedFields, unit: IntervalUnit) -> time | None:
    # Seconds stay in their own field so they survive formatting.
    match (fields.hour, fields.minute):
        case (Step(start=start, end=None), Single(value=minute)) if (
            unit is IntervalUnit.HOURS and start is not None
        ):
            return time(start, minute)
        case (Single(value=hour), Single(value=minute)) if not unit.is_sub_daily:
            return time(hour, minute)
        case _:
            return None


def _day_values(token: FieldToken, expression: str) -> tuple[int | None, ValueSet | None]:
    match token:
        case Single(value=value):
            return value, None
        case _:
            return None, token_values(
                token, CronFieldType.DAY_OF_MONTH, default=None, expression=expression
            )
