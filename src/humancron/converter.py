"""One-call conversion between phrases and cron expressions.

:class:`ScheduleConverter` chains the parser, the formatter and a dialect
converter. Errors from an inner step are wrapped with the name of the
step that failed, keeping the original message and kind:

    >>> converter = ScheduleConverter()
    >>> converter.to_cron("every 2 weeks")
    Error(message="Failed to convert to cron: Unix cron does not support
    multi-week intervals (2w). ...", kind=<ErrorKind.UNSUPPORTED_BY_DIALECT: ...>)
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import assert_never

from humancron.config import ParserOptions
from humancron.cron.base import CronConverter
from humancron.cron.ncrontab import NCrontabConverter
from humancron.cron.quartz import QuartzCronConverter
from humancron.cron.unix import UnixCronConverter
from humancron.formatter import NaturalLanguageFormatter
from humancron.parser import NaturalLanguageParser
from humancron.result import Error, Result, Success
from humancron.timezones import Clock, TimeZoneProvider

logger = logging.getLogger(__name__)


class CronDialect(Enum):
    """Supported cron dialects."""

    UNIX = "unix"
    QUARTZ = "quartz"
    NCRONTAB = "ncrontab"


_CONVERTERS: dict[CronDialect, type[CronConverter]] = {
    CronDialect.UNIX: UnixCronConverter,
    CronDialect.QUARTZ: QuartzCronConverter,
    CronDialect.NCRONTAB: NCrontabConverter,
}


def create_converter(
    dialect: CronDialect | str,
    local_timezone: str | None = None,
    clock: Clock | None = None,
    provider: TimeZoneProvider | None = None,
) -> CronConverter:
    """Create the converter for a dialect.

    Args:
        dialect: Dialect or its name ("unix", "quartz", "ncrontab").
        local_timezone: Zone the scheduler runs in.
        clock: Clock used for time zone conversion.
        provider: Zone lookup.

    Raises:
        ValueError: If the dialect name is unknown.
    """
    if isinstance(dialect, str):
        try:
            dialect = CronDialect(dialect.lower())
        except ValueError:
            names = ", ".join(d.value for d in CronDialect)
            raise ValueError(f"Unknown cron dialect: {dialect}. Available: {names}") from None
    return _CONVERTERS[dialect](local_timezone=local_timezone, clock=clock, provider=provider)


class ScheduleConverter:
    """Converts phrases to cron expressions and back.

    Example:
        >>> converter = ScheduleConverter(CronDialect.QUARTZ)
        >>> converter.to_cron("every month on the last day at 2pm")
        Success(value='0 0 14 L * ?')
        >>> converter.to_natural_language("0 0 14 L * ?")
        Success(value='every month on the last day at 2pm')
    """

    def __init__(
        self,
        dialect: CronDialect | str = CronDialect.UNIX,
        *,
        options: ParserOptions | None = None,
        local_timezone: str | None = None,
        clock: Clock | None = None,
        provider: TimeZoneProvider | None = None,
    ) -> None:
        """Initialize converter.

        Args:
            dialect: Target cron dialect.
            options: Parser options (zone of parsed phrases, limits).
            local_timezone: Zone the scheduler runs in.
            clock: Clock used for time zone conversion.
            provider: Zone lookup.
        """
        self._parser = NaturalLanguageParser(options)
        self._formatter = NaturalLanguageFormatter()
        self._cron = create_converter(dialect, local_timezone, clock, provider)

    @property
    def cron_converter(self) -> CronConverter:
        return self._cron

    def to_cron(self, text: str) -> Result[str]:
        """Parse a phrase and render it in the configured dialect."""
        match self._parser.parse(text):
            case Error() as error:
                return error.wrap("Failed to parse natural language")
            case Success(value=spec):
                pass
            case _ as unreachable:
                assert_never(unreachable)

        match self._cron.to_cron(spec):
            case Error() as error:
                return error.wrap("Failed to convert to cron")
            case Success(value=expression):
                logger.debug(f"{text!r} -> {expression!r}")
                return Success(expression)
            case _ as unreachable:
                assert_never(unreachable)

    def to_natural_language(self, expression: str) -> Result[str]:
        """Read an expression in the configured dialect and render it as a phrase."""
        match self._cron.from_cron(expression):
            case Error() as error:
                return error.wrap("Failed to parse cron expression")
            case Success(value=spec):
                pass
            case _ as unreachable:
                assert_never(unreachable)

        match self._formatter.format(spec):
            case Error() as error:
                return error.wrap("Failed to format as natural language")
            case Success(value=text):
                logger.debug(f"{expression!r} -> {text!r}")
                return Success(text)
            case _ as unreachable:
                assert_never(unreachable)
