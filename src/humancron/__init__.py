"""humancron - Natural-language schedules to and from cron expressions.

Phrases are parsed into an immutable :class:`ScheduleSpec`, which can be
rendered back as a canonical phrase or encoded for a cron dialect.

Phrase Reference:
    Phrase                                          Unix cron
    ─────────────────────────────────────────────────────────────────
    every 30 minutes                                */30 * * * *
    every day at 2pm                                0 14 * * *
    every weekday at 9am                            0 9 * * 1-5
    every monday,wednesday,friday at 8:30am         30 8 * * 1,3,5
    every month on the 15th                         0 0 15 * *
    on january 15th at 9am                          0 9 15 1 *
    every 5 minutes between 0 and 30 of each hour   0-30/5 * * * *
    every day between hours 9am and 5pm             0 9-17 * * *

Quartz adds day operators ("every month on the last friday",
"every month on the weekday nearest the 15th") and years ("in year 2025");
Quartz and NCrontab add seconds ("every 10 seconds").

Usage:
    >>> from humancron import ScheduleConverter, parse, format_schedule
    >>>
    >>> ScheduleConverter().to_cron("every weekday at 9am")
    Success(value='0 9 * * 1-5')
    >>> ScheduleConverter("quartz").to_natural_language("0 0 17 ? * 6L")
    Success(value='every month on the last friday at 5pm')
"""

import logging

from humancron.config import (
    HumanCronConfig,
    ParserOptions,
    get_config,
    reset_config,
    set_config,
)
from humancron.converter import CronDialect, ScheduleConverter, create_converter
from humancron.cron import (
    CronConverter,
    NCrontabConverter,
    QuartzCronConverter,
    UnixCronConverter,
)
from humancron.errors import ErrorKind, ScheduleError
from humancron.formatter import NaturalLanguageFormatter, format_schedule, normalize
from humancron.parser import NaturalLanguageParser, parse
from humancron.presets import get_preset, list_presets
from humancron.result import Error, Result, Success, unwrap
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
    ScheduleSpec,
    SingleMonth,
    SingleWeekday,
    ValueList,
    ValueRange,
    Weekday,
    WeekdayList,
    WeekdayPatternSelection,
    WeekdayRange,
)
from humancron.timezones import FixedClock, SystemClock, ZoneInfoProvider

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    # Conversion
    "ScheduleConverter",
    "CronDialect",
    "create_converter",
    "CronConverter",
    "UnixCronConverter",
    "QuartzCronConverter",
    "NCrontabConverter",
    # Parsing and formatting
    "NaturalLanguageParser",
    "parse",
    "NaturalLanguageFormatter",
    "format_schedule",
    "normalize",
    # Results and errors
    "Success",
    "Error",
    "Result",
    "unwrap",
    "ErrorKind",
    "ScheduleError",
    # Model
    "ScheduleSpec",
    "IntervalUnit",
    "DayPattern",
    "Weekday",
    "NoMonth",
    "SingleMonth",
    "MonthRange",
    "MonthList",
    "SingleWeekday",
    "WeekdayPatternSelection",
    "WeekdayList",
    "WeekdayRange",
    "LastDay",
    "LastWeekdayOfMonth",
    "DaysBeforeLast",
    "NearestWeekday",
    "NthWeekday",
    "LastWeekdayOccurrence",
    "ValueList",
    "ValueRange",
    # Time zones
    "FixedClock",
    "SystemClock",
    "ZoneInfoProvider",
    # Configuration
    "HumanCronConfig",
    "ParserOptions",
    "get_config",
    "set_config",
    "reset_config",
    # Presets
    "get_preset",
    "list_presets",
]
