"""Predefined schedule presets.

Each preset is written as the canonical phrase and parsed once at import,
so every preset is also a worked example of the phrase grammar. Presets
use UTC; pass ``dataclasses.replace(spec, timezone=...)`` for another zone.

Usage:
    >>> from humancron.presets import WEEKDAYS_9AM, get_preset
    >>> from humancron.cron.unix import UnixCronConverter
    >>>
    >>> UnixCronConverter(local_timezone="UTC").to_cron(WEEKDAYS_9AM)
    Success(value='0 9 * * 1-5')
    >>> get_preset("business-hours-15min")
    ScheduleSpec(interval=15, unit=<IntervalUnit.MINUTES: 'minutes'>, ...)

Some presets (``EVERY_SECOND``, ``LAST_OF_MONTH``, ``FIRST_MONDAY``,
``LAST_FRIDAY``, ``END_OF_QUARTER``) need Quartz; the other dialects
reject them with an ``UNSUPPORTED_BY_DIALECT`` error.
"""

from humancron.config import ParserOptions
from humancron.parser import parse
from humancron.result import unwrap
from humancron.schedule import ScheduleSpec

_OPTIONS = ParserOptions(timezone="UTC")


def _preset(phrase: str) -> ScheduleSpec:
    return unwrap(parse(phrase, _OPTIONS))


# =============================================================================
# Standard Intervals
# =============================================================================

# Every year on January 1st at midnight
YEARLY = _preset("every year")
ANNUALLY = YEARLY

# First day of every month at midnight
MONTHLY = _preset("every month")

# Every Sunday at midnight
WEEKLY = _preset("every sunday")

# Every day at midnight
DAILY = _preset("every day")
MIDNIGHT = DAILY

# Every hour at minute 0
HOURLY = _preset("every hour")

# Every minute
EVERY_MINUTE = _preset("every minute")

# Every second (Quartz and NCrontab)
EVERY_SECOND = _preset("every second")


# =============================================================================
# Business Schedule Presets
# =============================================================================

# Weekdays (Monday-Friday) at 9 AM
WEEKDAYS_9AM = _preset("every weekday at 9am")

# Weekdays (Monday-Friday) at 6 PM
WEEKDAYS_6PM = _preset("every weekday at 6pm")

# Weekdays at start of business (8 AM)
BUSINESS_START = _preset("every weekday at 8am")

# Weekdays at end of business (5 PM)
BUSINESS_END = _preset("every weekday at 5pm")

# Every 15 minutes during business hours (9 AM - 5 PM, weekdays)
BUSINESS_HOURS_15MIN = _preset("every 15 minutes on weekdays between hours 9am and 5pm")

# Every hour during business hours
BUSINESS_HOURS_HOURLY = _preset("every hour on weekdays between hours 9am and 5pm")


# =============================================================================
# Month Boundary Presets
# =============================================================================

# First day of month at 6 AM
FIRST_OF_MONTH = _preset("every month on the 1st at 6am")

# Last day of month at 6 AM
LAST_OF_MONTH = _preset("every month on the last day at 6am")

# First Monday of month
FIRST_MONDAY = _preset("every month on the 1st monday at 9am")

# Last Friday of month
LAST_FRIDAY = _preset("every month on the last friday at 5pm")


# =============================================================================
# Data Pipeline Presets
# =============================================================================

EVERY_5_MIN = _preset("every 5 minutes")
EVERY_15_MIN = _preset("every 15 minutes")
EVERY_30_MIN = _preset("every 30 minutes")
EVERY_2_HOURS = _preset("every 2 hours")
EVERY_4_HOURS = _preset("every 4 hours")
EVERY_6_HOURS = _preset("every 6 hours")

# Midnight and noon
TWICE_DAILY = _preset("every day at hours 0,12")

# Morning, noon, evening
THREE_TIMES_DAILY = _preset("every day at hours 8,12,18")


# =============================================================================
# Weekend/Off-hours Presets
# =============================================================================

WEEKENDS_NOON = _preset("every weekend at 12pm")

# Common batch windows
NIGHTLY_2AM = _preset("every day at 2am")
NIGHTLY_3AM = _preset("every day at 3am")

# Weekly maintenance window
SUNDAY_MAINTENANCE = _preset("every sunday at 3am")


# =============================================================================
# Quarter Presets
# =============================================================================

# First day of each quarter
QUARTERLY = _preset("every month on the 1st in january,april,july,october")

# Last day of each quarter
END_OF_QUARTER = _preset("every month on the last day in march,june,september,december")


# =============================================================================
# Preset Registry
# =============================================================================

PRESETS: dict[str, ScheduleSpec] = {
    # Standard
    "yearly": YEARLY,
    "annually": ANNUALLY,
    "monthly": MONTHLY,
    "weekly": WEEKLY,
    "daily": DAILY,
    "midnight": MIDNIGHT,
    "hourly": HOURLY,
    "every_minute": EVERY_MINUTE,
    "every_second": EVERY_SECOND,
    # Business
    "weekdays_9am": WEEKDAYS_9AM,
    "weekdays_6pm": WEEKDAYS_6PM,
    "business_start": BUSINESS_START,
    "business_end": BUSINESS_END,
    "business_hours_15min": BUSINESS_HOURS_15MIN,
    "business_hours_hourly": BUSINESS_HOURS_HOURLY,
    # Month boundaries
    "first_of_month": FIRST_OF_MONTH,
    "last_of_month": LAST_OF_MONTH,
    "first_monday": FIRST_MONDAY,
    "last_friday": LAST_FRIDAY,
    # Data pipeline
    "every_5_min": EVERY_5_MIN,
    "every_15_min": EVERY_15_MIN,
    "every_30_min": EVERY_30_MIN,
    "every_2_hours": EVERY_2_HOURS,
    "every_4_hours": EVERY_4_HOURS,
    "every_6_hours": EVERY_6_HOURS,
    "twice_daily": TWICE_DAILY,
    "three_times_daily": THREE_TIMES_DAILY,
    # Off-hours
    "weekends_noon": WEEKENDS_NOON,
    "nightly_2am": NIGHTLY_2AM,
    "nightly_3am": NIGHTLY_3AM,
    "sunday_maintenance": SUNDAY_MAINTENANCE,
    # Quarter
    "quarterly": QUARTERLY,
    "end_of_quarter": END_OF_QUARTER,
}


def get_preset(name: str) -> ScheduleSpec | None:
    """Get a preset schedule by name.

    Args:
        name: Preset name (case-insensitive, ``-`` or ``_`` separated).

    Returns:
        ScheduleSpec or None if not found.
    """
    return PRESETS.get(name.lower().replace("-", "_"))


def list_presets() -> list[str]:
    """List all available preset names."""
    return list(PRESETS.keys())
