"""Cron dialect converters.

Field Reference:
    Field         Unix            Quartz              NCrontab
    ───────────────────────────────────────────────────────────────
    Second        -               0-59                0-59
    Minute        0-59            0-59                0-59
    Hour          0-23            0-23                0-23
    Day of Month  1-31            1-31, L LW L-n nW ? 1-31
    Month         1-12, JAN-DEC   1-12, JAN-DEC       1-12, JAN-DEC
    Day of Week   0-7, SUN-SAT    1-7, SUN-SAT, d#n dL ?  0-6, SUN-SAT
    Year          -               1970-2099 (optional) -
"""

from humancron.cron.base import CronConverter
from humancron.cron.fields import CronFieldType, FieldConstraints
from humancron.cron.ncrontab import NCrontabConverter
from humancron.cron.quartz import QuartzCronConverter
from humancron.cron.unix import UnixCronConverter

__all__ = [
    "CronConverter",
    "CronFieldType",
    "FieldConstraints",
    "UnixCronConverter",
    "QuartzCronConverter",
    "NCrontabConverter",
]
