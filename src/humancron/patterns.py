"""Pattern library for natural-language schedule phrases.

Patterns are matched against lower-cased, whitespace-collapsed text.
Several phrase shapes overlap ("on the 15th" versus "on the 3rd friday",
"last day" versus "3rd to last day"), so the parser never relies on a
single combined expression: it walks the ordered rule tables below and
the first rule that matches wins.

Precedence (highest first):
    1. Range with step ("every 5 minutes between 0 and 30 of each hour")
    2. Bare day-of-week phrase ("every monday")
    3. Day-of-week list ("every monday,wednesday,friday")
    4. Compact day-of-week range ("every tuesday-thursday")
    5. "between monday and friday" style ranges
    6. Combined month and day ("on january 15th")
    7. Month list or compact month range ("in jan-mar,jul")
    8. Month range ("between january and march")
    9. Single month ("in january")
    10. Advanced day operators (last day, nearest weekday, ...)
    11. Plain day of month ("on the 15th")
    12. Time of day ("at 2pm", "at 14:30")
    13. Second, minute, hour and day lists, ranges and steps ("at days 1,15")
    14. Year ("in year 2025")
"""

from __future__ import annotations

import re
from types import MappingProxyType

from humancron.schedule import IntervalUnit, Weekday


# =============================================================================
# Name Tables
# =============================================================================

WEEKDAY_NAMES: MappingProxyType[str, Weekday] = MappingProxyType({
    "sunday": Weekday.SUNDAY, "sun": Weekday.SUNDAY,
    "monday": Weekday.MONDAY, "mon": Weekday.MONDAY,
    "tuesday": Weekday.TUESDAY, "tue": Weekday.TUESDAY,
    "wednesday": Weekday.WEDNESDAY, "wed": Weekday.WEDNESDAY,
    "thursday": Weekday.THURSDAY, "thu": Weekday.THURSDAY,
    "friday": Weekday.FRIDAY, "fri": Weekday.FRIDAY,
    "saturday": Weekday.SATURDAY, "sat": Weekday.SATURDAY,
})

MONTH_LABELS: MappingProxyType[int, str] = MappingProxyType({
    1: "january", 2: "february", 3: "march", 4: "april",
    5: "may", 6: "june", 7: "july", 8: "august",
    9: "september", 10: "october", 11: "november", 12: "december",
})

MONTH_NAMES: MappingProxyType[str, int] = MappingProxyType({
    **{label: number for number, label in MONTH_LABELS.items()},
    **{label[:3]: number for number, label in MONTH_LABELS.items()},
})

UNIT_WORDS: MappingProxyType[str, IntervalUnit] = MappingProxyType({
    **{unit.value: unit for unit in IntervalUnit},
    **{unit.singular: unit for unit in IntervalUnit},
})

# Full names precede abbreviations so alternation prefers the longer word.
# Weekday forms accept a plural "s" after the name ("on mondays").
_DAY = (
    r"(?:sunday|monday|tuesday|wednesday|thursday|friday|saturday"
    r"|sun|mon|tue|wed|thu|fri|sat)"
)
_MONTH = (
    r"(?:january|february|march|april|may|june|july|august|september"
    r"|october|november|december|jan|feb|mar|apr|jun|jul|aug|sep|oct|nov|dec)"
)
_ORD = r"(?:st|nd|rd|th)"
_UNIT = r"(?:seconds?|minutes?|hours?|days?|weeks?|months?|years?)"


def _compile(pattern: str) -> re.Pattern[str]:
    return re.compile(pattern, re.IGNORECASE)


# =============================================================================
# Anchors and Intervals
# =============================================================================

ANCHOR = _compile(r"^(every|on)\b")

RANGE_STEP = _compile(
    rf"\bevery\s+(\d+)\s+(minutes?|hours?|days?)\s+between\s+"
    rf"(?:the\s+)?(\d+)\s*(am|pm)?{_ORD}?\s+and\s+"
    rf"(?:the\s+)?(\d+)\s*(am|pm)?{_ORD}?\s+of\s+each\s+(hour|day|month)\b"
)

INTERVAL = _compile(rf"^every\s+(?:(\d+)\s*)?({_UNIT})\b")

BARE_DAY = _compile(rf"^every\s+({_DAY}|weekdays?|weekends?)s?\b")

TIME = _compile(r"\bat\s+(\d+)(?::(\d+))?\s*(am|pm)?\b")


# =============================================================================
# Day-of-week Forms
# =============================================================================

DAY_LIST = _compile(rf"\bevery\s+({_DAY}s?(?:\s*,\s*{_DAY}s?)+)\b")
DAY_COMPACT_RANGE = _compile(rf"\bevery\s+({_DAY})s?\s*-\s*({_DAY})s?\b")
DAY_BETWEEN = _compile(rf"\bbetween\s+({_DAY})s?\s+and\s+({_DAY})s?\b")

ON_DAY_LIST = _compile(rf"\bon\s+({_DAY}s?(?:\s*,\s*{_DAY}s?)+)\b")
ON_DAY_RANGE = _compile(rf"\bon\s+({_DAY})s?\s*-\s*({_DAY})s?\b")
ON_DAY = _compile(rf"\bon\s+({_DAY}|weekdays?|weekends?)s?\b")

# Forms introduced by "every" own the schedule's subject; "on" forms refine it.
LEADING_WEEKDAY_RULES: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("list", DAY_LIST),
    ("range", DAY_COMPACT_RANGE),
    ("between", DAY_BETWEEN),
    ("single", BARE_DAY),
)

TRAILING_WEEKDAY_RULES: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("list", ON_DAY_LIST),
    ("range", ON_DAY_RANGE),
    ("single", ON_DAY),
)


# =============================================================================
# Day-of-month Forms
# =============================================================================

LAST_WEEKDAY = _compile(r"\blast\s+weekday\b")
LAST_DAY_OFFSET = _compile(rf"\b(?:(\d+){_ORD}\s+to\s+last\s+day|day\s+before\s+last)\b")
LAST_DAY = _compile(r"\blast\s+day(?:\s+of\s+(?:the\s+)?month)?\b")
LAST_DAY_OF_WEEK = _compile(rf"\blast\s+({_DAY})\b")
NEAREST_WEEKDAY = _compile(rf"\bweekday\s+nearest\s+(?:the\s+)?(\d+){_ORD}?\b")
NTH_WEEKDAY = _compile(rf"\b(\d+){_ORD}\s+({_DAY})\b")

DAY_OPERATOR_RULES: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("last_weekday", LAST_WEEKDAY),
    ("days_before_last", LAST_DAY_OFFSET),
    ("last_day", LAST_DAY),
    ("last_occurrence", LAST_DAY_OF_WEEK),
    ("nearest_weekday", NEAREST_WEEKDAY),
    ("nth_weekday", NTH_WEEKDAY),
)

ORDINAL_DAY_LIST = _compile(
    rf"\bon\s+the\s+(\d+{_ORD}(?:(?:\s*,\s*and\s+|\s*,\s*|\s+and\s+)\d+{_ORD})+)\b"
)
COMPACT_DAY_LIST = _compile(r"\bon\s+the\s+(\d+(?:\s*[,\-]\s*\d+)+)\b")
DAY_RANGE = _compile(rf"\bbetween\s+the\s+(\d+){_ORD}\s+and\s+(?:the\s+)?(\d+){_ORD}\b")
DAY_OF_MONTH = _compile(rf"\bon\s+(?:the\s+)?(\d+){_ORD}?\b")
ORDINAL_NUMBER = _compile(rf"(\d+){_ORD}")


# =============================================================================
# Month and Year Forms
# =============================================================================

MONTH_AND_DAY = _compile(rf"\bon\s+({_MONTH})\s+(\d+){_ORD}?\b")
MONTH_LIST = _compile(rf"\bin\s+({_MONTH}(?:\s*[,\-]\s*{_MONTH})+)\b")
MONTH_RANGE = _compile(rf"\bbetween\s+({_MONTH})\s+and\s+({_MONTH})\b")
SINGLE_MONTH = _compile(rf"\bin\s+({_MONTH})\b")

MONTH_RULES: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("month_and_day", MONTH_AND_DAY),
    ("list", MONTH_LIST),
    ("range", MONTH_RANGE),
    ("single", SINGLE_MONTH),
)

YEAR = _compile(r"\bin\s+year\s+(\d+)\b")


# =============================================================================
# Auxiliary Second, Minute, Hour and Day Forms
# =============================================================================

SECOND_LIST = _compile(r"\bat\s+seconds?\s+(\d[\d,\-/]*)")
SECOND_RANGE = _compile(r"\bbetween\s+seconds\s+(\d+)\s+and\s+(\d+)\b")
MINUTE_LIST = _compile(r"\bat\s+minutes?\s+(\d[\d,\-/]*)")
MINUTE_RANGE = _compile(r"\bbetween\s+minutes\s+(\d+)\s+and\s+(\d+)\b")
HOUR_LIST = _compile(r"\bat\s+hours?\s+(\d[\d,\-/]*)")
HOUR_RANGE = _compile(r"\bbetween\s+hours\s+(\d+)\s*(am|pm)?\s+and\s+(\d+)\s*(am|pm)?\b")
DAY_VALUES = _compile(r"\bat\s+days?\s+(\d[\d,\-/]*)")
