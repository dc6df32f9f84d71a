"""Numeric list notation shared by the parser, formatter and cron codecs."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from datetime import time

from humancron.schedule import ValueList, ValueRange, ValueSet


def _runs(values: Iterable[int]) -> list[tuple[int, int]]:
    """Split sorted unique values into inclusive runs of consecutive integers."""
    runs: list[tuple[int, int]] = []
    for value in sorted(set(values)):
        if runs and value == runs[-1][1] + 1:
            runs[-1] = (runs[-1][0], value)
        else:
            runs.append((value, value))
    return runs


def compact_values(values: Iterable[int]) -> str:
    """Render values as a comma list, collapsing consecutive runs.

    Example:
        >>> compact_values([1, 2, 3, 4, 5, 6, 7, 15, 30])
        '1-7,15,30'
    """
    return ",".join(
        str(start) if start == end else f"{start}-{end}"
        for start, end in _runs(values)
    )


def compact_names(values: Iterable[int], names: Mapping[int, str]) -> str:
    """Like :func:`compact_values` but renders each endpoint by name."""
    return ",".join(
        names[start] if start == end else f"{names[start]}-{names[end]}"
        for start, end in _runs(values)
    )


def expand_list_notation(text: str, minimum: int, maximum: int) -> tuple[int, ...]:
    """Expand ``"0,15-20,40-50/5"`` into sorted unique values.

    Values outside ``[minimum, maximum]`` are dropped rather than rejected.
    Malformed segments are skipped.
    """
    values: set[int] = set()
    for segment in text.split(","):
        segment = segment.strip()
        if not segment:
            continue
        step = 1
        if "/" in segment:
            segment, _, step_text = segment.partition("/")
            if not step_text.isdigit() or int(step_text) == 0:
                continue
            step = int(step_text)
        if "-" in segment:
            start_text, _, end_text = segment.partition("-")
            if not (start_text.isdigit() and end_text.isdigit()):
                continue
            candidates = range(int(start_text), int(end_text) + 1, step)
        elif segment.isdigit():
            candidates = range(int(segment), int(segment) + 1)
        else:
            continue
        values.update(v for v in candidates if minimum <= v <= maximum)
    return tuple(sorted(values))


def ordinal(number: int) -> str:
    """Return ``1st``, ``2nd``, ``11th``, ``23rd`` and so on."""
    if 11 <= number % 100 <= 13:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th")
    return f"{number}{suffix}"


def ordinal_list(numbers: Sequence[int]) -> str:
    """Join ordinals in English: ``1st``, ``1st and 15th``, ``1st, 10th and 20th``."""
    words = [ordinal(n) for n in numbers]
    if len(words) == 1:
        return words[0]
    return f"{', '.join(words[:-1])} and {words[-1]}"


def clock_hour(hour: int) -> str:
    """Render a 24-hour value on the 12-hour clock (``0`` -> ``12am``)."""
    suffix = "am" if hour < 12 else "pm"
    return f"{hour % 12 or 12}{suffix}"


def clock_time(value: time) -> str:
    """Render a time of day as ``2pm`` or ``2:30pm``."""
    if value.minute == 0:
        return clock_hour(value.hour)
    suffix = "am" if value.hour < 12 else "pm"
    return f"{value.hour % 12 or 12}:{value.minute:02d}{suffix}"


def collapse_values(values: Sequence[int]) -> ValueSet:
    """Return a range when ``values`` form one consecutive run, else a sorted list.

    Example:
        >>> collapse_values([3, 1, 2])
        ValueRange(start=1, end=3, step=None)
    """
    runs = _runs(values)
    if len(runs) == 1 and runs[0][0] != runs[0][1]:
        return ValueRange(runs[0][0], runs[0][1])
    return ValueList(tuple(sorted(set(values))))
