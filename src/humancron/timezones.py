"""Clock and time zone services used for time-of-day conversion.

Cron daemons evaluate fields in their own local zone, while phrases are
written in the author's zone. Dialects without zone metadata therefore
get the time of day shifted into the execution zone. The shift is a
static capture of today's offset: it is not re-evaluated per occurrence,
so a schedule crossing a daylight-saving transition keeps the offset
that applied when it was generated.

Resolution of local times that fall into a transition is lenient:
    - Gap (clocks jump forward): the time moves forward by the gap length.
    - Overlap (clocks fall back): the earlier of the two instants is used.

Usage:
    >>> from datetime import datetime, time, timezone
    >>> clock = FixedClock(datetime(2025, 1, 15, 12, 0, tzinfo=timezone.utc))
    >>> convert_time_of_day(time(14, 0), "America/New_York", "UTC", clock)
    datetime.time(19, 0)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import Protocol
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from humancron.errors import ErrorKind, ScheduleError

logger = logging.getLogger(__name__)


# =============================================================================
# Clock
# =============================================================================


class Clock(Protocol):
    """Source of the current instant."""

    def now(self) -> datetime:
        """Return the current instant as an aware datetime."""
        ...


class SystemClock:
    """Clock backed by the system time."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


@dataclass(frozen=True)
class FixedClock:
    """Clock frozen at one instant, for deterministic tests."""

    instant: datetime

    def __post_init__(self) -> None:
        if self.instant.tzinfo is None:
            raise ValueError("FixedClock requires an aware datetime")

    def now(self) -> datetime:
        return self.instant


# =============================================================================
# Time Zone Provider
# =============================================================================


class TimeZoneProvider(Protocol):
    """Looks up zones by IANA key."""

    def lookup(self, key: str) -> tzinfo:
        """Return the zone for ``key`` or raise ``ScheduleError``."""
        ...


class ZoneInfoProvider:
    """Provider backed by :mod:`zoneinfo` and the ``tzdata`` package."""

    def lookup(self, key: str) -> tzinfo:
        try:
            return ZoneInfo(key)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ScheduleError(
                f"Unknown time zone: {key}", ErrorKind.OUT_OF_RANGE, key
            ) from exc


def offset_at(zone: tzinfo, instant: datetime) -> timedelta:
    """UTC offset of ``zone`` at an aware instant."""
    offset = instant.astimezone(zone).utcoffset()
    return offset if offset is not None else timedelta(0)


def civil_date_in(zone: tzinfo, instant: datetime) -> date:
    """Calendar date in ``zone`` at an aware instant."""
    return instant.astimezone(zone).date()


# =============================================================================
# Conversion
# =============================================================================


def convert_time_of_day(
    value: time,
    source: str,
    target: str,
    clock: Clock,
    provider: TimeZoneProvider | None = None,
) -> time:
    """Re-express a time of day from one zone in another.

    Args:
        value: Wall-clock time in ``source``.
        source: IANA key of the zone the time is written in.
        target: IANA key of the execution zone.
        clock: Supplies "today" in the source zone.
        provider: Zone lookup; :class:`ZoneInfoProvider` when omitted.

    Returns:
        Wall-clock time in ``target`` on the same instant.
    """
    if source == target:
        return value
    provider = provider or ZoneInfoProvider()
    source_zone = provider.lookup(source)
    target_zone = provider.lookup(target)

    today = civil_date_in(source_zone, clock.now())
    # fold=0 selects the earlier offset for overlaps and the pre-transition
    # offset for gaps, which lands past the gap once converted.
    local = datetime.combine(today, value.replace(tzinfo=None)).replace(
        tzinfo=source_zone, fold=0
    )
    converted = local.astimezone(target_zone)
    logger.debug(
        f"Converted {value.isoformat()} {source} -> {converted.time().isoformat()} {target} "
        f"(offset {offset_at(source_zone, local)} -> {offset_at(target_zone, local)})"
    )
    return converted.time().replace(tzinfo=None)
