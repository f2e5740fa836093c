"""Expiry timestamps for cache entries.

TTLs are whole minutes. Deadlines are stored as naive wall-clock times in a
single named zone with second precision, so every reader and writer must use
the same zone.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timedelta, tzinfo
from enum import Enum

TTL_UNIT = timedelta(minutes=1)

# Historical "never expires" value, kept for existing callers.
LEGACY_NEVER_TTL = 1001


class Expiry(Enum):
    """Explicit TTL variants that are not a number of minutes."""

    NEVER = "never"


Ttl = int | Expiry | None
Clock = Callable[[tzinfo], datetime]


def now_in(zone: tzinfo) -> datetime:
    """Default clock: the current aware time in ``zone``."""
    return datetime.now(zone)


def wall_clock(moment: datetime) -> datetime:
    """Drop the zone so the value compares with stored deadlines."""
    return moment.replace(tzinfo=None)


def expires_at(ttl: Ttl, now: datetime) -> datetime | None:
    """Absolute deadline for an entry written at ``now``.

    - ``Expiry.NEVER`` or ``LEGACY_NEVER_TTL`` -> ``None`` (never expires)
    - falsy ttl (``0``, ``None``) -> ``now``, i.e. already due
    - positive ttl -> ``now`` plus that many minutes, capped at ``datetime.max``
    """
    if ttl is Expiry.NEVER:
        return None
    if not ttl:
        return wall_clock(now).replace(microsecond=0)

    minutes = int(ttl)
    if minutes < 0:
        raise ValueError(f"TTL must not be negative, got {minutes}")
    if minutes == LEGACY_NEVER_TTL:
        return None
    try:
        deadline = now + minutes * TTL_UNIT
    except OverflowError:
        # Past the calendar's end; clamp to the last representable second
        return datetime.max.replace(microsecond=0)
    return wall_clock(deadline).replace(microsecond=0)


def is_expired(deadline: datetime, now: datetime) -> bool:
    return wall_clock(now) >= deadline
