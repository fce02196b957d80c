"""Projection of fractional UTC hours onto zoned timestamps."""

from __future__ import annotations

from datetime import UTC, date, datetime, timedelta
from typing import Optional

from .geo import GeoCoordinate

__all__ = ["elapsed", "project", "time_offset"]

_ONE_DAY = timedelta(days=1)


def _decode_hours(hours: float) -> tuple[int, int, int]:
    whole_hours = int(hours)
    remainder = hours - whole_hours
    minutes = min(int(remainder * 60), 59)
    remainder -= minutes / 60
    seconds = min(max(int(remainder * 3600), 0), 59)
    return whole_hours, minutes, seconds


def project(
    day: date, utc_hours: Optional[float], coordinate: GeoCoordinate
) -> Optional[datetime]:
    """Place an event computed for civil date *day* on the time line.

    Parameters
    ----------
    day:
        Civil date in the coordinate's zone the event was computed for.
    utc_hours:
        Event time as a fractional UTC hour in ``[0, 24)``, or ``None``.
    coordinate:
        Location whose time-zone rule gives the result its calendar day.

    Returns
    -------
    datetime | None
        Aware datetime in ``coordinate.time_zone``, ``None`` for a missing event.

    The decoded clock fields are applied to *day* as UTC fields. Because the
    solver's UTC hour wraps at 24, an event east or west of UTC can belong to
    the neighbouring UTC day; the zone offset of *day* decides which.
    """

    if utc_hours is None:
        return None
    hour, minute, second = _decode_hours(utc_hours)
    instant = datetime(day.year, day.month, day.day, hour, minute, second, tzinfo=UTC)
    offset_hours = coordinate.utc_offset(day) / timedelta(hours=1)
    if utc_hours + offset_hours > 24:
        instant -= _ONE_DAY
    elif utc_hours + offset_hours < 0:
        instant += _ONE_DAY
    return instant.astimezone(coordinate.time_zone)


def time_offset(instant: Optional[datetime], offset: timedelta) -> Optional[datetime]:
    """Shift *instant* by elapsed time, keeping its zone; ``None`` passes through."""

    if instant is None:
        return None
    # Same-zone datetime arithmetic is wall-clock arithmetic; go through UTC.
    return (instant.astimezone(UTC) + offset).astimezone(instant.tzinfo)


def elapsed(start: datetime, end: datetime) -> timedelta:
    return end.astimezone(UTC) - start.astimezone(UTC)
