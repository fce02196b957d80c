"""Conversion of fixed clock offsets into equivalent solar dip angles."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from datetime import UTC, date, datetime, timedelta
from enum import Enum
from functools import lru_cache
from typing import Optional

from .calculator import GEOMETRIC_ZENITH, AstronomicalCalculator
from .geo import GeoCoordinate
from .projection import project

__all__ = ["DIP_STEP_DEGREES", "DipAnchor", "DipSolver", "MAX_DIP_DEGREES"]

LOGGER = logging.getLogger(__name__)

DIP_STEP_DEGREES = 0.0001
MAX_DIP_DEGREES = 90.0
_MAX_STEPS = round(MAX_DIP_DEGREES / DIP_STEP_DEGREES)

DIP_CACHE_SIZE = int(os.environ.get("SUNTIMES_DIP_CACHE_SIZE", "1024"))


class DipAnchor(str, Enum):
    """Event a clock offset is measured from.

    Positive offsets are before sunrise and after sunset, so both anchors
    map positive minutes onto a positive dip below the horizon.
    """

    sunrise = "sunrise"
    sunset = "sunset"


def _event_instant(
    calculator: AstronomicalCalculator,
    anchor: DipAnchor,
    coordinate: GeoCoordinate,
    day: date,
    zenith: float,
    adjust_for_elevation: bool,
) -> Optional[datetime]:
    if anchor is DipAnchor.sunrise:
        hours = calculator.utc_sunrise(day, coordinate, zenith, adjust_for_elevation)
    else:
        hours = calculator.utc_sunset(day, coordinate, zenith, adjust_for_elevation)
    instant = project(day, hours, coordinate)
    return None if instant is None else instant.astimezone(UTC)


@lru_cache(maxsize=DIP_CACHE_SIZE)
def _solve(
    calculator: AstronomicalCalculator,
    anchor: DipAnchor,
    minutes: float,
    coordinate: GeoCoordinate,
    day: date,
) -> Optional[float]:
    reference = _event_instant(calculator, anchor, coordinate, day, GEOMETRIC_ZENITH, False)
    if reference is None:
        return None

    shift = timedelta(minutes=minutes)
    target = reference - shift if anchor is DipAnchor.sunrise else reference + shift
    # Larger dips move sunrise earlier and sunset later.
    direction = 1 if minutes > 0 else -1
    sign = direction if anchor is DipAnchor.sunset else -direction

    steps = 0
    current = reference
    while minutes != 0 and sign * (target - current).total_seconds() > 0:
        steps += direction
        if abs(steps) > _MAX_STEPS:
            return None
        current = _event_instant(
            calculator,
            anchor,
            coordinate,
            day,
            GEOMETRIC_ZENITH + steps * DIP_STEP_DEGREES,
            True,
        )
        if current is None:
            return None

    dip = round(steps * DIP_STEP_DEGREES, 4)
    LOGGER.debug(
        json.dumps(
            {
                "event": "dip_solved",
                "anchor": anchor.value,
                "minutes": minutes,
                "date": day.isoformat(),
                "latitude": coordinate.latitude,
                "longitude": coordinate.longitude,
                "steps": abs(steps),
                "dip": dip,
            }
        )
    )
    return dip


@dataclass(frozen=True)
class DipSolver:
    """Find the dip below the horizon that reproduces a clock offset.

    The forward relation (dip to event time) has no closed-form inverse, so
    the dip is walked in steps of :data:`DIP_STEP_DEGREES` from the
    geometric horizon until the event time reaches the target. A typical
    twilight offset costs tens of thousands of solver runs; results are
    memoised per calculator, anchor, minutes, coordinate and date, but the
    search should still not be run inside a loop over many dates.
    """

    calculator: AstronomicalCalculator

    def solve(
        self,
        anchor: DipAnchor,
        minutes: float,
        coordinate: GeoCoordinate,
        day: date,
    ) -> Optional[float]:
        """Dip in degrees below the geometric horizon for *minutes* from *anchor*.

        The reference is the sea-level event (refraction and solar radius
        applied, elevation ignored). Returns ``None`` when the reference event
        does not exist on *day* or the sun never reaches the required dip.
        """

        return _solve(self.calculator, DipAnchor(anchor), float(minutes), coordinate, day)

    @staticmethod
    def cache_info():
        return _solve.cache_info()

    @staticmethod
    def cache_clear() -> None:
        _solve.cache_clear()
