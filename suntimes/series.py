"""Batch evaluation of daily solar events over a range of dates."""

from __future__ import annotations

from datetime import date, timedelta
from typing import Dict, List, Optional

import numpy as np

from .calculator import GEOMETRIC_ZENITH, AstronomicalCalculator
from .geo import GeoCoordinate
from .noaa import NOAACalculator

__all__ = ["daily_event_hours", "date_range"]


def date_range(start: date, days: int) -> List[date]:
    if days < 0:
        raise ValueError(f"days must be non-negative, got {days}")
    return [start + timedelta(days=offset) for offset in range(days)]


def _as_float(value: Optional[float]) -> float:
    return np.nan if value is None else value


def daily_event_hours(
    start: date,
    days: int,
    coordinate: GeoCoordinate,
    calculator: Optional[AstronomicalCalculator] = None,
    zenith: float = GEOMETRIC_ZENITH,
    adjust_for_elevation: bool = True,
) -> Dict[str, np.ndarray]:
    """Sunrise, sunset and transit for ``days`` consecutive dates.

    Parameters
    ----------
    start:
        First civil date.
    days:
        Number of dates to evaluate.
    coordinate:
        Observer location.
    calculator:
        Algorithm to use; defaults to :class:`~suntimes.noaa.NOAACalculator`.
    zenith:
        Zenith for the rise/set crossing.
    adjust_for_elevation:
        Whether the observer's elevation adjusts the geometric zenith.

    Returns
    -------
    dict[str, numpy.ndarray]
        ``dates`` (``datetime64[D]``), ``sunrise``, ``sunset`` and ``noon`` in
        fractional UTC hours and ``day_length`` in hours. Missing events are
        ``nan``.
    """

    calc = calculator or NOAACalculator()
    dates = date_range(start, days)
    sunrise = np.array(
        [_as_float(calc.utc_sunrise(d, coordinate, zenith, adjust_for_elevation)) for d in dates],
        dtype=float,
    )
    sunset = np.array(
        [_as_float(calc.utc_sunset(d, coordinate, zenith, adjust_for_elevation)) for d in dates],
        dtype=float,
    )
    noon = np.array([_as_float(calc.utc_noon(d, coordinate)) for d in dates], dtype=float)
    day_length = np.mod(sunset - sunrise, 24.0)
    return {
        "dates": np.array(dates, dtype="datetime64[D]"),
        "sunrise": sunrise,
        "sunset": sunset,
        "noon": noon,
        "day_length": day_length,
    }
