"""Sunrise/sunset from the US Naval Observatory Almanac for Computers.

Lower precision than :mod:`suntimes.noaa` (roughly a minute), kept for
comparison and for callers who need results matching the almanac method.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date
from typing import Optional

from .calculator import GEOMETRIC_ZENITH, AstronomicalCalculator, normalize_hours
from .geo import GeoCoordinate

__all__ = ["SunTimesCalculator"]

DEG_PER_HOUR = 360.0 / 24.0


def _sin_deg(deg: float) -> float:
    return math.sin(math.radians(deg))


def _cos_deg(deg: float) -> float:
    return math.cos(math.radians(deg))


def _tan_deg(deg: float) -> float:
    return math.tan(math.radians(deg))


def _acos_deg(x: float) -> float:
    if not -1.0 <= x <= 1.0:
        return math.nan
    return math.degrees(math.acos(x))


def _asin_deg(x: float) -> float:
    if not -1.0 <= x <= 1.0:
        return math.nan
    return math.degrees(math.asin(x))


def _approx_time_days(day_of_year: int, hours_from_meridian: float, rising: bool) -> float:
    base = 6.0 if rising else 18.0
    return day_of_year + (base - hours_from_meridian) / 24


def _true_longitude(mean_anomaly: float) -> float:
    longitude = (
        mean_anomaly
        + 1.916 * _sin_deg(mean_anomaly)
        + 0.020 * _sin_deg(2 * mean_anomaly)
        + 282.634
    )
    if longitude >= 360.0:
        longitude -= 360.0
    if longitude < 0:
        longitude += 360.0
    return longitude


def _right_ascension_hours(true_longitude: float) -> float:
    ra = math.degrees(math.atan(0.91764 * _tan_deg(true_longitude)))
    # RA must be in the same quadrant as the longitude
    l_quadrant = math.floor(true_longitude / 90.0) * 90.0
    ra_quadrant = math.floor(ra / 90.0) * 90.0
    return (ra + l_quadrant - ra_quadrant) / DEG_PER_HOUR


def _cos_local_hour_angle(true_longitude: float, latitude: float, zenith: float) -> float:
    sin_dec = 0.39782 * _sin_deg(true_longitude)
    cos_dec = _cos_deg(_asin_deg(sin_dec))
    return (_cos_deg(zenith) - sin_dec * _sin_deg(latitude)) / (cos_dec * _cos_deg(latitude))


def utc_event_hours(
    day_of_year: int, latitude: float, longitude: float, zenith: float, rising: bool
) -> float:
    """UTC hours of the crossing of *zenith*; ``nan`` if the sun never gets there.

    *longitude* is east positive, as in the almanac.
    """

    hours_from_meridian = longitude / DEG_PER_HOUR
    approx = _approx_time_days(day_of_year, hours_from_meridian, rising)
    mean_anomaly = 0.9856 * approx - 3.289
    true_long = _true_longitude(mean_anomaly)
    ra_hours = _right_ascension_hours(true_long)

    cos_h = _cos_local_hour_angle(true_long, latitude, zenith)
    if rising:
        local_hour_angle = 360.0 - _acos_deg(cos_h)
    else:
        local_hour_angle = _acos_deg(cos_h)
    local_hour = local_hour_angle / DEG_PER_HOUR

    local_mean_time = local_hour + ra_hours - 0.06571 * approx - 6.622
    return local_mean_time - hours_from_meridian


@dataclass(frozen=True)
class SunTimesCalculator(AstronomicalCalculator):
    """US Naval Almanac algorithm."""

    name = "usno"
    description = "US Naval Almanac Algorithm"

    def utc_sunrise(
        self,
        day: date,
        coordinate: GeoCoordinate,
        zenith: float,
        adjust_for_elevation: bool = True,
    ) -> Optional[float]:
        adjusted = self._adjusted_zenith(coordinate, zenith, adjust_for_elevation)
        return normalize_hours(
            utc_event_hours(
                day.timetuple().tm_yday,
                coordinate.latitude,
                coordinate.longitude,
                adjusted,
                rising=True,
            )
        )

    def utc_sunset(
        self,
        day: date,
        coordinate: GeoCoordinate,
        zenith: float,
        adjust_for_elevation: bool = True,
    ) -> Optional[float]:
        adjusted = self._adjusted_zenith(coordinate, zenith, adjust_for_elevation)
        return normalize_hours(
            utc_event_hours(
                day.timetuple().tm_yday,
                coordinate.latitude,
                coordinate.longitude,
                adjusted,
                rising=False,
            )
        )

    def utc_noon(self, day: date, coordinate: GeoCoordinate) -> Optional[float]:
        """Midpoint of sea-level sunrise and sunset."""

        sunrise = self.utc_sunrise(day, coordinate, GEOMETRIC_ZENITH, False)
        sunset = self.utc_sunset(day, coordinate, GEOMETRIC_ZENITH, False)
        if sunrise is None or sunset is None:
            return None
        if sunset < sunrise:
            sunset += 24.0
        return normalize_hours(sunrise + (sunset - sunrise) / 2)
