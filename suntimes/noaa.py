"""NOAA implementation of the Jean Meeus sunrise/sunset algorithm."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date
from typing import Optional

from . import ephemeris
from .calculator import AstronomicalCalculator, normalize_hours
from .geo import GeoCoordinate

__all__ = ["NOAACalculator", "solar_noon_utc_minutes", "sunrise_sunset_utc_minutes"]


def solar_noon_utc_minutes(t: float, longitude: float) -> float:
    """Solar noon in UTC minutes after 0h for Julian century *t*.

    *longitude* is west positive. The equation of time is evaluated twice,
    the second time at the approximate noon instant.
    """

    jd = ephemeris.julian_day_from_centuries(t)
    t_noon = ephemeris.julian_centuries(jd + longitude / 360.0)
    eq_time = ephemeris.equation_of_time(t_noon)
    noon = 720 + longitude * 4 - eq_time

    t_refined = ephemeris.julian_centuries(jd - 0.5 + noon / 1440.0)
    eq_time = ephemeris.equation_of_time(t_refined)
    return 720 + longitude * 4 - eq_time


def _event_minutes(t: float, latitude: float, longitude: float, zenith: float, rising: bool) -> float:
    eq_time = ephemeris.equation_of_time(t)
    solar_dec = ephemeris.declination(t)
    angle = ephemeris.hour_angle(latitude, solar_dec, zenith, rising)
    delta = longitude - math.degrees(angle)
    return 720 + 4 * delta - eq_time


def sunrise_sunset_utc_minutes(
    jd: float, latitude: float, longitude: float, zenith: float, rising: bool
) -> float:
    """UTC minutes of the crossing of *zenith*, ``nan`` if there is none.

    *longitude* is west positive. Two passes: the first at the refined solar
    noon, the second at the first estimate of the event itself.
    """

    t = ephemeris.julian_centuries(jd)
    noon = solar_noon_utc_minutes(t, longitude)
    t_noon = ephemeris.julian_centuries(jd + noon / 1440.0)
    first = _event_minutes(t_noon, latitude, longitude, zenith, rising)

    t_event = ephemeris.julian_centuries(ephemeris.julian_day_from_centuries(t) + first / 1440.0)
    return _event_minutes(t_event, latitude, longitude, zenith, rising)


@dataclass(frozen=True)
class NOAACalculator(AstronomicalCalculator):
    """US National Oceanic and Atmospheric Administration algorithm."""

    name = "noaa"
    description = "US National Oceanic and Atmospheric Administration Algorithm"

    def utc_sunrise(
        self,
        day: date,
        coordinate: GeoCoordinate,
        zenith: float,
        adjust_for_elevation: bool = True,
    ) -> Optional[float]:
        return self._rise_set(day, coordinate, zenith, adjust_for_elevation, rising=True)

    def utc_sunset(
        self,
        day: date,
        coordinate: GeoCoordinate,
        zenith: float,
        adjust_for_elevation: bool = True,
    ) -> Optional[float]:
        return self._rise_set(day, coordinate, zenith, adjust_for_elevation, rising=False)

    def utc_noon(self, day: date, coordinate: GeoCoordinate) -> Optional[float]:
        t = ephemeris.julian_centuries(ephemeris.julian_day(day))
        noon = solar_noon_utc_minutes(t, -coordinate.longitude)
        return normalize_hours(noon / 60)

    def _rise_set(
        self,
        day: date,
        coordinate: GeoCoordinate,
        zenith: float,
        adjust_for_elevation: bool,
        rising: bool,
    ) -> Optional[float]:
        adjusted = self._adjusted_zenith(coordinate, zenith, adjust_for_elevation)
        minutes = sunrise_sunset_utc_minutes(
            ephemeris.julian_day(day),
            coordinate.latitude,
            -coordinate.longitude,
            adjusted,
            rising,
        )
        return normalize_hours(minutes / 60)
