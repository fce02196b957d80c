"""Solar position series after Meeus, as published by NOAA.

Every function is pure. Angles are in degrees; radians only appear inside
trigonometric calls. Inputs that leave the domain of ``acos``/``asin`` give
``nan`` rather than raising, so polar dates flow through as missing values.
"""

from __future__ import annotations

import math
from datetime import UTC, date, datetime
from enum import Enum

__all__ = [
    "JULIAN_DAY_JAN_1_2000",
    "JULIAN_DAYS_PER_CENTURY",
    "PolarCondition",
    "apparent_longitude",
    "corrected_obliquity",
    "declination",
    "equation_of_center",
    "equation_of_time",
    "hour_angle",
    "julian_centuries",
    "julian_day",
    "julian_day_from_centuries",
    "mean_anomaly",
    "mean_longitude",
    "mean_obliquity",
    "orbit_eccentricity",
    "polar_condition",
    "solar_azimuth",
    "solar_elevation",
    "true_longitude",
]

JULIAN_DAY_JAN_1_2000 = 2451545.0
JULIAN_DAYS_PER_CENTURY = 36525.0


class PolarCondition(str, Enum):
    """Why a rise/set crossing does not exist on a given date."""

    polar_day = "polar_day"
    polar_night = "polar_night"


def _acos(value: float) -> float:
    if not -1.0 <= value <= 1.0:
        return math.nan
    return math.acos(value)


def _asin(value: float) -> float:
    if not -1.0 <= value <= 1.0:
        return math.nan
    return math.asin(value)


def julian_day(day: date) -> float:
    """Julian day at 0h UT of the Gregorian calendar date *day*."""

    year, month = day.year, day.month
    if month <= 2:
        year -= 1
        month += 12
    a = year // 100
    b = 2 - a + a // 4
    return (
        math.floor(365.25 * (year + 4716))
        + math.floor(30.6001 * (month + 1))
        + day.day
        + b
        - 1524.5
    )


def julian_centuries(jd: float) -> float:
    return (jd - JULIAN_DAY_JAN_1_2000) / JULIAN_DAYS_PER_CENTURY


def julian_day_from_centuries(t: float) -> float:
    return t * JULIAN_DAYS_PER_CENTURY + JULIAN_DAY_JAN_1_2000


def mean_longitude(t: float) -> float:
    """Geometric mean longitude of the sun, normalised into [0, 360]."""

    longitude = 280.46646 + t * (36000.76983 + 0.0003032 * t)
    while longitude > 360.0:
        longitude -= 360.0
    while longitude < 0.0:
        longitude += 360.0
    return longitude


def mean_anomaly(t: float) -> float:
    return 357.52911 + t * (35999.05029 - 0.0001537 * t)


def orbit_eccentricity(t: float) -> float:
    return 0.016708634 - t * (0.000042037 + 0.0000001267 * t)


def equation_of_center(t: float) -> float:
    m = math.radians(mean_anomaly(t))
    return (
        math.sin(m) * (1.914602 - t * (0.004817 + 0.000014 * t))
        + math.sin(m + m) * (0.019993 - 0.000101 * t)
        + math.sin(m + m + m) * 0.000289
    )


def true_longitude(t: float) -> float:
    return mean_longitude(t) + equation_of_center(t)


def _omega(t: float) -> float:
    return 125.04 - 1934.136 * t


def apparent_longitude(t: float) -> float:
    """True longitude corrected for nutation and aberration."""

    return true_longitude(t) - 0.00569 - 0.00478 * math.sin(math.radians(_omega(t)))


def mean_obliquity(t: float) -> float:
    seconds = 21.448 - t * (46.8150 + t * (0.00059 - t * 0.001813))
    return 23.0 + (26.0 + seconds / 60.0) / 60.0


def corrected_obliquity(t: float) -> float:
    return mean_obliquity(t) + 0.00256 * math.cos(math.radians(_omega(t)))


def declination(t: float) -> float:
    sint = math.sin(math.radians(corrected_obliquity(t))) * math.sin(
        math.radians(apparent_longitude(t))
    )
    return math.degrees(_asin(sint))


def equation_of_time(t: float) -> float:
    """Apparent minus mean solar time, in minutes."""

    epsilon = corrected_obliquity(t)
    l0 = math.radians(mean_longitude(t))
    e = orbit_eccentricity(t)
    m = math.radians(mean_anomaly(t))

    y = math.tan(math.radians(epsilon) / 2.0)
    y *= y

    sin2l0 = math.sin(2.0 * l0)
    sinm = math.sin(m)
    cos2l0 = math.cos(2.0 * l0)
    sin4l0 = math.sin(4.0 * l0)
    sin2m = math.sin(2.0 * m)

    eot = (
        y * sin2l0
        - 2.0 * e * sinm
        + 4.0 * e * y * sinm * cos2l0
        - 0.5 * y * y * sin4l0
        - 1.25 * e * e * sin2m
    )
    return math.degrees(eot) * 4.0


def _hour_angle_cosine(latitude: float, solar_declination: float, zenith: float) -> float:
    lat = math.radians(latitude)
    dec = math.radians(solar_declination)
    return math.cos(math.radians(zenith)) / (math.cos(lat) * math.cos(dec)) - math.tan(
        lat
    ) * math.tan(dec)


def hour_angle(
    latitude: float, solar_declination: float, zenith: float, rising: bool
) -> float:
    """Hour angle in radians of the sun at *zenith*; negative for setting.

    ``nan`` when the sun never reaches *zenith* at this declination.
    """

    angle = _acos(_hour_angle_cosine(latitude, solar_declination, zenith))
    return angle if rising else -angle


def polar_condition(
    t: float, latitude: float, zenith: float
) -> PolarCondition | None:
    """Classify a missing crossing at Julian century *t*.

    Returns ``None`` when the sun does cross *zenith* on that date.
    """

    cosine = _hour_angle_cosine(latitude, declination(t), zenith)
    if cosine > 1.0:
        return PolarCondition.polar_night
    if cosine < -1.0:
        return PolarCondition.polar_day
    return None


def _instant_centuries(instant: datetime) -> tuple[float, float]:
    if instant.tzinfo is None:
        raise ValueError("datetime must be timezone-aware")
    utc = instant.astimezone(UTC)
    minutes = utc.hour * 60.0 + utc.minute + (utc.second + utc.microsecond / 1e6) / 60.0
    jd = julian_day(utc.date()) + minutes / 1440.0
    return julian_centuries(jd), minutes


def _solar_hour_angle(t: float, utc_minutes: float, longitude: float) -> float:
    true_solar_time = utc_minutes + equation_of_time(t) + 4.0 * longitude
    return math.radians(true_solar_time / 4.0 - 180.0)


def solar_elevation(instant: datetime, latitude: float, longitude: float) -> float:
    """Geometric elevation of the sun's centre in degrees (east-positive longitude)."""

    t, minutes = _instant_centuries(instant)
    h = _solar_hour_angle(t, minutes, longitude)
    dec = math.radians(declination(t))
    lat = math.radians(latitude)
    return math.degrees(
        _asin(math.sin(lat) * math.sin(dec) + math.cos(lat) * math.cos(dec) * math.cos(h))
    )


def solar_azimuth(instant: datetime, latitude: float, longitude: float) -> float:
    """Azimuth of the sun in degrees clockwise from north."""

    t, minutes = _instant_centuries(instant)
    h = _solar_hour_angle(t, minutes, longitude)
    dec = math.radians(declination(t))
    lat = math.radians(latitude)
    azimuth = math.degrees(
        math.atan2(
            math.sin(h), math.cos(h) * math.sin(lat) - math.tan(dec) * math.cos(lat)
        )
    )
    return (azimuth + 180.0) % 360.0
