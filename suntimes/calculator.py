"""Common interface shared by the sunrise/sunset algorithms."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional

from .geo import GeoCoordinate

__all__ = [
    "ASTRONOMICAL_ZENITH",
    "CIVIL_ZENITH",
    "DEFAULT_EARTH_RADIUS_KM",
    "DEFAULT_REFRACTION",
    "DEFAULT_SOLAR_RADIUS",
    "GEOMETRIC_ZENITH",
    "NAUTICAL_ZENITH",
    "AstronomicalCalculator",
    "SolarEvent",
    "normalize_hours",
]

GEOMETRIC_ZENITH = 90.0
CIVIL_ZENITH = 96.0
NAUTICAL_ZENITH = 102.0
ASTRONOMICAL_ZENITH = 108.0

# Calendrical Calculations gives 34.478885263888294 as a more accurate global average.
DEFAULT_REFRACTION = 34.0 / 60.0
DEFAULT_SOLAR_RADIUS = 16.0 / 60.0
DEFAULT_EARTH_RADIUS_KM = 6356.9


class SolarEvent(str, Enum):
    sunrise = "sunrise"
    sunset = "sunset"
    noon = "noon"


def normalize_hours(hours: float) -> Optional[float]:
    """Wrap *hours* into ``[0, 24)``; ``nan`` becomes ``None``."""

    if math.isnan(hours):
        return None
    while hours < 0.0:
        hours += 24.0
    while hours >= 24.0:
        hours -= 24.0
    return hours


@dataclass(frozen=True)
class AstronomicalCalculator(ABC):
    """Base class for algorithms returning UTC event times as fractional hours.

    Parameters
    ----------
    refraction:
        Average atmospheric refraction at the horizon, in degrees.
    solar_radius:
        Apparent radius of the sun, in degrees.
    earth_radius:
        Earth radius in kilometres used for the elevation adjustment.

    Implementations keep no location state: every call receives the
    :class:`~suntimes.geo.GeoCoordinate` it computes for, so one instance
    can serve any number of threads and locations.
    """

    refraction: float = DEFAULT_REFRACTION
    solar_radius: float = DEFAULT_SOLAR_RADIUS
    earth_radius: float = DEFAULT_EARTH_RADIUS_KM

    name = "abstract"
    description = ""

    def elevation_adjustment(self, elevation: float) -> float:
        """Dip of the visible horizon, in degrees, for an observer *elevation* metres up."""

        return math.degrees(
            math.acos(self.earth_radius / (self.earth_radius + elevation / 1000.0))
        )

    def adjust_zenith(self, zenith: float, elevation: float) -> float:
        """Zenith actually used for the crossing of *zenith* at *elevation*.

        Only the geometric zenith of exactly 90 degrees is adjusted, by the
        solar radius, refraction and the elevation dip. Twilight zeniths are
        defined by the sun's centre and are returned unchanged.
        """

        if zenith == GEOMETRIC_ZENITH:
            return zenith + (
                self.solar_radius + self.refraction + self.elevation_adjustment(elevation)
            )
        return zenith

    @abstractmethod
    def utc_sunrise(
        self,
        day: date,
        coordinate: GeoCoordinate,
        zenith: float,
        adjust_for_elevation: bool = True,
    ) -> Optional[float]:
        """UTC sunrise (or dawn at *zenith*) in hours, ``None`` if the sun never crosses."""

    @abstractmethod
    def utc_sunset(
        self,
        day: date,
        coordinate: GeoCoordinate,
        zenith: float,
        adjust_for_elevation: bool = True,
    ) -> Optional[float]:
        """UTC sunset (or dusk at *zenith*) in hours, ``None`` if the sun never crosses."""

    @abstractmethod
    def utc_noon(self, day: date, coordinate: GeoCoordinate) -> Optional[float]:
        """UTC time of solar transit in hours."""

    def compute_utc(
        self,
        day: date,
        coordinate: GeoCoordinate,
        zenith: float,
        event: SolarEvent,
        adjust_for_elevation: bool = True,
    ) -> Optional[float]:
        if event is SolarEvent.sunrise:
            return self.utc_sunrise(day, coordinate, zenith, adjust_for_elevation)
        if event is SolarEvent.sunset:
            return self.utc_sunset(day, coordinate, zenith, adjust_for_elevation)
        return self.utc_noon(day, coordinate)

    def _adjusted_zenith(
        self, coordinate: GeoCoordinate, zenith: float, adjust_for_elevation: bool
    ) -> float:
        elevation = coordinate.elevation if adjust_for_elevation else 0.0
        return self.adjust_zenith(zenith, elevation)
