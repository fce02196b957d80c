"""Sunrise, sunset, transit and twilight times from the NOAA and USNO algorithms."""

from .calculator import (
    ASTRONOMICAL_ZENITH,
    CIVIL_ZENITH,
    GEOMETRIC_ZENITH,
    NAUTICAL_ZENITH,
    AstronomicalCalculator,
    SolarEvent,
)
from .calendar import AstronomicalCalendar
from .dip import DipAnchor, DipSolver
from .geo import GeoCoordinate, GeoLocationError
from .noaa import NOAACalculator
from .projection import project
from .usno import SunTimesCalculator

CALCULATORS = {
    NOAACalculator.name: NOAACalculator,
    SunTimesCalculator.name: SunTimesCalculator,
}


def get_calculator(name: str) -> AstronomicalCalculator:
    """Instantiate a calculator by its short name (``"noaa"`` or ``"usno"``)."""

    try:
        return CALCULATORS[name.lower()]()
    except KeyError as exc:
        raise ValueError(f"Unsupported calculator: {name}") from exc


__all__ = [
    "ASTRONOMICAL_ZENITH",
    "CALCULATORS",
    "CIVIL_ZENITH",
    "GEOMETRIC_ZENITH",
    "NAUTICAL_ZENITH",
    "AstronomicalCalculator",
    "AstronomicalCalendar",
    "DipAnchor",
    "DipSolver",
    "GeoCoordinate",
    "GeoLocationError",
    "NOAACalculator",
    "SolarEvent",
    "SunTimesCalculator",
    "get_calculator",
    "project",
]
