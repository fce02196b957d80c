"""Solar events for one civil date at one location."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Optional

from .calculator import (
    ASTRONOMICAL_ZENITH,
    CIVIL_ZENITH,
    GEOMETRIC_ZENITH,
    NAUTICAL_ZENITH,
    AstronomicalCalculator,
)
from .dip import DipAnchor, DipSolver
from .geo import GeoCoordinate
from .noaa import NOAACalculator
from .projection import elapsed, project, time_offset

__all__ = ["AstronomicalCalendar"]


@dataclass(frozen=True)
class AstronomicalCalendar:
    """Sunrise, sunset, twilight and transit for ``day`` at ``coordinate``.

    ``sunrise``/``sunset`` include the elevation adjustment; the
    ``sea_level_*`` variants ignore the observer's elevation. Every accessor
    returns ``None`` when the event does not happen on that date.
    """

    day: date
    coordinate: GeoCoordinate
    calculator: AstronomicalCalculator = field(default_factory=NOAACalculator)

    @property
    def calculation_date(self) -> date:
        """Date handed to the calculator, shifted for zones across the antimeridian."""

        return self.day + timedelta(days=self.coordinate.antimeridian_adjustment(self.day))

    # ------------------------------------------------------------------
    # Fractional UTC hours
    # ------------------------------------------------------------------
    def utc_sunrise(self, zenith: float = GEOMETRIC_ZENITH) -> Optional[float]:
        return self.calculator.utc_sunrise(self.calculation_date, self.coordinate, zenith, True)

    def utc_sea_level_sunrise(self, zenith: float = GEOMETRIC_ZENITH) -> Optional[float]:
        return self.calculator.utc_sunrise(self.calculation_date, self.coordinate, zenith, False)

    def utc_sunset(self, zenith: float = GEOMETRIC_ZENITH) -> Optional[float]:
        return self.calculator.utc_sunset(self.calculation_date, self.coordinate, zenith, True)

    def utc_sea_level_sunset(self, zenith: float = GEOMETRIC_ZENITH) -> Optional[float]:
        return self.calculator.utc_sunset(self.calculation_date, self.coordinate, zenith, False)

    def _project(self, hours: Optional[float]) -> Optional[datetime]:
        return project(self.day, hours, self.coordinate)

    # ------------------------------------------------------------------
    # Zoned timestamps
    # ------------------------------------------------------------------
    def sunrise(self) -> Optional[datetime]:
        return self._project(self.utc_sunrise())

    def sea_level_sunrise(self) -> Optional[datetime]:
        return self._project(self.utc_sea_level_sunrise())

    def sunset(self) -> Optional[datetime]:
        return self._project(self.utc_sunset())

    def sea_level_sunset(self) -> Optional[datetime]:
        return self._project(self.utc_sea_level_sunset())

    def sunrise_offset_by_degrees(self, offset_zenith: float) -> Optional[datetime]:
        return self._project(self.utc_sunrise(offset_zenith))

    def sunset_offset_by_degrees(self, offset_zenith: float) -> Optional[datetime]:
        return self._project(self.utc_sunset(offset_zenith))

    def begin_civil_twilight(self) -> Optional[datetime]:
        return self.sunrise_offset_by_degrees(CIVIL_ZENITH)

    def end_civil_twilight(self) -> Optional[datetime]:
        return self.sunset_offset_by_degrees(CIVIL_ZENITH)

    def begin_nautical_twilight(self) -> Optional[datetime]:
        return self.sunrise_offset_by_degrees(NAUTICAL_ZENITH)

    def end_nautical_twilight(self) -> Optional[datetime]:
        return self.sunset_offset_by_degrees(NAUTICAL_ZENITH)

    def begin_astronomical_twilight(self) -> Optional[datetime]:
        return self.sunrise_offset_by_degrees(ASTRONOMICAL_ZENITH)

    def end_astronomical_twilight(self) -> Optional[datetime]:
        return self.sunset_offset_by_degrees(ASTRONOMICAL_ZENITH)

    def sun_transit(self) -> Optional[datetime]:
        """Astronomical solar noon."""

        return self._project(self.calculator.utc_noon(self.calculation_date, self.coordinate))

    def sun_transit_between(
        self, start_of_day: Optional[datetime], end_of_day: Optional[datetime]
    ) -> Optional[datetime]:
        """Midpoint of an arbitrary day definition, i.e. six temporal hours after its start."""

        hour = self.temporal_hour(start_of_day, end_of_day)
        if hour is None:
            return None
        return time_offset(start_of_day, hour * 6)

    def solar_midnight(self) -> Optional[datetime]:
        """Halfway between today's transit and tomorrow's."""

        transit = self.sun_transit()
        tomorrow = AstronomicalCalendar(self.day + timedelta(days=1), self.coordinate, self.calculator)
        next_transit = tomorrow.sun_transit()
        if transit is None or next_transit is None:
            return None
        return time_offset(transit, elapsed(transit, next_transit) / 2)

    def temporal_hour(
        self,
        start_of_day: Optional[datetime] = None,
        end_of_day: Optional[datetime] = None,
    ) -> Optional[timedelta]:
        """One twelfth of the day; sea-level sunrise to sunset unless bounds are given."""

        if start_of_day is None and end_of_day is None:
            start_of_day, end_of_day = self.sea_level_sunrise(), self.sea_level_sunset()
        if start_of_day is None or end_of_day is None:
            return None
        return elapsed(start_of_day, end_of_day) / 12

    def local_mean_time(self, hours: float) -> Optional[datetime]:
        """Instant at which local mean time reads *hours* on this date."""

        if not 0 <= hours < 24:
            raise ValueError(f"Hours must be in [0, 24), got {hours}")
        standard = self.coordinate.standard_offset(self.day) / timedelta(hours=1)
        utc_hours = (hours - standard) % 24.0
        wall = self._project(utc_hours)
        return time_offset(wall, -self.coordinate.local_mean_time_offset(self.day))

    # ------------------------------------------------------------------
    # Dip conversions
    # ------------------------------------------------------------------
    def sunrise_solar_dip_from_offset(self, minutes: float) -> Optional[float]:
        """Degrees below the horizon matching *minutes* before sea-level sunrise."""

        return DipSolver(self.calculator).solve(
            DipAnchor.sunrise, minutes, self.coordinate, self.calculation_date
        )

    def sunset_solar_dip_from_offset(self, minutes: float) -> Optional[float]:
        """Degrees below the horizon matching *minutes* after sea-level sunset."""

        return DipSolver(self.calculator).solve(
            DipAnchor.sunset, minutes, self.coordinate, self.calculation_date
        )
