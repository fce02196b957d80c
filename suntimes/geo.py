"""Observer location used by every solar computation."""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

__all__ = ["GeoCoordinate", "GeoLocationError"]

WGS84_SEMI_MAJOR_AXIS_M = 6378137.0
WGS84_SEMI_MINOR_AXIS_M = 6356752.3142
WGS84_FLATTENING = 1.0 / 298.257223563

_VINCENTY_ITERATION_LIMIT = 20
_MINUTES_PER_DEGREE_OF_LONGITUDE = 4.0


class GeoLocationError(ValueError):
    """Raised when a coordinate is constructed from out-of-range values."""


def _resolve_zone(time_zone: ZoneInfo | str) -> ZoneInfo:
    if isinstance(time_zone, ZoneInfo):
        return time_zone
    try:
        return ZoneInfo(time_zone)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise GeoLocationError(f"Unknown time zone: {time_zone!r}") from exc


@dataclass(frozen=True)
class GeoCoordinate:
    """Latitude, longitude, elevation and time-zone rule of an observer.

    Longitude is east positive. Instances are immutable; the ``with_*``
    methods return validated copies.
    """

    latitude: float
    longitude: float
    time_zone: ZoneInfo
    elevation: float = 0.0
    name: str = ""

    def __post_init__(self) -> None:
        if not isinstance(self.time_zone, ZoneInfo):
            object.__setattr__(self, "time_zone", _resolve_zone(self.time_zone))
        if not -90.0 <= self.latitude <= 90.0:
            raise GeoLocationError(
                f"Latitude must be between -90 and 90 degrees, got {self.latitude}"
            )
        if not -180.0 <= self.longitude <= 180.0:
            raise GeoLocationError(
                f"Longitude must be between -180 and 180 degrees, got {self.longitude}"
            )
        if not self.elevation >= 0.0:
            raise GeoLocationError(
                f"Elevation cannot be negative, got {self.elevation}"
            )
        if not math.isfinite(self.elevation):
            raise GeoLocationError(f"Elevation must be finite, got {self.elevation}")

    @classmethod
    def create(
        cls,
        latitude: float,
        longitude: float,
        time_zone: ZoneInfo | str = "UTC",
        elevation: float = 0.0,
        name: str = "",
    ) -> "GeoCoordinate":
        return cls(
            latitude=latitude,
            longitude=longitude,
            time_zone=_resolve_zone(time_zone),
            elevation=elevation,
            name=name,
        )

    @classmethod
    def greenwich(cls) -> "GeoCoordinate":
        return cls.create(51.4772, 0.0, "GMT", name="Greenwich, England")

    @classmethod
    def from_dms(
        cls,
        latitude: tuple[int, int, float, str],
        longitude: tuple[int, int, float, str],
        time_zone: ZoneInfo | str = "UTC",
        elevation: float = 0.0,
        name: str = "",
    ) -> "GeoCoordinate":
        """Build a coordinate from ``(degrees, minutes, seconds, direction)`` tuples.

        Latitude directions are ``"N"``/``"S"``, longitude directions ``"E"``/``"W"``.
        """

        lat = _dms_to_degrees(*latitude, positive="N", negative="S", limit=90.0)
        lon = _dms_to_degrees(*longitude, positive="E", negative="W", limit=180.0)
        return cls.create(lat, lon, time_zone, elevation, name)

    def with_latitude(self, latitude: float) -> "GeoCoordinate":
        return replace(self, latitude=latitude)

    def with_longitude(self, longitude: float) -> "GeoCoordinate":
        return replace(self, longitude=longitude)

    def with_elevation(self, elevation: float) -> "GeoCoordinate":
        return replace(self, elevation=elevation)

    def with_time_zone(self, time_zone: ZoneInfo | str) -> "GeoCoordinate":
        return replace(self, time_zone=_resolve_zone(time_zone))

    # ------------------------------------------------------------------
    # Time-zone helpers
    # ------------------------------------------------------------------
    def local_midnight(self, day: date) -> datetime:
        return datetime(day.year, day.month, day.day, tzinfo=self.time_zone)

    def utc_offset(self, day: date) -> timedelta:
        """UTC offset (DST included) in effect at local midnight of *day*."""

        return self.local_midnight(day).utcoffset() or timedelta(0)

    def standard_offset(self, day: date) -> timedelta:
        """UTC offset of *day* with any daylight saving component removed."""

        midnight = self.local_midnight(day)
        offset = midnight.utcoffset() or timedelta(0)
        return offset - (midnight.dst() or timedelta(0))

    def local_mean_time_offset(self, day: date) -> timedelta:
        """Difference between local mean time and standard zone time.

        Positive when the location's mean solar time runs ahead of the zone's
        standard time (east of the zone meridian).
        """

        lmt = timedelta(minutes=self.longitude * _MINUTES_PER_DEGREE_OF_LONGITUDE)
        return lmt - self.standard_offset(day)

    def antimeridian_adjustment(self, day: date) -> int:
        """Days to shift the calculation date for zones across the antimeridian.

        Returns ``1`` when the zone runs 20 or more hours behind local mean
        time, ``-1`` when it runs 20 or more hours ahead, ``0`` otherwise.
        """

        hours = self.local_mean_time_offset(day) / timedelta(hours=1)
        if hours >= 20:
            return 1
        if hours <= -20:
            return -1
        return 0

    # ------------------------------------------------------------------
    # Geodesy
    # ------------------------------------------------------------------
    def geodesic_distance(self, other: "GeoCoordinate") -> float:
        """Vincenty inverse distance in metres on the WGS-84 ellipsoid."""

        return self._vincenty(other)[0]

    def geodesic_initial_bearing(self, other: "GeoCoordinate") -> float:
        return self._vincenty(other)[1]

    def geodesic_final_bearing(self, other: "GeoCoordinate") -> float:
        return self._vincenty(other)[2]

    def _vincenty(self, other: "GeoCoordinate") -> tuple[float, float, float]:
        a = WGS84_SEMI_MAJOR_AXIS_M
        b = WGS84_SEMI_MINOR_AXIS_M
        f = WGS84_FLATTENING
        big_l = math.radians(other.longitude) - math.radians(self.longitude)
        u1 = math.atan((1 - f) * math.tan(math.radians(self.latitude)))
        u2 = math.atan((1 - f) * math.tan(math.radians(other.latitude)))
        sin_u1, cos_u1 = math.sin(u1), math.cos(u1)
        sin_u2, cos_u2 = math.sin(u2), math.cos(u2)

        lam = big_l
        lam_prev = 2 * math.pi
        iterations = _VINCENTY_ITERATION_LIMIT
        sin_lam = cos_lam = sin_sigma = cos_sigma = sigma = 0.0
        cos_sq_alpha = cos_2sigma_m = 0.0
        while abs(lam - lam_prev) > 1e-12 and iterations > 0:
            sin_lam, cos_lam = math.sin(lam), math.cos(lam)
            sin_sigma = math.sqrt(
                (cos_u2 * sin_lam) ** 2
                + (cos_u1 * sin_u2 - sin_u1 * cos_u2 * cos_lam) ** 2
            )
            if sin_sigma == 0:
                return 0.0, 0.0, 0.0  # coincident points
            cos_sigma = sin_u1 * sin_u2 + cos_u1 * cos_u2 * cos_lam
            sigma = math.atan2(sin_sigma, cos_sigma)
            sin_alpha = cos_u1 * cos_u2 * sin_lam / sin_sigma
            cos_sq_alpha = 1 - sin_alpha * sin_alpha
            if cos_sq_alpha == 0:
                cos_2sigma_m = 0.0  # equatorial line
            else:
                cos_2sigma_m = cos_sigma - 2 * sin_u1 * sin_u2 / cos_sq_alpha
            c = f / 16 * cos_sq_alpha * (4 + f * (4 - 3 * cos_sq_alpha))
            lam_prev = lam
            lam = big_l + (1 - c) * f * sin_alpha * (
                sigma
                + c * sin_sigma * (
                    cos_2sigma_m + c * cos_sigma * (-1 + 2 * cos_2sigma_m * cos_2sigma_m)
                )
            )
            iterations -= 1

        if iterations == 0:
            return math.nan, math.nan, math.nan

        u_sq = cos_sq_alpha * (a * a - b * b) / (b * b)
        big_a = 1 + u_sq / 16384 * (4096 + u_sq * (-768 + u_sq * (320 - 175 * u_sq)))
        big_b = u_sq / 1024 * (256 + u_sq * (-128 + u_sq * (74 - 47 * u_sq)))
        delta_sigma = big_b * sin_sigma * (
            cos_2sigma_m
            + big_b / 4 * (
                cos_sigma * (-1 + 2 * cos_2sigma_m * cos_2sigma_m)
                - big_b / 6 * cos_2sigma_m
                * (-3 + 4 * sin_sigma * sin_sigma)
                * (-3 + 4 * cos_2sigma_m * cos_2sigma_m)
            )
        )
        distance = b * big_a * (sigma - delta_sigma)
        initial = math.degrees(
            math.atan2(cos_u2 * sin_lam, cos_u1 * sin_u2 - sin_u1 * cos_u2 * cos_lam)
        )
        final = math.degrees(
            math.atan2(cos_u1 * sin_lam, -sin_u1 * cos_u2 + cos_u1 * sin_u2 * cos_lam)
        )
        return distance, initial, final

    def rhumb_line_bearing(self, other: "GeoCoordinate") -> float:
        """Constant-course bearing in degrees from this point to *other*."""

        d_lon = math.radians(other.longitude - self.longitude)
        d_phi = math.log(
            math.tan(math.radians(other.latitude) / 2 + math.pi / 4)
            / math.tan(math.radians(self.latitude) / 2 + math.pi / 4)
        )
        if abs(d_lon) > math.pi:
            d_lon = -(2 * math.pi - d_lon) if d_lon > 0 else 2 * math.pi + d_lon
        return math.degrees(math.atan2(d_lon, d_phi))

    def rhumb_line_distance(self, other: "GeoCoordinate") -> float:
        """Rhumb line distance in metres on a sphere of WGS-84 equatorial radius."""

        d_lat = math.radians(other.latitude) - math.radians(self.latitude)
        d_lon = abs(math.radians(other.longitude) - math.radians(self.longitude))
        d_phi = math.log(
            math.tan(math.radians(other.latitude) / 2 + math.pi / 4)
            / math.tan(math.radians(self.latitude) / 2 + math.pi / 4)
        )
        if abs(d_phi) > 1e-12:
            q = d_lat / d_phi
        else:
            q = math.cos(math.radians(self.latitude))  # east-west course
        if d_lon > math.pi:
            d_lon = 2 * math.pi - d_lon
        return math.sqrt(d_lat * d_lat + q * q * d_lon * d_lon) * WGS84_SEMI_MAJOR_AXIS_M


def _dms_to_degrees(
    degrees: int,
    minutes: int,
    seconds: float,
    direction: str,
    *,
    positive: str,
    negative: str,
    limit: float,
) -> float:
    if degrees < 0 or minutes < 0 or seconds < 0:
        raise GeoLocationError("Degrees, minutes and seconds must be non-negative")
    if minutes >= 60 or seconds >= 60:
        raise GeoLocationError("Minutes and seconds must be below 60")
    value = degrees + minutes / 60.0 + seconds / 3600.0
    if value > limit:
        raise GeoLocationError(f"Angle {value} exceeds {limit} degrees")
    direction = direction.upper()
    if direction == negative:
        return -value
    if direction != positive:
        raise GeoLocationError(
            f"Direction must be {positive!r} or {negative!r}, got {direction!r}"
        )
    return value
