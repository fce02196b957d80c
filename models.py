"""Pydantic models for API requests and responses."""

from __future__ import annotations

from datetime import date
from enum import Enum
from typing import List, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, ConfigDict, Field, field_validator

from suntimes import (
    ASTRONOMICAL_ZENITH,
    CIVIL_ZENITH,
    GEOMETRIC_ZENITH,
    NAUTICAL_ZENITH,
    DipAnchor,
)


class Twilight(str, Enum):
    """Enumeration of supported twilight definitions."""

    official = "official"
    civil = "civil"
    nautical = "nautical"
    astronomical = "astronomical"

    @property
    def zenith(self) -> float:
        return TWILIGHT_ZENITHS[self]


TWILIGHT_ZENITHS = {
    Twilight.official: GEOMETRIC_ZENITH,
    Twilight.civil: CIVIL_ZENITH,
    Twilight.nautical: NAUTICAL_ZENITH,
    Twilight.astronomical: ASTRONOMICAL_ZENITH,
}


class CalculatorName(str, Enum):
    noaa = "noaa"
    usno = "usno"


class _LocationParams(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    lat: float = Field(..., ge=-90.0, le=90.0, description="Latitude in degrees")
    lon: float = Field(..., ge=-180.0, le=180.0, description="Longitude in degrees, east positive")
    date_local: date = Field(..., alias="date", description="Civil date in the zone (YYYY-MM-DD)")
    tz: str = Field("UTC", description="IANA time zone name")
    calculator: Optional[CalculatorName] = Field(
        None, description="Algorithm; defaults to SUNTIMES_CALCULATOR"
    )

    @field_validator("tz")
    @classmethod
    def validate_tz(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown time zone: {value}") from exc
        return value


class SunQueryParams(_LocationParams):
    """Validated query parameters for the ``/sun`` endpoint."""

    elev_m: float = Field(0.0, ge=0.0, description="Observer elevation in meters")
    twilight: Twilight = Field(Twilight.civil, description="Twilight pair to report")


class DipQueryParams(_LocationParams):
    """Validated query parameters for the ``/dip`` endpoint."""

    anchor: DipAnchor = Field(..., description="Event the offset is measured from")
    minutes: float = Field(
        ...,
        ge=-120.0,
        le=120.0,
        description="Minutes before sunrise or after sunset (negative for the other side)",
    )


class SunResponse(BaseModel):
    """Successful sunrise/sunset response payload."""

    ok: bool = True
    status: str = Field(..., description="Computation status")
    date_local: date = Field(..., description="Requested civil date")
    latitude: float = Field(..., description="Latitude in degrees")
    longitude: float = Field(..., description="Longitude in degrees")
    elevation_m: float = Field(..., description="Elevation above mean sea level")
    time_zone: str = Field(..., description="IANA time zone of the local times")
    calculator: CalculatorName = Field(..., description="Algorithm used")
    twilight: Twilight = Field(..., description="Reported twilight definition")
    sunrise_utc: Optional[str] = Field(None, description="Sunrise in UTC (ISO-8601)")
    sunset_utc: Optional[str] = Field(None, description="Sunset in UTC (ISO-8601)")
    sunrise_local: Optional[str] = Field(None, description="Sunrise in the requested zone")
    sunset_local: Optional[str] = Field(None, description="Sunset in the requested zone")
    sea_level_sunrise_local: Optional[str] = Field(None, description="Sunrise ignoring elevation")
    sea_level_sunset_local: Optional[str] = Field(None, description="Sunset ignoring elevation")
    transit_local: Optional[str] = Field(None, description="Solar noon in the requested zone")
    twilight_begin_local: Optional[str] = Field(None, description="Dawn for the twilight")
    twilight_end_local: Optional[str] = Field(None, description="Dusk for the twilight")


class DipResponse(BaseModel):
    """Dip angle equivalent to a fixed offset."""

    ok: bool = True
    status: str
    date_local: date
    latitude: float
    longitude: float
    time_zone: str
    calculator: CalculatorName
    anchor: DipAnchor
    minutes: float
    dip_degrees: Optional[float] = Field(None, description="Degrees below the geometric horizon")


class HealthResponse(BaseModel):
    """Health-check response."""

    ok: bool = True
    default_calculator: CalculatorName
    calculators: List[str]


class ErrorResponse(BaseModel):
    """Error payload."""

    ok: bool = False
    code: str
    error: str
