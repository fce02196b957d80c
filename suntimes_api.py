"""FastAPI application exposing sunrise, sunset and dip computations."""

from __future__ import annotations

import json
import logging
import os
import time
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from typing import Annotated, Optional

from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from models import (
    CalculatorName,
    DipQueryParams,
    DipResponse,
    ErrorResponse,
    HealthResponse,
    SunQueryParams,
    SunResponse,
)
from suntimes import (
    CALCULATORS,
    GEOMETRIC_ZENITH,
    AstronomicalCalculator,
    AstronomicalCalendar,
    DipSolver,
    GeoCoordinate,
    get_calculator,
)
from suntimes.dip import DIP_CACHE_SIZE
from suntimes.ephemeris import julian_centuries, julian_day, polar_condition

logging.basicConfig(level=logging.INFO, format="%(message)s")
LOGGER = logging.getLogger("suntimes-api")

APP_DESCRIPTION = "Sunrise, sunset, twilight and solar dip calculations (NOAA / USNO)"

DEFAULT_CALCULATOR = CalculatorName(os.environ.get("SUNTIMES_CALCULATOR", "noaa").lower())


@asynccontextmanager
async def lifespan(app: FastAPI):
    LOGGER.info(
        json.dumps(
            {
                "event": "startup",
                "default_calculator": DEFAULT_CALCULATOR.value,
                "dip_cache_size": DIP_CACHE_SIZE,
            }
        )
    )
    yield


app = FastAPI(
    title="Suntimes API",
    description=APP_DESCRIPTION,
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET"],
    allow_headers=["*"],
)


def _format_utc(dt: Optional[datetime]) -> Optional[str]:
    if dt is None:
        return None
    return dt.astimezone(UTC).isoformat().replace("+00:00", "Z")


def _format_local(dt: Optional[datetime]) -> Optional[str]:
    if dt is None:
        return None
    return dt.isoformat()


def _error_response(status_code: int, code: str, message: str) -> JSONResponse:
    payload = ErrorResponse(code=code, error=message)
    LOGGER.error(json.dumps({"event": "error", "code": code, "message": message}))
    return JSONResponse(status_code=status_code, content=payload.model_dump())


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    messages = ", ".join(error["msg"] for error in exc.errors())
    return _error_response(422, "validation_error", messages)


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    detail = exc.detail
    if isinstance(detail, dict):
        message = detail.get("error") or detail.get("message") or str(detail)
    elif isinstance(detail, list):
        message = ", ".join(str(item) for item in detail)
    else:
        message = str(detail)
    return _error_response(exc.status_code, f"http_{exc.status_code}", message)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    LOGGER.exception("Unhandled exception", exc_info=exc)
    return _error_response(500, "internal_error", "Unhandled server error")


def _resolve(
    lat: float,
    lon: float,
    tz: str,
    elevation: float,
    calculator: Optional[CalculatorName],
) -> tuple[GeoCoordinate, CalculatorName, AstronomicalCalculator]:
    name = calculator or DEFAULT_CALCULATOR
    try:
        coordinate = GeoCoordinate.create(lat, lon, tz, elevation)
        return coordinate, name, get_calculator(name.value)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


def _status(calendar: AstronomicalCalendar, sunrise: Optional[datetime], sunset: Optional[datetime]) -> str:
    if sunrise is not None or sunset is not None:
        return "ok"
    calc = calendar.calculator
    zenith = calc.adjust_zenith(GEOMETRIC_ZENITH, calendar.coordinate.elevation)
    t = julian_centuries(julian_day(calendar.calculation_date))
    condition = polar_condition(t, calendar.coordinate.latitude, zenith)
    return condition.value if condition is not None else "no_event"


@app.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    return HealthResponse(
        ok=True,
        default_calculator=DEFAULT_CALCULATOR,
        calculators=sorted(CALCULATORS),
    )


@app.get(
    "/sun",
    response_model=SunResponse,
    responses={
        400: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
def sun_endpoint(params: Annotated[SunQueryParams, Query()]) -> SunResponse:
    start_time = time.perf_counter()
    coordinate, name, calculator = _resolve(
        params.lat, params.lon, params.tz, params.elev_m, params.calculator
    )
    calendar = AstronomicalCalendar(params.date_local, coordinate, calculator)

    sunrise = calendar.sunrise()
    sunset = calendar.sunset()
    zenith = params.twilight.zenith
    response = SunResponse(
        status=_status(calendar, sunrise, sunset),
        date_local=params.date_local,
        latitude=params.lat,
        longitude=params.lon,
        elevation_m=params.elev_m,
        time_zone=params.tz,
        calculator=name,
        twilight=params.twilight,
        sunrise_utc=_format_utc(sunrise),
        sunset_utc=_format_utc(sunset),
        sunrise_local=_format_local(sunrise),
        sunset_local=_format_local(sunset),
        sea_level_sunrise_local=_format_local(calendar.sea_level_sunrise()),
        sea_level_sunset_local=_format_local(calendar.sea_level_sunset()),
        transit_local=_format_local(calendar.sun_transit()),
        twilight_begin_local=_format_local(calendar.sunrise_offset_by_degrees(zenith)),
        twilight_end_local=_format_local(calendar.sunset_offset_by_degrees(zenith)),
    )

    duration_ms = (time.perf_counter() - start_time) * 1000.0
    LOGGER.info(
        json.dumps(
            {
                "event": "sun",
                "lat": params.lat,
                "lon": params.lon,
                "date": params.date_local.isoformat(),
                "tz": params.tz,
                "calculator": name.value,
                "twilight": params.twilight.value,
                "status": response.status,
                "duration_ms": round(duration_ms, 3),
            }
        )
    )
    return response


@app.get(
    "/dip",
    response_model=DipResponse,
    responses={
        400: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
def dip_endpoint(params: Annotated[DipQueryParams, Query()]) -> DipResponse:
    start_time = time.perf_counter()
    coordinate, name, calculator = _resolve(
        params.lat, params.lon, params.tz, 0.0, params.calculator
    )
    dip = DipSolver(calculator).solve(params.anchor, params.minutes, coordinate, params.date_local)
    response = DipResponse(
        status="ok" if dip is not None else "no_event",
        date_local=params.date_local,
        latitude=params.lat,
        longitude=params.lon,
        time_zone=params.tz,
        calculator=name,
        anchor=params.anchor,
        minutes=params.minutes,
        dip_degrees=dip,
    )

    duration_ms = (time.perf_counter() - start_time) * 1000.0
    LOGGER.info(
        json.dumps(
            {
                "event": "dip",
                "lat": params.lat,
                "lon": params.lon,
                "date": params.date_local.isoformat(),
                "anchor": params.anchor.value,
                "minutes": params.minutes,
                "status": response.status,
                "dip": dip,
                "duration_ms": round(duration_ms, 3),
            }
        )
    )
    return response
