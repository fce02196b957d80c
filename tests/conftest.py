from __future__ import annotations

import pytest

from suntimes import GeoCoordinate, NOAACalculator, SunTimesCalculator


@pytest.fixture(scope="session")
def lakewood() -> GeoCoordinate:
    return GeoCoordinate.create(40.08213, -74.20970, "America/New_York", name="Lakewood, NJ")


@pytest.fixture(scope="session")
def jerusalem() -> GeoCoordinate:
    return GeoCoordinate.create(31.778015, 35.235413, "Asia/Jerusalem", name="Jerusalem")


@pytest.fixture(scope="session")
def svalbard() -> GeoCoordinate:
    return GeoCoordinate.create(78.2232, 15.6469, "Europe/Oslo", name="Longyearbyen")


@pytest.fixture(scope="session")
def tokyo() -> GeoCoordinate:
    return GeoCoordinate.create(35.6895, 139.6917, "Asia/Tokyo", elevation=40.0, name="Tokyo")


@pytest.fixture(scope="session")
def los_angeles() -> GeoCoordinate:
    return GeoCoordinate.create(34.0522, -118.2437, "America/Los_Angeles", name="Los Angeles")


@pytest.fixture(scope="session")
def noaa() -> NOAACalculator:
    return NOAACalculator()


@pytest.fixture(scope="session")
def usno() -> SunTimesCalculator:
    return SunTimesCalculator()
