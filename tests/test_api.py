from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Iterable

import pytest
from fastapi.testclient import TestClient

LAKEWOOD = {"lat": 40.08213, "lon": -74.20970, "tz": "America/New_York"}


@pytest.fixture(scope="module")
def api_client() -> Iterable[TestClient]:
    from suntimes_api import app

    with TestClient(app) as client:
        yield client


def test_health_endpoint(api_client: TestClient) -> None:
    response = api_client.get("/health")
    assert response.status_code == 200
    payload = response.json()
    assert payload["ok"] is True
    assert payload["default_calculator"] == "noaa"
    assert payload["calculators"] == ["noaa", "usno"]


def test_sun_lakewood(api_client: TestClient) -> None:
    response = api_client.get(
        "/sun", params={**LAKEWOOD, "date": "2023-01-01", "twilight": "nautical"}
    )
    assert response.status_code == 200
    payload = response.json()
    assert payload["ok"] is True
    assert payload["status"] == "ok"
    assert payload["calculator"] == "noaa"
    assert payload["twilight"] == "nautical"
    assert payload["sunrise_local"].startswith("2023-01-01T07:18:57")
    assert payload["sunrise_local"].endswith("-05:00")
    assert payload["sunset_local"].startswith("2023-01-01T16:41:56")
    assert payload["sunrise_utc"].startswith("2023-01-01T12:18:57")
    assert payload["sunrise_utc"].endswith("Z")
    assert payload["twilight_begin_local"] < payload["sunrise_local"]
    assert payload["twilight_end_local"] > payload["sunset_local"]
    transit = datetime.fromisoformat(payload["transit_local"])
    assert abs(transit - datetime(2023, 1, 1, 17, tzinfo=UTC)) < timedelta(minutes=2)


def test_sun_usno_calculator(api_client: TestClient) -> None:
    response = api_client.get(
        "/sun", params={**LAKEWOOD, "date": "2023-05-01", "calculator": "usno"}
    )
    assert response.status_code == 200
    payload = response.json()
    assert payload["calculator"] == "usno"
    assert payload["sunrise_local"].startswith("2023-05-01T05:5")


def test_sun_elevation_changes_sunrise(api_client: TestClient) -> None:
    response = api_client.get(
        "/sun", params={**LAKEWOOD, "date": "2023-05-01", "elev_m": 500}
    )
    payload = response.json()
    assert payload["elevation_m"] == 500
    assert payload["sunrise_local"] < payload["sea_level_sunrise_local"]


@pytest.mark.parametrize(
    "day, status",
    [("2023-06-21", "polar_day"), ("2023-12-21", "polar_night")],
)
def test_sun_polar_status(api_client: TestClient, day: str, status: str) -> None:
    response = api_client.get(
        "/sun",
        params={"lat": 78.2232, "lon": 15.6469, "date": day, "tz": "Europe/Oslo"},
    )
    assert response.status_code == 200
    payload = response.json()
    assert payload["status"] == status
    assert payload["sunrise_local"] is None
    assert payload["sunset_utc"] is None
    assert payload["transit_local"] is not None


@pytest.mark.parametrize(
    "params",
    [
        {"lat": 95, "lon": 0, "date": "2023-01-01"},
        {"lat": 0, "lon": 200, "date": "2023-01-01"},
        {"lat": 0, "lon": 0, "date": "2023-13-01"},
        {"lat": 0, "lon": 0, "date": "2023-01-01", "tz": "Mars/Olympus_Mons"},
        {"lat": 0, "lon": 0, "date": "2023-01-01", "elev_m": -10},
        {"lat": 0, "lon": 0, "date": "2023-01-01", "calculator": "spice"},
        {"lat": 0, "lon": 0},
    ],
)
def test_sun_validation_error(api_client: TestClient, params: dict) -> None:
    response = api_client.get("/sun", params=params)
    assert response.status_code == 422
    payload = response.json()
    assert payload["code"] == "validation_error"
    assert payload["ok"] is False
    assert payload["error"]


def test_dip_endpoint(api_client: TestClient) -> None:
    response = api_client.get(
        "/dip",
        params={**LAKEWOOD, "date": "2023-03-20", "anchor": "sunrise", "minutes": 20},
    )
    assert response.status_code == 200
    payload = response.json()
    assert payload["status"] == "ok"
    assert payload["anchor"] == "sunrise"
    assert payload["minutes"] == 20
    assert 2.0 < payload["dip_degrees"] < 6.0


def test_dip_polar_no_event(api_client: TestClient) -> None:
    response = api_client.get(
        "/dip",
        params={
            "lat": 78.2232,
            "lon": 15.6469,
            "date": "2023-06-21",
            "tz": "Europe/Oslo",
            "anchor": "sunset",
            "minutes": 30,
        },
    )
    assert response.status_code == 200
    payload = response.json()
    assert payload["status"] == "no_event"
    assert payload["dip_degrees"] is None


def test_dip_minutes_out_of_range(api_client: TestClient) -> None:
    response = api_client.get(
        "/dip",
        params={**LAKEWOOD, "date": "2023-03-20", "anchor": "sunset", "minutes": 500},
    )
    assert response.status_code == 422
    assert response.json()["code"] == "validation_error"


def test_dip_requires_anchor(api_client: TestClient) -> None:
    response = api_client.get("/dip", params={**LAKEWOOD, "date": "2023-03-20", "minutes": 10})
    assert response.status_code == 422


def test_sun_infinite_elevation_is_rejected(api_client: TestClient) -> None:
    response = api_client.get(
        "/sun", params={**LAKEWOOD, "date": "2023-05-01", "elev_m": "inf"}
    )
    assert response.status_code == 400
    payload = response.json()
    assert payload["code"] == "http_400"
    assert "finite" in payload["error"]
