from __future__ import annotations

import math
from datetime import UTC, date, datetime, timedelta

import erfa
import pytest

from suntimes import ephemeris
from suntimes.ephemeris import PolarCondition


def test_julian_day_j2000_epoch():
    # J2000.0 is 2000-01-01 12h, so the calendar day starts half a day earlier.
    assert ephemeris.julian_day(date(2000, 1, 1)) == 2451544.5


def test_julian_day_meeus_example():
    # Meeus, Astronomical Algorithms, example 7.a: 1957 October 4.81 = JD 2436116.31
    assert ephemeris.julian_day(date(1957, 10, 4)) == 2436115.5


@pytest.mark.parametrize(
    "day",
    [
        date(1800, 1, 1),
        date(1899, 12, 31),
        date(1968, 2, 29),
        date(2000, 2, 28),
        date(2023, 1, 1),
        date(2024, 3, 1),
        date(2100, 6, 15),
        date(2199, 12, 31),
    ],
)
def test_julian_day_matches_erfa(day: date):
    jd1, jd2 = erfa.cal2jd(day.year, day.month, day.day)
    assert ephemeris.julian_day(day) == pytest.approx(jd1 + jd2, abs=1e-9)


def test_julian_centuries_round_trip():
    jd = ephemeris.julian_day(date(2023, 5, 1))
    t = ephemeris.julian_centuries(jd)
    assert ephemeris.julian_day_from_centuries(t) == pytest.approx(jd, abs=1e-9)


def test_mean_longitude_is_normalised():
    for year in range(1800, 2201, 25):
        t = ephemeris.julian_centuries(ephemeris.julian_day(date(year, 7, 1)))
        assert 0.0 <= ephemeris.mean_longitude(t) <= 360.0


def test_meeus_solar_coordinates_example():
    # Meeus example 25.a: 1992 October 13.0 TD
    t = ephemeris.julian_centuries(2448908.5)
    assert t == pytest.approx(-0.072183436, abs=1e-9)
    assert ephemeris.mean_longitude(t) == pytest.approx(201.80720, abs=1e-4)
    assert ephemeris.mean_anomaly(t) == pytest.approx(278.99397, abs=1e-4)
    assert ephemeris.orbit_eccentricity(t) == pytest.approx(0.016711668, abs=1e-9)
    assert ephemeris.equation_of_center(t) == pytest.approx(-1.89732, abs=1e-4)
    assert ephemeris.true_longitude(t) == pytest.approx(199.90988, abs=1e-4)
    assert ephemeris.apparent_longitude(t) == pytest.approx(199.90895, abs=1e-4)
    assert ephemeris.declination(t) == pytest.approx(-7.78507, abs=1e-3)


def test_equation_of_time_meeus_example():
    # Meeus example 28.b: 1992 October 13.0, E = 13m 42.6s
    t = ephemeris.julian_centuries(2448908.5)
    assert ephemeris.equation_of_time(t) == pytest.approx(13.71, abs=0.05)


def test_equation_of_time_stays_within_known_bounds():
    start = date(2023, 1, 1)
    values = [
        ephemeris.equation_of_time(
            ephemeris.julian_centuries(ephemeris.julian_day(start + timedelta(days=n)))
        )
        for n in range(365)
    ]
    assert -14.7 < min(values) < -14.0
    assert 16.2 < max(values) < 16.7


def test_declination_solstices():
    june = ephemeris.julian_centuries(ephemeris.julian_day(date(2023, 6, 21)))
    december = ephemeris.julian_centuries(ephemeris.julian_day(date(2023, 12, 22)))
    assert ephemeris.declination(june) == pytest.approx(23.44, abs=0.02)
    assert ephemeris.declination(december) == pytest.approx(-23.44, abs=0.02)


def test_hour_angle_sign_follows_event():
    rising = ephemeris.hour_angle(40.0, 10.0, 90.833, rising=True)
    setting = ephemeris.hour_angle(40.0, 10.0, 90.833, rising=False)
    assert rising > 0
    assert setting == -rising


def test_hour_angle_is_nan_when_sun_never_reaches_zenith():
    assert math.isnan(ephemeris.hour_angle(80.0, 20.0, 90.833, rising=True))
    assert math.isnan(ephemeris.hour_angle(80.0, -20.0, 90.833, rising=False))


def test_polar_condition():
    midsummer = ephemeris.julian_centuries(ephemeris.julian_day(date(2023, 6, 21)))
    midwinter = ephemeris.julian_centuries(ephemeris.julian_day(date(2023, 12, 21)))
    assert ephemeris.polar_condition(midsummer, 78.0, 90.833) is PolarCondition.polar_day
    assert ephemeris.polar_condition(midwinter, 78.0, 90.833) is PolarCondition.polar_night
    assert ephemeris.polar_condition(midsummer, 40.0, 90.833) is None


def test_nan_propagates_without_raising():
    assert math.isnan(ephemeris.declination(math.nan))
    assert math.isnan(ephemeris.equation_of_time(math.nan))


def test_solar_elevation_and_azimuth_near_transit():
    # Lakewood, NJ around solar noon on the June solstice
    instant = datetime(2023, 6, 21, 16, 57, tzinfo=UTC)
    elevation = ephemeris.solar_elevation(instant, 40.08213, -74.20970)
    azimuth = ephemeris.solar_azimuth(instant, 40.08213, -74.20970)
    assert elevation == pytest.approx(90.0 - 40.08213 + 23.44, abs=0.2)
    assert azimuth == pytest.approx(180.0, abs=3.0)


def test_solar_azimuth_morning_is_east():
    instant = datetime(2023, 3, 20, 13, 0, tzinfo=UTC)  # 09:00 EDT
    azimuth = ephemeris.solar_azimuth(instant, 40.08213, -74.20970)
    assert 90.0 < azimuth < 150.0
    assert ephemeris.solar_elevation(instant, 40.08213, -74.20970) > 0.0


def test_solar_position_requires_aware_datetime():
    with pytest.raises(ValueError):
        ephemeris.solar_elevation(datetime(2023, 1, 1, 12), 0.0, 0.0)
