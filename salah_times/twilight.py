"""Season- and latitude-adjusted twilight, after the Moonsighting Committee curves.

The adjustment is the interval in minutes between sunrise and Fajr (morning)
or between sunset and Isha (evening). It is read off a piecewise-linear curve
through four reference values a, b, c, d, each linear in |latitude|, laid out
over the year as a -> b -> c -> d -> c -> b -> a starting at the winter
solstice of the observer's hemisphere.
"""

import logging
from datetime import datetime as DateTime, timezone, tzinfo

from . import calendar_util
from .calendar_util import TimeUnit

log = logging.getLogger(__name__)

NORTHERN_OFFSET = 10

MORNING_COEFFICIENTS = (28.65, 19.44, 32.74, 48.10)
EVENING_COEFFICIENTS = (25.60, 2.050, -9.210, 6.140)


def days_since_solstice(day_of_year: int, year: int, latitude: float) -> int:
    """Days since the winter solstice of the observer's hemisphere, in [0, days in year)."""
    leap = calendar_util.is_leap_year(year)
    days_in_year = calendar_util.days_in_year(year)
    if latitude >= 0:
        return (day_of_year + NORTHERN_OFFSET) % days_in_year
    southern_offset = 173 if leap else 172
    return (day_of_year - southern_offset) % days_in_year


def _reference_points(latitude: float, coefficients: tuple[float, ...]) -> tuple[float, ...]:
    return tuple(75.0 + (k / 55.0) * abs(latitude) for k in coefficients)


def _interpolate_season(dyy: int, a: float, b: float, c: float, d: float) -> float:
    """Walk a -> b -> c -> d -> c -> b -> a across the six segments."""
    if dyy < 91:
        return a + (b - a) / 91.0 * dyy
    elif dyy < 137:
        return b + (c - b) / 46.0 * (dyy - 91)
    elif dyy < 183:
        return c + (d - c) / 46.0 * (dyy - 137)
    elif dyy < 229:
        return d + (c - d) / 46.0 * (dyy - 183)
    elif dyy < 275:
        return c + (b - c) / 46.0 * (dyy - 229)
    else:
        return b + (a - b) / 91.0 * (dyy - 275)


def morning_adjustment_minutes(latitude: float, day_of_year: int, year: int) -> float:
    """Minutes between Fajr and sunrise."""
    a, b, c, d = _reference_points(latitude, MORNING_COEFFICIENTS)
    return _interpolate_season(days_since_solstice(day_of_year, year, latitude), a, b, c, d)


def evening_adjustment_minutes(latitude: float, day_of_year: int, year: int) -> float:
    """Minutes between sunset and Isha."""
    a, b, c, d = _reference_points(latitude, EVENING_COEFFICIENTS)
    return _interpolate_season(days_since_solstice(day_of_year, year, latitude), a, b, c, d)


def _shift(reference: DateTime, seconds: int, time_zone: tzinfo) -> DateTime:
    if reference.tzinfo is None:
        raise ValueError("reference time must be timezone-aware")
    return calendar_util.add(reference, seconds, TimeUnit.SECONDS).astimezone(time_zone)


def season_adjusted_morning_twilight(
    latitude: float,
    day_of_year: int,
    year: int,
    sunrise: DateTime,
    time_zone: tzinfo = timezone.utc,
) -> DateTime:
    """Fajr estimated from sunrise for this latitude and season."""
    adjustment = morning_adjustment_minutes(latitude, day_of_year, year)
    seconds = round(adjustment * 60.0)
    log.debug("morning twilight at lat=%.4f doy=%d: %d s before sunrise", latitude, day_of_year, seconds)
    return _shift(sunrise, -seconds, time_zone)


def season_adjusted_evening_twilight(
    latitude: float,
    day_of_year: int,
    year: int,
    sunset: DateTime,
    time_zone: tzinfo = timezone.utc,
) -> DateTime:
    """Isha estimated from sunset for this latitude and season."""
    adjustment = evening_adjustment_minutes(latitude, day_of_year, year)
    seconds = round(adjustment * 60.0)
    log.debug("evening twilight at lat=%.4f doy=%d: %d s after sunset", latitude, day_of_year, seconds)
    return _shift(sunset, seconds, time_zone)
