"""Low-precision solar ephemeris from Meeus, "Astronomical Algorithms" (2nd ed.).

All angles in degrees unless otherwise noted. T is the number of Julian
centuries since J2000.0.
"""

import math

from ._types import Coordinates, SolarCoordinates

J2000 = 2451545.0
DAYS_PER_CENTURY = 36525.0
SIDEREAL_RATE = 360.985647


def deg_to_rad(deg: float) -> float:
    """Convert degrees to radians."""
    return deg * (math.pi / 180.0)


def rad_to_deg(rad: float) -> float:
    """Convert radians to degrees."""
    return rad * (180.0 / math.pi)


def normalize_with_bound(value: float, bound: float) -> float:
    """Wrap value into [0, bound)."""
    return value - bound * math.floor(value / bound)


def unwind_angle(angle: float) -> float:
    """Normalize angle to 0-360 degree range."""
    return normalize_with_bound(angle, 360.0)


def closest_angle(angle: float) -> float:
    """Equivalent angle in [-180, 180]."""
    if -180.0 <= angle <= 180.0:
        return angle
    return angle - 360.0 * round(angle / 360.0)


def julian_day(year: int, month: int, day: int, hours: float = 0.0) -> float:
    """Julian day for a Gregorian calendar date (Meeus eq. 7.1)."""
    y = year if month > 2 else year - 1
    m = month if month > 2 else month + 12
    d = day + hours / 24.0
    a = int(y / 100)
    b = 2 - a + int(a / 4)
    i0 = int(365.25 * (y + 4716))
    i1 = int(30.6001 * (m + 1))
    return i0 + i1 + d + b - 1524.5


def julian_century(jd: float) -> float:
    """Julian centuries elapsed since J2000.0 (Meeus eq. 12.1)."""
    return (jd - J2000) / DAYS_PER_CENTURY


def mean_solar_longitude(t: float) -> float:
    """Geometric mean longitude of the sun, L0 (Meeus eq. 25.2)."""
    return unwind_angle(280.4664567 + 36000.76983 * t + 0.0003032 * t**2)


def mean_lunar_longitude(t: float) -> float:
    """Mean longitude of the moon, L' (Meeus p. 144)."""
    return unwind_angle(218.3165 + 481267.8813 * t)


def ascending_lunar_node_longitude(t: float) -> float:
    """Longitude of the moon's ascending node, Omega (Meeus p. 144)."""
    return unwind_angle(
        125.04452 - 1934.136261 * t + 0.0020708 * t**2 + t**3 / 450000.0
    )


def mean_solar_anomaly(t: float) -> float:
    """Mean anomaly of the sun, M (Meeus eq. 25.3)."""
    return unwind_angle(357.52911 + 35999.05029 * t - 0.0001537 * t**2)


def solar_equation_of_the_center(t: float, m: float) -> float:
    """Sun's equation of the center, C (Meeus p. 164)."""
    m_rad = deg_to_rad(m)
    return (
        (1.914602 - 0.004817 * t - 0.000014 * t**2) * math.sin(m_rad)
        + (0.019993 - 0.000101 * t) * math.sin(2 * m_rad)
        + 0.000289 * math.sin(3 * m_rad)
    )


def apparent_solar_longitude(t: float, l0: float) -> float:
    """Apparent longitude of the sun, lambda (Meeus p. 164)."""
    longitude = l0 + solar_equation_of_the_center(t, mean_solar_anomaly(t))
    omega = 125.04 - 1934.136 * t
    return unwind_angle(longitude - 0.00569 - 0.00478 * math.sin(deg_to_rad(omega)))


def mean_obliquity_of_the_ecliptic(t: float) -> float:
    """Mean obliquity of the ecliptic, epsilon0 (Meeus eq. 22.2)."""
    return 23.439291 - 0.013004167 * t - 0.0000001639 * t**2 + 0.0000005036 * t**3


def apparent_obliquity_of_the_ecliptic(t: float, epsilon0: float) -> float:
    """Obliquity corrected for the apparent position of the sun (Meeus p. 165)."""
    omega = 125.04 - 1934.136 * t
    return epsilon0 + 0.00256 * math.cos(deg_to_rad(omega))


def mean_sidereal_time(t: float) -> float:
    """Mean sidereal time at Greenwich, theta0 (Meeus eq. 12.4)."""
    jd = t * DAYS_PER_CENTURY + J2000
    theta = (
        280.46061837
        + 360.98564736629 * (jd - J2000)
        + 0.000387933 * t**2
        - t**3 / 38710000.0
    )
    return unwind_angle(theta)


def nutation_in_longitude(l0: float, lp: float, omega: float) -> float:
    """Nutation in longitude, delta psi (Meeus p. 144)."""
    return (
        (-17.2 / 3600.0) * math.sin(deg_to_rad(omega))
        - (1.32 / 3600.0) * math.sin(2 * deg_to_rad(l0))
        - (0.23 / 3600.0) * math.sin(2 * deg_to_rad(lp))
        + (0.21 / 3600.0) * math.sin(2 * deg_to_rad(omega))
    )


def nutation_in_obliquity(l0: float, lp: float, omega: float) -> float:
    """Nutation in obliquity, delta epsilon (Meeus p. 144)."""
    return (
        (9.2 / 3600.0) * math.cos(deg_to_rad(omega))
        + (0.57 / 3600.0) * math.cos(2 * deg_to_rad(l0))
        + (0.10 / 3600.0) * math.cos(2 * deg_to_rad(lp))
        - (0.09 / 3600.0) * math.cos(2 * deg_to_rad(omega))
    )


def solar_coordinates(jd: float) -> SolarCoordinates:
    """Declination, right ascension and apparent sidereal time for a Julian day."""
    t = julian_century(jd)
    l0 = mean_solar_longitude(t)
    lp = mean_lunar_longitude(t)
    omega = ascending_lunar_node_longitude(t)
    lam = deg_to_rad(apparent_solar_longitude(t, l0))
    theta0 = mean_sidereal_time(t)
    delta_psi = nutation_in_longitude(l0, lp, omega)
    delta_epsilon = nutation_in_obliquity(l0, lp, omega)
    epsilon0 = mean_obliquity_of_the_ecliptic(t)
    epsilon_app = deg_to_rad(apparent_obliquity_of_the_ecliptic(t, epsilon0))

    # Meeus eq. 13.4 and 13.3
    declination = rad_to_deg(math.asin(math.sin(epsilon_app) * math.sin(lam)))
    right_ascension = unwind_angle(
        rad_to_deg(math.atan2(math.cos(epsilon_app) * math.sin(lam), math.cos(lam)))
    )
    # Meeus p. 88
    apparent_sidereal_time = theta0 + (
        delta_psi * 3600.0 * math.cos(deg_to_rad(epsilon0 + delta_epsilon))
    ) / 3600.0
    return SolarCoordinates(
        declination=declination,
        right_ascension=right_ascension,
        apparent_sidereal_time=apparent_sidereal_time,
    )


def altitude_of_celestial_body(
    latitude: float, declination: float, local_hour_angle: float
) -> float:
    """Altitude of a body for an observer (Meeus eq. 13.6)."""
    lat_rad = deg_to_rad(latitude)
    dec_rad = deg_to_rad(declination)
    return rad_to_deg(
        math.asin(
            math.sin(lat_rad) * math.sin(dec_rad)
            + math.cos(lat_rad) * math.cos(dec_rad) * math.cos(deg_to_rad(local_hour_angle))
        )
    )


def interpolate(y2: float, y1: float, y3: float, n: float) -> float:
    """Three-point interpolation around the central value y2 (Meeus eq. 3.3)."""
    a = y2 - y1
    b = y3 - y2
    c = b - a
    return y2 + (n / 2.0) * (a + b + n * c)


def interpolate_angles(y2: float, y1: float, y3: float, n: float) -> float:
    """Like interpolate, but safe across the 0/360 wrap."""
    a = unwind_angle(y2 - y1)
    b = unwind_angle(y3 - y2)
    c = b - a
    return y2 + (n / 2.0) * (a + b + n * c)


def approximate_transit(longitude: float, sidereal_time: float, right_ascension: float) -> float:
    """Fraction of a day (0-1) at which the sun transits (Meeus eq. 15.2)."""
    lw = -longitude
    return normalize_with_bound((right_ascension + lw - sidereal_time) / 360.0, 1.0)


def corrected_transit(
    m0: float,
    longitude: float,
    sidereal_time: float,
    right_ascension: float,
    previous_right_ascension: float,
    next_right_ascension: float,
) -> float:
    """Transit in fractional UTC hours, refined by interpolation (Meeus p. 103)."""
    lw = -longitude
    theta = unwind_angle(sidereal_time + SIDEREAL_RATE * m0)
    alpha = unwind_angle(
        interpolate_angles(right_ascension, previous_right_ascension, next_right_ascension, m0)
    )
    h = closest_angle(theta - lw - alpha)
    dm = h / -360.0
    return (m0 + dm) * 24.0


def corrected_hour_angle(
    m0: float,
    h0: float,
    coordinates: Coordinates,
    after_transit: bool,
    sidereal_time: float,
    right_ascension: float,
    previous_right_ascension: float,
    next_right_ascension: float,
    declination: float,
    previous_declination: float,
    next_declination: float,
) -> float:
    """Fractional UTC hours at which the sun reaches altitude h0 (Meeus p. 102-103).

    Returns NaN when the sun never reaches h0 on this day.
    """
    lw = -coordinates.longitude
    lat_rad = deg_to_rad(coordinates.latitude)
    term1 = math.sin(deg_to_rad(h0)) - math.sin(lat_rad) * math.sin(deg_to_rad(declination))
    term2 = math.cos(lat_rad) * math.cos(deg_to_rad(declination))
    if term2 == 0.0:
        return math.nan
    cos_h0 = term1 / term2
    if not -1.0 <= cos_h0 <= 1.0:
        return math.nan
    big_h0 = rad_to_deg(math.acos(cos_h0))
    m = m0 + big_h0 / 360.0 if after_transit else m0 - big_h0 / 360.0
    theta = unwind_angle(sidereal_time + SIDEREAL_RATE * m)
    alpha = unwind_angle(
        interpolate_angles(right_ascension, previous_right_ascension, next_right_ascension, m)
    )
    delta = interpolate(declination, previous_declination, next_declination, m)
    h = theta - lw - alpha
    altitude = altitude_of_celestial_body(coordinates.latitude, delta, h)
    denominator = (
        360.0 * math.cos(deg_to_rad(delta)) * math.cos(lat_rad) * math.sin(deg_to_rad(h))
    )
    if denominator == 0.0:
        return m * 24.0
    dm = (altitude - h0) / denominator
    return (m + dm) * 24.0
