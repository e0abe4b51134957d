"""Sun geometry for one calendar day at one location.

Times are fractional hours since 00:00 UTC of the requested date; values
below 0 or above 24 fall on the neighbouring UTC date.
"""

import logging
import math

from . import astronomy
from ._types import Coordinates, DateComponents

log = logging.getLogger(__name__)

# Upper limb on the horizon with standard refraction: -(16' semi-diameter + 34' refraction)
SUNRISE_SUNSET_ALTITUDE = -50.0 / 60.0


class SolarTime:
    """Solar transit and hour-angle crossings for a (date, coordinates) pair."""

    def __init__(self, date: DateComponents, coordinates: Coordinates):
        self.date = date
        self.observer = coordinates

        jd = astronomy.julian_day(date.year, date.month, date.day)
        self.previous_solar = astronomy.solar_coordinates(jd - 1)
        self.solar = astronomy.solar_coordinates(jd)
        self.next_solar = astronomy.solar_coordinates(jd + 1)

        self.approximate_transit = astronomy.approximate_transit(
            coordinates.longitude,
            self.solar.apparent_sidereal_time,
            self.solar.right_ascension,
        )
        self.transit = astronomy.corrected_transit(
            self.approximate_transit,
            coordinates.longitude,
            self.solar.apparent_sidereal_time,
            self.solar.right_ascension,
            self.previous_solar.right_ascension,
            self.next_solar.right_ascension,
        )
        self.sunrise = self.hour_angle(SUNRISE_SUNSET_ALTITUDE, after_transit=False)
        self.sunset = self.hour_angle(SUNRISE_SUNSET_ALTITUDE, after_transit=True)
        log.debug(
            "solar time %s at (%.4f, %.4f): transit=%.5f sunrise=%.5f sunset=%.5f",
            date,
            coordinates.latitude,
            coordinates.longitude,
            self.transit,
            self.sunrise,
            self.sunset,
        )

    @property
    def declination(self) -> float:
        return self.solar.declination

    def hour_angle(self, angle: float, after_transit: bool) -> float:
        """Fractional UTC hours when the sun's altitude equals angle.

        Args:
            angle: Solar altitude in degrees (negative = below the horizon)
            after_transit: True for the afternoon/evening crossing

        Returns:
            Hours since 00:00 UTC, or NaN if the sun never reaches angle today
        """
        return astronomy.corrected_hour_angle(
            self.approximate_transit,
            angle,
            self.observer,
            after_transit,
            self.solar.apparent_sidereal_time,
            self.solar.right_ascension,
            self.previous_solar.right_ascension,
            self.next_solar.right_ascension,
            self.solar.declination,
            self.previous_solar.declination,
            self.next_solar.declination,
        )

    def asr_altitude(self, shadow_length: float) -> float:
        """Solar altitude at which a shadow is shadow_length times its object plus the noon shadow."""
        tangent = abs(self.observer.latitude - self.solar.declination)
        if tangent >= 90.0:
            # sun at or below the horizon at transit; no noon shadow
            return math.nan
        inverse = shadow_length + math.tan(astronomy.deg_to_rad(tangent))
        return astronomy.rad_to_deg(math.atan(1.0 / inverse))

    def afternoon(self, shadow_length: float) -> float:
        """Fractional UTC hours at the start of Asr for the given shadow multiplier."""
        altitude = self.asr_altitude(shadow_length)
        if math.isnan(altitude):
            return math.nan
        return self.hour_angle(altitude, after_transit=True)
