"""Frozen dataclasses and enums for all structured inputs and return types."""

import math
from dataclasses import dataclass, field, replace
from datetime import date
from enum import IntEnum, StrEnum

from .errors import InvalidCoordinatesError, InvalidDateError, InvalidParametersError


class Prayer(IntEnum):
    """Prayer tags in daily chronological order."""

    NONE = 0
    FAJR = 1
    SUNRISE = 2
    DHUHR = 3
    ASR = 4
    MAGHRIB = 5
    ISHA = 6


class Madhab(StrEnum):
    SHAFI = "shafi"
    HANAFI = "hanafi"

    @property
    def shadow_length(self) -> int:
        """Shadow multiple of an object's height that marks the start of Asr."""
        match self:
            case Madhab.SHAFI:
                return 1
            case Madhab.HANAFI:
                return 2
            case _:
                raise ValueError(f"Unknown madhab: {self}")


class HighLatitudeRule(StrEnum):
    NONE = "none"
    MIDDLE_OF_THE_NIGHT = "middle_of_the_night"
    SEVENTH_OF_THE_NIGHT = "seventh_of_the_night"
    TWILIGHT_ANGLE = "twilight_angle"
    SEASONAL_ADJUSTMENT = "seasonal_adjustment"


def _check_finite(name: str, value: float) -> None:
    if not isinstance(value, (int, float)) or not math.isfinite(value):
        raise InvalidParametersError(name, value, "a finite number")


@dataclass(frozen=True)
class Coordinates:
    latitude: float
    longitude: float

    def __post_init__(self):
        if not isinstance(self.latitude, (int, float)) or not (
            math.isfinite(self.latitude) and -90.0 <= self.latitude <= 90.0
        ):
            raise InvalidCoordinatesError("latitude", self.latitude, -90.0, 90.0)
        if not isinstance(self.longitude, (int, float)) or not (
            math.isfinite(self.longitude) and -180.0 <= self.longitude <= 180.0
        ):
            raise InvalidCoordinatesError("longitude", self.longitude, -180.0, 180.0)


@dataclass(frozen=True)
class DateComponents:
    year: int
    month: int
    day: int

    def __post_init__(self):
        try:
            date(self.year, self.month, self.day)
        except (TypeError, ValueError) as e:
            raise InvalidDateError(self.year, self.month, self.day, str(e)) from e

    @classmethod
    def from_date(cls, d: date) -> "DateComponents":
        return cls(d.year, d.month, d.day)

    def to_date(self) -> date:
        return date(self.year, self.month, self.day)


@dataclass(frozen=True)
class PrayerAdjustments:
    """Manual per-prayer offsets in minutes (positive = later)."""

    fajr: int = 0
    sunrise: int = 0
    dhuhr: int = 0
    asr: int = 0
    maghrib: int = 0
    isha: int = 0

    def __post_init__(self):
        for name in ("fajr", "sunrise", "dhuhr", "asr", "maghrib", "isha"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool):
                raise InvalidParametersError(
                    f"adjustments.{name}", value, "a whole number of minutes"
                )

    def for_prayer(self, prayer: Prayer) -> int:
        """Minutes configured for the given prayer; 0 for Prayer.NONE."""
        if prayer is Prayer.NONE:
            return 0
        return getattr(self, prayer.name.lower())


@dataclass(frozen=True)
class CalculationParameters:
    """Angles and policies used to derive prayer times from solar geometry.

    fajr_angle/isha_angle are depressions below the horizon in degrees.
    isha_interval, when non-zero, places Isha that many minutes after Maghrib
    instead of using isha_angle. maghrib_angle, when non-zero, delays Maghrib
    until the sun is that far below the horizon.
    """

    fajr_angle: float = 18.0
    isha_angle: float = 17.0
    isha_interval: int = 0
    maghrib_angle: float = 0.0
    madhab: Madhab = Madhab.SHAFI
    high_latitude_rule: HighLatitudeRule = HighLatitudeRule.NONE
    adjustments: PrayerAdjustments = field(default_factory=PrayerAdjustments)
    method_adjustments: PrayerAdjustments = field(default_factory=PrayerAdjustments)

    def __post_init__(self):
        for name in ("fajr_angle", "isha_angle", "maghrib_angle"):
            value = getattr(self, name)
            _check_finite(name, value)
            if not 0.0 <= value < 90.0:
                raise InvalidParametersError(name, value, "between 0 and 90 degrees")
        if not isinstance(self.isha_interval, int) or self.isha_interval < 0:
            raise InvalidParametersError(
                "isha_interval", self.isha_interval, "a non-negative number of minutes"
            )
        if not isinstance(self.madhab, Madhab):
            raise InvalidParametersError("madhab", self.madhab, "a Madhab member")
        if not isinstance(self.high_latitude_rule, HighLatitudeRule):
            raise InvalidParametersError(
                "high_latitude_rule", self.high_latitude_rule, "a HighLatitudeRule member"
            )

    def night_portions(self) -> tuple[float, float]:
        """Fraction of the night used for safe Fajr and Isha under the configured rule.

        Returns (fajr_portion, isha_portion). Only meaningful for the
        portion-based rules; SEASONAL_ADJUSTMENT and NONE have no portion.
        """
        match self.high_latitude_rule:
            case HighLatitudeRule.MIDDLE_OF_THE_NIGHT:
                return 1.0 / 2.0, 1.0 / 2.0
            case HighLatitudeRule.SEVENTH_OF_THE_NIGHT:
                return 1.0 / 7.0, 1.0 / 7.0
            case HighLatitudeRule.TWILIGHT_ANGLE:
                return self.fajr_angle / 60.0, self.isha_angle / 60.0
            case _:
                raise ValueError(
                    f"No night portion for rule: {self.high_latitude_rule}"
                )

    def with_madhab(self, madhab: Madhab) -> "CalculationParameters":
        return replace(self, madhab=madhab)

    def with_high_latitude_rule(self, rule: HighLatitudeRule) -> "CalculationParameters":
        return replace(self, high_latitude_rule=rule)

    def with_adjustments(self, adjustments: PrayerAdjustments) -> "CalculationParameters":
        return replace(self, adjustments=adjustments)

    def total_adjustment(self, prayer: Prayer) -> int:
        """User plus method minutes for one prayer."""
        return self.adjustments.for_prayer(prayer) + self.method_adjustments.for_prayer(
            prayer
        )


@dataclass(frozen=True)
class SolarCoordinates:
    """Apparent sun position for one Julian day, all in degrees."""

    declination: float
    right_ascension: float
    apparent_sidereal_time: float
