"""Offline prayer time calculation from solar position astronomy."""

from ._types import (
    CalculationParameters,
    Coordinates,
    DateComponents,
    HighLatitudeRule,
    Madhab,
    Prayer,
    PrayerAdjustments,
)
from .errors import (
    ConfigurationError,
    InvalidCoordinatesError,
    InvalidDateError,
    InvalidParametersError,
    PrayerTimesError,
)
from .methods import CalculationMethod
from .prayer_times import PrayerTimes
from .solar_time import SolarTime
from .sunnah import SunnahTimes

__version__ = "0.1.0"

__all__ = [
    "CalculationMethod",
    "CalculationParameters",
    "ConfigurationError",
    "Coordinates",
    "DateComponents",
    "HighLatitudeRule",
    "InvalidCoordinatesError",
    "InvalidDateError",
    "InvalidParametersError",
    "Madhab",
    "Prayer",
    "PrayerAdjustments",
    "PrayerTimes",
    "PrayerTimesError",
    "SolarTime",
    "SunnahTimes",
]
