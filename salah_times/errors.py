"""Exceptions raised by the prayer time engine.

Only configuration problems raise. Times that cannot be observed on a given
day (polar day/night, unreachable twilight angles) are reported as ``None``.
"""

import math
from typing import Optional


class PrayerTimesError(Exception):
    """Base exception for prayer time errors."""

    def __init__(self, message: str, suggestions: Optional[list[str]] = None):
        """Initialize with message and optional suggestions.

        Args:
            message: Error description
            suggestions: Optional list of actionable suggestions
        """
        self.message = message
        self.suggestions = suggestions or []
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with suggestions."""
        formatted = f"{self.message}"
        if self.suggestions:
            formatted += "\n\nSuggestions:"
            for suggestion in self.suggestions:
                formatted += f"\n  - {suggestion}"
        return formatted


class ConfigurationError(PrayerTimesError, ValueError):
    """Raised at construction time when an input value is unusable."""


class InvalidCoordinatesError(ConfigurationError):
    """Raised when latitude or longitude is out of range."""

    def __init__(self, name: str, value: float, low: float, high: float):
        message = f"Invalid {name}: {value}"
        suggestions = [
            f"{name.capitalize()} must be a finite number between {low:g} and {high:g} degrees",
            "Use negative values for southern latitudes and western longitudes",
        ]
        super().__init__(message, suggestions)


class InvalidDateError(ConfigurationError):
    """Raised when year/month/day do not form a calendar date."""

    def __init__(self, year: int, month: int, day: int, reason: str):
        message = f"Invalid date {year!r}-{month!r}-{day!r}: {reason}"
        suggestions = [
            "Month must be 1-12 and day must exist in that month",
            "Year, month and day must be integers",
            "Dates use the proleptic Gregorian calendar",
        ]
        super().__init__(message, suggestions)


class InvalidParametersError(ConfigurationError):
    """Raised when a calculation parameter is out of range."""

    def __init__(self, name: str, value: float, expected: str):
        message = f"Invalid calculation parameter {name}={value}"
        suggestions = [f"{name} must be {expected}"]
        if isinstance(value, float) and math.isnan(value):
            suggestions.append("NaN is never accepted as a parameter value")
        super().__init__(message, suggestions)
