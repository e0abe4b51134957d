"""Calendar helpers: leap years, day of year and UTC instant arithmetic.

Instants are timezone-aware datetimes. All arithmetic happens in UTC so the
results never depend on daylight-saving transitions of a local zone.
"""

from datetime import datetime as DateTime, timedelta, timezone
from enum import StrEnum

from ._types import DateComponents
from .errors import InvalidDateError


class TimeUnit(StrEnum):
    SECONDS = "seconds"
    MINUTES = "minutes"
    DAYS = "days"


def is_leap_year(year: int) -> bool:
    """Returns True if year is a leap year."""
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def days_in_year(year: int) -> int:
    return 366 if is_leap_year(year) else 365


def days_in_months(year: int) -> list[int]:
    """Returns a list of days per month for the given year."""
    return [31, 29 if is_leap_year(year) else 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31]


def day_of_year(components: DateComponents) -> int:
    """Calculate day of year (1-366) from date components."""
    return sum(days_in_months(components.year)[: components.month - 1]) + components.day


def _require_aware(instant: DateTime) -> None:
    if instant.tzinfo is None or instant.utcoffset() is None:
        raise ValueError("instant must be timezone-aware")


def resolve_time(components: DateComponents) -> DateTime:
    """Midnight UTC at the start of the given date."""
    return DateTime(
        components.year, components.month, components.day, tzinfo=timezone.utc
    )


def add(instant: DateTime, amount: int | float, unit: TimeUnit) -> DateTime:
    """Add an amount of a unit to an instant; the result is in UTC."""
    _require_aware(instant)
    utc = instant.astimezone(timezone.utc)
    match unit:
        case TimeUnit.SECONDS:
            return utc + timedelta(seconds=amount)
        case TimeUnit.MINUTES:
            return utc + timedelta(minutes=amount)
        case TimeUnit.DAYS:
            return utc + timedelta(days=amount)
        case _:
            raise ValueError(f"Unknown time unit: {unit}")


def rounded_minute(instant: DateTime) -> DateTime:
    """Fold the seconds into the minute: 30s or more rounds up, then drop seconds.

    The result is in UTC; carries propagate across hours and days.
    """
    _require_aware(instant)
    utc = instant.astimezone(timezone.utc)
    truncated = utc.replace(second=0, microsecond=0)
    if utc.second >= 30:
        return truncated + timedelta(minutes=1)
    return truncated


def tomorrow(components: DateComponents) -> DateComponents:
    """The following calendar day, rolling over month and year ends."""
    try:
        next_day = add(resolve_time(components), 1, TimeUnit.DAYS)
    except OverflowError as e:
        raise InvalidDateError(
            components.year, components.month, components.day, "no following day in range"
        ) from e
    return DateComponents(next_day.year, next_day.month, next_day.day)
