"""Daily prayer times derived from solar geometry.

A PrayerTimes object is computed once, in its constructor, and never changes
afterwards. Every prayer time is a timezone-aware datetime or None when the
sun does not reach the required position on that day at that place.
"""

import logging
import math
from datetime import datetime as DateTime, timezone, tzinfo
from typing import Callable, Optional

from . import astronomy, calendar_util, twilight
from ._types import (
    CalculationParameters,
    Coordinates,
    DateComponents,
    HighLatitudeRule,
    Prayer,
)
from .calendar_util import TimeUnit
from .errors import InvalidDateError
from .solar_time import SUNRISE_SUNSET_ALTITUDE, SolarTime

log = logging.getLogger(__name__)

PRAYER_SEQUENCE = (
    Prayer.FAJR,
    Prayer.SUNRISE,
    Prayer.DHUHR,
    Prayer.ASR,
    Prayer.MAGHRIB,
    Prayer.ISHA,
)

# Hour values outside this window are not a time on or next to the requested date.
MIN_HOURS = -24.0
MAX_HOURS = 48.0

# Neighbouring days and hour offsets up to MAX_HOURS must stay inside datetime's range.
MIN_YEAR = 2
MAX_YEAR = 9998


def _utc_now() -> DateTime:
    return DateTime.now(timezone.utc)


def hours_to_datetime(hours: float, date: DateComponents) -> Optional[DateTime]:
    """Convert fractional UTC hours on date to a UTC datetime, truncated to the minute.

    Returns None for NaN/infinite hours or hours outside [-24, 48).
    """
    if not math.isfinite(hours) or not MIN_HOURS <= hours < MAX_HOURS:
        return None
    total_minutes = math.floor(hours * 60.0)
    return calendar_util.add(calendar_util.resolve_time(date), total_minutes, TimeUnit.MINUTES)


def _sun_above_horizon_at_transit(solar_time: SolarTime) -> bool:
    altitude = astronomy.altitude_of_celestial_body(
        solar_time.observer.latitude, solar_time.declination, 0.0
    )
    return altitude > SUNRISE_SUNSET_ALTITUDE


def _sunrise_or_substitute(solar_time: SolarTime) -> float:
    """Sunrise hours, or solar midnight / transit when the sun never rises or sets."""
    if math.isfinite(solar_time.sunrise):
        return solar_time.sunrise
    if _sun_above_horizon_at_transit(solar_time):
        return solar_time.transit - 12.0
    return solar_time.transit


def _sunset_or_substitute(solar_time: SolarTime) -> float:
    if math.isfinite(solar_time.sunset):
        return solar_time.sunset
    if _sun_above_horizon_at_transit(solar_time):
        return solar_time.transit + 12.0
    return solar_time.transit


class PrayerTimes:
    """The six prayer times for one date and location.

    Args:
        coordinates: Observer location
        date_components: Calendar date the times belong to
        calculation_parameters: Angles, madhab, high-latitude rule and adjustments
        time_zone: Zone the resulting datetimes are expressed in (default UTC)
        clock: Callable returning the current aware datetime, used by the
            queries when no explicit time is passed
    """

    def __init__(
        self,
        coordinates: Coordinates,
        date_components: DateComponents,
        calculation_parameters: Optional[CalculationParameters] = None,
        *,
        time_zone: tzinfo = timezone.utc,
        clock: Optional[Callable[[], DateTime]] = None,
    ):
        if not isinstance(coordinates, Coordinates):
            raise TypeError("coordinates must be a Coordinates instance")
        if not isinstance(date_components, DateComponents):
            raise TypeError("date_components must be a DateComponents instance")
        if not MIN_YEAR <= date_components.year <= MAX_YEAR:
            raise InvalidDateError(
                date_components.year,
                date_components.month,
                date_components.day,
                f"prayer times need a year between {MIN_YEAR} and {MAX_YEAR}",
            )
        params = calculation_parameters or CalculationParameters()

        self.coordinates = coordinates
        self.date_components = date_components
        self.calculation_parameters = params
        self.time_zone = time_zone
        self._clock = clock or _utc_now

        today = SolarTime(date_components, coordinates)
        tomorrow = SolarTime(calendar_util.tomorrow(date_components), coordinates)

        fajr = hours_to_datetime(today.hour_angle(-params.fajr_angle, False), date_components)
        sunrise = hours_to_datetime(today.sunrise, date_components)
        dhuhr = hours_to_datetime(today.transit, date_components)
        asr = hours_to_datetime(today.afternoon(params.madhab.shadow_length), date_components)
        sunset = hours_to_datetime(today.sunset, date_components)

        maghrib = sunset
        if params.maghrib_angle > 0 and sunset is not None:
            angle_based = hours_to_datetime(
                today.hour_angle(-params.maghrib_angle, True), date_components
            )
            if angle_based is not None and angle_based > sunset:
                maghrib = angle_based

        if params.isha_interval > 0:
            isha = (
                calendar_util.add(maghrib, params.isha_interval, TimeUnit.MINUTES)
                if maghrib is not None
                else None
            )
        else:
            isha = hours_to_datetime(today.hour_angle(-params.isha_angle, True), date_components)

        if params.high_latitude_rule is not HighLatitudeRule.NONE:
            fajr, isha = self._apply_high_latitude_rule(today, tomorrow, fajr, isha)

        times = {
            Prayer.FAJR: fajr,
            Prayer.SUNRISE: sunrise,
            Prayer.DHUHR: dhuhr,
            Prayer.ASR: asr,
            Prayer.MAGHRIB: maghrib,
            Prayer.ISHA: isha,
        }
        for prayer, value in times.items():
            if value is None:
                log.debug(
                    "%s not observable on %s at %s",
                    prayer.name.lower(),
                    date_components,
                    coordinates,
                )
                continue
            minutes = params.total_adjustment(prayer)
            if minutes:
                value = calendar_util.add(value, minutes, TimeUnit.MINUTES)
            times[prayer] = value.astimezone(time_zone)

        self.fajr: Optional[DateTime] = times[Prayer.FAJR]
        self.sunrise: Optional[DateTime] = times[Prayer.SUNRISE]
        self.dhuhr: Optional[DateTime] = times[Prayer.DHUHR]
        self.asr: Optional[DateTime] = times[Prayer.ASR]
        self.maghrib: Optional[DateTime] = times[Prayer.MAGHRIB]
        self.isha: Optional[DateTime] = times[Prayer.ISHA]
        self._frozen = True

    def __setattr__(self, name, value):
        if getattr(self, "_frozen", False):
            raise AttributeError(f"PrayerTimes is immutable; cannot set {name!r}")
        super().__setattr__(name, value)

    def _apply_high_latitude_rule(
        self,
        today: SolarTime,
        tomorrow: SolarTime,
        fajr: Optional[DateTime],
        isha: Optional[DateTime],
    ) -> tuple[Optional[DateTime], Optional[DateTime]]:
        """Clamp Fajr/Isha to the safe bounds given by the configured rule."""
        params = self.calculation_parameters
        date = self.date_components
        sunrise_hours = _sunrise_or_substitute(today)
        sunset_hours = _sunset_or_substitute(today)

        if params.high_latitude_rule is HighLatitudeRule.SEASONAL_ADJUSTMENT:
            doy = calendar_util.day_of_year(date)
            latitude = self.coordinates.latitude
            safe_fajr = twilight.season_adjusted_morning_twilight(
                latitude, doy, date.year, hours_to_datetime(sunrise_hours, date)
            )
            safe_isha = twilight.season_adjusted_evening_twilight(
                latitude, doy, date.year, hours_to_datetime(sunset_hours, date)
            )
        else:
            # tomorrow's hours are relative to tomorrow's UTC midnight
            night = _sunrise_or_substitute(tomorrow) + 24.0 - sunset_hours
            fajr_portion, isha_portion = params.night_portions()
            safe_fajr = hours_to_datetime(sunrise_hours - fajr_portion * night, date)
            safe_isha = hours_to_datetime(sunset_hours + isha_portion * night, date)

        if safe_fajr is not None and (fajr is None or fajr < safe_fajr):
            log.info(
                "fajr on %s replaced by %s rule: %s -> %s",
                date,
                params.high_latitude_rule,
                fajr,
                safe_fajr,
            )
            fajr = safe_fajr
        if params.isha_interval == 0 and safe_isha is not None and (isha is None or isha > safe_isha):
            log.info(
                "isha on %s replaced by %s rule: %s -> %s",
                date,
                params.high_latitude_rule,
                isha,
                safe_isha,
            )
            isha = safe_isha
        return fajr, isha

    def _resolve_now(self, now: Optional[DateTime]) -> DateTime:
        if now is None:
            now = self._clock()
        if now.tzinfo is None or now.utcoffset() is None:
            raise ValueError("now must be timezone-aware")
        return now

    def time_for_prayer(self, prayer: Prayer) -> Optional[DateTime]:
        """Time of the given prayer; None for Prayer.NONE or an unobservable prayer."""
        match prayer:
            case Prayer.FAJR:
                return self.fajr
            case Prayer.SUNRISE:
                return self.sunrise
            case Prayer.DHUHR:
                return self.dhuhr
            case Prayer.ASR:
                return self.asr
            case Prayer.MAGHRIB:
                return self.maghrib
            case Prayer.ISHA:
                return self.isha
            case _:
                return None

    def current_prayer(self, now: Optional[DateTime] = None) -> Prayer:
        """Latest prayer whose time is at or before now; Prayer.NONE before Fajr."""
        now = self._resolve_now(now)
        for prayer in reversed(PRAYER_SEQUENCE):
            time = self.time_for_prayer(prayer)
            if time is not None and time <= now:
                return prayer
        return Prayer.NONE

    def next_prayer(self, now: Optional[DateTime] = None) -> Prayer:
        """First prayer whose time is after now; Prayer.NONE at or after Isha."""
        now = self._resolve_now(now)
        for prayer in PRAYER_SEQUENCE:
            time = self.time_for_prayer(prayer)
            if time is not None and time > now:
                return prayer
        return Prayer.NONE

    def as_dict(self) -> dict[str, Optional[DateTime]]:
        return {prayer.name.lower(): self.time_for_prayer(prayer) for prayer in PRAYER_SEQUENCE}
