"""Night-portion times that follow from one day's Maghrib and the next day's Fajr."""

from datetime import datetime as DateTime
from typing import Optional

from . import calendar_util
from .calendar_util import TimeUnit
from .prayer_times import PrayerTimes


class SunnahTimes:
    """Middle of the night and start of its last third.

    The night runs from today's Maghrib to tomorrow's Fajr. Both times are
    None when either bound is not observable.
    """

    def __init__(self, prayer_times: PrayerTimes):
        tomorrow = PrayerTimes(
            prayer_times.coordinates,
            calendar_util.tomorrow(prayer_times.date_components),
            prayer_times.calculation_parameters,
            time_zone=prayer_times.time_zone,
        )
        self.middle_of_the_night = self._night_point(
            prayer_times.maghrib, tomorrow.fajr, 1, 2, prayer_times
        )
        self.last_third_of_the_night = self._night_point(
            prayer_times.maghrib, tomorrow.fajr, 2, 3, prayer_times
        )

    @staticmethod
    def _night_point(
        maghrib: Optional[DateTime],
        next_fajr: Optional[DateTime],
        numerator: int,
        denominator: int,
        prayer_times: PrayerTimes,
    ) -> Optional[DateTime]:
        """Point numerator/denominator of the way through the night, to the nearest minute."""
        if maghrib is None or next_fajr is None:
            return None
        night_seconds = (next_fajr - maghrib).total_seconds()
        point = calendar_util.add(
            maghrib, night_seconds * numerator / denominator, TimeUnit.SECONDS
        )
        return calendar_util.rounded_minute(point).astimezone(prayer_times.time_zone)
