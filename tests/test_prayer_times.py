from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from salah_times._types import (
    CalculationParameters,
    Coordinates,
    DateComponents,
    HighLatitudeRule,
    Madhab,
    Prayer,
    PrayerAdjustments,
)
from salah_times.errors import InvalidDateError
from salah_times.methods import CalculationMethod
from salah_times.prayer_times import PRAYER_SEQUENCE, PrayerTimes, hours_to_datetime
from salah_times.solar_time import SolarTime
from salah_times.twilight import morning_adjustment_minutes

RALEIGH = Coordinates(35.78, -78.64)
RALEIGH_DATE = DateComponents(2024, 3, 15)
STANDARD = CalculationParameters(fajr_angle=18.0, isha_angle=18.0, madhab=Madhab.SHAFI)

ALL_RULES = [
    HighLatitudeRule.MIDDLE_OF_THE_NIGHT,
    HighLatitudeRule.SEVENTH_OF_THE_NIGHT,
    HighLatitudeRule.TWILIGHT_ANGLE,
    HighLatitudeRule.SEASONAL_ADJUSTMENT,
]


def _times(pt: PrayerTimes) -> list:
    return [pt.time_for_prayer(p) for p in PRAYER_SEQUENCE]


class TestHoursToDatetime:
    def test_within_day(self):
        assert hours_to_datetime(17.5, RALEIGH_DATE) == datetime(2024, 3, 15, 17, 30, tzinfo=timezone.utc)

    def test_truncates_fractional_minute(self):
        assert hours_to_datetime(5.999, RALEIGH_DATE) == datetime(2024, 3, 15, 5, 59, tzinfo=timezone.utc)

    def test_rolls_into_neighbouring_dates(self):
        assert hours_to_datetime(25.25, RALEIGH_DATE) == datetime(2024, 3, 16, 1, 15, tzinfo=timezone.utc)
        assert hours_to_datetime(-1.5, RALEIGH_DATE) == datetime(2024, 3, 14, 22, 30, tzinfo=timezone.utc)

    @pytest.mark.parametrize("hours", [float("nan"), float("inf"), -float("inf"), 48.0, -24.5])
    def test_unresolvable_is_absent(self, hours):
        assert hours_to_datetime(hours, RALEIGH_DATE) is None


class TestRaleigh:
    @pytest.fixture
    def pt(self):
        return PrayerTimes(RALEIGH, RALEIGH_DATE, STANDARD)

    def test_all_present(self, pt):
        assert all(t is not None for t in _times(pt))

    def test_chronological(self, pt):
        assert pt.fajr < pt.sunrise < pt.dhuhr < pt.asr < pt.maghrib < pt.isha

    def test_dhuhr_near_local_solar_noon(self, pt):
        # 12:00 + 78.64/15 h + ~9 min equation of time
        solar_noon = datetime(2024, 3, 15, 17, 24, tzinfo=timezone.utc)
        assert abs(pt.dhuhr - solar_noon) <= timedelta(minutes=2)

    def test_dhuhr_equals_transit(self, pt):
        transit = SolarTime(RALEIGH_DATE, RALEIGH).transit
        assert pt.dhuhr == hours_to_datetime(transit, RALEIGH_DATE)

    def test_results_are_utc_by_default(self, pt):
        assert pt.dhuhr.utcoffset() == timedelta(0)

    def test_local_time_zone(self):
        tz = ZoneInfo("America/New_York")
        local = PrayerTimes(RALEIGH, RALEIGH_DATE, STANDARD, time_zone=tz)
        assert local.fajr.tzinfo is tz
        assert 5 <= local.fajr.hour <= 6
        assert local.sunrise.hour == 7
        assert local.dhuhr.hour == 13
        assert local.maghrib.hour == 19
        assert local.isha.hour == 20
        assert local.fajr.date() == local.isha.date()
        utc = PrayerTimes(RALEIGH, RALEIGH_DATE, STANDARD)
        assert local.as_dict() == utc.as_dict()

    def test_sunrise_to_dhuhr_roughly_six_hours(self, pt):
        assert timedelta(hours=5, minutes=45) < pt.dhuhr - pt.sunrise < timedelta(hours=6, minutes=15)

    def test_hanafi_asr_later(self, pt):
        hanafi = PrayerTimes(RALEIGH, RALEIGH_DATE, STANDARD.with_madhab(Madhab.HANAFI))
        assert hanafi.asr > pt.asr
        assert hanafi.fajr == pt.fajr
        assert hanafi.isha == pt.isha

    def test_idempotent(self, pt):
        again = PrayerTimes(RALEIGH, RALEIGH_DATE, STANDARD)
        assert again.as_dict() == pt.as_dict()

    def test_immutable(self, pt):
        with pytest.raises(AttributeError):
            pt.fajr = None

    def test_as_dict_order(self, pt):
        assert list(pt.as_dict()) == ["fajr", "sunrise", "dhuhr", "asr", "maghrib", "isha"]

    def test_default_parameters(self):
        pt = PrayerTimes(RALEIGH, RALEIGH_DATE)
        assert pt.calculation_parameters == CalculationParameters()
        # isha 17 degrees is earlier than 18
        assert pt.isha < PrayerTimes(RALEIGH, RALEIGH_DATE, STANDARD).isha


class TestAdjustments:
    def test_dhuhr_adjustment_added_to_transit(self):
        base = PrayerTimes(RALEIGH, RALEIGH_DATE, STANDARD)
        adjusted = PrayerTimes(
            RALEIGH, RALEIGH_DATE, STANDARD.with_adjustments(PrayerAdjustments(dhuhr=3))
        )
        assert adjusted.dhuhr == base.dhuhr + timedelta(minutes=3)
        assert adjusted.asr == base.asr

    def test_every_prayer(self):
        adj = PrayerAdjustments(fajr=-2, sunrise=1, dhuhr=2, asr=3, maghrib=4, isha=-5)
        base = PrayerTimes(RALEIGH, RALEIGH_DATE, STANDARD)
        adjusted = PrayerTimes(RALEIGH, RALEIGH_DATE, STANDARD.with_adjustments(adj))
        for prayer in PRAYER_SEQUENCE:
            delta = adjusted.time_for_prayer(prayer) - base.time_for_prayer(prayer)
            assert delta == timedelta(minutes=adj.for_prayer(prayer)), prayer

    def test_method_and_user_adjustments_add_up(self):
        params = CalculationMethod.MUSLIM_WORLD_LEAGUE.parameters().with_adjustments(
            PrayerAdjustments(dhuhr=2)
        )
        base = PrayerTimes(RALEIGH, RALEIGH_DATE, CalculationParameters())
        pt = PrayerTimes(RALEIGH, RALEIGH_DATE, params)
        assert pt.dhuhr - base.dhuhr == timedelta(minutes=3)


class TestModerateLatitudes:
    @pytest.mark.parametrize(
        "name,lat,lon",
        [
            ("Raleigh", 35.78, -78.64),
            ("Makkah", 21.4225, 39.8262),
            ("Jakarta", -6.2, 106.8),
            ("Tokyo", 35.68, 139.69),
            ("Cape Town", -33.92, 18.42),
            ("Istanbul", 41.01, 28.98),
            ("Honolulu", 21.31, -157.86),
            ("Buenos Aires", -34.6, -58.38),
            ("Quito", -0.18, -78.47),
        ],
    )
    @pytest.mark.parametrize("month", range(1, 13))
    def test_all_present_and_strictly_increasing(self, name, lat, lon, month):
        pt = PrayerTimes(Coordinates(lat, lon), DateComponents(2024, month, 15))
        times = _times(pt)
        assert all(t is not None for t in times), name
        assert all(a < b for a, b in zip(times, times[1:])), name


class TestMonthBoundaries:
    @pytest.mark.parametrize("ymd", [(2024, 1, 31), (2024, 2, 29), (2023, 2, 28), (2023, 12, 31)])
    def test_tomorrow_rolls_over(self, ymd):
        params = STANDARD.with_high_latitude_rule(HighLatitudeRule.SEVENTH_OF_THE_NIGHT)
        pt = PrayerTimes(Coordinates(51.5, -0.13), DateComponents(*ymd), params)
        assert all(t is not None for t in _times(pt))


class TestHighLatitude:
    SUMMER_NORTH = (Coordinates(70.0, 20.0), DateComponents(2024, 6, 21))
    SUMMER_SOUTH = (Coordinates(-70.0, 20.0), DateComponents(2024, 12, 21))

    @pytest.mark.parametrize("location", [SUMMER_NORTH, SUMMER_SOUTH])
    def test_twilight_absent_without_rule(self, location):
        coords, day = location
        pt = PrayerTimes(coords, day, STANDARD)
        assert pt.fajr is None
        assert pt.isha is None
        assert pt.sunrise is None
        assert pt.maghrib is None
        assert pt.dhuhr is not None

    @pytest.mark.parametrize("rule", ALL_RULES)
    @pytest.mark.parametrize("location", [SUMMER_NORTH, SUMMER_SOUTH])
    def test_rule_substitutes_times(self, location, rule):
        coords, day = location
        pt = PrayerTimes(coords, day, STANDARD.with_high_latitude_rule(rule))
        assert pt.fajr is not None
        assert pt.isha is not None
        assert pt.fajr < pt.dhuhr < pt.isha

    def test_polar_night_keeps_angle_based_fajr(self):
        pt = PrayerTimes(Coordinates(70.0, 20.0), DateComponents(2024, 12, 21), STANDARD)
        assert pt.sunrise is None
        assert pt.asr is None
        assert pt.maghrib is None
        assert pt.fajr is not None
        assert pt.fajr < pt.dhuhr

    @pytest.mark.parametrize(
        "rule", [HighLatitudeRule.SEVENTH_OF_THE_NIGHT, HighLatitudeRule.TWILIGHT_ANGLE]
    )
    def test_short_night_bracketed_by_sunset_and_sunrise(self, rule):
        coords = Coordinates(56.0, -3.2)
        day = DateComponents(2024, 6, 21)
        raw = PrayerTimes(coords, day, STANDARD)
        assert raw.fajr is None
        assert raw.isha is None
        pt = PrayerTimes(coords, day, STANDARD.with_high_latitude_rule(rule))
        assert pt.fajr < pt.sunrise
        assert pt.isha > pt.maghrib
        assert pt.sunrise - pt.fajr < timedelta(hours=3)

    def test_seventh_of_the_night_is_a_seventh(self):
        coords = Coordinates(56.0, -3.2)
        day = DateComponents(2024, 6, 21)
        pt = PrayerTimes(
            coords, day, STANDARD.with_high_latitude_rule(HighLatitudeRule.SEVENTH_OF_THE_NIGHT)
        )
        tomorrow = PrayerTimes(coords, DateComponents(2024, 6, 22), STANDARD)
        night = tomorrow.sunrise - pt.maghrib
        assert abs((pt.isha - pt.maghrib) - night / 7) <= timedelta(minutes=2)

    def test_rule_leaves_ordinary_days_alone(self):
        params = STANDARD.with_high_latitude_rule(HighLatitudeRule.MIDDLE_OF_THE_NIGHT)
        assert PrayerTimes(RALEIGH, RALEIGH_DATE, params).as_dict() == PrayerTimes(
            RALEIGH, RALEIGH_DATE, STANDARD
        ).as_dict()

    def test_seasonal_adjustment_caps_fajr(self):
        params = STANDARD.with_high_latitude_rule(HighLatitudeRule.SEASONAL_ADJUSTMENT)
        coords = Coordinates(51.5, -0.13)
        day = DateComponents(2024, 6, 10)
        pt = PrayerTimes(coords, day, params)
        limit = morning_adjustment_minutes(51.5, 162, 2024)
        assert pt.sunrise - pt.fajr <= timedelta(minutes=limit + 1)


class TestQueries:
    @pytest.fixture
    def pt(self):
        return PrayerTimes(RALEIGH, RALEIGH_DATE, STANDARD)

    def test_at_each_prayer_time(self, pt):
        for i, prayer in enumerate(PRAYER_SEQUENCE):
            t = pt.time_for_prayer(prayer)
            assert pt.current_prayer(t) is prayer
            expected_next = PRAYER_SEQUENCE[i + 1] if i + 1 < len(PRAYER_SEQUENCE) else Prayer.NONE
            assert pt.next_prayer(t) is expected_next

    def test_just_before_each_prayer(self, pt):
        for prayer in PRAYER_SEQUENCE:
            t = pt.time_for_prayer(prayer) - timedelta(seconds=1)
            assert pt.next_prayer(t) is prayer
            assert pt.current_prayer(t) is Prayer(prayer - 1)

    def test_before_fajr(self, pt):
        t = pt.fajr - timedelta(hours=1)
        assert pt.current_prayer(t) is Prayer.NONE
        assert pt.next_prayer(t) is Prayer.FAJR

    def test_after_isha(self, pt):
        t = pt.isha + timedelta(hours=1)
        assert pt.current_prayer(t) is Prayer.ISHA
        assert pt.next_prayer(t) is Prayer.NONE

    def test_partition_without_gaps(self, pt):
        t = pt.fajr - timedelta(hours=3)
        end = pt.isha + timedelta(hours=3)
        while t <= end:
            current = pt.current_prayer(t)
            following = pt.next_prayer(t)
            if current is Prayer.ISHA:
                assert following is Prayer.NONE
            else:
                assert following is Prayer(current + 1)
            t += timedelta(minutes=7)

    def test_accepts_other_zones(self, pt):
        tz = ZoneInfo("America/New_York")
        noon_local = datetime(2024, 3, 15, 13, 30, tzinfo=tz)
        assert pt.current_prayer(noon_local) is Prayer.DHUHR
        assert pt.next_prayer(noon_local) is Prayer.ASR

    def test_naive_now_rejected(self, pt):
        with pytest.raises(ValueError):
            pt.current_prayer(datetime(2024, 3, 15, 12, 0))
        with pytest.raises(ValueError):
            pt.next_prayer(datetime(2024, 3, 15, 12, 0))

    def test_injected_clock(self):
        base = PrayerTimes(RALEIGH, RALEIGH_DATE, STANDARD)
        fixed = base.asr + timedelta(minutes=10)
        pt = PrayerTimes(RALEIGH, RALEIGH_DATE, STANDARD, clock=lambda: fixed)
        assert pt.current_prayer() is Prayer.ASR
        assert pt.next_prayer() is Prayer.MAGHRIB

    def test_time_for_prayer(self, pt):
        assert pt.time_for_prayer(Prayer.NONE) is None
        assert pt.time_for_prayer(Prayer.MAGHRIB) == pt.maghrib

    def test_absent_times_skipped(self):
        pt = PrayerTimes(Coordinates(70.0, 20.0), DateComponents(2024, 6, 21), STANDARD)
        after_dhuhr = pt.dhuhr + timedelta(minutes=1)
        assert pt.current_prayer(after_dhuhr) is Prayer.DHUHR
        assert pt.next_prayer(after_dhuhr) is Prayer.ASR
        late = pt.asr + timedelta(hours=1)
        assert pt.current_prayer(late) is Prayer.ASR
        assert pt.next_prayer(late) is Prayer.NONE
        early = pt.dhuhr - timedelta(hours=1)
        assert pt.current_prayer(early) is Prayer.NONE
        assert pt.next_prayer(early) is Prayer.DHUHR


class TestInvalidInput:
    def test_requires_value_types(self):
        with pytest.raises(TypeError):
            PrayerTimes((35.78, -78.64), RALEIGH_DATE)
        with pytest.raises(TypeError):
            PrayerTimes(RALEIGH, (2024, 3, 15))

    @pytest.mark.parametrize("ymd", [(1, 1, 1), (1, 6, 15), (9999, 1, 1), (9999, 12, 31)])
    def test_years_at_the_edge_of_the_calendar(self, ymd):
        with pytest.raises(InvalidDateError):
            PrayerTimes(Coordinates(35.68, 139.69), DateComponents(*ymd))

    @pytest.mark.parametrize("ymd", [(2, 1, 1), (9998, 12, 31)])
    @pytest.mark.parametrize("lon", [-178.0, 178.0])
    def test_extreme_supported_years(self, ymd, lon):
        tz = timezone(timedelta(hours=14)) if lon > 0 else timezone(timedelta(hours=-12))
        pt = PrayerTimes(Coordinates(35.0, lon), DateComponents(*ymd), STANDARD, time_zone=tz)
        assert pt.dhuhr is not None
