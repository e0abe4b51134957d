"""Demonstrate prayer time calculations for Raleigh, NC on March 15."""

from datetime import datetime
from zoneinfo import ZoneInfo

from salah_times import (
    CalculationMethod,
    Coordinates,
    DateComponents,
    Madhab,
    PrayerTimes,
    SolarTime,
    SunnahTimes,
)


def _fmt(t):
    return t.strftime("%H:%M %Z") if t is not None else "--"


def main():
    latitude = 35.78
    longitude = -78.64
    tz = ZoneInfo("America/New_York")

    coords = Coordinates(latitude, longitude)
    day = DateComponents(2026, 3, 15)
    params = CalculationMethod.NORTH_AMERICA.parameters().with_madhab(Madhab.HANAFI)

    solar = SolarTime(day, coords)
    times = PrayerTimes(coords, day, params, time_zone=tz)
    sunnah = SunnahTimes(times)
    now = datetime(2026, 3, 15, 14, 0, tzinfo=tz)

    print("=== Prayer Time Calculation Example ===")
    print(f"Location: Raleigh, NC ({latitude:.2f}°N, {-longitude:.2f}°W)")
    print(f"Date: {day.to_date()}")
    print(f"Method: {CalculationMethod.NORTH_AMERICA}, madhab: {params.madhab}")
    print()
    print("--- Solar Time (UTC hours) ---")
    print(f"Declination: {solar.declination:.2f}°")
    print(f"Transit: {solar.transit:.3f}")
    print(f"Sunrise: {solar.sunrise:.3f}")
    print(f"Sunset: {solar.sunset:.3f}")
    print()
    print("--- Prayer Times ---")
    for name, t in times.as_dict().items():
        print(f"{name.capitalize():<8} {_fmt(t)}")
    print()
    print("--- Night ---")
    print(f"Middle of the night: {_fmt(sunnah.middle_of_the_night)}")
    print(f"Last third of the night: {_fmt(sunnah.last_third_of_the_night)}")
    print()
    print(f"At {now:%H:%M}: current={times.current_prayer(now).name}, next={times.next_prayer(now).name}")


if __name__ == "__main__":
    main()
