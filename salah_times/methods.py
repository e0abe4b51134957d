"""Named calculation conventions used by Islamic authorities."""

from enum import StrEnum

from ._types import CalculationParameters, HighLatitudeRule, PrayerAdjustments


class CalculationMethod(StrEnum):
    MUSLIM_WORLD_LEAGUE = "muslim_world_league"
    EGYPTIAN = "egyptian"
    KARACHI = "karachi"
    UMM_AL_QURA = "umm_al_qura"
    DUBAI = "dubai"
    MOONSIGHTING_COMMITTEE = "moonsighting_committee"
    NORTH_AMERICA = "north_america"
    KUWAIT = "kuwait"
    QATAR = "qatar"
    SINGAPORE = "singapore"
    TEHRAN = "tehran"
    TURKEY = "turkey"
    OTHER = "other"

    def parameters(self) -> CalculationParameters:
        """Fresh parameters for this method; override fields with dataclasses.replace."""
        match self:
            case CalculationMethod.MUSLIM_WORLD_LEAGUE:
                return CalculationParameters(
                    fajr_angle=18.0,
                    isha_angle=17.0,
                    method_adjustments=PrayerAdjustments(dhuhr=1),
                )
            case CalculationMethod.EGYPTIAN:
                return CalculationParameters(
                    fajr_angle=19.5,
                    isha_angle=17.5,
                    method_adjustments=PrayerAdjustments(dhuhr=1),
                )
            case CalculationMethod.KARACHI:
                return CalculationParameters(
                    fajr_angle=18.0,
                    isha_angle=18.0,
                    method_adjustments=PrayerAdjustments(dhuhr=1),
                )
            case CalculationMethod.UMM_AL_QURA:
                return CalculationParameters(fajr_angle=18.5, isha_angle=0.0, isha_interval=90)
            case CalculationMethod.DUBAI:
                return CalculationParameters(fajr_angle=18.2, isha_angle=18.2)
            case CalculationMethod.MOONSIGHTING_COMMITTEE:
                return CalculationParameters(
                    fajr_angle=18.0,
                    isha_angle=18.0,
                    high_latitude_rule=HighLatitudeRule.SEASONAL_ADJUSTMENT,
                    method_adjustments=PrayerAdjustments(dhuhr=5, maghrib=3),
                )
            case CalculationMethod.NORTH_AMERICA:
                return CalculationParameters(
                    fajr_angle=15.0,
                    isha_angle=15.0,
                    method_adjustments=PrayerAdjustments(dhuhr=1),
                )
            case CalculationMethod.KUWAIT:
                return CalculationParameters(fajr_angle=18.0, isha_angle=17.5)
            case CalculationMethod.QATAR:
                return CalculationParameters(fajr_angle=18.0, isha_angle=0.0, isha_interval=90)
            case CalculationMethod.SINGAPORE:
                return CalculationParameters(
                    fajr_angle=20.0,
                    isha_angle=18.0,
                    method_adjustments=PrayerAdjustments(dhuhr=1),
                )
            case CalculationMethod.TEHRAN:
                return CalculationParameters(fajr_angle=17.7, isha_angle=14.0, maghrib_angle=4.5)
            case CalculationMethod.TURKEY:
                return CalculationParameters(fajr_angle=18.0, isha_angle=17.0)
            case CalculationMethod.OTHER:
                return CalculationParameters(fajr_angle=0.0, isha_angle=0.0)
            case _:
                raise ValueError(f"Unknown calculation method: {self}")
