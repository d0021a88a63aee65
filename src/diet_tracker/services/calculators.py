"""Calorie target strategies."""

from dataclasses import dataclass
from enum import StrEnum
from typing import Protocol

from diet_tracker.domain.errors import UnknownCalculationMethodError
from diet_tracker.domain.profiles import Gender, Profile


class CalculationMethod(StrEnum):
    """Registered calorie calculation methods."""

    HARRIS_BENEDICT = "harris-benedict"
    MIFFLIN_ST_JEOR = "mifflin-st-jeor"


class CalorieCalculator(Protocol):
    """Computes a daily calorie target from a profile snapshot."""

    def compute_target(self, profile: Profile) -> float:
        """Return the target calories for the profile."""


@dataclass(frozen=True)
class HarrisBenedictCalculator(CalorieCalculator):
    """Revised Harris-Benedict equation scaled by activity level.

    Men:   88.362 + 13.397 x weight + 4.799 x height - 5.677 x age
    Other: 447.593 + 9.247 x weight + 3.098 x height - 4.330 x age
    """

    def compute_target(self, profile: Profile) -> float:
        if profile.gender == Gender.MALE:
            bmr = (
                88.362
                + 13.397 * profile.weight_kg
                + 4.799 * profile.height_cm
                - 5.677 * profile.age
            )
        else:
            bmr = (
                447.593
                + 9.247 * profile.weight_kg
                + 3.098 * profile.height_cm
                - 4.330 * profile.age
            )
        return bmr * profile.activity_level.multiplier


@dataclass(frozen=True)
class MifflinStJeorCalculator(CalorieCalculator):
    """Mifflin-St Jeor equation scaled by activity level.

    Men:   10 x weight + 6.25 x height - 5 x age + 5
    Other: 10 x weight + 6.25 x height - 5 x age - 161
    """

    def compute_target(self, profile: Profile) -> float:
        base = 10 * profile.weight_kg + 6.25 * profile.height_cm - 5 * profile.age
        bmr = base + 5 if profile.gender == Gender.MALE else base - 161
        return bmr * profile.activity_level.multiplier


_CALCULATORS: dict[CalculationMethod, CalorieCalculator] = {
    CalculationMethod.HARRIS_BENEDICT: HarrisBenedictCalculator(),
    CalculationMethod.MIFFLIN_ST_JEOR: MifflinStJeorCalculator(),
}


def parse_method(raw: str) -> CalculationMethod:
    """Parse a method name such as ``mifflin-st-jeor``."""
    try:
        return CalculationMethod(raw.strip().lower())
    except ValueError as exc:
        raise UnknownCalculationMethodError(raw) from exc


def get_calculator(method: CalculationMethod | str) -> CalorieCalculator:
    """Return the calculator registered for a method."""
    return _CALCULATORS[parse_method(str(method))]
