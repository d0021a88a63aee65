"""Domain models for the personal profile."""

from dataclasses import dataclass
from datetime import date
from enum import IntEnum, StrEnum


class Gender(StrEnum):
    """Gender used to pick the metabolic rate formula."""

    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class ActivityLevel(IntEnum):
    """Ordinal physical activity level."""

    SEDENTARY = 1
    LIGHTLY_ACTIVE = 2
    MODERATELY_ACTIVE = 3
    VERY_ACTIVE = 4
    EXTREMELY_ACTIVE = 5

    @property
    def multiplier(self) -> float:
        """Factor applied to the basal metabolic rate."""
        return _ACTIVITY_MULTIPLIERS[self]


_ACTIVITY_MULTIPLIERS = {
    ActivityLevel.SEDENTARY: 1.2,
    ActivityLevel.LIGHTLY_ACTIVE: 1.375,
    ActivityLevel.MODERATELY_ACTIVE: 1.55,
    ActivityLevel.VERY_ACTIVE: 1.725,
    ActivityLevel.EXTREMELY_ACTIVE: 1.9,
}

PROFILE_FIELDS = ("gender", "height_cm", "age", "weight_kg", "activity_level")


@dataclass(frozen=True)
class Profile:
    """Snapshot of the user's body data effective from ``day``."""

    day: date
    gender: Gender
    height_cm: float
    age: int
    weight_kg: float
    activity_level: ActivityLevel
