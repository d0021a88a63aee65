"""Profile history with carry-over lookup."""

import bisect
import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from datetime import date

from diet_tracker.domain.errors import (
    InvalidProfileError,
    NoProfileEstablishedError,
)
from diet_tracker.domain.profiles import (
    PROFILE_FIELDS,
    ActivityLevel,
    Gender,
    Profile,
)
from diet_tracker.services.calculators import CalorieCalculator

_logger = logging.getLogger(__name__)

MAX_AGE_YEARS = 150


@dataclass
class ProfileTracker:
    """Sparse, date-keyed profile history.

    Only explicit records are stored; a date without one resolves to the
    nearest earlier record.
    """

    _records: dict[date, Profile] = field(default_factory=dict, repr=False)
    _days: list[date] = field(default_factory=list, repr=False)

    def get_profile(self, day: date) -> Profile:
        """Return the profile in effect on ``day``."""
        index = bisect.bisect_right(self._days, day)
        if index == 0:
            raise NoProfileEstablishedError(
                f"No profile established on or before {day}"
            )
        return self._records[self._days[index - 1]]

    def has_profile(self, day: date) -> bool:
        """Return True when a profile is in effect on ``day``."""
        return bool(self._days) and self._days[0] <= day

    def update_profile(self, day: date, fields: Mapping[str, object]) -> Profile | None:
        """Write the record at ``day`` and return the explicit one it replaced.

        ``fields`` are merged onto the profile in effect on ``day``. Without
        such a baseline every profile field must be supplied.
        """
        unknown = set(fields) - set(PROFILE_FIELDS)
        if unknown:
            raise InvalidProfileError(f"Unknown profile fields: {sorted(unknown)}")
        if self.has_profile(day):
            baseline = self.get_profile(day)
            record = replace(baseline, day=day, **_coerce(fields))
        else:
            missing = [name for name in PROFILE_FIELDS if name not in fields]
            if missing:
                raise NoProfileEstablishedError(
                    f"No profile established on or before {day}; missing {missing}"
                )
            record = Profile(day=day, **_coerce(fields))
        _validate(record)

        previous = self._records.get(day)
        self._put(record)
        _logger.info("Profile updated: day=%s fields=%s", day, sorted(fields))
        return previous

    def restore(self, day: date, previous: Profile | None) -> None:
        """Put back ``previous`` at ``day``, or drop the explicit record."""
        if previous is None:
            self._records.pop(day, None)
            index = bisect.bisect_left(self._days, day)
            if index < len(self._days) and self._days[index] == day:
                del self._days[index]
            return
        self._put(previous)

    def compute_target(self, day: date, calculator: CalorieCalculator) -> float:
        """Return the calorie target on ``day`` under ``calculator``."""
        return calculator.compute_target(self.get_profile(day))

    def history(self) -> list[Profile]:
        """Return explicit records in date order."""
        return [self._records[day] for day in self._days]

    def load(self, profiles: list[Profile]) -> None:
        """Replace the history with persisted records."""
        self._records = {}
        self._days = []
        for profile in profiles:
            self._put(profile)

    def _put(self, record: Profile) -> None:
        if record.day not in self._records:
            bisect.insort(self._days, record.day)
        self._records[record.day] = record


def _coerce(fields: Mapping[str, object]) -> dict[str, object]:
    """Convert raw field values into their domain types."""
    coerced: dict[str, object] = {}
    try:
        for name, value in fields.items():
            if name == "gender":
                coerced[name] = Gender(str(value).lower())
            elif name == "activity_level":
                coerced[name] = ActivityLevel(int(value))
            elif name == "age":
                if isinstance(value, float) and not value.is_integer():
                    raise ValueError("age must be a whole number")
                coerced[name] = int(value)
            else:
                coerced[name] = float(value)
    except (TypeError, ValueError) as exc:
        raise InvalidProfileError(f"Invalid profile field {name}: {value!r}") from exc
    return coerced


def _validate(record: Profile) -> None:
    if not math.isfinite(record.height_cm) or record.height_cm <= 0:
        raise InvalidProfileError("Height must be positive")
    if not math.isfinite(record.weight_kg) or record.weight_kg <= 0:
        raise InvalidProfileError("Weight must be positive")
    if not 0 < record.age <= MAX_AGE_YEARS:
        raise InvalidProfileError(f"Age must be between 1 and {MAX_AGE_YEARS}")
