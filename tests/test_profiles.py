"""Tests for the profile history."""

from dataclasses import replace
from datetime import date

import pytest

from diet_tracker.domain.errors import InvalidProfileError, NoProfileEstablishedError
from diet_tracker.domain.profiles import ActivityLevel, Gender
from diet_tracker.services.calculators import MifflinStJeorCalculator
from diet_tracker.services.profiles import ProfileTracker
from tests.conftest import PROFILE_FIELDS


def test_lookup_carries_over_from_nearest_earlier_record(
    profiles: ProfileTracker,
) -> None:
    profiles.update_profile(date(2024, 1, 1), PROFILE_FIELDS)
    profiles.update_profile(date(2024, 1, 10), {"weight_kg": 78})

    assert profiles.get_profile(date(2024, 1, 5)).weight_kg == 80.0
    assert profiles.get_profile(date(2024, 1, 10)).weight_kg == 78.0
    assert profiles.get_profile(date(2024, 3, 1)).weight_kg == 78.0
    assert profiles.get_profile(date(2024, 3, 1)).age == 30


def test_lookup_before_first_record_fails(profiles: ProfileTracker) -> None:
    profiles.update_profile(date(2024, 1, 10), PROFILE_FIELDS)

    with pytest.raises(NoProfileEstablishedError):
        profiles.get_profile(date(2024, 1, 9))
    assert not profiles.has_profile(date(2024, 1, 9))
    assert profiles.has_profile(date(2024, 1, 10))


def test_partial_update_without_baseline_fails(profiles: ProfileTracker) -> None:
    with pytest.raises(NoProfileEstablishedError):
        profiles.update_profile(date(2024, 1, 1), {"weight_kg": 70})

    assert profiles.history() == []


def test_update_merges_onto_baseline_and_reports_previous(
    profiles: ProfileTracker,
) -> None:
    assert profiles.update_profile(date(2024, 1, 1), PROFILE_FIELDS) is None
    first = profiles.get_profile(date(2024, 1, 1))

    previous = profiles.update_profile(
        date(2024, 1, 1), {"activity_level": 5, "gender": "Female"}
    )

    current = profiles.get_profile(date(2024, 1, 1))
    assert previous == first
    assert current == replace(
        first, gender=Gender.FEMALE, activity_level=ActivityLevel.EXTREMELY_ACTIVE
    )
    assert len(profiles.history()) == 1


def test_restore_removes_or_reinstates_record(profiles: ProfileTracker) -> None:
    profiles.update_profile(date(2024, 1, 1), PROFILE_FIELDS)
    profiles.update_profile(date(2024, 2, 1), {"age": 31})

    profiles.restore(date(2024, 2, 1), None)

    assert [record.day for record in profiles.history()] == [date(2024, 1, 1)]
    assert profiles.get_profile(date(2024, 2, 1)).age == 30


@pytest.mark.parametrize(
    "fields",
    [
        {"height_cm": 0},
        {"weight_kg": -5},
        {"weight_kg": float("inf")},
        {"height_cm": float("nan")},
        {"age": 30.9},
        {"age": float("nan")},
        {"age": 0},
        {"age": 200},
        {"gender": "robot"},
        {"activity_level": 9},
        {"weight_kg": "heavy"},
        {"shoe_size": 42},
    ],
)
def test_invalid_fields_are_rejected(
    profiles: ProfileTracker, fields: dict[str, object]
) -> None:
    profiles.update_profile(date(2024, 1, 1), PROFILE_FIELDS)

    with pytest.raises(InvalidProfileError):
        profiles.update_profile(date(2024, 1, 2), fields)

    assert len(profiles.history()) == 1


def test_compute_target_uses_profile_in_effect(profiles: ProfileTracker) -> None:
    profiles.update_profile(date(2024, 1, 1), PROFILE_FIELDS)

    target = profiles.compute_target(date(2024, 6, 1), MifflinStJeorCalculator())

    assert target == pytest.approx(1780 * 1.55)


def test_load_replaces_history(profiles: ProfileTracker) -> None:
    profiles.update_profile(date(2024, 1, 1), PROFILE_FIELDS)
    stored = profiles.get_profile(date(2024, 1, 1))
    later = replace(stored, day=date(2024, 2, 1), weight_kg=75.0)

    fresh = ProfileTracker()
    fresh.load([later, stored])

    assert fresh.history() == [stored, later]


def test_whole_number_age_given_as_float_is_accepted(
    profiles: ProfileTracker,
) -> None:
    profiles.update_profile(date(2024, 1, 1), {**PROFILE_FIELDS, "age": 31.0})

    assert profiles.get_profile(date(2024, 1, 1)).age == 31
