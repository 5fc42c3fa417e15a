"""Shared test fixtures: sample lifestyle records, profiles and a scorer."""

from __future__ import annotations

from typing import Any, Dict, List

import pytest

from roommate_match.inference import CompatibilityScorer
from roommate_match.schema import LifestyleProfile

FULL_RECORD: Dict[str, Any] = {
    "sleepSchedule": "night_owl",
    "workSchedule": "remote_work",
    "dietaryPreference": "vegetarian",
    "smoking": "non_smoker",
    "drinking": "non_drinker",
    "cleanliness": "very_clean",
    "guestsPolicy": "guests_with_notice",
    "petPreference": "okay_with_pets",
}

ALL_LABELS = [
    "Sleep Schedule",
    "Work Schedule",
    "Dietary Preferences",
    "Smoking Habits",
    "Drinking Habits",
    "Cleanliness Standards",
    "Guest Policy",
    "Pet Preferences",
]


@pytest.fixture
def all_labels() -> List[str]:
    return list(ALL_LABELS)


@pytest.fixture
def full_record() -> Dict[str, Any]:
    """Storage record with all eight attributes set."""
    return dict(FULL_RECORD)


@pytest.fixture
def full_profile() -> LifestyleProfile:
    return LifestyleProfile.from_dict({"userId": "u1", **FULL_RECORD})


@pytest.fixture
def smoker_profile() -> LifestyleProfile:
    """The full profile with smoking switched to regular_smoker."""
    return LifestyleProfile.from_dict({"userId": "u2", **FULL_RECORD, "smoking": "regular_smoker"})


@pytest.fixture
def empty_profile() -> LifestyleProfile:
    return LifestyleProfile(profile_id="u0")


@pytest.fixture
def scorer() -> CompatibilityScorer:
    return CompatibilityScorer()
