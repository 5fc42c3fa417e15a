"""
Pairwise lifestyle features for compatibility scoring.

This module computes one sub-score per lifestyle attribute from the
pair (Person A value, Person B value). Each sub-score lies in [0, 1]
where 1.0 means the two values are fully compatible.

Rule Summary:
- Equal values always score 1.0
- Either side unset scores NEUTRAL_SUBSCORE (0.5)
- Otherwise a fixed, attribute-specific table applies

Every rule is symmetric in its arguments. Values outside the
enumerations (kept as raw strings by the schema in non-strict mode)
are equal only to an identical raw string and otherwise take the
attribute's generic "else" branch; for cleanliness that is the 0.3 floor.
"""

import functools
from enum import Enum
from types import MappingProxyType
from typing import Callable, Dict, List, Mapping, Optional, Tuple

from ..schema import (
    ATTRIBUTE_KEYS,
    AttributeValue,
    Cleanliness,
    DietaryPreference,
    Drinking,
    GuestsPolicy,
    LifestyleProfile,
    PetPreference,
    SleepSchedule,
    Smoking,
    WorkSchedule,
)

NEUTRAL_SUBSCORE = 0.5

# Fixed attribute weights (sum to 1.0)
ATTRIBUTE_WEIGHTS: Mapping[str, float] = MappingProxyType({
    "sleepSchedule": 0.15,
    "workSchedule": 0.10,
    "dietaryPreference": 0.15,
    "smoking": 0.20,
    "drinking": 0.15,
    "cleanliness": 0.15,
    "guestsPolicy": 0.05,
    "petPreference": 0.05,
})

# Work schedules that overlap enough to share a place
_COMPATIBLE_WORK_PAIRS = frozenset({
    frozenset({WorkSchedule.REMOTE_WORK.value, WorkSchedule.STUDENT.value}),
    frozenset({WorkSchedule.REGULAR_OFFICE.value, WorkSchedule.STUDENT.value}),
})

_PLANT_BASED_DIETS = frozenset({DietaryPreference.VEGETARIAN.value, DietaryPreference.VEGAN.value})

# Ordered from least to most strict
CLEANLINESS_SCALE: Tuple[str, ...] = (
    Cleanliness.RELAXED.value,
    Cleanliness.MODERATELY_CLEAN.value,
    Cleanliness.CLEAN_FLEXIBLE.value,
    Cleanliness.VERY_CLEAN.value,
)
CLEANLINESS_STEP_PENALTY = 0.25
CLEANLINESS_FLOOR = 0.3

AttributeRule = Callable[[AttributeValue, AttributeValue], float]


def _plain(value: AttributeValue) -> Optional[str]:
    return value.value if isinstance(value, Enum) else value


def attribute_rule(func: Callable[[str, str], float]) -> AttributeRule:
    """
    Wrap a rule body with the handling shared by every attribute.

    Either side unset -> NEUTRAL_SUBSCORE; equal values -> 1.0. The body
    only sees two distinct, plain string values.
    """
    @functools.wraps(func)
    def wrapper(value_a: AttributeValue, value_b: AttributeValue) -> float:
        value_a, value_b = _plain(value_a), _plain(value_b)
        if value_a is None or value_b is None:
            return NEUTRAL_SUBSCORE
        if value_a == value_b:
            return 1.0
        return func(value_a, value_b)
    return wrapper


def _is_pair(value_a: str, value_b: str, first: Enum, second: Enum) -> bool:
    """True if {value_a, value_b} is the unordered pair {first, second}."""
    return {value_a, value_b} == {first.value, second.value}


@attribute_rule
def sleep_schedule_compatibility(value_a: str, value_b: str) -> float:
    """Early birds and night owls clash; flexible sleepers fit most people."""
    if SleepSchedule.FLEXIBLE.value in (value_a, value_b):
        return 0.8
    return 0.3


@attribute_rule
def work_schedule_compatibility(value_a: str, value_b: str) -> float:
    """Students fit with office and remote workers; other mixes score low."""
    if frozenset({value_a, value_b}) in _COMPATIBLE_WORK_PAIRS:
        return 0.7
    return 0.4


@attribute_rule
def dietary_compatibility(value_a: str, value_b: str) -> float:
    if DietaryPreference.NO_PREFERENCE.value in (value_a, value_b):
        return 0.8
    if value_a in _PLANT_BASED_DIETS and value_b in _PLANT_BASED_DIETS:
        return 0.9
    return 0.6


@attribute_rule
def smoking_compatibility(value_a: str, value_b: str) -> float:
    """A non-smoker paired with any kind of smoker is a strong concern."""
    non_smoker = Smoking.NON_SMOKER.value
    if (value_a == non_smoker) != (value_b == non_smoker):
        return 0.2
    return 0.6


@attribute_rule
def drinking_compatibility(value_a: str, value_b: str) -> float:
    if _is_pair(value_a, value_b, Drinking.NON_DRINKER, Drinking.REGULAR_DRINKER):
        return 0.3
    return 0.7


@attribute_rule
def cleanliness_compatibility(value_a: str, value_b: str) -> float:
    """
    Decays by 0.25 per step on the cleanliness scale, floored at 0.3.

    relaxed < moderately_clean < clean_flexible < very_clean
    """
    if value_a not in CLEANLINESS_SCALE or value_b not in CLEANLINESS_SCALE:
        return CLEANLINESS_FLOOR

    distance = abs(CLEANLINESS_SCALE.index(value_a) - CLEANLINESS_SCALE.index(value_b))
    return max(CLEANLINESS_FLOOR, 1.0 - distance * CLEANLINESS_STEP_PENALTY)


@attribute_rule
def guests_compatibility(value_a: str, value_b: str) -> float:
    if _is_pair(value_a, value_b, GuestsPolicy.NO_GUESTS, GuestsPolicy.GUESTS_WELCOME):
        return 0.2
    return 0.7


@attribute_rule
def pet_compatibility(value_a: str, value_b: str) -> float:
    if _is_pair(value_a, value_b, PetPreference.NO_PETS, PetPreference.LOVE_PETS):
        return 0.2
    return 0.7


ATTRIBUTE_RULES: Mapping[str, AttributeRule] = MappingProxyType({
    "sleepSchedule": sleep_schedule_compatibility,
    "workSchedule": work_schedule_compatibility,
    "dietaryPreference": dietary_compatibility,
    "smoking": smoking_compatibility,
    "drinking": drinking_compatibility,
    "cleanliness": cleanliness_compatibility,
    "guestsPolicy": guests_compatibility,
    "petPreference": pet_compatibility,
})


def compute_pairwise_factors(
    profile_a: LifestyleProfile,
    profile_b: LifestyleProfile
) -> Dict[str, float]:
    """
    Compute every attribute sub-score for a pair of profiles.

    Args:
        profile_a: Lifestyle profile of Person A
        profile_b: Lifestyle profile of Person B

    Returns:
        Dictionary of record key -> sub-score in canonical attribute order
    """
    return {
        key: ATTRIBUTE_RULES[key](profile_a.get(key), profile_b.get(key))
        for key in ATTRIBUTE_KEYS
    }


def get_shared_attributes(
    profile_a: LifestyleProfile,
    profile_b: LifestyleProfile
) -> List[str]:
    """Record keys that are set on both profiles, in canonical order."""
    return [
        key for key in ATTRIBUTE_KEYS
        if profile_a.get(key) is not None and profile_b.get(key) is not None
    ]


def get_pairwise_feature_names() -> List[str]:
    """Get the ordered list of pairwise feature (attribute) names."""
    return list(ATTRIBUTE_KEYS)
