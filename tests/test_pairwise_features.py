"""Tests for feature_engineering/pairwise_features.py: per-attribute rules."""

from __future__ import annotations

import itertools
import math

import pytest

from roommate_match.feature_engineering.pairwise_features import (
    ATTRIBUTE_RULES,
    ATTRIBUTE_WEIGHTS,
    NEUTRAL_SUBSCORE,
    cleanliness_compatibility,
    compute_pairwise_factors,
    dietary_compatibility,
    drinking_compatibility,
    get_pairwise_feature_names,
    get_shared_attributes,
    guests_compatibility,
    pet_compatibility,
    sleep_schedule_compatibility,
    smoking_compatibility,
    work_schedule_compatibility,
)
from roommate_match.schema import (
    ATTRIBUTE_KEYS,
    PROFILE_ATTRIBUTES,
    Cleanliness,
    LifestyleProfile,
    Smoking,
)

# Every attribute with its full value domain plus "unset"
DOMAINS = [
    (key, [m.value for m in enum_type] + [None])
    for key, _, enum_type in PROFILE_ATTRIBUTES
]


class TestRuleTables:
    @pytest.mark.parametrize("a, b, expected", [
        ("early_bird", "early_bird", 1.0),
        ("early_bird", "flexible", 0.8),
        ("flexible", "night_owl", 0.8),
        ("early_bird", "night_owl", 0.3),
    ])
    def test_sleep_schedule(self, a, b, expected):
        assert sleep_schedule_compatibility(a, b) == expected

    @pytest.mark.parametrize("a, b, expected", [
        ("student", "student", 1.0),
        ("remote_work", "student", 0.7),
        ("student", "regular_office", 0.7),
        ("remote_work", "regular_office", 0.4),
        ("night_shift", "student", 0.4),
        ("night_shift", "remote_work", 0.4),
    ])
    def test_work_schedule(self, a, b, expected):
        assert work_schedule_compatibility(a, b) == expected

    @pytest.mark.parametrize("a, b, expected", [
        ("vegan", "vegan", 1.0),
        ("no_preference", "non_vegetarian", 0.8),
        ("vegan", "no_preference", 0.8),
        ("vegetarian", "vegan", 0.9),
        ("vegetarian", "non_vegetarian", 0.6),
        ("non_vegetarian", "vegan", 0.6),
    ])
    def test_dietary(self, a, b, expected):
        assert dietary_compatibility(a, b) == expected

    @pytest.mark.parametrize("a, b, expected", [
        ("non_smoker", "non_smoker", 1.0),
        ("non_smoker", "regular_smoker", 0.2),
        ("occasional_smoker", "non_smoker", 0.2),
        ("occasional_smoker", "regular_smoker", 0.6),
    ])
    def test_smoking(self, a, b, expected):
        assert smoking_compatibility(a, b) == expected

    @pytest.mark.parametrize("a, b, expected", [
        ("social_drinker", "social_drinker", 1.0),
        ("non_drinker", "regular_drinker", 0.3),
        ("regular_drinker", "non_drinker", 0.3),
        ("non_drinker", "social_drinker", 0.7),
        ("social_drinker", "regular_drinker", 0.7),
    ])
    def test_drinking(self, a, b, expected):
        assert drinking_compatibility(a, b) == expected

    @pytest.mark.parametrize("a, b, expected", [
        ("very_clean", "very_clean", 1.0),
        ("relaxed", "moderately_clean", 0.75),
        ("relaxed", "clean_flexible", 0.5),
        ("relaxed", "very_clean", 0.3),
        ("moderately_clean", "very_clean", 0.5),
        ("clean_flexible", "very_clean", 0.75),
    ])
    def test_cleanliness(self, a, b, expected):
        assert cleanliness_compatibility(a, b) == pytest.approx(expected)

    @pytest.mark.parametrize("a, b, expected", [
        ("no_guests", "no_guests", 1.0),
        ("no_guests", "guests_welcome", 0.2),
        ("guests_welcome", "no_guests", 0.2),
        ("no_guests", "occasional_guests", 0.7),
        ("guests_with_notice", "guests_welcome", 0.7),
    ])
    def test_guests(self, a, b, expected):
        assert guests_compatibility(a, b) == expected

    @pytest.mark.parametrize("a, b, expected", [
        ("love_pets", "love_pets", 1.0),
        ("no_pets", "love_pets", 0.2),
        ("love_pets", "no_pets", 0.2),
        ("okay_with_pets", "no_pets", 0.7),
    ])
    def test_pets(self, a, b, expected):
        assert pet_compatibility(a, b) == expected

    def test_enum_members_and_plain_strings_agree(self):
        assert smoking_compatibility(Smoking.NON_SMOKER, "regular_smoker") == 0.2
        assert cleanliness_compatibility(Cleanliness.RELAXED, Cleanliness.VERY_CLEAN) == 0.3
        assert work_schedule_compatibility("remote_work", "student") == 0.7


class TestUnsetValues:
    @pytest.mark.parametrize("key", ATTRIBUTE_KEYS)
    def test_unset_either_side_is_neutral(self, key):
        rule = ATTRIBUTE_RULES[key]
        some_value = DOMAINS[ATTRIBUTE_KEYS.index(key)][1][0]
        assert rule(None, some_value) == NEUTRAL_SUBSCORE
        assert rule(some_value, None) == NEUTRAL_SUBSCORE
        assert rule(None, None) == NEUTRAL_SUBSCORE


class TestUnrecognizedValues:
    def test_identical_unknown_values_are_equal(self):
        assert smoking_compatibility("hookah", "hookah") == 1.0

    def test_unknown_value_takes_else_branch(self):
        assert sleep_schedule_compatibility("night_owl", "siesta") == 0.3
        assert sleep_schedule_compatibility("flexible", "siesta") == 0.8
        assert smoking_compatibility("non_smoker", "hookah") == 0.2
        assert smoking_compatibility("regular_smoker", "hookah") == 0.6
        assert pet_compatibility("no_pets", "fish_only") == 0.7

    def test_unknown_cleanliness_hits_floor(self):
        assert cleanliness_compatibility("relaxed", "spotless") == 0.3
        assert cleanliness_compatibility("spotless", "very_clean") == 0.3


class TestRuleProperties:
    @pytest.mark.parametrize("key, domain", DOMAINS)
    def test_symmetric(self, key, domain):
        rule = ATTRIBUTE_RULES[key]
        for a, b in itertools.product(domain, repeat=2):
            assert rule(a, b) == rule(b, a), (key, a, b)

    @pytest.mark.parametrize("key, domain", DOMAINS)
    def test_bounded(self, key, domain):
        rule = ATTRIBUTE_RULES[key]
        for a, b in itertools.product(domain, repeat=2):
            assert 0.0 <= rule(a, b) <= 1.0

    @pytest.mark.parametrize("key, domain", DOMAINS)
    def test_identity(self, key, domain):
        rule = ATTRIBUTE_RULES[key]
        for value in domain:
            if value is not None:
                assert rule(value, value) == 1.0

    def test_cleanliness_decays_with_distance(self):
        scale = ["relaxed", "moderately_clean", "clean_flexible", "very_clean"]
        for start in range(len(scale)):
            previous = None
            for end in range(start, len(scale)):
                value = cleanliness_compatibility(scale[start], scale[end])
                if previous is not None:
                    assert value < previous or value == 0.3
                previous = value


class TestPairwiseFactors:
    def test_weights_sum_to_one(self):
        assert math.isclose(sum(ATTRIBUTE_WEIGHTS.values()), 1.0)
        assert set(ATTRIBUTE_WEIGHTS) == set(ATTRIBUTE_KEYS)

    def test_smoking_carries_the_largest_weight(self):
        assert max(ATTRIBUTE_WEIGHTS, key=ATTRIBUTE_WEIGHTS.get) == "smoking"

    def test_factors_in_canonical_order(self, full_profile, smoker_profile):
        factors = compute_pairwise_factors(full_profile, smoker_profile)
        assert list(factors) == list(ATTRIBUTE_KEYS)
        assert factors["smoking"] == 0.2
        assert all(v == 1.0 for k, v in factors.items() if k != "smoking")

    def test_shared_attributes(self):
        a = LifestyleProfile(sleep_schedule="night_owl", smoking="non_smoker")
        b = LifestyleProfile(smoking="regular_smoker", drinking="non_drinker")
        assert get_shared_attributes(a, b) == ["smoking"]

    def test_feature_names(self):
        assert get_pairwise_feature_names() == list(ATTRIBUTE_KEYS)

    def test_rule_tables_are_read_only(self):
        with pytest.raises(TypeError):
            ATTRIBUTE_WEIGHTS["smoking"] = 0.5
