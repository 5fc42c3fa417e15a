"""Tests for fusion/weighted_fusion.py"""

import json

import pytest

from roommate_match.fusion import ScoringConfig, UnsetPolicy, WeightedFusion
from roommate_match.fusion.weighted_fusion import EMPTY_OVERLAP_SCORE, round_half_up
from roommate_match.schema import ATTRIBUTE_KEYS


def _factors(value=0.5, **overrides):
    factors = {key: value for key in ATTRIBUTE_KEYS}
    factors.update(overrides)
    return factors


class TestRoundHalfUp:
    @pytest.mark.parametrize("value, expected", [
        (84.4, 84),
        (84.5, 85),
        (42.5, 43),
        (0.49, 0),
        (99.5, 100),
    ])
    def test_rounds_half_up(self, value, expected):
        assert round_half_up(value) == expected

    def test_differs_from_bankers_rounding(self):
        assert round(42.5) == 42
        assert round_half_up(42.5) == 43


class TestUnsetPolicy:
    def test_parse_names(self):
        assert UnsetPolicy.parse("neutral") is UnsetPolicy.NEUTRAL
        assert UnsetPolicy.parse(" EXCLUDE ") is UnsetPolicy.EXCLUDE
        assert UnsetPolicy.parse(UnsetPolicy.EXCLUDE) is UnsetPolicy.EXCLUDE

    def test_parse_unknown(self):
        with pytest.raises(ValueError, match="Unknown unset policy"):
            UnsetPolicy.parse("skip")


class TestWeightedFusion:
    def test_all_ones_is_100(self):
        assert WeightedFusion().fuse(_factors(1.0), ATTRIBUTE_KEYS) == 100

    def test_all_zero_is_0(self):
        assert WeightedFusion().fuse(_factors(0.0), ATTRIBUTE_KEYS) == 0

    def test_neutral_keeps_unset_weights(self):
        factors = _factors(0.5, sleepSchedule=0.9)
        # 0.9 * 0.15 + 0.5 * 0.85 = 0.56
        assert WeightedFusion().fuse(factors, ["sleepSchedule"], UnsetPolicy.NEUTRAL) == 56

    def test_exclude_renormalizes(self):
        factors = _factors(0.5, sleepSchedule=1.0, smoking=0.2)
        # (0.15 + 0.04) / 0.35 = 0.5428...
        assert WeightedFusion().fuse(factors, ["sleepSchedule", "smoking"], "exclude") == 54

    def test_exclude_without_shared_attributes(self):
        assert WeightedFusion().fuse(_factors(), [], UnsetPolicy.EXCLUDE) == EMPTY_OVERLAP_SCORE

    def test_policies_agree_when_everything_shared(self):
        factors = _factors(0.7, smoking=0.2, cleanliness=0.75)
        fusion = WeightedFusion()
        assert fusion.fuse(factors, ATTRIBUTE_KEYS, "neutral") == fusion.fuse(
            factors, ATTRIBUTE_KEYS, "exclude"
        )

    def test_custom_weights(self):
        fusion = WeightedFusion(weights={"a": 0.75, "b": 0.25})
        assert fusion.fuse({"a": 1.0, "b": 0.0}, ["a", "b"]) == 75


class TestScoringConfig:
    def test_defaults(self):
        config = ScoringConfig()
        assert config.unset_policy == "neutral"
        assert config.persisted_unset_policy == "exclude"
        assert config.missing_profile_score == 50
        assert config.max_tags == 3
        config.validate()

    def test_from_config_sections(self):
        config = ScoringConfig.from_config({
            "scoring": {"unset_policy": "exclude"},
            "persistence": {"unset_policy": "neutral"},
            "ranking": {"missing_profile_score": 40},
            "presentation": {"max_tags": 5},
        })
        assert config.unset_policy == "exclude"
        assert config.persisted_unset_policy == "neutral"
        assert config.missing_profile_score == 40
        assert config.max_tags == 5

    def test_from_empty_config(self):
        assert ScoringConfig.from_config({}) == ScoringConfig()

    @pytest.mark.parametrize("kwargs", [
        {"unset_policy": "zero"},
        {"persisted_unset_policy": "drop"},
        {"missing_profile_score": 101},
        {"missing_profile_score": -1},
        {"max_tags": 0},
    ])
    def test_validate_rejects(self, kwargs):
        with pytest.raises(ValueError):
            ScoringConfig(**kwargs).validate()

    def test_save_and_from_dict(self, tmp_path):
        path = tmp_path / "scoring.json"
        ScoringConfig(max_tags=4).save(str(path))
        with open(path) as f:
            data = json.load(f)
        assert ScoringConfig.from_dict(data) == ScoringConfig(max_tags=4)
