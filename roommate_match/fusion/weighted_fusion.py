"""
Weighted fusion of attribute sub-scores into one compatibility score.

Fusion Formula:
    score = round_half_up(100 * sum(s_i * w_i) / sum(w_i))

How attributes that are unset on either profile enter the sum is the
unset policy:
- neutral: unset attributes contribute NEUTRAL_SUBSCORE (0.5) with their
  full weight, so the denominator is always 1.0. Used for the rich,
  UI-facing result.
- exclude: unset attributes are dropped and the remaining weights are
  renormalized. With no attribute set on both sides the score is
  EMPTY_OVERLAP_SCORE (50). Used for the persisted match score.

With every attribute set on both sides the two policies coincide.
"""

import json
import logging
import math
from dataclasses import dataclass, asdict
from enum import Enum
from typing import Dict, Any, Iterable, Mapping, Optional, Union

from ..feature_engineering.pairwise_features import ATTRIBUTE_WEIGHTS

logger = logging.getLogger(__name__)

MIN_SCORE = 0
MAX_SCORE = 100
EMPTY_OVERLAP_SCORE = 50


class UnsetPolicy(Enum):
    """How attributes unset on either profile are weighted."""
    NEUTRAL = "neutral"
    EXCLUDE = "exclude"

    @classmethod
    def parse(cls, value: Union["UnsetPolicy", str]) -> "UnsetPolicy":
        """
        Accept a policy member or its name.

        Raises:
            ValueError: If the name is not a known policy
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            allowed = [p.value for p in cls]
            raise ValueError(f"Unknown unset policy {value!r}, expected one of {allowed}")


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive values, unlike round()."""
    return int(math.floor(value + 0.5))


@dataclass
class ScoringConfig:
    """
    Operational options for the scorer and its callers.

    Weights, rules, thresholds and labels are fixed constants, not config.

    Attributes:
        unset_policy: Policy for the rich, UI-facing result
        persisted_unset_policy: Policy for the persisted match score
        missing_profile_score: Score given to a listing whose owner (or viewer)
            has no profile
        max_tags: Number of lifestyle tags shown before "+N more"
    """
    unset_policy: str = UnsetPolicy.NEUTRAL.value
    persisted_unset_policy: str = UnsetPolicy.EXCLUDE.value
    missing_profile_score: int = EMPTY_OVERLAP_SCORE
    max_tags: int = 3

    def validate(self) -> None:
        """Validate configuration values."""
        UnsetPolicy.parse(self.unset_policy)
        UnsetPolicy.parse(self.persisted_unset_policy)
        if not MIN_SCORE <= self.missing_profile_score <= MAX_SCORE:
            raise ValueError(
                f"missing_profile_score must be in [{MIN_SCORE}, {MAX_SCORE}], "
                f"got {self.missing_profile_score}"
            )
        if self.max_tags < 1:
            raise ValueError(f"max_tags must be positive, got {self.max_tags}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "ScoringConfig":
        """Create from dictionary."""
        return cls(**d)

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "ScoringConfig":
        """Create from main config dictionary."""
        return cls(
            unset_policy=config.get("scoring", {}).get("unset_policy", UnsetPolicy.NEUTRAL.value),
            persisted_unset_policy=config.get("persistence", {}).get(
                "unset_policy", UnsetPolicy.EXCLUDE.value
            ),
            missing_profile_score=int(
                config.get("ranking", {}).get("missing_profile_score", EMPTY_OVERLAP_SCORE)
            ),
            max_tags=int(config.get("presentation", {}).get("max_tags", 3)),
        )

    def save(self, filepath: str) -> None:
        """Save to JSON file."""
        with open(filepath, "w") as f:
            json.dump(self.to_dict(), f, indent=2)
        logger.info(f"Saved scoring config to {filepath}")


class WeightedFusion:
    """
    Combines per-attribute sub-scores into an integer score in [0, 100].

    Attributes:
        weights: Attribute record key -> weight
    """

    def __init__(self, weights: Optional[Mapping[str, float]] = None):
        self.weights = weights if weights is not None else ATTRIBUTE_WEIGHTS

    def fuse(
        self,
        factors: Mapping[str, float],
        shared_attributes: Iterable[str],
        policy: Union[UnsetPolicy, str] = UnsetPolicy.NEUTRAL
    ) -> int:
        """
        Fuse sub-scores under an unset policy.

        Args:
            factors: Attribute record key -> sub-score in [0, 1]
            shared_attributes: Keys set on both profiles
            policy: UnsetPolicy (or its name)

        Returns:
            Integer compatibility score in [0, 100]
        """
        policy = UnsetPolicy.parse(policy)

        if policy is UnsetPolicy.NEUTRAL:
            included = list(factors.keys())
        else:
            shared = set(shared_attributes)
            included = [key for key in factors if key in shared]
            if not included:
                return EMPTY_OVERLAP_SCORE

        total = self._weighted_sum(factors, included)
        weight_total = sum(self.weights[key] for key in included)

        # Full weight sets sum to 1.0 up to float error; dividing by the float
        # sum would let the two policies disagree on a .5 boundary.
        raw = total if math.isclose(weight_total, 1.0) else total / weight_total
        score = round_half_up(100 * raw)
        return max(MIN_SCORE, min(MAX_SCORE, score))

    def _weighted_sum(self, factors: Mapping[str, float], keys: Iterable[str]) -> float:
        # Accumulate in canonical attribute order so swapped inputs
        # produce bit-identical sums.
        total = 0.0
        for key in keys:
            total += factors[key] * self.weights[key]
        return total
