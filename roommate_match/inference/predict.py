"""
Compatibility scoring between two lifestyle profiles.

This module provides the scoring entry points used by the marketplace:
1. score(): the rich, UI-facing result (score, factors, strengths, concerns)
2. match_score(): the single number persisted on a match record

Both paths share one rule table and one weighted fusion; they differ only
in the configured unset-attribute policy.

The scorer is pure: no I/O, no mutable state. One instance can be shared
by any number of concurrent requests.
"""

import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Any, Iterable, List, Optional, Tuple, Union

from ..schema import (
    ATTRIBUTE_KEYS,
    CompatibilityResult,
    ProfileLike,
    as_profile,
)
from ..feature_engineering.pairwise_features import (
    compute_pairwise_factors,
    get_shared_attributes,
)
from ..fusion.weighted_fusion import ScoringConfig, UnsetPolicy, WeightedFusion
from ..presentation.labels import format_factor_name

logger = logging.getLogger(__name__)

STRENGTH_THRESHOLD = 0.8
CONCERN_THRESHOLD = 0.4

# Persisted scores use the schema's numeric(5, 2) convention
MATCH_SCORE_QUANTUM = Decimal("0.01")


class CompatibilityScorer:
    """
    Lifestyle compatibility scorer.

    Attributes:
        config: ScoringConfig with the unset policy of each call site
        fusion: WeightedFusion combining sub-scores
    """

    def __init__(self, config: Optional[ScoringConfig] = None):
        """
        Initialize the scorer.

        Args:
            config: Scoring options (defaults: neutral for the rich result,
                exclude for persisted match scores)
        """
        self.config = config or ScoringConfig()
        self.config.validate()
        self.fusion = WeightedFusion()
        logger.debug(
            f"Initialized CompatibilityScorer with unset_policy={self.config.unset_policy}, "
            f"persisted_unset_policy={self.config.persisted_unset_policy}"
        )

    def score(
        self,
        profile_a: ProfileLike,
        profile_b: ProfileLike,
        policy: Optional[Union[UnsetPolicy, str]] = None
    ) -> CompatibilityResult:
        """
        Compute the rich compatibility result between two profiles.

        Args:
            profile_a: Profile (or raw record) of Person A; None means empty
            profile_b: Profile (or raw record) of Person B; None means empty
            policy: Override of the configured unset policy

        Returns:
            CompatibilityResult with score, factors, strengths and concerns
        """
        policy = UnsetPolicy.parse(policy or self.config.unset_policy)
        profile_a, profile_b = as_profile(profile_a), as_profile(profile_b)

        factors = compute_pairwise_factors(profile_a, profile_b)
        shared = get_shared_attributes(profile_a, profile_b)
        score = self.fusion.fuse(factors, shared, policy)
        strengths, concerns = classify_factors(factors)

        logger.debug(
            f"Scored {profile_a.profile_id or '<anonymous>'} vs "
            f"{profile_b.profile_id or '<anonymous>'}: {score} ({policy.value})"
        )

        return CompatibilityResult(
            score=score,
            factors=factors,
            strengths=strengths,
            concerns=concerns,
            unset_attributes=[key for key in ATTRIBUTE_KEYS if key not in shared],
            policy=policy.value,
        )

    def match_score(
        self,
        profile_a: ProfileLike,
        profile_b: ProfileLike,
        policy: Optional[Union[UnsetPolicy, str]] = None
    ) -> Decimal:
        """
        Compute the score persisted on a match record.

        Args:
            profile_a: Profile (or raw record) of the seeker or owner
            profile_b: Profile (or raw record) of the other party
            policy: Override of the configured persisted unset policy

        Returns:
            Score as a Decimal with two decimal places, e.g. Decimal("84.00")
        """
        policy = UnsetPolicy.parse(policy or self.config.persisted_unset_policy)
        profile_a, profile_b = as_profile(profile_a), as_profile(profile_b)

        factors = compute_pairwise_factors(profile_a, profile_b)
        shared = get_shared_attributes(profile_a, profile_b)
        score = self.fusion.fuse(factors, shared, policy)
        return Decimal(score).quantize(MATCH_SCORE_QUANTUM, rounding=ROUND_HALF_UP)

    def match_score_str(
        self,
        profile_a: ProfileLike,
        profile_b: ProfileLike,
        policy: Optional[Union[UnsetPolicy, str]] = None
    ) -> str:
        """Persisted match score in its decimal-string form, e.g. "84.00"."""
        return str(self.match_score(profile_a, profile_b, policy))

    def score_batch(
        self,
        pairs: Iterable[Tuple[ProfileLike, ProfileLike]],
        policy: Optional[Union[UnsetPolicy, str]] = None
    ) -> List[CompatibilityResult]:
        """
        Compute compatibility results for multiple pairs.

        Args:
            pairs: Iterable of (profile_a, profile_b) tuples
            policy: Override of the configured unset policy

        Returns:
            List of CompatibilityResult objects
        """
        return [self.score(a, b, policy) for a, b in pairs]


def classify_factors(factors: Dict[str, float]) -> Tuple[List[str], List[str]]:
    """
    Split factors into strength and concern labels.

    Sub-scores >= 0.8 are strengths, <= 0.4 are concerns; the band in
    between yields neither.

    Returns:
        Tuple of (strength labels, concern labels) in factor order
    """
    strengths: List[str] = []
    concerns: List[str] = []
    for key, value in factors.items():
        if value >= STRENGTH_THRESHOLD:
            strengths.append(format_factor_name(key))
        elif value <= CONCERN_THRESHOLD:
            concerns.append(format_factor_name(key))
    return strengths, concerns


def calculate_compatibility(profile_a: ProfileLike, profile_b: ProfileLike) -> CompatibilityResult:
    """Score two profiles with the default configuration."""
    return CompatibilityScorer().score(profile_a, profile_b)


def create_scorer(config: Dict[str, Any]) -> CompatibilityScorer:
    """
    Factory function to create a CompatibilityScorer from config.

    Args:
        config: Main configuration dictionary

    Returns:
        Configured CompatibilityScorer instance
    """
    return CompatibilityScorer(ScoringConfig.from_config(config))
