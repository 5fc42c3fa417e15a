"""
Batch scoring report for compatibility scores.

Scores many profile pairs and summarizes:
1. Score distribution
2. How often each attribute is a strength or a concern
3. Badge tier counts
4. Divergence between the neutral and exclude unset policies

The report describes the heuristic's behaviour on a population; it does
not measure match quality.
"""

import json
import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Any, Optional, Sequence, Tuple

import numpy as np

from ..fusion.weighted_fusion import UnsetPolicy
from ..inference.predict import CompatibilityScorer
from ..pair_generation.generator import PairGenerator
from ..presentation.labels import FACTOR_LABELS, score_tier
from ..schema import LifestyleProfile

logger = logging.getLogger(__name__)

DEFAULT_QUANTILES = (0.1, 0.25, 0.5, 0.75, 0.9)


@dataclass
class ScoreDistributionStats:
    """Statistics about score distribution."""
    mean: float
    std: float
    min: float
    max: float
    quantiles: Dict[str, float]  # e.g., {"p10": 42.0, "p50": 61.0, "p90": 80.0}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "mean": float(self.mean),
            "std": float(self.std),
            "min": float(self.min),
            "max": float(self.max),
            "quantiles": {k: float(v) for k, v in self.quantiles.items()}
        }


@dataclass
class PolicyComparison:
    """How much the exclude policy moves scores away from the neutral policy."""
    n_pairs: int
    n_different: int
    mean_abs_difference: float
    max_abs_difference: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "n_pairs": int(self.n_pairs),
            "n_different": int(self.n_different),
            "mean_abs_difference": float(self.mean_abs_difference),
            "max_abs_difference": float(self.max_abs_difference)
        }


@dataclass
class ScoringReport:
    """
    Complete batch scoring report.

    Contains distribution statistics, strength/concern frequencies,
    tier counts and the unset-policy comparison.
    """
    n_profiles: int
    n_pairs: int
    policy: str
    distribution_stats: Optional[ScoreDistributionStats]
    strength_counts: Dict[str, int] = field(default_factory=dict)
    concern_counts: Dict[str, int] = field(default_factory=dict)
    tier_counts: Dict[str, int] = field(default_factory=dict)
    policy_comparison: Optional[PolicyComparison] = None

    def to_dict(self) -> Dict[str, Any]:
        result = {
            "n_profiles": self.n_profiles,
            "n_pairs": self.n_pairs,
            "policy": self.policy,
            "distribution_stats": (
                self.distribution_stats.to_dict() if self.distribution_stats else None
            ),
            "strength_counts": dict(self.strength_counts),
            "concern_counts": dict(self.concern_counts),
            "tier_counts": dict(self.tier_counts),
        }
        if self.policy_comparison:
            result["policy_comparison"] = self.policy_comparison.to_dict()
        return result

    def save(self, filepath: str) -> None:
        """Save report to JSON file."""
        with open(filepath, "w") as f:
            json.dump(self.to_dict(), f, indent=2)
        logger.info(f"Saved scoring report to {filepath}")

    def summary(self) -> str:
        """Generate text summary of the report."""
        lines = [
            f"Scoring Report: {self.n_profiles} profiles, {self.n_pairs} pairs ({self.policy})",
            "=" * 50,
        ]

        if self.distribution_stats:
            stats = self.distribution_stats
            lines.extend([
                "",
                "Score Distribution:",
                f"  Mean: {stats.mean:.2f}",
                f"  Std:  {stats.std:.2f}",
                f"  Min:  {stats.min:.0f}",
                f"  Max:  {stats.max:.0f}",
            ])
            for q_name, q_value in stats.quantiles.items():
                lines.append(f"  {q_name}: {q_value:.1f}")

        if self.tier_counts:
            lines.extend(["", "Tiers:"])
            for tier, count in self.tier_counts.items():
                lines.append(f"  {tier}: {count}")

        lines.extend(["", "Strengths / Concerns:"])
        for label in FACTOR_LABELS.values():
            lines.append(
                f"  {label}: {self.strength_counts.get(label, 0)} / "
                f"{self.concern_counts.get(label, 0)}"
            )

        if self.policy_comparison:
            comparison = self.policy_comparison
            lines.extend([
                "",
                "Unset Policy Comparison (exclude vs neutral):",
                f"  Pairs with different score: {comparison.n_different}",
                f"  Mean |difference|: {comparison.mean_abs_difference:.2f}",
                f"  Max |difference|:  {comparison.max_abs_difference:.0f}",
            ])

        return "\n".join(lines)


def compute_score_distribution_stats(
    scores: np.ndarray,
    quantiles: Sequence[float] = DEFAULT_QUANTILES
) -> ScoreDistributionStats:
    """
    Compute distribution statistics for scores.

    Args:
        scores: Array of compatibility scores
        quantiles: Quantile values to compute (default: p10, p25, p50, p75, p90)

    Returns:
        ScoreDistributionStats instance
    """
    quantile_dict = {
        f"p{int(round(q * 100))}": float(np.percentile(scores, q * 100))
        for q in quantiles
    }

    return ScoreDistributionStats(
        mean=float(np.mean(scores)),
        std=float(np.std(scores)),
        min=float(np.min(scores)),
        max=float(np.max(scores)),
        quantiles=quantile_dict
    )


def compare_unset_policies(
    neutral_scores: np.ndarray,
    exclude_scores: np.ndarray
) -> PolicyComparison:
    """
    Compare scores of the same pairs under both unset policies.

    Args:
        neutral_scores: Scores with unset attributes at 0.5
        exclude_scores: Scores with unset attributes dropped

    Returns:
        PolicyComparison instance
    """
    if len(neutral_scores) != len(exclude_scores):
        raise ValueError(
            f"Score arrays must have same length: "
            f"{len(neutral_scores)} vs {len(exclude_scores)}"
        )
    if len(neutral_scores) == 0:
        return PolicyComparison(n_pairs=0, n_different=0,
                                mean_abs_difference=0.0, max_abs_difference=0.0)

    diff = np.abs(np.asarray(exclude_scores, dtype=float) - np.asarray(neutral_scores, dtype=float))
    return PolicyComparison(
        n_pairs=len(diff),
        n_different=int(np.count_nonzero(diff)),
        mean_abs_difference=float(np.mean(diff)),
        max_abs_difference=float(np.max(diff))
    )


def create_scoring_report(
    profiles: Dict[str, LifestyleProfile],
    scorer: Optional[CompatibilityScorer] = None,
    pairs: Optional[List[Tuple[str, str]]] = None,
    quantiles: Sequence[float] = DEFAULT_QUANTILES,
    max_pairs: int = 200000,
    random_seed: Optional[int] = 42
) -> ScoringReport:
    """
    Score profile pairs and build a report.

    Args:
        profiles: Profile id -> LifestyleProfile
        scorer: Scorer to use (default configuration if None)
        pairs: Explicit id pairs; generated from profiles if None
        quantiles: Quantiles to compute
        max_pairs: Cap on generated pairs
        random_seed: Seed for pair sampling above the cap

    Returns:
        ScoringReport instance
    """
    scorer = scorer or CompatibilityScorer()
    policy = UnsetPolicy.parse(scorer.config.unset_policy)
    alternate = UnsetPolicy.EXCLUDE if policy is UnsetPolicy.NEUTRAL else UnsetPolicy.NEUTRAL

    if pairs is None:
        pairs = PairGenerator(max_pairs=max_pairs, random_seed=random_seed).generate_id_pairs(
            list(profiles.keys())
        )

    logger.info(f"Scoring {len(pairs)} pairs from {len(profiles)} profiles")

    scores = []
    alternate_scores = []
    strength_counts: Counter = Counter()
    concern_counts: Counter = Counter()
    tier_counts: Counter = Counter()

    for id_a, id_b in pairs:
        result = scorer.score(profiles[id_a], profiles[id_b], policy)
        scores.append(result.score)
        alternate_scores.append(scorer.score(profiles[id_a], profiles[id_b], alternate).score)
        strength_counts.update(result.strengths)
        concern_counts.update(result.concerns)
        tier_counts[score_tier(result.score)] += 1

    if not scores:
        logger.warning("No pairs to score; report has no distribution statistics")
        return ScoringReport(
            n_profiles=len(profiles), n_pairs=0, policy=policy.value, distribution_stats=None
        )

    scores_array = np.array(scores, dtype=float)
    alternate_array = np.array(alternate_scores, dtype=float)
    if policy is UnsetPolicy.NEUTRAL:
        comparison = compare_unset_policies(scores_array, alternate_array)
    else:
        comparison = compare_unset_policies(alternate_array, scores_array)

    report = ScoringReport(
        n_profiles=len(profiles),
        n_pairs=len(scores),
        policy=policy.value,
        distribution_stats=compute_score_distribution_stats(scores_array, quantiles),
        strength_counts=dict(strength_counts),
        concern_counts=dict(concern_counts),
        tier_counts={tier: tier_counts.get(tier, 0) for tier in ("high", "medium", "low")},
        policy_comparison=comparison,
    )
    logger.info(f"Mean score {report.distribution_stats.mean:.2f} over {report.n_pairs} pairs")
    return report
