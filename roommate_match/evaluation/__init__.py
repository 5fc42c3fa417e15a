"""Evaluation module for batch compatibility score analysis."""

from .metrics import (
    compute_score_distribution_stats,
    compare_unset_policies,
    ScoringReport,
    create_scoring_report
)

__all__ = [
    "compute_score_distribution_stats",
    "compare_unset_policies",
    "ScoringReport",
    "create_scoring_report"
]
