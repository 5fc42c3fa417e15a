"""Feature engineering module for per-attribute pairwise sub-scores."""

from .pairwise_features import (
    ATTRIBUTE_RULES,
    ATTRIBUTE_WEIGHTS,
    compute_pairwise_factors,
    get_shared_attributes,
    get_pairwise_feature_names
)

__all__ = [
    "ATTRIBUTE_RULES",
    "ATTRIBUTE_WEIGHTS",
    "compute_pairwise_factors",
    "get_shared_attributes",
    "get_pairwise_feature_names"
]
