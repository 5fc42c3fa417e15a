"""Weighted fusion module for combining attribute sub-scores."""

from .weighted_fusion import WeightedFusion, ScoringConfig, UnsetPolicy

__all__ = ["WeightedFusion", "ScoringConfig", "UnsetPolicy"]
