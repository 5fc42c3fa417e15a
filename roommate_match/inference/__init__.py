"""
Inference module for compatibility scoring.

This module provides the scorer used by the listing browse path and
the match-persistence path.
"""

from ..schema import LifestyleProfile, CompatibilityResult
from .predict import CompatibilityScorer, calculate_compatibility, create_scorer

__all__ = [
    "LifestyleProfile",
    "CompatibilityResult",
    "CompatibilityScorer",
    "calculate_compatibility",
    "create_scorer",
]
