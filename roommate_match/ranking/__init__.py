"""Ranking module for ordering listings by compatibility."""

from .listings import RankedListing, rank_listings

__all__ = ["RankedListing", "rank_listings"]
