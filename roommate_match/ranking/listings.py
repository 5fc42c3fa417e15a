"""
Listing ranking for the browse page.

Each listing is scored by the compatibility between the viewer's profile
and the listing owner's profile, then listings are sorted best match first.

Key Design Decisions:
- Listings are opaque records; only the owner id is read from them
- A missing viewer or owner profile yields the configured default score
  (50) rather than dropping the listing
- Sorting is stable: equal scores keep the caller's order
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

from ..inference.predict import CompatibilityScorer
from ..schema import CompatibilityResult, ProfileLike, as_profile

logger = logging.getLogger(__name__)


@dataclass
class RankedListing:
    """
    A listing with its compatibility score for one viewer.

    Attributes:
        listing: The listing record as given by the caller
        score: Compatibility score [0, 100]
        result: Full result, or None if a profile was missing
    """
    listing: Any
    score: int
    result: Optional[CompatibilityResult] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary (listing included as-is)."""
        return {
            "listing": self.listing,
            "score": int(self.score),
            "result": self.result.to_dict() if self.result is not None else None,
        }


def get_owner_id(listing: Any, owner_key: str = "ownerId") -> Optional[str]:
    """Read the owner id from a listing mapping or object."""
    if isinstance(listing, Mapping):
        owner_id = listing.get(owner_key)
    else:
        owner_id = getattr(listing, owner_key, None)
    return None if owner_id is None else str(owner_id)


def rank_listings(
    viewer: ProfileLike,
    listings: Iterable[Any],
    owner_profiles: Mapping,
    scorer: Optional[CompatibilityScorer] = None,
    *,
    owner_key: str = "ownerId",
    min_score: Optional[int] = None,
    limit: Optional[int] = None
) -> List[RankedListing]:
    """
    Score and sort listings for one viewer.

    Args:
        viewer: Viewer's profile, raw record, or None if they have none
        listings: Listing records carrying the owner id under owner_key
        owner_profiles: Owner id -> profile (or raw record)
        scorer: Scorer to use (default configuration if None)
        owner_key: Listing field holding the owner id
        min_score: Drop listings scoring below this value
        limit: Keep at most this many listings after sorting

    Returns:
        RankedListing objects sorted by descending score
    """
    scorer = scorer or CompatibilityScorer()
    default_score = scorer.config.missing_profile_score
    viewer_profile = as_profile(viewer) if viewer is not None else None

    ranked = []
    n_missing = 0
    for listing in listings:
        owner_id = get_owner_id(listing, owner_key)
        owner_profile = owner_profiles.get(owner_id) if owner_id is not None else None

        if viewer_profile is None or owner_profile is None:
            n_missing += 1
            ranked.append(RankedListing(listing=listing, score=default_score))
            continue

        result = scorer.score(viewer_profile, owner_profile)
        ranked.append(RankedListing(listing=listing, score=result.score, result=result))

    if n_missing:
        logger.debug(f"{n_missing} listings scored with default {default_score} (missing profile)")

    ranked.sort(key=lambda r: r.score, reverse=True)

    if min_score is not None:
        ranked = [r for r in ranked if r.score >= min_score]
    if limit is not None:
        ranked = ranked[:limit]

    return ranked
