"""
Display tables for compatibility results and lifestyle profiles.

All tables are static, read-only lookups. Nothing here is derived from
the attribute keys programmatically; an unknown key or value falls back
to the raw key or value.
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Sequence, Tuple

from ..schema import ProfileLike, as_profile

FACTOR_LABELS: Mapping[str, str] = MappingProxyType({
    "sleepSchedule": "Sleep Schedule",
    "workSchedule": "Work Schedule",
    "dietaryPreference": "Dietary Preferences",
    "smoking": "Smoking Habits",
    "drinking": "Drinking Habits",
    "cleanliness": "Cleanliness Standards",
    "guestsPolicy": "Guest Policy",
    "petPreference": "Pet Preferences",
})

VALUE_LABELS: Mapping[str, Mapping[str, str]] = MappingProxyType({
    "sleepSchedule": MappingProxyType({
        "early_bird": "Early Bird",
        "night_owl": "Night Owl",
        "flexible": "Flexible",
    }),
    "dietaryPreference": MappingProxyType({
        "vegetarian": "Vegetarian",
        "non_vegetarian": "Non-Veg",
        "vegan": "Vegan",
        "no_preference": "Any Diet",
    }),
    "smoking": MappingProxyType({
        "non_smoker": "Non-Smoker",
        "occasional_smoker": "Occasional",
        "regular_smoker": "Smoker",
    }),
    "workSchedule": MappingProxyType({
        "regular_office": "Office",
        "remote_work": "Remote",
        "night_shift": "Night Shift",
        "student": "Student",
    }),
    "cleanliness": MappingProxyType({
        "very_clean": "Very Clean",
        "clean_flexible": "Clean",
        "moderately_clean": "Moderate",
        "relaxed": "Relaxed",
    }),
})

# Attributes shown as tags on a listing card, in display order
TAGGED_ATTRIBUTES: Tuple[str, ...] = (
    "sleepSchedule",
    "dietaryPreference",
    "smoking",
    "workSchedule",
    "cleanliness",
)

HIGH_TIER_MIN = 80
MEDIUM_TIER_MIN = 60


@dataclass(frozen=True)
class LifestyleTag:
    """One lifestyle badge on a listing card."""
    key: str
    value: str
    label: str

    def to_dict(self) -> Dict[str, Any]:
        return {"key": self.key, "value": self.value, "label": self.label}


def format_factor_name(key: str) -> str:
    """Display label for an attribute key, e.g. "smoking" -> "Smoking Habits"."""
    return FACTOR_LABELS.get(key, key)


def format_value_label(key: str, value: str) -> str:
    """Short display label for an attribute value, e.g. night_owl -> "Night Owl"."""
    return VALUE_LABELS.get(key, {}).get(value, value)


def profile_tags(profile: ProfileLike) -> List[LifestyleTag]:
    """
    Build the lifestyle tags for a profile.

    Only set attributes among TAGGED_ATTRIBUTES produce a tag.

    Args:
        profile: LifestyleProfile, raw record, or None

    Returns:
        List of LifestyleTag in display order
    """
    profile = as_profile(profile)
    tags = []
    for key in TAGGED_ATTRIBUTES:
        value = profile.get(key)
        if value is None:
            continue
        raw = value.value if isinstance(value, Enum) else str(value)
        tags.append(LifestyleTag(key=key, value=raw, label=format_value_label(key, raw)))
    return tags


def visible_tags(
    tags: Sequence[LifestyleTag],
    max_tags: int = 3
) -> Tuple[List[LifestyleTag], int]:
    """
    Split tags into those shown and the "+N more" remainder.

    Returns:
        Tuple of (shown tags, number of hidden tags)
    """
    shown = list(tags[:max_tags])
    return shown, max(0, len(tags) - max_tags)


def score_tier(score: int) -> str:
    """"high" (>= 80), "medium" (>= 60) or "low"."""
    if score >= HIGH_TIER_MIN:
        return "high"
    if score >= MEDIUM_TIER_MIN:
        return "medium"
    return "low"


def badge_text(score: int) -> str:
    return f"{score}% Match"
