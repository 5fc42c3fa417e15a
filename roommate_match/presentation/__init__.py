"""Display labels, lifestyle tags and score badges."""

from .labels import (
    FACTOR_LABELS,
    VALUE_LABELS,
    LifestyleTag,
    badge_text,
    format_factor_name,
    format_value_label,
    profile_tags,
    score_tier,
    visible_tags,
)

__all__ = [
    "FACTOR_LABELS",
    "VALUE_LABELS",
    "LifestyleTag",
    "badge_text",
    "format_factor_name",
    "format_value_label",
    "profile_tags",
    "score_tier",
    "visible_tags",
]
