"""
Input and output schema for lifestyle compatibility scoring.

Defines the categorical lifestyle attributes a user fills in on their
profile, the profile record consumed by the scorer, and the result
record returned to callers.

Profile attributes (all optional):
- sleepSchedule, workSchedule, dietaryPreference, smoking,
  drinking, cleanliness, guestsPolicy, petPreference

Records arrive from the storage layer with camelCase keys; snake_case
keys are accepted as well.
"""

import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Dict, Any, List, Tuple, Type, Union

logger = logging.getLogger(__name__)


class SleepSchedule(str, Enum):
    """Sleep schedule options."""
    EARLY_BIRD = "early_bird"
    NIGHT_OWL = "night_owl"
    FLEXIBLE = "flexible"


class WorkSchedule(str, Enum):
    """Work schedule options."""
    REGULAR_OFFICE = "regular_office"
    REMOTE_WORK = "remote_work"
    NIGHT_SHIFT = "night_shift"
    STUDENT = "student"


class DietaryPreference(str, Enum):
    """Dietary preference options."""
    VEGETARIAN = "vegetarian"
    NON_VEGETARIAN = "non_vegetarian"
    VEGAN = "vegan"
    NO_PREFERENCE = "no_preference"


class Smoking(str, Enum):
    """Smoking habit options."""
    NON_SMOKER = "non_smoker"
    OCCASIONAL_SMOKER = "occasional_smoker"
    REGULAR_SMOKER = "regular_smoker"


class Drinking(str, Enum):
    """Drinking habit options."""
    NON_DRINKER = "non_drinker"
    SOCIAL_DRINKER = "social_drinker"
    REGULAR_DRINKER = "regular_drinker"


class Cleanliness(str, Enum):
    """Cleanliness standard options."""
    VERY_CLEAN = "very_clean"
    CLEAN_FLEXIBLE = "clean_flexible"
    MODERATELY_CLEAN = "moderately_clean"
    RELAXED = "relaxed"


class GuestsPolicy(str, Enum):
    """Guest policy options."""
    GUESTS_WELCOME = "guests_welcome"
    GUESTS_WITH_NOTICE = "guests_with_notice"
    OCCASIONAL_GUESTS = "occasional_guests"
    NO_GUESTS = "no_guests"


class PetPreference(str, Enum):
    """Pet preference options."""
    LOVE_PETS = "love_pets"
    OKAY_WITH_PETS = "okay_with_pets"
    NO_PETS = "no_pets"


# Attribute values are either an enum member or, for values outside the
# enumeration accepted in non-strict mode, the raw string.
AttributeValue = Optional[Union[Enum, str]]

# Canonical attribute order: (record key, dataclass field, enum type)
PROFILE_ATTRIBUTES: Tuple[Tuple[str, str, Type[Enum]], ...] = (
    ("sleepSchedule", "sleep_schedule", SleepSchedule),
    ("workSchedule", "work_schedule", WorkSchedule),
    ("dietaryPreference", "dietary_preference", DietaryPreference),
    ("smoking", "smoking", Smoking),
    ("drinking", "drinking", Drinking),
    ("cleanliness", "cleanliness", Cleanliness),
    ("guestsPolicy", "guests_policy", GuestsPolicy),
    ("petPreference", "pet_preference", PetPreference),
)

ATTRIBUTE_KEYS: Tuple[str, ...] = tuple(key for key, _, _ in PROFILE_ATTRIBUTES)


def _is_unset(value: Any) -> bool:
    """None, empty strings and NaN cells all mean "not filled in"."""
    if value is None:
        return True
    if isinstance(value, str) and not value.strip():
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    return False


def coerce_attribute(
    key: str,
    value: Any,
    enum_type: Type[Enum],
    strict: bool = False
) -> AttributeValue:
    """
    Normalize a raw attribute value.

    Args:
        key: Attribute record key (used in messages)
        value: Raw value from the storage layer
        enum_type: Enumeration the value should belong to
        strict: Raise on values outside the enumeration

    Returns:
        Enum member, the raw string for unrecognized values, or None if unset

    Raises:
        ValueError: If strict and the value is not in the enumeration
    """
    if _is_unset(value):
        return None
    if isinstance(value, enum_type):
        return value

    raw = value.value if isinstance(value, Enum) else str(value).strip()
    try:
        return enum_type(raw)
    except ValueError:
        if strict:
            allowed = [m.value for m in enum_type]
            raise ValueError(f"{key} must be one of {allowed}, got {raw!r}")
        logger.warning(f"Unrecognized {key} value {raw!r}; scoring it as an opaque value")
        return raw


@dataclass(frozen=True)
class LifestyleProfile:
    """
    Lifestyle preferences of one user, used for roommate matching.

    Every attribute is optional. Instances are immutable; the scorer
    only ever reads them.

    Attributes:
        sleep_schedule: sleepSchedule
        work_schedule: workSchedule
        dietary_preference: dietaryPreference
        smoking: smoking
        drinking: drinking
        cleanliness: cleanliness
        guests_policy: guestsPolicy
        pet_preference: petPreference
        profile_id: Optional identifier of the owning user
    """
    sleep_schedule: AttributeValue = None
    work_schedule: AttributeValue = None
    dietary_preference: AttributeValue = None
    smoking: AttributeValue = None
    drinking: AttributeValue = None
    cleanliness: AttributeValue = None
    guests_policy: AttributeValue = None
    pet_preference: AttributeValue = None
    profile_id: Optional[str] = None

    def __post_init__(self):
        """Convert string inputs to enums where recognized."""
        for key, attr, enum_type in PROFILE_ATTRIBUTES:
            value = coerce_attribute(key, getattr(self, attr), enum_type)
            object.__setattr__(self, attr, value)

    def get(self, key: str) -> AttributeValue:
        """Return an attribute by its record key (e.g. "sleepSchedule")."""
        for record_key, attr, _ in PROFILE_ATTRIBUTES:
            if record_key == key:
                return getattr(self, attr)
        raise KeyError(key)

    def attributes(self) -> List[Tuple[str, AttributeValue]]:
        """Return (record key, value) pairs in canonical order."""
        return [(key, getattr(self, attr)) for key, attr, _ in PROFILE_ATTRIBUTES]

    def is_empty(self) -> bool:
        return all(value is None for _, value in self.attributes())

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary with camelCase keys and string values."""
        result: Dict[str, Any] = {}
        if self.profile_id is not None:
            result["id"] = self.profile_id
        for key, value in self.attributes():
            result[key] = value.value if isinstance(value, Enum) else value
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any], strict: bool = False) -> "LifestyleProfile":
        """
        Create from a storage record.

        Args:
            data: Record with camelCase (or snake_case) attribute keys
            strict: Reject values outside the enumerations

        Returns:
            LifestyleProfile instance

        Raises:
            ValueError: If strict and an attribute value is not recognized
        """
        kwargs: Dict[str, Any] = {}
        for key, attr, enum_type in PROFILE_ATTRIBUTES:
            raw = data.get(key, data.get(attr))
            if strict:
                coerce_attribute(key, raw, enum_type, strict=True)
            kwargs[attr] = raw

        profile_id = None
        for id_key in ("userId", "user_id", "id", "profile_id"):
            if not _is_unset(data.get(id_key)):
                profile_id = str(data[id_key])
                break

        return cls(profile_id=profile_id, **kwargs)


ProfileLike = Union[LifestyleProfile, Dict[str, Any], None]


def as_profile(profile: ProfileLike) -> LifestyleProfile:
    """
    Accept a LifestyleProfile, a raw record, or None (empty profile).

    Raises:
        TypeError: For any other input type
    """
    if profile is None:
        return LifestyleProfile()
    if isinstance(profile, LifestyleProfile):
        return profile
    if isinstance(profile, Mapping):
        return LifestyleProfile.from_dict(dict(profile))
    raise TypeError(f"Expected LifestyleProfile or mapping, got {type(profile).__name__}")


@dataclass
class CompatibilityResult:
    """
    Result of compatibility scoring.

    Attributes:
        score: Overall compatibility [0, 100]
        factors: Per-attribute sub-scores [0, 1], keyed by record key
        strengths: Display labels of attributes with sub-score >= 0.8
        concerns: Display labels of attributes with sub-score <= 0.4
        unset_attributes: Record keys unset on either side
        policy: Unset-attribute policy used for the score
    """
    score: int
    factors: Dict[str, float]
    strengths: List[str] = field(default_factory=list)
    concerns: List[str] = field(default_factory=list)
    unset_attributes: List[str] = field(default_factory=list)
    policy: str = "neutral"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "score": int(self.score),
            "factors": {k: float(v) for k, v in self.factors.items()},
            "strengths": list(self.strengths),
            "concerns": list(self.concerns),
            "unset_attributes": list(self.unset_attributes),
            "policy": self.policy,
        }
