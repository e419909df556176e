"""Canonical taxonomy definitions for costumes and quiz answers.

This module centralises the closed vocabularies shared by the catalog, the
quiz and the recommendation engine. Ordered tiers are kept as lists so that
"one tier up/down" comparisons stay consistent across filtering, scoring and
relaxation.
"""

from typing import Iterable, List, Optional

UNIVERSES = ["movie", "tv", "music", "sports", "internet"]
ERAS = ["70s_80s", "90s", "2000s", "current", "any"]
ANY_ERA = "any"

VIBES = ["funny", "sexy", "stylish", "clever", "low_effort_high_payoff"]
VIBE_MIN, VIBE_MAX = 0, 3

NICHE_MIN, NICHE_MAX = 1, 7
RESEMBLANCE_MIN, RESEMBLANCE_MAX = 1, 7

# Ordered from least to most demanding.
EFFORT_TIERS = ["one_item", "few_fast", "some_work", "suffer_for_bit"]
BUDGET_TIERS = ["lt_30", "30_75", "75_150", "dont_care"]
BUDGET_ANY = "dont_care"

COMFORT_LEVELS = ["high", "medium", "low"]
MAKEUP_LEVELS = ["none", "light", "heavy"]
PROPS_LEVELS = ["none", "optional", "required"]

GENDER_PRESENTATIONS = ["masc", "femme", "androgynous", "flexible"]
GENDER_PREFS = ["match", "dont_match", "dont_care"]
USER_GENDERS = ["male", "female", "other"]
USER_GENDER_PRESENTATION = {"male": "masc", "female": "femme", "other": "androgynous"}

HAIR_LENGTHS = ["short", "medium", "long", "unknown"]
HAIR_COLORS = ["black", "brown", "blonde", "red", "gray", "white", "other", "unknown"]
FACE_SHAPES = ["oval", "round", "square", "heart", "oblong", "diamond", "rectangle", "unknown"]
SKIN_TONES = ["very_light", "light", "medium", "olive", "tan", "brown", "dark", "unknown"]
AGE_RANGES = ["teen", "20s", "30s", "40s", "50s", "60plus", "unknown"]
BUILDS = ["slim", "athletic", "average", "muscular", "large", "unknown"]
CONFIDENCE_LEVELS = ["high", "medium", "low"]

IMAGE_KINDS = ["tmdb", "wikimedia", "manual"]

DIRECTIONS = ["more_recognizable", "weirder", "easier", "hotter", "stylisher"]

DIFFICULTY_BY_EFFORT = {
    "one_item": "Easy",
    "few_fast": "Easy",
    "some_work": "Medium",
    "suffer_for_bit": "Hard",
}


def _normalize_key(value: str) -> str:
    """Normalise a free-form string into a taxonomy key."""

    return str(value).strip().lower().replace(" ", "_")


def validate_choice(value: str, allowed: List[str], field_name: str) -> str:
    """Validate that ``value`` is part of a closed vocabulary.

    Raises a :class:`ValueError` naming the field when it is not.
    """

    if value not in allowed:
        key = _normalize_key(value)
        if key not in allowed:
            raise ValueError(f"Unsupported {field_name} '{value}'. Allowed: {allowed}")
        return key
    return value


def validate_optional_choice(value: Optional[str], allowed: List[str], field_name: str) -> Optional[str]:
    if value is None:
        return None
    return validate_choice(value, allowed, field_name)


def validate_range(value: int, low: int, high: int, field_name: str) -> int:
    """Validate an ordinal integer within an inclusive range."""

    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{field_name} must be an integer, got {value!r}")
    if not low <= value <= high:
        raise ValueError(f"{field_name} must be between {low} and {high}, got {value}")
    return value


def tier_index(value: str, tiers: List[str]) -> int:
    return tiers.index(value)


def step_tier(value: str, tiers: List[str], steps: int) -> str:
    """Move ``steps`` positions along an ordered tier list, clamped at both ends."""

    index = max(0, min(len(tiers) - 1, tier_index(value, tiers) + steps))
    return tiers[index]


def normalise_tags(values: Iterable[str]) -> List[str]:
    """Normalise and deduplicate free-form similarity tags, preserving order."""

    normalised = []
    seen = set()
    for value in values:
        key = str(value).strip().lower()
        if key and key not in seen:
            normalised.append(key)
            seen.add(key)
    return normalised


__all__ = [
    "UNIVERSES",
    "ERAS",
    "ANY_ERA",
    "VIBES",
    "NICHE_MIN",
    "NICHE_MAX",
    "EFFORT_TIERS",
    "BUDGET_TIERS",
    "BUDGET_ANY",
    "COMFORT_LEVELS",
    "MAKEUP_LEVELS",
    "PROPS_LEVELS",
    "GENDER_PRESENTATIONS",
    "GENDER_PREFS",
    "USER_GENDERS",
    "DIRECTIONS",
    "DIFFICULTY_BY_EFFORT",
    "validate_choice",
    "validate_optional_choice",
    "validate_range",
    "tier_index",
    "step_tier",
    "normalise_tags",
]
