"""Quiz response (recommendation request) data model."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, Optional, Tuple

from models.taxonomy import (
    AGE_RANGES,
    BUDGET_TIERS,
    BUILDS,
    CONFIDENCE_LEVELS,
    EFFORT_TIERS,
    ERAS,
    FACE_SHAPES,
    GENDER_PREFS,
    HAIR_COLORS,
    HAIR_LENGTHS,
    NICHE_MAX,
    NICHE_MIN,
    RESEMBLANCE_MAX,
    RESEMBLANCE_MIN,
    SKIN_TONES,
    UNIVERSES,
    USER_GENDERS,
    VIBES,
    validate_choice,
    validate_optional_choice,
    validate_range,
)


def normalise_universes(values: Optional[Iterable[str]]) -> Optional[FrozenSet[str]]:
    """Collapse a universe selection into the explicit restricted/unrestricted form.

    An empty selection and a selection of every universe both mean "surprise
    me" and become ``None``. Anything else is a restricted frozenset.
    """

    if values is None:
        return None
    selected = frozenset(validate_choice(value, UNIVERSES, "universe") for value in values)
    if not selected or len(selected) >= len(UNIVERSES):
        return None
    return selected


@dataclass(frozen=True)
class Boundaries:
    """Hard limits the user never wants crossed. Relaxation never touches these."""

    no_skin_tone_change: bool = True
    avoid_culture_specific: bool = False
    avoid_religious: bool = False
    avoid_political: bool = False
    avoid_face_paint: bool = False
    avoid_wigs: bool = False
    avoid_controversial: bool = False


@dataclass(frozen=True)
class PracticalPreferences:
    must_be_comfortable: bool = False
    must_survive_crowded_bar: bool = False
    needs_pockets: bool = False
    indoor_only: bool = False


@dataclass(frozen=True)
class ClosetBoosters:
    has_leather_jacket: bool = False
    has_sunglasses: bool = False
    has_suit: bool = False
    has_boots: bool = False
    has_dress: bool = False
    has_blazer: bool = False

    def owned(self) -> Tuple[str, ...]:
        return tuple(name for name, value in vars(self).items() if value)


@dataclass(frozen=True)
class CelebrityMatch:
    name: str
    confidence: str = "medium"
    notes: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "confidence", validate_choice(self.confidence, CONFIDENCE_LEVELS, "celebrity confidence")
        )


@dataclass(frozen=True)
class PhotoCues:
    """Visual cues derived from an optional selfie. Used for scoring only."""

    glasses_likely: bool = False
    facial_hair_likely: bool = False
    hair_length: str = "unknown"
    hair_color: str = "unknown"
    hair_style: Optional[str] = None
    face_shape: str = "unknown"
    skin_tone: str = "unknown"
    features: Tuple[str, ...] = ()
    age_range: str = "unknown"
    build: Optional[str] = None
    celebrity_matches: Tuple[CelebrityMatch, ...] = ()
    vibe_keywords: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        for name, allowed in (
            ("hair_length", HAIR_LENGTHS),
            ("hair_color", HAIR_COLORS),
            ("face_shape", FACE_SHAPES),
            ("skin_tone", SKIN_TONES),
            ("age_range", AGE_RANGES),
        ):
            object.__setattr__(self, name, validate_choice(getattr(self, name), allowed, name))
        object.__setattr__(self, "build", validate_optional_choice(self.build, BUILDS, "build"))


@dataclass(frozen=True)
class QuizResponse:
    """Structured answers for one recommendation call.

    Never mutated: relaxation and refinement derive new copies with
    :func:`dataclasses.replace`.
    """

    goals: Tuple[str, ...]
    effort: str
    niche_target: int = 4
    resemblance_target: int = 4
    budget: str = "dont_care"
    era: str = "any"
    universes: Optional[FrozenSet[str]] = None
    gender_pref: str = "dont_care"
    user_gender: Optional[str] = None
    boundaries: Boundaries = field(default_factory=Boundaries)
    practical: PracticalPreferences = field(default_factory=PracticalPreferences)
    closet_boosters: Optional[ClosetBoosters] = None
    photo_cues: Optional[PhotoCues] = None
    notes: Optional[str] = None

    def __post_init__(self) -> None:
        goals = tuple(dict.fromkeys(validate_choice(goal, VIBES, "goal") for goal in self.goals))
        if not 1 <= len(goals) <= 2:
            raise ValueError(f"Select one or two goals, got {len(goals)}")
        object.__setattr__(self, "goals", goals)
        object.__setattr__(self, "universes", normalise_universes(self.universes))

        for name, allowed in (
            ("effort", EFFORT_TIERS),
            ("budget", BUDGET_TIERS),
            ("era", ERAS),
            ("gender_pref", GENDER_PREFS),
        ):
            object.__setattr__(self, name, validate_choice(getattr(self, name), allowed, name))
        object.__setattr__(
            self, "user_gender", validate_optional_choice(self.user_gender, USER_GENDERS, "user_gender")
        )
        validate_range(self.niche_target, NICHE_MIN, NICHE_MAX, "niche_target")
        validate_range(self.resemblance_target, RESEMBLANCE_MIN, RESEMBLANCE_MAX, "resemblance_target")

    @property
    def universe_restricted(self) -> bool:
        return self.universes is not None

    @property
    def primary_goal(self) -> str:
        return self.goals[0]


__all__ = [
    "Boundaries",
    "CelebrityMatch",
    "ClosetBoosters",
    "PhotoCues",
    "PracticalPreferences",
    "QuizResponse",
    "normalise_universes",
]
