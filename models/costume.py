"""Costume catalog data model and helpers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from models.taxonomy import (
    BUDGET_TIERS,
    COMFORT_LEVELS,
    EFFORT_TIERS,
    ERAS,
    GENDER_PRESENTATIONS,
    MAKEUP_LEVELS,
    NICHE_MAX,
    NICHE_MIN,
    PROPS_LEVELS,
    UNIVERSES,
    VIBE_MAX,
    VIBE_MIN,
    VIBES,
    normalise_tags,
    validate_choice,
    validate_range,
)

MIN_REQUIRED_ITEMS = 3
MAX_REQUIRED_ITEMS = 10


def _ensure_list(value: Any) -> List[Any]:
    """Coerce a scalar or iterable into a list."""

    if value is None:
        return []
    if isinstance(value, (list, tuple, set)):
        return list(value)
    return [value]


@dataclass(frozen=True)
class VibeProfile:
    """Intensity (0-3) of each vibe a costume delivers."""

    funny: int = 0
    sexy: int = 0
    stylish: int = 0
    clever: int = 0
    low_effort_high_payoff: int = 0

    def __post_init__(self) -> None:
        for vibe in VIBES:
            validate_range(getattr(self, vibe), VIBE_MIN, VIBE_MAX, f"vibes.{vibe}")

    def intensity(self, vibe: str) -> int:
        return getattr(self, validate_choice(vibe, VIBES, "vibe"))

    def strong_vibes(self, threshold: int = 2) -> List[str]:
        return [vibe for vibe in VIBES if getattr(self, vibe) >= threshold]


@dataclass(frozen=True)
class PracticalConstraints:
    effort: str
    budget: str
    comfort: str
    bar_friendly: bool = False
    pockets_likely: bool = False

    def __post_init__(self) -> None:
        validate_choice(self.effort, EFFORT_TIERS, "effort")
        validate_choice(self.budget, BUDGET_TIERS, "budget")
        validate_choice(self.comfort, COMFORT_LEVELS, "comfort")


@dataclass(frozen=True)
class Requirements:
    anchor_item: str
    items: Tuple[str, ...]
    makeup_level: str = "none"
    wig_required: bool = False
    face_paint_required: bool = False
    props_level: str = "none"

    def __post_init__(self) -> None:
        if not self.anchor_item.strip():
            raise ValueError("requirements.anchor_item must not be empty")
        if not MIN_REQUIRED_ITEMS <= len(self.items) <= MAX_REQUIRED_ITEMS:
            raise ValueError(
                f"requirements.items must hold {MIN_REQUIRED_ITEMS}-{MAX_REQUIRED_ITEMS} entries, "
                f"got {len(self.items)}"
            )
        validate_choice(self.makeup_level, MAKEUP_LEVELS, "makeup_level")
        validate_choice(self.props_level, PROPS_LEVELS, "props_level")


@dataclass(frozen=True)
class SafetyFlags:
    """Content flags gating the user's boundary toggles.

    ``skin_tone_change_implied`` should only ever be true for manual-override
    entries; the catalog is authored so that it never is.
    """

    culture_specific: bool = False
    religious_attire: bool = False
    political_figure: bool = False
    controversial: bool = False
    skin_tone_change_implied: bool = False


@dataclass(frozen=True)
class Similarity:
    archetype_tags: Tuple[str, ...] = ()
    vibe_tags: Tuple[str, ...] = ()

    def all_tags(self) -> List[str]:
        return list(self.archetype_tags) + list(self.vibe_tags)


@dataclass(frozen=True)
class TmdbImage:
    tmdb_id: int
    image_path: str
    image_type: str = "poster"
    media_type: str = "movie"
    kind: str = field(default="tmdb", init=False)


@dataclass(frozen=True)
class WikimediaImage:
    file_title: str
    page_url: Optional[str] = None
    kind: str = field(default="wikimedia", init=False)


@dataclass(frozen=True)
class ManualImage:
    url: str
    attribution: Optional[str] = None
    kind: str = field(default="manual", init=False)

    def __post_init__(self) -> None:
        if not self.url.startswith(("/", "http://", "https://")):
            raise ValueError(f"Manual image url must be absolute or root-relative, got '{self.url}'")


ImageSource = Union[TmdbImage, WikimediaImage, ManualImage]


@dataclass(frozen=True)
class CostumeImages:
    primary: ImageSource
    alternatives: Tuple[ImageSource, ...] = ()

    def in_priority_order(self) -> List[ImageSource]:
        return [self.primary, *self.alternatives]


@dataclass(frozen=True)
class Costume:
    """One catalog entry. Immutable once loaded."""

    costume_id: str
    name: str
    display_title: str
    universe: str
    era: str
    vibes: VibeProfile
    niche_score: int
    gender_presentation: str
    constraints: PracticalConstraints
    requirements: Requirements
    safety: SafetyFlags
    similarity: Similarity
    images: CostumeImages
    requires_body_paint_or_full_face_paint: bool = False
    funny_extreme: bool = False
    source_title: Optional[str] = None
    notes: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.costume_id.strip():
            raise ValueError("costume_id must not be empty")
        validate_choice(self.universe, UNIVERSES, "universe")
        validate_choice(self.era, ERAS, "era")
        validate_range(self.niche_score, NICHE_MIN, NICHE_MAX, "niche_score")
        validate_choice(self.gender_presentation, GENDER_PRESENTATIONS, "gender_presentation")

    def similarity_tags(self) -> List[str]:
        return self.similarity.all_tags()

    def gear_text(self) -> List[str]:
        """Lower-cased anchor, items and archetype tags used for keyword matching."""

        return [
            self.requirements.anchor_item.lower(),
            *(item.lower() for item in self.requirements.items),
            *(tag.lower() for tag in self.similarity.archetype_tags),
        ]


def _image_from_raw(raw: Dict[str, Any]) -> ImageSource:
    kind = raw.get("kind")
    if kind == "tmdb":
        return TmdbImage(
            tmdb_id=int(raw["tmdb_id"]),
            image_path=str(raw["image_path"]),
            image_type=str(raw.get("image_type", "poster")),
            media_type=str(raw.get("media_type", "movie")),
        )
    if kind == "wikimedia":
        return WikimediaImage(file_title=str(raw["file_title"]), page_url=raw.get("page_url"))
    if kind == "manual":
        return ManualImage(url=str(raw["url"]), attribution=raw.get("attribution"))
    raise ValueError(f"Unsupported image kind '{kind}'")


def _strings(values: Iterable[Any]) -> Tuple[str, ...]:
    return tuple(str(value).strip() for value in values if str(value).strip())


def from_raw_metadata(metadata: Dict[str, Any]) -> Costume:
    """Factory to build a :class:`Costume` from a loose catalog record."""

    required_fields = [
        "id",
        "name",
        "display_title",
        "universe",
        "era",
        "vibes",
        "niche_score",
        "gender_presentation",
        "constraints",
        "requirements",
        "similarity",
        "images",
    ]
    missing = [name for name in required_fields if metadata.get(name) in (None, "")]
    if missing:
        raise ValueError(f"Missing required fields for Costume: {missing}")

    vibes = metadata["vibes"]
    constraints = metadata["constraints"]
    requirements = metadata["requirements"]
    safety = metadata.get("safety") or {}
    similarity = metadata["similarity"]
    images = metadata["images"]

    return Costume(
        costume_id=str(metadata["id"]),
        name=str(metadata["name"]),
        display_title=str(metadata["display_title"]),
        universe=str(metadata["universe"]),
        era=str(metadata["era"]),
        vibes=VibeProfile(**{vibe: int(vibes.get(vibe, 0)) for vibe in VIBES}),
        niche_score=metadata["niche_score"],
        gender_presentation=str(metadata["gender_presentation"]),
        constraints=PracticalConstraints(
            effort=str(constraints["effort"]),
            budget=str(constraints["budget"]),
            comfort=str(constraints["comfort"]),
            bar_friendly=bool(constraints.get("bar_friendly", False)),
            pockets_likely=bool(constraints.get("pockets_likely", False)),
        ),
        requirements=Requirements(
            anchor_item=str(requirements["anchor_item"]),
            items=_strings(_ensure_list(requirements.get("items"))),
            makeup_level=str(requirements.get("makeup_level", "none")),
            wig_required=bool(requirements.get("wig_required", False)),
            face_paint_required=bool(requirements.get("face_paint_required", False)),
            props_level=str(requirements.get("props_level", "none")),
        ),
        safety=SafetyFlags(
            culture_specific=bool(safety.get("culture_specific", False)),
            religious_attire=bool(safety.get("religious_attire", False)),
            political_figure=bool(safety.get("political_figure", False)),
            controversial=bool(safety.get("controversial", False)),
            skin_tone_change_implied=bool(safety.get("skin_tone_change_implied", False)),
        ),
        similarity=Similarity(
            archetype_tags=tuple(normalise_tags(_ensure_list(similarity.get("archetype_tags")))),
            vibe_tags=tuple(normalise_tags(_ensure_list(similarity.get("vibe_tags")))),
        ),
        images=CostumeImages(
            primary=_image_from_raw(images["primary"]),
            alternatives=tuple(_image_from_raw(alt) for alt in _ensure_list(images.get("alternatives"))),
        ),
        requires_body_paint_or_full_face_paint=bool(
            metadata.get("requires_body_paint_or_full_face_paint", False)
        ),
        funny_extreme=bool(metadata.get("funny_extreme", False)),
        source_title=metadata.get("source_title"),
        notes=metadata.get("notes"),
    )


__all__ = [
    "Costume",
    "CostumeImages",
    "ImageSource",
    "ManualImage",
    "PracticalConstraints",
    "Requirements",
    "SafetyFlags",
    "Similarity",
    "TmdbImage",
    "VibeProfile",
    "WikimediaImage",
    "from_raw_metadata",
]
