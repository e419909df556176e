"""Builders for catalog records and quiz answers shared by scenarios and tests."""

from __future__ import annotations

import copy
from typing import Any, Dict, List

from models.costume import Costume, from_raw_metadata
from models.quiz import Boundaries, PracticalPreferences, QuizResponse
from tools.catalog_store import CostumeCatalog, build_catalog

_BASE_RECORD: Dict[str, Any] = {
    "id": "base_costume",
    "name": "Base Costume",
    "display_title": "Base Costume (Fixture)",
    "universe": "movie",
    "era": "current",
    "vibes": {"funny": 1, "sexy": 1, "stylish": 1, "clever": 1, "low_effort_high_payoff": 1},
    "niche_score": 4,
    "gender_presentation": "flexible",
    "constraints": {
        "effort": "few_fast",
        "budget": "lt_30",
        "comfort": "high",
        "bar_friendly": True,
        "pockets_likely": True,
    },
    "requirements": {
        "anchor_item": "Statement jacket",
        "items": ["Statement jacket", "Dark jeans", "Boots"],
        "makeup_level": "none",
        "wig_required": False,
        "face_paint_required": False,
    },
    "safety": {},
    "similarity": {"archetype_tags": ["hero"], "vibe_tags": ["classic"]},
    "images": {"primary": {"kind": "manual", "url": "/costumes/base.jpg"}},
}


def _merge(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def costume_record(costume_id: str, **overrides: Any) -> Dict[str, Any]:
    """Return a valid raw record; nested dict overrides merge into the defaults."""

    record = _merge(_BASE_RECORD, overrides)
    record["id"] = costume_id
    if "name" not in overrides:
        record["name"] = costume_id
    if "display_title" not in overrides:
        record["display_title"] = costume_id.replace("_", " ").title()
    return record


def build_costume(costume_id: str, **overrides: Any) -> Costume:
    return from_raw_metadata(costume_record(costume_id, **overrides))


def build_quiz(**overrides: Any) -> QuizResponse:
    values: Dict[str, Any] = {"goals": ("stylish",), "effort": "few_fast"}
    values.update(overrides)
    return QuizResponse(**values)


def strict_boundaries() -> Boundaries:
    return Boundaries(
        no_skin_tone_change=True,
        avoid_culture_specific=True,
        avoid_religious=True,
        avoid_political=True,
        avoid_wigs=True,
        avoid_controversial=True,
    )


def all_practical() -> PracticalPreferences:
    return PracticalPreferences(
        must_be_comfortable=True, must_survive_crowded_bar=True, needs_pockets=True, indoor_only=True
    )


def movie_heavy_records() -> List[Dict[str, Any]]:
    """Six movie costumes with varied effort and budget plus a handful of others."""

    records = [
        costume_record("movie_jacket", vibes={"stylish": 3}, constraints={"effort": "one_item"}),
        costume_record("movie_suit", vibes={"stylish": 2}, constraints={"budget": "30_75"}),
        costume_record(
            "movie_gown",
            vibes={"stylish": 3, "sexy": 2},
            constraints={"effort": "some_work", "budget": "75_150"},
            similarity={"archetype_tags": ["diva"]},
        ),
        costume_record("movie_robe", vibes={"funny": 3}, funny_extreme=True, similarity={"archetype_tags": ["slacker"]}),
        costume_record("movie_cape", constraints={"effort": "suffer_for_bit"}, niche_score=6),
        costume_record("movie_wig", requirements={"wig_required": True}, niche_score=2),
        costume_record("tv_blazer", universe="tv", vibes={"stylish": 3}),
        costume_record("music_tour_tee", universe="music", vibes={"stylish": 2}),
        costume_record("internet_meme", universe="internet", vibes={"funny": 3}, funny_extreme=True),
    ]
    return records


def sparse_sports_records() -> List[Dict[str, Any]]:
    """Only two sports costumes survive strict boundaries and every practical flag."""

    return [
        costume_record("sports_jersey", universe="sports", era="90s"),
        costume_record("sports_tracksuit", universe="sports", era="70s_80s"),
        costume_record("sports_mascot", universe="sports", constraints={"comfort": "low"}),
        costume_record("sports_wig", universe="sports", requirements={"wig_required": True}),
        costume_record("movie_hero", universe="movie"),
        costume_record("movie_politician", universe="movie", safety={"political_figure": True}),
        costume_record("tv_anchor", universe="tv", niche_score=6),
        costume_record("tv_priest", universe="tv", safety={"religious_attire": True}),
        costume_record("music_idol", universe="music", niche_score=2),
        costume_record("music_festival", universe="music", safety={"culture_specific": True}),
        costume_record("internet_cat", universe="internet", niche_score=5),
        costume_record("internet_hot_take", universe="internet", safety={"controversial": True}),
    ]


def niche_spread_records() -> List[Dict[str, Any]]:
    """Costumes spanning the whole niche scale, all sharing the anchor's tags."""

    records = [costume_record("anchor_pick", niche_score=4)]
    for index, niche in enumerate([1, 1, 2, 2, 3, 5, 6, 6, 7, 7]):
        records.append(costume_record(f"niche_{index}_{niche}", niche_score=niche))
    return records


def catalog_from(records: List[Dict[str, Any]], version: str = "test") -> CostumeCatalog:
    return build_catalog(records, version)


__all__ = [
    "all_practical",
    "build_costume",
    "build_quiz",
    "catalog_from",
    "costume_record",
    "movie_heavy_records",
    "niche_spread_records",
    "sparse_sports_records",
    "strict_boundaries",
]
