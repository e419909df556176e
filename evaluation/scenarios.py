"""Evaluation scenarios covering the core recommendation guarantees."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from evaluation.fixtures import (
    all_practical,
    build_quiz,
    movie_heavy_records,
    niche_spread_records,
    sparse_sports_records,
    strict_boundaries,
)
from models.quiz import QuizResponse


@dataclass
class EvaluationScenario:
    name: str
    description: str
    records: List[Dict[str, Any]]
    quiz: QuizResponse
    expectations: Dict[str, object]
    generator_response: Optional[str] = None
    similar_to: Optional[str] = None
    directions: List[str] = field(default_factory=list)


def _foreign_id_generation() -> str:
    return (
        '{"recommendations": ['
        '{"costume_id": "movie_jacket", "why_it_matches": ["Sharp.", "Fast."], '
        '"shopping_list": ["Jacket", "Jeans", "Boots"]},'
        '{"costume_id": "not_in_catalog", "why_it_matches": ["Sharp.", "Fast."], '
        '"shopping_list": ["Jacket", "Jeans", "Boots"]},'
        '{"costume_id": "movie_suit", "why_it_matches": ["Sharp.", "Fast."], '
        '"shopping_list": ["Suit", "Tie", "Shoes"]}'
        "]}"
    )


SCENARIOS: List[EvaluationScenario] = [
    EvaluationScenario(
        name="movie_only_stylish",
        description="A single restricted universe with enough matches needs no relaxation.",
        records=movie_heavy_records(),
        quiz=build_quiz(goals=("stylish",), effort="one_item", budget="lt_30", universes={"movie"}),
        expectations={"count": 3, "universe": "movie", "relaxations": []},
    ),
    EvaluationScenario(
        name="sparse_sports_relaxed",
        description="Strict boundaries on a thin universe widen era then universe but keep boundaries.",
        records=sparse_sports_records(),
        quiz=build_quiz(
            goals=("funny",),
            universes={"sports"},
            boundaries=strict_boundaries(),
            practical=all_practical(),
        ),
        expectations={"count": 3, "relaxation_prefix": ["era", "universe"], "non_sports_in_pool": True},
    ),
    EvaluationScenario(
        name="weirder_beats_more_recognizable",
        description="Refining weirder surfaces deeper cuts than refining more recognizable.",
        records=niche_spread_records(),
        quiz=build_quiz(niche_target=4),
        expectations={"weirder_niche_at_least_recognizable": True},
        similar_to="anchor_pick",
        directions=["weirder", "more_recognizable"],
    ),
    EvaluationScenario(
        name="generator_foreign_id_falls_back",
        description="A generated pick outside the shortlist forces template copy.",
        records=movie_heavy_records(),
        quiz=build_quiz(goals=("stylish",), effort="one_item", universes={"movie"}),
        expectations={"count": 3, "mode": "fallback", "ids_from_shortlist": True},
        generator_response=_foreign_id_generation(),
    ),
]

__all__ = ["EvaluationScenario", "SCENARIOS"]
