"""Direction adjustments and similarity boosting for "more like this" refinement."""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable, List, Optional, Sequence

from logic.scoring import ScoredCostume
from models.costume import Costume
from models.quiz import QuizResponse
from models.taxonomy import DIRECTIONS, EFFORT_TIERS, NICHE_MAX, NICHE_MIN, step_tier, validate_choice

SIMILARITY_TAG_BOOST = 0.5
NICHE_STEP = 2


def _ensure_goal(goals: Sequence[str], goal: str) -> tuple:
    if goal in goals:
        return tuple(goals)
    # Keep the first pick and replace the second slot.
    return (goals[0], goal)


def apply_direction(quiz: QuizResponse, direction: Optional[str]) -> QuizResponse:
    """Return a copy of ``quiz`` nudged in the named direction.

    ``None`` passes the request through unchanged; unknown directions raise
    :class:`ValueError`.
    """

    if direction is None:
        return quiz
    direction = validate_choice(direction, DIRECTIONS, "direction")

    if direction == "more_recognizable":
        return replace(quiz, niche_target=max(NICHE_MIN, quiz.niche_target - NICHE_STEP))
    if direction == "weirder":
        return replace(quiz, niche_target=min(NICHE_MAX, quiz.niche_target + NICHE_STEP))
    if direction == "easier":
        return replace(quiz, effort=step_tier(quiz.effort, EFFORT_TIERS, -1))
    if direction == "hotter":
        return replace(quiz, goals=_ensure_goal(quiz.goals, "sexy"))
    return replace(quiz, goals=_ensure_goal(quiz.goals, "stylish"))


def exclude_costumes(costumes: Iterable[Costume], exclude_ids: Iterable[str]) -> List[Costume]:
    excluded = set(exclude_ids)
    return [costume for costume in costumes if costume.costume_id not in excluded]


def boost_by_similarity(scored: Sequence[ScoredCostume], selected: Costume) -> List[ScoredCostume]:
    """Add a small bonus per tag shared with ``selected`` and re-sort stably."""

    selected_tags = set(selected.similarity_tags())
    boosted = []
    for entry in scored:
        shared = sum(1 for tag in entry.costume.similarity_tags() if tag in selected_tags)
        bonus = shared * SIMILARITY_TAG_BOOST
        sub_scores = dict(entry.sub_scores, similarity=bonus)
        boosted.append(replace(entry, score=entry.score + bonus, sub_scores=sub_scores))
    boosted.sort(key=lambda entry: -entry.score)
    return boosted


__all__ = [
    "SIMILARITY_TAG_BOOST",
    "apply_direction",
    "boost_by_similarity",
    "exclude_costumes",
]
