"""Progressive constraint relaxation for over-constrained requests."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import List, Optional, Sequence, Tuple

from costume_app.logging_config import get_logger, log_event
from logic.filtering import apply_hard_filters
from models.costume import Costume
from models.quiz import QuizResponse
from models.taxonomy import ANY_ERA, BUDGET_TIERS, EFFORT_TIERS, step_tier

RELAXATION_LADDER: Tuple[str, ...] = ("era", "universe", "budget", "effort")
MIN_CANDIDATES = 5

STEP_LABELS = {"era": "Era", "universe": "Universe", "budget": "Budget", "effort": "Effort"}

logger = get_logger(__name__)


@dataclass(frozen=True)
class RelaxationResult:
    costumes: List[Costume]
    relaxations_applied: List[str]
    request: QuizResponse
    pool_sizes: List[int]


def relax_quiz(quiz: QuizResponse, steps: Sequence[str]) -> QuizResponse:
    """Derive a widened copy of ``quiz``. Boundaries are never touched."""

    changes = {}
    for step in steps:
        if step == "era":
            changes["era"] = ANY_ERA
        elif step == "universe":
            changes["universes"] = None
        elif step == "budget":
            changes["budget"] = step_tier(quiz.budget, BUDGET_TIERS, 1)
        elif step == "effort":
            changes["effort"] = step_tier(quiz.effort, EFFORT_TIERS, 1)
        else:
            raise ValueError(f"Unknown relaxation step '{step}'")
    return replace(quiz, **changes) if changes else quiz


def apply_relaxation_ladder(
    catalog: Sequence[Costume], quiz: QuizResponse, min_results: int = MIN_CANDIDATES
) -> RelaxationResult:
    """Filter, widening one rung at a time until the pool reaches ``min_results``."""

    costumes = list(catalog)
    filtered = apply_hard_filters(costumes, quiz)
    pool_sizes = [len(filtered)]
    if len(filtered) >= min_results:
        return RelaxationResult(filtered, [], quiz, pool_sizes)

    applied: List[str] = []
    relaxed = quiz
    for step in RELAXATION_LADDER:
        applied.append(step)
        relaxed = relax_quiz(quiz, applied)
        filtered = apply_hard_filters(costumes, relaxed)
        pool_sizes.append(len(filtered))
        if len(filtered) >= min_results:
            log_event(
                logger,
                logging.INFO,
                "relaxation_applied",
                relaxations=list(applied),
                pool_sizes=pool_sizes,
            )
            return RelaxationResult(filtered, list(applied), relaxed, pool_sizes)

    log_event(
        logger,
        logging.WARNING,
        "relaxation_exhausted",
        relaxations=list(applied),
        pool_sizes=pool_sizes,
        min_results=min_results,
    )
    return RelaxationResult(filtered, list(applied), relaxed, pool_sizes)


def format_relaxation_message(relaxations: Sequence[str]) -> Optional[str]:
    if not relaxations:
        return None
    widened = " + ".join(STEP_LABELS.get(step, step) for step in relaxations)
    return f"You made this *hard* (respect). We widened: {widened}."


__all__ = [
    "MIN_CANDIDATES",
    "RELAXATION_LADDER",
    "RelaxationResult",
    "apply_relaxation_ladder",
    "format_relaxation_message",
    "relax_quiz",
]
