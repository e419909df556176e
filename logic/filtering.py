"""Deterministic hard-constraint filters for boundaries, universes and practical needs."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from models.costume import Costume
from models.quiz import QuizResponse


@dataclass(frozen=True)
class FilteringResult:
    """Captures the outcome of a single filtering step."""

    items: List[Costume]
    removed: Dict[str, str]
    debug: Dict[str, object]


def _boundary_violation(costume: Costume, quiz: QuizResponse) -> Optional[str]:
    boundaries = quiz.boundaries
    safety = costume.safety
    if boundaries.avoid_culture_specific and safety.culture_specific:
        return "culture-specific costume"
    if boundaries.avoid_religious and safety.religious_attire:
        return "religious attire"
    if boundaries.avoid_political and safety.political_figure:
        return "political figure"
    if boundaries.avoid_controversial and safety.controversial:
        return "controversial"
    if boundaries.no_skin_tone_change and safety.skin_tone_change_implied:
        return "implies a skin tone change"
    if boundaries.avoid_wigs and costume.requirements.wig_required:
        return "wig required"
    # One toggle covers both face paint and body/full-face paint.
    if boundaries.avoid_face_paint and (
        costume.requirements.face_paint_required or costume.requires_body_paint_or_full_face_paint
    ):
        return "face or body paint required"
    return None


def _universe_violation(costume: Costume, quiz: QuizResponse) -> Optional[str]:
    if quiz.universes is not None and costume.universe not in quiz.universes:
        return f"universe {costume.universe} not selected"
    return None


def _practical_violation(costume: Costume, quiz: QuizResponse) -> Optional[str]:
    practical = quiz.practical
    constraints = costume.constraints
    if practical.must_survive_crowded_bar and not constraints.bar_friendly:
        return "not bar friendly"
    if practical.needs_pockets and not constraints.pockets_likely:
        return "no pockets"
    if practical.must_be_comfortable and constraints.comfort == "low":
        return "low comfort"
    return None


def _filter(
    costumes: List[Costume],
    quiz: QuizResponse,
    check: Callable[[Costume, QuizResponse], Optional[str]],
) -> FilteringResult:
    removed: Dict[str, str] = {}
    kept: List[Costume] = []
    for costume in costumes:
        reason = check(costume, quiz)
        if reason:
            removed[costume.costume_id] = reason
        else:
            kept.append(costume)
    debug = {
        "input_count": len(costumes),
        "kept_count": len(kept),
        "removed_count": len(removed),
    }
    return FilteringResult(items=kept, removed=removed, debug=debug)


def filter_by_boundaries(costumes: List[Costume], quiz: QuizResponse) -> FilteringResult:
    """Drop costumes that cross any active safety or requirement boundary."""

    result = _filter(costumes, quiz, _boundary_violation)
    active = [name for name, value in vars(quiz.boundaries).items() if value]
    result.debug["active_boundaries"] = active
    return result


def filter_by_universe(costumes: List[Costume], quiz: QuizResponse) -> FilteringResult:
    """Keep only the selected universes; unrestricted selections keep everything."""

    result = _filter(costumes, quiz, _universe_violation)
    result.debug["universes"] = sorted(quiz.universes) if quiz.universes is not None else "any"
    return result


def filter_by_practical(costumes: List[Costume], quiz: QuizResponse) -> FilteringResult:
    """Enforce the crowd, pocket and comfort survival requirements."""

    result = _filter(costumes, quiz, _practical_violation)
    result.debug["practical"] = [name for name, value in vars(quiz.practical).items() if value]
    return result


def run_hard_filters(costumes: List[Costume], quiz: QuizResponse) -> FilteringResult:
    """Apply every hard filter in sequence and merge the diagnostics."""

    reasons: Dict[str, str] = {}
    steps: List[Dict[str, object]] = []
    filtered = list(costumes)
    for name, func in (
        ("boundaries", filter_by_boundaries),
        ("universe", filter_by_universe),
        ("practical", filter_by_practical),
    ):
        result = func(filtered, quiz)
        reasons.update(result.removed)
        steps.append({"step": name, "debug": result.debug})
        filtered = result.items

    debug = {"input_count": len(costumes), "final_count": len(filtered), "steps": steps}
    return FilteringResult(items=filtered, removed=reasons, debug=debug)


def apply_hard_filters(costumes: List[Costume], quiz: QuizResponse) -> List[Costume]:
    """Return the costumes passing all hard constraints, in their original order."""

    return run_hard_filters(costumes, quiz).items


def violates_boundaries(costume: Costume, quiz: QuizResponse) -> bool:
    return _boundary_violation(costume, quiz) is not None


__all__ = [
    "FilteringResult",
    "apply_hard_filters",
    "filter_by_boundaries",
    "filter_by_practical",
    "filter_by_universe",
    "run_hard_filters",
    "violates_boundaries",
]
