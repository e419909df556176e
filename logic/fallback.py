"""Template-based recommendation copy used when the copywriter is unavailable."""

from __future__ import annotations

import random
from typing import Dict, List, Optional, Sequence

from models.costume import Costume
from models.quiz import QuizResponse
from models.recommendation import Recommendation
from models.taxonomy import DIFFICULTY_BY_EFFORT

MAX_WHY_BULLETS = 3
MIN_WHY_BULLETS = 2
MAX_SHOPPING_ITEMS = 7
PAINT_WARNING = "This needs body or face paint. Commit or skip."

WHY_TEMPLATES: Dict[str, List[str]] = {
    "low_effort_high_payoff": [
        "One piece does the heavy lifting here.",
        "Minimal effort, maximum recognition.",
        "The lazy genius move.",
        "You wanted easy. This delivers.",
    ],
    "stylish": [
        "Stylish enough to wear outside Halloween.",
        "This reads fashion, not costume.",
        "The kind of look that just works.",
        "Sharp without trying too hard.",
    ],
    "funny": [
        "Gets laughs without explanation.",
        "The bit commits itself.",
        "Comedy through recognition.",
        "Funny to everyone, not just your friends.",
    ],
    "clever": [
        "For the people who get it.",
        "A reference that rewards the audience.",
        "Smart without being insufferable.",
        "The nod-and-smile costume.",
    ],
    "sexy": [
        "This one's for the attention.",
        "Hot in a way that makes sense.",
        "Confidence is the main accessory.",
        "Looks good, knows it.",
    ],
    "niche": [
        "Deep cut for the devoted.",
        "Only the real ones will know.",
        "Not for the casual viewer.",
    ],
    "recognizable": [
        "Instant recognition, zero explanation.",
        "Everyone gets this one.",
        "The crowd-pleaser.",
    ],
    "budget_friendly": [
        "Easy on the wallet.",
        "Most of this is already in your closet.",
        "Budget-friendly without looking cheap.",
    ],
    "bar_friendly": [
        "Survives a crowded bar.",
        "Durable enough for a long night.",
        "Won't fall apart by midnight.",
    ],
}

BUDGET_FRIENDLY_TIERS = ("lt_30", "30_75")


def compose_why_it_matches(costume: Costume, quiz: QuizResponse, rng: random.Random) -> List[str]:
    """Build two or three bullets: goal, niche, practical, padded with a stylish line."""

    bullets: List[str] = []
    for goal in quiz.goals:
        if goal in WHY_TEMPLATES:
            bullets.append(rng.choice(WHY_TEMPLATES[goal]))
            break

    if costume.niche_score <= 2:
        bullets.append(rng.choice(WHY_TEMPLATES["recognizable"]))
    elif costume.niche_score >= 6:
        bullets.append(rng.choice(WHY_TEMPLATES["niche"]))

    if costume.constraints.budget in BUDGET_FRIENDLY_TIERS:
        bullets.append(rng.choice(WHY_TEMPLATES["budget_friendly"]))
    elif costume.constraints.bar_friendly and quiz.practical.must_survive_crowded_bar:
        bullets.append(rng.choice(WHY_TEMPLATES["bar_friendly"]))

    if len(bullets) < MIN_WHY_BULLETS:
        remaining = [line for line in WHY_TEMPLATES["stylish"] if line not in bullets]
        bullets.append(rng.choice(remaining))
    return bullets[:MAX_WHY_BULLETS]


def difficulty_for_effort(effort: str) -> str:
    return DIFFICULTY_BY_EFFORT.get(effort, "Medium")


def compose_fallback_recommendation(
    costume: Costume, quiz: QuizResponse, rng: Optional[random.Random] = None
) -> Recommendation:
    rng = rng or random.Random()
    return Recommendation(
        costume_id=costume.costume_id,
        title=costume.display_title,
        why_it_matches=compose_why_it_matches(costume, quiz, rng),
        difficulty=difficulty_for_effort(costume.constraints.effort),
        anchor_item=costume.requirements.anchor_item,
        shopping_list=list(costume.requirements.items[:MAX_SHOPPING_ITEMS]),
        similarity_tags=costume.similarity_tags(),
        warnings=[PAINT_WARNING] if costume.requires_body_paint_or_full_face_paint else [],
    )


def compose_fallback_recommendations(
    costumes: Sequence[Costume],
    quiz: QuizResponse,
    rng: Optional[random.Random] = None,
    count: int = 3,
) -> List[Recommendation]:
    """Compose copy for the first ``count`` costumes, or for as many as exist."""

    rng = rng or random.Random()
    return [compose_fallback_recommendation(costume, quiz, rng) for costume in costumes[:count]]


__all__ = [
    "PAINT_WARNING",
    "WHY_TEMPLATES",
    "compose_fallback_recommendation",
    "compose_fallback_recommendations",
    "compose_why_it_matches",
    "difficulty_for_effort",
]
