"""Prompt assembly for the costume copywriter."""

from __future__ import annotations

from typing import List, Sequence

from logic.safety import system_instruction
from models.costume import Costume
from models.quiz import QuizResponse

OUTPUT_FORMAT = """OUTPUT FORMAT:
{
  "recommendations": [
    {
      "costume_id": "exact_id_from_candidates",
      "why_it_matches": ["bullet 1", "bullet 2"],
      "shopping_list": ["item 1", "item 2", "item 3"],
      "substitutions": ["optional substitution"],
      "warnings": ["optional warning"]
    }
  ]
}"""

STYLE_GUIDE = """STYLE GUIDE:
- "why_it_matches" has 2-3 bullets that reference specific quiz choices (niche level, effort, vibe)
- "shopping_list" has 3-7 specific, buyable items
- Substitutions are optional cheaper or easier alternatives
- Warnings are optional "only works if..." notes
- Use active voice and short sentences"""

CANDIDATE_ITEM_PREVIEW = 5


def build_system_prompt() -> str:
    return "\n\n".join([system_instruction("editorial costume stylist"), OUTPUT_FORMAT, STYLE_GUIDE])


def format_quiz_context(quiz: QuizResponse) -> str:
    parts: List[str] = [
        f"Goals: {', '.join(quiz.goals)}",
        f"Niche level: {quiz.niche_target}/7 (1=everyone gets it, 7=deep cut)",
        f"Effort: {quiz.effort.replace('_', ' ')}",
        f"Budget: {quiz.budget.replace('_', ' ').replace('lt', '<')}",
        f"Era preference: {quiz.era.replace('_', '/')}",
    ]
    if quiz.practical.must_be_comfortable:
        parts.append("Must be comfortable all night")
    if quiz.practical.must_survive_crowded_bar:
        parts.append("Must survive a crowded bar")
    if quiz.practical.needs_pockets:
        parts.append("Needs pockets")
    if quiz.closet_boosters is not None:
        owned = [name.replace("has_", "").replace("_", " ") for name in quiz.closet_boosters.owned()]
        if owned:
            parts.append(f"Already owns: {', '.join(owned)}")
    return "\n".join(parts)


def format_candidate(costume: Costume) -> str:
    vibes = ", ".join(costume.vibes.strong_vibes()) or "neutral"
    fields = [
        f"ID: {costume.costume_id}",
        f"Title: {costume.display_title}",
        f"Vibes: {vibes}",
        f"Niche: {costume.niche_score}/7",
        f"Effort: {costume.constraints.effort}",
        f"Anchor: {costume.requirements.anchor_item}",
        f"Items: {', '.join(costume.requirements.items[:CANDIDATE_ITEM_PREVIEW])}",
    ]
    if costume.notes:
        fields.append(f"Note: {costume.notes}")
    return " | ".join(fields)


def build_user_prompt(quiz: QuizResponse, candidates: Sequence[Costume]) -> str:
    candidate_lines = "\n".join(format_candidate(costume) for costume in candidates)
    return (
        f"QUIZ ANSWERS:\n{format_quiz_context(quiz)}\n\n"
        f"CANDIDATE COSTUMES (pick exactly 3):\n{candidate_lines}\n\n"
        'Select the 3 best matches. Be specific in "why_it_matches" bullets: reference their niche '
        f"level ({quiz.niche_target}/7), effort preference ({quiz.effort}) and vibe goals "
        f"({'/'.join(quiz.goals)})."
    )


__all__ = ["build_system_prompt", "build_user_prompt", "format_candidate", "format_quiz_context"]
