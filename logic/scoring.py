"""Deterministic weighted scoring for candidate costumes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional

from models.costume import Costume
from models.quiz import ClosetBoosters, PhotoCues, QuizResponse
from models.taxonomy import (
    BUDGET_ANY,
    BUDGET_TIERS,
    EFFORT_TIERS,
    ANY_ERA,
    NICHE_MAX,
    NICHE_MIN,
    USER_GENDER_PRESENTATION,
    VIBE_MAX,
    tier_index,
)

WEIGHTS = {
    "vibe": 3.0,
    "niche": 2.0,
    "effort": 1.5,
    "budget": 1.5,
    "gender": 1.0,
    "practical": 1.0,
    "resemblance": 1.0,
    "closet": 0.5,
    "photo_cues": 0.5,
    "era": 0.5,
    # Lookalike matches outweigh everything else on purpose.
    "celebrity": 5.0,
    "skin_tone": 1.5,
    "age_range": 1.0,
    "vibe_keywords": 1.0,
}

LOW_RESEMBLANCE_MAX = 3
HIGH_RESEMBLANCE_MIN = 5

CLOSET_KEYWORDS: Dict[str, List[str]] = {
    "has_leather_jacket": ["leather", "jacket", "biker"],
    "has_sunglasses": ["sunglasses", "shades", "glasses"],
    "has_suit": ["suit", "blazer", "formal"],
    "has_boots": ["boots", "boot"],
    "has_dress": ["dress", "gown"],
    "has_blazer": ["blazer", "jacket"],
}

AGE_HINTS: Dict[str, List[str]] = {
    "teen": ["teen", "young", "youth", "kid", "student"],
    "20s": ["young", "20s", "twenties"],
    "30s": ["30s", "thirties", "adult"],
    "40s": ["40s", "forties", "mature"],
    "50s": ["50s", "fifties", "older"],
    "60plus": ["elderly", "senior", "old", "60s", "70s"],
}

CONFIDENCE_CREDIT = {"high": 1.0, "medium": 0.8, "low": 0.6}


@dataclass(frozen=True)
class ScoredCostume:
    """A costume annotated with its score for one request."""

    costume: Costume
    score: float
    sub_scores: Dict[str, float]

    @property
    def costume_id(self) -> str:
        return self.costume.costume_id


def _uses_glasses(costume: Costume) -> bool:
    return any("glasses" in text or "shades" in text for text in costume.gear_text())


def _metadata_text(costume: Costume, include_vibe_tags: bool = True) -> str:
    parts = [costume.notes or "", *costume.similarity.archetype_tags]
    if include_vibe_tags:
        parts.extend(costume.similarity.vibe_tags)
    return " ".join(parts).lower()


def _tier_credit(item_index: int, target_index: int) -> float:
    if item_index <= target_index:
        return 1.0
    if item_index == target_index + 1:
        return 0.5
    return 0.1


def score_vibes(costume: Costume, goals: tuple) -> float:
    total = sum(costume.vibes.intensity(goal) / VIBE_MAX for goal in goals)
    return total / len(goals) if goals else 0.0


def score_niche(costume: Costume, niche_target: int) -> float:
    return 1 - abs(costume.niche_score - niche_target) / (NICHE_MAX - NICHE_MIN)


def score_effort(costume: Costume, effort: str) -> float:
    return _tier_credit(
        tier_index(costume.constraints.effort, EFFORT_TIERS), tier_index(effort, EFFORT_TIERS)
    )


def score_budget(costume: Costume, budget: str) -> float:
    if budget == BUDGET_ANY or costume.constraints.budget == BUDGET_ANY:
        return 1.0
    return _tier_credit(
        tier_index(costume.constraints.budget, BUDGET_TIERS), tier_index(budget, BUDGET_TIERS)
    )


def score_practical(costume: Costume, quiz: QuizResponse) -> float:
    """Average credit over the practical flags the user switched on."""

    practical = quiz.practical
    constraints = costume.constraints
    credits: List[float] = []
    if practical.must_be_comfortable:
        credits.append({"high": 1.0, "medium": 0.5}.get(constraints.comfort, 0.0))
    if practical.must_survive_crowded_bar:
        credits.append(1.0 if constraints.bar_friendly else 0.0)
    if practical.needs_pockets:
        credits.append(1.0 if constraints.pockets_likely else 0.0)
    return sum(credits) / len(credits) if credits else 0.0


def score_closet_boosters(costume: Costume, boosters: Optional[ClosetBoosters]) -> float:
    if boosters is None:
        return 0.0
    owned = boosters.owned()
    if not owned:
        return 0.0
    gear = " ".join(costume.gear_text())
    matches = sum(1 for name in owned if any(keyword in gear for keyword in CLOSET_KEYWORDS[name]))
    return matches / len(owned)


def score_era(costume: Costume, era: str) -> float:
    if era == ANY_ERA or costume.era == ANY_ERA:
        return 1.0
    return 1.0 if costume.era == era else 0.5


def score_gender(costume: Costume, quiz: QuizResponse) -> float:
    if quiz.gender_pref == "dont_care":
        return 1.0
    if costume.gender_presentation == "flexible":
        return 1.0
    if costume.gender_presentation == "androgynous":
        return 0.9
    if quiz.user_gender is None:
        return 0.7
    same = costume.gender_presentation == USER_GENDER_PRESENTATION[quiz.user_gender]
    if quiz.gender_pref == "match":
        return 1.0 if same else 0.3
    return 0.3 if same else 1.0


def score_resemblance(costume: Costume, resemblance_target: int, cues: Optional[PhotoCues]) -> float:
    """Three-way branch: low (<=3) wants an easy read, high (>=5) an achievable look, 4 is neutral."""

    requirements = costume.requirements
    if resemblance_target <= LOW_RESEMBLANCE_MAX:
        score = 1.0
        if requirements.wig_required:
            score -= 0.3
        if requirements.makeup_level == "heavy":
            score -= 0.2
        if requirements.face_paint_required:
            score -= 0.3
        if costume.requires_body_paint_or_full_face_paint:
            score -= 0.3
        return max(0.0, score)

    if resemblance_target >= HIGH_RESEMBLANCE_MIN:
        score = 0.5
        if cues is not None:
            if cues.glasses_likely and _uses_glasses(costume):
                score += 0.2
            if not requirements.wig_required:
                score += 0.2
            elif cues.hair_length != "unknown":
                score += 0.1
        elif not requirements.wig_required:
            score += 0.2
        return min(1.0, score)

    return 0.7


def score_photo_cues(costume: Costume, cues: Optional[PhotoCues]) -> float:
    if cues is None:
        return 0.0
    score = 0.0
    factors = 0
    if cues.glasses_likely:
        factors += 1
        if _uses_glasses(costume):
            score += 1
    if cues.hair_color != "unknown":
        factors += 1
        if cues.hair_color in _metadata_text(costume):
            score += 1
        elif not costume.requirements.wig_required:
            score += 0.5
    if costume.requirements.wig_required:
        if cues.hair_length != "unknown":
            factors += 1
            score += 0.3
    else:
        factors += 1
        score += 1
    return score / factors if factors else 0.0


def score_celebrity_match(costume: Costume, cues: Optional[PhotoCues]) -> float:
    """Boost costumes of (or played by) public figures the user resembles."""

    if cues is None or not cues.celebrity_matches:
        return 0.0

    name = costume.name.lower()
    title = costume.display_title.lower()
    metadata = _metadata_text(costume)
    for match in cues.celebrity_matches:
        celeb = match.name.lower()
        if celeb in name or celeb in title:
            return CONFIDENCE_CREDIT[match.confidence]
        for part in celeb.split():
            if len(part) > 3 and part in metadata:
                return 0.7 if match.confidence == "high" else 0.5

    match_notes = " ".join(match.notes or "" for match in cues.celebrity_matches).lower()
    overlap = sum(1 for tag in costume.similarity.vibe_tags if tag in match_notes)
    if overlap:
        return 0.3 * min(overlap / 2, 1)
    return 0.0


def score_skin_tone(costume: Costume, cues: Optional[PhotoCues]) -> float:
    if cues is None or cues.skin_tone == "unknown":
        return 0.0
    metadata = _metadata_text(costume, include_vibe_tags=False)
    if "any skin" in metadata or "universal" in metadata:
        return 0.8
    return 0.5


def score_age_range(costume: Costume, cues: Optional[PhotoCues]) -> float:
    if cues is None or cues.age_range == "unknown":
        return 0.0
    metadata = _metadata_text(costume, include_vibe_tags=False)
    if any(hint in metadata for hint in AGE_HINTS.get(cues.age_range, [])):
        return 1.0
    return 0.6


def score_vibe_keywords(costume: Costume, cues: Optional[PhotoCues]) -> float:
    if cues is None or not cues.vibe_keywords:
        return 0.0
    tags = [tag.lower() for tag in costume.similarity.all_tags()]
    matches = 0
    for keyword in cues.vibe_keywords:
        keyword = keyword.lower()
        if any(keyword in tag or tag in keyword for tag in tags):
            matches += 1
    return matches / len(cues.vibe_keywords)


def score_breakdown(costume: Costume, quiz: QuizResponse) -> Dict[str, float]:
    """Return every weighted sub-score for a costume."""

    cues = quiz.photo_cues
    raw = {
        "vibe": score_vibes(costume, quiz.goals),
        "niche": score_niche(costume, quiz.niche_target),
        "effort": score_effort(costume, quiz.effort),
        "budget": score_budget(costume, quiz.budget),
        "gender": score_gender(costume, quiz),
        "practical": score_practical(costume, quiz),
        "resemblance": score_resemblance(costume, quiz.resemblance_target, cues),
        "closet": score_closet_boosters(costume, quiz.closet_boosters),
        "photo_cues": score_photo_cues(costume, cues),
        "era": score_era(costume, quiz.era),
        "celebrity": score_celebrity_match(costume, cues),
        "skin_tone": score_skin_tone(costume, cues),
        "age_range": score_age_range(costume, cues),
        "vibe_keywords": score_vibe_keywords(costume, cues),
    }
    return {name: value * WEIGHTS[name] for name, value in raw.items()}


def score_costume(costume: Costume, quiz: QuizResponse) -> float:
    """Calculate the composite score. Only relative order matters to callers."""

    return sum(score_breakdown(costume, quiz).values())


def score_and_rank(costumes: List[Costume], quiz: QuizResponse, top_n: int = 20) -> List[ScoredCostume]:
    """Score and sort descending; equal scores keep catalog order."""

    scored = []
    for costume in costumes:
        sub_scores = score_breakdown(costume, quiz)
        scored.append(ScoredCostume(costume=costume, score=sum(sub_scores.values()), sub_scores=sub_scores))
    scored.sort(key=lambda entry: -entry.score)
    return scored[:top_n]


__all__ = [
    "ScoredCostume",
    "WEIGHTS",
    "score_and_rank",
    "score_breakdown",
    "score_costume",
]
