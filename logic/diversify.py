"""Shortlist diversification: bucketed shuffle plus archetype, universe and novelty passes."""

from __future__ import annotations

import random
from typing import List, Optional

from logic.scoring import ScoredCostume
from models.quiz import QuizResponse

BUCKET_SIZE = 5
MIN_ARCHETYPES = 2
DIVERSITY_WINDOW = 10
ARCHETYPE_INSERT_INDEX = 9
TOP_SLOTS = 3
PROMOTION_INDEX = 2
FUNNY_EXTREME_POOL = 10
SHORTLIST_SIZE = 20


def add_random_shuffle(
    candidates: List[ScoredCostume], rng: random.Random, bucket_size: int = BUCKET_SIZE
) -> List[ScoredCostume]:
    """Shuffle within consecutive buckets so ranking bands survive but repeats vary."""

    if len(candidates) <= TOP_SLOTS:
        return list(candidates)
    result: List[ScoredCostume] = []
    for start in range(0, len(candidates), bucket_size):
        bucket = candidates[start : start + bucket_size]
        rng.shuffle(bucket)
        result.extend(bucket)
    return result


def ensure_archetype_diversity(
    candidates: List[ScoredCostume], min_archetypes: int = MIN_ARCHETYPES
) -> List[ScoredCostume]:
    """Splice later candidates carrying new archetype tags in just above position 10."""

    if len(candidates) <= TOP_SLOTS:
        return list(candidates)

    head = list(candidates[:DIVERSITY_WINDOW])
    seen = {tag for entry in head for tag in entry.costume.similarity.archetype_tags}
    if len(seen) >= min_archetypes:
        return list(candidates)

    remaining = candidates[DIVERSITY_WINDOW:]
    promoted = set()
    for entry in remaining:
        new_tags = [tag for tag in entry.costume.similarity.archetype_tags if tag not in seen]
        if not new_tags:
            continue
        head.insert(ARCHETYPE_INSERT_INDEX, entry)
        promoted.add(entry.costume_id)
        seen.update(new_tags)
        if len(seen) >= min_archetypes:
            break

    head.extend(entry for entry in remaining if entry.costume_id not in promoted)
    return head


def ensure_universe_diversity(candidates: List[ScoredCostume], quiz: QuizResponse) -> List[ScoredCostume]:
    """When the user left universes open, keep the top three from all sharing one."""

    if quiz.universe_restricted or len(candidates) <= TOP_SLOTS:
        return list(candidates)

    top_universes = [entry.costume.universe for entry in candidates[:TOP_SLOTS]]
    if len(set(top_universes)) >= 2:
        return list(candidates)

    dominant = top_universes[0]
    for index in range(TOP_SLOTS, len(candidates)):
        if candidates[index].costume.universe != dominant:
            result = list(candidates)
            result.insert(PROMOTION_INDEX, result.pop(index))
            return result
    return list(candidates)


def ensure_funny_extreme(candidates: List[ScoredCostume], rng: random.Random) -> List[ScoredCostume]:
    """Guarantee one novelty pick in the top three, chosen at random among the best few."""

    if len(candidates) <= TOP_SLOTS:
        return list(candidates)
    if any(entry.costume.funny_extreme for entry in candidates[:TOP_SLOTS]):
        return list(candidates)

    eligible = [
        index for index in range(TOP_SLOTS, len(candidates)) if candidates[index].costume.funny_extreme
    ][:FUNNY_EXTREME_POOL]
    if not eligible:
        return list(candidates)

    result = list(candidates)
    result.insert(PROMOTION_INDEX, result.pop(rng.choice(eligible)))
    return result


def diversify_shortlist(
    ranked: List[ScoredCostume],
    quiz: QuizResponse,
    rng: Optional[random.Random] = None,
    shortlist_size: int = SHORTLIST_SIZE,
) -> List[ScoredCostume]:
    """Run every diversity pass in order and cap the result.

    ``quiz`` should be the effective (possibly relaxed) request so that a
    widened universe selection also widens the universe pass.
    """

    rng = rng or random.Random()
    shortlist = add_random_shuffle(ranked, rng)
    shortlist = ensure_archetype_diversity(shortlist)
    shortlist = ensure_universe_diversity(shortlist, quiz)
    shortlist = ensure_funny_extreme(shortlist, rng)
    return shortlist[:shortlist_size]


__all__ = [
    "SHORTLIST_SIZE",
    "add_random_shuffle",
    "diversify_shortlist",
    "ensure_archetype_diversity",
    "ensure_funny_extreme",
    "ensure_universe_diversity",
]
