"""Shortlist diversification tests."""

from __future__ import annotations

import random
import sys
from pathlib import Path
from typing import List

sys.path.append(str(Path(__file__).resolve().parents[1]))

from evaluation.fixtures import build_costume, build_quiz
from logic.diversify import (
    add_random_shuffle,
    diversify_shortlist,
    ensure_archetype_diversity,
    ensure_funny_extreme,
    ensure_universe_diversity,
)
from logic.scoring import ScoredCostume


def _scored(costume_id: str, score: float = 1.0, **overrides) -> ScoredCostume:
    return ScoredCostume(costume=build_costume(costume_id, **overrides), score=score, sub_scores={})


def _ids(entries: List[ScoredCostume]) -> List[str]:
    return [entry.costume_id for entry in entries]


def test_shuffle_stays_within_buckets() -> None:
    candidates = [_scored(f"c{index}", score=10 - index) for index in range(10)]

    shuffled = add_random_shuffle(candidates, random.Random(5))

    assert set(_ids(shuffled[:5])) == {f"c{index}" for index in range(5)}
    assert set(_ids(shuffled[5:])) == {f"c{index}" for index in range(5, 10)}
    assert _ids(candidates) == [f"c{index}" for index in range(10)]


def test_shuffle_leaves_three_or_fewer_untouched() -> None:
    candidates = [_scored("a"), _scored("b"), _scored("c")]

    assert _ids(add_random_shuffle(candidates, random.Random(1))) == ["a", "b", "c"]


def test_archetype_diversity_splices_new_tag_above_position_ten() -> None:
    candidates = [_scored(f"hero_{index}") for index in range(11)]
    candidates.append(_scored("villain", similarity={"archetype_tags": ["villain"]}))

    result = ensure_archetype_diversity(candidates)

    assert result[9].costume_id == "villain"
    assert len(result) == len(candidates)
    assert _ids(result[10:]) == ["hero_9", "hero_10"]


def test_archetype_diversity_noop_when_window_is_varied() -> None:
    candidates = [_scored("a"), _scored("b", similarity={"archetype_tags": ["rebel"]}), _scored("c"), _scored("d")]

    assert _ids(ensure_archetype_diversity(candidates)) == ["a", "b", "c", "d"]


def test_universe_diversity_promotes_other_universe_when_unrestricted() -> None:
    candidates = [_scored(f"film_{index}") for index in range(5)]
    candidates.append(_scored("show", universe="tv"))

    result = ensure_universe_diversity(candidates, build_quiz())

    assert result[2].costume_id == "show"
    assert len({entry.costume.universe for entry in result[:3]}) == 2


def test_universe_diversity_skipped_for_restricted_selection() -> None:
    candidates = [_scored(f"film_{index}") for index in range(5)]
    candidates.append(_scored("show", universe="tv"))

    result = ensure_universe_diversity(candidates, build_quiz(universes={"movie", "tv"}))

    assert _ids(result) == _ids(candidates)


def test_funny_extreme_pick_is_promoted_into_top_three() -> None:
    candidates = [_scored(f"plain_{index}") for index in range(6)]
    candidates.append(_scored("wild", funny_extreme=True))

    result = ensure_funny_extreme(candidates, random.Random(0))

    assert result[2].costume_id == "wild"
    assert len(result) == 7


def test_funny_extreme_noop_when_already_present() -> None:
    candidates = [_scored("wild", funny_extreme=True)] + [_scored(f"plain_{index}") for index in range(5)]

    assert _ids(ensure_funny_extreme(candidates, random.Random(0))) == _ids(candidates)


def test_diversify_shortlist_caps_and_is_seed_deterministic() -> None:
    candidates = [_scored(f"c{index}", score=30 - index, funny_extreme=index == 25) for index in range(30)]
    quiz = build_quiz()

    first = diversify_shortlist(candidates, quiz, random.Random(11))
    second = diversify_shortlist(candidates, quiz, random.Random(11))

    assert len(first) == 20
    assert _ids(first) == _ids(second)
    assert any(entry.costume.funny_extreme for entry in first[:3])
