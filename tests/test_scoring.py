"""Weighted scoring tests."""

from pathlib import Path
import sys

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from evaluation.fixtures import build_costume, build_quiz
from logic.scoring import (
    WEIGHTS,
    score_and_rank,
    score_breakdown,
    score_budget,
    score_celebrity_match,
    score_closet_boosters,
    score_costume,
    score_effort,
    score_gender,
    score_niche,
    score_resemblance,
    score_vibes,
)
from models.quiz import CelebrityMatch, ClosetBoosters, PhotoCues


def test_vibe_score_averages_goal_intensity() -> None:
    costume = build_costume("mixed", vibes={"funny": 3, "clever": 0})

    assert score_vibes(costume, ("funny",)) == pytest.approx(1.0)
    assert score_vibes(costume, ("funny", "clever")) == pytest.approx(0.5)


def test_niche_score_rewards_closeness() -> None:
    assert score_niche(build_costume("exact", niche_score=4), 4) == pytest.approx(1.0)
    assert score_niche(build_costume("far", niche_score=1), 7) == pytest.approx(0.0)
    assert score_niche(build_costume("near", niche_score=5), 4) == pytest.approx(5 / 6)


def test_effort_and_budget_tier_credit() -> None:
    assert score_effort(build_costume("easy", constraints={"effort": "one_item"}), "few_fast") == 1.0
    assert score_effort(build_costume("step", constraints={"effort": "some_work"}), "few_fast") == 0.5
    assert score_effort(build_costume("far", constraints={"effort": "suffer_for_bit"}), "one_item") == 0.1

    pricey = build_costume("pricey", constraints={"budget": "75_150"})
    assert score_budget(pricey, "dont_care") == 1.0
    assert score_budget(pricey, "30_75") == 0.5
    assert score_budget(pricey, "lt_30") == 0.1


def test_gender_preference_scoring() -> None:
    femme = build_costume("femme", gender_presentation="femme")
    flexible = build_costume("flex", gender_presentation="flexible")

    assert score_gender(femme, build_quiz()) == 1.0
    assert score_gender(flexible, build_quiz(gender_pref="match", user_gender="male")) == 1.0
    assert score_gender(femme, build_quiz(gender_pref="match", user_gender="male")) == 0.3
    assert score_gender(femme, build_quiz(gender_pref="dont_match", user_gender="male")) == 1.0
    assert score_gender(femme, build_quiz(gender_pref="match")) == 0.7


def test_resemblance_branches() -> None:
    wig = build_costume("wig", requirements={"wig_required": True, "makeup_level": "heavy"})
    plain = build_costume("plain")

    assert score_resemblance(wig, 2, None) == pytest.approx(0.5)
    assert score_resemblance(plain, 2, None) == pytest.approx(1.0)
    assert score_resemblance(plain, 4, None) == pytest.approx(0.7)
    assert score_resemblance(plain, 6, None) == pytest.approx(0.7)
    assert score_resemblance(wig, 6, PhotoCues(hair_length="long")) == pytest.approx(0.6)


def test_closet_boosters_match_gear_keywords() -> None:
    costume = build_costume(
        "biker", requirements={"anchor_item": "Leather jacket", "items": ["Leather jacket", "Jeans", "Boots"]}
    )

    assert score_closet_boosters(costume, None) == 0.0
    assert score_closet_boosters(costume, ClosetBoosters()) == 0.0
    assert score_closet_boosters(costume, ClosetBoosters(has_leather_jacket=True, has_boots=True)) == 1.0
    assert score_closet_boosters(costume, ClosetBoosters(has_leather_jacket=True, has_dress=True)) == 0.5


def test_celebrity_match_dominates_ranking() -> None:
    lookalike = build_costume("painter", name="Bob Ross", vibes={"stylish": 0})
    stylish = build_costume("model", vibes={"stylish": 3})
    cues = PhotoCues(celebrity_matches=(CelebrityMatch(name="Bob Ross", confidence="high"),))

    assert score_celebrity_match(lookalike, cues) == 1.0
    assert score_celebrity_match(stylish, cues) == 0.0

    ranked = score_and_rank([stylish, lookalike], build_quiz(photo_cues=cues))
    assert ranked[0].costume_id == "painter"
    assert ranked[0].sub_scores["celebrity"] == pytest.approx(WEIGHTS["celebrity"])


def test_breakdown_sums_to_total_score() -> None:
    costume = build_costume("any")
    quiz = build_quiz(goals=("funny", "clever"), niche_target=6)

    assert sum(score_breakdown(costume, quiz).values()) == pytest.approx(score_costume(costume, quiz))


def test_score_and_rank_is_stable_and_truncated() -> None:
    costumes = [build_costume(f"twin_{index}") for index in range(5)]
    costumes.append(build_costume("winner", vibes={"stylish": 3}))

    ranked = score_and_rank(costumes, build_quiz(), top_n=4)

    assert [entry.costume_id for entry in ranked] == ["winner", "twin_0", "twin_1", "twin_2"]


def test_scoring_is_repeatable() -> None:
    costumes = [build_costume(f"c{index}", niche_score=index + 1) for index in range(7)]
    quiz = build_quiz(goals=("clever",), niche_target=3)

    first = score_and_rank(costumes, quiz)
    second = score_and_rank(costumes, quiz)

    assert [(entry.costume_id, entry.score) for entry in first] == [
        (entry.costume_id, entry.score) for entry in second
    ]
