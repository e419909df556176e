"""Constraint relaxation ladder tests."""

from pathlib import Path
import sys

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from evaluation.fixtures import (
    all_practical,
    build_costume,
    build_quiz,
    movie_heavy_records,
    sparse_sports_records,
    strict_boundaries,
)
from logic.filtering import violates_boundaries
from logic.relaxation import (
    RELAXATION_LADDER,
    apply_relaxation_ladder,
    format_relaxation_message,
    relax_quiz,
)
from models.costume import from_raw_metadata


def _costumes(records):
    return [from_raw_metadata(record) for record in records]


def test_no_relaxation_when_pool_is_large_enough() -> None:
    quiz = build_quiz(universes={"movie"})

    result = apply_relaxation_ladder(_costumes(movie_heavy_records()), quiz)

    assert result.relaxations_applied == []
    assert result.request is quiz
    assert result.pool_sizes == [6]


def test_sparse_request_widens_era_then_universe_only() -> None:
    quiz = build_quiz(
        goals=("funny",),
        universes={"sports"},
        boundaries=strict_boundaries(),
        practical=all_practical(),
    )

    result = apply_relaxation_ladder(_costumes(sparse_sports_records()), quiz)

    assert result.relaxations_applied == ["era", "universe"]
    assert result.pool_sizes == [2, 2, 6]
    assert result.pool_sizes == sorted(result.pool_sizes)
    assert result.request.universes is None
    assert result.request.boundaries == quiz.boundaries
    assert quiz.universes == frozenset({"sports"})
    assert not any(violates_boundaries(costume, quiz) for costume in result.costumes)


def test_exhausted_ladder_returns_best_effort_pool() -> None:
    costumes = [build_costume("only_one"), build_costume("only_two", universe="tv")]
    quiz = build_quiz(universes={"sports"}, budget="lt_30", effort="one_item")

    result = apply_relaxation_ladder(costumes, quiz)

    assert result.relaxations_applied == list(RELAXATION_LADDER)
    assert [costume.costume_id for costume in result.costumes] == ["only_one", "only_two"]
    assert result.request.budget == "30_75"
    assert result.request.effort == "few_fast"


def test_relax_quiz_never_mutates_the_original() -> None:
    quiz = build_quiz(era="90s", budget="75_150", effort="suffer_for_bit", universes={"tv"})

    relaxed = relax_quiz(quiz, ["era", "universe", "budget", "effort"])

    assert (relaxed.era, relaxed.universes, relaxed.budget, relaxed.effort) == (
        "any",
        None,
        "dont_care",
        "suffer_for_bit",
    )
    assert (quiz.era, quiz.universes, quiz.budget) == ("90s", frozenset({"tv"}), "75_150")
    assert relax_quiz(quiz, []) is quiz

    with pytest.raises(ValueError, match="Unknown relaxation step"):
        relax_quiz(quiz, ["boundaries"])


def test_relaxation_message() -> None:
    assert format_relaxation_message([]) is None
    assert (
        format_relaxation_message(["era", "universe"])
        == "You made this *hard* (respect). We widened: Era + Universe."
    )
