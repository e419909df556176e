"""Copywriter validation tests using an injected generative model."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Dict, List, Sequence

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from agents.copywriter import CopywriterError, CostumeCopywriter
from evaluation.fixtures import build_quiz, catalog_from, movie_heavy_records
from evaluation.harness import ScriptedModel
from models.quiz import Boundaries


class _FailingModel:
    def generate_content(self, prompt: str, **_: object):
        raise TimeoutError("deadline exceeded")


def _shortlist() -> List:
    return catalog_from(movie_heavy_records()).as_list()[:6]


def _pick(costume_id: str, why: Sequence[str] = ("Sharp and fast.", "Reads instantly.")) -> Dict[str, object]:
    return {
        "costume_id": costume_id,
        "why_it_matches": list(why),
        "shopping_list": ["Jacket", "Jeans", "Boots"],
        "substitutions": ["Thrifted jacket"],
    }


def _generation(*picks: Dict[str, object]) -> str:
    return json.dumps({"recommendations": list(picks)})


def _writer(text: str) -> CostumeCopywriter:
    return CostumeCopywriter(model_name="test-model", client=ScriptedModel(text))


def test_valid_generation_is_accepted() -> None:
    writer = _writer(_generation(_pick("movie_gown"), _pick("movie_jacket"), _pick("movie_robe")))

    recommendations = writer.write(build_quiz(), _shortlist())

    assert [rec.costume_id for rec in recommendations] == ["movie_gown", "movie_jacket", "movie_robe"]
    assert recommendations[0].difficulty == "Medium"
    assert recommendations[0].anchor_item == "Statement jacket"
    assert recommendations[0].substitutions == ["Thrifted jacket"]
    assert recommendations[0].similarity_tags == ["diva", "classic"]
    prompt = writer._client.calls[0]
    assert "ID: movie_cape" in prompt
    assert "pick exactly 3" in prompt


def test_fenced_json_is_accepted() -> None:
    text = "```json\n" + _generation(_pick("movie_gown"), _pick("movie_jacket"), _pick("movie_robe")) + "\n```"

    assert len(_writer(text).write(build_quiz(), _shortlist())) == 3


@pytest.mark.parametrize(
    ("text", "reason"),
    [
        ("not json at all", "invalid JSON"),
        (_generation(_pick("movie_gown"), _pick("movie_jacket")), "schema mismatch"),
        (_generation(_pick("movie_gown"), _pick("movie_gown"), _pick("movie_robe")), "duplicate"),
        (_generation(_pick("movie_gown"), _pick("tv_blazer"), _pick("movie_robe")), "outside the shortlist"),
        (
            _generation(
                _pick("movie_gown", why=("Based on your preferences, this works.", "Bold.")),
                _pick("movie_jacket"),
                _pick("movie_robe"),
            ),
            "banned phrases",
        ),
        ("", "empty generation"),
    ],
)
def test_invalid_generations_are_rejected(text: str, reason: str) -> None:
    with pytest.raises(CopywriterError, match=reason):
        _writer(text).write(build_quiz(), _shortlist())


def test_pick_breaking_a_boundary_is_rejected() -> None:
    writer = _writer(_generation(_pick("movie_wig"), _pick("movie_jacket"), _pick("movie_robe")))
    quiz = build_quiz(boundaries=Boundaries(avoid_wigs=True))

    with pytest.raises(CopywriterError, match="hard filters"):
        writer.write(quiz, _shortlist())


def test_transport_failure_becomes_copywriter_error() -> None:
    writer = CostumeCopywriter(model_name="test-model", client=_FailingModel())

    with pytest.raises(CopywriterError, match="deadline exceeded"):
        writer.write(build_quiz(), _shortlist())


def test_unconfigured_copywriter_is_disabled() -> None:
    writer = CostumeCopywriter(model_name="test-model")

    assert writer.enabled is False
    with pytest.raises(CopywriterError, match="not configured"):
        writer.write(build_quiz(), _shortlist())
