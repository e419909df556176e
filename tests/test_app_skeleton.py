"""
App wiring tests for the Costume Concierge.
These tests exercise payload validation and the response envelopes returned
to the HTTP layer.
"""

from pathlib import Path
import random
import sys

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from agents.copywriter import CostumeCopywriter
from costume_app.app import CostumeConciergeApp
from costume_app.config import CostumeConfig
from evaluation.fixtures import catalog_from, movie_heavy_records, niche_spread_records
from tools.image_resolver import OfflineImageResolver


def _build_app(records=None) -> CostumeConciergeApp:
    return CostumeConciergeApp(
        config=CostumeConfig(),
        catalog=catalog_from(records or movie_heavy_records(), version="v-test"),
        copywriter=CostumeCopywriter(model_name="test-model"),
        image_resolver=OfflineImageResolver(),
        rng=random.Random(4),
    )


def test_recommend_round_trip() -> None:
    response = _build_app().recommend(
        {"goals": ["stylish"], "effort": "one_item", "budget": "lt_30", "universes": ["movie"]}
    )

    assert response["status"] == "ok"
    assert len(response["recommendations"]) == 3
    assert response["meta"]["dataset_version"] == "v-test"
    assert response["meta"]["mode"] == "fallback"
    assert set(response["recommendations"][0]) >= {
        "costume_id",
        "title",
        "image",
        "why_it_matches",
        "difficulty",
        "anchor_item",
        "shopping_list",
        "similarity_tags",
    }


@pytest.mark.parametrize(
    "payload",
    [
        {"goals": [], "effort": "few_fast"},
        {"goals": ["funny", "sexy", "clever"], "effort": "few_fast"},
        {"goals": ["funny"], "effort": "few_fast", "niche_target": 9},
        {"goals": ["funny"], "effort": "forever"},
        {"goals": ["funny"], "effort": "few_fast", "universes": ["podcasts"]},
    ],
)
def test_recommend_rejects_invalid_payloads(payload) -> None:
    response = _build_app().recommend(payload)

    assert response["status"] == "needs_review"
    assert response["message"] == "Invalid quiz payload"
    assert response["details"]


def test_empty_catalog_is_reported() -> None:
    app = CostumeConciergeApp(
        config=CostumeConfig(),
        catalog=catalog_from([]),
        copywriter=CostumeCopywriter(model_name="test-model"),
        image_resolver=OfflineImageResolver(),
    )

    response = app.recommend({"goals": ["funny"], "effort": "few_fast"})

    assert response["status"] == "empty"
    assert response["recommendations"] == []


def test_more_like_this_round_trip() -> None:
    app = _build_app(niche_spread_records())
    quiz = {"goals": ["funny"], "effort": "few_fast"}

    similar = app.more_like_this(
        {"selected_costume_id": "anchor_pick", "quiz": quiz, "direction": "weirder", "exclude_ids": ["niche_9_7"]}
    )
    missing = app.more_like_this({"selected_costume_id": "ghost", "quiz": quiz})
    invalid = app.more_like_this({"selected_costume_id": "anchor_pick", "quiz": quiz, "direction": "sideways"})

    assert similar["status"] == "ok"
    assert 1 <= len(similar["recommendations"]) <= 5
    assert "niche_9_7" not in [rec["costume_id"] for rec in similar["recommendations"]]
    assert missing["status"] == "not_found"
    assert invalid["status"] == "needs_review"
