"""Lightweight evaluation harness for deterministic scenarios."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Dict, List

from agents.copywriter import CostumeCopywriter
from agents.costume_stylist_agent import CostumeStylistAgent
from evaluation.fixtures import catalog_from
from evaluation.scenarios import EvaluationScenario, SCENARIOS
from logic.filtering import violates_boundaries
from tools.catalog_store import CostumeCatalog
from tools.image_resolver import OfflineImageResolver

EVALUATION_SEED = 7


@dataclass
class _ScriptedResponse:
    text: str


class ScriptedModel:
    """Generative model double that always answers with the same text."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.calls: List[str] = []

    def generate_content(self, prompt: str, **_: object) -> _ScriptedResponse:
        self.calls.append(prompt)
        return _ScriptedResponse(self.text)


def _build_agent(scenario: EvaluationScenario, catalog: CostumeCatalog) -> CostumeStylistAgent:
    copywriter = None
    if scenario.generator_response is not None:
        copywriter = CostumeCopywriter(model_name="scripted", client=ScriptedModel(scenario.generator_response))
    return CostumeStylistAgent(
        catalog=catalog,
        copywriter=copywriter,
        image_resolver=OfflineImageResolver(),
        rng=random.Random(EVALUATION_SEED),
    )


def _average_niche(catalog: CostumeCatalog, response: Dict[str, object]) -> float:
    scores = [catalog.get(rec["costume_id"]).niche_score for rec in response["recommendations"]]
    return sum(scores) / len(scores) if scores else 0.0


def _evaluate_recommend(
    scenario: EvaluationScenario, catalog: CostumeCatalog, response: Dict[str, object]
) -> Dict[str, bool]:
    expectations = scenario.expectations
    recommendations = response["recommendations"]
    ids = [rec["costume_id"] for rec in recommendations]
    costumes = [catalog.get(cid) for cid in ids]
    meta = response["meta"]

    checks: Dict[str, bool] = {
        "count": len(ids) == expectations.get("count", 3) and len(set(ids)) == len(ids),
        "boundaries_respected": not any(violates_boundaries(costume, scenario.quiz) for costume in costumes),
    }
    if "universe" in expectations:
        checks["universe"] = all(costume.universe == expectations["universe"] for costume in costumes)
    if "relaxations" in expectations:
        checks["relaxations"] = meta["relaxations_applied"] == expectations["relaxations"]
    if "relaxation_prefix" in expectations:
        prefix = expectations["relaxation_prefix"]
        checks["relaxation_prefix"] = meta["relaxations_applied"][: len(prefix)] == prefix
    if expectations.get("non_sports_in_pool"):
        shortlist = response["debug_summary"]["shortlist"]
        checks["non_sports_in_pool"] = any(catalog.get(cid).universe != "sports" for cid in shortlist)
    if "mode" in expectations:
        checks["mode"] = meta["mode"] == expectations["mode"]
    if expectations.get("ids_from_shortlist"):
        shortlist = set(response["debug_summary"]["shortlist"])
        checks["ids_from_shortlist"] = set(ids) <= shortlist
    return checks


def run_scenario(scenario: EvaluationScenario) -> Dict[str, object]:
    catalog = catalog_from(scenario.records, version="eval")
    agent = _build_agent(scenario, catalog)

    if scenario.similar_to:
        responses = {
            direction: agent.find_similar(scenario.similar_to, scenario.quiz, direction=direction)
            for direction in scenario.directions
        }
        averages = {direction: _average_niche(catalog, response) for direction, response in responses.items()}
        checks = {
            "all_found": all(response["status"] == "ok" for response in responses.values()),
            "weirder_niche_at_least_recognizable": averages["weirder"] >= averages["more_recognizable"],
        }
        return {
            "scenario": scenario.name,
            "passed": all(checks.values()),
            "checks": checks,
            "recommendation_count": min(len(r["recommendations"]) for r in responses.values()),
            "response": {"averages": averages, "responses": responses},
        }

    response = agent.recommend(scenario.quiz)
    checks = _evaluate_recommend(scenario, catalog, response)
    return {
        "scenario": scenario.name,
        "passed": all(checks.values()),
        "checks": checks,
        "recommendation_count": len(response["recommendations"]),
        "response": response,
    }


def run_evaluation_suite() -> List[Dict[str, object]]:
    return [run_scenario(scenario) for scenario in SCENARIOS]


def run_smoke_checks() -> List[str]:
    results = run_evaluation_suite()
    return [f"{result['scenario']}: {'passed' if result['passed'] else 'failed'}" for result in results]


__all__ = ["ScriptedModel", "run_evaluation_suite", "run_scenario", "run_smoke_checks"]
