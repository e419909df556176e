"""Evaluation harness tests."""

from pathlib import Path
import sys

sys.path.append(str(Path(__file__).resolve().parents[1]))

from evaluation.harness import run_evaluation_suite, run_scenario, run_smoke_checks
from evaluation.scenarios import SCENARIOS


def test_evaluation_suite_passes() -> None:
    results = run_evaluation_suite()

    assert [result["scenario"] for result in results] == [scenario.name for scenario in SCENARIOS]
    for result in results:
        assert result["passed"], result["checks"]
        assert result["recommendation_count"] >= 3


def test_foreign_id_scenario_reports_fallback_reason() -> None:
    scenario = next(s for s in SCENARIOS if s.name == "generator_foreign_id_falls_back")

    result = run_scenario(scenario)

    assert result["response"]["meta"]["mode"] == "fallback"
    assert "not_in_catalog" in result["response"]["debug_summary"]["fallback_reason"]


def test_smoke_checks_summarise_each_scenario() -> None:
    summaries = run_smoke_checks()

    assert len(summaries) == len(SCENARIOS)
    assert all(summary.endswith("passed") for summary in summaries)
