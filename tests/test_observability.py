"""Tool instrumentation logging tests."""

from pathlib import Path
import logging
import sys

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from tools.observability import instrument_tool


@instrument_tool("lookup")
def _lookup(costume_id: str, fail: bool = False) -> str:
    if fail:
        raise RuntimeError("catalog offline")
    return costume_id.upper()


def _events(caplog: pytest.LogCaptureFixture) -> list:
    return [getattr(record, "event", None) for record in caplog.records if getattr(record, "tool", None) == "lookup"]


def test_successful_call_logs_start_and_completion(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.INFO):
        assert _lookup("bob_ross") == "BOB_ROSS"

    assert _events(caplog) == ["tool_call_started", "tool_call_completed"]


def test_failed_call_logs_warning_and_reraises(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.INFO):
        with pytest.raises(RuntimeError):
            _lookup("bob_ross", fail=True)

    assert _events(caplog) == ["tool_call_started", "tool_call_failed"]
    failed = [record for record in caplog.records if getattr(record, "event", None) == "tool_call_failed"]
    assert failed[0].levelno == logging.WARNING
