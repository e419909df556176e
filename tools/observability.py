"""Timing and outcome logging around calls to external collaborators."""

from __future__ import annotations

import contextlib
import logging
import time
from functools import wraps
from typing import Any, Callable, Dict, Iterator, ParamSpec, TypeVar

from costume_app.logging_config import ensure_correlation_id, get_logger, log_event

LOGGER = get_logger(__name__)
P = ParamSpec("P")
R = TypeVar("R")


@contextlib.contextmanager
def timed_call(tool_name: str, **fields: Any) -> Iterator[Dict[str, Any]]:
    """Log start and outcome of one call to ``tool_name``.

    Failures are logged at WARNING with the traceback and re-raised; callers
    decide whether to degrade.
    """

    correlation_id = ensure_correlation_id()
    started = time.perf_counter()
    outcome: Dict[str, Any] = {}
    log_event(LOGGER, logging.INFO, "tool_call_started", tool=tool_name, correlation_id=correlation_id, **fields)
    try:
        yield outcome
    except Exception:
        log_event(
            LOGGER,
            logging.WARNING,
            "tool_call_failed",
            tool=tool_name,
            correlation_id=correlation_id,
            duration_ms=round((time.perf_counter() - started) * 1000, 2),
            exc_info=True,
        )
        raise
    log_event(
        LOGGER,
        logging.INFO,
        "tool_call_completed",
        tool=tool_name,
        correlation_id=correlation_id,
        duration_ms=round((time.perf_counter() - started) * 1000, 2),
        **outcome,
    )


def instrument_tool(tool_name: str) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """Decorator form of :func:`timed_call`."""

    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            with timed_call(tool_name, arguments=sorted(kwargs)):
                return func(*args, **kwargs)

        return wrapper

    return decorator


__all__ = ["instrument_tool", "timed_call"]
