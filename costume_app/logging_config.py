"""JSON logging for the Costume Concierge with correlation ids and privacy scrubbing.

Every record is emitted as one JSON object. Extra fields passed through
:func:`log_event` are scrubbed first: quiz free text, selfie-derived cues and
API keys are masked, emails and URLs are replaced in plain strings.
"""

from __future__ import annotations

import contextlib
import contextvars
import json
import logging
import os
import re
import uuid
from typing import Any, Dict, Iterator, Mapping, Optional

SERVICE_NAME = "costume-concierge"

CORRELATION_ID: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar("correlation_id", default=None)

# Attributes every LogRecord carries; anything else on a record is an extra field.
_RECORD_ATTRS = frozenset(vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))) | {
    "message",
    "asctime",
    "taskName",
}

PRIVATE_KEYS = frozenset(
    {
        "notes",
        "photo_cues",
        "user_gender",
        "celebrity_matches",
        "api_key",
        "google_api_key",
        "tmdb_api_key",
        "prompt",
    }
)
_EMAIL_PATTERN = re.compile(r"[\w.\-]+@[\w.\-]+")


def _scrub_text(value: str) -> str:
    if _EMAIL_PATTERN.search(value):
        return _EMAIL_PATTERN.sub("[redacted-email]", value)
    if value.lower().startswith(("http://", "https://")):
        return "[redacted-url]"
    return value


def redact_for_log(payload: Any) -> Any:
    """Return a JSON-friendly copy of ``payload`` with private values masked."""

    if payload is None or isinstance(payload, (bool, int, float)):
        return payload
    if isinstance(payload, str):
        return _scrub_text(payload)
    if isinstance(payload, Mapping):
        return {
            key: "[redacted]" if key in PRIVATE_KEYS else redact_for_log(value) for key, value in payload.items()
        }
    if isinstance(payload, (list, tuple, set, frozenset)):
        return [redact_for_log(item) for item in payload]
    return str(payload)


class JsonFormatter(logging.Formatter):
    """Render a record as a single JSON line."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        message = super().format(record)
        entry: Dict[str, Any] = {
            "timestamp": self.formatTime(record, datefmt="%Y-%m-%dT%H:%M:%S%z"),
            "level": record.levelname,
            "logger": record.name,
            "service": SERVICE_NAME,
            "event": getattr(record, "event", record.getMessage()),
            "message": message,
            "correlation_id": getattr(record, "correlation_id", None) or CORRELATION_ID.get(),
        }
        extras = {key: value for key, value in vars(record).items() if key not in _RECORD_ATTRS and key not in entry}
        entry.update(redact_for_log(extras))
        return json.dumps(entry)


def configure_logging(level: int | str | None = None) -> None:
    """Send root logging to stderr as JSON. ``LOG_LEVEL`` sets the default level."""

    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(level or os.getenv("LOG_LEVEL", "INFO"))


def get_logger(name: str) -> logging.Logger:
    if not logging.getLogger().handlers:
        configure_logging()
    return logging.getLogger(name)


def ensure_correlation_id(correlation_id: str | None = None) -> str:
    """Adopt ``correlation_id``, keep the current one, or mint a new one."""

    if correlation_id:
        CORRELATION_ID.set(correlation_id)
        return correlation_id
    current = CORRELATION_ID.get()
    if current:
        return current
    minted = uuid.uuid4().hex
    CORRELATION_ID.set(minted)
    return minted


@contextlib.contextmanager
def correlation_context(correlation_id: str | None = None) -> Iterator[str]:
    """Set a correlation id for the duration of the block and restore the previous one."""

    token = CORRELATION_ID.set(correlation_id or CORRELATION_ID.get() or uuid.uuid4().hex)
    try:
        yield CORRELATION_ID.get()
    finally:
        CORRELATION_ID.reset(token)


def log_event(logger: logging.Logger, level: int, event: str, **fields: Any) -> None:
    """Log ``event`` with scrubbed ``fields`` attached as JSON keys.

    Field names must not collide with LogRecord attributes such as ``name``
    or ``module``.
    """

    correlation_id = ensure_correlation_id(fields.pop("correlation_id", None))
    exc_info = fields.pop("exc_info", None)
    logger.log(
        level,
        event,
        exc_info=exc_info,
        extra={"event": event, "correlation_id": correlation_id, **redact_for_log(fields)},
    )


@contextlib.contextmanager
def operation_context(name: str, correlation_id: str | None = None) -> Iterator[str]:
    """Scope one request-level operation under a single correlation id."""

    with correlation_context(correlation_id) as scoped_id:
        logging.getLogger("costume_app.operations").debug(
            name, extra={"event": "operation_started", "operation": name, "correlation_id": scoped_id}
        )
        yield scoped_id


__all__ = [
    "CORRELATION_ID",
    "JsonFormatter",
    "PRIVATE_KEYS",
    "configure_logging",
    "correlation_context",
    "ensure_correlation_id",
    "get_logger",
    "log_event",
    "operation_context",
    "redact_for_log",
]
