"""
Structured Logging — JSON Output for Production

Every module logs under the "decisionsuite" namespace. Context goes in
`extra`; only the keys in EXTRA_FIELDS reach the JSON line, so artifact
text never leaks into logs by accident.

Usage (as the API logs each classification):
    from decisionsuite.logging import get_logger
    logger = get_logger("api")
    logger.info(
        "Artifact classified: band=STRUCTURALLY_UNCLEAR",
        extra={
            "hint_band": "STRUCTURALLY_UNCLEAR",
            "primary_pattern": "OUTCOME_AS_VALIDATION",
            "base_pattern": "OUTCOME_AS_VALIDATION",
            "boosts": ["outcomes_without_causal_link"],
            "locale": "en",
        },
    )

Storage and identity failures go through describe_error(), which keeps
only the exception type in production.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime, timezone


LOG_LEVEL = os.getenv("DECISIONSUITE_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = os.getenv("DECISIONSUITE_LOG_FORMAT", "json")  # "json" or "text"

EXTRA_FIELDS = (
    "hint_band", "hint_intensity", "primary_pattern", "patterns_count",
    "base_pattern", "boosts",
    "locale", "user_id", "artifact_id", "error", "error_type",
    "duration_ms", "status_code", "method", "path", "suite_version",
)


class JSONFormatter(logging.Formatter):
    """Formats log records as JSON lines."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for key in EXTRA_FIELDS:
            val = getattr(record, key, None)
            if val is not None:
                entry[key] = val

        if record.exc_info and record.exc_info[0]:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable format for development."""

    def __init__(self):
        super().__init__(
            fmt="%(asctime)s [%(levelname)-8s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )


def setup_logging():
    """Configure the package logger. Call once at app startup."""
    root = logging.getLogger("decisionsuite")
    root.setLevel(getattr(logging, LOG_LEVEL, logging.INFO))

    root.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    if LOG_FORMAT == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(TextFormatter())

    root.addHandler(handler)

    # Suppress noisy third-party loggers
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    return root


def get_logger(name: str) -> logging.Logger:
    """Get a named logger under the decisionsuite namespace."""
    return logging.getLogger(f"decisionsuite.{name}")


def describe_error(exc: BaseException, production: bool) -> str:
    """
    Render an exception for a log line.

    Production logs carry the exception type only; storage and auth
    errors may embed row data or credentials in their messages.
    """
    if production:
        return type(exc).__name__
    return f"{type(exc).__name__}: {exc}"
