"""Structured Logging - one process-wide handler for pipeline and service logs.

Invariants:
    - Timestamps come from the record (record.created), not from format time
    - Pipeline extras (subject, unit_name, error_code, key counts) are grouped
      under "fields" in JSON and appended as key=value pairs in text mode
    - setup_logging is idempotent: a second call replaces the keygate handler
      instead of stacking another one on the root logger

Design Decisions:
    - stdlib logging: core modules only call logging.getLogger(__name__), the
      handler is chosen once by services.bootstrap.configure()
"""

import json
import logging
from datetime import datetime, timezone


HANDLER_NAME = "keygate"

PIPELINE_FIELDS = (
    "subject", "unit_name", "error_code",
    "received", "accepted", "dropped",
)


def pipeline_fields(record: logging.LogRecord) -> dict:
    """Extras the pipeline attached to a record, in PIPELINE_FIELDS order."""
    return {
        name: record.__dict__[name]
        for name in PIPELINE_FIELDS
        if record.__dict__.get(name) is not None
    }


class JSONFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        fields = pipeline_fields(record)
        if fields:
            entry["fields"] = fields
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False)


class TextFormatter(logging.Formatter):
    """Human-readable lines for local runs, extras appended as key=value."""

    def __init__(self) -> None:
        super().__init__("%(asctime)s %(levelname)s %(name)s - %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        fields = pipeline_fields(record)
        if not fields:
            return line
        pairs = " ".join(f"{k}={v}" for k, v in fields.items())
        return f"{line} [{pairs}]"


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Install (or replace) the keygate handler on the root logger."""
    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == HANDLER_NAME:
            root.removeHandler(existing)

    handler = logging.StreamHandler()
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(JSONFormatter() if fmt == "json" else TextFormatter())
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler
