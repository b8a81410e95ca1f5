"""Structured Logging — JSON formatter and root logger setup.

Invariants:
    - Every line carries timestamp, level, logger name, and message
    - Request-scoped extras (user_id, error_code, path, page_number, page_size)
      appear only when the call site passed them
    - setup_logging is idempotent: repeated calls replace the handler it
      installed instead of stacking a second one

Design Decisions:
    - stdlib logging with a JSON formatter: log shippers read one object per line
    - Handler tagged by name so test runs and reloads do not duplicate output
"""

import logging
import json
from datetime import datetime, timezone

EXTRA_FIELDS = (
    "user_id", "error_code", "path", "page_number", "page_size",
)

HANDLER_NAME = "users_api"

TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class JSONFormatter(logging.Formatter):
    """One JSON object per record, extras flattened to top-level keys."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(
                record.created, timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(_extras(record))
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


def _extras(record: logging.LogRecord) -> dict:
    return {
        key: getattr(record, key)
        for key in EXTRA_FIELDS
        if getattr(record, key, None) is not None
    }


def build_handler(fmt: str = "json") -> logging.Handler:
    handler = logging.StreamHandler()
    handler.set_name(HANDLER_NAME)
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))
    return handler


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Install (or replace) the service handler on the root logger."""
    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == HANDLER_NAME:
            root.removeHandler(existing)
    handler = build_handler(fmt)
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler
