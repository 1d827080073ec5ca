"""Structured Logging — one JSON object per line in production, plain text locally.

Invariants:
    - Every record carries timestamp, level, logger and message
    - Known extras (error_code, path, entity, entity_id, attempt, status_code)
      are copied onto the record only when set
    - setup_logging is idempotent: calling it again replaces its own handler

Design Decisions:
    - httpx request lines are demoted to WARNING: the Outlook client logs its
      own success/retry lines with richer context
"""

import json
import logging
from datetime import datetime, timezone

EXTRA_FIELDS = (
    "error_code", "path", "entity", "entity_id", "attempt", "status_code",
)
NOISY_LOGGERS = ("httpx", "httpcore")
TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_handler: logging.Handler | None = None


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update({
            key: getattr(record, key)
            for key in EXTRA_FIELDS
            if getattr(record, key, None) is not None
        })
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Install the CRM log handler on the root logger."""
    global _handler
    root = logging.getLogger()
    if _handler is not None:
        root.removeHandler(_handler)

    _handler = logging.StreamHandler()
    _handler.setFormatter(
        JSONFormatter() if fmt == "json" else logging.Formatter(TEXT_FORMAT)
    )
    root.addHandler(_handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    return _handler
