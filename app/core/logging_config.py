"""Logging setup: one JSON line per record on stdout."""

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any

from app.core.config import settings

# Structured extras copied onto the payload when a caller passes them via `extra=`
EXTRA_FIELDS = ("actor_id", "entity", "action", "row_id")


class JsonFormatter(logging.Formatter):
    """Render records as compact JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for key in EXTRA_FIELDS:
            if hasattr(record, key):
                payload[key] = getattr(record, key)

        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False, default=str)


def configure_logging() -> None:
    """Install the JSON handler on the root logger."""
    level = settings.LOG_LEVEL.upper()

    root = logging.getLogger()
    root.setLevel(level)

    # Clear existing handlers (important for uvicorn reload)
    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(JsonFormatter())
    root.addHandler(handler)

    logging.getLogger("uvicorn.access").setLevel(level)
    logging.getLogger("sqlalchemy.engine").setLevel(settings.SQL_LOG_LEVEL.upper())
