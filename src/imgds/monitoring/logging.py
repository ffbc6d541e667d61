from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

import cv2

_OPENCV_LEVELS = {
    "DEBUG": cv2.utils.logging.LOG_LEVEL_INFO,
    "INFO": cv2.utils.logging.LOG_LEVEL_ERROR,
    "WARNING": cv2.utils.logging.LOG_LEVEL_ERROR,
    "ERROR": cv2.utils.logging.LOG_LEVEL_SILENT,
}


def log_context(**fields: Any) -> dict[str, Any]:
    """Build the ``extra`` mapping whose fields JSON log lines carry as top-level keys."""
    return {"context": fields}


class JsonFormatter(logging.Formatter):
    """One JSON object per record; ``extra={"context": {...}}`` fields are merged in."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        context = getattr(record, "context", None)
        if isinstance(context, dict):
            for key, value in context.items():
                payload.setdefault(key, value)
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True, default=str)


def configure_logging(level: str = "INFO", json_logs: bool = False) -> None:
    """Route all records to stderr so stdout stays free for the JSON build summary.

    OpenCV's native decoder warnings follow the same threshold; corrupt images are
    already reported through ``imgds.builder``.
    """
    level = level.upper()
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(level)

    handler = logging.StreamHandler(sys.stderr)
    if json_logs:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(
            logging.Formatter(
                fmt="%(asctime)s %(levelname)s %(name)s - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
    root.addHandler(handler)

    cv2.utils.logging.setLogLevel(_OPENCV_LEVELS.get(level, cv2.utils.logging.LOG_LEVEL_ERROR))
