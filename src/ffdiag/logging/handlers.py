"""JSON log output for ffdiag.

One JSON object per line::

    {"ts": "2024-05-01T10:00:00.123456+00:00", "level": "DEBUG",
     "logger": "ffdiag.stderr.session", "session": "movie.mkv",
     "msg": "Stderr session closed",
     "data": {"codec_data_found": true, "progress_count": 250}}

``session`` is present while a session_context() is active. ``data``
carries the ``extra=`` fields of the call; values json cannot encode are
written with str().
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

# Attributes every LogRecord has, plus the ones ffdiag's filter adds
_RECORD_ATTRS = frozenset(logging.makeLogRecord({}).__dict__) | {
    "message",
    "asctime",
    "taskName",
    "session_label",
    "session_tag",
}


def record_data(record: logging.LogRecord) -> dict[str, Any]:
    """Return the ``extra=`` fields attached to a log record."""
    return {
        key: value
        for key, value in record.__dict__.items()
        if key not in _RECORD_ATTRS and not key.startswith("_")
    }


class JSONFormatter(logging.Formatter):
    """Format log records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
        }

        session = getattr(record, "session_label", None)
        if session:
            entry["session"] = session

        entry["msg"] = record.getMessage()

        data = record_data(record)
        if data:
            entry["data"] = data

        if record.exc_info:
            entry["exc"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)
