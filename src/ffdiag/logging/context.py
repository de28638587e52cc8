"""Session context for structured logging.

Tags log records with the label of the stderr session being processed
(typically the input file name), using contextvars so concurrent
sessions in different threads keep their own label.
"""

from __future__ import annotations

import contextvars
import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Generator

_session_label: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "session_label", default=None
)


def get_session_label() -> str | None:
    """Get the current session label, if any."""
    return _session_label.get()


@contextmanager
def session_context(label: str) -> Generator[None, None, None]:
    """Context manager tagging log records with a session label.

    Example:
        with session_context("movie.mkv"):
            logger.info("Parsing stderr")  # Tagged with [movie.mkv]
    """
    token = _session_label.set(label)
    try:
        yield
    finally:
        _session_label.reset(token)


class SessionContextFilter(logging.Filter):
    """Logging filter that injects the session label into log records.

    Adds ``session_label`` for JSON output and ``session_tag`` (e.g.
    ``"[movie.mkv] "``, or an empty string) for the text format.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        label = _session_label.get()
        record.session_label = label
        record.session_tag = f"[{label}] " if label else ""
        return True  # Never filter out records
