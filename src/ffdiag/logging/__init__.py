"""Structured logging module for ffdiag.

Provides configurable logging with JSON format support, file rotation,
and session labels for log records.
"""

from ffdiag.logging.config import configure_logging
from ffdiag.logging.context import (
    SessionContextFilter,
    get_session_label,
    session_context,
)
from ffdiag.logging.handlers import JSONFormatter

__all__ = [
    "JSONFormatter",
    "SessionContextFilter",
    "configure_logging",
    "get_session_label",
    "session_context",
]
