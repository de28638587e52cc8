"""Centralized exit codes for all CLI commands.

Exit code ranges:
    0: Success
    1-9: General errors
    10-19: Validation errors (filter graph, config, input)
    20-29: Target/file errors
    30-39: Tool/dependency errors
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Exit codes for ffdiag CLI commands."""

    # Success (0)
    SUCCESS = 0

    # General errors (1-9)
    GENERAL_ERROR = 1

    # Validation errors (10-19)
    FILTER_GRAPH_ERROR = 10
    CONFIG_ERROR = 11
    INVALID_TIMEMARK = 12

    # Target/file errors (20-29)
    TARGET_NOT_FOUND = 20

    # Tool/dependency errors (30-39)
    TOOL_NOT_AVAILABLE = 30
