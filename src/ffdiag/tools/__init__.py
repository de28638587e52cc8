"""External tool lookup."""

from ffdiag.tools.resolver import (
    MISSING_TOOL_HINTS,
    ExecutableResolver,
    get_default_resolver,
    require_tool,
    reset_default_resolver,
    resolve_tool,
)

__all__ = [
    "MISSING_TOOL_HINTS",
    "ExecutableResolver",
    "get_default_resolver",
    "require_tool",
    "reset_default_resolver",
    "resolve_tool",
]
