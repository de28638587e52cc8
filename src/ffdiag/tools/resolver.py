"""Executable path resolution.

Looks up executables (ffmpeg, ffprobe, ...) by name and caches the result
for the lifetime of the resolver. Concurrent lookups of the same name are
coalesced: the first caller runs the lookup and the others wait for its
result.
"""

from __future__ import annotations

import logging
import shutil
import threading
from collections.abc import Callable
from concurrent.futures import Future
from pathlib import Path
from typing import TYPE_CHECKING

from ffdiag.exceptions import ToolNotFoundError

if TYPE_CHECKING:
    from ffdiag.config.models import ToolPathsConfig

logger = logging.getLogger(__name__)

# Installation hints shown when a required tool is missing
MISSING_TOOL_HINTS: dict[str, str] = {
    "ffmpeg": "Install ffmpeg (e.g. 'apt install ffmpeg') or set FFDIAG_FFMPEG_PATH",
    "ffprobe": (
        "ffprobe ships with ffmpeg (e.g. 'apt install ffmpeg') "
        "or set FFDIAG_FFPROBE_PATH"
    ),
}

Lookup = Callable[[str], str | None]


class ExecutableResolver:
    """Cached, thread-safe executable lookup.

    Lookup failures (the tool is missing, or the lookup itself fails) are
    reported as an empty string and cached like successful results.
    """

    def __init__(self, lookup: Lookup | None = None) -> None:
        """Initialize the resolver.

        Args:
            lookup: Function returning the path of an executable, or None
                if it cannot be found. Defaults to shutil.which.
        """
        self._lookup: Lookup = lookup if lookup is not None else shutil.which
        self._cache: dict[str, str] = {}
        self._pending: dict[str, Future[str]] = {}
        self._lock = threading.Lock()

    def resolve(self, name: str) -> str:
        """Return the path of executable ``name``.

        Args:
            name: Executable name.

        Returns:
            Path to the executable, or an empty string if not found.
        """
        with self._lock:
            if name in self._cache:
                return self._cache[name]
            future = self._pending.get(name)
            is_owner = future is None
            if future is None:
                future = Future()
                self._pending[name] = future

        if not is_owner:
            return future.result()

        try:
            path = self._run_lookup(name)
        except BaseException as e:
            with self._lock:
                self._pending.pop(name, None)
            future.set_exception(e)
            raise

        with self._lock:
            self._cache[name] = path
            self._pending.pop(name, None)
        future.set_result(path)
        return path

    def _run_lookup(self, name: str) -> str:
        try:
            result = self._lookup(name)
        except Exception as e:
            # Treat lookup errors as not found
            logger.debug("Executable lookup failed for %s: %s", name, e)
            return ""

        path = str(result) if result else ""
        if path:
            logger.debug("Resolved executable %s: %s", name, path)
        else:
            logger.debug("Executable not found: %s", name)
        return path

    def is_cached(self, name: str) -> bool:
        """Check whether ``name`` has already been resolved."""
        with self._lock:
            return name in self._cache

    def clear(self) -> None:
        """Forget all cached results."""
        with self._lock:
            self._cache.clear()


_default_resolver: ExecutableResolver | None = None
_default_resolver_lock = threading.Lock()


def get_default_resolver() -> ExecutableResolver:
    """Return the shared resolver, creating it on first use."""
    global _default_resolver
    with _default_resolver_lock:
        if _default_resolver is None:
            _default_resolver = ExecutableResolver()
        return _default_resolver


def reset_default_resolver() -> None:
    """Discard the shared resolver and its cache (for test isolation)."""
    global _default_resolver
    with _default_resolver_lock:
        _default_resolver = None


def resolve_tool(
    name: str,
    tool_paths: ToolPathsConfig | None = None,
    resolver: ExecutableResolver | None = None,
) -> str:
    """Resolve a tool, preferring a configured path over PATH lookup.

    Args:
        name: Tool name (e.g. "ffmpeg").
        tool_paths: Configured tool paths. None loads them from the
            current configuration.
        resolver: Resolver used for PATH lookup. None uses the shared one.

    Returns:
        Path to the tool, or an empty string if not found.
    """
    if tool_paths is None:
        from ffdiag.config import get_config

        tool_paths = get_config().tools

    configured: Path | None = getattr(tool_paths, name, None)
    if configured is not None:
        if configured.is_file():
            return str(configured)
        logger.warning("Configured path for %s is not a file: %s", name, configured)

    return (resolver or get_default_resolver()).resolve(name)


def require_tool(
    name: str,
    tool_paths: ToolPathsConfig | None = None,
    resolver: ExecutableResolver | None = None,
) -> Path:
    """Resolve a tool, raising if it is not available.

    Raises:
        ToolNotFoundError: If the tool cannot be found.
    """
    path = resolve_tool(name, tool_paths, resolver)
    if not path:
        raise ToolNotFoundError(name, MISSING_TOOL_HINTS.get(name))
    return Path(path)
