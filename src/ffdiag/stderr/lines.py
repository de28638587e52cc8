"""Line ring buffer for incremental process output.

ffmpeg writes its diagnostics in arbitrary chunks that do not line up with
line boundaries. LineRingBuffer reassembles complete lines, keeps a bounded
history of them, and hands each line to its subscribers as soon as it is
complete.
"""

from __future__ import annotations

import codecs
import logging
import re
from collections import deque
from collections.abc import Callable

logger = logging.getLogger(__name__)

# Any newline convention: \r\n, \r or \n
NEWLINE_PATTERN = re.compile(r"\r\n|\r|\n")

LineCallback = Callable[[str], None]


class LineRingBuffer:
    """Split a text stream into lines, keeping the most recent ones.

    The buffer keeps at most ``max_lines - 1`` committed lines plus the
    line currently being received (the pending line), which only counts
    once a newline or close() commits it. ``max_lines <= 0`` keeps every
    line.

    Subscribers registered with callback() are called synchronously, in
    registration order, for every committed line.

    Example:
        ring = LineRingBuffer(100)
        ring.callback(print)
        ring.append("frame=  1 fps=0.0\\rframe=  2")
        ring.close()  # prints the two progress lines
    """

    def __init__(self, max_lines: int = 0) -> None:
        """Initialize the buffer.

        Args:
            max_lines: History size; committed lines are capped at
                ``max_lines - 1``. Zero or negative keeps everything.
        """
        self.max_lines = max_lines
        history_size = max_lines - 1 if max_lines > 0 else None
        self._lines: deque[str] = deque(maxlen=history_size)
        self._pending: str | None = None
        self._closed = False
        self._callbacks: list[LineCallback] = []
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")

    @property
    def closed(self) -> bool:
        """True once close() has been called."""
        return self._closed

    @property
    def lines(self) -> list[str]:
        """Snapshot of the committed lines, oldest first."""
        return list(self._lines)

    @property
    def pending(self) -> str | None:
        """The line currently being received, if any."""
        return self._pending

    def callback(self, callback: LineCallback) -> None:
        """Register a subscriber.

        The retained history is replayed to the new subscriber before it
        receives live lines, so it sees the same line sequence as a
        subscriber registered earlier (minus lines dropped from history).

        Args:
            callback: Called with each line, without its line terminator.
        """
        for line in list(self._lines):
            callback(line)
        self._callbacks.append(callback)

    def append(self, chunk: str | bytes) -> None:
        """Append a chunk of output.

        Bytes are decoded as UTF-8; a multi-byte character split across
        chunks is reassembled. Appending to a closed buffer, or appending
        an empty chunk, does nothing.

        Args:
            chunk: Raw output, possibly containing several or partial lines.
        """
        if self._closed:
            return
        if isinstance(chunk, (bytes, bytearray)):
            chunk = self._decoder.decode(bytes(chunk))
        if not chunk:
            return

        fragments = NEWLINE_PATTERN.split(chunk)

        if len(fragments) == 1:
            self._pending = (self._pending or "") + fragments[0]
            return

        # The first fragment completes the pending line, the last one
        # starts a new pending line (possibly empty).
        fragments[0] = (self._pending or "") + fragments[0]
        self._pending = fragments.pop()

        for line in fragments:
            self._commit(line)

    def get(self) -> str:
        """Return the retained history and the pending line, newline-joined."""
        if self._pending is not None:
            return "\n".join([*self._lines, self._pending])
        return "\n".join(self._lines)

    def close(self) -> None:
        """Flush the pending line and refuse further input.

        Calling close() more than once has no further effect.
        """
        if self._closed:
            return

        tail = self._decoder.decode(b"", final=True)
        if tail:
            self._pending = (self._pending or "") + tail

        if self._pending is not None:
            line = self._pending
            self._pending = None
            self._commit(line)

        self._closed = True
        logger.debug("Line buffer closed", extra={"retained_lines": len(self._lines)})

    def _commit(self, line: str) -> None:
        for callback in self._callbacks:
            callback(line)
        self._lines.append(line)

    def __len__(self) -> int:
        return len(self._lines)
