"""Stderr processing session.

StderrSession wires the stderr parsers together for one ffmpeg run: raw
output goes into a LineRingBuffer, whose subscribers feed the codec
header scanner and the progress parser. The session does not start or
read from the process itself; the caller passes output chunks to feed()
and calls close() when the process has exited.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable

from ffdiag.core.timemark import timemark_to_seconds
from ffdiag.stderr.codec_data import CodecHeaderScanner, InputDescriptor
from ffdiag.stderr.errors import extract_error
from ffdiag.stderr.lines import LineRingBuffer
from ffdiag.stderr.progress import ProgressRecord, extract_progress

logger = logging.getLogger(__name__)

# Number of stderr lines kept for error reporting
DEFAULT_HISTORY_LINES = 100


class StderrSession:
    """Parse the stderr output of one ffmpeg run.

    Example:
        session = StderrSession(on_progress=lambda p: print(p.percent))
        for chunk in iter(lambda: process.stderr.read(4096), b""):
            session.feed(chunk)
        session.close()
        if process.returncode != 0:
            raise RuntimeError(session.error_message())
    """

    def __init__(
        self,
        duration: float | str | None = None,
        history_lines: int = DEFAULT_HISTORY_LINES,
        on_codec_data: Callable[[list[InputDescriptor]], None] | None = None,
        on_progress: Callable[[ProgressRecord], None] | None = None,
    ) -> None:
        """Initialize the session.

        Args:
            duration: Total input duration in seconds, used for progress
                percentages. When None, the duration of the first input
                reported in the stderr header is used.
            history_lines: Stderr history size (see LineRingBuffer).
            on_codec_data: Called once with the input descriptors when the
                stderr header is complete.
            on_progress: Called with every progress record.
        """
        self._duration = duration
        self._on_codec_data = on_codec_data
        self._on_progress = on_progress

        self.codec_data: list[InputDescriptor] | None = None
        self.last_progress: ProgressRecord | None = None
        self.progress_count = 0

        self._scanner = CodecHeaderScanner(on_complete=self._handle_codec_data)
        self._ring = LineRingBuffer(history_lines)
        self._ring.callback(self._scan_header_line)
        self._ring.callback(self._parse_progress_line)

    @property
    def duration(self) -> float | str | None:
        """Duration used for progress percentages, if known."""
        if self._duration is not None:
            return self._duration
        if self.codec_data:
            seconds = timemark_to_seconds(self.codec_data[0].duration)
            if not math.isnan(seconds):
                return seconds
        return None

    @property
    def closed(self) -> bool:
        """True once close() has been called."""
        return self._ring.closed

    def feed(self, chunk: str | bytes) -> None:
        """Pass a chunk of ffmpeg stderr output to the parsers."""
        self._ring.append(chunk)

    def close(self) -> None:
        """Flush the last partial line. Further feed() calls are ignored."""
        self._ring.close()
        logger.debug(
            "Stderr session closed",
            extra={
                "codec_data_found": self.codec_data is not None,
                "progress_count": self.progress_count,
            },
        )

    def output(self) -> str:
        """Return the retained stderr history."""
        return self._ring.get()

    def error_message(self) -> str:
        """Return the error message at the end of the retained stderr."""
        return extract_error(self._ring.get())

    def _scan_header_line(self, line: str) -> None:
        if not self._scanner.done:
            self._scanner.feed(line)

    def _handle_codec_data(self, inputs: list[InputDescriptor]) -> None:
        self.codec_data = inputs
        if self._on_codec_data is not None:
            try:
                self._on_codec_data(inputs)
            except Exception as e:
                logger.warning("Codec data callback error: %s", e)

    def _parse_progress_line(self, line: str) -> None:
        progress = extract_progress(line, self.duration)
        if progress is None:
            return

        self.last_progress = progress
        self.progress_count += 1
        if self._on_progress is not None:
            try:
                self._on_progress(progress)
            except Exception as e:
                logger.warning("Progress callback error: %s", e)
