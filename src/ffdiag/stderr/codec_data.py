"""Input codec data extraction from the ffmpeg stderr header.

Before encoding starts, ffmpeg describes each input on stderr::

    Input #0, matroska,webm, from 'movie.mkv':
      Duration: 00:42:13.37, start: 0.000000, bitrate: 5123 kb/s
        Stream #0:0: Video: h264 (High), yuv420p(progressive), 1920x1080, 23.98 fps
        Stream #0:1(eng): Audio: aac (LC), 48000 Hz, stereo, fltp
    Output #0, mp4, to 'out.mp4':
      ...
    Stream mapping:
      ...

The scanner reads that header line by line and collects one
InputDescriptor per input. It is an explicit state machine: transition()
is a pure function from (state, line) to (new state, event), and
CodecHeaderScanner applies the events to its descriptors.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from enum import Enum

logger = logging.getLogger(__name__)

INPUT_PATTERN = re.compile(r"Input #[0-9]+, ([^ ]+),")
DURATION_PATTERN = re.compile(r"Duration: ([^,]+)")
AUDIO_PATTERN = re.compile(r"Audio: (.*)")
VIDEO_PATTERN = re.compile(r"Video: (.*)")
OUTPUT_PATTERN = re.compile(r"Output #\d+")
HEADER_END_PATTERN = re.compile(r"Stream mapping:|Press (\[q\]|ctrl-c) to stop")

# Separator between the fields of an Audio:/Video: stream description
STREAM_DETAILS_SEPARATOR = ", "


@dataclass
class InputDescriptor:
    """Codec information for one ffmpeg input.

    Attributes:
        format: Container format(s), e.g. "matroska,webm".
        duration: Duration as reported, e.g. "00:42:13.37".
        audio: Audio codec summary (first field of the stream line).
        audio_details: All comma-separated fields of the audio stream line.
        video: Video codec summary (first field of the stream line).
        video_details: All comma-separated fields of the video stream line.
    """

    format: str = ""
    duration: str = ""
    audio: str = ""
    audio_details: list[str] = field(default_factory=list)
    video: str = ""
    video_details: list[str] = field(default_factory=list)


class ScanPhase(Enum):
    """Where the scanner is in the stderr header."""

    BEFORE_ANY_INPUT = "before_any_input"
    IN_INPUT = "in_input"
    AFTER_INPUT = "after_input"
    DONE = "done"


@dataclass(frozen=True)
class ScanState:
    """Scanner state.

    Attributes:
        phase: Current phase.
        index: Index of the last input seen, -1 before the first one.
    """

    phase: ScanPhase = ScanPhase.BEFORE_ANY_INPUT
    index: int = -1


class ScanEventKind(Enum):
    """Kinds of data recognized on a header line."""

    NEW_INPUT = "new_input"
    DURATION = "duration"
    AUDIO = "audio"
    VIDEO = "video"
    COMPLETE = "complete"


@dataclass(frozen=True)
class ScanEvent:
    """Data recognized on one header line.

    Attributes:
        kind: What the line described.
        value: Captured text (empty for COMPLETE).
    """

    kind: ScanEventKind
    value: str = ""


def transition(state: ScanState, line: str) -> tuple[ScanState, ScanEvent | None]:
    """Compute the scanner state after one stderr line.

    Patterns are tried in order and the first match wins. Duration, audio
    and video lines only count inside an input section.

    Args:
        state: Current state.
        line: Next stderr line.

    Returns:
        Tuple of (new state, event or None).
    """
    if state.phase is ScanPhase.DONE:
        return state, None

    match = INPUT_PATTERN.search(line)
    if match:
        new_state = ScanState(ScanPhase.IN_INPUT, state.index + 1)
        return new_state, ScanEvent(ScanEventKind.NEW_INPUT, match.group(1))

    if state.phase is ScanPhase.IN_INPUT:
        for kind, pattern in (
            (ScanEventKind.DURATION, DURATION_PATTERN),
            (ScanEventKind.AUDIO, AUDIO_PATTERN),
            (ScanEventKind.VIDEO, VIDEO_PATTERN),
        ):
            match = pattern.search(line)
            if match:
                return state, ScanEvent(kind, match.group(1))

    if OUTPUT_PATTERN.search(line):
        return ScanState(ScanPhase.AFTER_INPUT, state.index), None

    if HEADER_END_PATTERN.search(line):
        return ScanState(ScanPhase.DONE, state.index), ScanEvent(
            ScanEventKind.COMPLETE
        )

    return state, None


class CodecHeaderScanner:
    """Collect input codec data from ffmpeg's stderr header.

    Feed stderr lines in order until feed() returns True. At that point
    ``inputs`` holds one descriptor per input and the ``on_complete``
    callback, if any, has been called once with them. Lines fed after
    completion are ignored and feed() keeps returning True.
    """

    def __init__(
        self,
        on_complete: Callable[[list[InputDescriptor]], None] | None = None,
    ) -> None:
        """Initialize the scanner.

        Args:
            on_complete: Called once with the collected descriptors when
                the end of the header is reached.
        """
        self._on_complete = on_complete
        self._state = ScanState()
        self._inputs: list[InputDescriptor] = []

    @property
    def state(self) -> ScanState:
        """Current scanner state."""
        return self._state

    @property
    def done(self) -> bool:
        """True once the end of the header has been seen."""
        return self._state.phase is ScanPhase.DONE

    @property
    def inputs(self) -> list[InputDescriptor]:
        """Descriptors collected so far, in input order."""
        return list(self._inputs)

    def feed(self, line: str) -> bool:
        """Consume one stderr line.

        Args:
            line: Next stderr line, without its terminator.

        Returns:
            True once the end of the header has been reached.
        """
        if self.done:
            return True

        self._state, event = transition(self._state, line)
        if event is not None:
            self._apply(event)

        return self.done

    def _apply(self, event: ScanEvent) -> None:
        if event.kind is ScanEventKind.NEW_INPUT:
            self._inputs.append(InputDescriptor(format=event.value))
            return

        if event.kind is ScanEventKind.COMPLETE:
            logger.debug(
                "Codec data complete", extra={"input_count": len(self._inputs)}
            )
            if self._on_complete is not None:
                self._on_complete(list(self._inputs))
            return

        current = self._inputs[self._state.index]
        if event.kind is ScanEventKind.DURATION:
            current.duration = event.value
        elif event.kind is ScanEventKind.AUDIO:
            details = event.value.split(STREAM_DETAILS_SEPARATOR)
            current.audio = details[0]
            current.audio_details = details
        elif event.kind is ScanEventKind.VIDEO:
            details = event.value.split(STREAM_DETAILS_SEPARATOR)
            current.video = details[0]
            current.video_details = details


def extract_codec_data(lines: Iterable[str]) -> list[InputDescriptor] | None:
    """Scan complete stderr output for input codec data.

    Args:
        lines: stderr lines, in order.

    Returns:
        The input descriptors, or None if the end of the header was
        never reached.
    """
    scanner = CodecHeaderScanner()
    for line in lines:
        if scanner.feed(line):
            return scanner.inputs
    return None
