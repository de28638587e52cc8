"""FFmpeg stderr progress line parsing.

While encoding, ffmpeg repeatedly writes a status line to stderr::

    frame=  123 fps= 25 q=28.0 size=    1024kB time=00:00:04.92 bitrate=1705.0kbits/s speed=1.02x

This module recognizes such lines and turns them into ProgressRecord
objects. Lines of any other shape are not progress lines and yield None.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass

from ffdiag.core.timemark import timemark_to_seconds

# "key=   value" -> "key=value"
_EQUALS_SPACING_PATTERN = re.compile(r"=\s+")

_LEADING_INT_PATTERN = re.compile(r"^\s*([+-]?\d+)")
_LEADING_FLOAT_PATTERN = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")

BITRATE_UNIT = "kbits/s"


@dataclass
class ProgressRecord:
    """Progress reported by one ffmpeg status line.

    Attributes:
        frames: Frames encoded so far (None if not reported or not numeric).
        current_fps: Current encoding speed in frames per second.
        current_kbps: Current output bitrate in kbit/s. 0 when the line
            has no bitrate, None when the bitrate is not numeric (N/A).
        target_size: Current output size in kB.
        timemark: Current output position, as reported by ffmpeg.
        percent: Progress percentage, only set when the total duration
            of the input is known.
    """

    frames: int | None = None
    current_fps: int | None = None
    current_kbps: float | None = 0.0
    target_size: int | None = None
    timemark: str | None = None
    percent: float | None = None


def _parse_int(value: str | None) -> int | None:
    """Parse the leading integer of a value ("256kB" -> 256, "25.5" -> 25)."""
    if value is None:
        return None
    match = _LEADING_INT_PATTERN.match(value)
    if not match:
        return None
    return int(match.group(1))


def _parse_float(value: str) -> float | None:
    """Parse the leading decimal number of a value."""
    match = _LEADING_FLOAT_PATTERN.match(value)
    if not match:
        return None
    return float(match.group(1))


def _parse_duration(duration: float | int | str | None) -> float | None:
    """Return a usable total duration in seconds, or None."""
    if duration is None or isinstance(duration, bool):
        return None
    try:
        seconds = float(duration)
    except (TypeError, ValueError):
        return None
    if math.isnan(seconds) or seconds == 0:
        return None
    return seconds


def parse_progress_line(line: str) -> dict[str, str] | None:
    """Split an ffmpeg status line into its key=value fields.

    Args:
        line: A line from ffmpeg's stderr.

    Returns:
        Mapping of keys to raw values, or None if any space-separated
        token is not a key=value pair (the line is not a progress line).
    """
    line = _EQUALS_SPACING_PATTERN.sub("=", line).strip()

    progress: dict[str, str] = {}
    for part in line.split(" "):
        key, *values = part.split("=")
        if not values:
            return None
        progress[key] = values[0]

    return progress


def extract_progress(
    line: str,
    duration: float | int | str | None = None,
) -> ProgressRecord | None:
    """Build a ProgressRecord from an ffmpeg status line.

    Args:
        line: A line from ffmpeg's stderr.
        duration: Total input duration in seconds, if known. Non-numeric
            or zero values are ignored.

    Returns:
        ProgressRecord, or None if the line is not a progress line.
    """
    progress = parse_progress_line(line)
    if progress is None:
        return None

    bitrate = progress.get("bitrate")
    record = ProgressRecord(
        frames=_parse_int(progress.get("frame")),
        current_fps=_parse_int(progress.get("fps")),
        current_kbps=(
            _parse_float(bitrate.replace(BITRATE_UNIT, "")) if bitrate else 0.0
        ),
        target_size=_parse_int(progress.get("size") or progress.get("Lsize")),
        timemark=progress.get("time"),
    )

    total = _parse_duration(duration)
    if total is not None and record.timemark is not None:
        record.percent = timemark_to_seconds(record.timemark) / total * 100

    return record
