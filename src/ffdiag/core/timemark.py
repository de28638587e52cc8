"""Timemark conversion.

ffmpeg reports positions as ``[[hh:]mm:]ss[.xxx]`` timemarks (for example
``time=00:01:23.45`` in progress lines, or ``Duration: 01:02:03.50`` in
the input header). This module converts them to seconds.
"""

from __future__ import annotations

import math
import re

# Plain decimal notation: no digit separators, no inf/nan words
_NUMBER_PATTERN = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def _to_number(text: str) -> float:
    """Convert a timemark fragment to a float.

    Empty fragments count as zero. Anything else that is not a number
    yields NaN so the caller can detect it without handling exceptions.
    """
    text = text.strip()
    if not text:
        return 0.0
    if not _NUMBER_PATTERN.fullmatch(text):
        return math.nan
    return float(text)


def timemark_to_seconds(timemark: str | int | float) -> float:
    """Convert a ``[[hh:]mm:]ss[.xxx]`` timemark into seconds.

    Args:
        timemark: Timemark string, or a number of seconds.

    Returns:
        Number of seconds. Numbers are returned unchanged. Non-numeric
        fragments make the result NaN; no exception is raised.

    Example:
        >>> timemark_to_seconds("01:02:03.5")
        3723.5
        >>> timemark_to_seconds("12.5")
        12.5
    """
    if isinstance(timemark, (int, float)):
        return timemark

    if ":" not in timemark and "." in timemark:
        return _to_number(timemark)

    parts = timemark.split(":")

    seconds = _to_number(parts.pop())

    if parts:
        seconds += _to_number(parts.pop()) * 60

    if parts:
        seconds += _to_number(parts.pop()) * 3600

    return seconds
