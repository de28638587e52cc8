"""Formatters for stderr session results.

Formats the codec data, last progress record and error message collected
by a StderrSession for human-readable or JSON output.
"""

import json
import math
from dataclasses import asdict
from typing import Any

from ffdiag.stderr.codec_data import InputDescriptor
from ffdiag.stderr.progress import ProgressRecord
from ffdiag.stderr.session import StderrSession


def _is_finite(value: float | None) -> bool:
    return value is not None and math.isfinite(value)


def _progress_to_dict(progress: ProgressRecord) -> dict[str, Any]:
    """Convert a progress record, mapping NaN/inf numbers to None.

    Status lines written before the first frame report ``time=N/A``,
    which yields a NaN percentage.
    """
    data = asdict(progress)
    for key in ("current_kbps", "percent"):
        if data[key] is not None and not math.isfinite(data[key]):
            data[key] = None
    return data


def session_to_dict(session: StderrSession) -> dict[str, Any]:
    """Convert session results to a JSON-compatible dict."""
    return {
        "inputs": (
            [asdict(descriptor) for descriptor in session.codec_data]
            if session.codec_data is not None
            else None
        ),
        "progress": (
            _progress_to_dict(session.last_progress)
            if session.last_progress
            else None
        ),
        "progress_count": session.progress_count,
        "error": session.error_message() or None,
    }


def format_json(session: StderrSession) -> str:
    """Format session results as indented JSON."""
    return json.dumps(session_to_dict(session), indent=2, allow_nan=False)


def format_input_lines(index: int, descriptor: InputDescriptor) -> list[str]:
    """Format one input descriptor for human output."""
    lines = [f"Input #{index}: {descriptor.format or '(unknown format)'}"]
    if descriptor.duration:
        lines.append(f"  Duration: {descriptor.duration}")
    if descriptor.video:
        lines.append(f"  Video: {', '.join(descriptor.video_details)}")
    if descriptor.audio:
        lines.append(f"  Audio: {', '.join(descriptor.audio_details)}")
    return lines


def format_progress_line(progress: ProgressRecord) -> str:
    """Format a progress record as a single line."""
    parts = [
        f"frames={progress.frames if progress.frames is not None else '?'}",
        f"fps={progress.current_fps if progress.current_fps is not None else '?'}",
    ]
    if progress.current_kbps is not None:
        parts.append(f"bitrate={progress.current_kbps:.1f}kbits/s")
    if progress.target_size is not None:
        parts.append(f"size={progress.target_size}kB")
    if progress.timemark:
        parts.append(f"time={progress.timemark}")
    if _is_finite(progress.percent):
        parts.append(f"({progress.percent:.1f}%)")
    return " ".join(parts)


def format_human(session: StderrSession) -> str:
    """Format session results for terminal output."""
    lines: list[str] = []

    if session.codec_data is None:
        lines.append("Inputs: (stderr header not found)")
    elif not session.codec_data:
        lines.append("Inputs: (none)")
    else:
        for index, descriptor in enumerate(session.codec_data):
            lines.extend(format_input_lines(index, descriptor))

    lines.append("")
    if session.last_progress is not None:
        lines.append(f"Progress ({session.progress_count} updates):")
        lines.append(f"  {format_progress_line(session.last_progress)}")
    else:
        lines.append("Progress: (none)")

    # ffmpeg ends with flush-left lines whether it failed or not: the error
    # on failure, the last status and summary lines on success
    trailing = session.error_message()
    if trailing:
        lines.append("")
        lines.append("Trailing message:")
        for trailing_line in trailing.splitlines():
            lines.append(f"  {trailing_line}")

    return "\n".join(lines)
