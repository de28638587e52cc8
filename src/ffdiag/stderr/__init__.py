"""FFmpeg stderr processing.

Line buffering, input codec data extraction, progress parsing and error
message extraction for ffmpeg's diagnostic output.
"""

from ffdiag.stderr.codec_data import (
    CodecHeaderScanner,
    InputDescriptor,
    ScanEvent,
    ScanEventKind,
    ScanPhase,
    ScanState,
    extract_codec_data,
    transition,
)
from ffdiag.stderr.errors import extract_error
from ffdiag.stderr.lines import LineRingBuffer
from ffdiag.stderr.progress import (
    ProgressRecord,
    extract_progress,
    parse_progress_line,
)
from ffdiag.stderr.formatters import format_human, format_json
from ffdiag.stderr.session import DEFAULT_HISTORY_LINES, StderrSession

__all__ = [
    # Line buffering
    "LineRingBuffer",
    # Codec data
    "CodecHeaderScanner",
    "InputDescriptor",
    "ScanEvent",
    "ScanEventKind",
    "ScanPhase",
    "ScanState",
    "extract_codec_data",
    "transition",
    # Progress
    "ProgressRecord",
    "extract_progress",
    "parse_progress_line",
    # Errors
    "extract_error",
    # Session
    "DEFAULT_HISTORY_LINES",
    "StderrSession",
    # Formatters
    "format_human",
    "format_json",
]
