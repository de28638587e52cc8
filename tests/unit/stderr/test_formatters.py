"""Tests for stderr session formatters."""

import json

from ffdiag.stderr.formatters import (
    format_human,
    format_json,
    format_progress_line,
    session_to_dict,
)
from ffdiag.stderr.progress import ProgressRecord
from ffdiag.stderr.session import StderrSession

HEADER_THEN_NO_TIME = (
    "Input #0, matroska,webm, from 'movie.mkv':\n"
    "  Duration: 00:00:10.00, start: 0.000000, bitrate: 1205 kb/s\n"
    "  Stream #0:0: Video: h264 (High), yuv420p, 1920x1080\n"
    "Stream mapping:\n"
    "frame=    0 fps=0.0 q=0.0 size=       0kB time=N/A bitrate=N/A speed=N/A\r"
)


def run_session(text: str) -> StderrSession:
    session = StderrSession()
    session.feed(text)
    session.close()
    return session


class TestSessionToDict:
    """Tests for session_to_dict function."""

    def test_successful_run(self, transcode_stderr):
        result = session_to_dict(run_session(transcode_stderr))

        assert result["inputs"][0]["format"] == "matroska,webm"
        assert result["inputs"][0]["video_details"][0] == "h264 (High)"
        assert result["progress"]["frames"] == 250
        assert result["progress"]["target_size"] == 1280
        assert result["progress_count"] == 3
        # Progress and summary lines are flush left, so they form the tail
        assert result["error"].splitlines()[0].startswith("frame=")
        assert result["error"].splitlines()[-1].startswith("video:1100kB")

    def test_failed_run(self, missing_input_stderr):
        result = session_to_dict(run_session(missing_input_stderr))

        assert result["inputs"] is None
        assert result["progress"] is None
        assert result["progress_count"] == 0
        assert "No such file or directory" in result["error"]

    def test_empty_error_is_none(self):
        result = session_to_dict(run_session("  indented only\n"))
        assert result["error"] is None

    def test_unknown_time_gives_no_percent(self):
        session = run_session(HEADER_THEN_NO_TIME)
        assert session.last_progress is not None
        assert session.last_progress.timemark == "N/A"

        result = session_to_dict(session)

        assert result["progress"]["percent"] is None
        assert result["progress"]["current_kbps"] is None


class TestFormatJson:
    """Tests for format_json function."""

    def test_valid_json(self, transcode_stderr):
        data = json.loads(format_json(run_session(transcode_stderr)))
        assert data["progress"]["timemark"] == "00:00:10.00"
        assert data["progress"]["percent"] == 100.0

    def test_strict_json_when_time_unknown(self):
        def reject_constant(name):
            raise ValueError(f"non-standard JSON constant {name}")

        output = format_json(run_session(HEADER_THEN_NO_TIME))

        data = json.loads(output, parse_constant=reject_constant)
        assert data["progress"]["frames"] == 0
        assert data["progress"]["percent"] is None


class TestFormatProgressLine:
    """Tests for format_progress_line function."""

    def test_all_fields(self):
        record = ProgressRecord(
            frames=10,
            current_fps=5,
            current_kbps=1000.0,
            target_size=64,
            timemark="00:00:01.00",
            percent=12.345,
        )
        assert format_progress_line(record) == (
            "frames=10 fps=5 bitrate=1000.0kbits/s size=64kB "
            "time=00:00:01.00 (12.3%)"
        )

    def test_unknown_fields(self):
        record = ProgressRecord(current_kbps=None)
        assert format_progress_line(record) == "frames=? fps=?"

    def test_nan_percent_omitted(self):
        record = ProgressRecord(frames=0, timemark="N/A", percent=float("nan"))
        assert format_progress_line(record) == (
            "frames=0 fps=? bitrate=0.0kbits/s time=N/A"
        )


class TestFormatHuman:
    """Tests for format_human function."""

    def test_successful_run(self, transcode_stderr):
        output = format_human(run_session(transcode_stderr))

        assert "Input #0: matroska,webm" in output
        assert "  Duration: 00:00:10.00" in output
        assert "  Audio: aac (LC), 48000 Hz, stereo, fltp (default)" in output
        assert "Progress (3 updates):" in output
        assert "(100.0%)" in output
        assert "Error:" not in output
        assert "Trailing message:" in output

    def test_failed_run(self, missing_input_stderr):
        output = format_human(run_session(missing_input_stderr))

        assert "Inputs: (stderr header not found)" in output
        assert "Progress: (none)" in output
        assert "Trailing message:\n  Error opening input file missing.mkv." in output
