"""Error message extraction from ffmpeg stderr."""

from ffdiag.stderr.lines import NEWLINE_PATTERN


def extract_error(stderr: str) -> str:
    """Return the error message at the end of ffmpeg's stderr output.

    ffmpeg prefixes informational output with ``[component @ 0x...]`` or
    indents it, while the final error message is written flush left. Only
    the last block of lines that start neither with a space nor with
    ``[`` is kept.

    Args:
        stderr: Complete stderr output.

    Returns:
        The trailing error lines, newline-joined (empty if there are none).
    """
    lines = NEWLINE_PATTERN.split(stderr)
    # A trailing terminator ends the last line, it does not start a new one
    if len(lines) > 1 and lines[-1] == "":
        lines.pop()

    messages: list[str] = []
    for line in lines:
        if line.startswith((" ", "[")):
            messages = []
        else:
            messages.append(line)
    return "\n".join(messages)
