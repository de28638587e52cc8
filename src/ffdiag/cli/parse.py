"""CLI parse command: analyze captured ffmpeg stderr output."""

import logging
import sys
from pathlib import Path
from typing import BinaryIO

import click

from ffdiag.cli.exit_codes import ExitCode
from ffdiag.config import get_config
from ffdiag.exceptions import ConfigError
from ffdiag.logging import session_context
from ffdiag.stderr import StderrSession
from ffdiag.stderr.formatters import format_human, format_json

logger = logging.getLogger(__name__)

# Read size used when replaying a stderr capture
READ_CHUNK_SIZE = 4096


def _feed_stream(session: StderrSession, stream: BinaryIO) -> None:
    for chunk in iter(lambda: stream.read(READ_CHUNK_SIZE), b""):
        session.feed(chunk)
    session.close()


@click.command("parse")
@click.argument("file", type=click.Path(path_type=Path))
@click.option(
    "--duration",
    "-d",
    type=float,
    default=None,
    help="Total input duration in seconds, for progress percentages "
    "(default: duration reported in the stderr header).",
)
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["human", "json"]),
    default="human",
    help="Output format (default: human)",
)
@click.pass_context
def parse_command(
    ctx: click.Context,
    file: Path,
    duration: float | None,
    output_format: str,
) -> None:
    """Parse a captured ffmpeg stderr log.

    FILE is a file containing ffmpeg's stderr output, or - for stdin.
    Prints the input codec data, the last progress report and the
    trailing error message, if any.
    """
    reading_stdin = str(file) == "-"
    if not reading_stdin and not file.exists():
        click.echo(f"Error: File not found: {file}", err=True)
        sys.exit(ExitCode.TARGET_NOT_FOUND)

    try:
        config = get_config(ctx.obj.get("config_path") if ctx.obj else None)
    except ConfigError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(ExitCode.CONFIG_ERROR)

    session = StderrSession(
        duration=duration,
        history_lines=config.parser.history_lines,
    )

    label = "stdin" if reading_stdin else file.name
    with session_context(label):
        if reading_stdin:
            _feed_stream(session, click.get_binary_stream("stdin"))
        else:
            with open(file, "rb") as f:
                _feed_stream(session, f)
        logger.debug("Parsed stderr capture", extra={"source": str(file)})

    if output_format == "json":
        click.echo(format_json(session))
    else:
        click.echo(format_human(session))
