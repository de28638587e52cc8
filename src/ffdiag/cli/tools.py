"""CLI timemark and which commands."""

import math
import sys

import click

from ffdiag.cli.exit_codes import ExitCode
from ffdiag.config import get_config
from ffdiag.core import timemark_to_seconds
from ffdiag.exceptions import ConfigError
from ffdiag.tools import resolve_tool


def _format_seconds(seconds: float) -> str:
    if float(seconds).is_integer():
        return str(int(seconds))
    return str(seconds)


@click.command("timemark")
@click.argument("timemarks", nargs=-1, required=True)
def timemark_command(timemarks: tuple[str, ...]) -> None:
    """Convert [[hh:]mm:]ss[.xxx] timemarks to seconds."""
    invalid = False
    for timemark in timemarks:
        seconds = timemark_to_seconds(timemark)
        if math.isnan(seconds):
            click.echo(f"Error: Invalid timemark: {timemark}", err=True)
            invalid = True
            continue
        click.echo(_format_seconds(seconds))

    if invalid:
        sys.exit(ExitCode.INVALID_TIMEMARK)


@click.command("which")
@click.argument("names", nargs=-1, required=True)
@click.pass_context
def which_command(ctx: click.Context, names: tuple[str, ...]) -> None:
    """Show where executables are found.

    Configured tool paths (FFDIAG_FFMPEG_PATH, [tools] in the config
    file) take precedence over PATH.
    """
    try:
        config = get_config(ctx.obj.get("config_path") if ctx.obj else None)
    except ConfigError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(ExitCode.CONFIG_ERROR)

    missing = False
    for name in names:
        path = resolve_tool(name, config.tools)
        if path:
            click.echo(f"{name}: {path}")
        else:
            click.echo(f"{name}: not found")
            missing = True

    if missing:
        sys.exit(ExitCode.TOOL_NOT_AVAILABLE)
