"""CLI module for ffdiag."""

import sys
from dataclasses import replace
from pathlib import Path

import click

from ffdiag.cli.exit_codes import ExitCode
from ffdiag.exceptions import ConfigError

_logging_configured: bool = False


def _configure_logging(
    config_path: Path | None,
    log_level: str | None,
    log_file: Path | None,
    log_json: bool,
) -> None:
    """Configure logging from the [logging] config and the global options.

    Options given on the command line win over the config file and the
    FFDIAG_LOG_* environment variables.

    Raises:
        ConfigError: If the config file or a logging value is invalid.
    """
    global _logging_configured
    if _logging_configured:
        return

    from ffdiag.config import get_config
    from ffdiag.logging import configure_logging

    overrides: dict[str, object] = {}
    if log_level is not None:
        overrides["level"] = log_level
    if log_file is not None:
        overrides["file"] = log_file
    if log_json:
        overrides["format"] = "json"

    logging_config = get_config(config_path).logging
    # replace() re-runs LoggingConfig validation
    configure_logging(replace(logging_config, **overrides))
    _logging_configured = True


@click.group()
@click.version_option(package_name="ffdiag")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path),
    default=None,
    help="Config file (default: ~/.ffdiag/config.toml).",
)
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    default=None,
    help="Override log level (default: info).",
)
@click.option(
    "--log-file",
    type=click.Path(path_type=Path),
    default=None,
    help="Override log file path.",
)
@click.option(
    "--log-json",
    is_flag=True,
    default=False,
    help="Use JSON log format.",
)
@click.pass_context
def main(
    ctx: click.Context,
    config_path: Path | None,
    log_level: str | None,
    log_file: Path | None,
    log_json: bool,
) -> None:
    """ffdiag - build ffmpeg filter strings and parse ffmpeg stderr."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path

    try:
        _configure_logging(config_path, log_level, log_file, log_json)
    except ConfigError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(ExitCode.CONFIG_ERROR)


# Defer import to avoid circular dependency
def _register_commands():
    from ffdiag.cli.filters import filters_command
    from ffdiag.cli.parse import parse_command
    from ffdiag.cli.tools import timemark_command, which_command

    main.add_command(filters_command)
    main.add_command(parse_command)
    main.add_command(timemark_command)
    main.add_command(which_command)


_register_commands()
