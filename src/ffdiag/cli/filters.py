"""CLI filters command: serialize a filter graph file."""

import sys
from pathlib import Path

import click

from ffdiag.cli.exit_codes import ExitCode
from ffdiag.command import load_filter_graph
from ffdiag.exceptions import FilterGraphError


@click.command("filters")
@click.argument("file", type=click.Path(path_type=Path))
@click.option(
    "--simple",
    is_flag=True,
    help="Join filters as a simple chain (',') instead of a complex graph (';').",
)
@click.option(
    "--lines",
    "one_per_line",
    is_flag=True,
    help="Print each filter on its own line instead of joining them.",
)
def filters_command(file: Path, simple: bool, one_per_line: bool) -> None:
    """Print the ffmpeg filter string for a filter graph file.

    FILE is a YAML or JSON document with a 'filters' list.
    """
    try:
        graph = load_filter_graph(file)
    except FileNotFoundError:
        click.echo(f"Error: File not found: {file}", err=True)
        sys.exit(ExitCode.TARGET_NOT_FOUND)
    except FilterGraphError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(ExitCode.FILTER_GRAPH_ERROR)

    if simple:
        graph.complex_graph = False

    if one_per_line:
        for filter_string in graph.to_strings():
            click.echo(filter_string)
    else:
        click.echo(graph.to_string())
