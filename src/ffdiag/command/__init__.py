"""Command-line construction helpers.

Argument lists and filter strings are assembled here, ahead of running
ffmpeg.
"""

from ffdiag.command.arguments import ArgumentList
from ffdiag.command.filters import (
    FilterSpec,
    format_stream_spec,
    join_filter_strings,
    make_filter_string,
    make_filter_strings,
)
from ffdiag.command.graph import (
    FilterGraph,
    load_filter_graph,
    load_filter_graph_from_data,
)

__all__ = [
    # Arguments
    "ArgumentList",
    # Filters
    "FilterSpec",
    "format_stream_spec",
    "join_filter_strings",
    "make_filter_string",
    "make_filter_strings",
    # Filter graph files
    "FilterGraph",
    "load_filter_graph",
    "load_filter_graph_from_data",
]
