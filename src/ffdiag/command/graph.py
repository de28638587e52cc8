"""Filter graph description files.

A filter graph can be kept in a YAML (or JSON) file instead of being
built in code::

    complex: true
    filters:
      - filter: scale
        inputs: "0:v"
        outputs: scaled
        options: {w: 1280, h: -2}
      - "[scaled]hflip[out]"

Only the shape of the document is validated. Filter names and option
values are passed to the serializer untouched.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ffdiag.command.filters import (
    FilterSpec,
    join_filter_strings,
    make_filter_strings,
)
from ffdiag.exceptions import FilterGraphError

logger = logging.getLogger(__name__)

OptionScalar = Union[bool, int, float, str]


class FilterSpecModel(BaseModel):
    """Pydantic model for a structured filter entry."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    filter: str = Field(min_length=1)
    inputs: str | list[str] | None = None
    outputs: str | list[str] | None = None
    options: OptionScalar | list[OptionScalar] | dict[str, OptionScalar] | None = None


class FilterGraphModel(BaseModel):
    """Pydantic model for a filter graph document."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    complex: bool = True
    filters: list[str | FilterSpecModel] = Field(min_length=1)


@dataclass
class FilterGraph:
    """A loaded filter graph.

    Attributes:
        filters: Filter strings and structured specs, in graph order.
        complex_graph: True for ``-filter_complex`` graphs, False for
            simple ``-vf``/``-af`` chains.
    """

    filters: list[str | FilterSpec] = field(default_factory=list)
    complex_graph: bool = True

    def to_strings(self) -> list[str]:
        """Serialize every filter of the graph."""
        return make_filter_strings(self.filters)

    def to_string(self) -> str:
        """Serialize the graph into a single ffmpeg argument value."""
        return join_filter_strings(self.to_strings(), self.complex_graph)


def _format_validation_error(error: Exception) -> str:
    """Format a Pydantic validation error into a user-friendly message."""
    if isinstance(error, ValidationError):
        errors = error.errors()
        if errors:
            first_error = errors[0]
            loc = ".".join(str(x) for x in first_error.get("loc", []))
            msg = first_error.get("msg", str(error))
            if loc:
                return f"Filter graph validation failed: {loc}: {msg}"
            return f"Filter graph validation failed: {msg}"

    return f"Filter graph validation failed: {error}"


def _to_filter_spec(entry: str | FilterSpecModel) -> str | FilterSpec:
    if isinstance(entry, str):
        return entry
    return FilterSpec(
        filter=entry.filter,
        inputs=entry.inputs,
        outputs=entry.outputs,
        options=entry.options,
    )


def load_filter_graph_from_data(data: Any) -> FilterGraph:
    """Validate a parsed filter graph document.

    Args:
        data: Either a mapping with ``filters`` (and optional ``complex``)
            keys, or a bare list of filters.

    Returns:
        The validated FilterGraph.

    Raises:
        FilterGraphError: If the document does not have the expected shape.
    """
    if isinstance(data, list):
        data = {"filters": data}

    if not isinstance(data, dict):
        raise FilterGraphError("Filter graph must be a mapping or a list of filters")

    try:
        model = FilterGraphModel.model_validate(data)
    except ValidationError as e:
        raise FilterGraphError(_format_validation_error(e)) from e

    return FilterGraph(
        filters=[_to_filter_spec(entry) for entry in model.filters],
        complex_graph=model.complex,
    )


def load_filter_graph(path: Path) -> FilterGraph:
    """Load and validate a filter graph from a YAML or JSON file.

    Args:
        path: Path to the filter graph file.

    Returns:
        The validated FilterGraph.

    Raises:
        FilterGraphError: If the file is not valid YAML or has the wrong shape.
        FileNotFoundError: If the file does not exist.
    """
    if not path.exists():
        raise FileNotFoundError(f"Filter graph file not found: {path}")

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise FilterGraphError(f"Invalid YAML syntax: {e}") from e

    if data is None:
        raise FilterGraphError("Filter graph file is empty")

    graph = load_filter_graph_from_data(data)
    logger.debug(
        "Loaded filter graph from %s",
        path,
        extra={"filter_count": len(graph.filters), "complex": graph.complex_graph},
    )
    return graph
