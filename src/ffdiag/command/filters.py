"""Filter string serialization.

Converts structured filter descriptions into ffmpeg's filter syntax::

    [input1][input2]...filter=opt1:opt2...[output1][output2]...

Options may be given as a single value (rendered literally), a sequence
of positional values (``filter=v1:v2``) or a mapping of named values
(``filter=k1=v1:k2=v2``). String values containing a comma are wrapped
in single quotes in the positional and named forms. No validation of
filter names or option meaning is done.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Union

Scalar = Union[str, int, float, bool]
StreamSpecs = Union[str, Sequence[str], None]
FilterOptions = Union[Scalar, Sequence[Scalar], Mapping[str, Scalar], None]

# Optional surrounding brackets around a stream specifier
STREAM_SPEC_PATTERN = re.compile(r"^\[?(.*?)\]?$", re.DOTALL)

# Characters that require quoting inside an option list
_ESCAPE_PATTERN = re.compile(r"[,]")


@dataclass
class FilterSpec:
    """Structured description of a single filter.

    Attributes:
        filter: Filter name (e.g. "scale", "overlay").
        inputs: Input stream specifier(s). None lets ffmpeg pick the
            first unused matching streams.
        outputs: Output stream specifier(s). None lets ffmpeg assign the
            output to the output file.
        options: Filter options, see the module docstring.
    """

    filter: str
    inputs: StreamSpecs = None
    outputs: StreamSpecs = None
    options: FilterOptions = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> FilterSpec:
        """Build a FilterSpec from a plain mapping with the same keys."""
        return cls(
            filter=data["filter"],
            inputs=data.get("inputs"),
            outputs=data.get("outputs"),
            options=data.get("options"),
        )


def format_stream_spec(stream_spec: str) -> str:
    """Wrap a stream specifier in brackets.

    Already-bracketed specifiers are returned unchanged.

    Example:
        >>> format_stream_spec("0:v")
        '[0:v]'
        >>> format_stream_spec("[scaled]")
        '[scaled]'
    """
    match = STREAM_SPEC_PATTERN.fullmatch(stream_spec)
    name = match.group(1) if match else stream_spec
    return f"[{name}]"


def _format_streams(streams: StreamSpecs) -> str:
    if streams is None:
        return ""
    if isinstance(streams, str):
        return format_stream_spec(streams)
    return "".join(format_stream_spec(spec) for spec in streams)


def _format_scalar(value: Scalar) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _format_option_value(value: Scalar) -> str:
    """Render an option value, quoting strings that contain a comma."""
    if isinstance(value, str) and _ESCAPE_PATTERN.search(value):
        return f"'{value}'"
    return _format_scalar(value)


def _format_options(options: FilterOptions) -> str:
    """Render the ``=...`` options suffix, or an empty string."""
    if options is None:
        return ""

    if isinstance(options, (str, int, float)):
        if options == "":
            return ""
        return "=" + _format_scalar(options)

    if isinstance(options, Mapping):
        if not options:
            return ""
        return "=" + ":".join(
            f"{key}={_format_option_value(value)}" for key, value in options.items()
        )

    return "=" + ":".join(_format_option_value(value) for value in options)


def make_filter_string(spec: str | FilterSpec | Mapping[str, Any]) -> str:
    """Serialize one filter specification.

    Args:
        spec: A ready-made filter string (returned unchanged), a
            FilterSpec, or a mapping with FilterSpec keys.

    Returns:
        The filter string.
    """
    if isinstance(spec, str):
        return spec
    if isinstance(spec, Mapping):
        spec = FilterSpec.from_mapping(spec)

    return (
        _format_streams(spec.inputs)
        + spec.filter
        + _format_options(spec.options)
        + _format_streams(spec.outputs)
    )


def make_filter_strings(
    specs: Sequence[str | FilterSpec | Mapping[str, Any]],
) -> list[str]:
    """Serialize a list of filter specifications, element by element.

    Example:
        >>> make_filter_strings([
        ...     {"filter": "scale", "inputs": "0:v", "outputs": "scaled",
        ...      "options": {"w": 100, "h": 200}},
        ... ])
        ['[0:v]scale=w=100:h=200[scaled]']
    """
    return [make_filter_string(spec) for spec in specs]


def join_filter_strings(filter_strings: Sequence[str], complex_graph: bool) -> str:
    """Join serialized filters into a single ffmpeg argument value.

    Complex filter graphs (``-filter_complex``) separate filters with
    ``;``. Simple filter chains (``-vf``/``-af``) separate them with ``,``.
    """
    separator = ";" if complex_graph else ","
    return separator.join(filter_strings)
