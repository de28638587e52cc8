"""Tests for filter graph description files."""

import json
from pathlib import Path

import pytest

from ffdiag.command.filters import FilterSpec
from ffdiag.command.graph import (
    FilterGraph,
    load_filter_graph,
    load_filter_graph_from_data,
)
from ffdiag.exceptions import FilterGraphError


class TestLoadFilterGraphFromData:
    """Tests for load_filter_graph_from_data function."""

    def test_mixed_entries(self):
        graph = load_filter_graph_from_data(
            {
                "filters": [
                    {"filter": "scale", "inputs": "0:v", "options": {"w": 1280}},
                    "[0:a]anull",
                ]
            }
        )

        assert graph.complex_graph is True
        assert graph.filters[0] == FilterSpec(
            filter="scale", inputs="0:v", options={"w": 1280}
        )
        assert graph.filters[1] == "[0:a]anull"

    def test_bare_list(self):
        graph = load_filter_graph_from_data(["hflip", "vflip"])
        assert graph.to_strings() == ["hflip", "vflip"]

    def test_simple_chain(self):
        graph = load_filter_graph_from_data(
            {"complex": False, "filters": ["hflip", {"filter": "fps", "options": 25}]}
        )
        assert graph.to_string() == "hflip,fps=25"

    def test_option_types_preserved(self):
        """Numbers stay numbers and strings stay strings."""
        graph = load_filter_graph_from_data(
            [{"filter": "f", "options": ["10", 10, 1.5, True]}]
        )
        assert graph.filters[0].options == ["10", 10, 1.5, True]

    def test_missing_filter_name(self):
        with pytest.raises(FilterGraphError, match="validation failed"):
            load_filter_graph_from_data([{"inputs": "0:v"}])

    def test_unknown_key(self):
        with pytest.raises(FilterGraphError):
            load_filter_graph_from_data([{"filter": "scale", "option": 1}])

    def test_empty_filters(self):
        with pytest.raises(FilterGraphError):
            load_filter_graph_from_data({"filters": []})

    def test_not_a_mapping(self):
        with pytest.raises(FilterGraphError, match="mapping or a list"):
            load_filter_graph_from_data("scale")


class TestLoadFilterGraph:
    """Tests for load_filter_graph function."""

    def test_yaml_file(self, temp_dir: Path):
        path = temp_dir / "graph.yaml"
        path.write_text(
            "filters:\n"
            "  - filter: scale\n"
            "    inputs: '0:v'\n"
            "    outputs: scaled\n"
            "    options: {w: 100, h: 200}\n"
            "  - '[scaled]hflip[out]'\n"
        )

        graph = load_filter_graph(path)

        assert graph.to_string() == "[0:v]scale=w=100:h=200[scaled];[scaled]hflip[out]"

    def test_json_file(self, temp_dir: Path):
        path = temp_dir / "graph.json"
        path.write_text(
            json.dumps(
                {"filters": [{"filter": "drawtext", "options": {"text": "a,b"}}]}
            )
        )

        assert load_filter_graph(path).to_string() == "drawtext=text='a,b'"

    def test_missing_file(self, temp_dir: Path):
        with pytest.raises(FileNotFoundError):
            load_filter_graph(temp_dir / "missing.yaml")

    def test_empty_file(self, temp_dir: Path):
        path = temp_dir / "empty.yaml"
        path.write_text("")
        with pytest.raises(FilterGraphError, match="empty"):
            load_filter_graph(path)

    def test_invalid_yaml(self, temp_dir: Path):
        path = temp_dir / "bad.yaml"
        path.write_text("filters: [unclosed\n")
        with pytest.raises(FilterGraphError, match="Invalid YAML"):
            load_filter_graph(path)


def test_filter_graph_defaults():
    graph = FilterGraph()
    assert graph.filters == []
    assert graph.complex_graph is True
