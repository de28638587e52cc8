"""Tests for filter string serialization."""

import pytest

from ffdiag.command.filters import (
    FilterSpec,
    format_stream_spec,
    join_filter_strings,
    make_filter_string,
    make_filter_strings,
)


class TestFormatStreamSpec:
    """Tests for format_stream_spec function."""

    def test_wraps_plain_specifier(self):
        assert format_stream_spec("0:v") == "[0:v]"

    def test_bracketed_specifier_unchanged(self):
        """Already-bracketed specifiers are unwrapped and rewrapped."""
        assert format_stream_spec("[scaled]") == "[scaled]"

    def test_half_bracketed_specifier(self):
        assert format_stream_spec("[out") == "[out]"
        assert format_stream_spec("out]") == "[out]"


class TestMakeFilterString:
    """Tests for make_filter_string function."""

    def test_plain_string_passes_through(self):
        assert make_filter_string("[0:v]hflip[out]") == "[0:v]hflip[out]"

    def test_named_options_with_streams(self):
        """Mapping options are key=value pairs in key order."""
        spec = {
            "filter": "scale",
            "inputs": "0:v",
            "outputs": "scaled",
            "options": {"w": 100, "h": 200},
        }
        assert make_filter_string(spec) == "[0:v]scale=w=100:h=200[scaled]"

    def test_filter_spec_dataclass(self):
        spec = FilterSpec(filter="scale", inputs="0:v", options={"w": 100, "h": 200})
        assert make_filter_string(spec) == "[0:v]scale=w=100:h=200"

    def test_filter_name_only(self):
        """Without inputs, outputs or options only the name is emitted."""
        assert make_filter_string(FilterSpec(filter="hflip")) == "hflip"

    def test_multiple_inputs_and_outputs(self):
        spec = FilterSpec(
            filter="overlay",
            inputs=["0:v", "[logo]"],
            outputs=["a", "b"],
        )
        assert make_filter_string(spec) == "[0:v][logo]overlay[a][b]"

    def test_scalar_string_option(self):
        """A single option value is rendered literally."""
        spec = FilterSpec(filter="scale", options="iw/2:ih/2")
        assert make_filter_string(spec) == "scale=iw/2:ih/2"

    def test_scalar_number_option(self):
        assert make_filter_string(FilterSpec(filter="fps", options=25)) == "fps=25"

    def test_positional_options(self):
        """Sequence options are colon-joined positional values."""
        spec = FilterSpec(filter="crop", options=[640, 480, 0, 0])
        assert make_filter_string(spec) == "crop=640:480:0:0"

    def test_positional_option_with_comma_quoted(self):
        spec = FilterSpec(filter="select", options=["gte(t,10)", 1])
        assert make_filter_string(spec) == "select='gte(t,10)':1"

    def test_named_option_with_comma_quoted(self):
        spec = FilterSpec(filter="drawtext", options={"text": "a,b", "x": 10})
        assert make_filter_string(spec) == "drawtext=text='a,b':x=10"

    def test_empty_mapping_options_omitted(self):
        spec = FilterSpec(filter="null", options={})
        assert make_filter_string(spec) == "null"

    def test_boolean_option_value(self):
        spec = FilterSpec(
            filter="scale", options={"force_divisible_by": 2, "eval": True}
        )
        assert make_filter_string(spec) == "scale=force_divisible_by=2:eval=true"

    def test_output_idempotent_on_bracketed_specifiers(self):
        """Serializing bracketed and bare specifiers gives the same string."""
        bare = FilterSpec(filter="null", inputs="in", outputs="out")
        bracketed = FilterSpec(filter="null", inputs="[in]", outputs="[out]")
        assert make_filter_string(bare) == make_filter_string(bracketed)


class TestMakeFilterStrings:
    """Tests for make_filter_strings function."""

    def test_elementwise(self):
        specs = [
            "[0:a]anull[a]",
            {"filter": "scale", "inputs": "0:v", "outputs": "v", "options": [1280, -2]},
        ]
        assert make_filter_strings(specs) == [
            "[0:a]anull[a]",
            "[0:v]scale=1280:-2[v]",
        ]

    def test_empty_list(self):
        assert make_filter_strings([]) == []


class TestJoinFilterStrings:
    """Tests for join_filter_strings function."""

    @pytest.mark.parametrize(
        ("complex_graph", "expected"),
        [(True, "a;b"), (False, "a,b")],
    )
    def test_separator(self, complex_graph, expected):
        assert join_filter_strings(["a", "b"], complex_graph) == expected
