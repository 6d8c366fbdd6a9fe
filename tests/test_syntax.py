# Copyright (c) 2026 bpcolor
# SPDX-License-Identifier: MIT

"""Tests for the compact color/stop and transformation syntax."""

import pytest

from bpcolor.errors import SyntaxParseError
from bpcolor.runtime.syntax import (
    is_transformation_syntax,
    parse_batch_pairs,
    parse_color_stop_pair,
    parse_transformation,
    parse_transformations,
    split_top_level,
)
from bpcolor.schema.palette import (
    ColorStopPair,
    ManyTransformationRequest,
    StopPosition,
    TransformationRequest,
)


class TestSplitTopLevel:

    def test_respects_parentheses(self):
        assert split_top_level("rgb(1, 2, 3)::500, #fff::100") == ["rgb(1, 2, 3)::500", "#fff::100"]

    def test_newlines_and_blank_entries(self):
        assert split_top_level("a::100\n\n b::200 ,") == ["a::100", "b::200"]


class TestParseColorStopPair:

    @pytest.mark.parametrize("text", ["2D72D2::500", "2D72D2:500", "2D72D2 500", " 2D72D2 :: 500 "])
    def test_separators(self, text):
        assert parse_color_stop_pair(text) == ColorStopPair("2D72D2", StopPosition.STOP_500)

    def test_function_color(self):
        result = parse_color_stop_pair("rgb(45, 114, 210)::600")
        assert result == ColorStopPair("rgb(45, 114, 210)", StopPosition.STOP_600)

    def test_default_stop(self):
        assert parse_color_stop_pair("#2D72D2", default_stop=500).stop == 500

    def test_missing_stop(self):
        with pytest.raises(SyntaxParseError, match="missing stop"):
            parse_color_stop_pair("#2D72D2")

    @pytest.mark.parametrize("text", ["2D72D2::550", "2D72D2::abc", "2D72D2::0"])
    def test_invalid_stop(self, text):
        with pytest.raises(SyntaxParseError, match="stop position"):
            parse_color_stop_pair(text)

    def test_empty(self):
        with pytest.raises(SyntaxParseError):
            parse_color_stop_pair("   ")

    def test_is_value_error(self):
        with pytest.raises(ValueError):
            parse_color_stop_pair("#2D72D2::42")


class TestParseBatchPairs:

    def test_commas_and_newlines(self):
        pairs = parse_batch_pairs("2D72D2::500, 238551::600\nDC143C::400")
        assert [p.color for p in pairs] == ["2D72D2", "238551", "DC143C"]
        assert [int(p.stop) for p in pairs] == [500, 600, 400]

    def test_invalid_colors_kept_for_batch(self):
        pairs = parse_batch_pairs("zzz::500, 2D72D2::500")
        assert pairs[0].color == "zzz"

    def test_empty(self):
        with pytest.raises(SyntaxParseError, match="no color/stop pairs"):
            parse_batch_pairs(" , \n")


class TestParseTransformation:

    def test_is_transformation_syntax(self):
        assert is_transformation_syntax("2D72D2>238551::500")
        assert not is_transformation_syntax("2D72D2::500")

    def test_single(self):
        assert parse_transformation("2D72D2>238551::500") == TransformationRequest(
            reference="2D72D2", target="238551", stop=StopPosition.STOP_500
        )

    def test_many(self):
        result = parse_transformation("2D72D2>(238551, DC143C,FF6B6B)::600")
        assert result == ManyTransformationRequest(
            reference="2D72D2",
            targets=("238551", "DC143C", "FF6B6B"),
            stop=StopPosition.STOP_600,
        )

    def test_function_colors(self):
        result = parse_transformation("rgb(45, 114, 210) > oklch(0.6 0.1 140)::500")
        assert result.reference == "rgb(45, 114, 210)"
        assert result.target == "oklch(0.6 0.1 140)"

    def test_missing_operator(self):
        with pytest.raises(SyntaxParseError, match="'>'"):
            parse_transformation("2D72D2::500")

    def test_missing_stop(self):
        with pytest.raises(SyntaxParseError, match="ref>target::stop"):
            parse_transformation("2D72D2>238551")

    def test_empty_target_list(self):
        with pytest.raises(SyntaxParseError, match="at least one target"):
            parse_transformation("2D72D2>()::500")

    def test_invalid_stop(self):
        with pytest.raises(SyntaxParseError, match="stop position"):
            parse_transformation("2D72D2>238551::150")

    def test_batch(self):
        results = parse_transformations("2D72D2>238551::500, 2D72D2>(DC143C,FF6B6B)::400")
        assert isinstance(results[0], TransformationRequest)
        assert isinstance(results[1], ManyTransformationRequest)
        assert results[1].targets == ("DC143C", "FF6B6B")
