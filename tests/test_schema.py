# Copyright (c) 2026 bpcolor
# SPDX-License-Identifier: MIT

"""Tests for schema types and serialization roundtrips."""

import json
import math
from datetime import datetime, timezone

import pytest

from bpcolor.schema import (
    STOP_POSITIONS,
    BatchResult,
    ColorSpace,
    FormattedStop,
    GenerationFailure,
    ManyTransformationRequest,
    OKLCHColor,
    Palette,
    PaletteResult,
    PaletteStop,
    PatternMetadata,
    StopFailure,
    StopPosition,
    StopTransform,
    TransformationPattern,
    stop_index,
)


def formatted_stops():
    color = OKLCHColor(L=0.5, C=0.1, H=200.0)
    return tuple(FormattedStop(p, color, "#000000") for p in STOP_POSITIONS)


def palette_result(name="p"):
    return PaletteResult(
        name=name,
        input_color="#2D72D2",
        anchor_stop=StopPosition.STOP_500,
        output_format=ColorSpace.HEX,
        stops=formatted_stops(),
    )


class TestOKLCHColor:

    def test_valid_color(self):
        c = OKLCHColor(L=0.5, C=0.1, H=200.0)
        assert (c.L, c.C, c.H, c.alpha) == (0.5, 0.1, 200.0, 1.0)

    def test_any_hue_range_allowed(self):
        assert OKLCHColor(L=0.5, C=0.1, H=-90.0).H == -90.0

    def test_achromatic(self):
        assert OKLCHColor(L=0.5, C=0.0).is_achromatic
        assert OKLCHColor(L=0.5, C=0.1, H=math.nan).is_achromatic
        assert not OKLCHColor(L=0.5, C=0.01, H=200.0).is_achromatic

    def test_invalid_lightness(self):
        with pytest.raises(ValueError, match="Lightness"):
            OKLCHColor(L=1.5, C=0.1, H=200.0)

    @pytest.mark.parametrize("chroma", [-0.1, math.inf, math.nan])
    def test_invalid_chroma(self, chroma):
        with pytest.raises(ValueError, match="Chroma"):
            OKLCHColor(L=0.5, C=chroma)

    def test_infinite_hue(self):
        with pytest.raises(ValueError, match="Hue"):
            OKLCHColor(L=0.5, C=0.1, H=math.inf)

    def test_invalid_alpha(self):
        with pytest.raises(ValueError, match="Alpha"):
            OKLCHColor(L=0.5, C=0.1, alpha=1.2)

    def test_hex_property(self):
        assert OKLCHColor(L=1.0, C=0.0).hex == "#FFFFFF"

    def test_to_dict_roundtrip(self):
        c = OKLCHColor(L=0.5, C=0.1, H=200.0, alpha=0.5)
        assert OKLCHColor.from_dict(c.to_dict()) == c

    def test_nan_hue_serializes_as_none(self):
        d = OKLCHColor(L=0.5, C=0.0, H=math.nan).to_dict()
        assert d["H"] is None
        assert math.isnan(OKLCHColor.from_dict(d).H)

    def test_frozen(self):
        c = OKLCHColor(L=0.5, C=0.1, H=200.0)
        with pytest.raises(AttributeError):
            c.L = 0.6


class TestColorSpace:

    def test_parse(self):
        assert ColorSpace.parse("OKLab") is ColorSpace.OKLAB
        assert ColorSpace.parse(ColorSpace.RGB) is ColorSpace.RGB

    def test_parse_invalid(self):
        with pytest.raises(ValueError, match="hex, rgb, oklch, oklab"):
            ColorSpace.parse("hsl")


class TestStopPosition:

    def test_ten_positions(self):
        assert [int(p) for p in STOP_POSITIONS] == list(range(100, 1001, 100))

    def test_stop_index(self):
        assert stop_index(100) == 0
        assert stop_index(500) == 4
        assert stop_index(1000) == 9

    def test_stop_index_off_grid(self):
        with pytest.raises(ValueError):
            stop_index(150)

    def test_parse(self):
        assert StopPosition.parse(" 700 ") is StopPosition.STOP_700
        assert StopPosition.parse(300) is StopPosition.STOP_300

    @pytest.mark.parametrize("value", ["abc", 0, 1100, "50", None])
    def test_parse_invalid(self, value):
        with pytest.raises(ValueError, match="Invalid stop position"):
            StopPosition.parse(value)


class TestStopTransform:

    def test_identity(self):
        assert StopTransform.identity() == StopTransform(1.0, 1.0, 0.0)

    def test_negative_multiplier(self):
        with pytest.raises(ValueError, match="Lightness multiplier"):
            StopTransform(lightness_multiplier=-1.0, chroma_multiplier=1.0)

    def test_non_finite_hue_shift(self):
        with pytest.raises(ValueError, match="Hue shift"):
            StopTransform(1.0, 1.0, math.nan)


class TestTransformationPattern:

    def make(self, transforms=None):
        return TransformationPattern(
            name="p",
            reference_stop=StopPosition.STOP_500,
            transforms=transforms or tuple(StopTransform.identity() for _ in STOP_POSITIONS),
            metadata=PatternMetadata(source_count=1, confidence=0.8),
        )

    def test_wrong_count_raises(self):
        with pytest.raises(ValueError, match="requires 10 transforms"):
            self.make(transforms=(StopTransform.identity(),) * 9)

    def test_empty_name_raises(self):
        with pytest.raises(ValueError, match="name"):
            TransformationPattern(
                name="",
                reference_stop=StopPosition.STOP_500,
                transforms=(StopTransform.identity(),) * 10,
                metadata=PatternMetadata(source_count=1, confidence=0.8),
            )

    def test_metadata_validation(self):
        with pytest.raises(ValueError, match="Confidence"):
            PatternMetadata(source_count=1, confidence=1.5)
        with pytest.raises(ValueError, match="Source count"):
            PatternMetadata(source_count=0, confidence=0.5)

    def test_to_dict_roundtrip(self):
        transforms = tuple(StopTransform(1.0 + i / 10, 1.0, float(i)) for i in range(10))
        pattern = self.make(transforms)
        data = json.loads(json.dumps(pattern.to_dict()))
        assert set(data["transforms"]) == {str(p) for p in range(100, 1001, 100)}
        assert TransformationPattern.from_dict(data) == pattern


class TestPalette:

    def test_requires_all_stops_in_order(self):
        color = OKLCHColor(L=0.5, C=0.1, H=200.0)
        stops = tuple(PaletteStop(p, color) for p in reversed(STOP_POSITIONS))
        with pytest.raises(ValueError, match="exactly 10 stops"):
            Palette(name="p", stops=stops)

    def test_from_example_duplicate_position(self):
        stops = [{"position": 100, "hex": "#FFFFFF"}] * 10
        with pytest.raises(ValueError, match="Duplicate stop position 100"):
            Palette.from_example({"name": "dup", "stops": stops})

    def test_from_example_requires_name(self):
        with pytest.raises(ValueError, match="name"):
            Palette.from_example({"stops": []})


class TestRequests:

    def test_many_requires_targets(self):
        with pytest.raises(ValueError, match="at least one target"):
            ManyTransformationRequest(reference="#2D72D2", targets=(), stop=StopPosition.STOP_500)


class TestPaletteResult:

    def test_values(self):
        result = palette_result()
        assert result.values[100] == "#000000"
        assert result.value_at(1000) == "#000000"

    def test_requires_ten_stops(self):
        with pytest.raises(ValueError, match="exactly 10 stops"):
            PaletteResult(
                name="p",
                input_color="#2D72D2",
                anchor_stop=StopPosition.STOP_500,
                output_format=ColorSpace.HEX,
                stops=formatted_stops()[:5],
            )

    def test_stop_failures_only_serialized_when_present(self):
        assert "stop_failures" not in palette_result().to_dict()
        result = PaletteResult(
            name="p",
            input_color="#2D72D2",
            anchor_stop=StopPosition.STOP_500,
            output_format=ColorSpace.HEX,
            stops=formatted_stops(),
            stop_failures=(StopFailure(StopPosition.STOP_100, "hue lost"),),
        )
        assert result.to_dict()["stop_failures"] == [{"position": 100, "reason": "hue lost"}]


class TestBatchResult:

    def test_requires_palettes(self):
        with pytest.raises(ValueError, match="at least one palette"):
            BatchResult(
                group_name="g",
                output_format=ColorSpace.HEX,
                generated_at=datetime.now(timezone.utc),
                palettes=(),
            )

    def test_to_json(self):
        result = BatchResult(
            group_name="g",
            output_format=ColorSpace.HEX,
            generated_at=datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
            palettes=(palette_result(),),
            failures=(GenerationFailure("zzz", StopPosition.STOP_500, "bad color"),),
        )
        data = json.loads(result.to_json())
        assert data["generated_at"] == "2026-01-02T03:04:05+00:00"
        assert data["failures"] == [{"color": "zzz", "stop": 500, "error": "bad color"}]
        assert result.is_partial
