# Copyright (c) 2026 bpcolor
# SPDX-License-Identifier: MIT

"""Tests for pattern smoothing."""

from dataclasses import replace

import numpy as np
import pytest

from conftest import RAMP_CHROMA, RAMP_LIGHTNESS, make_pattern

from bpcolor.engine.smoother import clamp, fit_quadratic, lerp, smooth_pattern
from bpcolor.errors import InterpolationError
from bpcolor.schema.palette import StopPosition


class TestHelpers:

    def test_lerp(self):
        assert lerp(0.0, 10.0, 0.25) == 2.5
        assert lerp(2.0, 2.0, 0.7) == 2.0

    def test_clamp(self):
        assert clamp(1.5, 0.0, 1.0) == 1.0
        assert clamp(-0.5, 0.0, 1.0) == 0.0
        assert clamp(0.3, 0.0, 1.0) == 0.3

    def test_fit_quadratic_passes_through_points(self):
        x_ref = 4 / 9
        a, b, c = fit_quadratic(1.8, 1.0, 0.3, x_ref)
        f = np.poly1d([a, b, c])
        assert f(0.0) == pytest.approx(1.8)
        assert f(x_ref) == pytest.approx(1.0)
        assert f(1.0) == pytest.approx(0.3)

    def test_fit_quadratic_line(self):
        a, b, c = fit_quadratic(0.0, 0.5, 1.0, 0.5)
        assert a == pytest.approx(0.0)
        assert b == pytest.approx(1.0)
        assert c == 0.0

    @pytest.mark.parametrize("x_ref", [0.0, 1.0])
    def test_fit_quadratic_degenerate(self, x_ref):
        with pytest.raises(InterpolationError, match="endpoint"):
            fit_quadratic(1.0, 1.0, 1.0, x_ref)


class TestSmoothPattern:

    def test_name_suffix(self, ramp_pattern):
        assert smooth_pattern(ramp_pattern).name == "test-pattern-smoothed"

    def test_input_not_mutated(self, ramp_pattern):
        before = ramp_pattern.transforms
        smooth_pattern(ramp_pattern)
        assert ramp_pattern.transforms == before
        assert ramp_pattern.name == "test-pattern"

    def test_reference_multipliers_exact(self):
        hue = (5.0,) * 10
        pattern = make_pattern(RAMP_LIGHTNESS, RAMP_CHROMA, hue)
        reference = smooth_pattern(pattern).transform_at(500)
        assert reference.lightness_multiplier == 1.0
        assert reference.chroma_multiplier == 1.0
        assert reference.hue_shift == pytest.approx(5.0)

    def test_endpoints_preserved(self, ramp_pattern):
        smoothed = smooth_pattern(ramp_pattern)
        assert smoothed.transform_at(100).lightness_multiplier == pytest.approx(1.8)
        assert smoothed.transform_at(1000).lightness_multiplier == pytest.approx(0.3)
        assert smoothed.transform_at(100).chroma_multiplier == pytest.approx(0.3)
        assert smoothed.transform_at(1000).chroma_multiplier == pytest.approx(0.8)

    def test_lightness_strictly_decreasing(self, ramp_pattern):
        lightness = [t.lightness_multiplier for t in smooth_pattern(ramp_pattern).transforms]
        assert all(a > b for a, b in zip(lightness, lightness[1:]))

    def test_values_floored_at_zero(self):
        lightness = (0.0, 0.1, 0.3, 0.6, 1.0, 2.0, 3.0, 4.0, 6.0, 8.0)
        smoothed = smooth_pattern(make_pattern(lightness, RAMP_CHROMA))
        assert smoothed.transform_at(200).lightness_multiplier == 0.0
        assert all(t.lightness_multiplier >= 0.0 for t in smoothed.transforms)

    def test_consistent_hue_shift(self):
        hue = (10.0,) * 4 + (0.0,) + (10.0,) * 5
        smoothed = smooth_pattern(make_pattern(RAMP_LIGHTNESS, RAMP_CHROMA, hue))
        shifts = {t.hue_shift for t in smoothed.transforms}
        assert len(shifts) == 1
        assert shifts.pop() == pytest.approx(9.0, abs=0.01)

    def test_metadata_kept(self, ramp_pattern):
        assert smooth_pattern(ramp_pattern).metadata == ramp_pattern.metadata

    def test_reference_at_endpoint_raises(self, ramp_pattern):
        pattern = replace(ramp_pattern, reference_stop=StopPosition.STOP_100)
        with pytest.raises(InterpolationError, match="test-pattern"):
            smooth_pattern(pattern)

    def test_example_pattern_is_smoothed(self, example_pattern):
        assert example_pattern.name == "learned-pattern-smoothed"
        lightness = [t.lightness_multiplier for t in example_pattern.transforms]
        assert all(a > b for a, b in zip(lightness, lightness[1:]))
        reference = example_pattern.transform_at(500)
        assert (reference.lightness_multiplier, reference.chroma_multiplier) == (1.0, 1.0)
        assert len({t.hue_shift for t in example_pattern.transforms}) == 1
