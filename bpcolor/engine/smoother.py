# Copyright (c) 2026 bpcolor
# SPDX-License-Identifier: MIT

"""
Pattern smoothing.

Raw extracted ratios carry the quirks of their source palettes. Smoothing
replaces them with continuous curves over the normalized stop position
x = (stop - 100) / 900:

- Lightness and chroma: the quadratic through (0, ratio@100),
  (x_ref, 1.0) and (1, ratio@1000)
- Hue: one shift (the circular mean of all raw shifts) for every stop,
  the reference stop included

The reference stop keeps both multipliers at exactly 1.0. Sharing the hue
shift with its neighbours keeps the generated ramp on a single hue; the
generator cancels the common shift when it anchors the input color.
"""

from __future__ import annotations

from typing import Callable

from bpcolor.engine.colorspace import circular_mean
from bpcolor.errors import InterpolationError
from bpcolor.schema.palette import (
    DARKEST_STOP,
    LIGHTEST_STOP,
    STOP_POSITIONS,
    StopTransform,
    TransformationPattern,
)


# Multiplier of the reference stop onto itself
REFERENCE_MULTIPLIER = 1.0

STOP_RANGE = DARKEST_STOP - LIGHTEST_STOP  # 900

SMOOTHED_SUFFIX = "-smoothed"


def lerp(a: float, b: float, t: float) -> float:
    """Linear interpolation between a and b."""
    return a + (b - a) * t


def clamp(value: float, low: float, high: float) -> float:
    """Clamp value into [low, high]."""
    return max(low, min(high, value))


def normalize_position(position: int) -> float:
    """Map stop 100..1000 onto 0..1."""
    return (position - LIGHTEST_STOP) / STOP_RANGE


def fit_quadratic(y0: float, y_ref: float, y1: float, x_ref: float) -> tuple[float, float, float]:
    """
    Coefficients of y = a*x^2 + b*x + c through (0, y0), (x_ref, y_ref), (1, y1).

    Raises:
        InterpolationError: If x_ref is 0 or 1 (the three points do not
            determine a unique parabola)
    """
    denominator = x_ref * x_ref - x_ref
    if denominator == 0.0:
        raise InterpolationError(
            f"Reference position {x_ref} coincides with an endpoint; quadratic is undetermined"
        )
    c = y0
    a = (y_ref - c - y1 * x_ref + c * x_ref) / denominator
    b = y1 - c - a
    return a, b, c


def _smooth_curve(
    pattern: TransformationPattern,
    extract: Callable[[StopTransform], float],
) -> list[float]:
    """Quadratic curve for one property, evaluated at every stop, floored at 0."""
    a, b, c = fit_quadratic(
        extract(pattern.transform_at(LIGHTEST_STOP)),
        REFERENCE_MULTIPLIER,
        extract(pattern.transform_at(DARKEST_STOP)),
        normalize_position(pattern.reference_stop),
    )
    values = []
    for position in STOP_POSITIONS:
        x = normalize_position(position)
        values.append(max(0.0, a * x * x + b * x + c))
    return values


def smooth_pattern(pattern: TransformationPattern) -> TransformationPattern:
    """
    Replace raw ratios with smooth curves.

    Returns a new pattern named "<name>-smoothed"; the input is unchanged.

    Raises:
        InterpolationError: If the curves cannot be fitted
    """
    try:
        lightness = _smooth_curve(pattern, lambda t: t.lightness_multiplier)
        chroma = _smooth_curve(pattern, lambda t: t.chroma_multiplier)
        hue_shift = circular_mean(t.hue_shift for t in pattern.transforms)
    except InterpolationError as e:
        raise InterpolationError(f"Failed to smooth pattern {pattern.name!r}: {e}") from e

    transforms = tuple(
        StopTransform(REFERENCE_MULTIPLIER, REFERENCE_MULTIPLIER, hue_shift)
        if position == pattern.reference_stop
        else StopTransform(
            lightness_multiplier=lightness_value,
            chroma_multiplier=chroma_value,
            hue_shift=hue_shift,
        )
        for position, lightness_value, chroma_value in zip(STOP_POSITIONS, lightness, chroma)
    )

    return TransformationPattern(
        name=f"{pattern.name}{SMOOTHED_SUFFIX}",
        reference_stop=pattern.reference_stop,
        transforms=transforms,
        metadata=pattern.metadata,
    )
