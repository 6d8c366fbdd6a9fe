# Copyright (c) 2026 bpcolor
# SPDX-License-Identifier: MIT

"""
Pattern extraction from example palettes.

Each palette is reduced to per-stop ratios against its reference stop:

    lightness_multiplier = stop.L / reference.L
    chroma_multiplier    = stop.C / reference.C
    hue_shift            = hue_difference(reference.H, stop.H)

Ratios from several palettes are aggregated per stop with the median,
which tolerates a single outlier palette better than the mean.
"""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np

from bpcolor.engine.colorspace import hue_difference
from bpcolor.errors import PatternExtractionError
from bpcolor.schema.palette import (
    REFERENCE_STOP,
    STOP_POSITIONS,
    Palette,
    PatternMetadata,
    StopPosition,
    StopTransform,
    TransformationPattern,
    stop_index,
)


# Floor for reference L and C so ratios stay finite
MIN_REFERENCE_VALUE = 0.001

# Confidence reported when a pattern has a single source
SINGLE_SOURCE_CONFIDENCE = 0.8

DEFAULT_PATTERN_NAME = "learned-pattern"


def _hue_shift(reference_hue: float, hue: float) -> float:
    if math.isnan(reference_hue) or math.isnan(hue):
        return 0.0
    return hue_difference(reference_hue, hue)


def _confidence(ratios: list[list[StopTransform]]) -> float:
    """
    Agreement between sources: 1 minus the mean population standard
    deviation of the lightness and chroma ratios, clipped to [0, 1].
    """
    total = 0.0
    count = 0
    for stop_ratios in ratios:
        if len(stop_ratios) < 2:
            continue
        total += float(np.std([r.lightness_multiplier for r in stop_ratios]))
        total += float(np.std([r.chroma_multiplier for r in stop_ratios]))
        count += 2

    mean_deviation = total / count if count else 0.0
    return float(np.clip(1.0 - mean_deviation, 0.0, 1.0))


def extract_pattern(
    palettes: Sequence[Palette],
    reference_stop: int = REFERENCE_STOP,
    name: str = DEFAULT_PATTERN_NAME,
) -> TransformationPattern:
    """
    Learn a transformation pattern from example palettes.

    Args:
        palettes: One or more example palettes
        reference_stop: Stop every ratio is relative to
        name: Name of the resulting pattern

    Returns:
        TransformationPattern whose reference stop is the exact identity

    Raises:
        PatternExtractionError: If no palettes are given, a palette lacks
            the reference stop, or a stop has no samples
    """
    palettes = list(palettes)
    if not palettes:
        raise PatternExtractionError("No palettes provided", 0)

    reference_stop = StopPosition(reference_stop)
    ratios: list[list[StopTransform]] = [[] for _ in STOP_POSITIONS]

    for palette in palettes:
        reference = next(
            (s.color for s in palette.stops if int(s.position) == int(reference_stop)),
            None,
        )
        if reference is None:
            raise PatternExtractionError(
                f'Palette "{palette.name}" missing reference stop {int(reference_stop)}',
                len(palettes),
            )

        ref_l = reference.L if reference.L != 0.0 else MIN_REFERENCE_VALUE
        ref_c = reference.C if reference.C != 0.0 else MIN_REFERENCE_VALUE

        for stop in palette.stops:
            ratios[stop_index(stop.position)].append(
                StopTransform(
                    lightness_multiplier=stop.color.L / ref_l,
                    chroma_multiplier=stop.color.C / ref_c,
                    hue_shift=_hue_shift(reference.H, stop.color.H),
                )
            )

    transforms = []
    for position, stop_ratios in zip(STOP_POSITIONS, ratios):
        if not stop_ratios:
            raise PatternExtractionError(
                f"No ratios calculated for stop {int(position)}", len(palettes)
            )
        if position == reference_stop:
            transforms.append(StopTransform.identity())
            continue
        transforms.append(
            StopTransform(
                lightness_multiplier=float(np.median([r.lightness_multiplier for r in stop_ratios])),
                chroma_multiplier=float(np.median([r.chroma_multiplier for r in stop_ratios])),
                hue_shift=float(np.median([r.hue_shift for r in stop_ratios])),
            )
        )

    confidence = SINGLE_SOURCE_CONFIDENCE if len(palettes) == 1 else _confidence(ratios)

    return TransformationPattern(
        name=name,
        reference_stop=reference_stop,
        transforms=tuple(transforms),
        metadata=PatternMetadata(source_count=len(palettes), confidence=confidence),
    )
