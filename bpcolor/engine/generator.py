# Copyright (c) 2026 bpcolor
# SPDX-License-Identifier: MIT

"""
Palette synthesis from a single anchor color.

The anchor may sit at any stop. It is first mapped back to the color the
pattern's reference stop would have (dividing by the anchor stop's
multipliers), then every stop is produced from that reference-equivalent
by applying its own multipliers and hue shift. Hue shifts are taken
relative to the anchor stop's shift, so a shift shared by all ten stops
keeps the whole ramp on the input hue.

Each stop is gamut-clamped independently. A stop whose clamp drops all
chroma keeps its achromatic color and is reported in stop_failures.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from bpcolor.engine.colorspace import clamp_to_gamut, delta_e, normalize_hue
from bpcolor.engine.smoother import clamp
from bpcolor.schema.color import OKLCHColor
from bpcolor.schema.palette import (
    STOP_POSITIONS,
    Palette,
    PaletteStop,
    StopFailure,
    StopPosition,
    TransformationPattern,
)

logger = logging.getLogger(__name__)


# Floor for anchor multipliers when mapping back to the reference stop
MIN_MULTIPLIER = 0.001

# ΔE above which the clamped anchor is reported as drifting from the input
ANCHOR_DRIFT_THRESHOLD = 0.02


@dataclass(frozen=True, slots=True)
class GeneratedPalette:
    """A generated palette plus the stops whose hue was lost to clamping."""
    palette: Palette
    stop_failures: tuple[StopFailure, ...] = ()


def generate_palette_from_stop(
    color: OKLCHColor,
    anchor_stop: int,
    pattern: TransformationPattern,
    name: str,
) -> GeneratedPalette:
    """
    Generate all ten stops from a color declared to sit at anchor_stop.

    Args:
        color: Anchor color
        anchor_stop: Stop the anchor color represents
        pattern: Smoothed transformation pattern
        name: Name of the generated palette

    Returns:
        GeneratedPalette with stops 100..1000, all inside the sRGB gamut

    Raises:
        ConversionError: If a stop cannot be mapped into the gamut
    """
    anchor_stop = StopPosition(anchor_stop)
    anchor = pattern.transform_at(anchor_stop)
    hue = 0.0 if math.isnan(color.H) else color.H

    ref_l = color.L / max(anchor.lightness_multiplier, MIN_MULTIPLIER)
    ref_c = color.C / max(anchor.chroma_multiplier, MIN_MULTIPLIER)

    stops = []
    failures = []
    for position, transform in zip(STOP_POSITIONS, pattern.transforms):
        candidate = OKLCHColor(
            L=clamp(ref_l * transform.lightness_multiplier, 0.0, 1.0),
            C=max(0.0, ref_c * transform.chroma_multiplier),
            H=normalize_hue(hue + (transform.hue_shift - anchor.hue_shift)),
            alpha=color.alpha,
        )
        clamped = clamp_to_gamut(candidate)

        if clamped.C == 0.0 and candidate.C > 0.0:
            reason = (
                f"Gamut clamping reduced chroma {candidate.C:.4f} to 0 "
                f"at L={candidate.L:.4f}, losing hue information"
            )
            logger.warning("Palette %r stop %d: %s", name, int(position), reason)
            failures.append(StopFailure(position=position, reason=reason))

        stops.append(PaletteStop(position=position, color=clamped))

    palette = Palette(name=name, stops=tuple(stops))

    drift = delta_e(color, palette.color_at(anchor_stop))
    if drift > ANCHOR_DRIFT_THRESHOLD:
        logger.debug(
            "Palette %r: anchor stop %d drifted by ΔE %.4f after gamut clamping",
            name, int(anchor_stop), drift,
        )

    return GeneratedPalette(palette=palette, stop_failures=tuple(failures))
