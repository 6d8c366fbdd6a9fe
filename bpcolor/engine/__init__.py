# Copyright (c) 2026 bpcolor
# SPDX-License-Identifier: MIT

"""
Color math, pattern learning and palette synthesis.

Pure functions over the schema types; no I/O.
"""

from bpcolor.engine.colorspace import (
    circular_mean,
    clamp_to_gamut,
    delta_e,
    from_hex,
    from_oklab,
    from_rgb,
    hue_difference,
    is_displayable,
    normalize_hue,
    parse_color,
    to_hex,
    to_oklab,
    to_rgb,
)
from bpcolor.engine.extract import extract_pattern
from bpcolor.engine.formatter import format_color
from bpcolor.engine.generator import GeneratedPalette, generate_palette_from_stop
from bpcolor.engine.smoother import clamp, fit_quadratic, lerp, smooth_pattern
from bpcolor.engine.transform import apply_optical_appearance, is_transformation_viable

__all__ = [
    # Color space
    "to_hex",
    "to_rgb",
    "from_rgb",
    "to_oklab",
    "from_oklab",
    "from_hex",
    "parse_color",
    "is_displayable",
    "clamp_to_gamut",
    "normalize_hue",
    "hue_difference",
    "circular_mean",
    "delta_e",
    # Formatting
    "format_color",
    # Optical transform
    "apply_optical_appearance",
    "is_transformation_viable",
    # Pattern learning
    "extract_pattern",
    "smooth_pattern",
    "fit_quadratic",
    "lerp",
    "clamp",
    # Generation
    "GeneratedPalette",
    "generate_palette_from_stop",
]
