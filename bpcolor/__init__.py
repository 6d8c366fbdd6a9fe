# Copyright (c) 2026 bpcolor
# SPDX-License-Identifier: MIT

"""
bpcolor -- Ten-stop OKLCH palette generator.

Learns how lightness, chroma and hue move across an example palette and
replays that pattern from any anchor color.

Quick start::

    from bpcolor import GeneratePaletteRequest, generate_batch, generate_palette
    from bpcolor.schema import ColorStopPair

    # Unset fields come from GeneratorConfig.from_env(); the default
    # pattern is learned from the bundled example-blue palette
    result = generate_palette(GeneratePaletteRequest.from_config("#2D72D2", 500))
    result.values    # {100: "#...", ..., 1000: "#..."}
    result.to_json()

    batch = generate_batch([ColorStopPair("#2D72D2", 500), ColorStopPair("#238551", 600)])
"""

from __future__ import annotations

__version__ = "1.0.0"

from bpcolor.config import GeneratorConfig
from bpcolor.engine import (
    apply_optical_appearance,
    extract_pattern,
    format_color,
    parse_color,
    smooth_pattern,
)
from bpcolor.errors import PaletteError
from bpcolor.runtime import (
    GeneratePaletteRequest,
    generate_batch,
    generate_palette,
    generate_palette_with_pattern,
    load_pattern,
    transform_batch,
    transform_color,
    transform_many,
)
from bpcolor.schema import (
    BatchResult,
    ColorSpace,
    OKLCHColor,
    PaletteResult,
    StopPosition,
    TransformationPattern,
)

__all__ = [
    # Core API
    "GeneratePaletteRequest",
    "load_pattern",
    "generate_palette",
    "generate_palette_with_pattern",
    "generate_batch",
    "transform_color",
    "transform_many",
    "transform_batch",
    # Engine
    "parse_color",
    "format_color",
    "apply_optical_appearance",
    "extract_pattern",
    "smooth_pattern",
    # Types (commonly needed)
    "OKLCHColor",
    "ColorSpace",
    "StopPosition",
    "TransformationPattern",
    "PaletteResult",
    "BatchResult",
    "GeneratorConfig",
    "PaletteError",
    # Version
    "__version__",
]
