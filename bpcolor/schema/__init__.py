# Copyright (c) 2026 bpcolor
# SPDX-License-Identifier: MIT

"""
Schema definitions for colors, patterns and generated palettes.

All types in this module are immutable (frozen dataclasses).
A loaded pattern is shared read-only by every generation task.
"""

from bpcolor.schema.color import ColorSpace, OKLCHColor
from bpcolor.schema.palette import (
    DARKEST_STOP,
    LIGHTEST_STOP,
    REFERENCE_STOP,
    STOP_POSITIONS,
    BatchResult,
    ColorStopPair,
    FormattedStop,
    GenerationFailure,
    ManyTransformationRequest,
    Palette,
    PaletteResult,
    PaletteStop,
    PatternMetadata,
    StopFailure,
    StopPosition,
    StopTransform,
    TransformationPattern,
    TransformationRequest,
    stop_index,
)

__all__ = [
    # Colors
    "OKLCHColor",
    "ColorSpace",
    # Stops
    "StopPosition",
    "STOP_POSITIONS",
    "REFERENCE_STOP",
    "LIGHTEST_STOP",
    "DARKEST_STOP",
    "stop_index",
    # Patterns
    "StopTransform",
    "PatternMetadata",
    "TransformationPattern",
    # Palettes
    "PaletteStop",
    "Palette",
    # Requests
    "ColorStopPair",
    "TransformationRequest",
    "ManyTransformationRequest",
    # Results
    "FormattedStop",
    "StopFailure",
    "PaletteResult",
    "GenerationFailure",
    "BatchResult",
]
