# Copyright (c) 2026 bpcolor
# SPDX-License-Identifier: MIT

"""
Use cases: pattern loading, single and batch generation, input syntax.
"""

from bpcolor.runtime.batch import generate_batch, transform_batch
from bpcolor.runtime.generate import (
    GeneratePaletteRequest,
    generate_palette,
    generate_palette_with_pattern,
    transform_color,
    transform_from_reference,
    transform_many,
)
from bpcolor.runtime.loader import (
    LoadPattern,
    clear_cache,
    load_palette,
    load_pattern,
    pattern_from_palettes,
)
from bpcolor.runtime.syntax import (
    is_transformation_syntax,
    parse_batch_pairs,
    parse_color_stop_pair,
    parse_transformation,
    parse_transformations,
    split_top_level,
)

__all__ = [
    # Loading
    "LoadPattern",
    "load_pattern",
    "load_palette",
    "pattern_from_palettes",
    "clear_cache",
    # Single palettes
    "GeneratePaletteRequest",
    "generate_palette",
    "generate_palette_with_pattern",
    "transform_color",
    "transform_from_reference",
    "transform_many",
    # Batches
    "generate_batch",
    "transform_batch",
    # Syntax
    "parse_color_stop_pair",
    "parse_batch_pairs",
    "parse_transformation",
    "parse_transformations",
    "is_transformation_syntax",
    "split_top_level",
]
