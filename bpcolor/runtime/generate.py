# Copyright (c) 2026 bpcolor
# SPDX-License-Identifier: MIT

"""
Single-item use cases: one palette from one color, or from one
reference/target transformation.

Pattern loading is passed in by the caller (LoadPattern) so the same code
serves files, memory and tests. Batch orchestration loads the pattern once
and calls the *_with_pattern / *_from_reference variants directly.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from bpcolor.config import GeneratorConfig
from bpcolor.engine.colorspace import parse_color, to_hex
from bpcolor.engine.formatter import format_color
from bpcolor.engine.generator import generate_palette_from_stop
from bpcolor.engine.transform import apply_optical_appearance
from bpcolor.errors import (
    ColorParseError,
    GeneratePaletteError,
    PaletteError,
    TransformColorError,
)
from bpcolor.runtime import loader
from bpcolor.runtime.loader import LoadPattern
from bpcolor.schema.color import ColorSpace, OKLCHColor
from bpcolor.schema.palette import (
    FormattedStop,
    PaletteResult,
    StopPosition,
    TransformationPattern,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class GeneratePaletteRequest:
    """Everything needed to generate one palette, pattern source included."""
    input_color: str
    anchor_stop: StopPosition
    output_format: ColorSpace
    palette_name: str
    pattern_source: str

    @classmethod
    def from_config(
        cls,
        input_color: str,
        anchor_stop: int,
        output_format: Optional[ColorSpace] = None,
        palette_name: Optional[str] = None,
        pattern_source: Optional[str] = None,
        config: Optional[GeneratorConfig] = None,
    ) -> GeneratePaletteRequest:
        """
        Build a request; fields left as None come from the configuration
        (GeneratorConfig.from_env() when no config is given).
        """
        config = config or GeneratorConfig.from_env()
        return cls(
            input_color=input_color,
            anchor_stop=StopPosition.parse(anchor_stop),
            output_format=ColorSpace.parse(output_format or config.default_output_format),
            palette_name=palette_name or config.default_palette_name,
            pattern_source=pattern_source or config.pattern_source,
        )


# =============================================================================
# Palette Generation
# =============================================================================


def generate_palette_with_pattern(
    input_color: str,
    anchor_stop: int,
    output_format: ColorSpace,
    palette_name: str,
    pattern: TransformationPattern,
) -> PaletteResult:
    """
    Generate a palette with an already loaded pattern.

    Args:
        input_color: Color string (hex, rgb(), oklch(), oklab())
        anchor_stop: Stop the input color represents
        output_format: Format of every stop value
        palette_name: Name of the palette
        pattern: Smoothed transformation pattern

    Returns:
        PaletteResult with 10 formatted stops

    Raises:
        GeneratePaletteError: If an argument is invalid or the color cannot
            be converted or clamped (the original error is the __cause__)
    """
    try:
        anchor_stop = StopPosition.parse(anchor_stop)
        output_format = ColorSpace.parse(output_format)
        color = parse_color(input_color)
        generated = generate_palette_from_stop(color, anchor_stop, pattern, palette_name)
        stops = tuple(
            FormattedStop(
                position=stop.position,
                color=stop.color,
                value=format_color(stop.color, output_format),
            )
            for stop in generated.palette.stops
        )
    except (PaletteError, ValueError) as e:
        raise GeneratePaletteError(f"Failed to generate palette for {input_color}") from e

    logger.debug(
        "Generated palette %r from %s at stop %d (%s)",
        palette_name, input_color, int(anchor_stop), output_format.value,
    )
    return PaletteResult(
        name=generated.palette.name,
        input_color=input_color,
        anchor_stop=anchor_stop,
        output_format=output_format,
        stops=stops,
        stop_failures=generated.stop_failures,
    )


def generate_palette(
    request: GeneratePaletteRequest,
    load_pattern: LoadPattern = loader.load_pattern,
) -> PaletteResult:
    """
    Load the request's pattern, then generate the palette.

    Raises:
        PatternLoadError: If the pattern cannot be loaded
        GeneratePaletteError: If generation fails
    """
    pattern = load_pattern(request.pattern_source)
    return generate_palette_with_pattern(
        request.input_color,
        request.anchor_stop,
        request.output_format,
        request.palette_name,
        pattern,
    )


# =============================================================================
# Optical Transformations
# =============================================================================


def transform_from_reference(
    reference: OKLCHColor,
    target: str,
    anchor_stop: int,
    output_format: ColorSpace,
    palette_name: str,
    pattern: TransformationPattern,
) -> PaletteResult:
    """
    Apply a parsed reference's appearance to a target and generate its palette.

    The transformed color is passed on as hex, so the palette's input_color
    is the color that was actually generated from.

    Raises:
        PaletteError: Any parse, transform or generation failure, unwrapped
    """
    target_color = parse_color(target)
    transformed = apply_optical_appearance(reference, target_color)
    return generate_palette_with_pattern(
        to_hex(transformed), anchor_stop, output_format, palette_name, pattern
    )


def transform_color(
    reference: str,
    target: str,
    anchor_stop: int,
    output_format: ColorSpace,
    palette_name: str,
    pattern: TransformationPattern,
) -> PaletteResult:
    """
    reference>target::stop as a single palette.

    Raises:
        TransformColorError: If any step fails (cause retained)
    """
    try:
        reference_color = parse_color(reference)
        return transform_from_reference(
            reference_color, target, anchor_stop, output_format, palette_name, pattern
        )
    except PaletteError as e:
        raise TransformColorError(f"Failed to transform {target} using {reference}") from e


def transform_many(
    reference: str,
    targets: Sequence[str],
    anchor_stop: int,
    output_format: ColorSpace,
    palette_name: str,
    pattern: TransformationPattern,
) -> list[PaletteResult]:
    """
    reference>(t1,t2,...)::stop as one palette per target, named
    "<palette_name>-<target>".

    Stops at the first failing target.

    Raises:
        TransformColorError: If the reference or any target fails
    """
    try:
        reference_color = parse_color(reference)
    except ColorParseError as e:
        raise TransformColorError(f"Invalid reference color: {reference}") from e

    results = []
    for target in targets:
        try:
            results.append(
                transform_from_reference(
                    reference_color,
                    target,
                    anchor_stop,
                    output_format,
                    f"{palette_name}-{target}",
                    pattern,
                )
            )
        except PaletteError as e:
            raise TransformColorError(f"Failed to transform {target} using {reference}") from e
    return results
