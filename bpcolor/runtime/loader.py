# Copyright (c) 2026 bpcolor
# SPDX-License-Identifier: MIT

"""
Pattern loading from example palette files.

An example palette JSON file is parsed, reduced to a pattern and smoothed.
Loaded patterns are cached by resolved path for the life of the process,
so batch callers that ask for the same source pay for it once.

Callers that load patterns some other way (HTTP, memory, tests) pass their
own LoadPattern callable to the runtime functions instead.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Callable, Sequence, Union

from bpcolor.engine.extract import DEFAULT_PATTERN_NAME, extract_pattern
from bpcolor.engine.smoother import smooth_pattern
from bpcolor.errors import PaletteError, PatternLoadError
from bpcolor.schema.palette import REFERENCE_STOP, Palette, TransformationPattern

logger = logging.getLogger(__name__)


LoadPattern = Callable[[str], TransformationPattern]

# Cache for loaded patterns (keyed by resolved path)
_pattern_cache: dict[str, TransformationPattern] = {}


def pattern_from_palettes(
    palettes: Sequence[Palette],
    reference_stop: int = REFERENCE_STOP,
    name: str = DEFAULT_PATTERN_NAME,
) -> TransformationPattern:
    """
    Extract and smooth a pattern from in-memory palettes.

    Raises:
        PatternExtractionError: If the palettes are empty or incomplete
        InterpolationError: If smoothing fails
    """
    return smooth_pattern(extract_pattern(palettes, reference_stop=reference_stop, name=name))


def load_palette(source: Union[str, Path]) -> Palette:
    """
    Read an example palette file.

    Raises:
        PatternLoadError: If the file cannot be read, is not JSON, or is not
            a valid example palette
    """
    path = Path(source)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise PatternLoadError(str(source), f"cannot read file ({e.strerror or e})") from e

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise PatternLoadError(str(source), f"invalid JSON: {e.msg} at line {e.lineno}") from e

    try:
        return Palette.from_example(data)
    except ValueError as e:
        raise PatternLoadError(str(source), f"invalid example palette: {e}") from e


def load_pattern(source: Union[str, Path]) -> TransformationPattern:
    """
    Load a smoothed pattern from an example palette file (cached).

    Args:
        source: Path to the example palette JSON

    Returns:
        Smoothed TransformationPattern

    Raises:
        PatternLoadError: If the file is unusable or no pattern can be
            learned from it
    """
    key = str(Path(source).resolve())
    cached = _pattern_cache.get(key)
    if cached is not None:
        logger.debug("Pattern cache hit for %s", key)
        return cached

    palette = load_palette(source)
    try:
        pattern = pattern_from_palettes([palette])
    except PaletteError as e:
        raise PatternLoadError(str(source), str(e)) from e

    logger.debug(
        "Loaded pattern %r from %s (confidence %.2f)",
        pattern.name, key, pattern.metadata.confidence,
    )
    _pattern_cache[key] = pattern
    return pattern


def clear_cache() -> None:
    """Forget every loaded pattern."""
    _pattern_cache.clear()
